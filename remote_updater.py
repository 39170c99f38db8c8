#!/usr/bin/env python3
import argparse
import os
import sys
from deployment.models import ImageReference, LATEST_TAG
from deployment.repositories import DescriptorRepository, SettingsRepository
from deployment.services.remote_updater_service import RemoteUpdaterService
from deployment.utils.env import remote_target_from_env
from deployment.utils.logging import setup_logger

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Roll the remote host onto the latest published image")
    parser.add_argument('--dry-run', action='store_true', help='Render the descriptor without touching the host')
    parser.add_argument('--output', help='Also write the rendered descriptor to this local path')
    args = parser.parse_args(argv)
    logger = setup_logger("RemoteUpdater")
    try:
        config_file = os.environ.get("PIPELINE_CONFIG", f"{ROOT_DIR}/pipeline.yaml")
        settings = SettingsRepository(config_file).load()
        target = remote_target_from_env()
        image = ImageReference(repository=settings.image.repository, tag=LATEST_TAG, mutable=True)
        logger.info(f"Starting remote update of {target.host} to {image.ref}")
        service = RemoteUpdaterService(settings.deploy, image, target, args.dry_run)
        service.run()
        if args.output:
            DescriptorRepository().save(service.build_descriptor(), args.output)
            logger.info(f"Descriptor written to {args.output}")
        logger.info("Remote update completed successfully")
        return 0
    except Exception as e:
        logger.error(f"Remote update failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
