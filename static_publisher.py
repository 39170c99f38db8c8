#!/usr/bin/env python3
import argparse
import os
import sys
from deployment.repositories import SettingsRepository
from deployment.services.static_publisher_service import StaticPublisherService
from deployment.utils.logging import setup_logger

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Publish the raw site tree to the static hosting branch")
    parser.add_argument('--dry-run', action='store_true', help='List the files without publishing them')
    args = parser.parse_args(argv)
    logger = setup_logger("StaticPublisher")
    try:
        config_file = os.environ.get("PIPELINE_CONFIG", f"{ROOT_DIR}/pipeline.yaml")
        settings = SettingsRepository(config_file).load()
        if settings.publish is None or not settings.publish.enabled:
            logger.info("Static publishing is disabled, nothing to do")
            return 0
        logger.info(f"Starting static publish of {settings.image.site_dir} to {settings.publish.repository}")
        service = StaticPublisherService(settings.publish, settings.image.site_dir, args.dry_run)
        service.run()
        logger.info("Static publish completed successfully")
        return 0
    except Exception as e:
        logger.error(f"Static publish failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
