#!/usr/bin/env python3
import argparse
import os
import sys
from deployment.repositories import SettingsRepository
from deployment.services.image_builder_service import ImageBuilderService
from deployment.utils.env import commit_from_env, registry_credentials_from_env
from deployment.utils.logging import setup_logger

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build the site image and publish it under latest and commit tags")
    parser.add_argument('--commit', help='Change identifier used as immutable tag (defaults to $GITHUB_SHA)')
    parser.add_argument('--dry-run', action='store_true', help='Validate inputs without building or pushing')
    args = parser.parse_args(argv)
    logger = setup_logger("ImageBuilder")
    try:
        config_file = os.environ.get("PIPELINE_CONFIG", f"{ROOT_DIR}/pipeline.yaml")
        settings = SettingsRepository(config_file).load()
        commit = commit_from_env(args.commit)
        logger.info(f"Starting image build of {settings.image.repository} for {commit}")
        service = ImageBuilderService(settings.image, commit, registry_credentials_from_env(), args.dry_run)
        service.run()
        logger.info("Image build completed successfully")
        return 0
    except Exception as e:
        logger.error(f"Image build failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
