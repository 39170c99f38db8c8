#!/usr/bin/env python3
import argparse
import json
import os
import sys
from dataclasses import asdict
from deployment.repositories import SettingsRepository
from deployment.services.pipeline_service import PipelineService
from deployment.utils.env import commit_from_env
from deployment.utils.logging import setup_logger

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build, deploy and publish the site in one run")
    parser.add_argument('--commit', help='Change identifier used as immutable tag (defaults to $GITHUB_SHA)')
    parser.add_argument('--skip-publish', action='store_true', help='Do not run the static publish stage')
    parser.add_argument('--dry-run', action='store_true', help='Run in dry-run mode without making any changes')
    args = parser.parse_args(argv)
    logger = setup_logger("Pipeline")
    service = None
    try:
        config_file = os.environ.get("PIPELINE_CONFIG", f"{ROOT_DIR}/pipeline.yaml")
        settings = SettingsRepository(config_file).load()
        commit = commit_from_env(args.commit)
        logger.info(f"Starting pipeline run for {commit}")
        service = PipelineService(settings, commit, dry_run=args.dry_run, publish=not args.skip_publish)
        service.run()
        logger.info("Pipeline run completed successfully")
        return 0
    except Exception as e:
        logger.error(f"Pipeline run failed: {e}")
        return 1
    finally:
        if service and service.report:
            print(json.dumps(asdict(service.report), indent=2, default=str))


if __name__ == "__main__":
    sys.exit(main())
