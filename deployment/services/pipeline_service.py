import logging
from concurrent.futures import ThreadPoolExecutor
from typing_extensions import override

from deployment.errors import DeploymentError
from deployment.models import PipelineFile, RunReport, StageResult
from deployment.services.image_builder_service import ImageBuilderService
from deployment.services.remote_updater_service import RemoteUpdaterService
from deployment.services.service import Service
from deployment.services.static_publisher_service import StaticPublisherService
from deployment.utils.env import registry_credentials_from_env, remote_target_from_env
from deployment.utils.logging import setup_logger


class PipelineService(Service):
    """Runs build then deploy, with the static publish alongside.

    The publish stage shares no state with the other two, so its outcome
    never changes theirs. The run as a whole fails if any stage failed.
    """

    def __init__(self, settings: PipelineFile, commit: str, dry_run: bool = False, publish: bool = True):
        self.settings: PipelineFile = settings
        self.commit: str = commit
        self.dry_run: bool = dry_run
        self.publish: bool = publish and settings.publish is not None and settings.publish.enabled
        self.logger: logging.Logger = setup_logger("PipelineService")
        self.report: RunReport | None = None

    @override
    def run(self) -> None:
        self.report = self.execute()
        for stage in self.report.stages:
            self.logger.info(f"{stage.name}: {stage.status} {stage.detail}".rstrip())
        if not self.report.succeeded:
            failed = ", ".join(s.name for s in self.report.stages if s.failed)
            raise DeploymentError(f"Pipeline run for {self.commit} failed at: {failed}")

    def execute(self) -> RunReport:
        with ThreadPoolExecutor(max_workers=2) as executor:
            publish_future = executor.submit(self.publish_stage) if self.publish else None
            stages = self.build_and_deploy_stages()
            if publish_future:
                stages.append(publish_future.result())
            else:
                stages.append(StageResult(name="publish", status="skipped", detail="static publishing disabled"))
        return RunReport(commit=self.commit, stages=stages)

    def build_and_deploy_stages(self) -> list[StageResult]:
        try:
            builder = ImageBuilderService(
                self.settings.image, self.commit, registry_credentials_from_env(), self.dry_run
            )
            build = builder.build_and_publish()
        except Exception as e:
            self.logger.error(f"Build failed: {e}")
            return [
                StageResult(name="build", status="failed", detail=str(e)),
                StageResult(name="deploy", status="skipped", detail="build did not succeed"),
            ]
        build_stage = StageResult(
            name="build", status="succeeded", detail=", ".join(tag.ref for tag in build.tags)
        )

        try:
            updater = RemoteUpdaterService(
                self.settings.deploy, build.latest, remote_target_from_env(), self.dry_run
            )
            updater.deploy()
        except Exception as e:
            self.logger.error(f"Deploy failed: {e}")
            return [build_stage, StageResult(name="deploy", status="failed", detail=str(e))]
        return [build_stage, StageResult(name="deploy", status="succeeded", detail=build.latest.ref)]

    def publish_stage(self) -> StageResult:
        try:
            publisher = StaticPublisherService(self.settings.publish, self.settings.image.site_dir, self.dry_run)
            sha = publisher.publish()
        except Exception as e:
            self.logger.error(f"Static publish failed: {e}")
            return StageResult(name="publish", status="failed", detail=str(e))
        return StageResult(name="publish", status="succeeded", detail=sha or "dry run")
