from .image_reference import ImageReference, LATEST_TAG
from .build_result import BuildResult
from .deployment_descriptor import DeploymentDescriptor
from .remote_target import RemoteTarget
from .settings import ImageSettings, DeploySettings, PublishSettings
from .stage_result import StageResult
from .run_report import RunReport
from .wrappers import PipelineFile

__all__ = [
    "ImageReference",
    "LATEST_TAG",
    "BuildResult",
    "DeploymentDescriptor",
    "RemoteTarget",
    "ImageSettings",
    "DeploySettings",
    "PublishSettings",
    "StageResult",
    "RunReport",
    "PipelineFile",
]
