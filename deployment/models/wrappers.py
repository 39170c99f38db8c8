from pydantic.dataclasses import dataclass

from deployment.models.settings import ImageSettings, DeploySettings, PublishSettings

@dataclass(frozen=True)
class PipelineFile:
    image: ImageSettings
    deploy: DeploySettings
    publish: PublishSettings | None = None
