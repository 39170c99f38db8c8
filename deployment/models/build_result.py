from pydantic.dataclasses import dataclass
from .image_reference import ImageReference

@dataclass(frozen=True)
class BuildResult:
    latest: ImageReference
    immutable: ImageReference
    digest: str | None = None

    @property
    def tags(self) -> list[ImageReference]:
        return [self.immutable, self.latest]
