from pydantic.dataclasses import dataclass

LATEST_TAG = "latest"


@dataclass(frozen=True)
class ImageReference:
    repository: str
    tag: str
    mutable: bool = False

    @property
    def ref(self) -> str:
        return f"{self.repository}:{self.tag}"

    def __str__(self) -> str:
        return self.ref
