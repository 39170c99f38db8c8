from pydantic.dataclasses import dataclass
from .stage_result import StageResult

@dataclass(frozen=True)
class RunReport:
    commit: str
    stages: list[StageResult]

    @property
    def succeeded(self) -> bool:
        return not any(stage.failed for stage in self.stages)

    def stage(self, name: str) -> StageResult | None:
        return next((s for s in self.stages if s.name == name), None)
