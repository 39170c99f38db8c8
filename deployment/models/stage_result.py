from dataclasses import dataclass, field
from datetime import datetime

@dataclass(frozen=True)
class StageResult:
    name: str
    status: str #can be either succeeded, failed or skipped
    detail: str = ""
    finished_at: datetime = field(default_factory=datetime.now)

    @property
    def failed(self) -> bool:
        return self.status == "failed"
