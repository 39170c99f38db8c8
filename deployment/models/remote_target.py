from dataclasses import field
from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class RemoteTarget:
    host: str
    user: str
    private_key: str = field(repr=False)
    directory: str
    port: int = 22
    known_hosts: str | None = None
