from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class ImageSettings:
    repository: str
    context: str = "."
    dockerfile: str = "Dockerfile"
    site_dir: str = "site"
    entry_file: str = "index.html"
    registry_url: str | None = None
    verify: bool = True

@dataclass(frozen=True)
class DeploySettings:
    service_name: str = "web"
    descriptor_name: str = "docker-compose.yml"
    port: int = 80
    compose_command: str = "docker compose"

@dataclass(frozen=True)
class PublishSettings:
    repository: str
    branch: str = "gh-pages"
    enabled: bool = True
    cname: str | None = None
    commit_message: str = "Publish static site"
