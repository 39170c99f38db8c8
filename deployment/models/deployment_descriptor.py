from pydantic.dataclasses import dataclass

@dataclass(frozen=True)
class DeploymentDescriptor:
    service_name: str
    image: str
    port: int = 80
    container_port: int = 80
    restart: str = "on-failure"

    def to_compose(self) -> dict:
        return {
            "services": {
                self.service_name: {
                    "image": self.image,
                    "ports": [f"{self.port}:{self.container_port}"],
                    "restart": self.restart,
                }
            }
        }
