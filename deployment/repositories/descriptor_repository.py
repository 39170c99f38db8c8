import io
import os

from ruamel.yaml import YAML
from deployment.models import DeploymentDescriptor
from deployment.utils.yaml_loader import get_yaml_instance


class DescriptorRepository:
    def __init__(self):
        self.yaml: YAML = get_yaml_instance()

    def dump(self, descriptor: DeploymentDescriptor) -> str:
        stream = io.StringIO()
        self.yaml.dump(descriptor.to_compose(), stream)
        return stream.getvalue()

    def save(self, descriptor: DeploymentDescriptor, file_path: str) -> str:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
            with open(file_path, "w") as f:
                f.write(self.dump(descriptor))
            return file_path
        except Exception as e:
            raise Exception(f"Error writing deployment descriptor: {e}") from e
