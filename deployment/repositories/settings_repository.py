import os
from dataclasses import replace

from ruamel.yaml import YAML
from deployment.models import PipelineFile
from deployment.utils.yaml_loader import get_yaml_instance


class SettingsRepository:
    def __init__(self, file_path: str):
        self.file_path: str = file_path
        self.yaml: YAML = get_yaml_instance()

    def load(self) -> PipelineFile:
        if not os.path.isfile(self.file_path):
            raise FileNotFoundError(f"Pipeline settings file not found: {self.file_path}")
        with open(self.file_path, "r") as f:
            data = self.yaml.load(f)
            try:
                parsed = PipelineFile(**data)
            except Exception as e:
                raise ValueError(f"Invalid pipeline.yaml structure: {e}") from e
        return self._resolve_paths(parsed)

    # paths in the file are relative to the file itself, not to the cwd
    def _resolve_paths(self, parsed: PipelineFile) -> PipelineFile:
        base_dir = os.path.dirname(os.path.abspath(self.file_path))
        image = replace(
            parsed.image,
            context=os.path.join(base_dir, parsed.image.context),
            dockerfile=os.path.join(base_dir, parsed.image.dockerfile),
            site_dir=os.path.join(base_dir, parsed.image.site_dir),
        )
        return replace(parsed, image=image)
