from ruamel.yaml import YAML


def get_yaml_instance() -> YAML:
    """Loader for pipeline.yaml and emitter for compose descriptors (block style, compose indentation)."""
    yaml = YAML(typ="rt")
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml
