from deployment.models import DeploymentDescriptor
from deployment.repositories import DescriptorRepository
from deployment.utils.yaml_loader import get_yaml_instance


def test_dump_declares_single_service():
    descriptor = DeploymentDescriptor(service_name="web", image="ghcr.io/example/bookstore:latest")
    content = DescriptorRepository().dump(descriptor)

    data = get_yaml_instance().load(content)
    assert list(data["services"]) == ["web"]
    service = data["services"]["web"]
    assert service["image"] == "ghcr.io/example/bookstore:latest"
    assert service["ports"] == ["80:80"]
    assert service["restart"] == "on-failure"


def test_save_overwrites_existing(tmp_path):
    target = tmp_path / "deploy" / "docker-compose.yml"
    repo = DescriptorRepository()
    repo.save(DeploymentDescriptor(service_name="web", image="example/bookstore:old"), str(target))
    repo.save(DeploymentDescriptor(service_name="web", image="example/bookstore:latest"), str(target))

    content = target.read_text()
    assert "example/bookstore:latest" in content
    assert "old" not in content


def test_dump_uses_block_style_with_indented_sequences():
    descriptor = DeploymentDescriptor(service_name="web", image="ghcr.io/example/bookstore:latest")
    lines = DescriptorRepository().dump(descriptor).splitlines()

    assert lines[0] == "services:"
    assert lines[1] == "  web:"
    assert "    image: ghcr.io/example/bookstore:latest" in lines
    port_line = lines[lines.index("    ports:") + 1]
    assert port_line.startswith("      - ")
    assert "80:80" in port_line
    assert not any("{" in line or "[" in line for line in lines)
