import json
import os
from unittest.mock import patch

import pytest
import image_builder
import remote_updater
import run_pipeline
import static_publisher
from deployment.models import RunReport, StageResult

ASSETS_DIR = os.path.join(os.path.dirname(__file__), "assets")


@pytest.fixture(autouse=True)
def pipeline_config(monkeypatch):
    monkeypatch.setenv("PIPELINE_CONFIG", os.path.join(ASSETS_DIR, "pipeline.yaml"))


def test_image_builder_requires_change_identifier(monkeypatch):
    monkeypatch.delenv("GITHUB_SHA", raising=False)
    assert image_builder.main([]) == 1


def test_image_builder_fails_without_entry_file():
    # the assets directory has no site/, so validation must fail before any docker call
    with patch("deployment.services.image_builder_service.DockerClient") as docker:
        assert image_builder.main(["--commit", "abc123"]) == 1
        docker.return_value.build.assert_not_called()


def test_remote_updater_requires_secrets(monkeypatch):
    for name in ("SSH_HOST", "SSH_USER", "SSH_PRIVATE_KEY", "SSH_TARGET_DIR"):
        monkeypatch.delenv(name, raising=False)
    assert remote_updater.main(["--dry-run"]) == 1


def test_remote_updater_dry_run_writes_descriptor(monkeypatch, tmp_path):
    monkeypatch.setenv("SSH_HOST", "203.0.113.10")
    monkeypatch.setenv("SSH_USER", "deploy")
    monkeypatch.setenv("SSH_PRIVATE_KEY", "---KEY---")
    monkeypatch.setenv("SSH_TARGET_DIR", "/srv/bookstore")
    output = tmp_path / "docker-compose.yml"
    assert remote_updater.main(["--dry-run", "--output", str(output)]) == 0
    assert "ghcr.io/example/bookstore:latest" in output.read_text()


def test_static_publisher_failure_exit_code():
    # the assets directory has no site/ to publish
    assert static_publisher.main(["--dry-run"]) == 1


@pytest.mark.parametrize("status,code", [("succeeded", 0), ("failed", 1)])
def test_run_pipeline_exit_code(capsys, status, code):
    report = RunReport(commit="abc123", stages=[
        StageResult(name="build", status="succeeded"),
        StageResult(name="deploy", status=status),
    ])
    with patch("run_pipeline.PipelineService.execute", return_value=report) as execute, \
         patch("run_pipeline.setup_logger"), \
         patch("deployment.services.pipeline_service.setup_logger"):
        assert run_pipeline.main(["--commit", "abc123"]) == code
        execute.assert_called_once()
    printed = json.loads(capsys.readouterr().out)
    assert printed["commit"] == "abc123"
    assert [s["status"] for s in printed["stages"]] == ["succeeded", status]
