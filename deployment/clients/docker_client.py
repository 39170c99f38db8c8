import os
import subprocess
import logging

from deployment.errors import BuildInputError, DeploymentError, RegistryError

logger = logging.getLogger(__name__)


class DockerClient:
    def __init__(self, binary: str = "docker"):
        self.binary: str = binary

    def build(self, context: str, dockerfile: str, tags: list[str], build_args: dict[str, str] | None = None) -> None:
        cmd = [self.binary, "build", "-f", dockerfile]
        for name, value in (build_args or {}).items():
            cmd += ["--build-arg", f"{name}={value}"]
        for tag in tags:
            cmd += ["-t", tag]
        cmd.append(context)
        result = self._run(cmd)
        if result.returncode != 0:
            logger.error(f"docker build failed with code {result.returncode}: {result.stderr.strip()}")
            raise BuildInputError(f"Image build failed for {', '.join(tags)}")

    def push(self, ref: str) -> None:
        result = self._run([self.binary, "push", ref])
        if result.returncode != 0:
            logger.error(f"docker push failed with code {result.returncode}: {result.stderr.strip()}")
            raise RegistryError(f"Failed to push {ref}")

    def login(self, registry: str, username: str, password: str) -> None:
        cmd = [self.binary, "login", registry, "--username", username, "--password-stdin"]
        result = self._run(cmd, stdin=password)
        if result.returncode != 0:
            logger.error(f"docker login to {registry} failed with code {result.returncode}")
            raise RegistryError(f"Registry login rejected for {username}@{registry}")

    def _run(self, cmd: list[str], stdin: str | None = None) -> subprocess.CompletedProcess:
        logger.info(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd, input=stdin, capture_output=True, text=True, check=False, env=os.environ
            )
        except FileNotFoundError as e:
            raise DeploymentError(f"Required command is unavailable: '{cmd[0]}'") from e
