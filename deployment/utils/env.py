import os
import logging

from deployment.models import RemoteTarget

logger = logging.getLogger(__name__)

REMOTE_TARGET_VARS = ("SSH_HOST", "SSH_USER", "SSH_PRIVATE_KEY", "SSH_TARGET_DIR")


def require_env(*names: str) -> dict[str, str]:
    values = {name: os.getenv(name) for name in names}
    missing = [name for name, value in values.items() if not value]
    if missing:
        logger.error(f"Missing mandatory env vars: {', '.join(missing)}")
        raise EnvironmentError(f"Missing environment variables: {', '.join(missing)}")
    return values


def remote_target_from_env() -> RemoteTarget:
    values = require_env(*REMOTE_TARGET_VARS)
    port = os.getenv("SSH_PORT") or "22"
    if not port.isdigit():
        raise EnvironmentError(f"SSH_PORT must be a number, got {port!r}")
    return RemoteTarget(
        host=values["SSH_HOST"],
        user=values["SSH_USER"],
        private_key=values["SSH_PRIVATE_KEY"],
        directory=values["SSH_TARGET_DIR"],
        port=int(port),
        known_hosts=os.getenv("SSH_KNOWN_HOSTS") or None,
    )


def registry_credentials_from_env() -> tuple[str, str] | None:
    username = os.getenv("REGISTRY_USERNAME")
    password = os.getenv("REGISTRY_PASSWORD")
    if username and password:
        return username, password
    if username or password:
        logger.warning("Only one of REGISTRY_USERNAME/REGISTRY_PASSWORD is set, skipping registry login")
    return None


def commit_from_env(override: str | None = None) -> str:
    commit = override or os.getenv("GITHUB_SHA")
    if not commit:
        raise EnvironmentError("Change identifier missing: pass --commit or set GITHUB_SHA")
    return commit
