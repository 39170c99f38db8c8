class DeploymentError(Exception):
    """Base class for failures that halt a pipeline stage."""


class BuildInputError(DeploymentError, ValueError):
    """The asset tree or build inputs are unusable; raised before any registry call."""


class RegistryError(DeploymentError):
    """Login, push or tag resolution against the registry failed."""


class RemoteConnectionError(DeploymentError, ConnectionError):
    """The remote host is unreachable or rejected the credential."""


class RemoteCommandError(DeploymentError):
    """A transfer or command on the remote host failed.

    The host is not restored to its previous state.
    """

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.exit_code = exit_code


class PublishError(DeploymentError):
    """The static site could not be published."""
