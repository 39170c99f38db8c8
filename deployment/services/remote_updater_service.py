import logging
import posixpath
import shlex
from typing_extensions import override

from deployment.clients.ssh_client import SSHClient
from deployment.models import DeploymentDescriptor, DeploySettings, ImageReference, RemoteTarget
from deployment.repositories import DescriptorRepository
from deployment.services.service import Service
from deployment.utils.logging import setup_logger


class RemoteUpdaterService(Service):
    def __init__(
        self,
        settings: DeploySettings,
        image: ImageReference,
        target: RemoteTarget,
        dry_run: bool = False,
    ):
        self.settings: DeploySettings = settings
        self.image: ImageReference = image
        self.target: RemoteTarget = target
        self.descriptors: DescriptorRepository = DescriptorRepository()
        self.logger: logging.Logger = setup_logger("RemoteUpdaterService")
        self.dry_run: bool = dry_run

    @override
    def run(self) -> None:
        self.deploy()

    def build_descriptor(self) -> DeploymentDescriptor:
        return DeploymentDescriptor(
            service_name=self.settings.service_name,
            image=self.image.ref,
            port=self.settings.port,
        )

    def remote_commands(self) -> list[str]:
        directory = shlex.quote(self.target.directory)
        compose = self.settings.compose_command
        return [
            f"mkdir -p {directory}",
            f"cd {directory} && {compose} pull && {compose} up -d --remove-orphans",
        ]

    def deploy(self) -> DeploymentDescriptor:
        descriptor = self.build_descriptor()
        content = self.descriptors.dump(descriptor)
        remote_path = posixpath.join(self.target.directory, self.settings.descriptor_name)
        prepare, restart = self.remote_commands()

        if self.dry_run:
            self.logger.info(f"Dry run mode. {remote_path} on {self.target.host} has not been written")
            self.logger.info(f"Dry run mode. '{restart}' has not been executed")
            print(content)
            return descriptor

        with SSHClient(self.target) as ssh:
            ssh.run(prepare)
            ssh.upload_file(content, remote_path)
            ssh.run(restart)
        self.logger.info(f"{self.target.host} is now running {self.image.ref}")
        return descriptor
