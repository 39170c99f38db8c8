import logging
import os
import re
from typing_extensions import override

from deployment.clients.docker_client import DockerClient
from deployment.clients.image_registry_client import ImageRegistryClient
from deployment.errors import BuildInputError, RegistryError
from deployment.models import BuildResult, ImageReference, ImageSettings, LATEST_TAG
from deployment.services.service import Service
from deployment.utils.logging import setup_logger

# docker reference grammar for a tag
TAG_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")


class ImageBuilderService(Service):
    def __init__(
        self,
        settings: ImageSettings,
        commit: str,
        credentials: tuple[str, str] | None = None,
        dry_run: bool = False,
    ):
        self.settings: ImageSettings = settings
        self.commit: str = commit
        self.credentials: tuple[str, str] | None = credentials
        self.docker: DockerClient = DockerClient()
        self.registry: ImageRegistryClient = ImageRegistryClient(settings.registry_url, credentials)
        self.logger: logging.Logger = setup_logger("ImageBuilderService")
        self.dry_run: bool = dry_run

    @override
    def run(self) -> None:
        self.build_and_publish()

    def build_and_publish(self) -> BuildResult:
        self.validate_inputs()
        result = BuildResult(
            latest=ImageReference(repository=self.settings.repository, tag=LATEST_TAG, mutable=True),
            immutable=ImageReference(repository=self.settings.repository, tag=self.commit),
        )
        refs = [tag.ref for tag in result.tags]

        if self.dry_run:
            self.logger.info(f"Dry run mode. {', '.join(refs)} have not been built nor pushed")
            return result

        build_args = {"SITE_DIR": self.site_path()}
        self.docker.build(self.settings.context, self.settings.dockerfile, refs, build_args)
        if self.credentials:
            self.docker.login(self.registry.registry_host(self.settings.repository), *self.credentials)
        # immutable first, so latest never points at an untagged artifact
        for ref in refs:
            self.docker.push(ref)
            self.logger.info(f"Pushed {ref}")

        if self.settings.verify:
            digest = self.verify_tags(result)
            result = BuildResult(latest=result.latest, immutable=result.immutable, digest=digest)
        return result

    def validate_inputs(self) -> None:
        if not TAG_PATTERN.match(self.commit) or self.commit == LATEST_TAG:
            raise BuildInputError(f"Change identifier {self.commit!r} is not a valid image tag")
        entry = os.path.join(self.settings.site_dir, self.settings.entry_file)
        if not os.path.isfile(entry):
            raise BuildInputError(f"Required entry file missing from asset tree: {entry}")
        if not os.path.isfile(self.settings.dockerfile):
            raise BuildInputError(f"Container recipe not found: {self.settings.dockerfile}")
        self.site_path()

    def site_path(self) -> str:
        """Asset tree location relative to the build context, as the Dockerfile copies it."""
        rel = os.path.relpath(os.path.abspath(self.settings.site_dir), os.path.abspath(self.settings.context))
        if rel == os.pardir or rel.startswith(os.pardir + os.sep):
            raise BuildInputError(f"Asset tree {self.settings.site_dir} is outside the build context {self.settings.context}")
        return rel.replace(os.sep, "/")

    def verify_tags(self, result: BuildResult) -> str:
        digests = {
            tag.tag: self.registry.resolve_digest(tag.repository, tag.tag) for tag in result.tags
        }
        unresolved = [tag for tag, digest in digests.items() if not digest]
        if unresolved:
            raise RegistryError(f"Published tags could not be resolved: {', '.join(unresolved)}")
        if len(set(digests.values())) != 1:
            raise RegistryError(f"Published tags resolve to different artifacts: {digests}")
        digest = next(iter(digests.values()))
        self.logger.info(f"Tags {', '.join(digests)} resolve to {digest}")
        return digest
