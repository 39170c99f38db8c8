import base64
import logging
import os
from typing_extensions import override

from github import GithubException, InputGitTreeElement, UnknownObjectException
from github.GitCommit import GitCommit
from github.Repository import Repository

from deployment.clients.github_client import GitHubClient
from deployment.errors import PublishError
from deployment.models import PublishSettings
from deployment.services.service import Service
from deployment.utils.logging import setup_logger


class StaticPublisherService(Service):
    def __init__(self, settings: PublishSettings, site_dir: str, dry_run: bool = False):
        self.settings: PublishSettings = settings
        self.site_dir: str = site_dir
        self.github: GitHubClient | None = None if dry_run else GitHubClient()
        self.logger: logging.Logger = setup_logger("StaticPublisherService")
        self.dry_run: bool = dry_run

    @override
    def run(self) -> None:
        self.publish()

    def collect_files(self) -> dict[str, bytes]:
        if not os.path.isdir(self.site_dir):
            raise PublishError(f"Asset tree not found: {self.site_dir}")
        files: dict[str, bytes] = {}
        for root, dirs, names in os.walk(self.site_dir):
            dirs.sort()
            for name in sorted(names):
                path = os.path.join(root, name)
                rel = os.path.relpath(path, self.site_dir).replace(os.sep, "/")
                with open(path, "rb") as f:
                    files[rel] = f.read()
        if not files:
            raise PublishError(f"Asset tree is empty: {self.site_dir}")
        files.setdefault(".nojekyll", b"")
        if self.settings.cname:
            files["CNAME"] = f"{self.settings.cname}\n".encode()
        return files

    def publish(self) -> str | None:
        files = self.collect_files()
        target = f"{self.settings.repository}@{self.settings.branch}"

        if self.dry_run:
            self.logger.info(f"Dry run mode. {len(files)} files have not been published to {target}")
            for path in files:
                print(path)
            return None

        try:
            repo = self.github.get_repo(self.settings.repository)
            elements = [self._blob(repo, path, content) for path, content in files.items()]
            # no base tree: the branch content is replaced wholesale
            tree = repo.create_git_tree(elements)
            parent = self._branch_head(repo)
            commit = repo.create_git_commit(self.settings.commit_message, tree, [parent] if parent else [])
            if parent:
                repo.get_git_ref(f"heads/{self.settings.branch}").edit(commit.sha, force=True)
            else:
                repo.create_git_ref(f"refs/heads/{self.settings.branch}", commit.sha)
        except GithubException as e:
            raise PublishError(f"Failed to publish {self.site_dir} to {target}: {e}") from e

        self.logger.info(f"Published {len(files)} files to {target} as {commit.sha}")
        return commit.sha

    def _blob(self, repo: Repository, path: str, content: bytes) -> InputGitTreeElement:
        blob = repo.create_git_blob(base64.b64encode(content).decode(), "base64")
        return InputGitTreeElement(path=path, mode="100644", type="blob", sha=blob.sha)

    def _branch_head(self, repo: Repository) -> GitCommit | None:
        try:
            ref = repo.get_git_ref(f"heads/{self.settings.branch}")
        except UnknownObjectException:
            return None
        return repo.get_git_commit(ref.object.sha)
