import os
import logging
from github import Auth, Github, GithubIntegration, Repository
logger = logging.getLogger(__name__)


class GitHubClient:
    def __init__(self):
        token = os.getenv("GITHUB_TOKEN")
        if not token:
            token = self._installation_token()
        self.client: Github = Github(auth=Auth.Token(token))

    def _installation_token(self) -> str:
        app_id = os.getenv("GITHUB_APP_ID")
        install_id = os.getenv("GITHUB_APP_INSTALLATION_ID")
        private_key = os.getenv("GITHUB_APP_PRIVATE_KEY")
        if not (app_id and install_id and private_key):
            logger.error("GITHUB_TOKEN or GitHub App credentials env vars are mandatory")
            raise EnvironmentError("Missing GitHub credentials")
        integration = GithubIntegration(auth=Auth.AppAuth(int(app_id), private_key))
        return integration.get_access_token(int(install_id)).token

    def get_repo(self, full_name: str) -> Repository.Repository:
        return self.client.get_repo(full_name)
