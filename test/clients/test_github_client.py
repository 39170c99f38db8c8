import pytest
from deployment.clients.github_client import GitHubClient

class DummyIntegration:
    def __init__(self, auth):
        self.auth = auth
    def get_access_token(self, installation_id):
        class Token:
            token = "fake-token"
        return Token()

@pytest.fixture(autouse=True)
def patch_integration(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("GITHUB_APP_ID", "123")
    monkeypatch.setenv("GITHUB_APP_INSTALLATION_ID", "456")
    monkeypatch.setenv("GITHUB_APP_PRIVATE_KEY", "---KEY---")
    monkeypatch.setattr("deployment.clients.github_client.GithubIntegration", DummyIntegration)
    monkeypatch.setattr("deployment.clients.github_client.Auth.AppAuth", lambda app_id, key: (app_id, key))
    yield

def test_github_client_get_repo(monkeypatch):
    client = GitHubClient()
    dummy = object()
    monkeypatch.setattr(client.client, "get_repo", lambda full_name: dummy)
    assert client.get_repo("org/repo") is dummy

def test_token_takes_precedence(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghs_token")
    monkeypatch.setattr(
        "deployment.clients.github_client.GithubIntegration",
        lambda auth: pytest.fail("app credentials must not be used"),
    )
    GitHubClient()

def test_missing_credentials(monkeypatch):
    monkeypatch.delenv("GITHUB_APP_ID", raising=False)
    with pytest.raises(EnvironmentError):
        GitHubClient()
