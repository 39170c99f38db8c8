import pytest
import requests
from deployment.clients.image_registry_client import ImageRegistryClient, DOCKER_HUB_REGISTRY

class DummyResponse:
    def __init__(self, status_code, headers=None, body=None):
        self.status_code = status_code
        self.headers = headers or {}
        self.body = body or {}

    def json(self):
        return self.body

@pytest.fixture
def client():
    return ImageRegistryClient()

@pytest.mark.parametrize("image,registry,path", [
    ("ghcr.io/example/bookstore", "https://ghcr.io", "example/bookstore"),
    ("localhost:5000/bookstore", "https://localhost:5000", "bookstore"),
    ("example/bookstore", DOCKER_HUB_REGISTRY, "example/bookstore"),
    ("nginx", DOCKER_HUB_REGISTRY, "library/nginx"),
])
def test_split_image(client, image, registry, path):
    assert client.split_image(image) == (registry, path)

def test_registry_host(client):
    assert client.registry_host("ghcr.io/example/bookstore") == "ghcr.io"
    assert client.registry_host("example/bookstore") == "docker.io"

def test_resolve_digest(monkeypatch, client):
    seen = {}
    def fake_get(url, headers, timeout):
        seen["url"] = url
        return DummyResponse(200, {"Docker-Content-Digest": "sha256:abc"})
    monkeypatch.setattr(requests, "get", fake_get)
    assert client.resolve_digest("ghcr.io/ns/repo", "latest") == "sha256:abc"
    assert seen["url"] == "https://ghcr.io/v2/ns/repo/manifests/latest"

def test_resolve_digest_not_found(monkeypatch, client):
    monkeypatch.setattr(requests, "get", lambda url, headers, timeout: DummyResponse(404))
    assert client.resolve_digest("ghcr.io/ns/repo", "latest") is None

def test_resolve_digest_with_bearer_challenge(monkeypatch):
    client = ImageRegistryClient(credentials=("bob", "s3cret"))
    challenge = 'Bearer realm="https://ghcr.io/token",service="ghcr.io",scope="repository:ns/repo:pull"'
    token_requests = []

    def fake_get(url, headers=None, timeout=None, params=None, auth=None):
        if url == "https://ghcr.io/token":
            token_requests.append((params, auth))
            return DummyResponse(200, body={"token": "t0k"})
        if headers.get("Authorization") == "Bearer t0k":
            return DummyResponse(200, {"Docker-Content-Digest": "sha256:abc"})
        return DummyResponse(401, {"WWW-Authenticate": challenge})

    monkeypatch.setattr(requests, "get", fake_get)
    assert client.resolve_digest("ghcr.io/ns/repo", "latest") == "sha256:abc"
    assert token_requests == [({"service": "ghcr.io", "scope": "repository:ns/repo:pull"}, ("bob", "s3cret"))]

    # token is cached per repository
    assert client.resolve_digest("ghcr.io/ns/repo", "abc123") == "sha256:abc"
    assert len(token_requests) == 1
