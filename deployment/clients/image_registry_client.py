import re
import requests
import logging

logger = logging.getLogger(__name__)

DOCKER_HUB_REGISTRY = "https://registry-1.docker.io"
MANIFEST_MEDIA_TYPES = ", ".join([
    "application/vnd.oci.image.index.v1+json",
    "application/vnd.oci.image.manifest.v1+json",
    "application/vnd.docker.distribution.manifest.list.v2+json",
    "application/vnd.docker.distribution.manifest.v2+json",
])
CHALLENGE_PARAM = re.compile(r'(\w+)="([^"]*)"')


class ImageRegistryClient:
    def __init__(self, registry_url: str | None = None, credentials: tuple[str, str] | None = None):
        self.registry_url: str | None = registry_url
        self.credentials: tuple[str, str] | None = credentials
        self._tokens: dict[str, str] = {}

    def split_image(self, image: str) -> tuple[str, str]:
        first, sep, rest = image.partition("/")
        if sep and ("." in first or ":" in first or first == "localhost"):
            registry, path = f"https://{first}", rest
        else:
            registry, path = DOCKER_HUB_REGISTRY, image if sep else f"library/{image}"
        return (self.registry_url or registry).rstrip("/"), path

    def registry_host(self, image: str) -> str:
        registry, _ = self.split_image(image)
        if registry == DOCKER_HUB_REGISTRY:
            return "docker.io"
        return registry.removeprefix("https://").removeprefix("http://")

    def resolve_digest(self, image: str, tag: str) -> str | None:
        try:
            response = self._get_manifest(image, tag)
            if response.status_code == 200:
                digest = response.headers.get("Docker-Content-Digest")
                if digest:
                    return digest
                else:
                    logger.warning(f"No digest found in headers for {image}:{tag}")
            else:
                logger.warning(f"Failed to resolve digest: {image}:{tag} (status code {response.status_code})")
        except Exception as e:
            logger.error(f"Error resolving digest for {image}:{tag}: {e}")
        return None

    def _get_manifest(self, image: str, tag: str) -> requests.Response:
        registry, path = self.split_image(image)
        url = f"{registry}/v2/{path}/manifests/{tag}"
        headers = {"Accept": MANIFEST_MEDIA_TYPES}
        token = self._tokens.get(path)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        response = requests.get(url=url, headers=headers, timeout=5)
        if response.status_code == 401 and not token:
            token = self._fetch_token(response.headers.get("WWW-Authenticate", ""))
            if token:
                self._tokens[path] = token
                headers["Authorization"] = f"Bearer {token}"
                response = requests.get(url=url, headers=headers, timeout=5)
        return response

    def _fetch_token(self, challenge: str) -> str | None:
        if not challenge.lower().startswith("bearer "):
            return None
        params = dict(CHALLENGE_PARAM.findall(challenge))
        realm = params.pop("realm", None)
        if not realm:
            return None
        response = requests.get(realm, params=params, auth=self.credentials, timeout=5)
        if response.status_code != 200:
            logger.warning(f"Token request to {realm} failed (status code {response.status_code})")
            return None
        body = response.json()
        return body.get("token") or body.get("access_token")
