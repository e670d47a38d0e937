"""GitHub REST backend.

Lists tags page by page (``GET /repos/{owner}/{repo}/tags``) and creates
lightweight tags through the git refs API (``POST /repos/{owner}/{repo}/git/refs``).

The HTTP client is owned by the backend instance and closed with it;
nothing is cached at module level.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from reltag.config.models import GitHubConfig
from reltag.infrastructure.backends import BackendError

logger = logging.getLogger(__name__)

_API_VERSION = "2022-11-28"


def split_repository(repository: str) -> tuple[str, str]:
    """Split ``owner/name`` into its two parts."""
    owner, sep, name = repository.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        raise BackendError(f"Invalid repository '{repository}': expected 'owner/name'")
    return owner, name


class GitHubTagBackend:
    """Tag source and ref writer backed by the GitHub REST API."""

    name = "github"

    def __init__(
        self,
        repository: str,
        *,
        token: str | None = None,
        config: GitHubConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or GitHubConfig()
        self.owner, self.repo = split_repository(repository)
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": _API_VERSION,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=self._config.api_url,
            headers=headers,
            timeout=self._config.timeout,
            transport=transport,
        )

    def __enter__(self) -> GitHubTagBackend:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _error_message(exc.response)
            msg = f"GitHub {method} {path} failed ({exc.response.status_code}): {message}"
            raise BackendError(msg) from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"GitHub {method} {path} failed: {exc}") from exc
        return response

    def list_tags(self) -> list[str]:
        """Return every tag name, following pages until a short page."""
        per_page = self._config.per_page
        path = f"/repos/{self.owner}/{self.repo}/tags"
        names: list[str] = []
        page = 1
        while True:
            response = self._request("GET", path, params={"per_page": per_page, "page": page})
            try:
                batch = [str(item["name"]) for item in response.json()]
            except (KeyError, TypeError, ValueError) as exc:
                raise BackendError(f"GitHub GET {path} returned an unexpected payload") from exc
            names.extend(batch)
            logger.debug("Fetched tag page %d (%d tags)", page, len(batch))
            if len(batch) < per_page:
                return names
            page += 1

    def create_tag(self, tag: str, sha: str) -> None:
        """Create ``refs/tags/<tag>`` pointing at *sha*."""
        logger.info("Pushing new tag %s to %s/%s", tag, self.owner, self.repo)
        self._request(
            "POST",
            f"/repos/{self.owner}/{self.repo}/git/refs",
            json={"ref": f"refs/tags/{tag}", "sha": sha},
        )


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase
