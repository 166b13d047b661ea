"""Thin GitHub REST client for the gist endpoints the résumé store needs."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class StorageError(RuntimeError):
    """Raised when the gist backend fails or returns unusable data."""


class GistNotFoundError(StorageError):
    """Raised when a gist (or user) does not exist."""


class GistClient:
    """Synchronous GitHub client scoped to one access token.

    Args:
        token: GitHub access token, passed through as a bearer credential.
        api_url: REST API root.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        token: str,
        *,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=api_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
        )

    def __enter__(self) -> GistClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise StorageError(f"{method} {url} failed: {exc}") from exc

        if response.status_code == 404:
            raise GistNotFoundError(f"{method} {url}: not found")
        if response.is_error:
            raise StorageError(
                f"{method} {url} returned {response.status_code}: {response.text[:200]}"
            )
        return response

    def _json(self, method: str, url: str, **kwargs: Any) -> Any:
        response = self._request(method, url, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise StorageError(f"{method} {url} returned invalid JSON") from exc

    def get_user(self, username: str) -> dict[str, Any]:
        return self._json("GET", f"/users/{username}")

    def list_gists(self, username: str, *, per_page: int = 100) -> list[dict[str, Any]]:
        return self._json("GET", f"/users/{username}/gists", params={"per_page": per_page})

    def get_gist(self, gist_id: str) -> dict[str, Any]:
        return self._json("GET", f"/gists/{gist_id}")

    def fetch_raw(self, url: str) -> str:
        """Download a file body from its absolute ``raw_url``."""
        return self._request("GET", url).text

    def create_gist(
        self, files: dict[str, str], *, description: str, public: bool
    ) -> dict[str, Any]:
        payload = {
            "description": description,
            "public": public,
            "files": {name: {"content": content} for name, content in files.items()},
        }
        return self._json("POST", "/gists", json=payload)

    def update_gist(
        self, gist_id: str, files: dict[str, str], *, description: str | None = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "files": {name: {"content": content} for name, content in files.items()}
        }
        if description is not None:
            payload["description"] = description
        return self._json("PATCH", f"/gists/{gist_id}", json=payload)
