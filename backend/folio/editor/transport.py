"""HTTP client for the content API.

Request lifecycle:

1. Send the request with the admin bearer token.
2. On ``2xx`` return the parsed JSON body.
3. On ``401`` raise :class:`AuthenticationExpired`.
4. On other ``4xx`` raise :class:`ContentRejected` with the server's details.
5. On ``5xx`` raise :class:`ServerError`.
6. On timeouts / connection failures raise :class:`SaveTimeout` /
   :class:`NetworkError`.

There are no retries at this layer; a save is re-run by the user (or the
next autosave tick), never replayed automatically.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import EditorSettings
from .errors import (
    AuthenticationExpired,
    ContentRejected,
    NetworkError,
    SaveTimeout,
    ServerError,
)

log = logging.getLogger(__name__)


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    status = response.status_code
    if status < 400:
        return

    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = body.get("message") or body.get("error") or response.text[:500]
    context = {"status_code": status, "error": body.get("error"), "details": body.get("details", [])}

    if status == 401:
        raise AuthenticationExpired(f"{method} {path}: {message}", context)
    if 400 <= status < 500:
        raise ContentRejected(f"{method} {path}: {message}", context)
    raise ServerError(f"{method} {path}: {message}", context)


class ContentClient:
    """Talks to ``/admin/content`` on behalf of an editor session.

    Parameters
    ----------
    settings:
        Base URL, prefix and timeout.
    token:
        Bearer token of the admin session. :meth:`login` sets it.
    http_client:
        Pre-built :class:`httpx.Client`; handy for tests
        (``httpx.WSGITransport`` / ``httpx.MockTransport``). The caller keeps
        ownership of a client passed in.
    """

    def __init__(
        self,
        settings: EditorSettings | None = None,
        *,
        token: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or EditorSettings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=self._settings.base_url,
            timeout=self._settings.timeout,
        )
        self.token = token

    # -- lifecycle ------------------------------------------------------

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> ContentClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- plumbing -------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self._settings.api_prefix}{path}"

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = kwargs.pop("headers", {})
        headers.setdefault("Accept", "application/json")
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        url = self._url(path)
        try:
            response = self._client.request(
                method, url, headers=headers, timeout=self._settings.timeout, **kwargs
            )
        except httpx.TimeoutException as exc:
            raise SaveTimeout(f"{method} {url} timed out after {self._settings.timeout}s", cause=exc) from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"{method} {url} failed: {exc}", cause=exc) from exc

        _raise_for_status(response, method, url)
        return response.json()

    # -- API ------------------------------------------------------------

    def login(self, username: str, password: str) -> str:
        data = self._request("POST", "/auth/login", json={"username": username, "password": password})
        self.token = data["access_token"]
        return self.token

    def fetch_section(self, section: str) -> list[dict[str, Any]]:
        data = self._request("GET", f"/admin/content/{section}")
        return data.get("content", [])

    def replace_section(self, section: str, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        log.debug("Replacing section %s with %d item(s)", section, len(items))
        data = self._request("PUT", f"/admin/content/{section}", json={"content": items})
        return data.get("content", [])

    def upload_image(self, filename: str, data: bytes, mimetype: str) -> str:
        body = self._request("POST", "/admin/images", files={"images": (filename, data, mimetype)})
        return body["files"][0]["path"]
