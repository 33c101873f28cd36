"""
Async HTTP client for the Inkfeed API.

Mirrors the REST endpoints one method each. The stored bearer token is sent
on every request when present. No timeouts or retries are added beyond the
httpx defaults; callers decide which failures to swallow.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

import httpx

from .storage import TokenStorage, UserStorage

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:9080"

MALFORMED_RESPONSE = "Malformed response from server"


class ApiError(Exception):
    """Non-2xx or unreadable response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def parse_timestamp_ms(value: str) -> int:
    """Convert an ISO 8601 timestamp from the API to ms since the epoch."""
    return round(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp() * 1000)


@dataclass
class RemoteDraft:
    """The server's copy of the user's draft."""
    id: int
    title: str
    content: str
    updated_at: int  # ms since epoch

    @classmethod
    def from_json(cls, data: dict) -> "RemoteDraft":
        return cls(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            updated_at=parse_timestamp_ms(data["updatedAt"]),
        )


def _error_message(response: httpx.Response) -> str:
    """Pull a readable message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Request failed ({response.status_code})"

    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        # FastAPI validation errors
        return "; ".join(str(item.get("msg", item)) for item in detail if isinstance(item, dict)) or str(detail)
    return f"Request failed ({response.status_code})"


class ApiClient:
    """Client for the Inkfeed REST API."""

    def __init__(
        self,
        tokens: TokenStorage,
        users: UserStorage | None = None,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.tokens = tokens
        self.users = users
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def is_logged_in(self) -> bool:
        return self.tokens.get() is not None

    async def _request(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], Any] | None = None,
        **kwargs,
    ) -> Any:
        """
        Send one request and return the decoded body, optionally passed through ``parse``.

        Raises:
            ApiError: Non-2xx status, or a 2xx body that is not JSON or lacks
                the fields ``parse`` needs (e.g. a captive portal page)
            httpx.HTTPError: The request never got a response
        """
        headers = kwargs.pop("headers", {})
        token = self.tokens.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        async with httpx.AsyncClient(base_url=self.base_url, transport=self._transport) as client:
            response = await client.request(method, path, headers=headers, **kwargs)

        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))

        try:
            data = response.json()
            return parse(data) if parse else data
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Malformed response from {method} {path}: {e}")
            raise ApiError(response.status_code, MALFORMED_RESPONSE) from e

    # ─────────────────────────────────────────────────────────────
    # Auth
    # ─────────────────────────────────────────────────────────────

    async def register(self, username: str, password: str) -> int:
        """Create an account. Returns the new user ID."""
        data = await self._request("POST", "/auth/register", json={"username": username, "password": password})
        return data["userId"]

    async def login(self, username: str, password: str) -> dict:
        """Log in and remember the token and user profile locally."""
        data = await self._request("POST", "/auth/login", json={"username": username, "password": password})
        self.tokens.set(data["access_token"])
        if self.users is not None:
            self.users.set(data["user"])
        return data["user"]

    async def logout(self):
        """Forget the local session. The server call is best effort."""
        try:
            await self._request("POST", "/auth/logout")
        except (ApiError, httpx.HTTPError) as e:
            logger.debug(f"Logout request failed: {e}")
        self.tokens.remove()
        if self.users is not None:
            self.users.remove()

    # ─────────────────────────────────────────────────────────────
    # Drafts
    # ─────────────────────────────────────────────────────────────

    async def get_draft(self) -> RemoteDraft | None:
        """Get the server draft, or None when the user has none."""
        try:
            return await self._request("GET", "/draft", parse=RemoteDraft.from_json)
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    async def save_draft(self, title: str, content: str) -> RemoteDraft:
        return await self._request(
            "POST", "/draft", parse=RemoteDraft.from_json, json={"title": title, "content": content}
        )

    async def delete_draft(self):
        await self._request("DELETE", "/draft")

    # ─────────────────────────────────────────────────────────────
    # Articles
    # ─────────────────────────────────────────────────────────────

    async def list_articles(self, page: int = 1, limit: int = 10) -> dict:
        return await self._request("GET", "/articles", params={"page": page, "limit": limit})

    async def get_article(self, article_id: int) -> dict:
        return await self._request("GET", f"/articles/{article_id}")

    async def like_article(self, article_id: int) -> int:
        data = await self._request("POST", f"/articles/{article_id}/like")
        return data["likes"]

    async def publish_article(self, title: str, content: str) -> dict:
        return await self._request("POST", "/articles", json={"title": title, "content": content})

    async def update_article(self, article_id: int, title: str, content: str) -> dict:
        return await self._request("PUT", f"/articles/{article_id}", json={"title": title, "content": content})

    async def delete_article(self, article_id: int):
        await self._request("DELETE", f"/articles/{article_id}")

    # ─────────────────────────────────────────────────────────────
    # Uploads
    # ─────────────────────────────────────────────────────────────

    async def upload_image(self, filename: str, data: bytes, content_type: str) -> str:
        """Upload an image and return its absolute URL."""
        result = await self._request(
            "POST",
            "/upload/image",
            files={"file": (filename, data, content_type)},
        )
        return f"{self.base_url}{result['url']}"
