"""
Tests for the async API client and local storage.
"""

import httpx
import pytest

from inkfeed.client import ApiError, LocalStore, TokenStorage, UserStorage
from inkfeed.client.api import parse_timestamp_ms

PASSWORD = "secret123"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class TestSession:
    """Tests for login state kept on the device."""

    @pytest.mark.asyncio
    async def test_login_stores_token_and_user(self, api, local_store):
        """Login remembers the token and profile across instances."""
        user_id = await api.register("alice", PASSWORD)
        user = await api.login("alice", PASSWORD)

        assert user["id"] == user_id
        assert api.is_logged_in()
        assert TokenStorage(local_store).get()
        assert UserStorage(local_store).get()["username"] == "alice"

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, logged_in_api, local_store):
        await logged_in_api.logout()
        assert not logged_in_api.is_logged_in()
        assert UserStorage(local_store).get() is None

    @pytest.mark.asyncio
    async def test_logout_when_server_unreachable(self, mock_api, local_store):
        """The local session is cleared even if the request fails."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("network down", request=request)

        api = mock_api(handler)
        await api.logout()
        assert not api.is_logged_in()

    @pytest.mark.asyncio
    async def test_bad_login_raises(self, api):
        """API errors carry the status and server message."""
        with pytest.raises(ApiError) as exc_info:
            await api.login("nobody", PASSWORD)
        assert exc_info.value.status_code == 401
        assert exc_info.value.message

    @pytest.mark.asyncio
    async def test_validation_error_message(self, api):
        """Validation failures are flattened into one message."""
        with pytest.raises(ApiError) as exc_info:
            await api.register("alice", "123")
        assert exc_info.value.status_code == 422
        assert exc_info.value.message


class TestRequests:
    """Tests for authenticated calls."""

    @pytest.mark.asyncio
    async def test_get_draft_none_when_missing(self, logged_in_api):
        assert await logged_in_api.get_draft() is None

    @pytest.mark.asyncio
    async def test_draft_round_trip(self, logged_in_api):
        """Saved drafts come back with a millisecond timestamp."""
        saved = await logged_in_api.save_draft("T", "c")
        fetched = await logged_in_api.get_draft()
        assert fetched == saved
        assert saved.updated_at > 0

        await logged_in_api.delete_draft()
        assert await logged_in_api.get_draft() is None

    @pytest.mark.asyncio
    async def test_upload_returns_absolute_url(self, logged_in_api, temp_upload_dir):
        url = await logged_in_api.upload_image("pic.png", PNG_BYTES, "image/png")
        assert url.startswith("http://testserver/uploads/")
        assert (temp_upload_dir / url.rsplit("/", 1)[1]).exists()

    @pytest.mark.asyncio
    async def test_token_sent_as_bearer(self, mock_api):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers.get("Authorization"))
            return httpx.Response(200, json={"likes": 3})

        assert await mock_api(handler, token="abc").like_article(1) == 3
        assert seen == ["Bearer abc"]


class TestLocalStore:
    """Tests for the JSON-file store."""

    def test_set_get_remove(self, local_store):
        local_store.set("k", {"a": 1})
        assert local_store.get("k") == {"a": 1}
        local_store.remove("k")
        assert local_store.get("k") is None

    def test_corrupt_file_reads_empty(self, tmp_path):
        """An unreadable file behaves like an empty store."""
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        store = LocalStore(path)
        assert store.get("anything") is None
        store.set("k", 1)
        assert store.get("k") == 1


def test_parse_timestamp_ms():
    """Both 'Z' and explicit offsets are understood."""
    assert parse_timestamp_ms("2026-01-01T00:00:00.123Z") == 1767225600123
    assert parse_timestamp_ms("2026-01-01T00:00:00.123+00:00") == 1767225600123


class TestMalformedResponses:
    """A 2xx body that is not what the endpoint returns becomes an ApiError."""

    @pytest.mark.asyncio
    async def test_non_json_body(self, mock_api):
        api = mock_api(lambda request: httpx.Response(200, text="<html>portal</html>"))
        with pytest.raises(ApiError) as exc_info:
            await api.get_draft()
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_draft_missing_fields(self, mock_api):
        api = mock_api(lambda request: httpx.Response(200, json={"title": "t"}))
        with pytest.raises(ApiError):
            await api.save_draft("t", "c")
