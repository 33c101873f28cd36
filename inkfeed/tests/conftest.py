"""
Pytest fixtures for server and client tests.
"""

import os
import tempfile
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from inkfeed.client import ApiClient, DraftStorage, LocalStore, TokenStorage, UserStorage
from inkfeed.config import config, state
from inkfeed.database import Database
from inkfeed.rate_limit import limiter
from inkfeed.server import app

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def fast_settings():
    """Cheap password hashing and no rate limiting during tests."""
    original_rounds = config.BCRYPT_ROUNDS
    original_limiter_enabled = limiter.enabled

    config.BCRYPT_ROUNDS = 4
    limiter.enabled = False

    yield

    config.BCRYPT_ROUNDS = original_rounds
    limiter.enabled = original_limiter_enabled


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        yield Path(f.name)
    # Cleanup
    if os.path.exists(f.name):
        os.unlink(f.name)


@pytest.fixture
def temp_upload_dir():
    """Create a temporary upload directory."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def test_db(temp_db_path):
    """Create a test database instance."""
    db = Database(temp_db_path)
    yield db


@pytest.fixture
def app_state(temp_db_path, temp_upload_dir):
    """Point the shared app state at an isolated database and upload dir."""
    original_db = state.db
    original_upload_dir = config.UPLOAD_DIR

    state.db = Database(temp_db_path)
    config.UPLOAD_DIR = temp_upload_dir

    yield state.db

    state.db = original_db
    config.UPLOAD_DIR = original_upload_dir


@pytest.fixture
def client(app_state):
    """Create a test client with isolated database and uploads."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def make_user(client):
    """Factory: register and log in a user, returning auth headers."""
    def _make_user(username: str = "alice", password: str = PASSWORD) -> dict:
        response = client.post("/auth/register", json={"username": username, "password": password})
        assert response.status_code == 201, response.text
        response = client.post("/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _make_user


@pytest.fixture
def client_with_data(client, make_user):
    """Test client with two users and some published articles."""
    alice = make_user("alice")
    bob = make_user("bob")

    first = client.post(
        "/articles",
        json={"title": "First post", "content": "<p>Hello #Python and #FastAPI</p>"},
        headers=alice,
    ).json()
    second = client.post(
        "/articles",
        json={"title": "Second post", "content": "<p>More #python tips</p>"},
        headers=alice,
    ).json()

    yield client, {
        "alice": alice,
        "bob": bob,
        "article_ids": [first["id"], second["id"]],
    }


# ─────────────────────────────────────────────────────────────
# Client-side fixtures
# ─────────────────────────────────────────────────────────────

@pytest.fixture
def local_store(tmp_path):
    """Device-local store backed by a temp file."""
    return LocalStore(tmp_path / "local_storage.json")


@pytest.fixture
def drafts(local_store):
    return DraftStorage(local_store)


@pytest.fixture
def api(app_state, local_store):
    """ApiClient talking to the app in-process."""
    return ApiClient(
        TokenStorage(local_store),
        UserStorage(local_store),
        base_url="http://testserver",
        transport=httpx.ASGITransport(app=app),
    )


@pytest_asyncio.fixture
async def logged_in_api(api):
    """ApiClient with a registered and logged-in user."""
    await api.register("alice", PASSWORD)
    await api.login("alice", PASSWORD)
    return api


@pytest.fixture
def mock_api(local_store):
    """Factory: ApiClient whose requests are answered by ``handler``."""
    def _mock_api(handler, token: str | None = "token") -> ApiClient:
        tokens = TokenStorage(local_store)
        if token:
            tokens.set(token)
        return ApiClient(
            tokens,
            base_url="http://testserver",
            transport=httpx.MockTransport(handler),
        )

    return _mock_api
