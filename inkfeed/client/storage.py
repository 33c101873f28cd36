"""
Device-local persistence for the client.

A single JSON file plays the role of the browser's local storage: the access
token, the signed-in user and the article draft each live under a fixed key.
"""

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TOKEN_KEY = "access_token"
USER_KEY = "user"
DRAFT_KEY = "article_draft"


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class LocalStore:
    """JSON-file key-value store."""

    def __init__(self, path: Path):
        self.path = path

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable local store {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)

    def get(self, key: str) -> Any:
        return self._read().get(key)

    def set(self, key: str, value: Any):
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str):
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


@dataclass
class LocalDraft:
    """The device's copy of the draft being edited."""
    title: str
    content: str
    updated_at: int  # ms since epoch
    needs_sync: bool = True
    synced_at: int | None = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "content": self.content,
            "updatedAt": self.updated_at,
            "needsSync": self.needs_sync,
            "syncedAt": self.synced_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LocalDraft":
        return cls(
            title=data.get("title") or "",
            content=data.get("content") or "",
            updated_at=int(data.get("updatedAt") or 0),
            needs_sync=bool(data.get("needsSync", True)),
            synced_at=data.get("syncedAt"),
        )


class DraftStorage:
    """Local draft record under a fixed key."""

    def __init__(self, store: LocalStore):
        self._store = store

    def get(self) -> LocalDraft | None:
        data = self._store.get(DRAFT_KEY)
        if not isinstance(data, dict):
            return None
        try:
            return LocalDraft.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning(f"Discarding malformed local draft: {e}")
            return None

    def set(self, draft: LocalDraft):
        self._store.set(DRAFT_KEY, draft.to_dict())

    def mark_synced(self, at: int | None = None):
        """Flag the stored draft as matching the server copy."""
        draft = self.get()
        if draft is None:
            return
        draft.needs_sync = False
        draft.synced_at = at if at is not None else now_ms()
        self.set(draft)

    def remove(self):
        self._store.remove(DRAFT_KEY)


class TokenStorage:
    """Bearer token under a fixed key."""

    def __init__(self, store: LocalStore):
        self._store = store

    def get(self) -> str | None:
        token = self._store.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def set(self, token: str):
        self._store.set(TOKEN_KEY, token)

    def remove(self):
        self._store.remove(TOKEN_KEY)


class UserStorage:
    """Signed-in user's profile under a fixed key."""

    def __init__(self, store: LocalStore):
        self._store = store

    def get(self) -> dict | None:
        user = self._store.get(USER_KEY)
        return user if isinstance(user, dict) else None

    def set(self, user: dict):
        self._store.set(USER_KEY, user)

    def remove(self):
        self._store.remove(USER_KEY)
