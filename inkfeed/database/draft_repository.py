"""
Draft repository - one draft row per user.
"""

from .connection import DatabaseConnection
from .converters import format_timestamp, row_to_draft, utc_now
from .models import DBDraft


class DraftRepository:
    """Repository for per-user drafts."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get(self, user_id: int) -> DBDraft | None:
        """Get the user's draft, if any."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT * FROM drafts WHERE user_id = ?", (user_id,)
            ).fetchone()
            return row_to_draft(row) if row else None

    def upsert(self, user_id: int, title: str, content: str) -> DBDraft:
        """Create or overwrite the user's draft, stamping it with the current time."""
        with self._db.conn() as conn:
            conn.execute(
                """INSERT INTO drafts (user_id, title, content, updated_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(user_id) DO UPDATE SET
                       title = excluded.title,
                       content = excluded.content,
                       updated_at = excluded.updated_at""",
                (user_id, title, content, format_timestamp(utc_now()))
            )
            row = conn.execute(
                "SELECT * FROM drafts WHERE user_id = ?", (user_id,)
            ).fetchone()
            return row_to_draft(row)

    def delete(self, user_id: int) -> bool:
        """Delete the user's draft. Returns whether a row existed."""
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM drafts WHERE user_id = ?", (user_id,))
            return cursor.rowcount > 0
