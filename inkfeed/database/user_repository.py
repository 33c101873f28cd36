"""
Repository for user operations.
"""

import sqlite3

from .connection import DatabaseConnection
from .converters import format_timestamp, row_to_user, utc_now
from .models import DBUser


class UserRepository:
    """Repository for user CRUD operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def create(
        self,
        username: str,
        password_hash: str,
        nickname: str | None = None,
        avatar: str | None = None,
    ) -> int | None:
        """
        Create a new user.

        Args:
            username: Unique login name
            password_hash: bcrypt hash of the password
            nickname: Display name (optional)
            avatar: Avatar URL (optional)

        Returns:
            User ID, or None if the username is already taken
        """
        with self._db.conn() as conn:
            try:
                cursor = conn.execute(
                    """
                    INSERT INTO users (username, password_hash, nickname, avatar, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (username, password_hash, nickname, avatar, format_timestamp(utc_now()))
                )
            except sqlite3.IntegrityError:
                # Duplicate username
                return None
            return cursor.lastrowid

    def get_by_id(self, user_id: int) -> DBUser | None:
        """Get user by ID."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE id = ?", (user_id,)
            ).fetchone()
            return row_to_user(row) if row else None

    def get_by_username(self, username: str) -> DBUser | None:
        """Get user by username."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE username = ?", (username,)
            ).fetchone()
            return row_to_user(row) if row else None

