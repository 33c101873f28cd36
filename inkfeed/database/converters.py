"""
Database row converters - convert SQLite rows to dataclasses.
"""

import sqlite3
from datetime import datetime, timezone

from .models import DBArticle, DBDraft, DBTag, DBUser


def utc_now() -> datetime:
    """Current UTC time truncated to millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_timestamp(value: datetime) -> str:
    """Format a timestamp for storage and API output (ISO 8601, milliseconds)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds")


def parse_timestamp(value: str | None) -> datetime:
    """Parse a stored timestamp, assuming UTC when no offset is present."""
    if not value:
        return utc_now()
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return utc_now()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def row_to_user(row: sqlite3.Row) -> DBUser:
    """Convert a database row to a DBUser."""
    return DBUser(
        id=row["id"],
        username=row["username"],
        password_hash=row["password_hash"],
        nickname=row["nickname"],
        avatar=row["avatar"],
        created_at=parse_timestamp(row["created_at"]),
    )


def row_to_tag(row: sqlite3.Row) -> DBTag:
    """Convert a database row to a DBTag."""
    # article_count is only selected by the tag listing query
    try:
        article_count = row["article_count"] or 0
    except (IndexError, KeyError):
        article_count = 0

    return DBTag(id=row["id"], name=row["name"], article_count=article_count)


def row_to_article(row: sqlite3.Row, tags: list[DBTag] | None = None) -> DBArticle:
    """Convert a database row to a DBArticle."""
    # Author columns are present when the query joins users
    def safe_get(col: str) -> str | None:
        try:
            return row[col]
        except (IndexError, KeyError):
            return None

    return DBArticle(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        author_id=row["author_id"],
        likes=row["likes"] or 0,
        views=row["views"] or 0,
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
        author_username=safe_get("author_username"),
        author_avatar=safe_get("author_avatar"),
        tags=tags or [],
    )


def row_to_draft(row: sqlite3.Row) -> DBDraft:
    """Convert a database row to a DBDraft."""
    return DBDraft(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        content=row["content"],
        updated_at=parse_timestamp(row["updated_at"]),
    )
