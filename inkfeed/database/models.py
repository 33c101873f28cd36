"""
Database models - dataclasses for database entities.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class DBUser:
    id: int
    username: str
    password_hash: str
    nickname: str | None
    avatar: str | None
    created_at: datetime


@dataclass
class DBTag:
    id: int
    name: str
    article_count: int = 0  # Only populated by tag listing queries


@dataclass
class DBArticle:
    id: int
    title: str
    content: str
    author_id: int
    likes: int
    views: int
    created_at: datetime
    updated_at: datetime

    # Joined author columns
    author_username: str | None = None
    author_avatar: str | None = None

    tags: list[DBTag] = field(default_factory=list)


@dataclass
class DBDraft:
    id: int
    user_id: int
    title: str
    content: str
    updated_at: datetime
