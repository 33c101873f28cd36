"""
Database module - SQLite operations for users, articles, tags and drafts.

Uses repository pattern for better separation of concerns.
"""

from .connection import DatabaseConnection
from .models import DBArticle, DBDraft, DBTag, DBUser
from .article_repository import ArticleRepository
from .draft_repository import DraftRepository
from .tag_repository import TagRepository
from .user_repository import UserRepository
from .database import Database

__all__ = [
    "Database",
    "DatabaseConnection",
    "DBArticle",
    "DBDraft",
    "DBTag",
    "DBUser",
    "ArticleRepository",
    "DraftRepository",
    "TagRepository",
    "UserRepository",
]
