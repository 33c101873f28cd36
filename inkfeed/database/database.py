"""
Database facade - provides unified access to all repositories.

One instance is created at startup and shared through dependency injection;
repositories never open their own database files.
"""

from pathlib import Path

from .connection import DatabaseConnection
from .article_repository import ArticleRepository
from .draft_repository import DraftRepository
from .tag_repository import TagRepository
from .user_repository import UserRepository
from .models import DBArticle, DBDraft, DBTag, DBUser


class Database:
    """
    Unified database access facade.

    Delegates to the repository classes, which remain reachable as attributes.
    """

    def __init__(self, db_path: Path):
        self._connection = DatabaseConnection(db_path)

        # Initialize repositories
        self.users = UserRepository(self._connection)
        self.tags = TagRepository(self._connection)
        self.articles = ArticleRepository(self._connection, self.tags)
        self.drafts = DraftRepository(self._connection)

    # ─────────────────────────────────────────────────────────────
    # User operations (delegated to UserRepository)
    # ─────────────────────────────────────────────────────────────

    def add_user(
        self,
        username: str,
        password_hash: str,
        nickname: str | None = None,
        avatar: str | None = None,
    ) -> int | None:
        return self.users.create(username, password_hash, nickname, avatar)

    def get_user(self, user_id: int) -> DBUser | None:
        return self.users.get_by_id(user_id)

    def get_user_by_username(self, username: str) -> DBUser | None:
        return self.users.get_by_username(username)

    # ─────────────────────────────────────────────────────────────
    # Article operations (delegated to ArticleRepository)
    # ─────────────────────────────────────────────────────────────

    def add_article(
        self,
        author_id: int,
        title: str,
        content: str,
        tag_names: list[str] | None = None,
    ) -> int:
        return self.articles.add(author_id, title, content, tag_names or [])

    def get_article(self, article_id: int) -> DBArticle | None:
        return self.articles.get(article_id)

    def get_article_author_id(self, article_id: int) -> int | None:
        return self.articles.get_author_id(article_id)

    def get_articles(
        self,
        author_id: int | None = None,
        tag: str | None = None,
        limit: int = 10,
        offset: int = 0
    ) -> list[DBArticle]:
        return self.articles.get_many(author_id, tag, limit, offset)

    def count_articles(self, author_id: int | None = None, tag: str | None = None) -> int:
        return self.articles.count(author_id, tag)

    def update_article(
        self,
        article_id: int,
        title: str,
        content: str,
        tag_names: list[str] | None = None,
    ):
        return self.articles.update(article_id, title, content, tag_names or [])

    def delete_article(self, article_id: int) -> bool:
        return self.articles.delete(article_id)

    def increment_views(self, article_id: int):
        return self.articles.increment_views(article_id)

    def increment_likes(self, article_id: int):
        return self.articles.increment_likes(article_id)

    # ─────────────────────────────────────────────────────────────
    # Tag operations (delegated to TagRepository)
    # ─────────────────────────────────────────────────────────────

    def get_tags(self, limit: int = 100) -> list[DBTag]:
        return self.tags.get_all(limit)

    # ─────────────────────────────────────────────────────────────
    # Draft operations (delegated to DraftRepository)
    # ─────────────────────────────────────────────────────────────

    def get_draft(self, user_id: int) -> DBDraft | None:
        return self.drafts.get(user_id)

    def save_draft(self, user_id: int, title: str, content: str) -> DBDraft:
        return self.drafts.upsert(user_id, title, content)

    def delete_draft(self, user_id: int) -> bool:
        return self.drafts.delete(user_id)
