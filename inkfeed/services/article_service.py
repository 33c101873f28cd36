"""
Article service: business logic for article operations.

Handles publishing, feed pagination, reads with view counting, likes, and
owner-only edits. Tags are recomputed from the content on every write.
"""

import logging

from ..database import Database
from ..database.models import DBArticle, DBTag
from ..exceptions import require_article, require_owner
from ..hashtags import extract_hashtags

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 50

# Largest integer SQLite can bind
SQLITE_MAX_INTEGER = 2**63 - 1


def in_id_range(value: int) -> bool:
    """Whether ``value`` could be a row ID. Anything else cannot exist."""
    return 1 <= value <= SQLITE_MAX_INTEGER


class ArticleService:
    """Service for article-related business logic."""

    def __init__(self, db: Database):
        self.db = db

    # ─────────────────────────────────────────────────────────────
    # Publishing
    # ─────────────────────────────────────────────────────────────

    def publish(self, author_id: int, title: str, content: str) -> DBArticle:
        """Create an article and associate the hashtags found in its content."""
        tag_names = extract_hashtags(content)
        article_id = self.db.add_article(author_id, title, content, tag_names)
        logger.info(f"User {author_id} published article {article_id} with {len(tag_names)} tags")
        return require_article(self.db.get_article(article_id))

    def update(
        self,
        article_id: int,
        user_id: int,
        title: str | None = None,
        content: str | None = None,
    ) -> DBArticle:
        """
        Edit an article as its author.

        The tag set is replaced wholesale with the hashtags of the resulting
        content, so removing every hashtag leaves the article untagged.

        Raises:
            HTTPException: 404 if missing, 403 if ``user_id`` is not the author
        """
        article = require_article(self._get(article_id))
        require_owner(article.author_id, user_id, "You can only edit your own articles")

        new_title = title if title is not None else article.title
        new_content = content if content is not None else article.content
        self.db.update_article(article_id, new_title, new_content, extract_hashtags(new_content))

        return require_article(self.db.get_article(article_id))

    def delete(self, article_id: int, user_id: int):
        """
        Delete an article as its author. Tags stay behind even if orphaned.

        Raises:
            HTTPException: 404 if missing, 403 if ``user_id`` is not the author
        """
        self._require_id(article_id)
        author_id = require_article(self.db.get_article_author_id(article_id))
        require_owner(author_id, user_id, "You can only delete your own articles")
        self.db.delete_article(article_id)
        logger.info(f"User {user_id} deleted article {article_id}")

    # ─────────────────────────────────────────────────────────────
    # Reading
    # ─────────────────────────────────────────────────────────────

    def list_articles(
        self,
        page: int = 1,
        limit: int = 10,
        author_id: int | None = None,
        tag: str | None = None,
    ) -> tuple[list[DBArticle], int, int, int]:
        """
        Get one page of articles, newest first.

        ``limit`` is clamped to 1..MAX_PAGE_SIZE and ``page`` to at least 1.

        Returns:
            (articles, total, page, limit) with the effective page and limit
        """
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        # Pages past the largest bindable offset are simply empty
        page = min(max(page, 1), SQLITE_MAX_INTEGER // limit)
        offset = (page - 1) * limit

        if author_id is not None and not in_id_range(author_id):
            return [], 0, page, limit

        articles = self.db.get_articles(author_id=author_id, tag=tag, limit=limit, offset=offset)
        total = self.db.count_articles(author_id=author_id, tag=tag)
        return articles, total, page, limit

    def read(self, article_id: int) -> DBArticle:
        """
        Fetch an article for display, counting the view.

        Every call counts; there is no per-reader deduplication.
        """
        self._require_id(article_id)
        self.db.increment_views(article_id)
        return require_article(self.db.get_article(article_id))

    def like(self, article_id: int) -> int:
        """
        Add a like and return the new count.

        The count is the value read before the increment plus one, so it can
        lag behind concurrent likes; the increment itself is atomic.
        """
        article = require_article(self._get(article_id))
        self.db.increment_likes(article_id)
        return article.likes + 1

    def list_tags(self, limit: int = 100) -> list[DBTag]:
        """Get tags ordered by how many articles use them."""
        return self.db.get_tags(limit)

    def _require_id(self, article_id: int):
        """404 for IDs no row can have, before they reach SQLite."""
        require_article(article_id if in_id_range(article_id) else None)

    def _get(self, article_id: int) -> DBArticle | None:
        if not in_id_range(article_id):
            return None
        return self.db.get_article(article_id)
