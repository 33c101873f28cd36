"""
Article repository - CRUD operations for articles.
"""

from .connection import DatabaseConnection
from .converters import format_timestamp, row_to_article, utc_now
from .models import DBArticle
from .tag_repository import TagRepository

# Articles joined with the columns needed to render the author
_SELECT_ARTICLES = """
    SELECT a.*, u.username AS author_username, u.avatar AS author_avatar
    FROM articles a
    LEFT JOIN users u ON u.id = a.author_id
"""


class ArticleRepository:
    """Repository for article operations."""

    def __init__(self, db: DatabaseConnection, tags: TagRepository):
        self._db = db
        self._tags = tags

    def add(self, author_id: int, title: str, content: str, tag_names: list[str]) -> int:
        """Insert an article and associate its tags in one transaction. Returns article ID."""
        now = format_timestamp(utc_now())
        with self._db.conn() as conn:
            cursor = conn.execute(
                """INSERT INTO articles (title, content, author_id, likes, views, created_at, updated_at)
                   VALUES (?, ?, ?, 0, 0, ?, ?)""",
                (title, content, author_id, now, now)
            )
            article_id = cursor.lastrowid
            self._tags.replace_for_article(conn, article_id, tag_names)
            return article_id

    def get(self, article_id: int) -> DBArticle | None:
        """Get single article by ID, with author and tags."""
        with self._db.conn() as conn:
            row = conn.execute(
                _SELECT_ARTICLES + " WHERE a.id = ?", (article_id,)
            ).fetchone()
            if not row:
                return None
            tags = self._tags.get_for_articles(conn, [article_id])
            return row_to_article(row, tags[article_id])

    def get_author_id(self, article_id: int) -> int | None:
        """Get the author of an article, or None if it does not exist."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT author_id FROM articles WHERE id = ?", (article_id,)
            ).fetchone()
            return row["author_id"] if row else None

    def get_many(
        self,
        author_id: int | None = None,
        tag: str | None = None,
        limit: int = 10,
        offset: int = 0
    ) -> list[DBArticle]:
        """Get articles newest first, with optional author and tag filters."""
        where, params = self._filters(author_id, tag)
        query = (
            _SELECT_ARTICLES + where
            + " ORDER BY a.created_at DESC, a.id DESC LIMIT ? OFFSET ?"
        )
        params.extend([limit, offset])

        with self._db.conn() as conn:
            rows = conn.execute(query, params).fetchall()
            tags = self._tags.get_for_articles(conn, [row["id"] for row in rows])
            return [row_to_article(row, tags[row["id"]]) for row in rows]

    def count(self, author_id: int | None = None, tag: str | None = None) -> int:
        """Count articles matching the same filters as get_many."""
        where, params = self._filters(author_id, tag)
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS total FROM articles a" + where, params
            ).fetchone()
            return row["total"]

    def update(
        self,
        article_id: int,
        title: str,
        content: str,
        tag_names: list[str]
    ):
        """Update article text and replace its tag set in one transaction."""
        with self._db.conn() as conn:
            conn.execute(
                "UPDATE articles SET title = ?, content = ?, updated_at = ? WHERE id = ?",
                (title, content, format_timestamp(utc_now()), article_id)
            )
            self._tags.replace_for_article(conn, article_id, tag_names)

    def delete(self, article_id: int) -> bool:
        """Delete an article. Tag associations cascade; tag rows are kept."""
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM articles WHERE id = ?", (article_id,))
            return cursor.rowcount > 0

    def increment_views(self, article_id: int):
        """Atomically add one view."""
        with self._db.conn() as conn:
            conn.execute(
                "UPDATE articles SET views = views + 1 WHERE id = ?", (article_id,)
            )

    def increment_likes(self, article_id: int):
        """Atomically add one like."""
        with self._db.conn() as conn:
            conn.execute(
                "UPDATE articles SET likes = likes + 1 WHERE id = ?", (article_id,)
            )

    def _filters(self, author_id: int | None, tag: str | None) -> tuple[str, list]:
        """Build the WHERE clause shared by listing and counting."""
        where = " WHERE 1=1"
        params: list = []

        if author_id is not None:
            where += " AND a.author_id = ?"
            params.append(author_id)
        if tag:
            where += """ AND a.id IN (
                SELECT at.article_id FROM article_tags at
                JOIN tags t ON t.id = at.tag_id
                WHERE t.name = ?
            )"""
            params.append(tag.lower())

        return where, params
