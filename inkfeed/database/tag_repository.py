"""
Tag repository - tag rows and the article/tag association table.

Association writes take an open connection so that the article row and its
tags are written in the same transaction.
"""

import sqlite3

from .connection import DatabaseConnection
from .converters import row_to_tag
from .models import DBTag


class TagRepository:
    """Repository for tag operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def ensure(self, conn: sqlite3.Connection, names: list[str]) -> list[DBTag]:
        """
        Make sure a tag row exists for every name.

        Existing rows are left untouched (create-if-absent, never update).

        Returns:
            The tag rows for ``names``, in the order given
        """
        if not names:
            return []

        conn.executemany(
            "INSERT OR IGNORE INTO tags (name) VALUES (?)",
            [(name,) for name in names]
        )
        placeholders = ",".join("?" * len(names))
        rows = conn.execute(
            f"SELECT id, name FROM tags WHERE name IN ({placeholders})",
            names
        ).fetchall()
        by_name = {row["name"]: row_to_tag(row) for row in rows}
        return [by_name[name] for name in names if name in by_name]

    def replace_for_article(
        self,
        conn: sqlite3.Connection,
        article_id: int,
        names: list[str]
    ) -> list[DBTag]:
        """
        Replace an article's tag set wholesale.

        All previous associations are removed before the new set is
        connected, so the result always equals ``names``.
        """
        tags = self.ensure(conn, names)
        conn.execute("DELETE FROM article_tags WHERE article_id = ?", (article_id,))
        conn.executemany(
            "INSERT INTO article_tags (article_id, tag_id) VALUES (?, ?)",
            [(article_id, tag.id) for tag in tags]
        )
        return tags

    def get_for_articles(
        self,
        conn: sqlite3.Connection,
        article_ids: list[int]
    ) -> dict[int, list[DBTag]]:
        """Get tags for several articles, keyed by article ID."""
        result: dict[int, list[DBTag]] = {article_id: [] for article_id in article_ids}
        if not article_ids:
            return result

        placeholders = ",".join("?" * len(article_ids))
        rows = conn.execute(
            f"""SELECT at.article_id, t.id, t.name
                FROM article_tags at
                JOIN tags t ON t.id = at.tag_id
                WHERE at.article_id IN ({placeholders})
                ORDER BY t.name""",
            article_ids
        ).fetchall()
        for row in rows:
            result[row["article_id"]].append(row_to_tag(row))
        return result

    def get_all(self, limit: int = 100) -> list[DBTag]:
        """Get tags with their article counts, most used first."""
        with self._db.conn() as conn:
            rows = conn.execute(
                """SELECT t.id, t.name, COUNT(at.article_id) AS article_count
                   FROM tags t
                   LEFT JOIN article_tags at ON at.tag_id = t.id
                   GROUP BY t.id
                   ORDER BY article_count DESC, t.name ASC
                   LIMIT ?""",
                (limit,)
            ).fetchall()
            return [row_to_tag(row) for row in rows]
