"""
HTTP exception utilities for common error patterns.

Provides helper functions to reduce boilerplate for 404 and ownership errors.
"""

from typing import TypeVar

from fastapi import HTTPException, status

T = TypeVar("T")


def require_resource(resource: T | None, detail: str = "Resource not found") -> T:
    """
    Raise 404 if resource is None, otherwise return the resource.

    Usage:
        article = require_resource(db.get_article(id), "Article not found")
    """
    if resource is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return resource


def require_article(article: T | None) -> T:
    """Raise 404 if article is None."""
    return require_resource(article, "Article not found")


def require_draft(draft: T | None) -> T:
    """Raise 404 if draft is None."""
    return require_resource(draft, "No draft saved")


def require_owner(owner_id: int, user_id: int, detail: str = "You can only modify your own articles"):
    """Raise 403 unless ``user_id`` owns the resource."""
    if owner_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
