"""
Miscellaneous routes: health check, tags, author pages.
"""

from fastapi import APIRouter, Query

from .. import __version__
from ..schemas import ArticleListResponse, ArticleResponse, TagStatsResponse
from ..services import ArticleServiceDep

router = APIRouter(tags=["misc"])


# ─────────────────────────────────────────────────────────────
# Health Check
# ─────────────────────────────────────────────────────────────

@router.get("/status")
async def health_check() -> dict:
    """API health check."""
    return {"status": "ok", "version": __version__}


# ─────────────────────────────────────────────────────────────
# Tags
# ─────────────────────────────────────────────────────────────

@router.get("/tags")
async def list_tags(
    service: ArticleServiceDep,
    limit: int = Query(default=100, ge=1, le=500),
) -> list[TagStatsResponse]:
    """List tags, most used first. Orphaned tags are included with a zero count."""
    return [TagStatsResponse.from_db(t) for t in service.list_tags(limit)]


# ─────────────────────────────────────────────────────────────
# Author pages
# ─────────────────────────────────────────────────────────────

@router.get("/users/{user_id}/articles")
async def list_user_articles(
    user_id: int,
    service: ArticleServiceDep,
    page: int = Query(default=1),
    limit: int = Query(default=10),
) -> ArticleListResponse:
    """Get a page of one author's articles, newest first."""
    articles, total, page, limit = service.list_articles(page=page, limit=limit, author_id=user_id)
    return ArticleListResponse(
        articles=[ArticleResponse.from_db(a) for a in articles],
        total=total,
        page=page,
        limit=limit,
    )
