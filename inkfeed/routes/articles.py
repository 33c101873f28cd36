"""
Article routes: publish, feed, detail, like, edit, delete.
"""

from fastapi import APIRouter, Query, Request

from ..auth import CurrentUserId
from ..rate_limit import limit_article_counter
from ..schemas import (
    ArticleListResponse,
    ArticleResponse,
    CreateArticleRequest,
    LikeResponse,
    MessageResponse,
    UpdateArticleRequest,
)
from ..services import ArticleServiceDep

router = APIRouter(prefix="/articles", tags=["articles"])


# ─────────────────────────────────────────────────────────────
# Feed (public)
# ─────────────────────────────────────────────────────────────

@router.get("")
async def list_articles(
    service: ArticleServiceDep,
    page: int = Query(default=1),
    limit: int = Query(default=10),
    tag: str | None = None,
) -> ArticleListResponse:
    """Get a page of articles, newest first. ``limit`` is capped at 50.

    Args:
        tag: Only return articles carrying this hashtag (case-insensitive).
    """
    articles, total, page, limit = service.list_articles(page=page, limit=limit, tag=tag)
    return ArticleListResponse(
        articles=[ArticleResponse.from_db(a) for a in articles],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{article_id}")
@limit_article_counter
async def get_article(request: Request, article_id: int, service: ArticleServiceDep) -> ArticleResponse:
    """Get a single article. Every request counts as a view."""
    return ArticleResponse.from_db(service.read(article_id))


@router.post("/{article_id}/like")
@limit_article_counter
async def like_article(request: Request, article_id: int, service: ArticleServiceDep) -> LikeResponse:
    """Like an article. No login required; repeated likes are only rate limited."""
    return LikeResponse(likes=service.like(article_id))


# ─────────────────────────────────────────────────────────────
# Authoring (login required)
# ─────────────────────────────────────────────────────────────

@router.post("", status_code=201)
async def publish_article(
    request: CreateArticleRequest,
    user_id: CurrentUserId,
    service: ArticleServiceDep,
) -> ArticleResponse:
    """Publish an article. Hashtags in the content become its tags."""
    article = service.publish(user_id, request.title, request.content)
    return ArticleResponse.from_db(article)


@router.put("/{article_id}")
async def update_article(
    article_id: int,
    request: UpdateArticleRequest,
    user_id: CurrentUserId,
    service: ArticleServiceDep,
) -> ArticleResponse:
    """Edit your own article. Its tags are recomputed from the new content."""
    article = service.update(article_id, user_id, title=request.title, content=request.content)
    return ArticleResponse.from_db(article)


@router.delete("/{article_id}")
async def delete_article(
    article_id: int,
    user_id: CurrentUserId,
    service: ArticleServiceDep,
) -> MessageResponse:
    """Delete your own article."""
    service.delete(article_id, user_id)
    return MessageResponse(msg="Article deleted")
