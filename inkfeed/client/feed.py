"""
Feed paging and likes for the client.
"""

import logging

import httpx

from .api import ApiClient, ApiError

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


class FeedPager:
    """Infinite-scroll state over ``GET /articles``."""

    def __init__(self, api: ApiClient, page_size: int = PAGE_SIZE):
        self.api = api
        self.page_size = page_size
        self.articles: list[dict] = []
        self.page = 0
        self.has_more = True
        self.error: str | None = None
        self._loading = False
        self._liked: set[int] = set()

    async def refresh(self) -> list[dict]:
        """Reload from the first page, replacing what is shown."""
        await self._load(1, replace=True)
        return self.articles

    async def load_more(self) -> list[dict]:
        """Append the next page if there is one."""
        if self.has_more:
            await self._load(self.page + 1, replace=False)
        return self.articles

    async def _load(self, page: int, replace: bool):
        if self._loading:
            return
        self._loading = True
        self.error = None
        try:
            result = await self.api.list_articles(page, self.page_size)
        except (ApiError, httpx.HTTPError) as e:
            self.error = str(e) or "Failed to load articles"
            return
        finally:
            self._loading = False

        batch = result["articles"]
        self.articles = batch if replace else self.articles + batch
        # A short page means the end of the feed
        self.has_more = len(batch) == self.page_size
        self.page = page

    def has_liked(self, article_id: int) -> bool:
        return article_id in self._liked

    async def like(self, article_id: int) -> int | None:
        """
        Like an article once per session.

        The server does not deduplicate, so the once-only rule lives here.
        Failures are ignored without feedback.

        Returns:
            The new like count, or None if nothing was recorded
        """
        if article_id in self._liked:
            return None
        try:
            likes = await self.api.like_article(article_id)
        except (ApiError, httpx.HTTPError) as e:
            logger.debug(f"Ignoring failed like for article {article_id}: {e}")
            return None

        self._liked.add(article_id)
        for article in self.articles:
            if article.get("id") == article_id:
                article["likes"] = likes
        return likes
