"""Post-related resources (details, search, lists, engagement, publishing)."""

from __future__ import annotations

from datetime import datetime, timezone

from core.domain.models import Account, CursoredResult, Post, PostFilter, RequestArgs
from core.domain.resources import ResourceKind
from core.services.fetch_pipeline import FetchPipeline

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def newest_first(page: CursoredResult) -> CursoredResult[Post]:
    """Re-sort a page of posts reverse-chronologically; undated posts go last."""

    posts = [item for item in page.items if isinstance(item, Post)]
    posts.sort(key=lambda p: p.created_at or _OLDEST, reverse=True)
    return CursoredResult[Post](items=posts, next=page.next)


def posts_page(page: CursoredResult) -> CursoredResult[Post]:
    return CursoredResult[Post](items=[i for i in page.items if isinstance(i, Post)], next=page.next)


def accounts_page(page: CursoredResult) -> CursoredResult[Account]:
    return CursoredResult[Account](items=[i for i in page.items if isinstance(i, Account)], next=page.next)


class TweetService:
    def __init__(self, pipeline: FetchPipeline) -> None:
        self._pipeline = pipeline

    async def details(self, post_id: str) -> Post | None:
        """The post with the given id, or None if the platform returned none.

        A details response may embed other posts (quotes, reposts); the
        requested one is the first in traversal order.
        """

        page = await self._pipeline.fetch(ResourceKind.TWEET_DETAILS, RequestArgs(id=post_id))
        return posts_page(page).first()

    async def search(
        self,
        query: PostFilter,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredResult[Post]:
        page = await self._pipeline.fetch(
            ResourceKind.TWEET_SEARCH,
            RequestArgs(filter=query, count=count, cursor=cursor),
        )
        return newest_first(page)

    async def list(
        self,
        list_id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredResult[Post]:
        page = await self._pipeline.fetch(
            ResourceKind.LIST_TWEETS,
            RequestArgs(id=list_id, count=count, cursor=cursor),
        )
        return newest_first(page)

    async def favoriters(
        self,
        post_id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredResult[Account]:
        page = await self._pipeline.fetch(
            ResourceKind.TWEET_FAVORITERS,
            RequestArgs(id=post_id, count=count, cursor=cursor),
        )
        return accounts_page(page)

    async def retweeters(
        self,
        post_id: str,
        count: int | None = None,
        cursor: str | None = None,
    ) -> CursoredResult[Account]:
        page = await self._pipeline.fetch(
            ResourceKind.TWEET_RETWEETERS,
            RequestArgs(id=post_id, count=count, cursor=cursor),
        )
        return accounts_page(page)

    async def tweet(self, text: str) -> bool:
        return await self._pipeline.post(ResourceKind.CREATE_TWEET, RequestArgs(text=text))

    async def favorite(self, post_id: str) -> bool:
        return await self._pipeline.post(ResourceKind.FAVORITE_TWEET, RequestArgs(id=post_id))

    async def retweet(self, post_id: str) -> bool:
        return await self._pipeline.post(ResourceKind.CREATE_RETWEET, RequestArgs(id=post_id))
