"""Account-related resources (profile lookups, timelines, social graph)."""

from __future__ import annotations

from core.domain.models import Account, CursoredResult, Post, RequestArgs
from core.domain.resources import ResourceKind
from core.services.fetch_pipeline import FetchPipeline
from core.services.tweet_service import accounts_page, posts_page


class UserService:
    def __init__(self, pipeline: FetchPipeline) -> None:
        self._pipeline = pipeline

    async def details(self, username: str) -> Account | None:
        page = await self._pipeline.fetch(ResourceKind.USER_DETAILS, RequestArgs(id=username.lstrip("@")))
        return accounts_page(page).first()

    async def details_by_id(self, user_id: str) -> Account | None:
        page = await self._pipeline.fetch(ResourceKind.USER_DETAILS_BY_ID, RequestArgs(id=user_id))
        return accounts_page(page).first()

    async def _page(self, kind: ResourceKind, user_id: str, count: int | None, cursor: str | None) -> CursoredResult:
        return await self._pipeline.fetch(kind, RequestArgs(id=user_id, count=count, cursor=cursor))

    async def timeline(self, user_id: str, count: int | None = None, cursor: str | None = None) -> CursoredResult[Post]:
        """Posts of the account's primary timeline (available to guests)."""

        return posts_page(await self._page(ResourceKind.USER_TWEETS, user_id, count, cursor))

    async def replies(self, user_id: str, count: int | None = None, cursor: str | None = None) -> CursoredResult[Post]:
        return posts_page(await self._page(ResourceKind.USER_TWEETS_AND_REPLIES, user_id, count, cursor))

    async def likes(self, user_id: str, count: int | None = None, cursor: str | None = None) -> CursoredResult[Post]:
        return posts_page(await self._page(ResourceKind.USER_LIKES, user_id, count, cursor))

    async def followers(
        self, user_id: str, count: int | None = None, cursor: str | None = None
    ) -> CursoredResult[Account]:
        return accounts_page(await self._page(ResourceKind.USER_FOLLOWERS, user_id, count, cursor))

    async def following(
        self, user_id: str, count: int | None = None, cursor: str | None = None
    ) -> CursoredResult[Account]:
        return accounts_page(await self._page(ResourceKind.USER_FOLLOWING, user_id, count, cursor))
