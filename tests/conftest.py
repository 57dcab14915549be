"""Shared pytest fixtures and fakes."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from adapters.auth import AuthCredential
from adapters.request_builder import GraphQLRequestBuilder
from core.config import AppSettings
from core.domain.resources import CredentialLevel
from core.interfaces.collaborators import Credential, RequestDescriptor
from core.services.authorization import AuthorizationGate
from core.services.fetch_pipeline import FetchPipeline


def raw_user(rest_id: str, *, screen_name: str = "someone", node_id: str | None = "VXNlcjox") -> dict[str, Any]:
    user: dict[str, Any] = {
        "__typename": "User",
        "rest_id": rest_id,
        "legacy": {
            "screen_name": screen_name,
            "name": screen_name.title(),
            "followers_count": 10,
            "friends_count": 5,
            "created_at": "Wed Oct 10 20:19:24 +0000 2018",
        },
    }
    if node_id is not None:
        user["id"] = node_id
    return user


def raw_tweet(rest_id: str, *, text: str = "hello", created_at: str | None = None, author: dict | None = None) -> dict[str, Any]:
    legacy: dict[str, Any] = {"full_text": text, "favorite_count": 3}
    if created_at:
        legacy["created_at"] = created_at
    tweet: dict[str, Any] = {"__typename": "Tweet", "rest_id": rest_id, "legacy": legacy}
    if author is not None:
        tweet["core"] = {"user_results": {"result": author}}
    return tweet


def timeline_tweet(tweet: dict[str, Any]) -> dict[str, Any]:
    return {
        "entryId": f"tweet-{tweet.get('rest_id')}",
        "content": {
            "itemContent": {
                "__typename": "TimelineTweet",
                "itemType": "TimelineTweet",
                "tweet_results": {"result": tweet},
            }
        },
    }


def timeline_user(user: dict[str, Any]) -> dict[str, Any]:
    return {
        "entryId": f"user-{user.get('rest_id')}",
        "content": {
            "itemContent": {
                "__typename": "TimelineUser",
                "itemType": "TimelineUser",
                "user_results": {"result": user},
            }
        },
    }


def cursor_entry(cursor_type: str, value: str) -> dict[str, Any]:
    return {
        "entryId": f"cursor-{cursor_type.lower()}-0",
        "content": {"__typename": "TimelineTimelineCursor", "cursorType": cursor_type, "value": value},
    }


def timeline_body(entries: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "data": {
            "user": {
                "result": {
                    "timeline_v2": {
                        "timeline": {
                            "instructions": [{"type": "TimelineAddEntries", "entries": entries}],
                        }
                    }
                }
            }
        }
    }


class FakeTransport:
    """Records every call and answers with a canned body (or raises)."""

    def __init__(self, body: Any = None, error: Exception | None = None) -> None:
        self.body = body if body is not None else {}
        self.error = error
        self.calls: list[tuple[RequestDescriptor, Credential]] = []

    async def send(self, request: RequestDescriptor, credential: Credential) -> Any:
        self.calls.append((request, credential))
        if self.error is not None:
            raise self.error
        return self.body


class FakeCredentialProvider:
    """Counts guest acquisitions; yields control so concurrent callers interleave."""

    def __init__(self, fail_times: int = 0) -> None:
        self.calls = 0
        self.fail_times = fail_times

    async def guest_credential(self) -> AuthCredential:
        self.calls += 1
        await asyncio.sleep(0.01)
        if self.calls <= self.fail_times:
            raise RuntimeError("guest activation failed")
        return AuthCredential.from_guest_token(f"guest-{self.calls}")


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, base_url="https://api.test/i/api")


@pytest.fixture
def make_pipeline(settings):
    """Factory building a pipeline around fakes."""

    def _make(
        *,
        transport: FakeTransport | None = None,
        level: CredentialLevel = CredentialLevel.USER,
        credentials: FakeCredentialProvider | None = None,
        credential: Credential | None = None,
    ) -> FetchPipeline:
        return FetchPipeline(
            gate=AuthorizationGate(level),
            request_builder=GraphQLRequestBuilder(settings),
            transport=transport or FakeTransport(),
            credentials=credentials or FakeCredentialProvider(),
            credential=credential,
        )

    return _make
