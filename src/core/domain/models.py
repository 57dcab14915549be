"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to any I/O library.
- Entities are frozen: once deserialized from a fragment they never change.

Note:
- These models describe *what* the information is, not *how* it is obtained.
  The mapping from raw platform fragments lives in
  `core.services.deserializer`.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Account(BaseModel):
    """An account (user profile) on the platform."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Stable numeric identifier (`rest_id`).",
    )
    node_id: str = Field(
        ...,
        min_length=1,
        description="Opaque graph identifier (`id`), the second half of the platform's ID namespace.",
    )
    username: str = Field(
        default="",
        description="Handle without the leading '@'.",
    )
    display_name: str = Field(
        default="",
        description="Full display name.",
    )
    created_at: datetime | None = Field(
        default=None,
        description="Account creation time (UTC aware) if available.",
    )
    description: str = Field(
        default="",
        description="Profile bio.",
    )
    location: str = Field(
        default="",
        description="Free-text location from the profile.",
    )
    is_verified: bool = Field(
        default=False,
        description="Whether the account carries any verification badge.",
    )
    followers_count: int = Field(default=0, ge=0)
    following_count: int = Field(default=0, ge=0)
    posts_count: int = Field(default=0, ge=0)
    likes_count: int = Field(default=0, ge=0)
    pinned_post_ids: list[str] = Field(
        default_factory=list,
        description="Ids of posts pinned to the profile.",
    )
    profile_image_url: str | None = None
    profile_banner_url: str | None = None


class Post(BaseModel):
    """A post (tweet) on the platform."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Stable identifier (`rest_id`).",
    )
    author: Account | None = Field(
        default=None,
        description="Author of the post, when the fragment embeds a well-formed account.",
    )
    created_at: datetime | None = Field(
        default=None,
        description="Publication time (UTC aware) if available.",
    )
    text: str = Field(
        default="",
        description="Full text of the post (long-form note text when present).",
    )
    lang: str | None = None
    conversation_id: str | None = None
    reply_to_id: str | None = Field(
        default=None,
        description="Id of the post this one replies to.",
    )
    quoted_id: str | None = Field(
        default=None,
        description="Id of the quoted post.",
    )
    retweeted: Post | None = Field(
        default=None,
        description="The original post when this one is a repost.",
    )
    hashtags: list[str] = Field(default_factory=list)
    mentions: list[str] = Field(
        default_factory=list,
        description="Handles mentioned in the text.",
    )
    urls: list[str] = Field(
        default_factory=list,
        description="Expanded URLs found in the text.",
    )
    media: list[str] = Field(
        default_factory=list,
        description="Media URLs (images, video thumbnails).",
    )
    quote_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    retweet_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    bookmark_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)


Entity = Post | Account

T = TypeVar("T", Post, Account)


class CursoredResult(BaseModel, Generic[T]):
    """One page of entities plus the cursor to the next page.

    `next` is empty when the platform reported no further page. A cursor is
    only meaningful for the same resource kind and arguments that produced it.
    """

    model_config = ConfigDict(frozen=True)

    items: list[T] = Field(default_factory=list)
    next: str = Field(
        default="",
        description="Opaque cursor to the next page ('' when there is none).",
    )

    def first(self) -> T | None:
        return self.items[0] if self.items else None


class PostFilter(BaseModel):
    """Search criteria rendered into the platform's raw query syntax."""

    from_users: list[str] = Field(default_factory=list)
    to_users: list[str] = Field(default_factory=list)
    mentions: list[str] = Field(default_factory=list)
    words: list[str] = Field(
        default_factory=list,
        description="All of these words must appear.",
    )
    phrase: str | None = Field(
        default=None,
        description="This exact phrase must appear.",
    )
    any_words: list[str] = Field(default_factory=list)
    exclude_words: list[str] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)
    language: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    links: bool = Field(
        default=True,
        description="Include posts containing links.",
    )
    replies: bool = Field(
        default=True,
        description="Include replies.",
    )

    def to_query(self) -> str:
        parts: list[str] = []
        if self.words:
            parts.append(" ".join(self.words))
        if self.phrase:
            parts.append(f'"{self.phrase}"')
        if self.any_words:
            parts.append(f"({' OR '.join(self.any_words)})")
        if self.exclude_words:
            parts.append(" ".join(f"-{w}" for w in self.exclude_words))
        if self.hashtags:
            parts.append(f"({' OR '.join('#' + h.lstrip('#') for h in self.hashtags)})")
        if self.from_users:
            parts.append(f"({' OR '.join('from:' + u.lstrip('@') for u in self.from_users)})")
        if self.to_users:
            parts.append(f"({' OR '.join('to:' + u.lstrip('@') for u in self.to_users)})")
        if self.mentions:
            parts.append(f"({' OR '.join('@' + u.lstrip('@') for u in self.mentions)})")
        if self.language:
            parts.append(f"lang:{self.language}")
        if self.start_date:
            parts.append(f"since:{self.start_date.isoformat()}")
        if self.end_date:
            parts.append(f"until:{self.end_date.isoformat()}")
        if not self.links:
            parts.append("-filter:links")
        if not self.replies:
            parts.append("-filter:replies")
        return " ".join(parts)


class RequestArgs(BaseModel):
    """Resource-specific arguments handed to the request builder."""

    id: str | None = Field(
        default=None,
        description="Target id (post, account, list) or username for handle lookups.",
    )
    count: int | None = Field(default=None, ge=1)
    cursor: str | None = None
    filter: PostFilter | None = None
    text: str | None = Field(
        default=None,
        description="Text of a post to publish.",
    )
