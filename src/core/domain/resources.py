"""Resource kinds and credential levels.

Why in the domain layer:
- Both the request builder (adapters) and the extraction table (core) key
  their behaviour on the same enumeration.
- Keeping it here avoids circular imports between services and adapters.
"""

from __future__ import annotations

from enum import Enum


class ResourceKind(str, Enum):
    """Every resource the client knows how to request."""

    TWEET_DETAILS = "tweet_details"
    TWEET_SEARCH = "tweet_search"
    LIST_TWEETS = "list_tweets"
    TWEET_FAVORITERS = "tweet_favoriters"
    TWEET_RETWEETERS = "tweet_retweeters"
    USER_DETAILS = "user_details"
    USER_DETAILS_BY_ID = "user_details_by_id"
    USER_TWEETS = "user_tweets"
    USER_TWEETS_AND_REPLIES = "user_tweets_and_replies"
    USER_LIKES = "user_likes"
    USER_FOLLOWERS = "user_followers"
    USER_FOLLOWING = "user_following"
    CREATE_TWEET = "create_tweet"
    FAVORITE_TWEET = "favorite_tweet"
    CREATE_RETWEET = "create_retweet"


class CredentialLevel(str, Enum):
    """Access tier of a client, fixed for its whole lifetime."""

    GUEST = "guest"
    USER = "user"

    @classmethod
    def from_api_key(cls, api_key: str | None) -> "CredentialLevel":
        """Derive the level from whether an API key was supplied."""

        return cls.USER if api_key else cls.GUEST


GUEST_ALLOWED: frozenset[ResourceKind] = frozenset(
    {
        ResourceKind.TWEET_DETAILS,
        ResourceKind.USER_DETAILS,
        ResourceKind.USER_DETAILS_BY_ID,
        ResourceKind.USER_TWEETS,
    }
)

MUTATIONS: frozenset[ResourceKind] = frozenset(
    {
        ResourceKind.CREATE_TWEET,
        ResourceKind.FAVORITE_TWEET,
        ResourceKind.CREATE_RETWEET,
    }
)
