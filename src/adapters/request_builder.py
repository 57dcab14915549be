"""GraphQL request builder.

Maps `(ResourceKind, RequestArgs)` to a `RequestDescriptor`:
- reads are GET requests carrying JSON-encoded `variables` and `features`,
- mutations are POST requests with a JSON body.

The operation query ids mirror the platform's web client; they rotate from
time to time, so they can be overridden per instance.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from core.config import AppSettings
from core.domain.models import RequestArgs
from core.domain.resources import MUTATIONS, ResourceKind
from core.errors import UnsupportedResourceError
from core.interfaces.collaborators import RequestDescriptor


@dataclass(frozen=True)
class Operation:
    name: str
    query_id: str
    max_count: int | None = None


OPERATIONS: dict[ResourceKind, Operation] = {
    ResourceKind.TWEET_DETAILS: Operation("TweetResultByRestId", "Xl5pC_lBk_gcO2ItU39DQw"),
    ResourceKind.TWEET_SEARCH: Operation("SearchTimeline", "nK1dw4oV3k4w5TdtcAdSww", max_count=20),
    ResourceKind.LIST_TWEETS: Operation("ListLatestTweetsTimeline", "2TemLyqrMpTeAmysdbnVqw", max_count=100),
    ResourceKind.TWEET_FAVORITERS: Operation("Favoriters", "9XKD3EWWC2BKpIFyDtEcRg", max_count=100),
    ResourceKind.TWEET_RETWEETERS: Operation("Retweeters", "0BoJlKAxoNPQUHRftlwZ2w", max_count=100),
    ResourceKind.USER_DETAILS: Operation("UserByScreenName", "G3KGOASz96M-Qu0nwmGXNg"),
    ResourceKind.USER_DETAILS_BY_ID: Operation("UserByRestId", "QdS5LJDl99iL_KUzckdfNQ"),
    ResourceKind.USER_TWEETS: Operation("UserTweets", "V1ze5q3ijDS1VeLwLY0m7g", max_count=20),
    ResourceKind.USER_TWEETS_AND_REPLIES: Operation("UserTweetsAndReplies", "16nOjYqEdV04vN6-rgg8KA", max_count=20),
    ResourceKind.USER_LIKES: Operation("Likes", "eSSNbhECHHWWALkkQq-YTA", max_count=100),
    ResourceKind.USER_FOLLOWERS: Operation("Followers", "3yX7xr2hKjcZYnXt6cU6lQ", max_count=100),
    ResourceKind.USER_FOLLOWING: Operation("Following", "PAnE9toEjRfE-4tozRcsfw", max_count=100),
    ResourceKind.CREATE_TWEET: Operation("CreateTweet", "SoVnbfCycZ7fERGCwpZkYA"),
    ResourceKind.FAVORITE_TWEET: Operation("FavoriteTweet", "lI07N6Otwv1PhnEgXILM7A"),
    ResourceKind.CREATE_RETWEET: Operation("CreateRetweet", "ojPdsZsimiJrUGLR1sjUtA"),
}

FEATURES: dict[str, bool] = {
    "responsive_web_graphql_exclude_directive_enabled": True,
    "verified_phone_label_enabled": False,
    "responsive_web_graphql_timeline_navigation_enabled": True,
    "responsive_web_graphql_skip_user_profile_image_extensions_enabled": False,
    "creator_subscriptions_tweet_preview_api_enabled": True,
    "tweetypie_unmention_optimization_enabled": True,
    "responsive_web_edit_tweet_api_enabled": True,
    "graphql_is_translatable_rweb_tweet_is_translatable_enabled": True,
    "view_counts_everywhere_api_enabled": True,
    "longform_notetweets_consumption_enabled": True,
    "responsive_web_twitter_article_tweet_consumption_enabled": False,
    "tweet_awards_web_tipping_enabled": False,
    "freedom_of_speech_not_reach_fetch_enabled": True,
    "standardized_nudges_misinfo": True,
    "tweet_with_visibility_results_prefer_gql_limited_actions_policy_enabled": True,
    "longform_notetweets_rich_text_read_enabled": True,
    "longform_notetweets_inline_media_enabled": True,
    "responsive_web_media_download_video_enabled": False,
    "responsive_web_enhance_cards_enabled": False,
}

MAX_TWEET_LENGTH = 280


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


class GraphQLRequestBuilder:
    """Builds request descriptors for every supported resource kind."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        query_ids: dict[ResourceKind, str] | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._query_ids = dict(query_ids or {})

    def _operation(self, kind: ResourceKind) -> Operation:
        try:
            return OPERATIONS[kind]
        except KeyError:
            raise UnsupportedResourceError(f"No request operation for resource kind {kind!r}") from None

    def _url(self, operation: Operation, kind: ResourceKind) -> str:
        query_id = self._query_ids.get(kind, operation.query_id)
        return f"{self._settings.base_url.rstrip('/')}/graphql/{query_id}/{operation.name}"

    @staticmethod
    def _require_id(kind: ResourceKind, args: RequestArgs) -> str:
        if not args.id:
            raise ValueError(f"Resource '{kind.value}' requires an id")
        return args.id

    def _count(self, operation: Operation, kind: ResourceKind, args: RequestArgs) -> int:
        limit = operation.max_count or 20
        if args.count is None:
            return limit
        if args.count > limit:
            raise ValueError(f"Resource '{kind.value}' accepts at most {limit} items per page, got {args.count}")
        return args.count

    def variables(self, kind: ResourceKind, args: RequestArgs) -> dict[str, Any]:
        operation = self._operation(kind)

        if kind is ResourceKind.TWEET_DETAILS:
            return {
                "tweetId": self._require_id(kind, args),
                "withCommunity": False,
                "includePromotedContent": False,
                "withVoice": False,
            }
        if kind is ResourceKind.USER_DETAILS:
            return {"screen_name": self._require_id(kind, args), "withSafetyModeUserFields": True}
        if kind is ResourceKind.USER_DETAILS_BY_ID:
            return {"userId": self._require_id(kind, args), "withSafetyModeUserFields": True}
        if kind is ResourceKind.CREATE_TWEET:
            text = (args.text or "").strip()
            if not text:
                raise ValueError("Cannot post an empty text")
            if len(text) > MAX_TWEET_LENGTH:
                raise ValueError(f"Text exceeds {MAX_TWEET_LENGTH} characters")
            return {
                "tweet_text": text,
                "dark_request": False,
                "media": {"media_entities": [], "possibly_sensitive": False},
                "semantic_annotation_ids": [],
            }
        if kind in (ResourceKind.FAVORITE_TWEET, ResourceKind.CREATE_RETWEET):
            return {"tweet_id": self._require_id(kind, args), "dark_request": False}

        variables: dict[str, Any] = {"count": self._count(operation, kind, args)}
        if kind is ResourceKind.TWEET_SEARCH:
            if args.filter is None:
                raise ValueError("Search requires a filter")
            variables.update(rawQuery=args.filter.to_query(), querySource="typed_query", product="Latest")
        elif kind is ResourceKind.LIST_TWEETS:
            variables["listId"] = self._require_id(kind, args)
        elif kind in (ResourceKind.TWEET_FAVORITERS, ResourceKind.TWEET_RETWEETERS):
            variables.update(tweetId=self._require_id(kind, args), includePromotedContent=False)
        else:
            variables.update(
                userId=self._require_id(kind, args),
                includePromotedContent=False,
                withVoice=True,
                withV2Timeline=True,
            )
        if args.cursor:
            variables["cursor"] = args.cursor
        return variables

    def build(self, kind: ResourceKind, args: RequestArgs) -> RequestDescriptor:
        operation = self._operation(kind)
        url = self._url(operation, kind)
        variables = self.variables(kind, args)

        if kind in MUTATIONS:
            return RequestDescriptor(
                method="POST",
                url=url,
                json_body={
                    "variables": variables,
                    "features": FEATURES,
                    "queryId": self._query_ids.get(kind, operation.query_id),
                },
            )

        return RequestDescriptor(
            method="GET",
            url=url,
            params={"variables": _compact(variables), "features": _compact(FEATURES)},
        )
