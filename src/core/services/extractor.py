"""Resource extraction: raw fragments and cursor out of a response tree.

Each resource kind maps to one rule:
- the discriminator filters that locate its entity fragments,
- an optional projection that unwraps container fragments
  (e.g. `TimelineTweet -> tweet_results.result`),
- whether it yields a single entity, a collection, or nothing (mutations).

The cursor is extracted the same way for every collection: the `value` of the
first `cursorType == "Bottom"` marker in traversal order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from core.domain.resources import ResourceKind
from core.errors import UnsupportedResourceError
from core.json_filter import JSONValue, find_by_filter, find_first_by_filter, get_path

Projection = Callable[[dict[str, Any]], Any]


class Shape(str, Enum):
    SINGLE = "single"
    COLLECTION = "collection"
    MUTATION = "mutation"


@dataclass(frozen=True)
class Filter:
    key: str
    value: str


@dataclass(frozen=True)
class ExtractionRule:
    shape: Shape
    filters: tuple[Filter, ...] = ()
    projection: Projection | None = None


@dataclass
class Extraction:
    fragments: list[Any] = field(default_factory=list)
    next: str = ""


CURSOR_FILTER = Filter("cursorType", "Bottom")


def _unwrap_visibility(result: Any) -> Any:
    # Posts with visibility results nest the real post one level down.
    if isinstance(result, dict) and result.get("__typename") == "TweetWithVisibilityResults":
        return result.get("tweet")
    return result


def _timeline_tweet(fragment: dict[str, Any]) -> Any:
    return _unwrap_visibility(get_path(fragment, "tweet_results", "result"))


def _timeline_user(fragment: dict[str, Any]) -> Any:
    return get_path(fragment, "user_results", "result")


_TWEET = Filter("__typename", "Tweet")
_USER = Filter("__typename", "User")
_TIMELINE_TWEET = Filter("__typename", "TimelineTweet")
_TIMELINE_USER = Filter("__typename", "TimelineUser")

_TWEET_COLLECTION = ExtractionRule(Shape.COLLECTION, (_TIMELINE_TWEET,), _timeline_tweet)
_USER_COLLECTION = ExtractionRule(Shape.COLLECTION, (_TIMELINE_USER,), _timeline_user)
_MUTATION = ExtractionRule(Shape.MUTATION)

EXTRACTION_RULES: dict[ResourceKind, ExtractionRule] = {
    ResourceKind.TWEET_DETAILS: ExtractionRule(Shape.SINGLE, (_TWEET,)),
    ResourceKind.USER_DETAILS: ExtractionRule(Shape.SINGLE, (_USER,)),
    ResourceKind.USER_DETAILS_BY_ID: ExtractionRule(Shape.SINGLE, (_USER,)),
    ResourceKind.TWEET_SEARCH: _TWEET_COLLECTION,
    ResourceKind.LIST_TWEETS: _TWEET_COLLECTION,
    ResourceKind.USER_TWEETS: _TWEET_COLLECTION,
    ResourceKind.USER_TWEETS_AND_REPLIES: _TWEET_COLLECTION,
    ResourceKind.USER_LIKES: _TWEET_COLLECTION,
    ResourceKind.TWEET_FAVORITERS: _USER_COLLECTION,
    ResourceKind.TWEET_RETWEETERS: _USER_COLLECTION,
    ResourceKind.USER_FOLLOWERS: _USER_COLLECTION,
    ResourceKind.USER_FOLLOWING: _USER_COLLECTION,
    ResourceKind.CREATE_TWEET: _MUTATION,
    ResourceKind.FAVORITE_TWEET: _MUTATION,
    ResourceKind.CREATE_RETWEET: _MUTATION,
}

_missing = set(ResourceKind) - set(EXTRACTION_RULES)
if _missing:  # pragma: no cover
    raise UnsupportedResourceError(f"No extraction rule for: {sorted(k.value for k in _missing)}")


def get_rule(kind: ResourceKind) -> ExtractionRule:
    try:
        return EXTRACTION_RULES[kind]
    except KeyError:
        raise UnsupportedResourceError(f"No extraction rule for resource kind {kind!r}") from None


def extract_cursor(body: JSONValue) -> str:
    """Value of the first bottom cursor marker, '' when there is none."""

    marker = find_first_by_filter(body, CURSOR_FILTER.key, CURSOR_FILTER.value)
    if marker is None:
        return ""
    value = marker.get("value")
    return value if isinstance(value, str) else ""


def extract(body: JSONValue, kind: ResourceKind) -> Extraction:
    """Pull the raw fragments of `kind` and the next-page cursor out of `body`."""

    rule = get_rule(kind)

    fragments: list[Any] = []
    for flt in rule.filters:
        matches = find_by_filter(body, flt.key, flt.value)
        if rule.projection is not None:
            projected = (rule.projection(match) for match in matches)
            fragments.extend(p for p in projected if p is not None)
        else:
            fragments.extend(matches)

    if rule.shape is not Shape.COLLECTION:
        return Extraction(fragments=fragments, next="")

    return Extraction(fragments=fragments, next=extract_cursor(body))
