"""Fragment -> domain entity deserialization.

Policy: fragments that fail their shape check are skipped, never raised.
Partial entities embedded by the platform are common, and a single broken
fragment must not cost the whole page.

Shape checks:
- Post: `__typename == "Tweet"` and a non-empty `rest_id`.
- Account: `__typename == "User"`, a non-empty `rest_id` and a non-empty `id`
  (the platform's ID namespace is split in two; both halves are required).

The builders below are pure mappings: absent optional attributes become
empty/default values.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from core.domain.models import Account, Entity, Post
from core.interfaces.collaborators import EventLogger
from core.json_filter import get_path
from core.logging import LogAction, LogService

_PLATFORM_DATE_FORMAT = "%a %b %d %H:%M:%S %z %Y"


def is_post_fragment(fragment: Any) -> bool:
    return (
        isinstance(fragment, dict)
        and fragment.get("__typename") == "Tweet"
        and bool(fragment.get("rest_id"))
    )


def is_account_fragment(fragment: Any) -> bool:
    return (
        isinstance(fragment, dict)
        and fragment.get("__typename") == "User"
        and bool(fragment.get("rest_id"))
        and bool(fragment.get("id"))
    )


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _parse_date(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.strptime(value, _PLATFORM_DATE_FORMAT)
    except ValueError:
        return None


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _dicts(value: Any) -> list[dict[str, Any]]:
    return [item for item in _list(value) if isinstance(item, dict)]


def _unwrap_result(container: Any) -> Any:
    result = get_path(container, "result")
    if isinstance(result, dict) and result.get("__typename") == "TweetWithVisibilityResults":
        return result.get("tweet")
    return result


def build_account(fragment: dict[str, Any]) -> Account:
    legacy = fragment.get("legacy") if isinstance(fragment.get("legacy"), dict) else {}
    # Newer payloads moved some profile fields out of `legacy`.
    core = fragment.get("core") if isinstance(fragment.get("core"), dict) else {}

    return Account(
        id=str(fragment["rest_id"]),
        node_id=str(fragment["id"]),
        username=_as_str(legacy.get("screen_name") or core.get("screen_name")),
        display_name=_as_str(legacy.get("name") or core.get("name")),
        created_at=_parse_date(legacy.get("created_at") or core.get("created_at")),
        description=_as_str(legacy.get("description")),
        location=_as_str(legacy.get("location") or get_path(fragment, "location", "location")),
        is_verified=bool(legacy.get("verified") or fragment.get("is_blue_verified")),
        followers_count=_as_int(legacy.get("followers_count")),
        following_count=_as_int(legacy.get("friends_count")),
        posts_count=_as_int(legacy.get("statuses_count")),
        likes_count=_as_int(legacy.get("favourites_count")),
        pinned_post_ids=[str(i) for i in _list(legacy.get("pinned_tweet_ids_str")) if i],
        profile_image_url=_as_optional_str(
            legacy.get("profile_image_url_https") or get_path(fragment, "avatar", "image_url")
        ),
        profile_banner_url=_as_optional_str(legacy.get("profile_banner_url")),
    )


def _post_text(fragment: dict[str, Any], legacy: dict[str, Any]) -> str:
    note = get_path(fragment, "note_tweet", "note_tweet_results", "result", "text")
    if isinstance(note, str) and note:
        return note
    return _as_str(legacy.get("full_text") or fragment.get("text"))


def build_post(fragment: dict[str, Any]) -> Post:
    legacy = fragment.get("legacy") if isinstance(fragment.get("legacy"), dict) else {}
    entities = legacy.get("entities") if isinstance(legacy.get("entities"), dict) else {}
    extended = legacy.get("extended_entities") if isinstance(legacy.get("extended_entities"), dict) else {}

    author_fragment = _unwrap_result(get_path(fragment, "core", "user_results"))
    author = build_account(author_fragment) if is_account_fragment(author_fragment) else None

    retweeted_fragment = _unwrap_result(legacy.get("retweeted_status_result"))
    retweeted = build_post(retweeted_fragment) if is_post_fragment(retweeted_fragment) else None

    media_items = _dicts(extended.get("media")) or _dicts(entities.get("media"))

    return Post(
        id=str(fragment["rest_id"]),
        author=author,
        created_at=_parse_date(legacy.get("created_at")),
        text=_post_text(fragment, legacy),
        lang=_as_optional_str(legacy.get("lang")),
        conversation_id=_as_optional_str(legacy.get("conversation_id_str")),
        reply_to_id=_as_optional_str(legacy.get("in_reply_to_status_id_str")),
        quoted_id=_as_optional_str(legacy.get("quoted_status_id_str")),
        retweeted=retweeted,
        hashtags=[_as_str(h.get("text")) for h in _dicts(entities.get("hashtags")) if h.get("text")],
        mentions=[
            _as_str(m.get("screen_name")) for m in _dicts(entities.get("user_mentions")) if m.get("screen_name")
        ],
        urls=[_as_str(u.get("expanded_url")) for u in _dicts(entities.get("urls")) if u.get("expanded_url")],
        media=[_as_str(m.get("media_url_https")) for m in media_items if m.get("media_url_https")],
        quote_count=_as_int(legacy.get("quote_count")),
        reply_count=_as_int(legacy.get("reply_count")),
        retweet_count=_as_int(legacy.get("retweet_count")),
        like_count=_as_int(legacy.get("favorite_count")),
        bookmark_count=_as_int(legacy.get("bookmark_count")),
        view_count=_as_int(get_path(fragment, "views", "count")),
    )


class EntityDeserializer:
    """Turns extracted fragments into domain entities, dropping malformed ones."""

    def __init__(self, logger: EventLogger | None = None) -> None:
        self._logger = logger or LogService()

    def deserialize(self, fragments: Iterable[Any]) -> list[Entity]:
        entities: list[Entity] = []
        for fragment in fragments:
            if is_post_fragment(fragment):
                self._logger.log(LogAction.DESERIALIZE, type="Tweet", id=fragment["rest_id"])
                entities.append(build_post(fragment))
            elif is_account_fragment(fragment):
                self._logger.log(LogAction.DESERIALIZE, type="User", id=fragment["rest_id"])
                entities.append(build_account(fragment))
        return entities
