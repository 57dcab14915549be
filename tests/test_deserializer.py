from __future__ import annotations

from datetime import datetime, timezone

from conftest import raw_tweet, raw_user
from core.domain.models import Account, Post
from core.services.deserializer import (
    EntityDeserializer,
    build_account,
    build_post,
    is_account_fragment,
    is_post_fragment,
)


class TestShapeChecks:
    def test_post_needs_typename_and_rest_id(self):
        assert is_post_fragment({"__typename": "Tweet", "rest_id": "1"})
        assert not is_post_fragment({"__typename": "Tweet"})
        assert not is_post_fragment({"__typename": "Tweet", "rest_id": ""})
        assert not is_post_fragment({"__typename": "User", "rest_id": "1"})
        assert not is_post_fragment(None)

    def test_account_needs_both_ids(self):
        assert is_account_fragment(raw_user("1"))
        assert not is_account_fragment(raw_user("1", node_id=None))
        assert not is_account_fragment({"__typename": "User", "id": "VXNlcjox"})
        assert not is_account_fragment(["User"])


class TestEntityDeserializer:
    def test_malformed_fragments_are_dropped(self):
        fragments = [
            raw_user("1", node_id=None),
            raw_user("2", screen_name="kept"),
            {"__typename": "Tweet"},
            None,
            "garbage",
            {"__typename": "TimelineTimelineCursor", "value": "x"},
        ]

        entities = EntityDeserializer().deserialize(fragments)

        assert len(entities) == 1
        assert isinstance(entities[0], Account)
        assert entities[0].id == "2"
        assert entities[0].username == "kept"

    def test_order_is_preserved(self):
        fragments = [raw_tweet("1"), raw_user("9"), raw_tweet("2")]

        entities = EntityDeserializer().deserialize(fragments)

        assert [type(e) for e in entities] == [Post, Account, Post]
        assert [e.id for e in entities] == ["1", "9", "2"]

    def test_logs_each_entity(self):
        events = []

        class Recorder:
            def log(self, action, **details):
                events.append((action.value, details))

        EntityDeserializer(Recorder()).deserialize([raw_tweet("1"), raw_user("2")])  # type: ignore[arg-type]

        assert events == [("deserialize", {"type": "Tweet", "id": "1"}), ("deserialize", {"type": "User", "id": "2"})]


class TestBuildAccount:
    def test_maps_legacy_fields(self):
        fragment = raw_user("44196397", screen_name="someone")
        fragment["legacy"].update(
            description="bio",
            location="Mars",
            statuses_count="12",
            favourites_count=7,
            pinned_tweet_ids_str=["100"],
            profile_image_url_https="https://img.test/a.jpg",
        )
        fragment["is_blue_verified"] = True

        account = build_account(fragment)

        assert account.id == "44196397"
        assert account.node_id == "VXNlcjox"
        assert account.display_name == "Someone"
        assert account.created_at == datetime(2018, 10, 10, 20, 19, 24, tzinfo=timezone.utc)
        assert account.description == "bio"
        assert account.location == "Mars"
        assert account.is_verified is True
        assert account.followers_count == 10
        assert account.following_count == 5
        assert account.posts_count == 12
        assert account.likes_count == 7
        assert account.pinned_post_ids == ["100"]
        assert account.profile_image_url == "https://img.test/a.jpg"

    def test_missing_optional_attributes_default(self):
        account = build_account({"__typename": "User", "rest_id": "1", "id": "x"})

        assert account.username == ""
        assert account.created_at is None
        assert account.followers_count == 0
        assert account.profile_banner_url is None


class TestBuildPost:
    def test_top_level_text_fallback(self):
        post = build_post({"__typename": "Tweet", "rest_id": "123", "text": "hi"})

        assert post.id == "123"
        assert post.text == "hi"
        assert post.author is None
        assert post.created_at is None

    def test_maps_author_entities_and_counts(self):
        fragment = raw_tweet("5", text="see #py @bob", created_at="Mon Jan 01 10:00:00 +0000 2024", author=raw_user("9"))
        fragment["legacy"]["entities"] = {
            "hashtags": [{"text": "py"}],
            "user_mentions": [{"screen_name": "bob"}],
            "urls": [{"expanded_url": "https://example.test"}],
            "media": [{"media_url_https": "https://img.test/1.jpg"}],
        }
        fragment["legacy"]["lang"] = "en"
        fragment["legacy"]["reply_count"] = 2
        fragment["views"] = {"count": "1500"}

        post = build_post(fragment)

        assert post.author is not None and post.author.id == "9"
        assert post.created_at == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        assert post.text == "see #py @bob"
        assert post.lang == "en"
        assert post.hashtags == ["py"]
        assert post.mentions == ["bob"]
        assert post.urls == ["https://example.test"]
        assert post.media == ["https://img.test/1.jpg"]
        assert post.like_count == 3
        assert post.reply_count == 2
        assert post.view_count == 1500

    def test_author_without_node_id_is_dropped(self):
        post = build_post(raw_tweet("5", author=raw_user("9", node_id=None)))
        assert post.author is None

    def test_retweet_and_long_text(self):
        original = raw_tweet("1", text="original")
        fragment = raw_tweet("2", text="RT short")
        fragment["legacy"]["retweeted_status_result"] = {
            "result": {"__typename": "TweetWithVisibilityResults", "tweet": original}
        }
        fragment["note_tweet"] = {"note_tweet_results": {"result": {"text": "the long version"}}}

        post = build_post(fragment)

        assert post.text == "the long version"
        assert post.retweeted is not None
        assert post.retweeted.id == "1"
        assert post.retweeted.text == "original"

    def test_unparseable_values_fall_back(self):
        fragment = raw_tweet("3", created_at="yesterday")
        fragment["legacy"]["favorite_count"] = "many"

        post = build_post(fragment)

        assert post.created_at is None
        assert post.like_count == 0
