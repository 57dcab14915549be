from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from typer.testing import CliRunner

from cli import main as cli_main
from core.domain.models import Account, CursoredResult, Post
from core.domain.resources import ResourceKind
from core.errors import AuthorizationError

runner = CliRunner()


class FakeClient:
    """Stands in for XtractClient; every service method is an AsyncMock."""

    instances: list["FakeClient"] = []

    def __init__(self, settings=None) -> None:
        self.settings = settings
        self.tweet = MagicMock()
        self.user = MagicMock()
        self.tweet.details = AsyncMock(return_value=Post(id="1", text="hello"))
        self.tweet.search = AsyncMock(return_value=CursoredResult[Post](items=[Post(id="2")], next="n|"))
        self.tweet.favorite = AsyncMock(return_value=True)
        self.user.details = AsyncMock(return_value=Account(id="7", node_id="x", username="jack"))
        self.user.followers = AsyncMock(return_value=CursoredResult[Account](items=[], next=""))
        FakeClient.instances.append(self)

    async def __aenter__(self) -> "FakeClient":
        return self

    async def __aexit__(self, *exc) -> None:
        return None


@pytest.fixture(autouse=True)
def fake_client(monkeypatch):
    FakeClient.instances = []
    monkeypatch.setattr(cli_main, "XtractClient", FakeClient)
    return FakeClient


def test_tweet_details_json():
    result = runner.invoke(cli_main.app, ["tweet", "details", "1", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["id"] == "1"
    FakeClient.instances[0].tweet.details.assert_awaited_once_with("1")


def test_tweet_search_builds_filter():
    result = runner.invoke(
        cli_main.app,
        ["tweet", "search", "python", "--from", "jack", "--no-replies", "-n", "5", "--json"],
    )

    assert result.exit_code == 0, result.output
    query, count, cursor = FakeClient.instances[0].tweet.search.await_args.args
    assert query.to_query() == "python (from:jack) -filter:replies"
    assert count == 5
    assert cursor is None
    assert json.loads(result.output)["next"] == "n|"


def test_tweet_search_without_criteria_is_rejected():
    result = runner.invoke(cli_main.app, ["tweet", "search"])

    assert result.exit_code != 0
    assert FakeClient.instances == []


def test_like_reports_success():
    result = runner.invoke(cli_main.app, ["tweet", "like", "5"])

    assert result.exit_code == 0
    assert "Liked." in result.output


def test_user_details_and_pages():
    result = runner.invoke(cli_main.app, ["user", "details", "@jack", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["username"] == "jack"

    result = runner.invoke(cli_main.app, ["user", "followers", "42", "--cursor", "c", "--json"])
    assert result.exit_code == 0, result.output
    FakeClient.instances[-1].user.followers.assert_awaited_once_with("42", None, "c")


def test_client_errors_exit_with_code_one(monkeypatch):
    class FailingClient(FakeClient):
        def __init__(self, settings=None) -> None:
            super().__init__(settings)
            self.tweet.details = AsyncMock(side_effect=AuthorizationError(ResourceKind.TWEET_DETAILS))

    monkeypatch.setattr(cli_main, "XtractClient", FailingClient)

    result = runner.invoke(cli_main.app, ["tweet", "details", "1"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_missing_entity_exits_with_code_one(monkeypatch):
    class EmptyClient(FakeClient):
        def __init__(self, settings=None) -> None:
            super().__init__(settings)
            self.user.details = AsyncMock(return_value=None)

    monkeypatch.setattr(cli_main, "XtractClient", EmptyClient)

    result = runner.invoke(cli_main.app, ["user", "details", "nobody"])

    assert result.exit_code == 1
    assert "Nothing found" in result.output


def test_output_writes_file(tmp_path):
    target = tmp_path / "post.json"

    result = runner.invoke(cli_main.app, ["tweet", "details", "1", "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text(encoding="utf-8"))["text"] == "hello"


@pytest.mark.parametrize("option", ["--since", "--until"])
def test_search_with_invalid_date_exits_with_code_one(option):
    result = runner.invoke(cli_main.app, ["tweet", "search", "python", option, "notadate"])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Error:" in result.output
    assert "YYYY-MM-DD" in result.output
    assert FakeClient.instances == []


def test_search_with_dates_builds_range():
    result = runner.invoke(
        cli_main.app, ["tweet", "search", "python", "--since", "2024-01-01", "--until", "2024-02-01", "--json"]
    )

    assert result.exit_code == 0, result.output
    query = FakeClient.instances[0].tweet.search.await_args.args[0]
    assert query.to_query() == "python since:2024-01-01 until:2024-02-01"
