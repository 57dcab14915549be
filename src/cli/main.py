"""xtract CLI.

Thin layer over `XtractClient`: parses options, runs one async call per
command and renders the result (Rich tables, or JSON with `--json`).
"""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from pydantic import BaseModel
from rich.console import Console

from adapters.json_exporter import export_json
from cli import doctor
from cli.ui_components import (
    build_account_panel,
    build_accounts_table,
    build_post_panel,
    build_posts_table,
    print_cursor,
)
from core.config import AppSettings
from core.domain.models import Account, CursoredResult, Post, PostFilter
from core.errors import XtractError
from core.logging import configure_logging
from core.services.client import XtractClient

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Client for the platform's private GraphQL API.")
tweet_app = typer.Typer(no_args_is_help=True, help="Post resources.")
user_app = typer.Typer(no_args_is_help=True, help="Account resources.")
app.add_typer(tweet_app, name="tweet")
app.add_typer(user_app, name="user")
app.add_typer(doctor.app, name="doctor")

_console = Console()

JsonOption = typer.Option(False, "--json", help="Print raw JSON instead of tables.")
OutputOption = typer.Option(None, "--output", "-o", help="Also write the result to a JSON file.")
CountOption = typer.Option(None, "--count", "-n", min=1, help="Items per page.")
CursorOption = typer.Option(None, "--cursor", "-c", help="Cursor of the page to fetch.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Emit structured log events."),
    log_json: bool = typer.Option(False, "--log-json", help="Render log events as JSON lines."),
) -> None:
    settings = AppSettings()
    if verbose or log_json:
        settings = settings.model_copy(update={"logging": True, "log_json": log_json or settings.log_json})
    if settings.logging:
        configure_logging(settings.log_level, json_output=settings.log_json)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> AppSettings:
    return ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()


def _call(ctx: typer.Context, action: Callable[[XtractClient], Awaitable[T]]) -> T:
    settings = _settings(ctx)

    async def runner() -> T:
        async with XtractClient(settings) as client:
            return await action(client)

    try:
        return asyncio.run(runner())
    except (XtractError, ValueError) as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _parse_date(value: str | None, option: str) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        _console.print(f"[red]Error:[/red] {option} expects a YYYY-MM-DD date, got {value!r}")
        raise typer.Exit(code=1) from exc


def _emit(result: BaseModel | None, *, as_json: bool, output: Path | None, render: Callable[[Any], None]) -> None:
    if result is None:
        _console.print("[yellow]Nothing found.[/yellow]")
        raise typer.Exit(code=1)
    if output is not None:
        path = export_json(data=result, output_path=output)
        _console.print(f"[green]Saved to:[/green] {path}", highlight=False)
    if as_json:
        _console.print_json(result.model_dump_json())
        return
    render(result)


def _render_posts(title: str) -> Callable[[CursoredResult[Post]], None]:
    def render(page: CursoredResult[Post]) -> None:
        _console.print(build_posts_table(page.items, title=title))
        print_cursor(_console, page.next)

    return render


def _render_accounts(title: str) -> Callable[[CursoredResult[Account]], None]:
    def render(page: CursoredResult[Account]) -> None:
        _console.print(build_accounts_table(page.items, title=title))
        print_cursor(_console, page.next)

    return render


def _render_post(post: Post) -> None:
    _console.print(build_post_panel(post))


def _render_account(account: Account) -> None:
    _console.print(build_account_panel(account))


def _report_mutation(ok: bool, label: str) -> None:
    if ok:
        _console.print(f"[green]{label}[/green]")


# Posts


@tweet_app.command("details")
def tweet_details(
    ctx: typer.Context,
    post_id: str = typer.Argument(..., help="Id of the post."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Details of a single post."""

    post = _call(ctx, lambda c: c.tweet.details(post_id))
    _emit(post, as_json=as_json, output=output, render=_render_post)


@tweet_app.command("search")
def tweet_search(
    ctx: typer.Context,
    words: Optional[list[str]] = typer.Argument(None, help="Words that must all appear."),
    from_users: Optional[list[str]] = typer.Option(None, "--from", help="Author handle (repeatable)."),
    to_users: Optional[list[str]] = typer.Option(None, "--to", help="Reply target handle (repeatable)."),
    hashtags: Optional[list[str]] = typer.Option(None, "--hashtag", help="Hashtag (repeatable)."),
    phrase: Optional[str] = typer.Option(None, "--phrase", help="Exact phrase."),
    language: Optional[str] = typer.Option(None, "--lang", help="Language code."),
    since: Optional[str] = typer.Option(None, "--since", help="Start date (YYYY-MM-DD)."),
    until: Optional[str] = typer.Option(None, "--until", help="End date (YYYY-MM-DD)."),
    no_replies: bool = typer.Option(False, "--no-replies", help="Exclude replies."),
    count: Optional[int] = CountOption,
    cursor: Optional[str] = CursorOption,
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Search posts, newest first."""

    query = PostFilter(
        words=words or [],
        from_users=from_users or [],
        to_users=to_users or [],
        hashtags=hashtags or [],
        phrase=phrase,
        language=language,
        start_date=_parse_date(since, "--since"),
        end_date=_parse_date(until, "--until"),
        replies=not no_replies,
    )
    if not query.to_query():
        raise typer.BadParameter("give at least one search criterion")

    page = _call(ctx, lambda c: c.tweet.search(query, count, cursor))
    _emit(page, as_json=as_json, output=output, render=_render_posts("Search"))


@tweet_app.command("list")
def tweet_list(
    ctx: typer.Context,
    list_id: str = typer.Argument(..., help="Id of the list."),
    count: Optional[int] = CountOption,
    cursor: Optional[str] = CursorOption,
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Posts of a list, newest first."""

    page = _call(ctx, lambda c: c.tweet.list(list_id, count, cursor))
    _emit(page, as_json=as_json, output=output, render=_render_posts("List"))


@tweet_app.command("favoriters")
def tweet_favoriters(
    ctx: typer.Context,
    post_id: str = typer.Argument(..., help="Id of the post."),
    count: Optional[int] = CountOption,
    cursor: Optional[str] = CursorOption,
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Accounts that liked a post."""

    page = _call(ctx, lambda c: c.tweet.favoriters(post_id, count, cursor))
    _emit(page, as_json=as_json, output=output, render=_render_accounts("Favoriters"))


@tweet_app.command("retweeters")
def tweet_retweeters(
    ctx: typer.Context,
    post_id: str = typer.Argument(..., help="Id of the post."),
    count: Optional[int] = CountOption,
    cursor: Optional[str] = CursorOption,
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Accounts that reposted a post."""

    page = _call(ctx, lambda c: c.tweet.retweeters(post_id, count, cursor))
    _emit(page, as_json=as_json, output=output, render=_render_accounts("Reposters"))


@tweet_app.command("post")
def tweet_post(ctx: typer.Context, text: str = typer.Argument(..., help="Text to publish.")) -> None:
    """Publish a post (requires an API key)."""

    _report_mutation(_call(ctx, lambda c: c.tweet.tweet(text)), "Posted.")


@tweet_app.command("like")
def tweet_like(ctx: typer.Context, post_id: str = typer.Argument(..., help="Id of the post.")) -> None:
    """Like a post (requires an API key)."""

    _report_mutation(_call(ctx, lambda c: c.tweet.favorite(post_id)), "Liked.")


@tweet_app.command("retweet")
def tweet_retweet(ctx: typer.Context, post_id: str = typer.Argument(..., help="Id of the post.")) -> None:
    """Repost a post (requires an API key)."""

    _report_mutation(_call(ctx, lambda c: c.tweet.retweet(post_id)), "Reposted.")


# Accounts


@user_app.command("details")
def user_details(
    ctx: typer.Context,
    username: str = typer.Argument(..., help="Handle, with or without '@'."),
    by_id: bool = typer.Option(False, "--id", help="Treat the argument as a numeric account id."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Profile of an account."""

    if by_id:
        account = _call(ctx, lambda c: c.user.details_by_id(username))
    else:
        account = _call(ctx, lambda c: c.user.details(username))
    _emit(account, as_json=as_json, output=output, render=_render_account)


_USER_PAGES: dict[str, tuple[str, bool]] = {
    "timeline": ("Posts of an account's primary timeline.", True),
    "replies": ("Posts and replies of an account (requires an API key).", True),
    "likes": ("Posts liked by an account (requires an API key).", True),
    "followers": ("Followers of an account (requires an API key).", False),
    "following": ("Accounts followed by an account (requires an API key).", False),
}


def _register_user_page(name: str, help_text: str, posts: bool) -> None:
    def command(
        ctx: typer.Context,
        user_id: str = typer.Argument(..., help="Numeric account id."),
        count: Optional[int] = CountOption,
        cursor: Optional[str] = CursorOption,
        as_json: bool = JsonOption,
        output: Optional[Path] = OutputOption,
    ) -> None:
        page = _call(ctx, lambda c: getattr(c.user, name)(user_id, count, cursor))
        render = _render_posts(name.title()) if posts else _render_accounts(name.title())
        _emit(page, as_json=as_json, output=output, render=render)

    command.__doc__ = help_text
    user_app.command(name)(command)


for _name, (_help, _posts) in _USER_PAGES.items():
    _register_user_page(_name, _help, _posts)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
