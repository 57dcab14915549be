"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels are reused by several commands.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Account, Post


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Kept out of the commands so non-interactive modes (JSON) can skip it.
    """

    title = Text("xtract", style="bold cyan")
    subtitle = Text("Posts • Accounts • Cursored pages", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _short(text: str, limit: int = 80) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else flat[: limit - 1] + "…"


def build_posts_table(posts: Iterable[Post], title: str = "Posts") -> Table:
    table = Table(title=title)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Author", style="magenta")
    table.add_column("Created", style="dim")
    table.add_column("Text", style="white")
    table.add_column("Likes", style="green", justify="right")
    table.add_column("Reposts", style="green", justify="right")
    for post in posts:
        table.add_row(
            post.id,
            f"@{post.author.username}" if post.author and post.author.username else "-",
            post.created_at.isoformat() if post.created_at else "-",
            _short(post.text),
            str(post.like_count),
            str(post.retweet_count),
        )
    return table


def build_accounts_table(accounts: Iterable[Account], title: str = "Accounts") -> Table:
    table = Table(title=title)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Username", style="magenta")
    table.add_column("Name", style="white")
    table.add_column("Followers", style="green", justify="right")
    table.add_column("Verified", style="yellow")
    for account in accounts:
        table.add_row(
            account.id,
            f"@{account.username}" if account.username else "-",
            account.display_name or "-",
            str(account.followers_count),
            "yes" if account.is_verified else "no",
        )
    return table


def build_account_panel(account: Account) -> Panel:
    body = Text()
    body.append(f"{account.display_name or account.username}\n", style="bold")
    body.append(f"@{account.username}  (id {account.id})\n", style="dim")
    if account.description:
        body.append(account.description.strip() + "\n")
    if account.location:
        body.append(f"\nLocation: {account.location}")
    body.append(
        f"\nFollowers: {account.followers_count}  Following: {account.following_count}"
        f"  Posts: {account.posts_count}"
    )
    if account.created_at:
        body.append(f"\nJoined: {account.created_at.date().isoformat()}", style="dim")
    return Panel(body, title=Text("Account", style="bold yellow"), border_style="yellow")


def build_post_panel(post: Post) -> Panel:
    body = Text()
    if post.author:
        body.append(f"@{post.author.username}\n", style="bold magenta")
    body.append(post.text.strip() + "\n")
    if post.created_at:
        body.append(f"\n{post.created_at.isoformat()}", style="dim")
    body.append(
        f"\nLikes: {post.like_count}  Reposts: {post.retweet_count}"
        f"  Replies: {post.reply_count}  Views: {post.view_count}"
    )
    return Panel(body, title=Text(f"Post {post.id}", style="bold yellow"), border_style="yellow")


def print_cursor(console: Console, cursor: str) -> None:
    if cursor:
        console.print(f"[dim]Next cursor:[/dim] {cursor}")
    else:
        console.print("[dim]No further pages.[/dim]")
