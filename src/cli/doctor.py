"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.auth import AuthCredential, AuthProvider, encode_api_key
from adapters.http_client import build_async_client
from cli.ui_components import print_banner
from core.config import AppSettings, write_user_env_vars
from core.domain.resources import CredentialLevel
from core.errors import TransportError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.base_url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


async def _check_guest_token(settings: AppSettings) -> tuple[bool, str]:
    try:
        await AuthProvider(settings).guest_credential()
        return True, "Guest token acquired"
    except TransportError as exc:
        return False, str(exc)


def _check_api_key(settings: AppSettings) -> tuple[str, str]:
    if not settings.api_key:
        return "OPTIONAL", "No API key -> guest level (details and user timelines only)"
    try:
        AuthCredential.from_api_key(settings.api_key)
    except ValueError as exc:
        return "FAIL", str(exc)
    return "OK", "User level"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="xtract doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    status, detail = _check_api_key(settings)
    table.add_row("API key", status, detail)
    table.add_row("Credential level", "OK", CredentialLevel.from_api_key(settings.api_key).value)
    table.add_row("Proxy", "OK" if settings.proxy_url else "NONE", settings.proxy_url or "-")
    table.add_row(
        "Timeout",
        "OK",
        f"{settings.http_timeout_seconds}s" if settings.http_timeout_seconds else "platform default",
    )

    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    if not settings.api_key:
        ok_guest, detail_guest = asyncio.run(_check_guest_token(settings))
        table.add_row("Guest token", "OK" if ok_guest else "FAIL", detail_guest)

    _console.print(table)


@app.command(name="set-key")
def set_key() -> None:
    """Store an API key in the user config .env (no manual editing)."""

    cookie = typer.prompt("Cookie string (auth_token=...;ct0=...)", hide_input=True).strip()
    if "ct0=" not in cookie or "auth_token=" not in cookie:
        raise typer.BadParameter("the cookie string needs both auth_token and ct0")

    env_path = write_user_env_vars({"XTRACT_API_KEY": encode_api_key(cookie)})
    _console.print(f"[green]Saved API key to:[/green] {env_path}")
