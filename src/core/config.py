"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) without leaking into
  the CLI.
- Lets adapters (HTTP, auth) read configuration consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "xtract"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "xtract"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "xtract"
    return Path.home() / ".config" / "xtract"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# xtract user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application configuration.

    Why pydantic-settings:
    - Typed, validated values at the edge (env vars) without polluting the core.
    - A single configuration contract for the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="XTRACT_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="Base64 encoded cookie string of a logged-in session (enables user-level resources).",
    )
    guest_key: str | None = Field(
        default=None,
        description="Guest token to reuse instead of acquiring a fresh one.",
    )
    proxy_url: str | None = Field(
        default=None,
        description="Proxy URL for every request to the platform.",
    )
    http_timeout_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Timeout per request (seconds); 0 leaves it to the platform.",
    )
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
        ),
        min_length=1,
        description="User-Agent sent with every request.",
    )
    base_url: str = Field(
        default="https://x.com/i/api",
        min_length=8,
        description="Base URL of the private API.",
    )
    guest_activation_url: str = Field(
        default="https://api.x.com/1.1/guest/activate.json",
        min_length=8,
        description="Endpoint issuing guest tokens.",
    )

    logging: bool = Field(
        default=False,
        description="Emit structured log events (authorization, fetch, post, deserialize).",
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level when logging is enabled.",
    )
    log_json: bool = Field(
        default=False,
        description="Render log events as JSON instead of console lines.",
    )
