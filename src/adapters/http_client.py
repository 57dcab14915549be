"""httpx wrapper.

Why a wrapper:
- Standardises timeouts, headers and proxy policy for every request.
- Makes testing easy: a `transport=` (e.g. `httpx.MockTransport`) can be
  injected without touching the callers.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_timeout(settings: AppSettings) -> httpx.Timeout:
    # 0 means "no client-side timeout": the platform's own timeout applies.
    seconds = settings.http_timeout_seconds
    return httpx.Timeout(seconds if seconds > 0 else None)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the application defaults.

    Why a builder:
    - Centralises timeouts/headers/proxy so every adapter behaves the same.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Accept-Language": "en",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=build_timeout(settings),
        follow_redirects=True,
        headers=headers,
        proxy=settings.proxy_url or None,
        transport=transport,
    )
