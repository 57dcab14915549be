"""Credentials for the private API.

Two ways to authenticate:
- User level: an API key, i.e. the base64 encoding of a logged-in session's
  cookie string (`auth_token=...;ct0=...;...`).
- Guest level: a guest token, either supplied or acquired from the guest
  activation endpoint.

Both produce the same thing for the transport: a set of request headers.
"""

from __future__ import annotations

import base64
import binascii

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.errors import TransportError

# Public bearer token of the platform's own web client.
WEB_BEARER_TOKEN = (
    "AAAAAAAAAAAAAAAAAAAAANRILgAAAAAAnNwIzUejRCOuH5E6I8xnZz4puTs"
    "%3D1Zv7ttfk8LF81IUq16cHjhLTvJu4FA33AGWWjCpTnA"
)


def decode_api_key(api_key: str) -> str:
    """Decode a base64 API key into its cookie string."""

    try:
        return base64.b64decode(api_key.strip(), validate=True).decode("ascii")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValueError("API key is not a valid base64 encoded cookie string") from exc


def encode_api_key(cookie: str) -> str:
    return base64.b64encode(cookie.encode("ascii")).decode("ascii")


def _parse_cookies(cookie: str) -> dict[str, str]:
    cookies: dict[str, str] = {}
    for part in cookie.split(";"):
        name, sep, value = part.strip().partition("=")
        if sep and name:
            cookies[name.strip()] = value.strip()
    return cookies


class AuthCredential:
    """Header factory for one credential (user cookies or guest token)."""

    def __init__(self, *, cookies: dict[str, str] | None = None, guest_token: str | None = None) -> None:
        if not cookies and not guest_token:
            raise ValueError("A credential needs either cookies or a guest token")
        self._cookies = dict(cookies or {})
        self._guest_token = guest_token

    @classmethod
    def from_api_key(cls, api_key: str) -> "AuthCredential":
        cookies = _parse_cookies(decode_api_key(api_key))
        if "ct0" not in cookies:
            raise ValueError("API key cookie string lacks the 'ct0' (csrf) cookie")
        return cls(cookies=cookies)

    @classmethod
    def from_guest_token(cls, guest_token: str) -> "AuthCredential":
        return cls(guest_token=guest_token.strip())

    @property
    def is_guest(self) -> bool:
        return not self._cookies

    @property
    def guest_token(self) -> str | None:
        return self._guest_token

    def to_headers(self) -> dict[str, str]:
        headers = {
            "authorization": f"Bearer {WEB_BEARER_TOKEN}",
            "x-twitter-active-user": "yes",
            "x-twitter-client-language": "en",
        }
        if self._cookies:
            headers["cookie"] = "; ".join(f"{k}={v}" for k, v in self._cookies.items())
            headers["x-csrf-token"] = self._cookies["ct0"]
            headers["x-twitter-auth-type"] = "OAuth2Session"
        if self._guest_token:
            headers["x-guest-token"] = self._guest_token
        return headers


class AuthProvider:
    """Acquires guest credentials from the platform."""

    def __init__(self, settings: AppSettings | None = None, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    async def guest_credential(self) -> AuthCredential:
        headers = {"authorization": f"Bearer {WEB_BEARER_TOKEN}"}
        url = self._settings.guest_activation_url
        try:
            if self._client is not None:
                response = await self._client.post(url, headers=headers)
            else:
                async with build_async_client(self._settings) as client:
                    response = await client.post(url, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"Guest token request failed with HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(f"Guest token request failed: {exc}") from exc

        token = payload.get("guest_token") if isinstance(payload, dict) else None
        if not token:
            raise TransportError("Guest token missing from activation response", payload=payload)
        return AuthCredential.from_guest_token(str(token))


def build_initial_credential(settings: AppSettings) -> AuthCredential | None:
    """Credential from configuration, or None to acquire a guest one lazily."""

    if settings.api_key:
        return AuthCredential.from_api_key(settings.api_key)
    if settings.guest_key:
        return AuthCredential.from_guest_token(settings.guest_key)
    return None
