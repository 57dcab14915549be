from __future__ import annotations

import httpx
import pytest

from adapters.auth import (
    WEB_BEARER_TOKEN,
    AuthCredential,
    AuthProvider,
    build_initial_credential,
    decode_api_key,
    encode_api_key,
)
from core.config import AppSettings
from core.errors import TransportError

COOKIE = "auth_token=secret; ct0=csrf123; lang=en"


def test_api_key_round_trip():
    assert decode_api_key(encode_api_key(COOKIE)) == COOKIE


def test_invalid_api_key_is_rejected():
    with pytest.raises(ValueError, match="base64"):
        decode_api_key("not base64!")


def test_api_key_without_csrf_cookie_is_rejected():
    with pytest.raises(ValueError, match="ct0"):
        AuthCredential.from_api_key(encode_api_key("auth_token=secret"))


def test_user_credential_headers():
    headers = AuthCredential.from_api_key(encode_api_key(COOKIE)).to_headers()

    assert headers["authorization"] == f"Bearer {WEB_BEARER_TOKEN}"
    assert headers["x-csrf-token"] == "csrf123"
    assert headers["x-twitter-auth-type"] == "OAuth2Session"
    assert "auth_token=secret" in headers["cookie"]
    assert "x-guest-token" not in headers


def test_guest_credential_headers():
    credential = AuthCredential.from_guest_token(" 1234 ")
    headers = credential.to_headers()

    assert credential.is_guest
    assert headers["x-guest-token"] == "1234"
    assert "cookie" not in headers
    assert "x-csrf-token" not in headers


def test_empty_credential_is_rejected():
    with pytest.raises(ValueError):
        AuthCredential()


def test_initial_credential_from_settings():
    assert build_initial_credential(AppSettings(_env_file=None)) is None

    guest = build_initial_credential(AppSettings(_env_file=None, guest_key="g"))
    assert guest is not None and guest.is_guest

    user = build_initial_credential(AppSettings(_env_file=None, api_key=encode_api_key(COOKIE), guest_key="g"))
    assert user is not None and not user.is_guest


def _provider(settings, handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AuthProvider(settings, client), client


@pytest.mark.asyncio
async def test_guest_activation(settings):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"guest_token": "987"})

    provider, client = _provider(settings, handler)
    async with client:
        credential = await provider.guest_credential()

    assert credential.guest_token == "987"
    assert seen[0].method == "POST"
    assert str(seen[0].url) == settings.guest_activation_url
    assert seen[0].headers["authorization"] == f"Bearer {WEB_BEARER_TOKEN}"


@pytest.mark.asyncio
async def test_guest_activation_http_failure(settings):
    provider, client = _provider(settings, lambda request: httpx.Response(403, json={}))

    async with client:
        with pytest.raises(TransportError) as exc_info:
            await provider.guest_credential()

    assert exc_info.value.status_code == 403
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_guest_activation_without_token(settings):
    provider, client = _provider(settings, lambda request: httpx.Response(200, json={"unexpected": True}))

    async with client:
        with pytest.raises(TransportError, match="missing"):
            await provider.guest_credential()
