from __future__ import annotations

import pytest

from core.domain.resources import GUEST_ALLOWED, CredentialLevel, ResourceKind
from core.errors import AuthorizationError
from core.services.authorization import AuthorizationGate


def test_level_from_api_key():
    assert CredentialLevel.from_api_key("abc") is CredentialLevel.USER
    assert CredentialLevel.from_api_key("") is CredentialLevel.GUEST
    assert CredentialLevel.from_api_key(None) is CredentialLevel.GUEST


@pytest.mark.parametrize("kind", list(ResourceKind))
def test_user_level_allows_everything(kind):
    gate = AuthorizationGate(CredentialLevel.USER)

    gate.check(kind)

    assert gate.is_authenticated
    assert gate.allows(kind)


@pytest.mark.parametrize("kind", sorted(GUEST_ALLOWED, key=lambda k: k.value))
def test_guest_allows_lookups_and_user_timeline(kind):
    AuthorizationGate(CredentialLevel.GUEST).check(kind)


@pytest.mark.parametrize("kind", sorted(set(ResourceKind) - GUEST_ALLOWED, key=lambda k: k.value))
def test_guest_rejects_everything_else(kind):
    gate = AuthorizationGate(CredentialLevel.GUEST)

    with pytest.raises(AuthorizationError) as exc_info:
        gate.check(kind)

    assert exc_info.value.kind is kind
    assert kind.value in str(exc_info.value)


def test_check_logs_before_deciding():
    events = []

    class Recorder:
        def log(self, action, **details):
            events.append((action.value, details))

    gate = AuthorizationGate(CredentialLevel.GUEST, Recorder())  # type: ignore[arg-type]
    with pytest.raises(AuthorizationError):
        gate.check(ResourceKind.USER_LIKES)

    assert events == [("authorization", {"resource": "user_likes", "authenticated": False})]
