"""Authorization gate: which resources the credential level may request."""

from __future__ import annotations

from core.domain.resources import GUEST_ALLOWED, CredentialLevel, ResourceKind
from core.errors import AuthorizationError
from core.interfaces.collaborators import EventLogger
from core.logging import LogAction, LogService


class AuthorizationGate:
    """Fixed at construction; a new client is needed to change level."""

    def __init__(self, level: CredentialLevel, logger: EventLogger | None = None) -> None:
        self._level = level
        self._logger = logger or LogService()

    @property
    def level(self) -> CredentialLevel:
        return self._level

    @property
    def is_authenticated(self) -> bool:
        return self._level is CredentialLevel.USER

    def allows(self, kind: ResourceKind) -> bool:
        return self.is_authenticated or kind in GUEST_ALLOWED

    def check(self, kind: ResourceKind) -> None:
        """Raise `AuthorizationError` if `kind` needs a higher level."""

        self._logger.log(
            LogAction.AUTHORIZATION,
            resource=kind.value,
            authenticated=self.is_authenticated,
        )
        if not self.allows(kind):
            raise AuthorizationError(kind)
