"""Exception hierarchy of the client.

Rules:
- `AuthorizationError` is raised before any request leaves the process.
- `TransportError` (and its subclasses) wraps whatever went wrong on the wire
  and is chained to the original `httpx` exception.
- Malformed fragments are never errors; they are dropped during
  deserialization.
"""

from __future__ import annotations

from typing import Any

from core.domain.resources import ResourceKind


class XtractError(Exception):
    """Base class for every error raised by the client."""


class AuthorizationError(XtractError):
    """The credential level does not allow the requested resource."""

    def __init__(self, kind: ResourceKind) -> None:
        super().__init__(f"Resource '{kind.value}' requires an authenticated (API key) client")
        self.kind = kind


class TransportError(XtractError):
    """Network or HTTP failure while talking to the platform."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class HttpError(TransportError):
    """The platform answered with a non-2xx status."""


class ApiError(TransportError):
    """The platform returned a recognised error code in its payload."""

    def __init__(
        self,
        code: int,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(f"[{code}] {message}", status_code=status_code, payload=payload)
        self.code = code


class UnsupportedResourceError(XtractError, RuntimeError):
    """A resource kind reached a table that does not cover it (programming error)."""
