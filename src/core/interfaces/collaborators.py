"""Contracts of the collaborators the fetch pipeline depends on.

Why Protocol:
- Structural contracts (duck typing) without rigid inheritance.
- The pipeline never imports httpx or knows how credentials are exchanged;
  adapters implement these contracts and tests substitute fakes.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from core.domain.models import RequestArgs
from core.domain.resources import ResourceKind
from core.logging import LogAction


class RequestDescriptor(BaseModel):
    """Everything the transport needs to issue one HTTP call."""

    method: str = Field(default="GET", description="HTTP verb.")
    url: str = Field(..., min_length=1)
    params: dict[str, str] = Field(default_factory=dict)
    json_body: dict[str, Any] | None = Field(
        default=None,
        description="JSON payload for POST requests.",
    )


@runtime_checkable
class Credential(Protocol):
    def to_headers(self) -> dict[str, str]:
        """Request headers that authenticate a call."""

        ...


@runtime_checkable
class CredentialProvider(Protocol):
    async def guest_credential(self) -> Credential:
        """Acquire a fresh guest credential from the platform."""

        ...


@runtime_checkable
class RequestBuilder(Protocol):
    def build(self, kind: ResourceKind, args: RequestArgs) -> RequestDescriptor:
        ...


@runtime_checkable
class Transport(Protocol):
    async def send(self, request: RequestDescriptor, credential: Credential) -> Any:
        """Issue the request and return the decoded JSON body.

        Raises `core.errors.TransportError` on any network or HTTP failure.
        """

        ...


@runtime_checkable
class ErrorHandler(Protocol):
    def handle(self, error: Exception) -> None:
        """Inspect a transport failure; may raise a more specific error."""

        ...


@runtime_checkable
class EventLogger(Protocol):
    def log(self, action: LogAction, **details: Any) -> None:
        ...
