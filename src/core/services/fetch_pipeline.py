"""Fetch/post orchestration.

Flow per call:
1. Authorization gate (fails before anything leaves the process).
2. Request descriptor from the request builder.
3. Credential (lazily acquired guest credential when none was supplied).
4. Transport call: the only suspension point.
5. Extraction + deserialization over the fully received body.

No retries happen here; a transport failure propagates to the caller as is.
"""

from __future__ import annotations

import asyncio
from typing import Any

from core.domain.models import CursoredResult, RequestArgs
from core.domain.resources import ResourceKind
from core.interfaces.collaborators import (
    Credential,
    CredentialProvider,
    EventLogger,
    RequestBuilder,
    Transport,
)
from core.logging import LogAction, LogService
from core.services.authorization import AuthorizationGate
from core.services.deserializer import EntityDeserializer
from core.services.extractor import extract


def _consume_exception(task: asyncio.Task) -> None:
    # Marks the failure as retrieved even when every awaiting caller is gone.
    if not task.cancelled():
        task.exception()


class FetchPipeline:
    """Issues requests and turns responses into cursored entity pages.

    Safe to share between concurrent callers: extraction and deserialization
    work on call-local data, and the lazy guest credential is acquired at most
    once at a time (concurrent first callers await the same acquisition).
    """

    def __init__(
        self,
        *,
        gate: AuthorizationGate,
        request_builder: RequestBuilder,
        transport: Transport,
        credentials: CredentialProvider,
        credential: Credential | None = None,
        logger: EventLogger | None = None,
    ) -> None:
        self._gate = gate
        self._request_builder = request_builder
        self._transport = transport
        self._credentials = credentials
        self._credential = credential
        self._logger = logger or LogService()
        self._deserializer = EntityDeserializer(self._logger)
        self._guest_task: asyncio.Task[Credential] | None = None

    @property
    def gate(self) -> AuthorizationGate:
        return self._gate

    async def _acquire_guest(self) -> Credential:
        try:
            credential = await self._credentials.guest_credential()
        except BaseException:
            # Let a later call try again.
            self._guest_task = None
            raise
        self._credential = credential
        self._logger.log(LogAction.GUEST_CREDENTIAL, acquired=True)
        return credential

    async def _resolve_credential(self) -> Credential:
        if self._credential is not None:
            return self._credential
        # No await between the check and the assignment: one task per acquisition.
        if self._guest_task is None:
            self._guest_task = asyncio.ensure_future(self._acquire_guest())
            self._guest_task.add_done_callback(_consume_exception)
        # Shielded so that one cancelled caller does not abort it for the others.
        return await asyncio.shield(self._guest_task)

    async def _request(self, kind: ResourceKind, args: RequestArgs) -> Any:
        self._gate.check(kind)
        descriptor = self._request_builder.build(kind, args)
        credential = await self._resolve_credential()
        return await self._transport.send(descriptor, credential)

    async def fetch(self, kind: ResourceKind, args: RequestArgs | None = None) -> CursoredResult:
        """Fetch one page of `kind` and return its entities plus the next cursor."""

        args = args or RequestArgs()
        self._logger.log(LogAction.FETCH, resource=kind.value, args=args.model_dump(mode="json", exclude_none=True))

        body = await self._request(kind, args)

        extraction = extract(body, kind)
        entities = self._deserializer.deserialize(extraction.fragments)
        return CursoredResult(items=entities, next=extraction.next)

    async def post(self, kind: ResourceKind, args: RequestArgs | None = None) -> bool:
        """Send a mutation; True unless the transport raised."""

        args = args or RequestArgs()
        self._logger.log(LogAction.POST, resource=kind.value, args=args.model_dump(mode="json", exclude_none=True))

        await self._request(kind, args)
        return True
