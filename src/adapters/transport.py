"""httpx transport for request descriptors."""

from __future__ import annotations

from typing import Any

import httpx

from adapters.error_service import ErrorService
from core.errors import TransportError
from core.interfaces.collaborators import Credential, ErrorHandler, RequestDescriptor


class HttpxTransport:
    """Sends descriptors through a shared `httpx.AsyncClient`.

    Failures go through the error handler first (which may raise a more
    specific error); otherwise a `TransportError` chained to the original is
    raised. Retries, if wanted, belong here and not in the pipeline.
    """

    def __init__(self, client: httpx.AsyncClient, error_handler: ErrorHandler | None = None) -> None:
        self._client = client
        self._error_handler = error_handler or ErrorService()

    async def send(self, request: RequestDescriptor, credential: Credential) -> Any:
        try:
            response = await self._client.request(
                request.method,
                request.url,
                params=request.params or None,
                json=request.json_body,
                headers=credential.to_headers(),
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._error_handler.handle(exc)
            status_code = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
            raise TransportError(str(exc) or exc.__class__.__name__, status_code=status_code) from exc

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                "Response body is not valid JSON",
                status_code=response.status_code,
            ) from exc
