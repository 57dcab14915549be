"""Client facade.

Wires the concrete adapters (httpx transport, GraphQL request builder, auth)
into a `FetchPipeline` and exposes the public services. Entry points (CLI,
scripts, tests) only need this class.
"""

from __future__ import annotations

from types import TracebackType

import httpx

from adapters.auth import AuthProvider, build_initial_credential
from adapters.error_service import ErrorService
from adapters.http_client import build_async_client
from adapters.request_builder import GraphQLRequestBuilder
from adapters.transport import HttpxTransport
from core.config import AppSettings
from core.domain.resources import CredentialLevel
from core.interfaces.collaborators import ErrorHandler
from core.logging import LogService
from core.services.authorization import AuthorizationGate
from core.services.fetch_pipeline import FetchPipeline
from core.services.tweet_service import TweetService
from core.services.user_service import UserService


class XtractClient:
    """Entry point: `client.tweet.*` and `client.user.*`.

    The credential level is fixed at construction from `settings.api_key`.
    Use as an async context manager (or call `aclose`) to release the HTTP
    connection pool.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        error_handler: ErrorHandler | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._http = http_client or build_async_client(self._settings)

        logger = LogService(enabled=self._settings.logging)
        level = CredentialLevel.from_api_key(self._settings.api_key)

        self._pipeline = FetchPipeline(
            gate=AuthorizationGate(level, logger),
            request_builder=GraphQLRequestBuilder(self._settings),
            transport=HttpxTransport(self._http, error_handler or ErrorService()),
            credentials=AuthProvider(self._settings, self._http),
            credential=build_initial_credential(self._settings),
            logger=logger,
        )
        self.tweet = TweetService(self._pipeline)
        self.user = UserService(self._pipeline)

    @property
    def level(self) -> CredentialLevel:
        return self._pipeline.gate.level

    @property
    def pipeline(self) -> FetchPipeline:
        return self._pipeline

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "XtractClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
