"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the core depends on abstractions only.
"""

from core.interfaces.collaborators import (
    Credential,
    CredentialProvider,
    ErrorHandler,
    EventLogger,
    RequestBuilder,
    RequestDescriptor,
    Transport,
)

__all__ = [
    "Credential",
    "CredentialProvider",
    "ErrorHandler",
    "EventLogger",
    "RequestBuilder",
    "RequestDescriptor",
    "Transport",
]
