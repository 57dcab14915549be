"""Default error handler for transport failures.

Classifies the platform's error payloads
(`{"errors": [{"code": 88, "message": "..."}]}`) into `ApiError`, and any other
non-2xx answer into `HttpError`. Network-level failures are left to the
transport, which wraps them in a generic `TransportError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from core.errors import ApiError, HttpError

API_ERROR_MESSAGES: dict[int, str] = {
    32: "Could not authenticate you",
    34: "The requested resource does not exist",
    50: "User not found",
    63: "User has been suspended",
    64: "Account is suspended and not permitted to access this feature",
    88: "Rate limit exceeded",
    130: "Over capacity",
    131: "Internal error",
    139: "Post already favorited",
    144: "No post found with that id",
    179: "Not authorized to see this post",
    185: "Daily posting limit reached",
    186: "Post text is too long",
    187: "Post is a duplicate",
    215: "Bad authentication data",
    226: "Request looks automated; it was blocked to protect users",
    239: "Bad guest token",
    326: "Account is temporarily locked",
    327: "Post already reposted",
    366: "Missing data",
}


def _payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def first_error(payload: Any) -> dict[str, Any] | None:
    if not isinstance(payload, dict):
        return None
    errors = payload.get("errors")
    if not isinstance(errors, list):
        return None
    for error in errors:
        if isinstance(error, dict) and isinstance(error.get("code"), int):
            return error
    return None


class ErrorService:
    """Raises a classified error for HTTP failures; returns for anything else."""

    def handle(self, error: Exception) -> None:
        if not isinstance(error, httpx.HTTPStatusError):
            return

        response = error.response
        payload = _payload(response)
        api_error = first_error(payload)
        if api_error is not None:
            code = api_error["code"]
            message = API_ERROR_MESSAGES.get(code) or str(api_error.get("message") or "Unknown API error")
            raise ApiError(code, message, status_code=response.status_code, payload=payload) from error

        raise HttpError(
            f"HTTP {response.status_code} from {response.request.url}",
            status_code=response.status_code,
            payload=payload,
        ) from error
