"""Render proxy error ADTs as HTTP status codes and plain-text bodies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Never

from .errors import (
    BadRequest,
    BodyReadError,
    MethodNotAllowed,
    ObjectNotFound,
    ProxyError,
    StoreError,
)


@dataclass(frozen=True)
class ErrorResponse:
    """HTTP status code and body for a failed request."""

    status_code: int
    body: str


def assert_never(value: Never) -> Never:
    """
    Type-safe exhaustiveness check for pattern matching.

    Raises:
        AssertionError: Always (this should never execute)
    """
    raise AssertionError(f"Unhandled case: {value!r}")


def translate(error: ProxyError, key: str) -> ErrorResponse:
    """Map an error to its HTTP response.

    Adding a variant to ``ProxyError`` requires a case here; the type checker
    flags the ``assert_never`` arm otherwise.

    Args:
        error: Failure raised while handling the request
        key: Object key of the request, embedded in "not found" bodies

    Returns:
        ErrorResponse with the status code and body to send
    """
    match error:
        case BadRequest(message):
            return ErrorResponse(400, message)
        case MethodNotAllowed(message):
            return ErrorResponse(405, message)
        case ObjectNotFound(_, message):
            return ErrorResponse(404, f"Path '{key}' not found: {message}")
        case StoreError(code, message, cause):
            suffix = f" (Cause: {cause})" if cause else ""
            return ErrorResponse(500, f"An internal error occurred: {code} = {message}{suffix}")
        case BodyReadError(message):
            return ErrorResponse(500, f"An internal error occurred: {message}")
        case _:
            assert_never(error)
