"""Map an HTTP method and URL path onto a proxy operation."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import BadRequest, MethodNotAllowed, RouteError
from .result import Failure, Result, Success


HEALTH_PATH = "healthz"


@dataclass(frozen=True)
class HealthCheck:
    """Run the cached liveness probe."""


@dataclass(frozen=True)
class ReadObject:
    key: str


@dataclass(frozen=True)
class WriteObject:
    key: str


@dataclass(frozen=True)
class DeleteObject:
    key: str


Route = HealthCheck | ReadObject | WriteObject | DeleteObject


def object_key(path: str) -> str:
    """Strip the single leading separator; the remainder is the key verbatim."""
    return path[1:] if path.startswith("/") else path


def route(method: str, path: str) -> Result[Route, RouteError]:
    """Decide what a request asks for.

    Args:
        method: HTTP method, upper case
        path: URL path as received, with its leading "/"

    Returns:
        Success(Route) for supported requests
        Failure(BadRequest) when no key is given, whatever the method
        Failure(MethodNotAllowed) for unsupported methods
    """
    key = object_key(path)
    if not key:
        return Failure(BadRequest("Path must be provided"))

    if key == HEALTH_PATH:
        if method == "GET":
            return Success(HealthCheck())
        return Failure(MethodNotAllowed(f"/{HEALTH_PATH} is restricted to GET requests"))

    match method:
        case "GET":
            return Success(ReadObject(key))
        case "PUT":
            return Success(WriteObject(key))
        case "DELETE":
            return Success(DeleteObject(key))
        case _:
            return Failure(MethodNotAllowed(f"Method {method} not supported"))
