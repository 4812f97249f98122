"""Error ADTs for every failure the proxy can report.

Frozen dataclasses with a ``kind`` discriminator, grouped into closed unions
so that rendering them to HTTP responses can be checked for exhaustiveness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class BadRequest:
    """The request did not name an object key.

    Attributes:
        message: Human-readable reason, sent back as the response body
    """

    message: str
    kind: Literal["BadRequest"] = "BadRequest"


@dataclass(frozen=True)
class MethodNotAllowed:
    """The HTTP method is not supported for the matched path.

    Attributes:
        message: Human-readable reason naming the method, sent back as the response body
    """

    message: str
    kind: Literal["MethodNotAllowed"] = "MethodNotAllowed"


@dataclass(frozen=True)
class ObjectNotFound:
    """S3 reported the object key as absent from the bucket.

    Corresponds to botocore ClientError with code "NoSuchKey".

    Attributes:
        key: Object key that was not found
        message: Error message from S3
    """

    key: str
    message: str
    kind: Literal["ObjectNotFound"] = "ObjectNotFound"


@dataclass(frozen=True)
class StoreError:
    """Any other failure reported while talking to S3.

    Attributes:
        code: S3 error code ("AccessDenied", "NoSuchBucket", ...) or the
            botocore exception name for client-side failures
        message: Error message from S3 or botocore
        cause: Description of the underlying exception, if there was one
    """

    code: str
    message: str
    cause: str | None = None
    kind: Literal["StoreError"] = "StoreError"


@dataclass(frozen=True)
class BodyReadError:
    """The inbound request body could not be read."""

    message: str
    kind: Literal["BodyReadError"] = "BodyReadError"


@dataclass(frozen=True)
class ConfigError:
    """Startup configuration is missing or invalid.

    Attributes:
        variable: Environment variable at fault
        message: Human-readable reason
    """

    variable: str
    message: str
    kind: Literal["ConfigError"] = "ConfigError"


# Failures produced by the object store adapter
StoreFailure = ObjectNotFound | StoreError

# Failures produced by the router without consulting the store
RouteError = BadRequest | MethodNotAllowed

# Everything a request can fail with
ProxyError = BadRequest | MethodNotAllowed | ObjectNotFound | StoreError | BodyReadError


__all__ = [
    "BadRequest",
    "BodyReadError",
    "ConfigError",
    "MethodNotAllowed",
    "ObjectNotFound",
    "ProxyError",
    "RouteError",
    "StoreError",
    "StoreFailure",
]
