"""Functional S3 operations wrapper using Result types.

This module wraps the three aioboto3 calls the proxy needs and converts every
botocore exception into a typed ``StoreFailure`` ADT, so callers never see an
unhandled exception from the storage layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

from .errors import ObjectNotFound, StoreError, StoreFailure
from .result import Failure, Result, Success

if TYPE_CHECKING:
    from typing import Protocol

    class _S3ResponseProtocol(Protocol):
        """Protocol for S3 get_object response."""

        def __getitem__(self, key: str) -> object: ...

        def get(self, key: str, default: object = None) -> object: ...

    class _S3ClientProtocol(Protocol):
        """Protocol for async S3 client."""

        async def put_object(self, **kwargs: object) -> object: ...
        async def get_object(self, **kwargs: object) -> _S3ResponseProtocol: ...
        async def delete_object(self, **kwargs: object) -> object: ...

    S3Client = _S3ClientProtocol
else:
    from typing import Any as _ClientType
    S3Client = _ClientType


@dataclass(frozen=True)
class StoredObject:
    """Object body and the content type S3 recorded for it."""

    body: bytes
    content_type: str | None = None


class S3Operations:
    """Pure functional interface for S3 object operations.

    All methods return Result[T, StoreFailure] instead of raising exceptions.

    Example:
        ```python
        s3_ops = S3Operations(s3_client)
        result = await s3_ops.get_object("my-bucket", "my-key")

        match result:
            case Success(stored):
                process(stored.body)
            case Failure(ObjectNotFound(key, msg)):
                logger.info(f"Object {key} not found: {msg}")
            case Failure(StoreError(code, msg, cause)):
                logger.error(f"S3 error {code}: {msg}")
        ```
    """

    def __init__(self, s3_client: S3Client) -> None:
        """Initialize S3 operations wrapper.

        Args:
            s3_client: aioboto3 S3 client instance
        """
        self._client = s3_client

    async def get_object(self, bucket: str, key: str) -> Result[StoredObject, StoreFailure]:
        """Get object from S3.

        Args:
            bucket: S3 bucket name
            key: Object key

        Returns:
            Success(StoredObject) if object retrieved successfully
            Failure(ObjectNotFound) if the key does not exist
            Failure(StoreError) for every other error
        """
        try:
            response = await self._client.get_object(Bucket=bucket, Key=key)
            body = response["Body"]
            if not hasattr(body, "read"):
                return Failure(
                    StoreError(
                        code="InvalidResponse",
                        message=f"Expected streaming body with read() method, got {type(body)}",
                    )
                )
            data = await body.read()
            assert isinstance(data, bytes), f"Expected bytes from S3, got {type(data)}"
            content_type = response.get("ContentType")
            return Success(
                StoredObject(
                    body=data,
                    content_type=content_type if isinstance(content_type, str) else None,
                )
            )
        except ClientError as e:
            return Failure(self._classify_error(e, bucket, key))
        except BotoCoreError as e:
            return Failure(self._classify_botocore_error(e))

    async def put_object(
        self, bucket: str, key: str, body: bytes, content_type: str | None = None
    ) -> Result[None, StoreFailure]:
        """Put object to S3, creating or overwriting it.

        Args:
            bucket: S3 bucket name
            key: Object key
            body: Object data as bytes
            content_type: Content type to record with the object, if known

        Returns:
            Success(None) if object uploaded successfully
            Failure(StoreFailure) for all error cases
        """
        extra: dict[str, object] = {}
        if content_type:
            extra["ContentType"] = content_type
        try:
            await self._client.put_object(Bucket=bucket, Key=key, Body=body, **extra)
            return Success(None)
        except ClientError as e:
            return Failure(self._classify_error(e, bucket, key))
        except BotoCoreError as e:
            return Failure(self._classify_botocore_error(e))

    async def delete_object(self, bucket: str, key: str) -> Result[None, StoreFailure]:
        """Delete object from S3.

        Deleting an absent key is reported however S3 reports it; AWS answers
        success, so no special case is made here.

        Args:
            bucket: S3 bucket name
            key: Object key

        Returns:
            Success(None) if S3 accepted the delete
            Failure(StoreFailure) for all error cases
        """
        try:
            await self._client.delete_object(Bucket=bucket, Key=key)
            return Success(None)
        except ClientError as e:
            return Failure(self._classify_error(e, bucket, key))
        except BotoCoreError as e:
            return Failure(self._classify_botocore_error(e))

    def _classify_error(self, error: ClientError, bucket: str, key: str) -> StoreFailure:
        """Classify botocore ClientError into a StoreFailure ADT.

        Args:
            error: botocore ClientError exception
            bucket: S3 bucket name
            key: Object key

        Returns:
            ObjectNotFound for "NoSuchKey", StoreError otherwise
        """
        error_info = error.response.get("Error", {})
        error_code = str(error_info.get("Code", "Unknown"))
        message = str(error_info.get("Message", str(error)))

        match error_code:
            case "NoSuchKey":
                return ObjectNotFound(key=key, message=message)
            case _:
                return StoreError(code=error_code, message=message, cause=_describe_cause(error))

    def _classify_botocore_error(self, error: BotoCoreError) -> StoreFailure:
        """Classify a client-side botocore failure (connection, endpoint, credentials)."""
        return StoreError(
            code=type(error).__name__,
            message=str(error),
            cause=_describe_cause(error),
        )


def _describe_cause(error: Exception) -> str | None:
    """Describe the exception underlying a botocore error, if any."""
    kwargs = getattr(error, "kwargs", None)
    underlying = kwargs.get("error") if isinstance(kwargs, dict) else None
    if underlying is None:
        underlying = error.__cause__
    return str(underlying) if underlying is not None else None
