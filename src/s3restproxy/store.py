"""Bucket-bound object store backed by an async aioboto3 S3 client."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import aioboto3
from botocore.config import Config

from .config import ProxySettings
from .errors import StoreFailure
from .result import Result
from .s3_operations import S3Operations, StoredObject


class ObjectStore:
    """Get, put and delete objects by key in the one configured bucket.

    Usage:
        async with connect_object_store(settings) as store:
            result = await store.get("reports/today.csv")
    """

    def __init__(self, operations: S3Operations, bucket_name: str) -> None:
        self.bucket_name = bucket_name
        self._ops = operations

    async def get(self, key: str) -> Result[StoredObject, StoreFailure]:
        return await self._ops.get_object(self.bucket_name, key)

    async def put(
        self, key: str, body: bytes, content_type: str | None = None
    ) -> Result[None, StoreFailure]:
        return await self._ops.put_object(self.bucket_name, key, body, content_type)

    async def delete(self, key: str) -> Result[None, StoreFailure]:
        return await self._ops.delete_object(self.bucket_name, key)


def build_boto_config(settings: ProxySettings) -> Config:
    """Connection pooling and outbound proxy configuration for the S3 client."""
    proxies = (
        {"http": settings.s3_http_proxy, "https": settings.s3_http_proxy}
        if settings.s3_http_proxy
        else None
    )
    return Config(
        region_name=settings.aws_region,
        max_pool_connections=50,
        proxies=proxies,
    )


@asynccontextmanager
async def connect_object_store(settings: ProxySettings) -> AsyncIterator[ObjectStore]:
    """Open an aioboto3 S3 client for the configured bucket.

    The client stays open for the lifetime of the context and is shared by
    every request; it is closed on exit.
    """
    session = aioboto3.Session(
        aws_access_key_id=settings.aws_access_key_id.get_secret_value(),
        aws_secret_access_key=settings.aws_secret_access_key.get_secret_value(),
        region_name=settings.aws_region,
    )
    async with session.client(
        "s3",
        endpoint_url=settings.aws_endpoint_url or None,
        config=build_boto_config(settings),
    ) as client:
        yield ObjectStore(S3Operations(client), settings.aws_bucket)
