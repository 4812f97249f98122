"""Tests for the bucket-bound object store and its S3 connection setup."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from s3restproxy.config import ProxySettings
from s3restproxy.errors import ObjectNotFound
from s3restproxy.s3_operations import StoredObject
from s3restproxy.store import ObjectStore, build_boto_config, connect_object_store
from tests.helpers import FakeS3Client, expect_failure, expect_success
from tests.helpers.constants import TEST_BUCKET


class _ClientContext:
    """Async context manager shaped like ``aioboto3.Session().client(...)``."""

    def __init__(self, client: FakeS3Client) -> None:
        self.client = client
        self.closed = False

    async def __aenter__(self) -> FakeS3Client:
        return self.client

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_store_is_bound_to_its_bucket(store: ObjectStore, fake_s3: FakeS3Client) -> None:
    expect_success(await store.put("k", b"v", "text/plain"))

    assert fake_s3.objects[(TEST_BUCKET, "k")] == (b"v", "text/plain")
    assert expect_success(await store.get("k")) == StoredObject(b"v", "text/plain")

    expect_success(await store.delete("k"))
    assert isinstance(expect_failure(await store.get("k")), ObjectNotFound)


def test_boto_config_direct_connection(settings: ProxySettings) -> None:
    config = build_boto_config(settings)
    assert config.proxies is None
    assert config.region_name == "eu-west-1"


def test_boto_config_with_outbound_proxy(settings: ProxySettings) -> None:
    proxied = settings.model_copy(update={"s3_http_proxy": "http://proxy.internal:3128"})

    config = build_boto_config(proxied)

    assert config.proxies == {
        "http": "http://proxy.internal:3128",
        "https": "http://proxy.internal:3128",
    }


@pytest.mark.asyncio
async def test_connect_object_store_opens_and_closes_client(settings: ProxySettings) -> None:
    fake = FakeS3Client(TEST_BUCKET)
    context = _ClientContext(fake)
    session = MagicMock()
    session.client.return_value = context
    configured = settings.model_copy(update={"aws_endpoint_url": "http://minio:9000"})

    with patch("s3restproxy.store.aioboto3.Session", return_value=session) as session_cls:
        async with connect_object_store(configured) as store:
            assert store.bucket_name == TEST_BUCKET
            expect_success(await store.put("k", b"v"))
            assert not context.closed

    assert context.closed
    session_cls.assert_called_once_with(
        aws_access_key_id="test-access-key",
        aws_secret_access_key="test-secret-key",
        region_name="eu-west-1",
    )
    args, kwargs = session.client.call_args
    assert args == ("s3",)
    assert kwargs["endpoint_url"] == "http://minio:9000"
    assert fake.objects[(TEST_BUCKET, "k")] == (b"v", None)
