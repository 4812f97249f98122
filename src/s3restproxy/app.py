"""FastAPI application exposing the bucket over plain REST.

A single catch-all route receives every request. ``route()`` decides what
the request asks for, ``Gateway`` carries it out against the object store and
``translate()`` renders any failure.
"""

from __future__ import annotations

import logging
import time
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Callable
from urllib.parse import quote

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect

from . import __version__
from .config import ProxySettings
from .errors import BodyReadError, ProxyError
from .health import HealthCache, HealthProber
from .result import Failure, Success
from .router import (
    HEALTH_PATH,
    DeleteObject,
    HealthCheck,
    ReadObject,
    WriteObject,
    object_key,
    route,
)
from .store import ObjectStore, connect_object_store
from .translate import assert_never, translate


logger = logging.getLogger(__name__)

def error_response(error: ProxyError, key: str) -> Response:
    rendered = translate(error, key)
    return PlainTextResponse(
        rendered.body,
        status_code=rendered.status_code,
        headers={"X-Content-Type-Options": "nosniff"},
    )


class Gateway:
    """Carries out routed requests against the object store."""

    def __init__(self, store: ObjectStore, prober: HealthProber) -> None:
        self.store = store
        self.prober = prober

    async def health(self) -> Response:
        match await self.prober.check():
            case Success(status):
                return PlainTextResponse(status)
            case Failure(error):
                return error_response(error, self.prober.health_key)

    async def read(self, key: str) -> Response:
        match await self.store.get(key):
            case Success(stored):
                return Response(
                    content=stored.body,
                    headers={"content-type": stored.content_type or "application/octet-stream"},
                )
            case Failure(error):
                return error_response(error, key)

    async def write(self, key: str, request: Request) -> Response:
        try:
            body = await request.body()
        except ClientDisconnect:
            return error_response(
                BodyReadError("client disconnected before the request body was read"), key
            )

        match await self.store.put(key, body, request.headers.get("content-type")):
            case Success(_):
                # Overwrites are reported as creations too
                return Response(status_code=201, headers={"Location": "/" + quote(key, safe="/")})
            case Failure(error):
                return error_response(error, key)

    async def delete(self, key: str) -> Response:
        match await self.store.delete(key):
            case Success(_):
                return Response(status_code=204)
            case Failure(error):
                return error_response(error, key)


async def handle_request(request: Request) -> Response:
    """Entry point for every inbound request."""
    gateway: Gateway = request.app.state.gateway
    method = request.method
    path = request.scope["path"]

    key = object_key(path)
    if key and key != HEALTH_PATH:
        logger.info("Handling %s request for '%s'", method, key)

    match route(method, path):
        case Failure(error):
            return error_response(error, key)
        case Success(HealthCheck()):
            return await gateway.health()
        case Success(ReadObject(target)):
            return await gateway.read(target)
        case Success(WriteObject(target)):
            return await gateway.write(target, request)
        case Success(DeleteObject(target)):
            return await gateway.delete(target)
        case Success(unmatched):
            assert_never(unmatched)


def create_app(
    settings: ProxySettings,
    *,
    store: ObjectStore | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> FastAPI:
    """Build the proxy application.

    Args:
        settings: Startup configuration
        store: Object store to use instead of connecting to S3 from settings
        clock: Time source for the health-check cache, in seconds

    Returns:
        FastAPI app; the store and health state are set up by its lifespan
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            active = (
                store
                if store is not None
                else await stack.enter_async_context(connect_object_store(settings))
            )
            cache = HealthCache(settings.health_cache_interval, clock)
            app.state.gateway = Gateway(active, HealthProber(active, settings.health_file, cache))
            logger.info("Startup complete")
            yield

    # No docs routes: every path belongs to the bucket
    app = FastAPI(
        title="s3restproxy",
        version=__version__,
        lifespan=lifespan,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )
    # No method list: unknown methods still reach the router and get its 405 body
    app.add_route("/{path:path}", handle_request, include_in_schema=False)
    return app
