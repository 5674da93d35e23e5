from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from texture_uploader.config import get_settings
from texture_uploader.handlers import ping_handler, upload_handler
from texture_uploader.models import ErrorResponse
from texture_uploader.services.registry import get_storage

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class BodyTooLargeError(Exception):
    """Raised while reading a request body that exceeds the configured limit."""


def _payload_too_large() -> JSONResponse:
    body = ErrorResponse(message="Payload Too Large", error_code="INVALID_INPUT")
    return JSONResponse(status_code=413, content=body.model_dump(by_alias=True))


class BodySizeLimitMiddleware:
    """Caps request bodies by ``Content-Length`` and by the bytes actually streamed.

    Chunked uploads carry no ``Content-Length``, so the wrapped ``receive``
    counts body bytes and raises :class:`BodyTooLargeError` once the limit
    is passed.
    """

    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = Headers(scope=scope).get("content-length")
        if length is not None and length.isdigit() and int(length) > self.max_body_size:
            logger.warning("Rejected request body of %s bytes (limit %d)", length, self.max_body_size)
            await _payload_too_large()(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    raise BodyTooLargeError(f"body exceeds {self.max_body_size} bytes")
            return message

        await self.app(scope, limited_receive, send)


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    if get_storage.cache_info().currsize:
        await get_storage().aclose()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title="Texture Uploader API", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    body_limit = settings.api_server_body_limit
    logger.info("Body size limit: %d bytes (%d MB)", body_limit, body_limit // 1024 // 1024)
    application.add_middleware(BodySizeLimitMiddleware, max_body_size=body_limit)

    @application.exception_handler(BodyTooLargeError)
    async def body_too_large(_: Request, exc: BodyTooLargeError):
        logger.warning("Rejected request body: %s", exc)
        return _payload_too_large()

    application.include_router(ping_handler.router)
    application.include_router(upload_handler.router)
    return application


app = create_app()


def run() -> None:  # pragma: no cover
    import uvicorn

    settings = get_settings()
    logger.info("Starting server on http://%s:%d", settings.api_server_host, settings.api_server_port)
    uvicorn.run(app, host=settings.api_server_host, port=settings.api_server_port)
