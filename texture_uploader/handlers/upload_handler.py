"""Upload endpoints: multipart extraction and error-to-status mapping."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from texture_uploader.models import ErrorResponse, SuccessResponse
from texture_uploader.services import (
    ServiceError,
    ServiceInfrastructureError,
    ServiceValidationError,
    UploadMergedImageService,
    UploadSingleImageService,
)
from texture_uploader.services.registry import (
    get_upload_merged_image_service,
    get_upload_single_image_service,
)

router = APIRouter()
logger = logging.getLogger(__name__)

URL_FIELD = "presignedUrl"
METADATA_FIELD = "metadata"

BAD_REQUEST = "Bad Request"
INTERNAL_SERVER_ERROR = "Internal Server Error"
INVALID_INPUT = "INVALID_INPUT"
INFRASTRUCTURE_FAILED = "INFRASTRUCTURE_FAILED"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _read_bytes(value: Any) -> bytes:
    if isinstance(value, UploadFile):
        return await value.read()
    return str(value).encode()


async def _read_text(value: Any) -> str | None:
    if isinstance(value, UploadFile):
        try:
            return (await value.read()).decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Field %s is not valid UTF-8", value.filename)
            return None
    return str(value)


def _bad_request(details: Any = None) -> JSONResponse:
    body = ErrorResponse(message=BAD_REQUEST, error_code=INVALID_INPUT, details=details)
    return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))


def _error_response(exc: ServiceError) -> JSONResponse:
    if isinstance(exc, ServiceValidationError):
        logger.info("Validation error: %s", exc.message)
        return _bad_request(exc.message)

    if isinstance(exc, ServiceInfrastructureError):
        logger.error("Infrastructure error: %s", exc)
    else:  # pragma: no cover
        logger.exception("Unclassified service error: %s", exc)
    body = ErrorResponse(message=INTERNAL_SERVER_ERROR, error_code=INFRASTRUCTURE_FAILED, details=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))


def _success() -> JSONResponse:
    return JSONResponse(status_code=200, content=SuccessResponse().model_dump())


# ---------------------------------------------------------------------------
# POST /upload-image
# ---------------------------------------------------------------------------


@router.post("/upload-image")
async def upload_image(
    request: Request,
    service: UploadSingleImageService = Depends(get_upload_single_image_service),
):
    """Convert one image to a texture and upload it to the pre-signed URL."""
    logger.info("upload_image() called")

    presigned_url: str | None = None
    file_data: bytes | None = None

    async with request.form() as form:
        for name, value in form.multi_items():
            if name == URL_FIELD:
                presigned_url = await _read_text(value)
            elif name == "file":
                file_data = await _read_bytes(value)
                logger.info("file: %d bytes", len(file_data))
            elif name == METADATA_FIELD:
                continue
            else:
                logger.warning("Unknown field: %s", name)

    if presigned_url is None or file_data is None:
        logger.warning("upload_image() missing required fields")
        return _bad_request()

    try:
        await service.execute(presigned_url, file_data)
    except ServiceError as exc:
        return _error_response(exc)

    return _success()


# ---------------------------------------------------------------------------
# POST /upload-merged-image
# ---------------------------------------------------------------------------


@router.post("/upload-merged-image")
async def upload_merged_image(
    request: Request,
    service: UploadMergedImageService = Depends(get_upload_merged_image_service),
):
    """Convert several images, bundle them in one container and upload it."""
    logger.info("upload_merged_image() called")

    presigned_url: str | None = None
    files: list[bytes] = []

    async with request.form() as form:
        for name, value in form.multi_items():
            if name == URL_FIELD:
                presigned_url = await _read_text(value)
            elif name == "files":
                files.append(await _read_bytes(value))
            elif name == METADATA_FIELD:
                continue
            else:
                logger.warning("Unknown field: %s", name)

    if presigned_url is None or not files:
        logger.warning("upload_merged_image() missing required fields")
        return _bad_request()

    try:
        await service.execute(presigned_url, files)
    except ServiceError as exc:
        return _error_response(exc)

    return _success()
