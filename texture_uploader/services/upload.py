"""Upload orchestration: validate -> convert -> (merge) -> store.

Both services take their :class:`Converter` and :class:`Storage` as
constructor arguments so a single pair of instances can be shared across
requests and swapped for test doubles. Nothing is retried; each failure
is classified once as a validation or an infrastructure error and raised
to the caller.
"""
from __future__ import annotations

import logging
from typing import Sequence

from texture_uploader.models import (
    DecodeError,
    EmptyDataError,
    Image,
    ImageError,
    InvalidDimensionsError,
)

from .container import merge_textures
from .converter import Converter
from .errors import InfrastructureError, ServiceInfrastructureError, ServiceValidationError
from .storage import Storage

logger = logging.getLogger(__name__)


class UploadSingleImageService:
    """Convert one image and upload the resulting texture."""

    def __init__(self, converter: Converter, storage: Storage) -> None:
        self._converter = converter
        self._storage = storage

    async def execute(self, signed_url: str, image: bytes) -> None:
        _require_url(signed_url)

        try:
            image_model = Image.from_bytes(image)
        except ImageError as exc:
            raise ServiceValidationError(_describe_image_error(exc)) from exc

        logger.info("Starting upload_single_image_service (%dx%d)", image_model.width, image_model.height)

        try:
            texture = await self._converter.convert(image_model.as_bytes())
        except InfrastructureError as exc:
            logger.error("Failed to convert image to texture: %s", exc)
            raise ServiceInfrastructureError(exc) from exc

        await _store(self._storage, signed_url, texture)
        logger.info("Upload single image succeeded")


class UploadMergedImageService:
    """Convert images in order, bundle them into one container and upload it.

    Images are processed sequentially and the first failure aborts the
    request; no container is built or uploaded unless every image converts.
    """

    def __init__(self, converter: Converter, storage: Storage) -> None:
        self._converter = converter
        self._storage = storage

    async def execute(self, signed_url: str, images: Sequence[bytes]) -> None:
        _require_url(signed_url)
        if not images:
            raise ServiceValidationError("images must not be empty")

        logger.info("Starting upload_merged_image_service (image count: %d)", len(images))

        textures: list[bytes] = []
        for index, image in enumerate(images):
            try:
                image_model = Image.from_bytes(image)
            except ImageError as exc:
                raise ServiceValidationError(_describe_image_error(exc, index=index)) from exc

            try:
                texture = await self._converter.convert(image_model.as_bytes())
            except InfrastructureError as exc:
                logger.error("Failed to convert image %d to texture: %s", index, exc)
                raise ServiceInfrastructureError(exc, context=f"image at index {index}") from exc

            textures.append(texture)

        merged = merge_textures(textures)
        await _store(self._storage, signed_url, merged)
        logger.info("Upload merged image succeeded (%d textures, %d bytes)", len(textures), len(merged))


# ------------------------------------------------------------------
# Helper functions
# ------------------------------------------------------------------

def _require_url(signed_url: str | None) -> None:
    if signed_url is None or not signed_url.strip():
        raise ServiceValidationError("signed url must not be empty")


async def _store(storage: Storage, signed_url: str, data: bytes) -> None:
    try:
        await storage.upload_file(signed_url, data)
    except InfrastructureError as exc:
        logger.error("Failed to upload file to storage: %s", exc)
        raise ServiceInfrastructureError(exc) from exc


def _describe_image_error(exc: ImageError, *, index: int | None = None) -> str:
    where = "image" if index is None else f"image at index {index}"
    if isinstance(exc, EmptyDataError):
        return f"{where} is empty"
    if isinstance(exc, DecodeError):
        return f"failed to decode {where}: {exc.detail}"
    if isinstance(exc, InvalidDimensionsError):
        return (
            f"{where}: dimensions must be multiples of 4 "
            f"(width: {exc.width}, height: {exc.height})"
        )
    return f"{where}: {exc}"
