from __future__ import annotations

from functools import lru_cache

from texture_uploader.config import get_settings

from .converter import CompressonatorConverter, Converter
from .storage import HttpStorage, Storage
from .upload import UploadMergedImageService, UploadSingleImageService


@lru_cache()
def get_converter() -> Converter:
    settings = get_settings()
    return CompressonatorConverter(
        tool_path=settings.converter_path,
        output_format=settings.converter_format,
        quality=settings.converter_quality,
    )


@lru_cache()
def get_storage() -> Storage:
    return HttpStorage(timeout=get_settings().storage_timeout)


def get_upload_single_image_service() -> UploadSingleImageService:
    return UploadSingleImageService(get_converter(), get_storage())


def get_upload_merged_image_service() -> UploadMergedImageService:
    return UploadMergedImageService(get_converter(), get_storage())
