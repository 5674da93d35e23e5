from .container import ContainerFormatError, merge_textures, split_container
from .converter import CompressonatorConverter, Converter
from .errors import (
    ConverterError,
    ConverterIOError,
    InfrastructureError,
    ServiceError,
    ServiceInfrastructureError,
    ServiceValidationError,
    StorageError,
)
from .storage import HttpStorage, Storage
from .upload import UploadMergedImageService, UploadSingleImageService

__all__ = [
    "CompressonatorConverter",
    "ContainerFormatError",
    "Converter",
    "ConverterError",
    "ConverterIOError",
    "HttpStorage",
    "InfrastructureError",
    "ServiceError",
    "ServiceInfrastructureError",
    "ServiceValidationError",
    "Storage",
    "StorageError",
    "UploadMergedImageService",
    "UploadSingleImageService",
    "merge_textures",
    "split_container",
]
