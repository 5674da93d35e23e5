from .errors import DecodeError, EmptyDataError, ImageError, InvalidDimensionsError
from .image import Image
from .responses import ErrorResponse, SuccessResponse

__all__ = [
    "DecodeError",
    "EmptyDataError",
    "ErrorResponse",
    "Image",
    "ImageError",
    "InvalidDimensionsError",
    "SuccessResponse",
]
