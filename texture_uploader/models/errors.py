from __future__ import annotations


class ImageError(Exception):
    """Raised when raw bytes cannot be accepted as a texture source image."""


class EmptyDataError(ImageError):
    def __init__(self) -> None:
        super().__init__("image data is empty")


class DecodeError(ImageError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"failed to decode image: {detail}")
        self.detail = detail


class InvalidDimensionsError(ImageError):
    """Width or height is not a multiple of 4 (block-compression constraint)."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            f"image dimensions must be multiples of 4 (width: {width}, height: {height})"
        )
        self.width = width
        self.height = height
