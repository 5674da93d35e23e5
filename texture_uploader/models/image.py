"""Validated source image for texture conversion.

An :class:`Image` only exists for byte buffers that decode as a raster
image whose width and height are both multiples of 4, the block size of
the compressed GPU texture formats we convert to. The original bytes are
kept as-is; decoding is only used to read the dimensions.
"""
from __future__ import annotations

import io

from PIL import Image as PILImage
from pydantic import BaseModel, ConfigDict, Field

from .errors import DecodeError, EmptyDataError, InvalidDimensionsError

BLOCK_SIZE = 4


class Image(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., repr=False)
    width: int = Field(..., ge=BLOCK_SIZE)
    height: int = Field(..., ge=BLOCK_SIZE)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Image":
        """Validate *data* and wrap it.

        Raises
        ------
        EmptyDataError
            The buffer has zero length.
        DecodeError
            Pillow cannot identify or read the buffer as an image.
        InvalidDimensionsError
            Width or height is not a multiple of 4.
        """

        if not data:
            raise EmptyDataError()

        width, height = _read_dimensions(data)
        if width % BLOCK_SIZE != 0 or height % BLOCK_SIZE != 0:
            raise InvalidDimensionsError(width, height)

        return cls(data=bytes(data), width=width, height=height)

    def as_bytes(self) -> bytes:
        return self.data


def _read_dimensions(data: bytes) -> tuple[int, int]:
    try:
        with PILImage.open(io.BytesIO(data)) as img:
            # Force a full decode so truncated files fail here, not in the converter.
            img.load()
            return img.size
    except Exception as exc:  # Pillow plugins raise arbitrary types on corrupt input
        raise DecodeError(str(exc) or exc.__class__.__name__) from exc
