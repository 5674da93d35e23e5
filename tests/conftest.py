"""Shared pytest fixtures and test helpers for texture_uploader tests."""

from __future__ import annotations

import io
import struct

import pytest
from PIL import Image


def make_image_bytes(width: int = 8, height: int = 8, fmt: str = "PNG") -> bytes:
    """Encode a solid-colour RGB image of the given size."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 40, 40)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def valid_png() -> bytes:
    return make_image_bytes(8, 4)


@pytest.fixture
def odd_png() -> bytes:
    return make_image_bytes(10, 8)


def make_corrupt_dds(pixel_format_flags: int = 129) -> bytes:
    """A 128-byte DDS header whose pixel-format flags no Pillow decoder accepts."""
    header = struct.pack("<7I", 124, 0x1007, 8, 8, 0, 0, 0) + b"\x00" * 44
    pixel_format = struct.pack("<8I", 32, pixel_format_flags, 0, 0, 0, 0, 0, 0)
    caps = struct.pack("<5I", 0x1000, 0, 0, 0, 0)
    return b"DDS " + header + pixel_format + caps
