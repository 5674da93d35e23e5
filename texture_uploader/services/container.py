"""Merged texture container.

Layout (all integers are signed 32-bit little-endian)::

    count | size[0] ... size[count-1] | data[0] ... data[count-1]

There is no padding; the total length is ``4 + 4 * count + sum(size)``.
Readers on the client side reproduce this byte for byte, so the layout
must not change.
"""
from __future__ import annotations

import struct
from typing import Sequence

from .errors import ServiceValidationError

_INT32 = struct.Struct("<i")
_INT32_MAX = 2**31 - 1


class ContainerFormatError(ValueError):
    """Raised when a blob does not follow the merged container layout."""


def merge_textures(textures: Sequence[bytes]) -> bytes:
    """Bundle converted textures into one container, preserving order."""

    count = len(textures)
    if count == 0:
        raise ServiceValidationError("texture list must not be empty")

    sizes = [len(texture) for texture in textures]
    if count > _INT32_MAX or any(size > _INT32_MAX for size in sizes):
        raise ServiceValidationError("texture data exceeds the container size limit")

    header = struct.pack(f"<i{count}i", count, *sizes)
    return header + b"".join(bytes(texture) for texture in textures)


def split_container(blob: bytes) -> list[bytes]:
    """Inverse of :func:`merge_textures`."""

    if len(blob) < _INT32.size:
        raise ContainerFormatError("container is shorter than its header")

    (count,) = _INT32.unpack_from(blob, 0)
    if count < 1:
        raise ContainerFormatError(f"invalid texture count: {count}")

    data_offset = _INT32.size * (count + 1)
    if len(blob) < data_offset:
        raise ContainerFormatError("container size table is truncated")

    sizes = struct.unpack_from(f"<{count}i", blob, _INT32.size)
    if any(size < 0 for size in sizes):
        raise ContainerFormatError("negative texture size in size table")
    if data_offset + sum(sizes) != len(blob):
        raise ContainerFormatError(
            f"size table covers {sum(sizes)} bytes but data section has {len(blob) - data_offset}"
        )

    textures = []
    offset = data_offset
    for size in sizes:
        textures.append(bytes(blob[offset : offset + size]))
        offset += size
    return textures
