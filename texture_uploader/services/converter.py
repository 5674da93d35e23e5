"""Image to compressed-texture conversion.

The default implementation shells out to the Compressonator CLI::

    compressonatorcli -fd BC7 -Quality 0.05 -noprogress <input> <output>

Input and output files live in a per-call temporary directory that is
removed when the call returns, whatever the outcome. Only the exit status
and stderr of the tool are inspected.
"""
from __future__ import annotations

import asyncio
import contextlib
import io
import logging
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image as PILImage

from .errors import ConverterError, ConverterIOError

logger = logging.getLogger(__name__)

_INPUT_STEM = "input"
_OUTPUT_NAME = "output.dds"
_MAX_STDERR_CHARS = 2000


class Converter(ABC):
    """Turns one validated image into texture bytes."""

    name: str = "abstract"

    @abstractmethod
    async def convert(self, image: bytes) -> bytes:
        """Return the converted texture.

        Raises
        ------
        ConverterError
            The input is empty or the tool reported a failure.
        ConverterIOError
            Temp files could not be used or the tool could not be started.
        """


class CompressonatorConverter(Converter):
    name = "compressonator"

    def __init__(self, *, tool_path: str, output_format: str = "BC7", quality: float = 0.05) -> None:
        self._tool_path = tool_path
        self._output_format = output_format
        self._quality = quality

    def build_command(self, input_path: Path, output_path: Path) -> list[str]:
        return [
            self._tool_path,
            "-fd",
            self._output_format.upper(),
            "-Quality",
            f"{self._quality:g}",
            "-noprogress",
            str(input_path),
            str(output_path),
        ]

    async def convert(self, image: bytes) -> bytes:
        logger.info("Converting image to %s (size: %d bytes)", self._output_format, len(image))

        if not image:
            raise ConverterError("input image is empty")

        try:
            with tempfile.TemporaryDirectory(prefix="texture_convert_") as tmpdir:
                input_path = Path(tmpdir) / f"{_INPUT_STEM}{_input_suffix(image)}"
                output_path = Path(tmpdir) / _OUTPUT_NAME
                input_path.write_bytes(image)

                await self._run_tool(input_path, output_path)

                if not output_path.is_file():
                    raise ConverterIOError(f"converter produced no output file at {output_path.name}")
                texture = output_path.read_bytes()
        except OSError as exc:
            raise ConverterIOError(str(exc)) from exc

        logger.info("Conversion succeeded (output size: %d bytes)", len(texture))
        return texture

    async def _run_tool(self, input_path: Path, output_path: Path) -> None:
        cmd = self.build_command(input_path, output_path)
        logger.debug("Running converter: %s", " ".join(cmd))

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise ConverterIOError(f"converter tool not found: {self._tool_path}") from exc
        except PermissionError as exc:
            raise ConverterIOError(f"converter tool is not executable: {self._tool_path}") from exc

        try:
            _, stderr = await proc.communicate()
        except asyncio.CancelledError:
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()
            raise

        if proc.returncode != 0:
            stderr_text = stderr.decode(errors="replace").strip()[:_MAX_STDERR_CHARS]
            raise ConverterError(f"converter exited with status {proc.returncode}: {stderr_text}")


def _input_suffix(image: bytes) -> str:
    """Extension matching the encoded format; the tool picks its decoder by extension."""

    try:
        with PILImage.open(io.BytesIO(image)) as img:
            fmt = (img.format or "").lower()
    except Exception:  # suffix is a hint only; validation already rejected bad input
        return ".png"
    return {"jpeg": ".jpg", "mpo": ".jpg", "tiff": ".tif"}.get(fmt, f".{fmt}" if fmt else ".png")
