"""In-memory RGB image that can be saved as PNG."""

from __future__ import annotations

import math
import struct
import zlib
from os import PathLike

from raylabs.color import Color

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(kind + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)


class Image:
    """A ``width`` x ``height`` grid of colours, row-major from the top."""

    def __init__(self, width: int, height: int, fill: Color | None = None) -> None:
        self._width = width
        self._height = height
        self._pixels = [fill if fill is not None else Color()] * (width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _index(self, x: int, y: int) -> int:
        index = y * self._width + x
        if not 0 <= index < len(self._pixels):
            raise ValueError("Image: Invalid index")
        return index

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self._pixels[self._index(x, y)] = color

    def get_pixel(self, x: int, y: int) -> Color:
        return self._pixels[self._index(x, y)]

    def to_rgba(self) -> bytes:
        """Pixels as 8-bit RGBA, components clamped to [0, 1] then scaled."""
        out = bytearray()
        for pixel in self._pixels:
            c = pixel.clamp01()
            out += bytes(
                (
                    math.floor(c.r * 255),
                    math.floor(c.g * 255),
                    math.floor(c.b * 255),
                    255,
                )
            )
        return bytes(out)

    def write_file(self, path: str | PathLike[str]) -> None:
        """Encode the image as an 8-bit RGBA PNG at ``path``."""
        rgba = self.to_rgba()
        stride = self._width * 4
        raw = b"".join(
            b"\x00" + rgba[row * stride : (row + 1) * stride]
            for row in range(self._height)
        )
        header = struct.pack(">IIBBBBB", self._width, self._height, 8, 6, 0, 0, 0)
        data = (
            _PNG_SIGNATURE
            + _png_chunk(b"IHDR", header)
            + _png_chunk(b"IDAT", zlib.compress(raw))
            + _png_chunk(b"IEND", b"")
        )
        with open(path, "wb") as fh:
            fh.write(data)