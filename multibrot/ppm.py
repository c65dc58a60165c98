"""Binary portable-pixmap (P6) encoding for RGB rasters."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np
import PIL.Image

from .generator import raster_capacity

MAX_DIMENSION = 65535
PIL_FORMAT = "PPM"

RasterLike = Union[bytes, bytearray, memoryview, np.ndarray]


def _as_bytes(raster: RasterLike) -> bytes:
    if isinstance(raster, np.ndarray):
        if raster.dtype != np.uint8:
            raise TypeError(f"raster array must have dtype uint8, got {raster.dtype}")
        return raster.tobytes(order="C")
    return bytes(raster)


@dataclass(frozen=True)
class PixmapImage:
    """A validated RGB raster ready to be written as a P6 pixmap."""

    width: int
    height: int
    raster: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if self.width > MAX_DIMENSION or self.height > MAX_DIMENSION:
            raise ValueError(f"width and height must be <= {MAX_DIMENSION}")

        expected = raster_capacity(self.width, self.height)
        raster = _as_bytes(self.raster)
        if len(raster) != expected:
            raise ValueError("raster length must be width * height * 3")
        object.__setattr__(self, "raster", raster)

    def to_image(self) -> PIL.Image.Image:
        return PIL.Image.frombytes("RGB", (self.width, self.height), self.raster)

    def encode(self) -> bytes:
        buffer = io.BytesIO()
        self.to_image().save(buffer, format=PIL_FORMAT)
        return buffer.getvalue()

    def write(self, output_path: Union[str, Path]) -> Path:
        """Write the encoded pixmap to ``output_path`` and return the resolved path."""

        path = Path(output_path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(str(path), format=PIL_FORMAT)
        return path.resolve()


def encode_ppm(width: int, height: int, raster: RasterLike) -> bytes:
    return PixmapImage(width, height, raster).encode()
