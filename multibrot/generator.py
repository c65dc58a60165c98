"""Raster generators that turn a view window into a flat RGB byte buffer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from .renderer import FractalParameters, colorize, escape_iterations, mandelbrot_iterations
from .window import ViewWindow

PROGRESS_CADENCE = 10_000
MAX_RASTER_BYTES = int(np.iinfo(np.intp).max)

ProgressCallback = Callable[[int, int], None]


def raster_capacity(width: int, height: int) -> int:
    """Return ``width * height * 3``, refusing sizes no buffer can hold."""

    if width < 0 or height < 0:
        raise ValueError(f"width and height must be >= 0, got {width}x{height}")
    capacity = int(width) * int(height) * 3
    if capacity > MAX_RASTER_BYTES:
        raise OverflowError("image dimensions too large")
    return capacity


@dataclass(frozen=True)
class RasterGenerator(ABC):
    """Shared pixel loop for escape-time rasters.

    Subclasses supply :meth:`escape_time` for a single point ``a + bi``.
    """

    params: FractalParameters
    view_window: ViewWindow = field(default_factory=ViewWindow.full)

    @property
    def max_iter(self) -> int:
        return self.params.max_iter

    @abstractmethod
    def escape_time(self, a: float, b: float) -> int:
        """Escape count for the point ``a + bi``."""

    def iterations(
        self,
        width: int,
        height: int,
        progress: Optional[ProgressCallback] = None,
    ) -> np.ndarray:
        """Escape counts for every pixel as a ``(height, width)`` array."""

        capacity = raster_capacity(width, height)
        counts = np.zeros((height, width), dtype=np.int64)
        if capacity == 0:
            return counts

        total = width * height
        done = 0
        for py in range(height):
            for px in range(width):
                a, b = self.view_window.map_pixel(px, py, width, height)
                counts[py, px] = self.escape_time(a, b)
                done += 1
                if progress is not None and done % PROGRESS_CADENCE == 0:
                    progress(done, total)

        if progress is not None:
            progress(done, total)
        return counts

    def generate(
        self,
        width: int,
        height: int,
        progress: Optional[ProgressCallback] = None,
    ) -> np.ndarray:
        """Render a row-major RGB raster of ``width * height * 3`` bytes.

        Row ``py = 0`` corresponds to ``view_window.y_min``. A zero width or
        height yields an empty buffer. ``progress(done, total)`` is called
        every ``PROGRESS_CADENCE`` pixels and once when the grid is complete.
        """

        capacity = raster_capacity(width, height)
        if capacity == 0:
            return np.empty(0, dtype=np.uint8)

        counts = self.iterations(width, height, progress)
        raster = colorize(counts, self.max_iter).reshape(-1)
        return raster


@dataclass(frozen=True, init=False)
class Multibrot(RasterGenerator):
    """Multibrot set for ``z -> z**n + c`` with a real exponent ``n``."""

    def __init__(
        self,
        n: float = 2.0,
        max_iter: int = 100,
        view_window: Optional[ViewWindow] = None,
    ) -> None:
        object.__setattr__(self, "params", FractalParameters(max_iter=max_iter, n=float(n)))
        object.__setattr__(self, "view_window", view_window if view_window is not None else ViewWindow.full())

    @property
    def n(self) -> float:
        return self.params.n

    def escape_time(self, a: float, b: float) -> int:
        return escape_iterations(complex(a, b), self.params.n, self.params.max_iter)

    def __str__(self) -> str:
        return f"Multibrot [n={self.n},max_iter={self.max_iter}]"


@dataclass(frozen=True, init=False)
class Mandelbrot(RasterGenerator):
    """Classic Mandelbrot set (``n = 2``) iterated on real and imaginary parts."""

    def __init__(self, max_iter: int = 100, view_window: Optional[ViewWindow] = None) -> None:
        object.__setattr__(self, "params", FractalParameters(max_iter=max_iter, n=2.0))
        object.__setattr__(self, "view_window", view_window if view_window is not None else ViewWindow.classic())

    def escape_time(self, a: float, b: float) -> int:
        return mandelbrot_iterations(a, b, self.params.max_iter)

    def __str__(self) -> str:
        return f"Mandelbrot [max_iter={self.max_iter}]"
