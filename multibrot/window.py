"""View windows: the region of the complex plane sampled onto a pixel grid."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np


@dataclass(frozen=True)
class ViewWindow:
    """Axis-aligned rectangle in the complex plane.

    Bounds are stored verbatim. A window is expected to stay finite with
    ``x_min < x_max`` and ``y_min < y_max``; degenerate windows are not
    rejected here.
    """

    x_min: float = -2.0
    x_max: float = 2.0
    y_min: float = -2.0
    y_max: float = 2.0

    @classmethod
    def full(cls) -> ViewWindow:
        """Window covering the whole Mandelbrot set."""

        return cls(-2.0, 2.0, -2.0, 2.0)

    @classmethod
    def zoomed(cls) -> ViewWindow:
        """Closer view around the origin."""

        return cls(-0.75, 0.75, -0.75, 0.75)

    @classmethod
    def classic(cls) -> ViewWindow:
        """The usual [-2, 1] x [-1, 1] framing of the Mandelbrot set."""

        return cls(-2.0, 1.0, -1.0, 1.0)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> tuple[float, float]:
        return (self.x_min + self.x_max) / 2.0, (self.y_min + self.y_max) / 2.0

    def zoom(self, factor: float) -> ViewWindow:
        """Return a window with the same center and both sides divided by ``factor``.

        ``factor`` > 1 zooms in, 0 < ``factor`` < 1 zooms out. Non-positive
        factors are not supported.
        """

        cx, cy = self.center
        half_width = np.float64(self.width) / 2.0 / np.float64(factor)
        half_height = np.float64(self.height) / 2.0 / np.float64(factor)
        return replace(
            self,
            x_min=float(cx - half_width),
            x_max=float(cx + half_width),
            y_min=float(cy - half_height),
            y_max=float(cy + half_height),
        )

    def pan(self, dx: float, dy: float) -> ViewWindow:
        return replace(
            self,
            x_min=self.x_min + dx,
            x_max=self.x_max + dx,
            y_min=self.y_min + dy,
            y_max=self.y_max + dy,
        )

    def map_pixel(self, px: int, py: int, width: int, height: int) -> tuple[float, float]:
        """Map pixel ``(px, py)`` of a ``width`` x ``height`` grid into the window.

        Row 0 maps to ``y_min``; single-pixel rows and columns map to the
        minimum bound instead of dividing by zero.
        """

        denom_x = float(max(width - 1, 1))
        denom_y = float(max(height - 1, 1))
        a = self.x_min + (px / denom_x) * (self.x_max - self.x_min)
        b = self.y_min + (py / denom_y) * (self.y_max - self.y_min)
        return a, b
