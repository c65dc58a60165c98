"""Escape-time iteration and colouring primitives for multibrot rasters."""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass

import numpy as np

ESCAPE_RADIUS_SQUARED = 4.0
INSIDE_COLOR = (0, 0, 0)


@dataclass(frozen=True)
class FractalParameters:
    """Parameters of the recurrence ``z -> z**n + c``."""

    max_iter: int = 100
    n: float = 2.0

    def __post_init__(self) -> None:
        if isinstance(self.max_iter, bool) or not isinstance(self.max_iter, (int, np.integer)):
            raise TypeError(f"max_iter must be an integer, got {self.max_iter!r}")
        if self.max_iter <= 0:
            raise ValueError("max_iter must be > 0")


def _magnitude_power(r: float, n: float) -> float:
    try:
        return r ** n
    except (ZeroDivisionError, OverflowError):
        return math.inf


def _power(z: complex, n: float) -> complex:
    """``z ** n`` in polar form once the fast path cannot represent the result.

    Zero to a negative power and overflowing magnitudes become an infinite
    modulus at angle ``n * arg(z)``. At angle zero that is ``inf + nan*i``,
    which never passes the escape test, and non-finite iterates stay
    non-finite.
    """

    if z != 0 and cmath.isfinite(z):
        try:
            return z ** n
        except OverflowError:
            pass
    modulus = _magnitude_power(abs(z), n)
    angle = cmath.phase(z) * n
    return complex(modulus * math.cos(angle), modulus * math.sin(angle))


def escape_iterations(c: complex, n: float, max_iter: int) -> int:
    """Count iterations of ``z -> z**n + c`` from ``z = 0`` before ``|z|**2 > 4``.

    The escape test runs before each update, so the result lies in
    ``[0, max_iter]`` and ``max_iter`` means the point did not escape.
    """

    z = 0j
    iteration = 0
    while iteration < max_iter:
        if z.real * z.real + z.imag * z.imag > ESCAPE_RADIUS_SQUARED:
            break
        z = _power(z, n) + c
        iteration += 1
    return iteration


def mandelbrot_iterations(a: float, b: float, max_iter: int) -> int:
    """Escape count for ``z -> z**2 + c`` using real arithmetic only."""

    zr = 0.0
    zi = 0.0
    iteration = 0
    while iteration < max_iter:
        zr2 = zr * zr
        zi2 = zi * zi
        if zr2 + zi2 > ESCAPE_RADIUS_SQUARED:
            break
        zi = 2.0 * zr * zi + b
        zr = zr2 - zi2 + a
        iteration += 1
    return iteration


def ramp(t) -> np.ndarray:
    """Polynomial colour ramp for escape fractions ``t`` in ``[0, 1]``.

    Accepts a scalar or an array and returns ``uint8`` values with a trailing
    RGB axis. Channels are truncated toward zero, not rounded.
    """

    t = np.asarray(t, dtype=np.float64)
    s = 1.0 - t
    r = 9.0 * s * t * t * t * 255.0
    g = 15.0 * s * s * t * t * 255.0
    b = 8.5 * s * s * s * t * 255.0
    rgb = np.stack((r, g, b), axis=-1)
    return np.clip(rgb, 0.0, 255.0).astype(np.uint8)


def colorize(iterations: np.ndarray, max_iter: int) -> np.ndarray:
    """Map an array of escape counts to RGB, painting non-escaping points black."""

    iterations = np.asarray(iterations)
    t = iterations.astype(np.float64) / np.float64(max_iter)
    rgb = ramp(t)
    rgb[iterations >= max_iter] = INSIDE_COLOR
    return rgb


def palette(iteration: int, max_iter: int) -> tuple[int, int, int]:
    r, g, b = colorize(np.array(iteration), max_iter)
    return int(r), int(g), int(b)
