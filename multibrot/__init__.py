"""Public API for multibrot raster rendering and pixmap output."""

from .window import ViewWindow
from .renderer import (
    FractalParameters,
    colorize,
    escape_iterations,
    mandelbrot_iterations,
    palette,
    ramp,
)
from .generator import Mandelbrot, Multibrot, RasterGenerator, raster_capacity
from .ppm import PixmapImage, encode_ppm

__all__ = [
    "FractalParameters",
    "Mandelbrot",
    "Multibrot",
    "PixmapImage",
    "RasterGenerator",
    "ViewWindow",
    "colorize",
    "encode_ppm",
    "escape_iterations",
    "mandelbrot_iterations",
    "palette",
    "ramp",
    "raster_capacity",
]
