import numpy as np
import pytest

from multibrot import (
    Mandelbrot,
    Multibrot,
    ViewWindow,
    colorize,
    escape_iterations,
    palette,
    raster_capacity,
)
from multibrot.generator import PROGRESS_CADENCE


@pytest.mark.parametrize("size", [(1, 1), (3, 2), (2, 3), (7, 5), (16, 1)])
def test_raster_length(size):
    width, height = size

    raster = Multibrot(2.0, 20).generate(width, height)

    assert raster.dtype == np.uint8
    assert raster.shape == (width * height * 3,)


@pytest.mark.parametrize("size", [(0, 0), (0, 5), (5, 0), (0, 65535)])
def test_zero_dimension_gives_empty_raster(size):
    raster = Multibrot().generate(*size)

    assert raster.size == 0
    assert raster.tobytes() == b""


def test_negative_dimension_is_rejected():
    with pytest.raises(ValueError):
        Multibrot().generate(-1, 4)


def test_capacity_overflow_fails_cleanly():
    with pytest.raises(OverflowError, match="image dimensions too large"):
        raster_capacity(2 ** 40, 2 ** 40)
    with pytest.raises(OverflowError, match="image dimensions too large"):
        Multibrot().generate(2 ** 40, 2 ** 40)


def test_capacity():
    assert raster_capacity(65535, 65535) == 65535 * 65535 * 3
    assert raster_capacity(0, 10) == 0


def test_max_iter_is_validated_on_construction():
    with pytest.raises(ValueError, match="max_iter must be > 0"):
        Multibrot(2.0, 0)
    with pytest.raises(ValueError, match="max_iter must be > 0"):
        Mandelbrot(0)


def test_generation_is_deterministic():
    first = Multibrot(3.0, 50, ViewWindow.zoomed()).generate(24, 17)
    second = Multibrot(3.0, 50, ViewWindow.zoomed()).generate(24, 17)

    assert first.tobytes() == second.tobytes()


def test_single_iteration_budget_is_all_black():
    raster = Multibrot(2.0, 1, ViewWindow.full()).generate(3, 3)

    assert raster.tobytes() == bytes(27)


def test_origin_pixel_is_black_and_corner_escapes():
    generator = Multibrot(2.0, 100, ViewWindow.full())

    counts = generator.iterations(5, 5)
    raster = generator.generate(5, 5).reshape(5, 5, 3)

    assert counts[2, 2] == 100
    assert tuple(raster[2, 2]) == (0, 0, 0)
    # Pixel (0, 0) is c = -2 - 2i, outside the escape radius.
    assert counts[0, 0] == 1
    assert tuple(raster[0, 0]) == palette(1, 100)


def test_row_major_order_without_vertical_flip():
    window = ViewWindow(-2.0, 0.5, -0.25, 1.5)
    generator = Multibrot(2.0, 40, window)
    width, height = 9, 6

    counts = generator.iterations(width, height)
    raster = generator.generate(width, height)

    for py in range(height):
        for px in range(width):
            a, b = window.map_pixel(px, py, width, height)
            assert counts[py, px] == escape_iterations(complex(a, b), 2.0, 40)
            offset = (py * width + px) * 3
            assert tuple(raster[offset:offset + 3]) == palette(int(counts[py, px]), 40)

    np.testing.assert_array_equal(raster.reshape(height, width, 3), colorize(counts, 40))


def test_non_integer_exponent_renders():
    raster = Multibrot(2.5, 30).generate(8, 8)

    assert raster.size == 8 * 8 * 3
    assert raster.any()


def test_progress_observer_does_not_change_result():
    generator = Multibrot(2.0, 5)
    width, height = 120, 100
    calls = []

    with_progress = generator.generate(width, height, progress=lambda done, total: calls.append((done, total)))
    without_progress = generator.generate(width, height)

    assert with_progress.tobytes() == without_progress.tobytes()
    assert calls == [(PROGRESS_CADENCE, width * height), (width * height, width * height)]


def test_progress_observer_reports_completion_on_small_grids():
    calls = []

    Multibrot(2.0, 5).generate(4, 4, progress=lambda done, total: calls.append((done, total)))

    assert calls == [(16, 16)]


def test_mandelbrot_defaults():
    generator = Mandelbrot()

    assert generator.max_iter == 100
    assert generator.params.n == 2.0
    assert generator.view_window == ViewWindow.classic()
    assert str(generator) == "Mandelbrot [max_iter=100]"


def test_multibrot_defaults():
    generator = Multibrot()

    assert generator.n == 2.0
    assert generator.max_iter == 100
    assert generator.view_window == ViewWindow.full()
    assert str(generator) == "Multibrot [n=2.0,max_iter=100]"
    assert str(Multibrot(3, 50)) == "Multibrot [n=3.0,max_iter=50]"


def test_mandelbrot_fast_path_matches_multibrot():
    window = ViewWindow.classic()

    fast = Mandelbrot(60, window).generate(31, 21)
    general = Multibrot(2.0, 60, window).generate(31, 21)

    assert fast.tobytes() == general.tobytes()


def test_generators_compare_by_value():
    assert Multibrot(2.0, 10) == Multibrot(2.0, 10)
    assert Multibrot(2.0, 10) != Multibrot(3.0, 10)


def test_negative_exponent_raster_is_black():
    # Every orbit starts at 0 ** n, which is not finite for n < 0.
    raster = Multibrot(-1.0, 100).generate(3, 3)

    assert raster.tobytes() == bytes(27)


def test_base_generator_cannot_be_instantiated():
    from multibrot import FractalParameters, RasterGenerator

    with pytest.raises(TypeError):
        RasterGenerator(FractalParameters())
