import sys
import time
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
from tqdm import tqdm

from multibrot import Mandelbrot, Multibrot, PixmapImage, RasterGenerator, ViewWindow
from multibrot.ppm import MAX_DIMENSION

VERBOSE = False

VARIANTS = ("multibrot", "mandelbrot")


def log(message, *args, **kwargs) -> None:
    if VERBOSE:
        print(message, *args, **kwargs)


@dataclass
class RenderConfig:
    width: int
    height: int
    output_path: Path
    zoomed: bool
    n: float
    max_iterations: int
    variant: str
    show_progress: bool


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Render a multibrot set to a binary PPM image.")

    parser.add_argument('--width', type=int,
                        dest='width', help='output image width in pixels (1-65535)',
                        metavar='WIDTH', default=1000)

    parser.add_argument('--height', type=int,
                        dest='height', help='output image height in pixels (1-65535)',
                        metavar='HEIGHT', default=1000)

    parser.add_argument('-o', '--output-path', type=str,
                        dest='output_path', help='file to write the PPM image to',
                        metavar='OUTPUT_PATH', default='output.ppm')

    parser.add_argument('-z', '--zoomed', action='store_true',
                        help='render the zoomed [-0.75, 0.75] window instead of the full set')

    parser.add_argument('-n', type=float,
                        dest='n', help='multibrot exponent, where z -> z^n + c is iterated',
                        metavar='N', default=2.0)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='maximum number of iterations per pixel',
                        metavar='MAX_ITERATIONS', default=100)

    parser.add_argument('--variant', choices=VARIANTS, default='multibrot',
                        help='"multibrot" uses complex powers; "mandelbrot" is the real-arithmetic n=2 fast path.')

    parser.add_argument('--no-progress', dest='no_progress', action='store_true',
                        help='Do not display the progress bar.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging.')

    return parser


def resolve_config(opt, parser: ArgumentParser) -> RenderConfig:
    for name in ("width", "height"):
        value = getattr(opt, name)
        if not 1 <= value <= MAX_DIMENSION:
            parser.error(f"--{name} must be between 1 and {MAX_DIMENSION}, got {value}.")

    if opt.max_iterations <= 0:
        parser.error("--max-iterations must be > 0.")

    if opt.variant == "mandelbrot" and opt.n != 2.0:
        parser.error("-n is only valid with the multibrot variant.")

    output_arg = str(opt.output_path)
    if output_arg.endswith("/") or Path(output_arg).is_dir():
        parser.error("--output-path must be a file path, not a directory.")

    return RenderConfig(
        width=opt.width,
        height=opt.height,
        output_path=Path(output_arg).expanduser(),
        zoomed=bool(opt.zoomed),
        n=float(opt.n),
        max_iterations=opt.max_iterations,
        variant=opt.variant,
        show_progress=not opt.no_progress,
    )


def build_generator(config: RenderConfig) -> RasterGenerator:
    if config.variant == "mandelbrot":
        view_window = ViewWindow.zoomed() if config.zoomed else ViewWindow.classic()
        return Mandelbrot(config.max_iterations, view_window)

    view_window = ViewWindow.zoomed() if config.zoomed else ViewWindow.full()
    return Multibrot(config.n, config.max_iterations, view_window)


def render_raster(generator: RasterGenerator, config: RenderConfig) -> np.ndarray:
    if not config.show_progress:
        return generator.generate(config.width, config.height)

    description = "Building {0} raster".format(type(generator).__name__)
    with tqdm(total=config.width * config.height, desc=description, unit="px") as bar:
        return generator.generate(
            config.width,
            config.height,
            progress=lambda done, total: bar.update(done - bar.n),
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    start = time.perf_counter()
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    config = resolve_config(opt, parser)
    generator = build_generator(config)
    log("Rendering %s over %s" % (generator, generator.view_window))

    raster = render_raster(generator, config)
    log("Raster complete: %d bytes" % raster.size)

    image = PixmapImage(config.width, config.height, raster)
    try:
        written = image.write(config.output_path)
    except OSError as exc:
        sys.exit(f"Error creating ppm file: {exc}")

    print(
        '  Wrote {0} x {1} {2} (n={3}) image to "{4}" in {5:.2f}s'.format(
            config.width,
            config.height,
            config.variant,
            generator.params.n,
            written,
            time.perf_counter() - start,
        )
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
