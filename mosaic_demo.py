"""
Mosaic demos.

  blink: random squares change to random colors ("Blinking Random Colored Squares")
  walk:  a random walker brightens every square it visits, wrapping at the edges

Run with --help for options. Close the window or press Ctrl-C to stop.
"""

import argparse
import functools
import logging
import random
import sys
from typing import Optional

import mosaic
import mosaic_style
from mosaic_surface import PygameSurface

logger = logging.getLogger(__name__)

BRIGHTEN_STEP = 25


def blink(window: mosaic.MosaicWindow, delay_ms: int, steps: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
    rng = rng or random.Random()
    done = 0
    while steps is None or done < steps:
        r = rng.randrange(window.rows)
        c = rng.randrange(window.columns)
        window.set_color(r, c, rng.randrange(256), rng.randrange(256), rng.randrange(256))
        mosaic.delay(delay_ms)
        done += 1


def brighten(window: mosaic.MosaicWindow, r: int, c: int) -> None:
    red = window.get_red(r, c)
    green = window.get_green(r, c)
    blue = window.get_blue(r, c)
    window.set_color(r, c, red + BRIGHTEN_STEP, green, blue + BRIGHTEN_STEP // 2)


def walk(window: mosaic.MosaicWindow, delay_ms: int, steps: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
    rng = rng or random.Random()
    r, c = window.rows // 2, window.columns // 2
    done = 0
    while steps is None or done < steps:
        brighten(window, r, c)
        dr, dc = rng.choice([(-1, 0), (1, 0), (0, -1), (0, 1)])
        r = (r + dr) % window.rows
        c = (c + dc) % window.columns
        mosaic.delay(delay_ms)
        done += 1


DEMOS = {"blink": blink, "walk": walk}


def make_window(flat: bool = False) -> mosaic.MosaicWindow:
    # Closing the demo window ends the program.
    return mosaic.MosaicWindow(
        surface_factory=functools.partial(PygameSurface, exit_on_close=True),
        use_3d_effect=not flat,
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Mosaic demos")
    parser.add_argument("--demo", choices=sorted(DEMOS), default="blink", help="Which animation to run.")
    parser.add_argument("--rows", type=int, default=30)
    parser.add_argument("--columns", type=int, default=30)
    parser.add_argument("--block-size", type=int, default=mosaic_style.DEFAULT_BLOCK_SIZE,
                        help="Preferred width and height of each square in pixels.")
    parser.add_argument("--delay", type=int, default=10, help="Milliseconds between updates.")
    parser.add_argument("--steps", type=int, default=None, help="Stop after this many updates.")
    parser.add_argument("--flat", action="store_true", help="Flat squares without grouting.")
    parser.add_argument("--verbose", action="store_true")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.rows <= 0 or args.columns <= 0:
        parser.error("--rows and --columns must be positive")

    window = make_window(flat=args.flat)
    window.open(args.rows, args.columns, args.block_size, args.block_size)

    try:
        DEMOS[args.demo](window, args.delay, args.steps)
    except KeyboardInterrupt:
        logger.info("Stopped.")
    finally:
        window.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
