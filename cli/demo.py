#!/usr/bin/env python3
"""
Rotation Demo

Draws an arrow pointing up in the top-left corner and shows it once
per rotation, so the orientation of a mounted HAT can be checked.
"""

import argparse
import colorsys
import sys
import time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from unicorn_hd.config import add_display_arguments, config_from_args
from unicorn_hd.core import create_display, setup_logging
from unicorn_hd.errors import UnicornHDError
from unicorn_hd.frame import Rotation

ARROW = [
    "   #   ",
    "  ###  ",
    " # # # ",
    "#  #  #",
    "   #   ",
    "   #   ",
    "   #   ",
]


def draw_rainbow(display) -> None:
    for y in range(display.height):
        for x in range(display.width):
            hue = (x + y) / (display.width + display.height)
            r, g, b = colorsys.hsv_to_rgb(hue, 1.0, 0.4)
            display.set_pixel(x, y, int(r * 255), int(g * 255), int(b * 255))


def draw_arrow(display) -> None:
    for y, row in enumerate(ARROW):
        for x, c in enumerate(row):
            if c == '#':
                display.set_pixel(x + 1, y + 1, 255, 255, 255)


def main() -> int:
    parser = argparse.ArgumentParser(description="Cycle through each rotation")
    parser.add_argument("--delay", type=float, default=2.0,
                        help="Seconds to hold each rotation")
    add_display_arguments(parser)
    args = parser.parse_args()

    setup_logging()

    try:
        config = config_from_args(args)
        with create_display(config) as display:
            draw_rainbow(display)
            draw_arrow(display)
            for rotation in Rotation:
                print(f"Rotation {int(rotation)}°")
                display.set_rotation(rotation)
                display.display()
                time.sleep(args.delay)
            display.clear()
            display.display()
    except UnicornHDError as e:
        print(f"❌ Failed: {e}")
        return 1
    except KeyboardInterrupt:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
