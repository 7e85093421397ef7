#!/usr/bin/env python3
"""
Send Image to the Display

Scale an image file down to 16x16 and show it on the Unicorn HAT HD,
or in the terminal with --emulate.
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from unicorn_hd.config import add_display_arguments, config_from_args
from unicorn_hd.core import create_display, setup_logging
from unicorn_hd.errors import UnicornHDError
from unicorn_hd.graphics import show_image


def main() -> int:
    parser = argparse.ArgumentParser(description="Show an image on the Unicorn HAT HD")
    parser.add_argument("image", type=Path, help="Image file to show")
    parser.add_argument("--mode", choices=["fill", "fit", "stretch"], default="fill",
                        help="How to fit the image to 16x16")
    add_display_arguments(parser)
    args = parser.parse_args()

    setup_logging()

    if not args.image.exists():
        print(f"❌ Image not found: {args.image}")
        return 1

    try:
        config = config_from_args(args)
        with create_display(config) as display:
            show_image(display, args.image, args.mode)
            display.display()
    except UnicornHDError as e:
        print(f"❌ Failed: {e}")
        return 1

    print(f"✓ Showing {args.image.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
