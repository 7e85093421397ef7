#!/usr/bin/env python3
"""
Send Text to the Display

Show up to four characters in the 3x5 dot-matrix font, or scroll
longer text across the display with --scroll.
"""

import argparse
import sys
import time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from unicorn_hd.config import add_display_arguments, config_from_args
from unicorn_hd.core import create_display, setup_logging
from unicorn_hd.errors import UnicornHDError
from unicorn_hd.frame import WIDTH
from unicorn_hd.graphics import CHAR_HEIGHT, draw_dot_matrix_text, get_text_width


def scroll_text(display, text: str, color: str, delay: float) -> None:
    """Move text from the right edge until it has left on the left."""
    y = (display.height - CHAR_HEIGHT) // 2
    for x in range(WIDTH, -get_text_width(text) - 1, -1):
        display.clear()
        draw_dot_matrix_text(display, text, x, y, color)
        display.display()
        time.sleep(delay)


def main() -> int:
    parser = argparse.ArgumentParser(description="Show text on the Unicorn HAT HD")
    parser.add_argument("text", help="Text to show")
    parser.add_argument("--color", default="amber", help="Color name or #rrggbb")
    parser.add_argument("--scroll", action="store_true", help="Scroll the text")
    parser.add_argument("--delay", type=float, default=0.08,
                        help="Seconds between scroll steps")
    add_display_arguments(parser)
    args = parser.parse_args()

    setup_logging()

    try:
        config = config_from_args(args)
        with create_display(config) as display:
            if args.scroll:
                scroll_text(display, args.text, args.color, args.delay)
            else:
                draw_dot_matrix_text(display, args.text, color=args.color, center=True)
                display.display()
    except (UnicornHDError, ValueError) as e:
        print(f"❌ Failed: {e}")
        return 1
    except KeyboardInterrupt:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
