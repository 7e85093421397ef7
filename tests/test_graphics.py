#!/usr/bin/env python3
"""
Test Graphics Module

Test image loading and text rendering against the emulated display.
"""

import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from unicorn_hd.core import EmulatedDisplay
from unicorn_hd.graphics import (
    CHAR_HEIGHT,
    DOT_MATRIX_FONT,
    draw_dot_matrix_text,
    get_color,
    get_text_width,
    resize_image,
    show_image,
    to_image,
    to_png_bytes,
)


def new_display():
    return EmulatedDisplay(stream=io.StringIO())


def lit_pixels(display):
    return {
        (x, y)
        for y, row in enumerate(display.pixels)
        for x, pixel in enumerate(row)
        if pixel != (0, 0, 0)
    }


def test_get_color():
    """Test color name, hex and tuple conversion."""
    print("\n[1] Testing color conversion...")

    assert get_color('red') == (255, 0, 0)
    assert get_color('RED') == (255, 0, 0)
    assert get_color('#ff9900') == (255, 153, 0)
    assert get_color((1, 2, 3)) == (1, 2, 3)
    print("  ✓ Names, hex and tuples work")

    with pytest.raises(ValueError):
        get_color('not-a-colour')
    with pytest.raises(ValueError):
        get_color('#fff')


def test_resize():
    """Test image resizing."""
    print("\n[2] Testing image resize...")

    wide = Image.new('RGB', (100, 50), (255, 0, 0))

    for mode in ('fill', 'fit', 'stretch'):
        resized = resize_image(wide, mode=mode)
        assert resized.size == (16, 16), f"{mode} gave {resized.size}"
    print("  ✓ All modes give 16x16")

    fitted = resize_image(wide, mode='fit')
    assert fitted.getpixel((8, 0)) == (0, 0, 0), "fit should letterbox"
    assert fitted.getpixel((8, 8)) == (255, 0, 0)

    filled = resize_image(wide, mode='fill')
    assert filled.getpixel((8, 0)) == (255, 0, 0), "fill should not letterbox"

    with pytest.raises(ValueError):
        resize_image(wide, mode='squash')


def test_show_image_from_file(tmp_path):
    """Test loading an image file into the buffer."""
    print("\n[3] Testing show_image...")

    img = Image.new('RGB', (16, 16), (0, 0, 0))
    img.putpixel((0, 0), (255, 0, 0))
    img.putpixel((15, 15), (0, 255, 0))
    path = tmp_path / "corners.png"
    img.save(path)

    display = new_display()
    show_image(display, path)

    assert display.get_pixel(0, 0) == (255, 0, 0)
    assert display.get_pixel(15, 15) == (0, 255, 0)
    assert display.get_pixel(8, 8) == (0, 0, 0)
    print("  ✓ Image pixels land at the same coordinates")


def test_to_image_round_trip():
    """Test rendering the buffer to an image."""
    print("\n[4] Testing to_image...")

    display = new_display()
    display.set_pixel(3, 4, 10, 20, 30)
    display.set_rotation(90)

    img = to_image(display)
    assert img.size == (16, 16)
    assert img.getpixel((3, 4)) == (10, 20, 30), "Image should be unrotated"

    big = to_image(display, scale=4)
    assert big.size == (64, 64)
    assert big.getpixel((3 * 4 + 1, 4 * 4 + 2)) == (10, 20, 30)


def test_png_bytes():
    """Test PNG conversion."""
    print("\n[5] Testing PNG conversion...")

    png_bytes = to_png_bytes(to_image(new_display()))

    assert isinstance(png_bytes, bytes)
    assert png_bytes[:8] == b'\x89PNG\r\n\x1a\n', "Not valid PNG"
    print(f"  ✓ PNG conversion works ({len(png_bytes)} bytes)")


def test_dot_matrix_text():
    """Test tiny text rendering."""
    print("\n[6] Testing dot matrix text...")

    assert get_text_width("") == 0
    assert get_text_width("A") == 3
    assert get_text_width("HI!") == 3 * 3 + 2

    display = new_display()
    draw_dot_matrix_text(display, "I", 0, 0, 'white')
    expected = {
        (x, y)
        for y, row in enumerate(DOT_MATRIX_FONT['I'])
        for x, c in enumerate(row)
        if c == '#'
    }
    assert lit_pixels(display) == expected
    assert display.get_pixel(1, 2) == (255, 255, 255)
    print("  ✓ Glyph drawn at origin")


def test_dot_matrix_text_clips_and_centers():
    display = new_display()
    draw_dot_matrix_text(display, "HELLO", 14, 0, 'red')
    assert all(x < 16 for x, _ in lit_pixels(display)), "Text should be clipped"

    display.clear()
    draw_dot_matrix_text(display, "OK", color='green', center=True)
    lit = lit_pixels(display)
    ys = {y for _, y in lit}
    assert min(ys) == (16 - CHAR_HEIGHT) // 2
    xs = {x for x, _ in lit}
    assert min(xs) == (16 - get_text_width("OK")) // 2


def main():
    print("\n" + "=" * 50)
    print("   Graphics Module Tests")
    print("=" * 50)

    sys.exit(pytest.main([__file__, "-q"]))


if __name__ == "__main__":
    main()
