"""
Graphics Module - Image and text helpers for the 16x16 display.

Supports:
- Named, hex, and tuple colours
- Loading any image into the pixel buffer with various fit modes
- Rendering the buffer back out as an image or PNG
- Tiny 3x5 dot-matrix text (four characters across)
"""

from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Union

from PIL import Image

from .frame import HEIGHT, WIDTH

if TYPE_CHECKING:
    from .core import Display

# =============================================================================
# Constants
# =============================================================================

COLORS = {
    'black': (0, 0, 0),
    'white': (255, 255, 255),
    'red': (255, 0, 0),
    'green': (0, 255, 0),
    'blue': (0, 0, 255),
    'yellow': (255, 255, 0),
    'orange': (255, 153, 0),
    'cyan': (0, 255, 255),
    'magenta': (255, 0, 255),
    'amber': (255, 191, 0),
    'purple': (128, 0, 255),
}

FitMode = Literal['fit', 'fill', 'stretch']


# =============================================================================
# Dot Matrix Font (3x5 pixel characters)
# =============================================================================

DOT_MATRIX_FONT = {
    'A': ["###", "# #", "###", "# #", "# #"],
    'B': ["## ", "# #", "## ", "# #", "## "],
    'C': ["###", "#  ", "#  ", "#  ", "###"],
    'D': ["## ", "# #", "# #", "# #", "## "],
    'E': ["###", "#  ", "## ", "#  ", "###"],
    'F': ["###", "#  ", "## ", "#  ", "#  "],
    'G': ["###", "#  ", "# #", "# #", "###"],
    'H': ["# #", "# #", "###", "# #", "# #"],
    'I': ["###", " # ", " # ", " # ", "###"],
    'J': ["  #", "  #", "  #", "# #", "###"],
    'K': ["# #", "# #", "## ", "# #", "# #"],
    'L': ["#  ", "#  ", "#  ", "#  ", "###"],
    'M': ["# #", "###", "###", "# #", "# #"],
    'N': ["## ", "# #", "# #", "# #", "# #"],
    'O': ["###", "# #", "# #", "# #", "###"],
    'P': ["###", "# #", "###", "#  ", "#  "],
    'Q': ["###", "# #", "# #", "###", "  #"],
    'R': ["## ", "# #", "## ", "# #", "# #"],
    'S': ["###", "#  ", "###", "  #", "###"],
    'T': ["###", " # ", " # ", " # ", " # "],
    'U': ["# #", "# #", "# #", "# #", "###"],
    'V': ["# #", "# #", "# #", "# #", " # "],
    'W': ["# #", "# #", "###", "###", "# #"],
    'X': ["# #", "# #", " # ", "# #", "# #"],
    'Y': ["# #", "# #", " # ", " # ", " # "],
    'Z': ["###", "  #", " # ", "#  ", "###"],
    '0': ["###", "# #", "# #", "# #", "###"],
    '1': [" # ", "## ", " # ", " # ", "###"],
    '2': ["###", "  #", "###", "#  ", "###"],
    '3': ["###", "  #", " ##", "  #", "###"],
    '4': ["# #", "# #", "###", "  #", "  #"],
    '5': ["###", "#  ", "###", "  #", "###"],
    '6': ["###", "#  ", "###", "# #", "###"],
    '7': ["###", "  #", "  #", " # ", " # "],
    '8': ["###", "# #", "###", "# #", "###"],
    '9': ["###", "# #", "###", "  #", "###"],
    ' ': ["   ", "   ", "   ", "   ", "   "],
    '.': ["   ", "   ", "   ", "   ", " # "],
    ':': ["   ", " # ", "   ", " # ", "   "],
    '-': ["   ", "   ", "###", "   ", "   "],
    '!': [" # ", " # ", " # ", "   ", " # "],
}

CHAR_WIDTH = 3
CHAR_HEIGHT = 5
CHAR_SPACING = 1


# =============================================================================
# Color Helpers
# =============================================================================

def get_color(color: Union[str, tuple]) -> tuple:
    """Convert color name, hex, or tuple to an RGB tuple."""
    if isinstance(color, tuple):
        if len(color) != 3:
            raise ValueError(f"Expected an (r, g, b) tuple, got {color!r}")
        return tuple(int(c) for c in color)
    if isinstance(color, str):
        # Hex colors like #ff9900
        if color.startswith('#'):
            hex_color = color.lstrip('#')
            if len(hex_color) == 6:
                return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))
            raise ValueError(f"Bad hex color: {color!r}")
        try:
            return COLORS[color.lower()]
        except KeyError:
            raise ValueError(f"Unknown color: {color!r}") from None
    raise TypeError(f"Unsupported color type: {type(color).__name__}")


# =============================================================================
# Image Resizing
# =============================================================================

def resize_image(
    img: Union[Image.Image, Path, str],
    width: int = WIDTH,
    height: int = HEIGHT,
    mode: FitMode = 'fill'
) -> Image.Image:
    """
    Resize an image to exact dimensions.

    Modes:
    - fit: Scale to fit within bounds, add black bars if needed
    - fill: Scale and crop to fill exactly (no bars, may crop)
    - stretch: Stretch to exact size (may distort)
    """
    if isinstance(img, (Path, str)):
        img = Image.open(img)

    img = img.convert('RGB')

    if mode == 'stretch':
        return img.resize((width, height), Image.Resampling.LANCZOS)

    src_ratio = img.width / img.height
    dst_ratio = width / height

    if mode == 'fill':
        if src_ratio > dst_ratio:
            new_height = height
            new_width = max(width, round(height * src_ratio))
        else:
            new_width = width
            new_height = max(height, round(width / src_ratio))

        img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

        # Center crop
        left = (new_width - width) // 2
        top = (new_height - height) // 2
        return img.crop((left, top, left + width, top + height))

    if mode == 'fit':
        if src_ratio > dst_ratio:
            new_width = width
            new_height = max(1, round(width / src_ratio))
        else:
            new_height = height
            new_width = max(1, round(height * src_ratio))

        img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

        # Black background, pasted centered
        result = Image.new('RGB', (width, height), (0, 0, 0))
        result.paste(img, ((width - new_width) // 2, (height - new_height) // 2))
        return result

    raise ValueError(f"Unknown resize mode: {mode!r}")


# =============================================================================
# Buffer <-> Image
# =============================================================================

def show_image(
    display: "Display",
    img: Union[Image.Image, Path, str],
    mode: FitMode = 'fill'
) -> None:
    """Copy an image into the display buffer. Call display.display() to show it."""
    img = resize_image(img, WIDTH, HEIGHT, mode)
    for y in range(HEIGHT):
        for x in range(WIDTH):
            r, g, b = img.getpixel((x, y))
            display.set_pixel(x, y, r, g, b)


def to_image(display: "Display", scale: int = 1) -> Image.Image:
    """Render the logical (unrotated) buffer as an RGB image."""
    img = Image.new('RGB', (WIDTH, HEIGHT))
    img.putdata([pixel for row in display.pixels for pixel in row])
    if scale > 1:
        img = img.resize((WIDTH * scale, HEIGHT * scale), Image.Resampling.NEAREST)
    return img


def to_png_bytes(img: Image.Image) -> bytes:
    """Convert PIL Image to PNG bytes."""
    buf = BytesIO()
    img.save(buf, format='PNG', optimize=False)
    return buf.getvalue()


# =============================================================================
# Dot Matrix Text Rendering
# =============================================================================

def get_text_width(text: str) -> int:
    """Calculate pixel width of text in the dot matrix font."""
    width = 0
    for char in text.upper():
        if char in DOT_MATRIX_FONT:
            width += CHAR_WIDTH + CHAR_SPACING
    return max(0, width - CHAR_SPACING)


def draw_dot_matrix_char(
    display: "Display",
    char: str,
    x: int,
    y: int,
    color: tuple = (255, 191, 0)
) -> int:
    """Draw a single character, clipped to the display. Returns width used."""
    pattern = DOT_MATRIX_FONT.get(char.upper())
    if pattern is None:
        return 0

    for row_idx, row in enumerate(pattern):
        for col_idx, pixel in enumerate(row):
            px, py = x + col_idx, y + row_idx
            if pixel == '#' and 0 <= px < WIDTH and 0 <= py < HEIGHT:
                display.set_pixel(px, py, *color)

    return CHAR_WIDTH + CHAR_SPACING


def draw_dot_matrix_text(
    display: "Display",
    text: str,
    x: int = 0,
    y: int = 0,
    color: Union[str, tuple] = 'amber',
    center: bool = False
) -> None:
    """
    Draw text into the display buffer.

    Characters missing from the font are skipped. Pixels falling off
    the edge are dropped, so text can be scrolled by moving x.
    """
    color = get_color(color)

    if center:
        x = (WIDTH - get_text_width(text)) // 2
        y = (HEIGHT - CHAR_HEIGHT) // 2

    cursor_x = x
    for char in text:
        cursor_x += draw_dot_matrix_char(display, char, cursor_x, y, color)
