"""
Frame Encoding Module

Pure helpers that turn the 16x16 pixel buffer into the byte stream the
Unicorn HAT HD expects: a one byte start-of-frame command followed by
768 bytes of RGB data.

Rotations are applied here and nowhere else. The stored buffer is
always in logical order; a rotation only changes where each logical
pixel lands in the outgoing payload.
"""

from enum import IntEnum
from functools import lru_cache
from typing import Iterator, Sequence, Union

# =============================================================================
# Constants
# =============================================================================

WIDTH = 16
HEIGHT = 16
NUM_PIXELS = WIDTH * HEIGHT
BYTES_PER_PIXEL = 3
PAYLOAD_SIZE = NUM_PIXELS * BYTES_PER_PIXEL  # 768

SOF = 0x72  # Start of frame command
HEADER = bytes([SOF])
FRAME_SIZE = len(HEADER) + PAYLOAD_SIZE

Pixel = tuple[int, int, int]


# =============================================================================
# Rotation
# =============================================================================

class Rotation(IntEnum):
    """Clockwise rotation applied to the buffer before it is sent."""
    NONE = 0
    CW90 = 90
    ROT180 = 180
    CCW90 = 270

    @classmethod
    def parse(cls, value: Union["Rotation", int, str]) -> "Rotation":
        """
        Convert degrees (or a Rotation) to a Rotation.

        Accepts any multiple of 90, including negative values and values
        of 360 or more, e.g. -90 is the same as 270.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            value = value.strip().rstrip("°")
        try:
            degrees = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid rotation: {value!r}") from None
        if degrees % 90:
            raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
        return cls(degrees % 360)


def rotate_coordinates(x: int, y: int, rotation: Rotation) -> tuple[int, int]:
    """
    Map a logical coordinate to its physical coordinate.

    Each quarter turn clockwise sends (x, y) to (15 - y, x).
    """
    rotation = Rotation.parse(rotation)
    for _ in range(int(rotation) // 90):
        x, y = WIDTH - 1 - y, x
    return x, y


def physical_index(x: int, y: int, rotation: Rotation = Rotation.NONE) -> int:
    """
    Return the payload pixel offset that logical pixel (x, y) is sent at.

    Multiply by BYTES_PER_PIXEL (and add the header length) for a byte
    offset into the encoded frame.
    """
    if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
        raise ValueError(f"Pixel ({x}, {y}) is outside the {WIDTH}x{HEIGHT} grid")
    px, py = rotate_coordinates(x, y, rotation)
    return py * WIDTH + px


@lru_cache(maxsize=None)
def rotation_map(rotation: Rotation) -> tuple[int, ...]:
    """Physical offsets for every logical pixel, indexed by y * WIDTH + x."""
    rotation = Rotation.parse(rotation)
    return tuple(
        physical_index(x, y, rotation)
        for y in range(HEIGHT)
        for x in range(WIDTH)
    )


# =============================================================================
# Encoding
# =============================================================================

def encode_frame(
    pixels: Sequence[Pixel],
    rotation: Rotation = Rotation.NONE,
    brightness: float = 1.0,
) -> bytes:
    """
    Encode a logical buffer into a complete frame.

    Args:
        pixels: 256 (r, g, b) tuples in logical row-major order.
        rotation: Rotation to apply on the way out.
        brightness: Scale factor in [0, 1] applied to every channel.

    Returns:
        FRAME_SIZE bytes: HEADER followed by the 768 byte payload.
    """
    if len(pixels) != NUM_PIXELS:
        raise ValueError(f"Expected {NUM_PIXELS} pixels, got {len(pixels)}")
    if not 0.0 <= brightness <= 1.0:
        raise ValueError(f"Brightness must be between 0.0 and 1.0, got {brightness}")

    mapping = rotation_map(Rotation.parse(rotation))
    frame = bytearray(FRAME_SIZE)
    frame[:len(HEADER)] = HEADER

    for index, (r, g, b) in enumerate(pixels):
        offset = len(HEADER) + mapping[index] * BYTES_PER_PIXEL
        if brightness < 1.0:
            r, g, b = int(r * brightness), int(g * brightness), int(b * brightness)
        frame[offset:offset + BYTES_PER_PIXEL] = bytes((r, g, b))

    return bytes(frame)


def iter_chunks(data: bytes, max_size: int) -> Iterator[bytes]:
    """Split data into consecutive pieces of at most max_size bytes."""
    if max_size <= 0:
        raise ValueError(f"Chunk size must be positive, got {max_size}")
    for start in range(0, len(data), max_size):
        yield data[start:start + max_size]
