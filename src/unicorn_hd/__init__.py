"""
Unicorn HD - Driver for the Pimoroni Unicorn HAT HD

A small Python library for driving the 16x16 RGB LED matrix of the
Unicorn HAT HD over SPI from a Raspberry Pi.

Supports:
- Pixel-by-pixel and whole-buffer drawing
- Output rotation (0, 90, 180, 270 degrees) and brightness
- Terminal emulation when no hardware is attached
- Image and tiny text rendering via Pillow
- CLI example scripts

License: MIT
"""

__version__ = "1.0.0"
__author__ = "Unicorn HD Contributors"

from .config import DisplayConfig, load_config, save_config
from .core import (
    Display,
    EmulatedDisplay,
    HardwareDisplay,
    create_display,
    setup_logging,
)
from .errors import (
    BusError,
    BusUnavailableError,
    BusWriteError,
    ConfigError,
    InvalidCoordinateError,
    OutputUnavailableError,
    UnicornHDError,
)
from .frame import (
    FRAME_SIZE,
    HEADER,
    HEIGHT,
    PAYLOAD_SIZE,
    WIDTH,
    Rotation,
    encode_frame,
    physical_index,
)

__all__ = [
    # Config
    "DisplayConfig",
    "load_config",
    "save_config",
    # Core
    "Display",
    "EmulatedDisplay",
    "HardwareDisplay",
    "create_display",
    "setup_logging",
    # Errors
    "UnicornHDError",
    "InvalidCoordinateError",
    "ConfigError",
    "BusError",
    "BusUnavailableError",
    "BusWriteError",
    "OutputUnavailableError",
    # Frame
    "Rotation",
    "encode_frame",
    "physical_index",
    "WIDTH",
    "HEIGHT",
    "HEADER",
    "PAYLOAD_SIZE",
    "FRAME_SIZE",
]
