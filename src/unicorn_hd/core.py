"""
Core Display Module

Owns the 16x16 pixel buffer and sends it to a Unicorn HAT HD over SPI,
or renders it to a terminal when no hardware is attached.

Both variants share one interface (set_pixel, get_pixel, clear,
set_rotation, display) so calling code does not care which is active.
"""

import logging
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, TextIO, Union

from colorama import Style, just_fix_windows_console
from colorama.ansi import CSI

from .bus import BusHandle, SpiBus, DEFAULT_SPI_PATH, DEFAULT_SPEED_HZ
from .config import DisplayConfig
from .errors import (
    BusError,
    BusWriteError,
    InvalidCoordinateError,
    OutputUnavailableError,
)
from .frame import (
    HEIGHT,
    NUM_PIXELS,
    WIDTH,
    Pixel,
    Rotation,
    encode_frame,
    iter_chunks,
)

logger = logging.getLogger(__name__)

BLACK: Pixel = (0, 0, 0)
DEFAULT_MAX_TRANSFER = 4096


def _check_channel(name: str, value: int) -> int:
    if not isinstance(value, int) or not 0 <= value <= 255:
        raise ValueError(f"{name} must be an integer between 0 and 255, got {value!r}")
    return value


def _check_brightness(value: float) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Brightness must be between 0.0 and 1.0, got {value}")
    return value


class Display(ABC):
    """
    A 16x16 RGB pixel buffer plus the settings used to send it.

    Pixels are stored unrotated and unscaled. Rotation and brightness
    are applied only when a frame is encoded, so get_pixel() always
    returns exactly what was last written.

    Not thread safe. Guard with your own lock if several threads draw.
    """

    width = WIDTH
    height = HEIGHT

    def __init__(
        self,
        rotation: Union[Rotation, int] = Rotation.NONE,
        brightness: float = 1.0,
    ):
        self._pixels: list[Pixel] = [BLACK] * NUM_PIXELS
        self._rotation = Rotation.parse(rotation)
        self._brightness = _check_brightness(brightness)

    # -------------------------------------------------------------------------
    # Pixel buffer
    # -------------------------------------------------------------------------

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            raise InvalidCoordinateError(x, y, WIDTH, HEIGHT)
        return y * WIDTH + x

    def set_pixel(self, x: int, y: int, r: int, g: int, b: int) -> None:
        """
        Set the pixel at (x, y) to (r, g, b).

        Raises:
            InvalidCoordinateError: x or y is outside 0..15. Nothing is written.
            ValueError: a channel is outside 0..255.
        """
        index = self._index(x, y)
        self._pixels[index] = (
            _check_channel("red", r),
            _check_channel("green", g),
            _check_channel("blue", b),
        )

    def get_pixel(self, x: int, y: int) -> Pixel:
        """Return the (r, g, b) last written to (x, y)."""
        return self._pixels[self._index(x, y)]

    def set_all(self, r: int, g: int, b: int) -> None:
        """Fill the whole buffer with one colour."""
        pixel = (
            _check_channel("red", r),
            _check_channel("green", g),
            _check_channel("blue", b),
        )
        self._pixels = [pixel] * NUM_PIXELS

    def clear(self) -> None:
        """Set every pixel to black. Does not update the display."""
        self._pixels = [BLACK] * NUM_PIXELS

    @property
    def pixels(self) -> list[list[Pixel]]:
        """Copy of the buffer as 16 rows of 16 (r, g, b) tuples."""
        return [
            self._pixels[row * WIDTH:(row + 1) * WIDTH]
            for row in range(HEIGHT)
        ]

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    @property
    def rotation(self) -> Rotation:
        return self._rotation

    def set_rotation(self, rotation: Union[Rotation, int]) -> None:
        """Set the rotation used for the next display() call."""
        self._rotation = Rotation.parse(rotation)
        logger.debug(f"Rotation set to {int(self._rotation)} degrees")

    @property
    def brightness(self) -> float:
        return self._brightness

    def set_brightness(self, brightness: float) -> None:
        """Set the scale factor (0.0 to 1.0) applied when encoding."""
        self._brightness = _check_brightness(brightness)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def encode(self) -> bytes:
        """Encode the buffer with the current rotation and brightness."""
        return encode_frame(self._pixels, self._rotation, self._brightness)

    @abstractmethod
    def display(self) -> None:
        """Push the buffer to the output. Blocks until done."""

    def close(self) -> None:
        """Release any resources held by the display."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class HardwareDisplay(Display):
    """
    Unicorn HAT HD attached over SPI.

    The frame is written in one transfer when it fits in max_transfer
    bytes, otherwise in consecutive chunks of at most that size. Errors
    are raised to the caller, never retried.
    """

    def __init__(
        self,
        bus: Optional[BusHandle] = None,
        rotation: Union[Rotation, int] = Rotation.NONE,
        brightness: float = 1.0,
        spi_path: str = DEFAULT_SPI_PATH,
        spi_speed_hz: int = DEFAULT_SPEED_HZ,
        max_transfer: int = DEFAULT_MAX_TRANSFER,
    ):
        """
        Args:
            bus: Already open bus handle. Opened from spi_path if omitted.
            rotation: Initial rotation in degrees clockwise.
            brightness: Scale factor applied when encoding.
            spi_path: spidev device, e.g. "/dev/spidev0.0".
            spi_speed_hz: Bus clock when opening spi_path.
            max_transfer: Largest single write the bus accepts.

        Raises:
            BusUnavailableError: spi_path could not be opened.
        """
        super().__init__(rotation, brightness)
        if max_transfer <= 0:
            raise ValueError(f"max_transfer must be positive, got {max_transfer}")
        self.max_transfer = max_transfer
        self._bus = bus if bus is not None else SpiBus(spi_path, spi_speed_hz)
        self._closed = False

    def display(self) -> None:
        """
        Send the current buffer to the device.

        Raises:
            BusWriteError: the device is closed or a write failed.
        """
        if self._closed:
            raise BusWriteError("display has been closed")

        frame = self.encode()
        try:
            for chunk in iter_chunks(frame, self.max_transfer):
                self._bus.write(chunk)
        except BusError:
            raise
        except OSError as e:
            logger.error(f"Frame write failed: {e}")
            raise BusWriteError(str(e)) from e

        logger.debug(f"Sent {len(frame)} byte frame")

    def close(self) -> None:
        if not self._closed:
            self._bus.close()
            self._closed = True


class EmulatedDisplay(Display):
    """
    Software stand-in that prints the buffer as coloured text.

    Rotation is accepted and stored but never applied: the emulator
    always draws the logical buffer as it would look at 0 degrees, so
    the same drawing code gives the same picture with any rotation.
    Brightness is likewise not applied to the printed output.
    """

    GLYPH = "*"
    TITLE = "Unicorn HAT HD:"

    def __init__(
        self,
        rotation: Union[Rotation, int] = Rotation.NONE,
        brightness: float = 1.0,
        stream: Optional[TextIO] = None,
        snapshot_path: Optional[Union[Path, str]] = None,
    ):
        """
        Args:
            rotation: Stored for API parity, ignored when drawing.
            brightness: Stored for API parity, ignored when drawing.
            stream: Where to print frames. Defaults to sys.stdout.
            snapshot_path: If set, also save each frame as a PNG here.
        """
        super().__init__(rotation, brightness)
        self.stream = stream
        self.snapshot_path = Path(snapshot_path) if snapshot_path else None
        if stream is None:
            just_fix_windows_console()

    def render(self) -> str:
        """Return the text drawn by display(), without a trailing newline."""
        lines = [self.TITLE]
        for y in range(HEIGHT):
            row = self._pixels[y * WIDTH:(y + 1) * WIDTH]
            line = "".join(
                f"{CSI}38;2;{r};{g};{b}m{self.GLYPH}" for r, g, b in row
            )
            lines.append(line + Style.RESET_ALL)
        return "\n".join(lines)

    def display(self) -> None:
        """
        Print the buffer.

        Raises:
            OutputUnavailableError: the stream or snapshot file could not be written.
        """
        stream = self.stream if self.stream is not None else sys.stdout
        try:
            stream.write(self.render() + "\n")
            stream.flush()
        except (OSError, ValueError) as e:
            raise OutputUnavailableError(f"Cannot write emulated frame: {e}") from e

        if self.snapshot_path:
            from .graphics import to_image

            try:
                to_image(self, scale=8).save(self.snapshot_path)
            except (OSError, ValueError) as e:
                raise OutputUnavailableError(
                    f"Cannot save snapshot to {self.snapshot_path}: {e}"
                ) from e


def create_display(
    config: Optional[DisplayConfig] = None,
    bus: Optional[BusHandle] = None,
    **overrides,
) -> Display:
    """
    Build a display from a config.

    Args:
        config: Settings. DisplayConfig() defaults if omitted
            (hardware mode, rotation 0).
        bus: Bus handle for hardware mode, bypassing spi_path.
        **overrides: Extra keyword arguments for the display class,
            e.g. stream= for the emulator.
    """
    config = config or DisplayConfig()
    config.validate()

    if config.mode == "emulated":
        if bus is not None:
            logger.warning("Ignoring bus handle, emulated displays do not use one")
        logger.info("Using emulated display")
        return EmulatedDisplay(
            rotation=config.rotation,
            brightness=config.brightness,
            **overrides,
        )

    logger.info(f"Using Unicorn HAT HD on {config.spi_path}")
    return HardwareDisplay(
        bus=bus,
        rotation=config.rotation,
        brightness=config.brightness,
        spi_path=config.spi_path,
        spi_speed_hz=config.spi_speed_hz,
        max_transfer=config.max_transfer,
        **overrides,
    )


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for display operations."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
