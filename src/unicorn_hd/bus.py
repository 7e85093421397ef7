"""
SPI Bus Module

Thin wrapper around spidev. The display only needs a handle with a
blocking write(data) and a close(); anything providing those two
methods can stand in for SpiBus (tests use an in-memory fake).
"""

import logging
import re
from typing import Protocol

from .errors import BusUnavailableError, BusWriteError

logger = logging.getLogger(__name__)

DEFAULT_SPI_PATH = "/dev/spidev0.0"
DEFAULT_SPEED_HZ = 9_000_000
SPI_MODE = 0
BITS_PER_WORD = 8

_SPI_PATH_RE = re.compile(r"^(?:/dev/)?spidev(\d+)\.(\d+)$")


class BusHandle(Protocol):
    """What a display needs from its bus."""

    def write(self, data: bytes) -> None: ...

    def close(self) -> None: ...


def parse_spi_path(path: str) -> tuple[int, int]:
    """
    Split a spidev path into (bus, chip_select).

    "/dev/spidev0.1" -> (0, 1)
    """
    match = _SPI_PATH_RE.match(path.strip())
    if not match:
        raise ValueError(f"Not a spidev device path: {path!r}")
    return int(match.group(1)), int(match.group(2))


class SpiBus:
    """
    Exclusive handle on one spidev device.

    Opened once on construction and written many times. Every write
    is a single transfer with chip select held for its whole length.
    """

    def __init__(
        self,
        path: str = DEFAULT_SPI_PATH,
        speed_hz: int = DEFAULT_SPEED_HZ,
    ):
        self.path = path
        self.speed_hz = speed_hz
        self._spi = None
        self.open()

    def open(self) -> None:
        """Open and configure the device. Raises BusUnavailableError."""
        if self._spi is not None:
            return

        try:
            bus, device = parse_spi_path(self.path)
        except ValueError as e:
            raise BusUnavailableError(str(e), self.path) from e

        try:
            import spidev
        except ImportError as e:
            raise BusUnavailableError(
                "spidev is not installed (pip install spidev)", self.path
            ) from e

        spi = spidev.SpiDev()
        try:
            spi.open(bus, device)
            spi.mode = SPI_MODE
            spi.bits_per_word = BITS_PER_WORD
            spi.max_speed_hz = self.speed_hz
        except OSError as e:
            spi.close()
            logger.error(f"Failed to open {self.path}: {e}")
            raise BusUnavailableError(str(e), self.path) from e

        self._spi = spi
        logger.info(f"Opened {self.path} at {self.speed_hz} Hz")

    @property
    def is_open(self) -> bool:
        return self._spi is not None

    def write(self, data: bytes) -> None:
        """Write data in one transfer. Raises BusWriteError."""
        if self._spi is None:
            raise BusWriteError("bus is closed", self.path)
        try:
            self._spi.writebytes2(data)
        except OSError as e:
            logger.error(f"Write to {self.path} failed: {e}")
            raise BusWriteError(str(e), self.path) from e

    def close(self) -> None:
        if self._spi is not None:
            self._spi.close()
            self._spi = None
            logger.info(f"Closed {self.path}")

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"SpiBus({self.path!r}, {state})"

