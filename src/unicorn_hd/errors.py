"""
Unicorn HD Error Hierarchy

All driver exceptions inherit from UnicornHDError so callers can catch
every driver failure with a single except clause.

    UnicornHDError
    ├── InvalidCoordinateError - x/y outside the 16x16 grid
    ├── ConfigError            - invalid construction options
    ├── BusError               - serial bus failures
    │   ├── BusUnavailableError - device could not be opened
    │   └── BusWriteError       - I/O error while sending a frame
    └── OutputUnavailableError - emulated output channel failed
"""


class UnicornHDError(Exception):
    """Base exception for all driver errors."""
    pass


class InvalidCoordinateError(UnicornHDError, IndexError):
    """A pixel coordinate fell outside the display."""

    def __init__(self, x: int, y: int, width: int = 16, height: int = 16):
        self.x = x
        self.y = y
        super().__init__(
            f"Pixel ({x}, {y}) is outside the {width}x{height} display"
        )


class ConfigError(UnicornHDError, ValueError):
    """Invalid display configuration."""
    pass


class BusError(UnicornHDError):
    """Base class for serial bus failures."""

    def __init__(self, message: str, device: str = ""):
        self.device = device
        if device:
            message = f"{device}: {message}"
        super().__init__(message)


class BusUnavailableError(BusError):
    """The bus device is missing, not permitted, or could not be configured."""
    pass


class BusWriteError(BusError):
    """A frame could not be written to the bus."""
    pass


class OutputUnavailableError(UnicornHDError):
    """The emulated display's output stream could not be written."""
    pass
