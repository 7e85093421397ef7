"""
Display Configuration Management

Handles loading, saving, and validating display settings.
Configurations are stored in JSON format for easy editing.
"""

import argparse
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path

from .bus import DEFAULT_SPI_PATH, DEFAULT_SPEED_HZ, parse_spi_path
from .errors import ConfigError
from .frame import Rotation

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_CONFIG_FILE = Path("unicorn_hd.json")

MODES = ("hardware", "emulated")


@dataclass
class DisplayConfig:
    """Settings used to construct a display."""
    mode: str = "hardware"           # hardware or emulated
    rotation: int = 0                # degrees clockwise: 0, 90, 180, 270
    brightness: float = 1.0          # 0.0 - 1.0, applied when encoding

    # SPI settings
    spi_path: str = DEFAULT_SPI_PATH
    spi_speed_hz: int = DEFAULT_SPEED_HZ
    max_transfer: int = 4096         # largest single bus write

    @property
    def emulated(self) -> bool:
        return self.mode == "emulated"

    def validate(self) -> None:
        """Raise ConfigError if any setting is unusable."""
        if self.mode not in MODES:
            raise ConfigError(f"Unknown mode {self.mode!r}, expected one of {MODES}")
        try:
            self.rotation = int(Rotation.parse(self.rotation))
            self.brightness = float(self.brightness)
            self.max_transfer = int(self.max_transfer)
            self.spi_speed_hz = int(self.spi_speed_hz)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid display setting: {e}") from e
        if not 0.0 <= self.brightness <= 1.0:
            raise ConfigError(f"Brightness must be between 0.0 and 1.0, got {self.brightness}")
        if self.max_transfer <= 0:
            raise ConfigError(f"max_transfer must be positive, got {self.max_transfer}")
        if self.spi_speed_hz <= 0:
            raise ConfigError(f"spi_speed_hz must be positive, got {self.spi_speed_hz}")
        if self.mode == "hardware":
            try:
                parse_spi_path(self.spi_path)
            except (AttributeError, ValueError) as e:
                raise ConfigError(str(e)) from e


def load_config(config_file: Path = DEFAULT_CONFIG_FILE) -> DisplayConfig:
    """
    Load display configuration from JSON file.

    Args:
        config_file: Path to the configuration file.

    Returns:
        DisplayConfig with loaded or default settings.
    """
    config = DisplayConfig()
    config_file = Path(config_file)

    if not config_file.exists():
        logger.info(f"No config file found at {config_file}, using defaults")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config: {e}")
        return config

    settings = data.get("display", {})
    config.mode = settings.get("mode", config.mode)
    config.rotation = settings.get("rotation", config.rotation)
    config.brightness = settings.get("brightness", config.brightness)
    config.spi_path = settings.get("spi_path", config.spi_path)
    config.spi_speed_hz = settings.get("spi_speed_hz", config.spi_speed_hz)
    config.max_transfer = settings.get("max_transfer", config.max_transfer)

    logger.info(f"Loaded {config.mode} display settings from {config_file}")
    return config


def save_config(config: DisplayConfig, config_file: Path = DEFAULT_CONFIG_FILE) -> bool:
    """
    Save display configuration to JSON file.

    Args:
        config: DisplayConfig to save.
        config_file: Path to the configuration file.

    Returns:
        True if saved successfully, False otherwise.
    """
    data = {"display": asdict(config)}

    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.info(f"Saved display settings to {config_file}")
        return True
    except OSError as e:
        logger.error(f"Failed to save config: {e}")
        return False


def create_example_config(config_file: Path = Path("unicorn_hd.example.json")) -> None:
    """Create an example configuration file for new users."""
    example = {
        "display": {
            "mode": "emulated",
            "rotation": 0,
            "brightness": 0.5,
            "spi_path": DEFAULT_SPI_PATH,
            "spi_speed_hz": DEFAULT_SPEED_HZ,
            "max_transfer": 4096,
        }
    }

    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(example, f, indent=2)

    print(f"Created example config: {config_file}")


def add_display_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options shared by the example scripts."""
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_FILE,
                        help="JSON settings file")
    parser.add_argument("--emulate", action="store_true",
                        help="Print to the terminal instead of using the HAT")
    parser.add_argument("--rotation", type=int, choices=[0, 90, 180, 270],
                        help="Rotation in degrees clockwise")
    parser.add_argument("--brightness", type=float,
                        help="Brightness from 0.0 to 1.0")
    parser.add_argument("--spi", dest="spi_path", help="spidev device path")


def config_from_args(args: argparse.Namespace) -> DisplayConfig:
    """Load the config file, then apply any command line overrides."""
    config = load_config(args.config)
    if args.emulate:
        config.mode = "emulated"
    if args.rotation is not None:
        config.rotation = args.rotation
    if args.brightness is not None:
        config.brightness = args.brightness
    if args.spi_path:
        config.spi_path = args.spi_path
    config.validate()
    return config
