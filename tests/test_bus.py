#!/usr/bin/env python3
"""
Test SPI Bus

Path parsing, open failures, and the read-write path against a stand-in
spidev module. Needs no SPI device.
"""

import sys
import types
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from unicorn_hd.bus import SpiBus, parse_spi_path
from unicorn_hd.core import HardwareDisplay
from unicorn_hd.errors import BusError, BusUnavailableError, BusWriteError


def test_parse_spi_path():
    assert parse_spi_path("/dev/spidev0.0") == (0, 0)
    assert parse_spi_path("/dev/spidev0.1") == (0, 1)
    assert parse_spi_path("spidev10.2") == (10, 2)


@pytest.mark.parametrize("path", ["", "/dev/ttyAMA0", "/dev/spidev0", "/dev/spidevX.Y"])
def test_parse_spi_path_rejects(path):
    with pytest.raises(ValueError):
        parse_spi_path(path)


def test_bad_path_is_unavailable():
    with pytest.raises(BusUnavailableError) as excinfo:
        SpiBus("/dev/not-spi")
    assert excinfo.value.device == "/dev/not-spi"


def test_missing_device_is_unavailable():
    # Either spidev is absent or the device node does not exist
    with pytest.raises(BusUnavailableError):
        SpiBus("/dev/spidev97.3")


def test_hardware_display_without_device():
    with pytest.raises(BusError):
        HardwareDisplay(spi_path="/dev/spidev97.3")


class FakeSpiDev:
    """Stands in for spidev.SpiDev, recording what the bus does to it."""

    instances = []

    def __init__(self):
        self.opened = None
        self.closed = False
        self.writes = []
        self.fail_with = None
        self.mode = None
        self.bits_per_word = None
        self.max_speed_hz = None
        FakeSpiDev.instances.append(self)

    def open(self, bus, device):
        self.opened = (bus, device)

    def writebytes2(self, data):
        if self.fail_with:
            raise self.fail_with
        self.writes.append(bytes(data))

    def close(self):
        self.closed = True


@pytest.fixture
def fake_spidev(monkeypatch):
    module = types.ModuleType("spidev")
    module.SpiDev = FakeSpiDev
    FakeSpiDev.instances = []
    monkeypatch.setitem(sys.modules, "spidev", module)
    return FakeSpiDev


def test_open_configures_device(fake_spidev):
    bus = SpiBus("/dev/spidev0.1", speed_hz=4_000_000)
    spi = fake_spidev.instances[0]

    assert bus.is_open
    assert spi.opened == (0, 1)
    assert spi.mode == 0
    assert spi.bits_per_word == 8
    assert spi.max_speed_hz == 4_000_000


def test_write_and_close(fake_spidev):
    bus = SpiBus()
    spi = fake_spidev.instances[0]

    bus.write(b'\x72\x01\x02')
    assert spi.writes == [b'\x72\x01\x02']

    bus.close()
    assert spi.closed
    assert not bus.is_open
    with pytest.raises(BusWriteError):
        bus.write(b'\x72')


def test_write_failure_becomes_bus_write_error(fake_spidev):
    bus = SpiBus()
    fake_spidev.instances[0].fail_with = OSError(121, "Remote I/O error")

    with pytest.raises(BusWriteError) as excinfo:
        bus.write(b'\x00' * 769)

    assert isinstance(excinfo.value.__cause__, OSError)
    assert excinfo.value.device == "/dev/spidev0.0"


def test_hardware_display_over_spi(fake_spidev):
    with HardwareDisplay(spi_path="/dev/spidev0.0") as display:
        display.set_all(255, 255, 255)
        display.display()
    spi = fake_spidev.instances[0]

    assert spi.writes == [b'\x72' + b'\xff' * 768]
    assert spi.closed
