"""Register-style helpers on top of a two-wire (I2C) bus."""

from __future__ import annotations

from typing import Protocol


class TwiError(OSError):
    """A transfer on the two-wire bus failed."""


class TwiBus(Protocol):
    """A two-wire bus; implementations raise TwiError when a device does not answer."""

    def write_to(self, address: int, data: bytes) -> None:
        """Write ``data`` to the device at ``address``."""

    def read_from(self, address: int, length: int) -> bytes:
        """Read ``length`` bytes from the device at ``address``."""


def _check_address(address: int) -> None:
    if not 0 <= address <= 0x7F:
        raise ValueError(f"address must be a 7-bit value, got {address}")


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be a byte, got {value}")


def read_from_pointer(bus: TwiBus, address: int, pointer: int, length: int) -> bytes:
    """Set the device's register pointer, then read ``length`` bytes from there."""
    _check_address(address)
    _check_byte("pointer", pointer)
    _check_byte("length", length)
    bus.write_to(address, bytes([pointer]))
    data = bytes(bus.read_from(address, length))
    if len(data) != length:
        raise TwiError(f"expected {length} bytes from 0x{address:02X}, got {len(data)}")
    return data


def write_to_pointer(bus: TwiBus, address: int, pointer: int, data: bytes) -> None:
    """Write ``data`` to the device's registers starting at ``pointer``."""
    _check_address(address)
    _check_byte("pointer", pointer)
    data = bytes(data)
    _check_byte("length", len(data))
    bus.write_to(address, bytes([pointer]) + data)


def write_single_to_pointer(bus: TwiBus, address: int, pointer: int, value: int) -> None:
    """Write one byte to the register at ``pointer``."""
    _check_byte("value", value)
    write_to_pointer(bus, address, pointer, bytes([value]))