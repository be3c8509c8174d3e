"""Decoding of Wii extension controller data."""

from __future__ import annotations

import enum

ID_LENGTH = 6


class DrumPad(enum.Enum):
    """Pads of a Wii drum kit."""

    KICK = "kick"
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    BLUE = "blue"
    ORANGE = "orange"


_DRUM_PADS = {
    0x1B: DrumPad.KICK,
    0x12: DrumPad.GREEN,
    0x19: DrumPad.RED,
    0x11: DrumPad.YELLOW,
    0x0F: DrumPad.BLUE,
    0x0E: DrumPad.ORANGE,
}


def _require(data: bytes, length: int) -> bytes:
    data = bytes(data)
    if len(data) < length:
        raise ValueError(f"expected at least {length} bytes, got {len(data)}")
    return data


def verify_data(data: bytes) -> bool:
    """Reject packets that are all zero (bad connection) or all 0xFF (bad init)."""
    data = bytes(data)
    or_check = 0x00
    and_check = 0xFF
    for byte in data:
        or_check |= byte
        and_check &= byte
    return or_check != 0x00 and and_check != 0xFF


def extension_id(data: bytes) -> int | None:
    """Return the extension type from an identification read, or None if it is not initialised."""
    data = _require(data, ID_LENGTH)
    if not verify_data(data):
        return None
    return data[0] << 8 | data[5]


def drum_hit(data: bytes) -> tuple[DrumPad, int] | None:
    """Return the pad and velocity reported by a drum packet, or None when no known pad is named."""
    data = _require(data, 4)
    velocity = ((7 - (data[3] >> 5)) << 5) & 0xFF
    which = (data[2] & 0b01111100) >> 1
    pad = _DRUM_PADS.get(which)
    if pad is None:
        return None
    return pad, velocity


def nunchuk_acceleration(data: bytes) -> tuple[int, int, int]:
    """Return the 10-bit accelerometer readings, centred on zero."""
    data = _require(data, 6)
    x = ((data[2] << 2) | ((data[5] & 0xC0) >> 6)) - 511
    y = ((data[3] << 2) | ((data[5] & 0x30) >> 4)) - 511
    z = ((data[4] << 2) | ((data[5] & 0x0C) >> 2)) - 511
    return x, y, z


def button_bytes(data: bytes, hi_res: bool) -> tuple[int, int]:
    """Return the low and high button bytes, inverted so that a pressed button is a set bit."""
    start = 6 if hi_res else 4
    data = _require(data, start + 2)
    return (~data[start]) & 0xFF, (~data[start + 1]) & 0xFF