"""PlayStation controller link: reply classification and command exchange."""

from __future__ import annotations

import enum
from typing import Protocol

IDLE_BYTE = 0x5A


class ControllerType(enum.Enum):
    """Kinds of controller that can answer on the PlayStation controller port."""

    NO_DEVICE = "no_device"
    DIGITAL = "digital"
    DUALSHOCK_1 = "dualshock_1"
    DUALSHOCK_2 = "dualshock_2"
    FLIGHTSTICK = "flightstick"
    NEGCON = "negcon"
    JOGCON = "jogcon"
    GUNCON = "guncon"
    MOUSE = "mouse"
    GUITAR_HERO = "guitar_hero"


class Ps2Transport(Protocol):
    """Byte-level access to the controller port."""

    def select(self) -> None:
        """Assert the attention line."""

    def release(self) -> None:
        """Release the attention line."""

    def transfer(self, value: int) -> int:
        """Shift one byte out and return the byte shifted in."""


def _status(status: bytes) -> bytes:
    status = bytes(status)
    if len(status) < 3:
        raise ValueError(f"status must hold at least 3 bytes, got {len(status)}")
    return status


def is_valid_reply(status: bytes) -> bool:
    """True when the header names a device and carries a known acknowledge byte."""
    status = _status(status)
    return status[1] != 0xFF and status[2] in (0x5A, 0x00)


def is_config_reply(status: bytes) -> bool:
    """True when the controller reports that it is in configuration mode."""
    return (_status(status)[1] & 0xF0) == 0xF0


def reply_length(status: bytes) -> int:
    """Number of data bytes that follow the three-byte header."""
    return (_status(status)[1] & 0x0F) * 2


def classify_reply(status: bytes) -> ControllerType | None:
    """Identify the controller from a poll reply, or None if the id is not recognised."""
    ident = _status(status)[1]
    high = ident & 0xF0
    if ident == 0x79:
        return ControllerType.DUALSHOCK_2
    if high == 0x70:
        return ControllerType.DUALSHOCK_1
    if high == 0x50:
        return ControllerType.FLIGHTSTICK
    if ident == 0x23:
        return ControllerType.NEGCON
    if high == 0xE0:
        return ControllerType.JOGCON
    if ident == 0x63:
        return ControllerType.GUNCON
    if ident == 0x12:
        return ControllerType.MOUSE
    if high == 0x40:
        return ControllerType.DIGITAL
    return None


class Ps2Link:
    """Sends commands over a transport and collects replies in a fixed-size buffer."""

    def __init__(self, transport: Ps2Transport, buffer_size: int) -> None:
        if buffer_size < 3:
            raise ValueError(f"buffer size must be at least 3, got {buffer_size}")
        self._transport = transport
        self._size = buffer_size
        # One spare byte: a command of exactly buffer_size bytes reaches one past the end.
        self._buffer = bytearray(buffer_size + 1)

    def _shift(self, out: bytes | None, start: int, count: int) -> None:
        for index in range(count):
            value = out[index] if out is not None else IDLE_BYTE
            self._buffer[start + index] = self._transport.transfer(value) & 0xFF

    def exchange(self, port: int, command: bytes) -> bytes | None:
        """Send ``command`` to ``port``; return the reply buffer, or None for a bad or oversized reply."""
        command = bytes(command)
        if not 2 <= len(command) <= self._size:
            raise ValueError(f"command must be 2 to {self._size} bytes, got {len(command)}")
        if not 0 <= port <= 0xFF:
            raise ValueError(f"port must be a byte, got {port}")
        self._transport.select()
        try:
            self._shift(bytes([port]), 0, 1)
            self._shift(command, 1, 2)
            if not is_valid_reply(self._buffer):
                return None
            left = (reply_length(self._buffer) - (len(command) - 2)) & 0xFF
            self._shift(command[2:], 3, len(command) - 2)
            if left == 0:
                return bytes(self._buffer[:self._size])
            if len(command) + left <= self._size:
                self._shift(None, len(command), left)
                return bytes(self._buffer[:self._size])
            return None
        finally:
            self._transport.release()