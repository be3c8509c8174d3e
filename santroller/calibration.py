"""Calibration of raw analog readings into Xbox 360 and PS3 report values."""

from __future__ import annotations

INT16_MIN = -32768
INT16_MAX = 32767
UINT16_MAX = 65535

# Indexed by a d-pad bitmask (bit 0 up, bit 1 down, bit 2 left, bit 3 right).
_HAT_BINDINGS = (0x08, 0x00, 0x04, 0x08, 0x06, 0x07, 0x05, 0x08, 0x02, 0x01, 0x03)
HAT_NEUTRAL = 0x08


def _wrap_int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _scale(value: int, multiplier: int) -> int:
    """Multiply by ``multiplier``/1024, truncating toward zero."""
    product = value * multiplier
    quotient = abs(product) // 1024
    return quotient if product >= 0 else -quotient


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def xbox_axis(value: int, offset: int, minimum: int, multiplier: int, deadzone: int) -> int:
    """Map a signed axis reading onto the signed 16-bit Xbox axis range."""
    distance = _wrap_int16(value - offset)
    if -deadzone < distance < deadzone:
        return 0
    if value < 0:
        deadzone = -deadzone
    scaled = _scale(value - deadzone - minimum, multiplier) + INT16_MIN
    return _clamp(scaled, INT16_MIN, INT16_MAX)


def xbox_whammy(value: int, minimum: int, multiplier: int, deadzone: int) -> int:
    """Map an unsigned whammy reading onto the signed 16-bit Xbox axis range."""
    if multiplier > 0:
        if value - minimum < deadzone:
            return INT16_MIN
    elif value > minimum:
        return INT16_MIN
    scaled = _scale(value - minimum, multiplier) - INT16_MAX
    return _clamp(scaled, INT16_MIN, INT16_MAX)


def xbox_trigger(value: int, minimum: int, multiplier: int, deadzone: int) -> int:
    """Map an unsigned trigger reading onto the unsigned 16-bit trigger range."""
    if multiplier > 0:
        if value - minimum < deadzone:
            return 0
    elif value > minimum:
        return 0
    return _clamp(_scale(value - minimum, multiplier), 0, UINT16_MAX)


def _to_ps3(value: int) -> int:
    return ((value >> 8) - 128) & 0xFF


def ps3_axis(value: int, offset: int, minimum: int, multiplier: int, deadzone: int) -> int:
    """Calibrate an axis as for Xbox, then reduce it to an unsigned byte centred on 0x80."""
    return _to_ps3(xbox_axis(value, offset, minimum, multiplier, deadzone))


def ps3_trigger(value: int, minimum: int, multiplier: int, deadzone: int) -> int:
    """Calibrate a trigger as for Xbox and keep its high byte."""
    return xbox_trigger(value & 0xFFFF, minimum, multiplier, deadzone) >> 8


def ps3_whammy(value: int, minimum: int, multiplier: int, deadzone: int) -> int:
    """Calibrate a whammy bar as for Xbox, then reduce it to an unsigned byte."""
    return _to_ps3(xbox_whammy(value, minimum, multiplier, deadzone))


def hat_from_dpad(hat: int) -> int:
    """Convert a d-pad bitmask into a HID hat switch value; impossible combinations are neutral."""
    if not 0 <= hat <= 0xFF:
        raise ValueError(f"hat must be a byte, got {hat}")
    nibble = hat & 0x0F
    if nibble > 0x0A:
        return HAT_NEUTRAL
    return _HAT_BINDINGS[nibble]