"""USB string descriptors of the controller."""

from __future__ import annotations

USB_DESCRIPTOR_STRING = 0x03
LANGUAGE_ID_ENG = 0x0409
MAX_STRING_CHARS = (0xFF - 2) // 2

BOARD_ID_LENGTH = 8
SERIAL_LENGTH = BOARD_ID_LENGTH * 2

MANUFACTURER = "sanjay900"
PRODUCT = "Santroller"

# Fixed identification text the console reads from string index 4 to decide
# whether the device supports the security handshake; kept byte for byte.
XBOX_SECURITY_TEXT = bytes.fromhex(
    "58626f7820"
    "536563757269747920"
    "4d6574686f6420"
    "332c20"
    "56657273696f6e20"
    "312e30302c20"
    "a920"
    "3230303520"
    "4d6963726f736f667420"
    "436f72706f726174696f6e2e20"
    "416c6c20"
    "72696768747320"
    "72657365727665642e"
).decode("latin-1")


def string_descriptor(text: str) -> bytes:
    """Build a string descriptor whose characters are stored as 16-bit little-endian units."""
    if len(text) > MAX_STRING_CHARS:
        raise ValueError(f"string must be at most {MAX_STRING_CHARS} characters, got {len(text)}")
    units = bytearray()
    for char in text:
        code = ord(char)
        if code > 0xFFFF:
            raise ValueError(f"character {char!r} does not fit in 16 bits")
        units += code.to_bytes(2, "little")
    return bytes([2 + len(units), USB_DESCRIPTOR_STRING]) + bytes(units)


def serial_descriptor(board_id: bytes) -> bytes:
    """Build the serial number descriptor from an 8-byte unique board id.

    The id is written as upper-case hex into a fixed field of 16 characters,
    the last of which holds the terminating NUL, so one hex digit is lost.
    """
    board_id = bytes(board_id)
    if len(board_id) != BOARD_ID_LENGTH:
        raise ValueError(f"board id must be {BOARD_ID_LENGTH} bytes, got {len(board_id)}")
    text = board_id.hex().upper()[:SERIAL_LENGTH - 1]
    return string_descriptor(text.ljust(SERIAL_LENGTH, "\0"))


LANGUAGE_STRING = string_descriptor(chr(LANGUAGE_ID_ENG))
MANUFACTURER_STRING = string_descriptor(MANUFACTURER)
PRODUCT_STRING = string_descriptor(PRODUCT)
XBOX_SECURITY_STRING = string_descriptor(XBOX_SECURITY_TEXT)


def descriptor_strings() -> tuple[bytes, bytes, bytes]:
    """Return the language, manufacturer and product descriptors, in index order."""
    return LANGUAGE_STRING, MANUFACTURER_STRING, PRODUCT_STRING