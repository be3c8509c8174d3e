"""Xbox 360 vendor replies and the Microsoft OS feature descriptors."""

from __future__ import annotations

import struct

XBOX_ID = bytes((0x00, 0x82, 0xF8, 0x23))
CAPABILITIES_1 = bytes((0x00, 0x08, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00))
CAPABILITIES_2 = bytes((
    0x00, 0x14, 0x3F, 0xF7, 0xFF, 0xFF, 0x00,
    0x00, 0x00, 0x00, 0xC0, 0xFF, 0xC0, 0xFF,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
))

DESC_EXTENDED_COMPATIBLE_ID_DESCRIPTOR = 0x04
DESC_EXTENDED_PROPERTIES_DESCRIPTOR = 0x05
OS_DESCRIPTOR_VERSION = 0x0100

PROPERTY_NAME = "DeviceInterfaceGUID"
DEVICE_INTERFACE_GUID = "{DF59037D-7C92-4155-AC12-7D700A313D78}"
_REG_SZ = 1

_COMPATIBLE_FUNCTIONS = (b"WINUSB", b"XUSB10")
_FUNCTION_RESERVED = 0x04
_COMPAT_HEADER = struct.Struct("<IHHB7s")
_COMPAT_FUNCTION = struct.Struct("<BB8s8s6s")
_PROPERTIES_HEADER = struct.Struct("<IHHH")


def _wide(text: str) -> bytes:
    return (text + "\0").encode("utf-16-le")


def extended_properties_descriptor() -> bytes:
    """Build the extended properties descriptor naming the device interface GUID."""
    name = _wide(PROPERTY_NAME)
    data = _wide(DEVICE_INTERFACE_GUID)
    section_size = 4 + 4 + 2 + len(name) + 4 + len(data)
    section = (
        struct.pack("<IIH", section_size, _REG_SZ, len(name))
        + name
        + struct.pack("<I", len(data))
        + data
    )
    header = _PROPERTIES_HEADER.pack(
        _PROPERTIES_HEADER.size + len(section),
        OS_DESCRIPTOR_VERSION,
        DESC_EXTENDED_PROPERTIES_DESCRIPTOR,
        1,
    )
    return header + section


def compatible_id_descriptor(config_interface: int, device_interface: int, sections: int = 2) -> bytes:
    """Build the compatible ID descriptor: WinUSB on the config interface, XUSB on the device one.

    ``sections`` selects how many of the two function sections are included.
    """
    for name, value in (("config interface", config_interface), ("device interface", device_interface)):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"{name} must be a byte, got {value}")
    if sections not in (1, 2):
        raise ValueError(f"sections must be 1 or 2, got {sections}")
    interfaces = (config_interface, device_interface)
    functions = b"".join(
        _COMPAT_FUNCTION.pack(interface, _FUNCTION_RESERVED, compatible, b"", b"")
        for interface, compatible in list(zip(interfaces, _COMPATIBLE_FUNCTIONS))[:sections]
    )
    header = _COMPAT_HEADER.pack(
        _COMPAT_HEADER.size + len(functions),
        OS_DESCRIPTOR_VERSION,
        DESC_EXTENDED_COMPATIBLE_ID_DESCRIPTOR,
        sections,
        b"",
    )
    return header + functions