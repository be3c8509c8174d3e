import struct

import pytest

from santroller.xbox import (
    DEVICE_INTERFACE_GUID,
    XBOX_ID,
    compatible_id_descriptor,
    extended_properties_descriptor,
)


def test_extended_properties_header():
    descriptor = extended_properties_descriptor()
    length, version, index, count = struct.unpack_from("<IHHH", descriptor, 0)
    assert length == len(descriptor)
    assert version == 0x0100
    assert index == 0x05
    assert count == 1


def test_extended_properties_section():
    descriptor = extended_properties_descriptor()
    section_size, data_type, name_length = struct.unpack_from("<IIH", descriptor, 10)
    assert section_size == 132
    assert section_size == len(descriptor) - 10
    assert data_type == 1
    assert name_length == 40
    name = descriptor[20:20 + name_length].decode("utf-16-le")
    assert name == "DeviceInterfaceGUID\0"


def test_extended_properties_guid():
    descriptor = extended_properties_descriptor()
    (data_length,) = struct.unpack_from("<I", descriptor, 60)
    assert data_length == 78
    data = descriptor[64:64 + data_length].decode("utf-16-le")
    assert data == DEVICE_INTERFACE_GUID + "\0"
    assert 64 + data_length == len(descriptor)


def test_compatible_id_two_sections():
    descriptor = compatible_id_descriptor(1, 0)
    length, version, index, count = struct.unpack_from("<IHHB", descriptor, 0)
    assert length == len(descriptor)
    assert version == 0x0100
    assert index == 0x04
    assert count == 2
    first = struct.unpack_from("<BB8s", descriptor, 16)
    second = struct.unpack_from("<BB8s", descriptor, 40)
    assert first == (1, 0x04, b"WINUSB\0\0")
    assert second == (0, 0x04, b"XUSB10\0\0")


def test_compatible_id_one_section():
    full = compatible_id_descriptor(1, 0, 2)
    single = compatible_id_descriptor(1, 0, 1)
    assert single[4:8] == full[4:8]
    assert single[8] == 1
    assert struct.unpack_from("<I", single, 0)[0] == len(single)
    assert single[16:] == full[16:16 + len(single) - 16]
    assert b"XUSB10" not in single


def test_compatible_id_sections_share_size():
    full = compatible_id_descriptor(2, 3)
    single = compatible_id_descriptor(2, 3, 1)
    assert len(full) - len(single) == len(single) - 16


def test_compatible_id_rejects_bad_sections():
    with pytest.raises(ValueError):
        compatible_id_descriptor(1, 0, 3)


def test_compatible_id_rejects_bad_interface():
    with pytest.raises(ValueError):
        compatible_id_descriptor(256, 0)


def test_xbox_id_bytes():
    assert XBOX_ID == bytes((0x00, 0x82, 0xF8, 0x23))
    assert len(compatible_id_descriptor(0, 1)) > len(XBOX_ID)