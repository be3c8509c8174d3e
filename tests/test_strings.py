import pytest
from hypothesis import given, strategies as st

from santroller.strings import (
    XBOX_SECURITY_STRING,
    XBOX_SECURITY_TEXT,
    descriptor_strings,
    serial_descriptor,
    string_descriptor,
)


def _decode(descriptor):
    return descriptor[2:].decode("utf-16-le")


def test_product_descriptor():
    descriptor = string_descriptor("Santroller")
    assert descriptor[1] == 0x03
    assert descriptor[0] == len(descriptor)
    assert _decode(descriptor) == "Santroller"


def test_descriptor_strings_order():
    language, manufacturer, product = descriptor_strings()
    assert language == bytes((4, 0x03, 0x09, 0x04))
    assert _decode(manufacturer) == "sanjay900"
    assert _decode(product) == "Santroller"


def test_xbox_security_string():
    descriptor = string_descriptor(XBOX_SECURITY_TEXT)
    assert descriptor == XBOX_SECURITY_STRING
    assert descriptor[0] == 178
    assert descriptor[1] == 0x03
    assert descriptor[2:10] == "Xbox".encode("utf-16-le")
    assert b"\xa9\x00" in descriptor
    assert _decode(descriptor) == XBOX_SECURITY_TEXT


def test_too_long_string_rejected():
    with pytest.raises(ValueError):
        string_descriptor("x" * 200)


def test_wide_character_rejected():
    with pytest.raises(ValueError):
        string_descriptor("\U0001F600")


def test_serial_descriptor_layout():
    descriptor = serial_descriptor(bytes(range(8)))
    text = _decode(descriptor)
    assert descriptor[0] == len(descriptor)
    assert descriptor[1] == 0x03
    assert len(text) == 16
    assert text.endswith("\0")
    assert text[:-1] == bytes(range(8)).hex().upper()[:15]


def test_serial_descriptor_uses_upper_case():
    text = _decode(serial_descriptor(bytes([0xAB] * 8)))
    assert text.rstrip("\0") == "AB" * 7 + "A"


def test_serial_descriptor_wrong_length():
    with pytest.raises(ValueError):
        serial_descriptor(bytes(7))


@given(st.text(alphabet=st.characters(max_codepoint=0xFFFF, blacklist_categories=("Cs",)), max_size=126))
def test_round_trip(text):
    descriptor = string_descriptor(text)
    assert descriptor[0] == len(descriptor)
    assert _decode(descriptor) == text