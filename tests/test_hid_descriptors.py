import pytest
from hypothesis import given, strategies as st

from santroller.hid_descriptors import (
    KEYBOARD_MOUSE_DESCRIPTOR,
    PS3_DESCRIPTOR,
    HidItem,
    ItemType,
    parse_items,
)


@pytest.mark.parametrize("descriptor", [KEYBOARD_MOUSE_DESCRIPTOR, PS3_DESCRIPTOR])
def test_round_trip(descriptor):
    items = parse_items(descriptor)
    assert b"".join(item.encode() for item in items) == descriptor


@pytest.mark.parametrize("descriptor", [KEYBOARD_MOUSE_DESCRIPTOR, PS3_DESCRIPTOR])
def test_collections_balanced(descriptor):
    names = [item.name for item in parse_items(descriptor)]
    assert names.count("Collection") == names.count("End Collection")
    assert names[-1] == "End Collection"


def test_keyboard_mouse_starts_with_application_collection():
    items = parse_items(KEYBOARD_MOUSE_DESCRIPTOR)
    assert [item.name for item in items[:3]] == ["Usage Page", "Usage", "Collection"]
    assert items[1].value == 0x06


def test_keyboard_mouse_report_ids():
    ids = [item.value for item in parse_items(KEYBOARD_MOUSE_DESCRIPTOR) if item.name == "Report ID"]
    assert ids == [6, 5]


def test_mouse_axes_are_relative_and_signed():
    items = parse_items(KEYBOARD_MOUSE_DESCRIPTOR)
    minima = [item.signed_value for item in items if item.name == "Logical Minimum"]
    assert minima.count(-127) == 2
    inputs = [item.value for item in items if item.name == "Input"]
    assert 0x06 in inputs


def test_mouse_button_count():
    items = parse_items(KEYBOARD_MOUSE_DESCRIPTOR)
    maxima = [item.value for item in items if item.name == "Usage Maximum"]
    assert 4 in maxima


def test_ps3_fields():
    items = parse_items(PS3_DESCRIPTOR)
    physical = [item.value for item in items if item.name == "Physical Maximum"]
    assert 315 in physical
    counts = [item.value for item in items if item.name == "Report Count"]
    assert counts[0] == 13
    assert 32 in counts
    logical = [item.value for item in items if item.name == "Logical Maximum"]
    assert logical[-1] == 1023


def test_ps3_has_feature_item():
    kinds = [(item.kind, item.tag) for item in parse_items(PS3_DESCRIPTOR)]
    assert (ItemType.MAIN, 11) in kinds


def test_truncated_descriptor_raises():
    with pytest.raises(ValueError):
        parse_items(bytes((0x26, 0xFF)))


def test_truncated_long_item_raises():
    with pytest.raises(ValueError):
        parse_items(bytes((0xFE, 0x04, 0x10, 0x01)))


def test_long_item_round_trip():
    item = HidItem(ItemType.RESERVED, 0x10, b"\x01\x02\x03", long=True)
    assert parse_items(item.encode()) == [item]


def test_invalid_short_size_rejected():
    with pytest.raises(ValueError):
        HidItem(ItemType.GLOBAL, 1, b"\x00\x00\x00")


def test_invalid_tag_rejected():
    with pytest.raises(ValueError):
        HidItem(ItemType.MAIN, 16)


@given(
    st.lists(
        st.tuples(
            st.sampled_from([ItemType.MAIN, ItemType.GLOBAL, ItemType.LOCAL]),
            st.integers(0, 14),
            st.sampled_from([0, 1, 2, 4]).flatmap(lambda n: st.binary(min_size=n, max_size=n)),
        ),
        max_size=20,
    )
)
def test_generated_items_round_trip(specs):
    items = [HidItem(kind, tag, data) for kind, tag, data in specs]
    encoded = b"".join(item.encode() for item in items)
    assert parse_items(encoded) == items