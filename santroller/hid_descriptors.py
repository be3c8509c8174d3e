"""HID report descriptors of the controller and a parser for their items."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_LONG_ITEM_PREFIX = 0xFE
_SIZE_CODES = {0: 0, 1: 1, 2: 2, 4: 3}
_SIZES = (0, 1, 2, 4)


class ItemType(enum.IntEnum):
    """The two type bits of a short item prefix."""

    MAIN = 0
    GLOBAL = 1
    LOCAL = 2
    RESERVED = 3


_NAMES = {
    (ItemType.MAIN, 8): "Input",
    (ItemType.MAIN, 9): "Output",
    (ItemType.MAIN, 10): "Collection",
    (ItemType.MAIN, 11): "Feature",
    (ItemType.MAIN, 12): "End Collection",
    (ItemType.GLOBAL, 0): "Usage Page",
    (ItemType.GLOBAL, 1): "Logical Minimum",
    (ItemType.GLOBAL, 2): "Logical Maximum",
    (ItemType.GLOBAL, 3): "Physical Minimum",
    (ItemType.GLOBAL, 4): "Physical Maximum",
    (ItemType.GLOBAL, 5): "Unit Exponent",
    (ItemType.GLOBAL, 6): "Unit",
    (ItemType.GLOBAL, 7): "Report Size",
    (ItemType.GLOBAL, 8): "Report ID",
    (ItemType.GLOBAL, 9): "Report Count",
    (ItemType.GLOBAL, 10): "Push",
    (ItemType.GLOBAL, 11): "Pop",
    (ItemType.LOCAL, 0): "Usage",
    (ItemType.LOCAL, 1): "Usage Minimum",
    (ItemType.LOCAL, 2): "Usage Maximum",
    (ItemType.LOCAL, 3): "Designator Index",
    (ItemType.LOCAL, 4): "Designator Minimum",
    (ItemType.LOCAL, 5): "Designator Maximum",
    (ItemType.LOCAL, 7): "String Index",
    (ItemType.LOCAL, 8): "String Minimum",
    (ItemType.LOCAL, 9): "String Maximum",
    (ItemType.LOCAL, 10): "Delimiter",
}


@dataclass(frozen=True)
class HidItem:
    """One item of a HID report descriptor."""

    kind: ItemType
    tag: int
    data: bytes = b""
    long: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "kind", ItemType(self.kind))
        if self.long:
            if not 0 <= self.tag <= 0xFF:
                raise ValueError(f"long item tag must be a byte, got {self.tag}")
            if len(self.data) > 0xFF:
                raise ValueError(f"long item data must be at most 255 bytes, got {len(self.data)}")
        else:
            if not 0 <= self.tag <= 0x0F:
                raise ValueError(f"short item tag must be 0 to 15, got {self.tag}")
            if len(self.data) not in _SIZE_CODES:
                raise ValueError(f"short item data must be 0, 1, 2 or 4 bytes, got {len(self.data)}")

    @property
    def value(self) -> int:
        """The data read as an unsigned little-endian number."""
        return int.from_bytes(self.data, "little")

    @property
    def signed_value(self) -> int:
        """The data read as a signed little-endian number."""
        return int.from_bytes(self.data, "little", signed=True)

    @property
    def name(self) -> str:
        """The item's name from the HID specification, or a generic label."""
        if self.long:
            return "Long Item"
        return _NAMES.get((self.kind, self.tag), f"{self.kind.name.title()} 0x{self.tag:X}")

    def encode(self) -> bytes:
        """Return the item's wire bytes."""
        if self.long:
            return bytes([_LONG_ITEM_PREFIX, len(self.data), self.tag]) + self.data
        prefix = (self.tag << 4) | (int(self.kind) << 2) | _SIZE_CODES[len(self.data)]
        return bytes([prefix]) + self.data


def parse_items(descriptor: bytes) -> list[HidItem]:
    """Split a report descriptor into its items; raise ValueError if it is truncated."""
    descriptor = bytes(descriptor)
    items = []
    position = 0
    while position < len(descriptor):
        prefix = descriptor[position]
        if prefix == _LONG_ITEM_PREFIX:
            if position + 3 > len(descriptor):
                raise ValueError(f"long item header truncated at offset {position}")
            size = descriptor[position + 1]
            tag = descriptor[position + 2]
            start = position + 3
            if start + size > len(descriptor):
                raise ValueError(f"long item data truncated at offset {position}")
            items.append(HidItem(ItemType.RESERVED, tag, descriptor[start:start + size], long=True))
            position = start + size
            continue
        size = _SIZES[prefix & 0x03]
        start = position + 1
        if start + size > len(descriptor):
            raise ValueError(f"item data truncated at offset {position}")
        items.append(HidItem(ItemType((prefix >> 2) & 0x03), prefix >> 4, descriptor[start:start + size]))
        position = start + size
    return items


_MOUSE_BUTTONS = 4
_IOF_VARIABLE = 1 << 1
_IOF_RELATIVE = 1 << 2

KEYBOARD_MOUSE_DESCRIPTOR = bytes((
    0x05, 0x01,
    0x09, 0x06,
    0xA1, 0x01,
    0x85, 0x06,
    0x05, 0x07,
    0x19, 0xE0,
    0x29, 0xE7,
    0x15, 0x00,
    0x25, 0x01,
    0x95, 0x08,
    0x75, 0x01,
    0x81, 0x02,
    0x05, 0x07,
    0x19, 0x00,
    0x29, 0x67,
    0x15, 0x00,
    0x25, 0x01,
    0x95, 0x68,
    0x75, 0x01,
    0x81, 0x02,
    0x05, 0x08,
    0x19, 0x01,
    0x29, 0x05,
    0x95, 0x05,
    0x75, 0x01,
    0x91, 0x02,
    0x95, 0x01,
    0x75, 0x03,
    0x91, 0x01,
    0xC0,
    0x05, 0x01,
    0x09, 0x02,
    0xA1, 0x01,
    0x85, 0x05,
    0x09, 0x01,
    0xA1, 0x00,
    0x05, 0x09,
    0x19, 0x01,
    0x29, _MOUSE_BUTTONS,
    0x15, 0x00,
    0x25, 0x01,
    0x95, _MOUSE_BUTTONS,
    0x75, 1,
    0x81, 0x02,
    0x75, 8 - (_MOUSE_BUTTONS % 8),
    0x95, 0x01,
    0x81, 0x03,
    0x05, 0x01,
    0x09, 0x30,
    0x09, 0x31,
    0x09, 0x38,
    0x15, 0x81,
    0x25, 0x7F,
    0x95, 0x03,
    0x75, 0x08,
    0x81, _IOF_VARIABLE | _IOF_RELATIVE,
    0x05, 0x0C,
    0x0A, 0x38, 0x02,
    0x16, 0x81, 0xFF,
    0x26, 0x7F, 0x00,
    0x95, 0x01,
    0x75, 0x08,
    0x81, 0x06,
    0xC0,
    0xC0,
))

PS3_DESCRIPTOR = bytes((
    0x05, 0x01,
    0x09, 0x05,
    0xA1, 0x01,
    0x15, 0x00,
    0x25, 0x01,
    0x35, 0x00,
    0x45, 0x01,
    0x75, 0x01,
    0x95, 0x0D,
    0x05, 0x09,
    0x19, 0x01,
    0x29, 0x0D,
    0x81, 0x02,
    0x95, 0x03,
    0x81, 0x01,
    0x05, 0x01,
    0x25, 0x07,
    0x46, 0x3B, 0x01,
    0x75, 0x04,
    0x95, 0x01,
    0x65, 0x14,
    0x09, 0x39,
    0x81, 0x42,
    0x65, 0x00,
    0x95, 0x01,
    0x81, 0x01,
    0x26, 0xFF, 0x00,
    0x46, 0xFF, 0x00,
    0x09, 0x30,
    0x09, 0x31,
    0x09, 0x32,
    0x09, 0x35,
    0x75, 0x08,
    0x95, 0x04,
    0x81, 0x02,
    0x06, 0x00, 0xFF,
    0x09, 0x20,
    0x09, 0x21,
    0x09, 0x22,
    0x09, 0x23,
    0x09, 0x24,
    0x09, 0x25,
    0x09, 0x26,
    0x09, 0x27,
    0x09, 0x28,
    0x09, 0x29,
    0x09, 0x2A,
    0x09, 0x2B,
    0x95, 0x0C,
    0x81, 0x02,
    0x0A, 0x21, 0x26,
    0x95, 0x20,
    0xB1, 0x02,
    0x0A, 0x21, 0x26,
    0x91, 0x02,
    0x26, 0xFF, 0x03,
    0x46, 0xFF, 0x03,
    0x09, 0x2C,
    0x09, 0x2D,
    0x09, 0x2E,
    0x09, 0x2F,
    0x75, 0x10,
    0x95, 0x04,
    0x81, 0x02,
    0xC0,
))