"""DES and two/three-key triple DES in ECB and CBC modes."""

from __future__ import annotations

from collections.abc import Sequence

BLOCK_SIZE = 8

_MASK28 = 0x0FFFFFFF
_MASK32 = 0xFFFFFFFF

# All bit tables below are zero-based: position 0 is the most significant bit.

# Initial permutation: the odd-numbered bit columns first, then the even ones,
# each read from the bottom row of the 8x8 bit matrix upwards.
_IP = tuple(
    start - 8 * step
    for start in (57, 59, 61, 63, 56, 58, 60, 62)
    for step in range(8)
)


def _inverse(table: Sequence[int]) -> tuple[int, ...]:
    result = [0] * len(table)
    for index, position in enumerate(table):
        result[position] = index
    return tuple(result)


_FP = _inverse(_IP)

# Expansion: eight overlapping groups of six bits, wrapping around 32 bits.
_EXPANSION = tuple(
    (4 * group + offset - 1) % 32 for group in range(8) for offset in range(6)
)

_PBOX = (
    15, 6, 19, 20, 28, 11, 27, 16, 0, 14, 22, 25, 4, 17, 30, 9,
    1, 7, 23, 13, 31, 26, 2, 8, 18, 12, 29, 5, 21, 10, 3, 24,
)

_PC1 = (
    56, 48, 40, 32, 24, 16, 8, 0, 57, 49, 41, 33, 25, 17,
    9, 1, 58, 50, 42, 34, 26, 18, 10, 2, 59, 51, 43, 35,
    62, 54, 46, 38, 30, 22, 14, 6, 61, 53, 45, 37, 29, 21,
    13, 5, 60, 52, 44, 36, 28, 20, 12, 4, 27, 19, 11, 3,
)

_PC2 = (
    13, 16, 10, 23, 0, 4, 2, 27, 14, 5, 20, 9,
    22, 18, 11, 3, 25, 7, 15, 6, 26, 19, 12, 1,
    40, 51, 30, 36, 46, 54, 29, 39, 50, 44, 32, 47,
    43, 48, 38, 55, 33, 52, 45, 41, 49, 35, 28, 31,
)

# The key halves rotate by one bit in rounds 1, 2, 9 and 16, by two otherwise.
_ITERATION_SHIFT = tuple(1 if rnd in (0, 1, 8, 15) else 2 for rnd in range(16))

# Each S-box as its four rows of sixteen 4-bit outputs, one hex digit per entry.
_SBOX_HEX = (
    ("e4d12fb83a6c5907", "0f74e2d1a6cb9538", "41e8d62bfc973a50", "fc8249175b3ea06d"),
    ("f18e6b34972dc05a", "3d47f28ec01a69b5", "0e7ba4d158c6932f", "d8a13f42b67c05e9"),
    ("a09e63f51dc7b428", "d709346a285ecbf1", "d6498f30b12c5ae7", "1ad069874fe3b52c"),
    ("7de3069a1285bc4f", "d8b56f03472c1ae9", "a690cb7df13e5284", "3f06a1d8945bc72e"),
    ("2c417ab6853fd0e9", "eb2c47d150fa3986", "421bad78f9c5630e", "b8c71e2d6f09a453"),
    ("c1af92680d34e75b", "af427c9561de0b38", "9ef528c3704a1db6", "432c95fabe17608d"),
    ("4b2ef08d3c975a61", "d0b7491ae35c2f86", "14bdc37eaf680592", "6bd814a7950fe23c"),
    ("d2846fb1a93e50c7", "1fd8a374c56b0e92", "7b419ce206adf358", "21e74a8dfc90356b"),
)

_SBOX = tuple(
    tuple(int(digit, 16) for digit in "".join(rows)) for rows in _SBOX_HEX
)


def _permute(value: int, width: int, table: Sequence[int]) -> int:
    """Pick bits of ``value`` (numbered 0..width-1 from the top) in table order."""
    result = 0
    for position in table:
        result = (result << 1) | ((value >> (width - 1 - position)) & 1)
    return result


def _rotl28(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (28 - bits))) & _MASK28


def _round_function(right: int, subkey: int) -> int:
    expanded = _permute(right, 32, _EXPANSION) ^ subkey
    substituted = 0
    for index, box in enumerate(_SBOX):
        chunk = (expanded >> (42 - 6 * index)) & 0x3F
        row = ((chunk >> 4) & 0x2) | (chunk & 0x1)
        column = (chunk >> 1) & 0xF
        substituted = (substituted << 4) | box[16 * row + column]
    return _permute(substituted, 32, _PBOX)


def _xor(left: bytes, right: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(left, right))


def _check_length(name: str, value: bytes, *lengths: int) -> bytes:
    value = bytes(value)
    if len(value) not in lengths:
        expected = " or ".join(str(length) for length in lengths)
        raise ValueError(f"{name} must be {expected} bytes, got {len(value)}")
    return value


def des_parity(data: bytes) -> bytes:
    """Return ``data`` with the low bit of every byte set for odd parity."""
    return bytes(
        (byte & 0xFE) | ((bin(byte).count("1") & 1) ^ 1) for byte in bytes(data)
    )


class Des:
    """Single DES with a precomputed key schedule."""

    def __init__(self, key: bytes) -> None:
        key = _check_length("DES key", key, 8)
        choice1 = _permute(int.from_bytes(key, "big"), 64, _PC1)
        c = (choice1 >> 28) & _MASK28
        d = choice1 & _MASK28
        subkeys = []
        for shift in _ITERATION_SHIFT:
            c = _rotl28(c, shift)
            d = _rotl28(d, shift)
            subkeys.append(_permute((c << 28) | d, 56, _PC2))
        self._subkeys = tuple(subkeys)

    def ecb(self, block: bytes, encrypt: bool) -> bytes:
        """Encrypt or decrypt a single 8-byte block."""
        block = _check_length("DES block", block, BLOCK_SIZE)
        permuted = _permute(int.from_bytes(block, "big"), 64, _IP)
        left = (permuted >> 32) & _MASK32
        right = permuted & _MASK32
        subkeys = self._subkeys if encrypt else reversed(self._subkeys)
        for subkey in subkeys:
            left, right = right, left ^ _round_function(right, subkey)
        output = _permute((right << 32) | left, 64, _FP)
        return output.to_bytes(BLOCK_SIZE, "big")


class TripleDes:
    """Triple DES (EDE) keyed with 24 bytes, or 16 bytes meaning K1 K2 K1."""

    def __init__(self, key: bytes) -> None:
        key = _check_length("triple DES key", key, 16, 24)
        if len(key) == 16:
            key = key + key[:8]
        self._stages = tuple(Des(key[offset:offset + 8]) for offset in (0, 8, 16))

    def ecb(self, block: bytes, encrypt: bool) -> bytes:
        """Encrypt or decrypt a single 8-byte block."""
        first, second, third = self._stages
        if encrypt:
            block = first.ecb(block, True)
            block = second.ecb(block, False)
            return third.ecb(block, True)
        block = third.ecb(block, False)
        block = second.ecb(block, True)
        return first.ecb(block, False)

    def cbc(self, data: bytes, iv: bytes, encrypt: bool) -> bytes:
        """Run CBC over the whole 8-byte blocks of ``data``; a trailing partial block is dropped."""
        data = bytes(data)
        chain = _check_length("IV", iv, BLOCK_SIZE)
        output = bytearray()
        for offset in range(0, len(data) - len(data) % BLOCK_SIZE, BLOCK_SIZE):
            block = data[offset:offset + BLOCK_SIZE]
            if encrypt:
                chain = self.ecb(_xor(block, chain), True)
                output += chain
            else:
                output += _xor(self.ecb(block, False), chain)
                chain = block
        return bytes(output)