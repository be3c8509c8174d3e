"""SHA-1 helper and the Parve / chain-and-sum MAC primitives."""

from __future__ import annotations

import hashlib

_MODULUS = 0x7FFFFFFF
_CHAIN_MULTIPLIER = 0xE79A9C1
_MASK64 = (1 << 64) - 1


def _rotl8(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (8 - bits))) & 0xFF


def _check_length(name: str, value: bytes, length: int) -> bytes:
    value = bytes(value)
    if len(value) != length:
        raise ValueError(f"{name} must be {length} bytes, got {len(value)}")
    return value


def sha(*args: bytes | None) -> bytes:
    """Return the SHA-1 digest of the concatenated inputs; None or empty inputs are skipped."""
    digest = hashlib.sha1()
    for part in args:
        if part:
            digest.update(bytes(part))
    return digest.digest()


def parve_ecb(key: bytes, sbox: bytes, block: bytes) -> bytes:
    """Encrypt one 8-byte block with the Parve cipher."""
    key = _check_length("key", key, 8)
    sbox = _check_length("sbox", sbox, 256)
    state = bytearray(_check_length("block", block, 8))
    state.append(state[0])
    for round_number in range(8, 0, -1):
        for j, key_byte in enumerate(key):
            x = (key_byte + state[j] + round_number) & 0xFF
            y = (sbox[x] + state[j + 1]) & 0xFF
            state[j + 1] = _rotl8(y, 1)
        state[0] = state[8]
    return bytes(state[:8])


def parve_cbc_mac(key: bytes, sbox: bytes, iv: bytes, data: bytes) -> bytes:
    """CBC-MAC over the whole 8-byte blocks of ``data`` using the Parve cipher."""
    chain = _check_length("iv", iv, 8)
    data = bytes(data)
    for offset in range(0, len(data) - len(data) % 8, 8):
        mixed = bytes(a ^ b for a, b in zip(chain, data[offset:offset + 8]))
        chain = parve_ecb(key, sbox, mixed)
    return chain


def chain_and_sum_mac(cd: bytes, ab: bytes, data: bytes) -> bytes:
    """Compute the 8-byte chain-and-sum MAC of ``data`` (pairs of big-endian words)."""
    cd = _check_length("cd", cd, 8)
    ab = _check_length("ab", ab, 8)
    data = bytes(data)

    ab0 = int.from_bytes(ab[0:4], "big") % _MODULUS
    ab1 = int.from_bytes(ab[4:8], "big") % _MODULUS
    cd0 = int.from_bytes(cd[0:4], "big") % _MODULUS
    cd1 = int.from_bytes(cd[4:8], "big") % _MODULUS

    out0 = 0
    out1 = 0
    for offset in range(0, len(data) - len(data) % 8, 8):
        first = int.from_bytes(data[offset:offset + 4], "big")
        second = int.from_bytes(data[offset + 4:offset + 8], "big")

        out0 = (out0 + first * _CHAIN_MULTIPLIER) & _MASK64
        out0 = (out0 % _MODULUS) * ab0
        out0 = (out0 + ab1) % _MODULUS
        out1 = (out1 + out0) & _MASK64

        out0 = ((second + out0) * cd0) & _MASK64
        out0 = ((out0 % _MODULUS) + cd1) % _MODULUS
        out1 = (out1 + out0) & _MASK64

    first_word = (out0 + ab1) % _MODULUS
    second_word = (out1 + cd1) % _MODULUS
    return first_word.to_bytes(4, "big") + second_word.to_bytes(4, "big")