"""Authentication helpers for the controller security handshake: crypt, MAC and ACR."""

from __future__ import annotations

from santroller.des import Des, TripleDes, des_parity
from santroller.excrypt import chain_and_sum_mac, parve_cbc_mac, parve_ecb

SBOX = bytes.fromhex(
    "b03d9b70f3c78060739f6cc0f13dbb40"
    "b3c83714df49dad4482278806ecde700"
    "818668e15d7c542c557bef48427b3b68"
    "e3dbaac00fa99620950593949af6a364"
    "5dcc7600e50819e88d29d74c219117f4"
    "bc6ab38083c6d4909bae0efe2e4af200"
    "7388d94066c5d40857b18948dc54fc43"
    "6a2687b8095fce80e40b059c24f3dee2"
    "3eec388aa255a4504e4be9587f9f7d80"
    "230c4d80054426b8e9d8bce6763a6ea4"
    "19dec2d0c4bcc35c59df16463970f4ee"
    "2d585aa817866b6029584dd25f287ad8"
    "8e79ea8294333181d922d510da92a07d"
    "3ddaac1ca25331b83c965200826b56a0"
    "d3c240c71b7fdc017270b18c01090936"
    "fc97eadee30dae7ee30dae7e33698040"
)

PLAIN_TEXT = bytes.fromhex(
    "d1d2f2806eba0cc0b6c4c9d861751d1a"
    "3f9558bed80de2c0d0217920652d9940"
    "3c9652001b7fdc01821c13d833698040"
    "fc97eade08ea14dceb0f6a186f782cb0"
    "d3c240c7826b56a0190936e07270b18c"
    "e30dae7e50a52be2c9afc7701c298056"
    "24f066fa022b58988fe4d13c6e382aff"
    "b8fa35b05249c5b466fa47556c8d4008"
)

_KEY_LENGTH = 0x10
_ZERO_IV = bytes(8)
_MASK64 = (1 << 64) - 1


def _xor(left: bytes, right: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(left, right))


def _two_key_schedule(key: bytes) -> bytes:
    """Parity-adjust the first 16 bytes of ``key`` for two-key triple DES."""
    key = bytes(key)
    if len(key) < _KEY_LENGTH:
        raise ValueError(f"key must be at least {_KEY_LENGTH} bytes, got {len(key)}")
    return des_parity(key[:_KEY_LENGTH])


def authentication_crypt(key: bytes, data: bytes, encrypt: bool) -> bytes:
    """Two-key triple DES in CBC mode with a zero IV, keyed by the first 16 bytes of ``key``."""
    return TripleDes(_two_key_schedule(key)).cbc(data, _ZERO_IV, encrypt)


def next_salt(salt: bytes) -> bytes:
    """Advance an 8-byte big-endian salt counter by one, wrapping at 2**64."""
    salt = bytes(salt)
    if len(salt) != 8:
        raise ValueError(f"salt must be 8 bytes, got {len(salt)}")
    return ((int.from_bytes(salt, "big") + 1) & _MASK64).to_bytes(8, "big")


def authentication_mac(key: bytes, salt: bytes | None, data: bytes) -> bytes:
    """Return the 8-byte MAC of the whole 8-byte blocks of ``data``.

    When ``salt`` is given, the counter value one above it (see ``next_salt``)
    seeds the chain; callers that keep the counter store that advanced value.
    """
    schedule = _two_key_schedule(key)
    single = Des(schedule[:8])
    chain = bytes(8) if salt is None else single.ecb(next_salt(salt), True)
    data = bytes(data)
    for offset in range(0, len(data) - len(data) % 8, 8):
        chain = single.ecb(_xor(chain, data[offset:offset + 8]), True)
    chain = bytes([chain[0] ^ 0x80]) + chain[1:]
    return TripleDes(schedule).ecb(chain, True)


def authentication_acr(console_id: bytes, data: bytes, key: bytes) -> bytes:
    """Compute the 8-byte ACR from the console id, identification data and an 8-byte key."""
    console_id = bytes(console_id)
    data = bytes(data)
    if len(console_id) < 4:
        raise ValueError(f"console id must be at least 4 bytes, got {len(console_id)}")
    if len(data) < 0x18:
        raise ValueError(f"data must be at least 24 bytes, got {len(data)}")
    block = data[0:4] + console_id[0:4]
    iv = parve_ecb(key, SBOX, data[0x10:0x18])
    cd = parve_ecb(key, SBOX, block)
    ab = parve_cbc_mac(key, SBOX, iv, PLAIN_TEXT)
    return _xor(chain_and_sum_mac(cd, ab, PLAIN_TEXT), ab)