"""Controller side of the console security handshake."""

from __future__ import annotations

import logging
import random

from santroller.excrypt import sha
from santroller.usbdsec import (
    authentication_acr,
    authentication_crypt,
    authentication_mac,
    next_salt,
)

logger = logging.getLogger(__name__)

ID_DATA_MS_CONTROLLER = bytes((
    0x49, 0x4B, 0x00, 0x00, 0x17, 0x41, 0x41, 0x41,
    0x41, 0x41, 0x41, 0x41, 0x41, 0x41, 0x41, 0x41,
    0x00, 0x00, 0x80, 0x02, 0x09, 0x12, 0x82, 0x28,
    0x03, 0x00, 0x01, 0x01, 0x71,
))

INIT_CRYPT_KEY = bytes((
    0xE3, 0x5B, 0xFB, 0x1C, 0xCD, 0xAD, 0x32, 0x5B,
    0xF7, 0x0E, 0x07, 0xFD, 0x62, 0x3D, 0xA7, 0xC4,
))
INIT_MAC_KEY = bytes((
    0x8F, 0x29, 0x08, 0x38, 0x0B, 0x5B, 0xFE, 0x68,
    0x7C, 0x26, 0x46, 0x2A, 0x51, 0xF2, 0xBC, 0x19,
))

HEADER_LENGTH = 5
RESPONSE_LENGTH = 0x30
SERIAL_LENGTH = 0x0B
_RESPONSE_MAGIC = (0x49, 0x4C)


def _packet_length(packet: bytes) -> int:
    if len(packet) < HEADER_LENGTH:
        raise ValueError(f"packet must hold a {HEADER_LENGTH}-byte header")
    return (packet[4] + HEADER_LENGTH) & 0xFF


def calculate_checksum(packet: bytes) -> int:
    """XOR of the payload bytes, whose length is given by byte 4 of the header."""
    packet = bytes(packet)
    end = _packet_length(packet)
    if len(packet) < end:
        raise ValueError(f"packet declares {end} bytes but holds {len(packet)}")
    checksum = 0
    for byte in packet[HEADER_LENGTH:end]:
        checksum ^= byte
    return checksum


def verify_checksum(packet: bytes) -> bool:
    """Check the checksum byte that follows the payload."""
    packet = bytes(packet)
    end = _packet_length(packet)
    if len(packet) <= end:
        raise ValueError(f"packet has no checksum byte at offset {end}")
    return calculate_checksum(packet) == packet[end]


def _checksum_ok(packet: bytes) -> bool:
    try:
        return verify_checksum(packet)
    except ValueError:
        return False


def _require(name: str, value: bytes, minimum: int) -> bytes:
    value = bytes(value)
    if len(value) < minimum:
        raise ValueError(f"{name} must be at least {minimum} bytes, got {len(value)}")
    return value


def _response_header(length: int) -> bytearray:
    response = bytearray(RESPONSE_LENGTH)
    response[0:2] = bytes(_RESPONSE_MAGIC)
    response[4] = length
    return response


class Xsm3:
    """State of one authentication exchange, as seen from the controller."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.SystemRandom()
        self.id_data = ID_DATA_MS_CONTROLLER
        self.challenge_response = bytes(RESPONSE_LENGTH)
        self.console_id = bytes(8)
        self.identification_data = bytes(0x20)
        self._kv_key_1 = bytes(16)
        self._kv_key_2 = bytes(16)
        self._console_random = bytearray(16)
        self._console_random_enc = bytes(16)
        self._console_random_swap_enc = bytes(16)
        self._controller_random = bytes(16)
        self._init_hash = bytes(20)

    def set_serial(self, serial: bytes) -> None:
        """Place an 11-byte serial into the identification packet and refresh its checksum."""
        serial = bytes(serial)
        if len(serial) != SERIAL_LENGTH:
            raise ValueError(f"serial must be {SERIAL_LENGTH} bytes, got {len(serial)}")
        packet = bytearray(self.id_data)
        packet[6:6 + SERIAL_LENGTH] = serial
        packet[0x1C] = calculate_checksum(packet)
        self.id_data = bytes(packet)

    def set_identification_data(self, id_data: bytes) -> None:
        """Derive the 32-byte identification block from a 29-byte identification packet."""
        id_data = bytes(id_data)
        if len(id_data) != 0x1D:
            raise ValueError(f"identification packet must be 29 bytes, got {len(id_data)}")
        if not _checksum_ok(id_data):
            logger.warning("checksum failed when setting identification data")
        body = id_data[HEADER_LENGTH:]
        ident = bytearray(0x20)
        ident[0x00:0x0F] = body[0x00:0x0F]
        ident[0x10:0x12] = body[0x0F:0x11]
        ident[0x12:0x14] = body[0x11:0x13]
        ident[0x14] = body[0x13]
        ident[0x15] = body[0x16]
        ident[0x16:0x18] = body[0x14:0x16]
        self.identification_data = bytes(ident)

    def import_kv_keys(self, key1: bytes, key2: bytes) -> None:
        """Store the two console-specific 16-byte keys."""
        key1 = bytes(key1)
        key2 = bytes(key2)
        if len(key1) != 16 or len(key2) != 16:
            raise ValueError("keys must be 16 bytes each")
        self._kv_key_1 = key1
        self._kv_key_2 = key2

    def challenge_init(self, packet: bytes) -> bytes:
        """Answer a challenge init packet; the response is also kept in ``challenge_response``."""
        packet = _require("challenge init packet", packet, HEADER_LENGTH + 0x18 + 4)
        if not _checksum_ok(packet):
            logger.warning("checksum failed when validating challenge init")

        payload = packet[HEADER_LENGTH:HEADER_LENGTH + 0x18]
        decrypted = authentication_crypt(INIT_CRYPT_KEY, payload, False)
        console_random = decrypted[0:0x10]
        self.console_id = decrypted[0x10:0x18]

        incoming_mac = authentication_mac(INIT_MAC_KEY, None, payload)
        if incoming_mac[4:8] != packet[HEADER_LENGTH + 0x18:HEADER_LENGTH + 0x1C]:
            logger.warning("MAC failed when validating challenge init")

        swapped = console_random[8:16] + console_random[0:8]
        self._console_random_enc = authentication_crypt(self._kv_key_1, console_random, True)
        self._console_random_swap_enc = authentication_crypt(self._kv_key_2, swapped, True)

        self._controller_random = bytes(self._rng.randbytes(16))

        plain = self._controller_random + console_random
        self._init_hash = sha(plain)

        response = _response_header(0x28)
        response[5:0x25] = authentication_crypt(self._console_random_enc, plain, True)
        response_mac = authentication_mac(self._console_random_swap_enc, None, bytes(response[5:0x25]))
        response[0x25:0x2D] = authentication_acr(self.console_id, self.identification_data, response_mac)
        response[0x2D] = calculate_checksum(response)
        self.challenge_response = bytes(response)

        state = bytearray(console_random)
        state[0:4] = self._controller_random[0x0C:0x10]
        state[4:8] = state[0x0C:0x10]
        self._console_random = state
        return self.challenge_response

    def challenge_verify(self, packet: bytes) -> bytes:
        """Answer a challenge verify packet; the response is also kept in ``challenge_response``."""
        packet = _require("challenge verify packet", packet, HEADER_LENGTH + 0x10)
        if not _checksum_ok(packet):
            logger.warning("checksum failed when validating challenge verify")

        payload = packet[HEADER_LENGTH:HEADER_LENGTH + 8]
        decrypted = authentication_crypt(self._controller_random, payload, False)
        self._console_random[8:16] = decrypted

        salt = bytes(self._console_random[0:8])
        incoming_mac = authentication_mac(self._init_hash, salt, payload)
        self._console_random[0:8] = next_salt(salt)
        if incoming_mac != packet[HEADER_LENGTH + 8:HEADER_LENGTH + 0x10]:
            logger.warning("MAC failed when validating challenge verify")

        response = _response_header(0x10)
        acr = authentication_acr(self.console_id, self.identification_data, bytes(self._console_random[8:16]))
        response[5:13] = authentication_crypt(self._console_random_enc, acr, True)
        salt = bytes(self._console_random[0:8])
        response[13:21] = authentication_mac(self._console_random_swap_enc, salt, bytes(response[5:13]))
        self._console_random[0:8] = next_salt(salt)
        response[0x15] = calculate_checksum(response)
        self.challenge_response = bytes(response)
        return self.challenge_response