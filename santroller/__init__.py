"""Game controller helpers: XSM3 handshake and its ciphers, input calibration, Wii and PS2 decoding, USB descriptors."""

__version__ = "0.1.0"