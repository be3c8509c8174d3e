# santroller

Pure-Python building blocks for a USB game controller: the controller side of
the Xbox 360 security handshake (XSM3) and the cryptographic primitives it
rests on, calibration of analog inputs, decoding of Wii extension and
PlayStation controller data, and the USB/HID descriptors the device presents.
It has no dependencies outside the standard library.

## Install

```
pip install .
pip install ".[test]"   # pytest and hypothesis for the test suite
```

## Modules

- `santroller.des`: `des_parity` (odd parity on every byte), `Des` (single DES,
  `ecb`) and `TripleDes` (EDE with a 16- or 24-byte key, `ecb` and `cbc`).
  `cbc` works on whole 8-byte blocks and drops a trailing partial block.
- `santroller.excrypt`: `sha` (SHA-1 of the concatenated arguments, skipping
  `None` and empty ones), `parve_ecb`, `parve_cbc_mac` and `chain_and_sum_mac`.
- `santroller.usbdsec`: `authentication_crypt` (two-key triple DES CBC with a
  zero IV), `authentication_mac`, `next_salt` and `authentication_acr`, plus the
  fixed `SBOX` and `PLAIN_TEXT` tables they use.
- `santroller.xsm3`: `calculate_checksum`, `verify_checksum` and the `Xsm3`
  class, with `set_serial`, `set_identification_data`, `import_kv_keys`,
  `challenge_init` and `challenge_verify`. The current identification packet is
  in `id_data`, the last response in `challenge_response`, and the console id
  taken from the init packet in `console_id`.
- `santroller.calibration`: `xbox_axis`, `xbox_whammy`, `xbox_trigger`,
  `ps3_axis`, `ps3_trigger`, `ps3_whammy` and `hat_from_dpad`.
- `santroller.twi`: the `TwiBus` protocol (`write_to`, `read_from`), `TwiError`,
  and the register helpers `read_from_pointer`, `write_to_pointer` and
  `write_single_to_pointer`.
- `santroller.wii`: `verify_data`, `extension_id`, `drum_hit` (returning a
  `DrumPad` and a velocity), `nunchuk_acceleration` and `button_bytes`.
- `santroller.ps2`: `ControllerType`, the `Ps2Transport` protocol, `Ps2Link`
  (`exchange`), and `is_valid_reply`, `is_config_reply`, `reply_length`,
  `classify_reply`.
- `santroller.hid_descriptors`: `HidItem`, `ItemType` and `parse_items`, plus
  the `KEYBOARD_MOUSE_DESCRIPTOR` and `PS3_DESCRIPTOR` report descriptors.
- `santroller.strings`: `string_descriptor`, `serial_descriptor` and
  `descriptor_strings` (language, manufacturer and product descriptors).
- `santroller.xbox`: `extended_properties_descriptor`,
  `compatible_id_descriptor`, and the `XBOX_ID`, `CAPABILITIES_1` and
  `CAPABILITIES_2` vendor replies.

## Example

```python
from santroller.des import TripleDes
from santroller.calibration import hat_from_dpad, xbox_axis
from santroller.hid_descriptors import PS3_DESCRIPTOR, parse_items

cipher = TripleDes(bytes(range(24)))
block = cipher.ecb(b"8 bytes!", True)
assert cipher.ecb(block, False) == b"8 bytes!"

print(xbox_axis(1000, 0, 0, 1024, 100))
print(hat_from_dpad(0b0001))           # up -> 0

for item in parse_items(PS3_DESCRIPTOR)[:3]:
    print(item.name, item.value)
```

## The XSM3 handshake

Create an `Xsm3`, optionally passing a `random.Random` to make the controller's
random data reproducible (the default is `random.SystemRandom`). Import the two
console-specific 16-byte keys with `import_kv_keys`, then pass the challenge
packets to `challenge_init` and `challenge_verify`; each returns the 48-byte
response packet. A failed checksum or MAC on an incoming packet is logged as a
warning on the `santroller.xsm3` logger and the exchange carries on; packets
that are too short raise `ValueError`.

## Hardware access

The package does no I/O of its own. `santroller.twi` and `santroller.ps2` work
through the `TwiBus` and `Ps2Transport` protocols, which you implement for
your bus or port. There is no USB device stack, no polling loop that builds
controller reports, and no command-line program: the package supplies the
descriptors, calibration and decoding that such a program would use.

## Tests

```
pytest
```