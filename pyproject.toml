[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "santroller"
version = "0.1.0"
description = "Game controller protocol helpers: XSM3 authentication, DES/SHA primitives, calibration, Wii/PS2 decoding and USB descriptors"
requires-python = ">=3.10"
dependencies = []
keywords = ["usb", "hid", "xinput", "xsm3", "wii", "ps2", "controller", "descriptor", "i2c"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware :: Universal Serial Bus (USB) :: Human Interface Device (HID)",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["santroller"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
