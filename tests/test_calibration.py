import pytest
from hypothesis import given
from hypothesis import strategies as st

from santroller.calibration import (
    INT16_MAX,
    INT16_MIN,
    UINT16_MAX,
    hat_from_dpad,
    ps3_axis,
    ps3_trigger,
    ps3_whammy,
    xbox_axis,
    xbox_trigger,
    xbox_whammy,
)

int16 = st.integers(min_value=INT16_MIN, max_value=INT16_MAX)
uint16 = st.integers(min_value=0, max_value=UINT16_MAX)


@given(int16)
def test_xbox_axis_identity_calibration(value):
    assert xbox_axis(value, 0, INT16_MIN, 1024, 0) == value


def test_xbox_axis_inside_deadzone_is_zero():
    assert xbox_axis(100, 0, INT16_MIN, 1024, 500) == 0
    assert xbox_axis(-100, 0, INT16_MIN, 1024, 500) == 0


@given(int16, int16, int16, st.integers(min_value=-4096, max_value=4096), st.integers(min_value=0, max_value=4000))
def test_xbox_axis_stays_in_range(value, offset, minimum, multiplier, deadzone):
    assert INT16_MIN <= xbox_axis(value, offset, minimum, multiplier, deadzone) <= INT16_MAX


@given(int16, int16)
def test_xbox_axis_monotonic_without_deadzone(a, b):
    low, high = sorted((a, b))
    assert xbox_axis(low, 0, INT16_MIN, 2048, 0) <= xbox_axis(high, 0, INT16_MIN, 2048, 0)


@given(uint16)
def test_xbox_trigger_identity_calibration(value):
    assert xbox_trigger(value, 0, 1024, 0) == value


def test_xbox_trigger_below_deadzone_is_zero():
    assert xbox_trigger(100, 0, 1024, 500) == 0


def test_xbox_trigger_negative_multiplier_above_minimum_is_zero():
    assert xbox_trigger(2000, 1000, -1024, 0) == 0


@given(uint16, int16, st.integers(min_value=-4096, max_value=4096), uint16)
def test_xbox_trigger_stays_in_range(value, minimum, multiplier, deadzone):
    assert 0 <= xbox_trigger(value, minimum, multiplier, deadzone) <= UINT16_MAX


def test_xbox_whammy_below_deadzone_is_minimum():
    assert xbox_whammy(100, 0, 1024, 500) == INT16_MIN
    assert xbox_whammy(2000, 1000, -1024, 0) == INT16_MIN


@given(uint16, int16, st.integers(min_value=-4096, max_value=4096), uint16)
def test_xbox_whammy_stays_in_range(value, minimum, multiplier, deadzone):
    assert INT16_MIN <= xbox_whammy(value, minimum, multiplier, deadzone) <= INT16_MAX


@given(uint16, uint16)
def test_xbox_whammy_monotonic(a, b):
    low, high = sorted((a, b))
    assert xbox_whammy(low, 0, 1024, 0) <= xbox_whammy(high, 0, 1024, 0)


def test_ps3_axis_extremes_and_centre():
    assert ps3_axis(INT16_MIN, 0, INT16_MIN, 1024, 0) == 0
    assert ps3_axis(INT16_MAX, 0, INT16_MIN, 1024, 0) == 255
    assert ps3_axis(10, 0, INT16_MIN, 1024, 500) == 128


@given(int16, int16)
def test_ps3_axis_monotonic(a, b):
    low, high = sorted((a, b))
    assert ps3_axis(low, 0, INT16_MIN, 1024, 0) <= ps3_axis(high, 0, INT16_MIN, 1024, 0)


def test_ps3_trigger_full_and_empty():
    assert ps3_trigger(-1, 0, 1024, 0) == 255
    assert ps3_trigger(100, 0, 1024, 500) == 0


@given(uint16, int16, st.integers(min_value=-4096, max_value=4096), uint16)
def test_ps3_whammy_is_a_byte(value, minimum, multiplier, deadzone):
    assert 0 <= ps3_whammy(value, minimum, multiplier, deadzone) <= 255


def test_ps3_whammy_released_is_zero():
    assert ps3_whammy(100, 0, 1024, 500) == 0


@pytest.mark.parametrize(
    "mask, expected",
    [(0, 0x08), (1, 0x00), (2, 0x04), (4, 0x06), (8, 0x02), (5, 0x07), (6, 0x05), (9, 0x01), (10, 0x03), (3, 0x08)],
)
def test_hat_bindings(mask, expected):
    assert hat_from_dpad(mask) == expected


@pytest.mark.parametrize("mask", [0x0B, 0x0C, 0x0F])
def test_hat_impossible_combinations_are_neutral(mask):
    assert hat_from_dpad(mask) == 0x08


def test_hat_rejects_non_byte():
    with pytest.raises(ValueError):
        hat_from_dpad(256)