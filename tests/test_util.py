import math

import pytest

from rlt.util import human_bytes, rate

_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]


def _parse(text):
    number, unit = text.split(" ")
    return float(number), unit


def test_one_kibibyte():
    assert human_bytes(1024, 2) == "1.00 KiB"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), -1.0, -5, 2.0**70])
def test_unrepresentable_values(value):
    assert human_bytes(value, 2) == "N/A"


@pytest.mark.parametrize("value", [0, 1, 1023, 1024, 1536, 5 * 1024**2, 3 * 1024**3 + 17])
def test_round_trip_within_precision(value):
    number, unit = _parse(human_bytes(value, 3))
    assert unit in _UNITS
    restored = number * 1024 ** _UNITS.index(unit)
    assert math.isclose(restored, value, rel_tol=1e-3, abs_tol=0.5)


@pytest.mark.parametrize("value", [1, 1023, 2048, 10**7, 10**12])
def test_scaled_number_below_unit_step(value):
    number, unit = _parse(human_bytes(value, 2))
    assert 1.0 <= number < 1024.0 or unit == "B"


def test_precision_controls_decimals():
    for precision in (0, 1, 4):
        number, _ = human_bytes(123456, precision).split(" ")
        decimals = number.split(".")[1] if "." in number else ""
        assert len(decimals) == precision


def test_int_and_float_agree():
    assert human_bytes(4096, 2) == human_bytes(4096.0, 2)


def test_units_increase_with_value():
    units = [_parse(human_bytes(1024**k, 1))[1] for k in range(len(_UNITS))]
    assert units == _UNITS


def test_rate_zero_elapsed():
    assert rate(10, 0.0) == 0.0
    assert rate(10, -1.0) == 0.0


def test_rate_positive_elapsed():
    r = rate(30, 1.5)
    assert math.isclose(r * 1.5, 30)