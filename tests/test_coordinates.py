from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from calc_core.shading import CoordinateError, Dms, decimal_to_dms, dms_to_decimal, parse_coordinates


def test_parse_map_coordinates() -> None:
    coords = parse_coordinates("41.216016576977566, -8.386656780738283")
    assert coords.lat == Dms(deg=41, min=12, sec=58)
    assert coords.lon == Dms(deg=-8, min=23, sec=12)


def test_parse_without_spaces() -> None:
    coords = parse_coordinates("38.7,-9.1")
    assert coords.lat.deg == 38
    assert coords.lon.deg == -9


def test_seconds_carry_into_minutes_and_degrees() -> None:
    assert decimal_to_dms(10.99999) == Dms(deg=11, min=0, sec=0)


def test_dms_round_trip_close() -> None:
    dms = decimal_to_dms(41.216016576977566)
    assert dms_to_decimal(dms.deg, dms.min, dms.sec) == pytest.approx(41.216016576977566, abs=1 / 3600)


@pytest.mark.parametrize(
    ("text", "reason"),
    [
        ("abc", "format"),
        ("", "format"),
        ("41.2 -8.3", "format"),
        ("91.0, 10.0", "latitude_range"),
        ("-90.5, 10.0", "latitude_range"),
        ("10.0, 181", "longitude_range"),
    ],
)
def test_parse_errors(text: str, reason: str) -> None:
    with pytest.raises(CoordinateError) as excinfo:
        parse_coordinates(text)
    assert excinfo.value.reason == reason


def test_coordinate_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_coordinates("not a coordinate")
