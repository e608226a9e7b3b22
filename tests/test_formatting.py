from __future__ import annotations

import math

from app.formatting import PLACEHOLDER, fmt_dms, fmt_num, fmt_section, is_displayable


def test_fmt_num_uses_comma_decimal() -> None:
    assert fmt_num(1.2) == "1,20"
    assert fmt_num(3.04347) == "3,04"
    assert fmt_num(7) == "7,00"
    assert fmt_num(2.5, 1) == "2,5"


def test_fmt_num_grouping_from_ten_thousand() -> None:
    assert fmt_num(1234.5) == "1234,50"
    assert fmt_num(12345) == "12\u202f345,00"


def test_fmt_num_placeholder_for_undefined() -> None:
    assert fmt_num(math.nan) == PLACEHOLDER
    assert fmt_num(math.inf) == PLACEHOLDER
    assert fmt_num(None) == PLACEHOLDER
    assert fmt_num("abc") == PLACEHOLDER


def test_fmt_num_no_negative_zero() -> None:
    assert fmt_num(-0.001) == "0,00"
    assert fmt_num(-1.5) == "-1,50"


def test_fmt_section() -> None:
    assert fmt_section(1.5) == "1,5"
    assert fmt_section(16.0) == "16"
    assert fmt_section(math.nan) == PLACEHOLDER


def test_fmt_dms() -> None:
    assert fmt_dms(41, 12, 58) == "41° 12' 58\""


def test_is_displayable() -> None:
    assert is_displayable(0)
    assert not is_displayable(True)
    assert not is_displayable(math.nan)
