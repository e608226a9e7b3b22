"""Number formatting for displayed results (pt-PT, two decimals)."""
from __future__ import annotations

import math
from typing import Any

PLACEHOLDER = "–"
# pt-PT groups thousands with a narrow no-break space, only from 10 000 up.
_GROUP_SEP = "\u202f"
_MIN_GROUPING = 10_000


def is_displayable(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        num = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(num)


def fmt_num(value: Any, decimals: int = 2) -> str:
    """Format like toLocaleString("pt-PT"): 1,20 / 1234,50 / 12 345,00; dash when undefined."""
    if not is_displayable(value):
        return PLACEHOLDER
    num = float(value)
    grouped = f"{num:,.{decimals}f}"
    if abs(num) < _MIN_GROUPING:
        grouped = grouped.replace(",", "")
    text = grouped.replace(",", _GROUP_SEP).replace(".", ",")
    if text.lstrip("-").strip("0,") == "":
        # "-0,00" -> "0,00"
        text = text.lstrip("-")
    return text


def fmt_section(value: Any) -> str:
    """Cable section as written in the RTIEBT tables: 1,5 / 2,5 / 16."""
    if not is_displayable(value):
        return PLACEHOLDER
    num = float(value)
    if num.is_integer():
        return str(int(num))
    return f"{num:g}".replace(".", ",")


def fmt_dms(deg: int, minutes: int, seconds: int) -> str:
    return f"{deg}° {minutes}' {seconds}\""
