from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

import pandas as pd

from calc_core import circuit_table, rtiebt_tables
from calc_core.cable_sizing import PHASES, USAGES

Translator = Callable[..., str]

# Default English strings when no translator is provided.
_VALIDATION_EN = {
    "validation.field_required": "{field} is required",
    "validation.field_number": "{field} must be a number",
    "validation.field_integer": "{field} must be an integer",
    "validation.field_positive": "{field} must be > 0",
    "validation.field_gte_zero": "{field} must be >= 0",
    "validation.field_range": "{field} must be in [{lo}, {hi}]",
    "validation.field_choice": "{field} must be one of {choices}",
    "validation.latitude_total": "latitude must be in [-90, 90]",
    "validation.section_standard": "section_mm2 must be a standard section (or 0)",
}


def _tr(translator: Translator | None, key: str, **kwargs: Any) -> str:
    if translator is None:
        raw = _VALIDATION_EN.get(key, key)
        return raw.format(**kwargs) if kwargs else raw
    return translator(key, **kwargs)


@dataclass(frozen=True)
class ValidationResult:
    errors: list[str]
    warnings: list[str]
    row_status: dict[int, str]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def is_finite(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        num = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(num)


def _is_blank(value: Any) -> bool:
    if value is None or value == "":
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _check_number(
    errors: list[str],
    data: dict[str, Any],
    field: str,
    translator: Translator | None,
    *,
    lo: float | None = None,
    hi: float | None = None,
    positive: bool = False,
    integer: bool = False,
) -> float | None:
    val = data.get(field)
    if _is_blank(val):
        errors.append(_tr(translator, "validation.field_required", field=field))
        return None
    if not is_finite(val):
        errors.append(_tr(translator, "validation.field_number", field=field))
        return None
    num = float(val)
    if integer and not num.is_integer():
        errors.append(_tr(translator, "validation.field_integer", field=field))
        return None
    if positive and num <= 0:
        errors.append(_tr(translator, "validation.field_positive", field=field))
        return None
    if (lo is not None and num < lo) or (hi is not None and num > hi):
        errors.append(_tr(translator, "validation.field_range", field=field, lo=lo, hi=hi))
        return None
    return num


def _check_choice(
    errors: list[str],
    data: dict[str, Any],
    field: str,
    choices: tuple,
    translator: Translator | None,
) -> None:
    if data.get(field) not in choices:
        errors.append(
            _tr(translator, "validation.field_choice", field=field, choices=", ".join(map(str, choices)))
        )


def validate_shading(data: dict[str, Any], *, translator: Translator | None = None) -> list[str]:
    """
    Shading form: lat_deg/lat_min/lat_sec, b, beta, alfa.
    """
    errors: list[str] = []
    deg = _check_number(errors, data, "lat_deg", translator, lo=-90, hi=90, integer=True)
    minutes = _check_number(errors, data, "lat_min", translator, lo=0, hi=59, integer=True)
    seconds = _check_number(errors, data, "lat_sec", translator, lo=0, hi=59, integer=True)
    _check_number(errors, data, "b", translator, positive=True)
    _check_number(errors, data, "beta", translator, lo=0, hi=90)
    _check_number(errors, data, "alfa", translator, lo=-90, hi=90)

    if deg is not None and minutes is not None and seconds is not None:
        if abs(deg) + minutes / 60.0 + seconds / 3600.0 > 90.0:
            errors.append(_tr(translator, "validation.latitude_total"))
    return errors


def validate_cable(data: dict[str, Any], *, translator: Translator | None = None) -> list[str]:
    """
    Cable sizing form, matching calc_core.cable_sizing.CableInput fields.
    """
    errors: list[str] = []
    _check_number(errors, data, "current_a", translator, positive=True)
    _check_number(errors, data, "voltage_v", translator, positive=True)
    _check_number(errors, data, "length_m", translator, positive=True)
    _check_number(errors, data, "ambient_temp_c", translator, lo=-10, hi=60)
    _check_number(errors, data, "conductor_count", translator, lo=1, hi=20, integer=True)
    _check_choice(errors, data, "phases", PHASES, translator)
    _check_choice(errors, data, "usage", USAGES, translator)
    _check_choice(errors, data, "method", rtiebt_tables.METHODS, translator)
    _check_choice(errors, data, "material", rtiebt_tables.MATERIALS, translator)
    _check_choice(errors, data, "insulation", rtiebt_tables.INSULATIONS, translator)
    return errors


def validate_circuit_rows(df: pd.DataFrame, *, translator: Translator | None = None) -> ValidationResult:
    """
    Validates circuit table rows as edited in the data editor.

    Expects DataFrame columns named after calc_core.circuit_table.CircuitRow fields.
    Rows with section 0 are allowed (not yet chosen) and produce a warning.
    """
    errors: list[str] = []
    warnings: list[str] = []
    statuses: dict[int, str] = {}

    for idx, row in df.iterrows():
        data = row.to_dict()
        row_errors: list[str] = []
        row_warnings: list[str] = []
        label = str(data.get("label") or "").strip() or f"row#{idx}"

        for field in ("power", "length_m", "in_a", "iz_a"):
            val = _check_number(row_errors, data, field, translator)
            if val is not None and val < 0:
                row_errors.append(_tr(translator, "validation.field_gte_zero", field=field))
        _check_number(row_errors, data, "nominal_voltage_v", translator, positive=True)
        _check_number(row_errors, data, "power_factor", translator, lo=0, hi=1)

        parallel = _check_number(row_errors, data, "parallel", translator, integer=True)
        if parallel is not None and int(parallel) not in circuit_table.PARALLEL_VALUES:
            row_errors.append(_tr(translator, "validation.field_range", field="parallel", lo=1, hi=5))

        section = _check_number(row_errors, data, "section_mm2", translator)
        if section is not None:
            if section == 0:
                row_warnings.append(_tr(translator, "validation.field_positive", field="section_mm2"))
            elif section not in rtiebt_tables.STANDARD_SECTIONS_MM2:
                row_errors.append(_tr(translator, "validation.section_standard"))

        _check_choice(row_errors, data, "power_unit", circuit_table.POWER_UNITS, translator)
        _check_choice(row_errors, data, "conductor", circuit_table.CONDUCTORS, translator)
        _check_choice(row_errors, data, "protection_type", circuit_table.PROTECTION_TYPES, translator)
        for field, choices in (
            ("cable_type", circuit_table.CABLE_TYPES),
            ("method_ref", circuit_table.REFERENCE_METHODS),
        ):
            if not _is_blank(data.get(field)):
                _check_choice(row_errors, data, field, choices, translator)

        if row_errors:
            errors.append(f"{label}: " + "; ".join(row_errors))
            statuses[idx] = "INVALID"
        else:
            statuses[idx] = "OK"
        if row_warnings:
            warnings.append(f"{label}: " + "; ".join(row_warnings))

    return ValidationResult(errors=errors, warnings=warnings, row_status=statuses)
