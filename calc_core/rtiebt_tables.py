"""
Static RTIEBT tables (Portuguese low-voltage wiring rules).

All tables are read-only mappings. Lookups that miss an exact key fall back
as documented per function; a fallback is logged at WARNING level.
"""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

MATERIALS = ("cobre", "aluminio")
INSULATIONS = ("PVC", "XLPE", "EPR")
METHODS = ("A1", "A2", "B1", "B2", "C", "D", "E", "F", "G")
METHODS_PVC_TABLE = ("A1", "A2", "B1", "B2", "C", "D")

STANDARD_SECTIONS_MM2: tuple[float, ...] = (
    1.5, 2.5, 4, 6, 10, 16, 25, 35, 50, 70, 95, 120, 150, 185, 240, 300, 400, 500, 630,
)

PROTECTION_RATINGS_A: tuple[int, ...] = (
    6, 10, 13, 16, 20, 25, 32, 40, 50, 63, 80, 100, 125, 160, 200, 250, 315, 400, 500, 630,
)

# Ω·mm²/m at 20 °C
RESISTIVITY: Mapping[str, float] = MappingProxyType({"cobre": 0.0175, "aluminio": 0.0285})

MIN_SECTION_MM2: Mapping[str, float] = MappingProxyType({"cobre": 1.5, "aluminio": 16.0})

REFERENCE_TEMP_C = 30


def _freeze(table: dict) -> Mapping:
    return MappingProxyType({k: MappingProxyType(dict(v)) for k, v in table.items()})


# Copper, PVC insulation, 30 °C ambient, methods A1..D.
AMPACITY_PVC_CU: Mapping[float, Mapping[str, float]] = _freeze(
    {
        1.5: {"A1": 15.5, "A2": 13.5, "B1": 17.5, "B2": 16, "C": 20, "D": 18},
        2.5: {"A1": 21, "A2": 18.5, "B1": 24, "B2": 22, "C": 27, "D": 24},
        4: {"A1": 28, "A2": 25, "B1": 32, "B2": 30, "C": 37, "D": 32},
        6: {"A1": 36, "A2": 32, "B1": 41, "B2": 38, "C": 47, "D": 41},
        10: {"A1": 50, "A2": 43, "B1": 57, "B2": 52, "C": 64, "D": 57},
        16: {"A1": 68, "A2": 57, "B1": 76, "B2": 69, "C": 85, "D": 76},
        25: {"A1": 89, "A2": 75, "B1": 101, "B2": 90, "C": 112, "D": 96},
        35: {"A1": 110, "A2": 92, "B1": 125, "B2": 111, "C": 138, "D": 119},
        50: {"A1": 134, "A2": 110, "B1": 151, "B2": 133, "C": 168, "D": 144},
        70: {"A1": 171, "A2": 139, "B1": 192, "B2": 168, "C": 213, "D": 184},
        95: {"A1": 207, "A2": 167, "B1": 232, "B2": 201, "C": 258, "D": 223},
        120: {"A1": 239, "A2": 192, "B1": 269, "B2": 232, "C": 299, "D": 259},
        150: {"A1": 271, "A2": 216, "B1": 305, "B2": 262, "C": 340, "D": 295},
        185: {"A1": 311, "A2": 245, "B1": 350, "B2": 298, "C": 390, "D": 341},
        240: {"A1": 361, "A2": 281, "B1": 407, "B2": 344, "C": 454, "D": 397},
    }
)

QUADRO_COLUMNS = ("E_2", "E_3", "F_3", "F_4", "F_5", "G_H", "G_V")

# Quadro 52-C11: copper, XLPE/EPR (90 °C), 30 °C ambient. None = not tabulated.
QUADRO_52_C11: Mapping[float, Mapping[str, float | None]] = _freeze(
    {
        1.5: {"E_2": 26, "E_3": 23, "F_3": None, "F_4": None, "F_5": None, "G_H": None, "G_V": None},
        2.5: {"E_2": 36, "E_3": 32, "F_3": None, "F_4": None, "F_5": None, "G_H": None, "G_V": None},
        4: {"E_2": 49, "E_3": 42, "F_3": None, "F_4": None, "F_5": None, "G_H": None, "G_V": None},
        6: {"E_2": 63, "E_3": 54, "F_3": None, "F_4": None, "F_5": None, "G_H": None, "G_V": None},
        10: {"E_2": 86, "E_3": 75, "F_3": None, "F_4": None, "F_5": None, "G_H": None, "G_V": None},
        16: {"E_2": 115, "E_3": 100, "F_3": None, "F_4": None, "F_5": None, "G_H": None, "G_V": None},
        25: {"E_2": 149, "E_3": 127, "F_3": 161, "F_4": 135, "F_5": 141, "G_H": 182, "G_V": 161},
        35: {"E_2": 185, "E_3": 158, "F_3": 200, "F_4": 169, "F_5": 176, "G_H": 226, "G_V": 201},
        50: {"E_2": 225, "E_3": 192, "F_3": 242, "F_4": 207, "F_5": 216, "G_H": 275, "G_V": 246},
        70: {"E_2": 289, "E_3": 246, "F_3": 310, "F_4": 268, "F_5": 279, "G_H": 353, "G_V": 318},
        95: {"E_2": 352, "E_3": 298, "F_3": 377, "F_4": 328, "F_5": 342, "G_H": 430, "G_V": 389},
        120: {"E_2": 410, "E_3": 346, "F_3": 437, "F_4": 383, "F_5": 400, "G_H": 500, "G_V": 454},
        150: {"E_2": 473, "E_3": 399, "F_3": 504, "F_4": 444, "F_5": 464, "G_H": 577, "G_V": 527},
        185: {"E_2": 542, "E_3": 456, "F_3": 575, "F_4": 510, "F_5": 533, "G_H": 661, "G_V": 605},
        240: {"E_2": 641, "E_3": 538, "F_3": 679, "F_4": 607, "F_5": 634, "G_H": 781, "G_V": 719},
        300: {"E_2": 741, "E_3": 621, "F_3": 783, "F_4": 703, "F_5": 736, "G_H": 902, "G_V": 833},
        400: {"E_2": None, "E_3": None, "F_3": 940, "F_4": 823, "F_5": 868, "G_H": 1085, "G_V": 1008},
        500: {"E_2": None, "E_3": None, "F_3": 1083, "F_4": 946, "F_5": 998, "G_H": 1253, "G_V": 1169},
        630: {"E_2": None, "E_3": None, "F_3": 1254, "F_4": 1088, "F_5": 1151, "G_H": 1454, "G_V": 1362},
    }
)

# Quadro 52-C12: aluminium, XLPE/EPR (90 °C), 30 °C ambient.
# APPROXIMATE: derived from 52-C11 with a ~20 % reduction, not transcribed.
QUADRO_52_C12: Mapping[float, Mapping[str, float | None]] = _freeze(
    {
        16: {"E_2": 89, "E_3": 78, "F_3": None, "F_4": None, "F_5": None, "G_H": None, "G_V": None},
        25: {"E_2": 116, "E_3": 99, "F_3": 125, "F_4": 105, "F_5": 110, "G_H": 142, "G_V": 125},
        35: {"E_2": 144, "E_3": 123, "F_3": 156, "F_4": 132, "F_5": 137, "G_H": 176, "G_V": 157},
        50: {"E_2": 175, "E_3": 150, "F_3": 189, "F_4": 161, "F_5": 168, "G_H": 214, "G_V": 192},
        70: {"E_2": 225, "E_3": 192, "F_3": 242, "F_4": 209, "F_5": 217, "G_H": 275, "G_V": 248},
        95: {"E_2": 274, "E_3": 232, "F_3": 294, "F_4": 256, "F_5": 267, "G_H": 335, "G_V": 303},
        120: {"E_2": 319, "E_3": 270, "F_3": 341, "F_4": 298, "F_5": 312, "G_H": 390, "G_V": 354},
        150: {"E_2": 369, "E_3": 311, "F_3": 393, "F_4": 346, "F_5": 362, "G_H": 450, "G_V": 411},
        185: {"E_2": 422, "E_3": 355, "F_3": 448, "F_4": 397, "F_5": 415, "G_H": 515, "G_V": 471},
        240: {"E_2": 499, "E_3": 419, "F_3": 529, "F_4": 473, "F_5": 494, "G_H": 609, "G_V": 560},
        300: {"E_2": 577, "E_3": 484, "F_3": 610, "F_4": 548, "F_5": 573, "G_H": 703, "G_V": 649},
        400: {"E_2": None, "E_3": None, "F_3": 732, "F_4": 641, "F_5": 677, "G_H": 846, "G_V": 786},
        500: {"E_2": None, "E_3": None, "F_3": 843, "F_4": 737, "F_5": 778, "G_H": 977, "G_V": 911},
        630: {"E_2": None, "E_3": None, "F_3": 976, "F_4": 848, "F_5": 897, "G_H": 1133, "G_V": 1061},
    }
)

# Methods E/F/G read a 52-C11/52-C12 column, chosen by loaded conductors.
QUADRO_COLUMN_BY_METHOD: Mapping[tuple[str, str], str] = MappingProxyType(
    {
        ("E", "mono"): "E_2",
        ("E", "tri"): "E_3",
        ("F", "mono"): "F_3",
        ("F", "tri"): "F_4",
        ("G", "mono"): "G_H",
        ("G", "tri"): "G_H",
    }
)

# Ambient temperature correction, referenced to 30 °C.
TEMPERATURE_FACTORS: Mapping[str, Mapping[int, float]] = _freeze(
    {
        "PVC": {
            10: 1.22, 15: 1.17, 20: 1.12, 25: 1.06, 30: 1.00, 35: 0.94,
            40: 0.87, 45: 0.79, 50: 0.71, 55: 0.61, 60: 0.50,
        },
        "XLPE": {
            10: 1.15, 15: 1.12, 20: 1.08, 25: 1.04, 30: 1.00, 35: 0.96,
            40: 0.91, 45: 0.87, 50: 0.82, 55: 0.76, 60: 0.71,
        },
    }
)

# EPR shares the 90 °C insulation column with XLPE.
INSULATION_TEMPERATURE_COLUMN: Mapping[str, str] = MappingProxyType(
    {"PVC": "PVC", "XLPE": "XLPE", "EPR": "XLPE"}
)

GROUPING_FACTORS: Mapping[int, float] = MappingProxyType(
    {1: 1.0, 2: 0.8, 3: 0.7, 4: 0.65, 5: 0.6, 6: 0.57, 7: 0.54, 8: 0.52, 9: 0.5}
)
GROUPING_MAX_TABULATED = 9


def _check_number(name: str, value: float) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"{name} must be a number")
    val = float(value)
    if math.isnan(val) or math.isinf(val):
        raise ValueError(f"{name} must be finite")
    return val


def temperature_factor(insulation: str, temp_c: float) -> float:
    """
    Correction factor for ambient temperature.

    Temperatures between rows use the nearest tabulated temperature (ties go
    to the hotter row); temperatures outside the table clamp to its ends.
    """
    column = INSULATION_TEMPERATURE_COLUMN.get(insulation)
    if column is None:
        raise ValueError(f"Unsupported insulation: {insulation}")
    temp = _check_number("temp_c", temp_c)
    table = TEMPERATURE_FACTORS[column]
    if temp.is_integer() and int(temp) in table:
        return table[int(temp)]
    nearest = min(table, key=lambda t: (abs(t - temp), -t))
    logger.warning(
        "No temperature factor for %s at %s °C; using %s °C row", insulation, temp, nearest
    )
    return table[nearest]


def grouping_factor(count: int) -> float:
    """Grouping factor; counts above the table use the last (9+) row."""
    if not isinstance(count, int) or isinstance(count, bool):
        raise TypeError("count must be an integer")
    if count < 1:
        raise ValueError("count must be >= 1")
    return GROUPING_FACTORS[min(count, GROUPING_MAX_TABULATED)]


def ampacity(section_mm2: float, method: str, *, material: str = "cobre", phases: str = "mono") -> float | None:
    """
    Table ampacity (A) at 30 °C for one section and installation method.

    Methods A1..D read the copper PVC table for both materials. Methods
    E/F/G read Quadro 52-C11 (copper) or 52-C12 (aluminium). Returns None
    when the section is not tabulated for that method.
    """
    if method not in METHODS:
        raise ValueError(f"Unsupported installation method: {method}")
    if material not in MATERIALS:
        raise ValueError(f"Unsupported material: {material}")
    if phases not in ("mono", "tri"):
        raise ValueError("phases must be mono or tri")
    section = _check_number("section_mm2", section_mm2)

    if method in METHODS_PVC_TABLE:
        row = AMPACITY_PVC_CU.get(section)
        if row is None:
            return None
        return float(row[method])

    table = QUADRO_52_C11 if material == "cobre" else QUADRO_52_C12
    row = table.get(section)
    if row is None:
        return None
    value = row[QUADRO_COLUMN_BY_METHOD[(method, phases)]]
    return float(value) if value is not None else None


def next_standard_section(value_mm2: float) -> float:
    """Smallest standard section >= value; the largest section when none is."""
    value = _check_number("value_mm2", value_mm2)
    for section in STANDARD_SECTIONS_MM2:
        if section >= value:
            return float(section)
    logger.warning("Section %.2f mm² exceeds the largest standard section", value)
    return float(STANDARD_SECTIONS_MM2[-1])


def protection_rating(current_a: float) -> int:
    """Smallest standard protection rating >= current; the largest when none is."""
    current = _check_number("current_a", current_a)
    for rating in PROTECTION_RATINGS_A:
        if rating >= current:
            return rating
    logger.warning("Current %.2f A exceeds the largest protection rating", current)
    return PROTECTION_RATINGS_A[-1]
