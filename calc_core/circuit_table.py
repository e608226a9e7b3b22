"""
Multi-circuit protection and voltage-drop table.

Each row is one cable run (e.g. main board -> inverter). Rows are evaluated
independently except for the cumulative DU total, which sums DU% in row order.
Overload protection conditions: IB < In < Iz and I2 < 1,45 Iz.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)

POWER_UNITS = ("kW", "kVA")
CONDUCTORS = ("cu", "al")
CABLE_TYPES = ("RZ1-K", "RZ1-AL", "XV")
PARALLEL_VALUES = (1, 2, 3, 4, 5)
PROTECTION_TYPES = ("Fusivel", "Disj. < 63A", "Disj. > 63A")
REFERENCE_METHODS = ("A1", "A2", "B1", "B2", "C", "D", "E", "F", "G")

# Resistivity at operating temperature (Ω·mm²/m).
RHO_OPERATING = {"cu": 0.0225, "al": 0.036}

I2_FACTORS = {"Fusivel": 1.6, "Disj. < 63A": 1.45, "Disj. > 63A": 1.3}
IZ_OVERLOAD_FACTOR = 1.45
KW_TO_AMPS = 1.45
KVA_REFERENCE_VOLTAGE_V = 400.0


@dataclass(frozen=True)
class CircuitRow:
    label: str = ""
    power: float = 0.0
    power_unit: str = "kW"
    conductor: str = "cu"
    cable_type: str = ""
    parallel: int = 1
    section_mm2: float = 0.0
    length_m: float = 0.0
    in_a: float = 0.0
    iz_a: float = 0.0
    method_ref: str = ""
    protection_type: str = "Disj. > 63A"
    power_factor: float = 0.95
    nominal_voltage_v: float = 400.0


@dataclass(frozen=True)
class CircuitResult:
    row: CircuitRow
    ib_a: float
    i2_a: float
    iz_145_a: float
    u_v: float
    du_pct: float
    du_total_pct: float
    condition_in: bool
    condition_i2: bool

    @property
    def ok(self) -> bool:
        return self.condition_in and self.condition_i2


def _round_half_up(value: float, ndigits: int) -> float:
    if not math.isfinite(value):
        return value
    scale = 10.0 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def calc_ib(power: float, unit: str) -> float:
    """Design current from power: kW uses the 1,45 A/kW rule, kVA assumes 400 V three-phase."""
    if unit == "kW":
        result = power * KW_TO_AMPS
    elif unit == "kVA":
        result = power * 1000.0 / (math.sqrt(3.0) * KVA_REFERENCE_VOLTAGE_V)
    else:
        raise ValueError(f"Unsupported power unit: {unit}")
    return _round_half_up(result, 1)


def calc_i2(in_a: float, protection_type: str) -> float:
    factor = I2_FACTORS.get(protection_type)
    if factor is None:
        raise ValueError(f"Unsupported protection type: {protection_type}")
    return _round_half_up(in_a * factor, 1)


def calc_iz_145(iz_a: float) -> float:
    return _round_half_up(iz_a * IZ_OVERLOAD_FACTOR, 1)


def _rho(conductor: str) -> float:
    rho = RHO_OPERATING.get(conductor)
    if rho is None:
        raise ValueError(f"Unsupported conductor: {conductor}")
    return rho


def calc_u(ib_a: float, length_m: float, section_mm2: float, conductor: str, parallel: int) -> float:
    rho = _rho(conductor)
    if section_mm2 <= 0 or parallel <= 0:
        return math.nan
    return _round_half_up(rho * length_m / (section_mm2 * parallel) * ib_a, 2)


def calc_du_pct(
    ib_a: float,
    length_m: float,
    section_mm2: float,
    conductor: str,
    parallel: int,
    nominal_voltage_v: float,
) -> float:
    rho = _rho(conductor)
    if section_mm2 <= 0 or parallel <= 0 or nominal_voltage_v <= 0:
        return math.nan
    result = math.sqrt(3.0) * rho * length_m * ib_a / (section_mm2 * parallel * nominal_voltage_v) * 100.0
    return _round_half_up(result, 2)


def evaluate_row(row: CircuitRow, *, du_before_pct: float = 0.0) -> CircuitResult:
    ib = calc_ib(row.power, row.power_unit)
    i2 = calc_i2(row.in_a, row.protection_type)
    iz_145 = calc_iz_145(row.iz_a)
    u_v = calc_u(ib, row.length_m, row.section_mm2, row.conductor, row.parallel)
    du_pct = calc_du_pct(
        ib, row.length_m, row.section_mm2, row.conductor, row.parallel, row.nominal_voltage_v
    )
    du_total = _round_half_up(du_before_pct + (du_pct if math.isfinite(du_pct) else 0.0), 2)
    return CircuitResult(
        row=row,
        ib_a=ib,
        i2_a=i2,
        iz_145_a=iz_145,
        u_v=u_v,
        du_pct=du_pct,
        du_total_pct=du_total,
        condition_in=ib < row.in_a < row.iz_a,
        condition_i2=i2 < iz_145,
    )


def evaluate_circuits(rows: Iterable[CircuitRow]) -> list[CircuitResult]:
    results: list[CircuitResult] = []
    running = 0.0
    for row in rows:
        res = evaluate_row(row, du_before_pct=running)
        running = res.du_total_pct
        results.append(res)
    logger.debug("circuit table evaluated rows=%d du_total=%.2f", len(results), running)
    return results
