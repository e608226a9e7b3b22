from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from . import rtiebt_tables as tables

logger = logging.getLogger(__name__)

PHASES = ("mono", "tri")
USAGES = ("iluminacao", "tomadas", "motores", "outros")

DU_LIMIT_LIGHTING_PCT = 3.0
DU_LIMIT_OTHER_PCT = 5.0

DEFAULT_VOLTAGE_V = {"mono": 230.0, "tri": 400.0}

STATUS_OK = "OK"
STATUS_FAIL = "FAIL"
STATUS_INFO = "INFO"


@dataclass(frozen=True)
class CableInput:
    current_a: float
    voltage_v: float
    phases: str
    length_m: float
    usage: str
    method: str
    material: str
    ambient_temp_c: float
    conductor_count: int
    insulation: str


@dataclass(frozen=True)
class Observation:
    status: str
    code: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CableSizingResult:
    du_limit_pct: float
    k_factor: float
    rho: float
    section_by_drop_mm2: float
    section_by_ampacity_mm2: float
    section_calculated_mm2: float
    section_standard_mm2: float
    temp_factor: float
    grouping_factor: float
    current_corrected_a: float
    ampacity_table_a: float
    ampacity_corrected_a: float
    du_v: float
    du_pct: float
    protection_a: int
    observations: tuple[Observation, ...]

    @property
    def valid(self) -> bool:
        return not any(o.status == STATUS_FAIL for o in self.observations)


def du_limit_pct(usage: str) -> float:
    if usage not in USAGES:
        raise ValueError(f"Unsupported usage: {usage}")
    return DU_LIMIT_LIGHTING_PCT if usage == "iluminacao" else DU_LIMIT_OTHER_PCT


def k_factor(phases: str) -> float:
    if phases == "mono":
        return 2.0
    if phases == "tri":
        return math.sqrt(3.0)
    raise ValueError("phases must be mono or tri")


def calc_du_v(k: float, length_m: float, current_a: float, rho: float, section_mm2: float) -> float:
    if section_mm2 <= 0:
        raise ValueError("section_mm2 must be > 0")
    return k * length_m * current_a * rho / section_mm2


def section_by_ampacity(
    current_corrected_a: float, method: str, *, material: str, phases: str
) -> tuple[float, float]:
    """
    First standard section whose table ampacity carries the corrected current.

    Returns (section_mm2, table_ampacity_a). When no section is large enough,
    the largest tabulated section for the method is returned; the ampacity
    observation then reports the failure.
    """
    last: tuple[float, float] | None = None
    for section in tables.STANDARD_SECTIONS_MM2:
        iz = tables.ampacity(section, method, material=material, phases=phases)
        if iz is None:
            continue
        last = (float(section), iz)
        if iz >= current_corrected_a:
            return last
    if last is None:
        raise ValueError(f"No ampacity data for method {method} ({material})")
    logger.warning(
        "Corrected current %.2f A exceeds method %s table; using %.1f mm²",
        current_corrected_a,
        method,
        last[0],
    )
    return last


def _ampacity_at_or_below(section_mm2: float, method: str, *, material: str, phases: str) -> float:
    # Sections beyond the method's table keep the ampacity of the largest tabulated one.
    for section in reversed(tables.STANDARD_SECTIONS_MM2):
        if section > section_mm2:
            continue
        iz = tables.ampacity(section, method, material=material, phases=phases)
        if iz is not None:
            if section != section_mm2:
                logger.warning(
                    "No ampacity for %.1f mm² method %s; using %.1f mm² row",
                    section_mm2,
                    method,
                    section,
                )
            return iz
    return 0.0


def _validate(data: CableInput) -> None:
    for name in ("current_a", "voltage_v", "length_m"):
        value = getattr(data, name)
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise TypeError(f"{name} must be a number")
        if not math.isfinite(float(value)) or float(value) <= 0:
            raise ValueError(f"{name} must be a finite number > 0")
    if data.phases not in PHASES:
        raise ValueError("phases must be mono or tri")
    if data.material not in tables.MATERIALS:
        raise ValueError(f"Unsupported material: {data.material}")
    if data.method not in tables.METHODS:
        raise ValueError(f"Unsupported installation method: {data.method}")


def _observations(
    data: CableInput,
    *,
    du_pct: float,
    du_limit: float,
    section_standard: float,
    ampacity_corrected: float,
    protection: int,
    temp_factor: float,
    group_factor: float,
) -> tuple[Observation, ...]:
    obs: list[Observation] = []

    params = {"du_pct": du_pct, "limit": du_limit}
    obs.append(Observation(STATUS_OK if du_pct <= du_limit else STATUS_FAIL, "du_limit", params))

    min_section = tables.MIN_SECTION_MM2[data.material]
    if data.material == "aluminio" and section_standard < min_section:
        obs.append(Observation(STATUS_FAIL, "aluminium_min_section", {"min_section": min_section}))

    params = {"iz": ampacity_corrected, "ib": float(data.current_a)}
    ok = ampacity_corrected >= data.current_a
    obs.append(Observation(STATUS_OK if ok else STATUS_FAIL, "ampacity", params))

    params = {"in_a": protection, "ib": float(data.current_a)}
    ok = protection >= data.current_a
    obs.append(Observation(STATUS_OK if ok else STATUS_FAIL, "protection", params))

    if data.ambient_temp_c != tables.REFERENCE_TEMP_C:
        obs.append(Observation(STATUS_INFO, "temp_factor", {"factor": temp_factor}))
    if data.conductor_count > 1:
        obs.append(Observation(STATUS_INFO, "grouping_factor", {"factor": group_factor}))
    return tuple(obs)


def size_cable(data: CableInput) -> CableSizingResult:
    _validate(data)
    current = float(data.current_a)
    length = float(data.length_m)

    du_limit = du_limit_pct(data.usage)
    du_max_v = du_limit / 100.0 * float(data.voltage_v)
    k = k_factor(data.phases)
    rho = tables.RESISTIVITY[data.material]

    s_drop = k * length * current * rho / du_max_v

    f_temp = tables.temperature_factor(data.insulation, data.ambient_temp_c)
    f_group = tables.grouping_factor(data.conductor_count)
    current_corrected = current / (f_temp * f_group)

    s_amp, _ = section_by_ampacity(
        current_corrected, data.method, material=data.material, phases=data.phases
    )

    s_calc = max(s_drop, s_amp)
    s_std = tables.next_standard_section(s_calc)

    du_v = calc_du_v(k, length, current, rho, s_std)
    du_pct = du_v / float(data.voltage_v) * 100.0

    iz_table = _ampacity_at_or_below(s_std, data.method, material=data.material, phases=data.phases)
    iz_corrected = iz_table * f_temp * f_group

    protection = tables.protection_rating(current)

    observations = _observations(
        data,
        du_pct=du_pct,
        du_limit=du_limit,
        section_standard=s_std,
        ampacity_corrected=iz_corrected,
        protection=protection,
        temp_factor=f_temp,
        group_factor=f_group,
    )
    logger.debug(
        "cable sizing s_drop=%.3f s_amp=%.1f s_std=%.1f du_pct=%.3f iz=%.1f",
        s_drop,
        s_amp,
        s_std,
        du_pct,
        iz_corrected,
    )
    return CableSizingResult(
        du_limit_pct=du_limit,
        k_factor=k,
        rho=rho,
        section_by_drop_mm2=s_drop,
        section_by_ampacity_mm2=s_amp,
        section_calculated_mm2=s_calc,
        section_standard_mm2=s_std,
        temp_factor=f_temp,
        grouping_factor=f_group,
        current_corrected_a=current_corrected,
        ampacity_table_a=iz_table,
        ampacity_corrected_a=iz_corrected,
        du_v=du_v,
        du_pct=du_pct,
        protection_a=protection,
        observations=observations,
    )
