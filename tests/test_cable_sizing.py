from __future__ import annotations

import math
import sys
from dataclasses import replace
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from calc_core.cable_sizing import (
    STATUS_FAIL,
    STATUS_INFO,
    STATUS_OK,
    CableInput,
    du_limit_pct,
    section_by_ampacity,
    size_cable,
)


def _input(**overrides) -> CableInput:
    base = CableInput(
        current_a=20.0,
        voltage_v=230.0,
        phases="mono",
        length_m=25.0,
        usage="tomadas",
        method="B1",
        material="cobre",
        ambient_temp_c=30.0,
        conductor_count=1,
        insulation="PVC",
    )
    return replace(base, **overrides)


def _codes(result) -> dict[str, str]:
    return {o.code: o.status for o in result.observations}


def test_single_phase_sockets_example() -> None:
    res = size_cable(_input())

    assert res.du_limit_pct == 5.0
    assert res.k_factor == 2.0
    assert res.section_by_drop_mm2 == pytest.approx(17.5 / 11.5)
    # 1,5 mm² B1 carries 17,5 A only.
    assert res.section_by_ampacity_mm2 == 2.5
    assert res.section_standard_mm2 == 2.5
    assert res.du_v == pytest.approx(7.0)
    assert res.du_pct == pytest.approx(7.0 / 230 * 100)
    assert res.ampacity_table_a == 24.0
    assert res.ampacity_corrected_a == 24.0
    assert res.protection_a == 20
    assert res.valid
    assert _codes(res) == {
        "du_limit": STATUS_OK,
        "ampacity": STATUS_OK,
        "protection": STATUS_OK,
    }


def test_lighting_uses_three_percent_limit() -> None:
    res = size_cable(_input(usage="iluminacao"))
    assert res.du_limit_pct == 3.0
    assert res.section_by_drop_mm2 == pytest.approx(17.5 / 6.9)
    assert res.section_standard_mm2 == 4.0
    assert res.du_pct <= 3.0
    assert res.valid


def test_three_phase_uses_sqrt3() -> None:
    res = size_cable(_input(phases="tri", voltage_v=400.0, length_m=100.0))
    assert res.k_factor == pytest.approx(math.sqrt(3))
    assert res.section_by_drop_mm2 == pytest.approx(math.sqrt(3) * 100 * 20 * 0.0175 / 20)
    assert res.section_standard_mm2 == 4.0
    assert res.valid


def test_temperature_and_grouping_corrections() -> None:
    res = size_cable(_input(ambient_temp_c=40.0, conductor_count=3))
    assert res.temp_factor == pytest.approx(0.87)
    assert res.grouping_factor == pytest.approx(0.7)
    assert res.current_corrected_a == pytest.approx(20 / (0.87 * 0.7))
    # 4 mm² (32 A) is below the corrected 32,8 A.
    assert res.section_standard_mm2 == 6.0
    assert res.ampacity_corrected_a == pytest.approx(41 * 0.87 * 0.7)
    codes = _codes(res)
    assert codes["temp_factor"] == STATUS_INFO
    assert codes["grouping_factor"] == STATUS_INFO
    assert res.valid


def test_aluminium_below_minimum_section_fails() -> None:
    res = size_cable(_input(material="aluminio"))
    assert res.rho == 0.0285
    assert res.section_standard_mm2 < 16
    assert _codes(res)["aluminium_min_section"] == STATUS_FAIL
    assert not res.valid


def test_method_e_three_phase_reads_quadro() -> None:
    res = size_cable(_input(current_a=100.0, phases="tri", voltage_v=400.0, length_m=10.0, method="E"))
    assert res.section_by_ampacity_mm2 == 16.0
    assert res.ampacity_table_a == 100.0
    assert res.protection_a == 100
    assert res.valid


def test_method_f_starts_at_25_mm2() -> None:
    s, iz = section_by_ampacity(20.0, "F", material="cobre", phases="mono")
    assert s == 25.0
    assert iz == 161.0


def test_oversized_current_falls_back_and_fails() -> None:
    res = size_cable(_input(current_a=1000.0, length_m=1.0))
    assert res.section_by_ampacity_mm2 == 240.0
    assert res.ampacity_table_a == 407.0
    assert res.protection_a == 630
    codes = _codes(res)
    assert codes["ampacity"] == STATUS_FAIL
    assert codes["protection"] == STATUS_FAIL
    assert not res.valid


def test_long_run_section_beyond_table_uses_last_row() -> None:
    res = size_cable(_input(current_a=100.0, length_m=1000.0))
    assert res.section_standard_mm2 == 400.0
    # B1 is tabulated up to 240 mm².
    assert res.ampacity_table_a == 407.0
    assert _codes(res)["ampacity"] == STATUS_OK


def test_voltage_drop_over_limit_fails() -> None:
    # Largest section still drops more than 5 %.
    res = size_cable(_input(current_a=100.0, length_m=20000.0))
    assert res.section_standard_mm2 == 630.0
    assert res.du_pct > 5.0
    assert _codes(res)["du_limit"] == STATUS_FAIL
    assert not res.valid


def test_same_input_same_result() -> None:
    data = _input(method="C", ambient_temp_c=45.0, conductor_count=4, insulation="XLPE")
    assert size_cable(data) == size_cable(data)


def test_du_limit_unknown_usage() -> None:
    with pytest.raises(ValueError):
        du_limit_pct("industrial")


@pytest.mark.parametrize(
    ("overrides", "exc"),
    [
        ({"current_a": 0.0}, ValueError),
        ({"length_m": float("nan")}, ValueError),
        ({"voltage_v": "230"}, TypeError),
        ({"material": "ouro"}, ValueError),
        ({"method": "Z"}, ValueError),
        ({"phases": "bi"}, ValueError),
        ({"insulation": "RUBBER"}, ValueError),
    ],
)
def test_invalid_inputs_raise(overrides: dict, exc: type) -> None:
    with pytest.raises(exc):
        size_cable(_input(**overrides))
