from __future__ import annotations

import math
import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.views.circuit_table import INPUT_COLUMNS, empty_frame, results_frame, rows_from_frame  # noqa: E402
from app.views.reference_tables import factors_frame, grouping_frame, pvc_frame, quadro_frame  # noqa: E402
from calc_core import rtiebt_tables  # noqa: E402
from calc_core.circuit_table import CircuitRow, evaluate_circuits  # noqa: E402


def test_empty_frame_has_input_columns() -> None:
    df = empty_frame()
    assert list(df.columns) == INPUT_COLUMNS
    assert df.empty


def test_rows_from_frame_fills_blanks_with_defaults() -> None:
    df = pd.DataFrame(
        [{"label": "QE-1", "power": 10.0, "section_mm2": math.nan, "in_a": 16.0, "iz_a": 20.0}]
    )
    [row] = rows_from_frame(df)
    assert row.label == "QE-1"
    assert row.power == 10.0
    assert row.section_mm2 == 0.0
    assert row.power_unit == "kW"
    assert row.protection_type == CircuitRow().protection_type
    assert row.parallel == 1


def test_results_frame_toggles_total_column() -> None:
    results = evaluate_circuits([CircuitRow(label="A", power=10, section_mm2=2.5, length_m=20, in_a=16, iz_a=20)])
    with_total = results_frame(results, show_du_total=True)
    without_total = results_frame(results, show_du_total=False)
    assert "DU total (%)" in with_total.columns
    assert "DU total (%)" not in without_total.columns
    assert with_total.loc[0, "IB (A)"] == "14,5"
    assert with_total.loc[0, "IB < In < Iz"] == "✅"


def test_quadro_frame_marks_missing_values() -> None:
    df = quadro_frame(rtiebt_tables.QUADRO_52_C11)
    assert len(df) == len(rtiebt_tables.QUADRO_52_C11)
    first = df.iloc[0]
    assert first["S (mm²)"] == "1,5"
    assert first["E_2"] == "26"
    assert first["F_3"] == "–"


def test_reference_frames_sizes() -> None:
    assert len(pvc_frame()) == len(rtiebt_tables.AMPACITY_PVC_CU)
    assert len(factors_frame()) == len(rtiebt_tables.TEMPERATURE_FACTORS["PVC"])
    groups = grouping_frame()
    assert groups["n"].iloc[-1] == "≥ 9"
    assert groups["f_agrup"].iloc[0] == "1,00"
