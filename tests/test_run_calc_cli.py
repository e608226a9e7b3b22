from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SCRIPT = ROOT / "tools" / "run_calc.py"


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        capture_output=True,
        text=True,
        check=False,
    )


def test_shading_prints_json() -> None:
    result = _run("shading", "--lat-deg", "41", "--lat-min", "12", "--lat-sec", "58", "--b", "2", "--beta", "30")
    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["result"]["h"] == pytest.approx(1.0)
    assert 3.5 < payload["result"]["d"] < 4.5


def test_shading_undefined_result_is_null() -> None:
    result = _run("shading", "--lat-deg", "0", "--b", "2", "--beta", "30", "--alfa", "66.56")
    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["result"]["d1"] is None
    assert payload["result"]["d"] is None


def test_shading_invalid_input_exit_code() -> None:
    result = _run("shading", "--lat-deg", "95", "--b", "2", "--beta", "30")
    assert result.returncode == 2
    assert "lat_deg must be in [-90, 90]" in result.stderr
    assert result.stdout == ""


def test_cable_prints_json() -> None:
    result = _run("cable", "--current", "20", "--length", "25", "--method", "B1")
    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    res = payload["result"]
    assert payload["input"]["voltage_v"] == 230.0
    assert res["section_standard_mm2"] == 2.5
    assert res["protection_a"] == 20
    assert res["valid"] is True
    assert {o["code"] for o in res["observations"]} == {"du_limit", "ampacity", "protection"}


def test_cable_three_phase_default_voltage() -> None:
    result = _run("cable", "--current", "20", "--length", "100", "--phases", "tri")
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout)["input"]["voltage_v"] == 400.0


def test_cable_invalid_input_exit_code() -> None:
    result = _run("cable", "--current", "0", "--length", "25")
    assert result.returncode == 2
    assert "current_a must be > 0" in result.stderr
