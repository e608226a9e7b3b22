"""i18n UI key coverage: every t("...")/t('...') key exists in PT and EN."""
from __future__ import annotations

import json
import re
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.validation import _VALIDATION_EN  # noqa: E402
from calc_core import rtiebt_tables  # noqa: E402
from calc_core.cable_sizing import PHASES, USAGES, CableInput, size_cable  # noqa: E402


def _load_json(path: Path) -> dict:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def _extract_t_keys(content: str) -> set[str]:
    """Extract i18n keys from t("...") and t('...') calls (string literals only)."""
    # Match t("key") or t('key') - literal strings only, no f-strings or variables
    pattern = r'\bt\s*\(\s*["\']([^"\']+)["\']\s*'
    return set(re.findall(pattern, content))


def _keys() -> tuple[set[str], set[str]]:
    pt = _load_json(ROOT / "app" / "i18n" / "pt.json")
    en = _load_json(ROOT / "app" / "i18n" / "en.json")
    return set(pt.keys()), set(en.keys())


def test_ui_keys_exist_in_pt_and_en() -> None:
    """Every t("key")/t('key') in UI sources exists in both PT and EN dicts."""
    pt_keys, en_keys = _keys()

    sources = [
        ROOT / "app" / "streamlit_app.py",
        ROOT / "app" / "ui_components.py",
        *sorted((ROOT / "app" / "views").glob("*.py")),
    ]
    all_extracted: set[str] = set()
    for path in sources:
        if not path.exists():
            continue
        content = path.read_text(encoding="utf-8")
        all_extracted |= _extract_t_keys(content)

    assert all_extracted
    missing_pt = all_extracted - pt_keys
    missing_en = all_extracted - en_keys
    assert not missing_pt, f"Keys in UI but missing in PT: {sorted(missing_pt)}"
    assert not missing_en, f"Keys in UI but missing in EN: {sorted(missing_en)}"


def test_dynamic_keys_exist_in_pt_and_en() -> None:
    """Keys built at runtime (enum labels, observations, validation) exist too."""
    pt_keys, en_keys = _keys()

    from app.streamlit_app import PAGES

    # Aluminium at 40 °C in a group of three triggers every observation code.
    res = size_cable(
        CableInput(
            current_a=20.0,
            voltage_v=230.0,
            phases="mono",
            length_m=25.0,
            usage="tomadas",
            method="B1",
            material="aluminio",
            ambient_temp_c=40.0,
            conductor_count=3,
            insulation="PVC",
        )
    )
    obs_codes = {o.code for o in res.observations}
    assert len(obs_codes) == 6

    dynamic = {
        *(f"nav.{page}" for page in PAGES),
        *(f"phases.{p}" for p in PHASES),
        *(f"usage.{u}" for u in USAGES),
        *(f"method.{m}" for m in rtiebt_tables.METHODS),
        *(f"material.{m}" for m in rtiebt_tables.MATERIALS),
        *(f"obs.{code}" for code in obs_codes),
        *(f"shading.coord_error_{r}" for r in ("format", "latitude_range", "longitude_range")),
        *_VALIDATION_EN.keys(),
    }
    assert not dynamic - pt_keys, f"PT missing: {sorted(dynamic - pt_keys)}"
    assert not dynamic - en_keys, f"EN missing: {sorted(dynamic - en_keys)}"
