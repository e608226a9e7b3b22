"""i18n dictionary symmetry: PT/EN keys match and required keys exist."""
from __future__ import annotations

import json
import string
from pathlib import Path


def _load_json(path: Path) -> dict:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def _dicts() -> tuple[dict, dict]:
    repo_root = Path(__file__).resolve().parents[1]
    pt = _load_json(repo_root / "app" / "i18n" / "pt.json")
    en = _load_json(repo_root / "app" / "i18n" / "en.json")
    return pt, en


def _placeholders(text: str) -> set[str]:
    return {name for _, name, _, _ in string.Formatter().parse(text) if name}


def test_pt_en_keys_symmetric() -> None:
    """PT and EN dictionaries have identical key sets."""
    pt, en = _dicts()
    assert set(pt.keys()) == set(en.keys()), (
        f"Key mismatch: PT has {set(pt.keys()) - set(en.keys())!r} not in EN; "
        f"EN has {set(en.keys()) - set(pt.keys())!r} not in PT"
    )


def test_placeholders_match() -> None:
    """Both languages format with the same {placeholders}."""
    pt, en = _dicts()
    for key in pt.keys() & en.keys():
        assert _placeholders(pt[key]) == _placeholders(en[key]), key


def test_required_keys_present() -> None:
    """Required i18n keys exist in both PT and EN."""
    pt, en = _dicts()
    required = {
        "app.title",
        "sidebar.language",
        "sidebar.navigation",
        "nav.home",
        "errors.invalid_input",
        "cable.verdict_valid",
        "cable.verdict_invalid",
    }
    missing_pt = required - set(pt.keys())
    missing_en = required - set(en.keys())
    assert not missing_pt, f"PT missing keys: {missing_pt}"
    assert not missing_en, f"EN missing keys: {missing_en}"
