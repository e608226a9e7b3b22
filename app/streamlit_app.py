from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.i18n import DEFAULT_LANG, LANGUAGES, t  # noqa: E402
from app.views import (  # noqa: E402
    cable_sizing,
    circuit_table,
    home,
    reference_tables,
    shading,
)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"

PAGES = {
    "home": home,
    "shading": shading,
    "cable_sizing": cable_sizing,
    "circuit_table": circuit_table,
    "reference_tables": reference_tables,
}

SHADING_DEFAULTS = {
    "shade_lat_deg": 0,
    "shade_lat_min": 0,
    "shade_lat_sec": 0,
    "shade_b": 0.0,
    "shade_beta": 0.0,
    "shade_alfa": 0.0,
}

CABLE_DEFAULTS = {
    "cable_current_a": 20.0,
    "cable_voltage_v": 230.0,
    "cable_phases": "mono",
    "cable_length_m": 25.0,
    "cable_usage": "tomadas",
    "cable_method": "B1",
    "cable_material": "cobre",
    "cable_ambient_temp_c": 30.0,
    "cable_conductor_count": 2,
    "cable_insulation": "PVC",
}


def _configure_logging() -> None:
    level = os.environ.get("CALC_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _init_state() -> None:
    state = st.session_state
    lang = os.environ.get("CALC_LANG", DEFAULT_LANG).upper()
    state.setdefault("lang", lang if lang in LANGUAGES else DEFAULT_LANG)
    state.setdefault("page", "home")
    state.setdefault("shade_converted", None)
    state.setdefault("shade_result", None)
    state.setdefault("cable_result", None)
    state.setdefault("circuit_rows", circuit_table.empty_frame())
    for key, value in {**SHADING_DEFAULTS, **CABLE_DEFAULTS}.items():
        state.setdefault(key, value)


def main() -> None:
    _configure_logging()
    st.set_page_config(page_title="Calculos Solares", layout="wide")
    _init_state()
    state = st.session_state

    with st.sidebar:
        st.title(t("app.title"))
        st.radio(
            t("sidebar.language"),
            LANGUAGES,
            key="lang",
            horizontal=True,
        )
        st.radio(
            t("sidebar.navigation"),
            list(PAGES),
            format_func=lambda page: t(f"nav.{page}"),
            key="page",
        )
        st.caption(t("sidebar.disclaimer"))

    PAGES[state["page"]].render(state)


if __name__ == "__main__":
    main()
