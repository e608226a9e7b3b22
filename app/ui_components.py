from __future__ import annotations

from typing import Callable

import streamlit as st

from app.formatting import fmt_num
from calc_core.cable_sizing import STATUS_FAIL, STATUS_INFO, STATUS_OK, Observation

_STATUS_ICONS = {STATUS_OK: "✅", STATUS_FAIL: "❌", STATUS_INFO: "ℹ️"}


def _status_style(status: str) -> tuple[str, str]:
    """
    Returns (bg_color, fg_color) for a status pill.
    Colors are chosen to be readable in both Streamlit light/dark themes.
    """
    s = (status or "").upper().strip()
    if s == STATUS_OK:
        return "#1f7a3a", "white"
    if s == STATUS_FAIL:
        return "#b91c1c", "white"
    if s == STATUS_INFO:
        return "#1d4ed8", "white"
    return "#374151", "white"


def status_pill(label: str, status: str) -> None:
    bg, fg = _status_style(status)
    st.markdown(
        f"""
        <span style="
          display:inline-block;
          padding:0.15rem 0.55rem;
          border-radius:999px;
          background:{bg};
          color:{fg};
          font-weight:600;
          font-size:0.85rem;
          line-height:1.4;
          white-space:nowrap;
        ">{label}</span>
        """,
        unsafe_allow_html=True,
    )


def observation_text(obs: Observation, t: Callable[..., str]) -> str:
    """Localized observation line; numeric params are pre-formatted for display."""
    params = {
        k: fmt_num(v) if isinstance(v, float) else v for k, v in obs.params.items()
    }
    icon = _STATUS_ICONS.get(obs.status, "")
    return f"{icon} {t(f'obs.{obs.code}', **params)}".strip()


def render_observations(observations: tuple[Observation, ...], *, valid: bool, t: Callable[..., str]) -> None:
    if valid:
        st.success(t("cable.verdict_valid"))
    else:
        st.error(t("cable.verdict_invalid"))
    for obs in observations:
        text = observation_text(obs, t)
        if obs.status == STATUS_FAIL:
            st.error(text)
        elif obs.status == STATUS_OK:
            st.success(text)
        else:
            st.info(text)


def result_card(label: str, value: str, unit: str = "") -> None:
    """Result tile: label on top, value + unit below (dash when undefined)."""
    with st.container(border=True):
        st.caption(label)
        st.markdown(f"### {value}")
        if unit:
            st.caption(unit)
