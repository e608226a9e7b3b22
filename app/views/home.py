from __future__ import annotations

import streamlit as st

from app.i18n import t

TOOLS = (
    ("shading", "home.shading_title", "home.shading_text"),
    ("cable_sizing", "home.cable_title", "home.cable_text"),
    ("circuit_table", "home.circuits_title", "home.circuits_text"),
)


def _go(page: str) -> None:
    st.session_state["page"] = page


def render(state: dict) -> None:
    st.header(t("home.header"))
    st.write(t("home.intro"))

    cols = st.columns(len(TOOLS))
    for col, (page, title_key, text_key) in zip(cols, TOOLS):
        with col:
            with st.container(border=True):
                st.subheader(t(title_key))
                st.caption(t(text_key))
                st.button(t("home.open_btn"), key=f"home_open_{page}", on_click=_go, args=(page,))
