from __future__ import annotations

import logging

import streamlit as st

from app.formatting import PLACEHOLDER, fmt_dms, fmt_num
from app.i18n import t
from app.ui_components import result_card
from app.validation import validate_shading
from calc_core.shading import (
    CoordinateError,
    ShadingInput,
    calc_row_spacing,
    dms_to_decimal,
    panel_height,
    parse_coordinates,
    sun_elevation_winter,
)

logger = logging.getLogger(__name__)

FIELDS = ("lat_deg", "lat_min", "lat_sec", "b", "beta", "alfa")


def _key(field: str) -> str:
    return f"shade_{field}"


def _apply_latitude() -> None:
    # Runs before widgets are rebuilt, so widget keys may be assigned.
    coords = st.session_state.get("shade_converted")
    if coords is None:
        return
    st.session_state[_key("lat_deg")] = coords.lat.deg
    st.session_state[_key("lat_min")] = coords.lat.min
    st.session_state[_key("lat_sec")] = coords.lat.sec


def _render_converter(state: dict) -> None:
    with st.container(border=True):
        st.markdown(f"**🌍 {t('shading.converter_header')}**")
        st.caption(t("shading.converter_help"))
        cols = st.columns([4, 1], vertical_alignment="bottom")
        with cols[0]:
            text = st.text_input(
                t("shading.paste_coordinates"),
                placeholder="41.216016576977566, -8.386656780738283",
                key="shade_coord_text",
            )
        with cols[1]:
            process = st.button(t("shading.process_btn"))
        if process:
            try:
                state["shade_converted"] = parse_coordinates(text)
            except CoordinateError as exc:
                state["shade_converted"] = None
                st.error(t(f"shading.coord_error_{exc.reason}"))

        coords = state.get("shade_converted")
        if coords is not None:
            st.success(
                t("shading.converted_latitude", value=fmt_dms(coords.lat.deg, coords.lat.min, coords.lat.sec))
            )
            st.button(t("shading.apply_latitude_btn"), on_click=_apply_latitude)


def _render_results(result) -> None:
    st.subheader(t("shading.results_header"))
    cols = st.columns(2)
    if result is None:
        values = (PLACEHOLDER, PLACEHOLDER)
    else:
        values = (fmt_num(result.d1), fmt_num(result.d))
    with cols[0]:
        result_card("d1", values[0], t("units.metres"))
    with cols[1]:
        result_card("d", values[1], t("units.metres"))


def render(state: dict) -> None:
    st.header(t("shading.header"))
    st.caption(t("shading.intro"))

    _render_converter(state)

    st.subheader(t("shading.params_header"))
    st.markdown(f"**{t('shading.latitude')}**")
    cols = st.columns(3)
    with cols[0]:
        st.number_input("°", min_value=-90, max_value=90, step=1, key=_key("lat_deg"))
    with cols[1]:
        st.number_input("'", min_value=0, max_value=59, step=1, key=_key("lat_min"))
    with cols[2]:
        st.number_input("''", min_value=0, max_value=59, step=1, key=_key("lat_sec"))

    cols = st.columns(3)
    with cols[0]:
        st.number_input(t("shading.b_label"), min_value=0.0, step=0.01, format="%.2f", key=_key("b"))
    with cols[1]:
        st.number_input(t("shading.beta_label"), min_value=0.0, max_value=90.0, step=1.0, key=_key("beta"))
    with cols[2]:
        st.number_input(t("shading.alfa_label"), min_value=-90.0, max_value=90.0, step=1.0, key=_key("alfa"))

    data = {field: state.get(_key(field)) for field in FIELDS}

    # h and gama follow the inputs live, before submit.
    latitude = dms_to_decimal(int(data["lat_deg"]), int(data["lat_min"]), int(data["lat_sec"]))
    live = st.columns(2)
    live[0].metric(t("shading.h_label"), f"{fmt_num(panel_height(data['b'], data['beta']))} m")
    live[1].metric(t("shading.gama_label"), f"{fmt_num(sun_elevation_winter(latitude))} °")

    if st.button(t("shading.calculate_btn"), type="primary"):
        errors = validate_shading(data, translator=t)
        if errors:
            st.error(t("errors.invalid_input") + "\n\n" + "\n".join(f"- {e}" for e in errors))
            state["shade_result"] = None
        else:
            try:
                state["shade_result"] = calc_row_spacing(
                    ShadingInput(
                        lat_deg=int(data["lat_deg"]),
                        lat_min=int(data["lat_min"]),
                        lat_sec=int(data["lat_sec"]),
                        b=float(data["b"]),
                        beta=float(data["beta"]),
                        alfa=float(data["alfa"]),
                    )
                )
            except (TypeError, ValueError) as exc:  # pragma: no cover - UI error path
                logger.exception("shading calculation failed")
                st.error(t("errors.calc_failed", exc=exc))
                state["shade_result"] = None

    with st.expander(t("shading.notes_header")):
        st.markdown(t("shading.note_south"))
        st.markdown(t("shading.note_north"))
        st.markdown(t("shading.note_margin"))

    _render_results(state.get("shade_result"))
