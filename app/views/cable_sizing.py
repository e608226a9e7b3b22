from __future__ import annotations

import logging

import streamlit as st

from app.formatting import fmt_num, fmt_section
from app.i18n import t
from app.ui_components import render_observations, result_card, status_pill
from app.validation import validate_cable
from app.views import reference_tables
from calc_core import rtiebt_tables
from calc_core.cable_sizing import DEFAULT_VOLTAGE_V, PHASES, USAGES, CableInput, size_cable

logger = logging.getLogger(__name__)

FIELDS = (
    "current_a",
    "voltage_v",
    "phases",
    "length_m",
    "usage",
    "method",
    "material",
    "ambient_temp_c",
    "conductor_count",
    "insulation",
)


def _key(field: str) -> str:
    return f"cable_{field}"


def _on_phases_change() -> None:
    phases = st.session_state.get(_key("phases"))
    if phases in DEFAULT_VOLTAGE_V:
        st.session_state[_key("voltage_v")] = DEFAULT_VOLTAGE_V[phases]


def _render_formulas() -> None:
    with st.expander(t("cable.formulas_header"), expanded=False):
        st.markdown(f"**{t('cable.conditions_header')}**")
        for key in (
            "cable.condition_du",
            "cable.condition_iz",
            "cable.condition_min_section",
            "cable.condition_protection",
            "cable.condition_temp",
            "cable.condition_grouping",
        ):
            st.markdown(f"- ✓ {t(key)}")
        st.divider()
        st.markdown(f"**1. {t('cable.formula_du_title')}**")
        st.code("ΔV = (k × L × Ib × ρ) / S", language=None)
        st.caption(t("cable.formula_du_legend"))
        st.markdown(f"**2. {t('cable.formula_iz_title')}**")
        st.code("Iz_corr = Iz_tab × f_temp × f_agrup", language=None)
        st.markdown(f"**3. {t('cable.formula_section_title')}**")
        st.code("S_final = max(S_queda, S_capacidade)", language=None)
        st.caption(t("cable.formula_section_legend"))


def _render_form() -> None:
    cols = st.columns(2)
    with cols[0]:
        st.number_input(t("cable.current"), min_value=0.0, step=1.0, key=_key("current_a"))
        st.selectbox(
            t("cable.phases"),
            PHASES,
            format_func=lambda x: t(f"phases.{x}"),
            key=_key("phases"),
            on_change=_on_phases_change,
        )
        st.number_input(t("cable.voltage"), min_value=0.0, step=1.0, key=_key("voltage_v"))
        st.number_input(t("cable.length"), min_value=0.0, step=1.0, key=_key("length_m"))
        st.selectbox(
            t("cable.usage"),
            USAGES,
            format_func=lambda x: t(f"usage.{x}"),
            key=_key("usage"),
        )
    with cols[1]:
        st.selectbox(
            t("cable.method"),
            rtiebt_tables.METHODS,
            format_func=lambda x: f"{x} - {t(f'method.{x}')}",
            key=_key("method"),
        )
        st.selectbox(
            t("cable.material"),
            rtiebt_tables.MATERIALS,
            format_func=lambda x: t(f"material.{x}"),
            key=_key("material"),
        )
        st.selectbox(t("cable.insulation"), rtiebt_tables.INSULATIONS, key=_key("insulation"))
        st.number_input(
            t("cable.ambient_temp"), min_value=-10.0, max_value=60.0, step=5.0, key=_key("ambient_temp_c")
        )
        st.number_input(
            t("cable.conductor_count"), min_value=1, max_value=20, step=1, key=_key("conductor_count")
        )


def _render_result(result) -> None:
    st.subheader(t("cable.results_header"))
    status_pill(
        t("cable.verdict_valid") if result.valid else t("cable.verdict_invalid"),
        "OK" if result.valid else "FAIL",
    )
    cols = st.columns(4)
    with cols[0]:
        result_card(t("cable.section_standard"), fmt_section(result.section_standard_mm2), "mm²")
    with cols[1]:
        result_card(t("cable.du_pct"), fmt_num(result.du_pct), f"% (≤ {fmt_num(result.du_limit_pct)} %)")
    with cols[2]:
        result_card(t("cable.ampacity_corrected"), fmt_num(result.ampacity_corrected_a), "A")
    with cols[3]:
        result_card(t("cable.protection"), str(result.protection_a), "A")

    with st.expander(t("cable.details_header"), expanded=False):
        rows = [
            (t("cable.section_by_drop"), f"{fmt_num(result.section_by_drop_mm2)} mm²"),
            (t("cable.section_by_ampacity"), f"{fmt_section(result.section_by_ampacity_mm2)} mm²"),
            (t("cable.section_calculated"), f"{fmt_num(result.section_calculated_mm2)} mm²"),
            (t("cable.du_v"), f"{fmt_num(result.du_v)} V"),
            (t("cable.current_corrected"), f"{fmt_num(result.current_corrected_a)} A"),
            (t("cable.ampacity_table"), f"{fmt_num(result.ampacity_table_a)} A"),
            (t("cable.temp_factor"), fmt_num(result.temp_factor)),
            (t("cable.grouping_factor"), fmt_num(result.grouping_factor)),
        ]
        st.table({t("cable.quantity"): [r[0] for r in rows], t("cable.value"): [r[1] for r in rows]})

    st.markdown(f"**{t('cable.observations_header')}**")
    render_observations(result.observations, valid=result.valid, t=t)


def render(state: dict) -> None:
    st.header(t("cable.header"))
    st.caption(t("cable.intro"))

    _render_formulas()
    _render_form()

    if st.button(t("cable.calculate_btn"), type="primary"):
        data = {field: state.get(_key(field)) for field in FIELDS}
        errors = validate_cable(data, translator=t)
        if errors:
            st.error(t("errors.invalid_input") + "\n\n" + "\n".join(f"- {e}" for e in errors))
            state["cable_result"] = None
        else:
            try:
                state["cable_result"] = size_cable(
                    CableInput(
                        current_a=float(data["current_a"]),
                        voltage_v=float(data["voltage_v"]),
                        phases=data["phases"],
                        length_m=float(data["length_m"]),
                        usage=data["usage"],
                        method=data["method"],
                        material=data["material"],
                        ambient_temp_c=float(data["ambient_temp_c"]),
                        conductor_count=int(data["conductor_count"]),
                        insulation=data["insulation"],
                    )
                )
            except (TypeError, ValueError) as exc:  # pragma: no cover - UI error path
                logger.exception("cable sizing failed")
                st.error(t("errors.calc_failed", exc=exc))
                state["cable_result"] = None

    result = state.get("cable_result")
    if result is not None:
        _render_result(result)

    st.divider()
    reference_tables.render(state)
