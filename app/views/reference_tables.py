from __future__ import annotations

from typing import Mapping

import pandas as pd
import streamlit as st

from app.formatting import PLACEHOLDER, fmt_num, fmt_section
from app.i18n import t
from calc_core import rtiebt_tables


def quadro_frame(table: Mapping[float, Mapping[str, float | None]]) -> pd.DataFrame:
    """Quadro 52-C11/52-C12 as displayed: one row per section, dash where not tabulated."""
    records = []
    for section, row in table.items():
        rec = {"S (mm²)": fmt_section(section)}
        for col in rtiebt_tables.QUADRO_COLUMNS:
            value = row[col]
            rec[col] = PLACEHOLDER if value is None else str(int(value))
        records.append(rec)
    return pd.DataFrame(records)


def pvc_frame() -> pd.DataFrame:
    records = []
    for section, row in rtiebt_tables.AMPACITY_PVC_CU.items():
        rec = {"S (mm²)": fmt_section(section)}
        for method in rtiebt_tables.METHODS_PVC_TABLE:
            rec[method] = fmt_num(row[method], 1)
        records.append(rec)
    return pd.DataFrame(records)


def factors_frame() -> pd.DataFrame:
    temps = sorted(rtiebt_tables.TEMPERATURE_FACTORS["PVC"])
    return pd.DataFrame(
        {
            "°C": [str(temp) for temp in temps],
            "PVC": [fmt_num(rtiebt_tables.TEMPERATURE_FACTORS["PVC"][temp]) for temp in temps],
            "XLPE / EPR": [fmt_num(rtiebt_tables.TEMPERATURE_FACTORS["XLPE"][temp]) for temp in temps],
        }
    )


def grouping_frame() -> pd.DataFrame:
    counts = sorted(rtiebt_tables.GROUPING_FACTORS)
    labels = [str(n) if n < rtiebt_tables.GROUPING_MAX_TABULATED else f"≥ {n}" for n in counts]
    return pd.DataFrame(
        {"n": labels, "f_agrup": [fmt_num(rtiebt_tables.GROUPING_FACTORS[n]) for n in counts]}
    )


def render(state: dict) -> None:
    st.subheader(t("tables.header"))
    st.caption(t("tables.intro"))

    with st.expander(t("tables.c11_title")):
        st.caption(t("tables.c11_caption"))
        st.dataframe(quadro_frame(rtiebt_tables.QUADRO_52_C11), hide_index=True, use_container_width=True)
        st.caption(t("tables.columns_legend"))

    with st.expander(t("tables.c12_title")):
        st.warning(t("tables.c12_approximate"))
        st.dataframe(quadro_frame(rtiebt_tables.QUADRO_52_C12), hide_index=True, use_container_width=True)

    with st.expander(t("tables.pvc_title")):
        st.dataframe(pvc_frame(), hide_index=True, use_container_width=True)

    with st.expander(t("tables.factors_title")):
        cols = st.columns(2)
        with cols[0]:
            st.markdown(f"**{t('tables.temp_factors')}**")
            st.dataframe(factors_frame(), hide_index=True, use_container_width=True)
            st.caption("Iz = I_tab × f_temp")
        with cols[1]:
            st.markdown(f"**{t('tables.grouping_factors')}**")
            st.dataframe(grouping_frame(), hide_index=True, use_container_width=True)
            st.caption("Iz = I_tab × f_agrup")

    with st.expander(t("tables.info_title")):
        st.markdown(f"**{t('tables.min_sections')}**")
        st.markdown(f"- {t('material.cobre')}: ≥ 1,5 mm²\n- {t('material.aluminio')}: ≥ 16 mm²")
        st.markdown(f"**{t('tables.du_limits')}**")
        st.markdown(f"- {t('usage.iluminacao')}: ≤ 3 %\n- {t('tables.other_usages')}: ≤ 5 %")
