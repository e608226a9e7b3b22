from __future__ import annotations

from dataclasses import asdict, fields

import pandas as pd
import streamlit as st

from app.formatting import fmt_num
from app.i18n import t
from app.validation import validate_circuit_rows
from calc_core import circuit_table, rtiebt_tables
from calc_core.circuit_table import CircuitResult, CircuitRow, evaluate_circuits

INPUT_COLUMNS = [f.name for f in fields(CircuitRow)]
DEFAULT_ROW = asdict(CircuitRow())


def empty_frame() -> pd.DataFrame:
    columns = {}
    for name, value in DEFAULT_ROW.items():
        dtype = "object" if isinstance(value, str) else type(value).__name__
        columns[name] = pd.Series(dtype=dtype)
    return pd.DataFrame(columns)


def rows_from_frame(df: pd.DataFrame) -> list[CircuitRow]:
    """DataFrame (already validated) -> CircuitRow list; blanks take the row defaults."""
    rows: list[CircuitRow] = []
    for _, rec in df.iterrows():
        values = {}
        for name in INPUT_COLUMNS:
            val = rec.get(name)
            if val is None or (not isinstance(val, str) and pd.isna(val)):
                val = DEFAULT_ROW[name]
            values[name] = val
        rows.append(
            CircuitRow(
                label=str(values["label"]),
                power=float(values["power"]),
                power_unit=str(values["power_unit"]),
                conductor=str(values["conductor"]),
                cable_type=str(values["cable_type"]),
                parallel=int(values["parallel"]),
                section_mm2=float(values["section_mm2"]),
                length_m=float(values["length_m"]),
                in_a=float(values["in_a"]),
                iz_a=float(values["iz_a"]),
                method_ref=str(values["method_ref"]),
                protection_type=str(values["protection_type"]),
                power_factor=float(values["power_factor"]),
                nominal_voltage_v=float(values["nominal_voltage_v"]),
            )
        )
    return rows


def results_frame(results: list[CircuitResult], *, show_du_total: bool = True) -> pd.DataFrame:
    records = []
    for res in results:
        rec = {
            "label": res.row.label,
            "IB (A)": fmt_num(res.ib_a, 1),
            "In (A)": fmt_num(res.row.in_a, 1),
            "Iz (A)": fmt_num(res.row.iz_a, 1),
            "I2 (A)": fmt_num(res.i2_a, 1),
            "1,45 Iz (A)": fmt_num(res.iz_145_a, 1),
            "U (V)": fmt_num(res.u_v),
            "DU (%)": fmt_num(res.du_pct),
        }
        if show_du_total:
            rec["DU total (%)"] = fmt_num(res.du_total_pct)
        rec["IB < In < Iz"] = "✅" if res.condition_in else "❌"
        rec["I2 < 1,45 Iz"] = "✅" if res.condition_i2 else "❌"
        records.append(rec)
    return pd.DataFrame(records)


def _column_config() -> dict:
    sections = [float(s) for s in rtiebt_tables.STANDARD_SECTIONS_MM2]
    return {
        "label": st.column_config.TextColumn(t("circuits.col_label"), default=""),
        "power": st.column_config.NumberColumn(t("circuits.col_power"), min_value=0.0, default=0.0),
        "power_unit": st.column_config.SelectboxColumn(
            t("circuits.col_unit"), options=list(circuit_table.POWER_UNITS), default="kW"
        ),
        "conductor": st.column_config.SelectboxColumn(
            t("circuits.col_conductor"), options=list(circuit_table.CONDUCTORS), default="cu"
        ),
        "cable_type": st.column_config.SelectboxColumn(
            t("circuits.col_cable_type"), options=list(circuit_table.CABLE_TYPES)
        ),
        "parallel": st.column_config.SelectboxColumn(
            t("circuits.col_parallel"), options=list(circuit_table.PARALLEL_VALUES), default=1
        ),
        "section_mm2": st.column_config.SelectboxColumn(
            t("circuits.col_section"), options=[0.0] + sections, default=0.0
        ),
        "length_m": st.column_config.NumberColumn(t("circuits.col_length"), min_value=0.0, default=0.0),
        "in_a": st.column_config.NumberColumn("In (A)", min_value=0.0, default=0.0),
        "iz_a": st.column_config.NumberColumn("Iz (A)", min_value=0.0, default=0.0),
        "method_ref": st.column_config.SelectboxColumn(
            t("circuits.col_method"), options=list(circuit_table.REFERENCE_METHODS)
        ),
        "protection_type": st.column_config.SelectboxColumn(
            t("circuits.col_protection"), options=list(circuit_table.PROTECTION_TYPES), default="Disj. > 63A"
        ),
        "power_factor": st.column_config.NumberColumn("cos φ", min_value=0.0, max_value=1.0, default=0.95),
        "nominal_voltage_v": st.column_config.NumberColumn("Un (V)", min_value=0.0, default=400.0),
    }


def render(state: dict) -> None:
    st.header(t("circuits.header"))
    st.caption(t("circuits.intro"))

    # The editor keeps its own edits; the initial frame must stay stable across reruns.
    df = state.setdefault("circuit_rows", empty_frame())

    edited = st.data_editor(
        df,
        num_rows="dynamic",
        column_config=_column_config(),
        column_order=INPUT_COLUMNS,
        use_container_width=True,
        key="circuit_editor",
    )

    show_du_total = st.toggle(t("circuits.show_du_total"), value=True)

    if edited.empty:
        st.info(t("circuits.empty"))
    else:
        validation = validate_circuit_rows(edited, translator=t)
        if validation.warnings:
            st.warning(t("circuits.warnings") + "\n\n" + "\n".join(f"- {w}" for w in validation.warnings))
        if validation.has_errors:
            st.error(t("errors.invalid_input") + "\n\n" + "\n".join(f"- {e}" for e in validation.errors))
        else:
            try:
                results = evaluate_circuits(rows_from_frame(edited))
            except (TypeError, ValueError) as exc:  # pragma: no cover - UI error path
                st.error(t("errors.calc_failed", exc=exc))
                results = []
            if results:
                out = results_frame(results, show_du_total=show_du_total)
                st.subheader(t("circuits.results_header"))
                st.dataframe(out, hide_index=True, use_container_width=True)
                failing = [r.row.label or f"#{i + 1}" for i, r in enumerate(results) if not r.ok]
                if failing:
                    st.error(t("circuits.failing_rows", rows=", ".join(failing)))
                else:
                    st.success(t("circuits.all_ok"))
                st.download_button(
                    t("circuits.download_csv"),
                    data=out.to_csv(index=False).encode("utf-8"),
                    file_name="circuitos.csv",
                    mime="text/csv",
                )

    with st.expander(t("circuits.legend_header")):
        st.markdown(t("circuits.legend"))
    with st.expander(t("circuits.definitions_header")):
        st.markdown(t("circuits.definitions"))
    with st.expander(t("circuits.validation_header")):
        st.markdown(t("circuits.validation_text"))
