#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import math
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]

# Allow running as "python tools/run_calc.py" (so repo root is importable)
sys.path.insert(0, str(ROOT))

from app.validation import validate_cable, validate_shading  # noqa: E402
from calc_core import CableInput, ShadingInput, calc_row_spacing, size_cable  # noqa: E402
from calc_core import rtiebt_tables  # noqa: E402
from calc_core.cable_sizing import DEFAULT_VOLTAGE_V, PHASES, USAGES  # noqa: E402

logger = logging.getLogger("run_calc")

EXIT_INVALID = 2


def _jsonable(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(_jsonable(payload), ensure_ascii=False, indent=2))


def _report_errors(errors: list[str]) -> int:
    for err in errors:
        print(f"error: {err}", file=sys.stderr)
    return EXIT_INVALID


def run_shading(args: argparse.Namespace) -> int:
    data = {
        "lat_deg": args.lat_deg,
        "lat_min": args.lat_min,
        "lat_sec": args.lat_sec,
        "b": args.b,
        "beta": args.beta,
        "alfa": args.alfa,
    }
    errors = validate_shading(data)
    if errors:
        return _report_errors(errors)
    res = calc_row_spacing(ShadingInput(**data))
    _print_json({"input": data, "result": asdict(res)})
    return 0


def run_cable(args: argparse.Namespace) -> int:
    voltage = args.voltage if args.voltage is not None else DEFAULT_VOLTAGE_V.get(args.phases)
    data = {
        "current_a": args.current,
        "voltage_v": voltage,
        "phases": args.phases,
        "length_m": args.length,
        "usage": args.usage,
        "method": args.method,
        "material": args.material,
        "ambient_temp_c": args.ambient_temp,
        "conductor_count": args.conductors,
        "insulation": args.insulation,
    }
    errors = validate_cable(data)
    if errors:
        return _report_errors(errors)
    try:
        res = size_cable(CableInput(**data))
    except (TypeError, ValueError) as exc:
        return _report_errors([str(exc)])
    payload = asdict(res)
    payload["valid"] = res.valid
    _print_json({"input": data, "result": payload})
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Run the PV row spacing or RTIEBT cable sizing calculation and print JSON."
    )
    ap.add_argument(
        "--log-level",
        default=os.environ.get("CALC_LOG_LEVEL", "INFO"),
        help="Logging level (default: CALC_LOG_LEVEL or INFO).",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("shading", help="Minimum distance between PV rows.")
    sp.add_argument("--lat-deg", type=int, required=True, help="Latitude degrees (sign gives hemisphere).")
    sp.add_argument("--lat-min", type=int, default=0, help="Latitude minutes (default: 0).")
    sp.add_argument("--lat-sec", type=int, default=0, help="Latitude seconds (default: 0).")
    sp.add_argument("--b", type=float, required=True, help="Panel width along the slope, m.")
    sp.add_argument("--beta", type=float, required=True, help="Panel tilt, degrees.")
    sp.add_argument("--alfa", type=float, default=0.0, help="Ground slope, degrees (default: 0).")
    sp.set_defaults(func=run_shading)

    cp = sub.add_parser("cable", help="RTIEBT cable section and protection.")
    cp.add_argument("--current", type=float, required=True, help="Design current Ib, A.")
    cp.add_argument("--phases", choices=PHASES, default="mono", help="System (default: mono).")
    cp.add_argument("--voltage", type=float, default=None, help="Voltage, V (default: 230 mono / 400 tri).")
    cp.add_argument("--length", type=float, required=True, help="Cable length, m.")
    cp.add_argument("--usage", choices=USAGES, default="tomadas", help="Usage type (default: tomadas).")
    cp.add_argument("--method", choices=rtiebt_tables.METHODS, default="B1", help="Installation method (default: B1).")
    cp.add_argument(
        "--material", choices=rtiebt_tables.MATERIALS, default="cobre", help="Conductor material (default: cobre)."
    )
    cp.add_argument(
        "--insulation", choices=rtiebt_tables.INSULATIONS, default="PVC", help="Insulation (default: PVC)."
    )
    cp.add_argument("--ambient-temp", type=float, default=30.0, help="Ambient temperature, °C (default: 30).")
    cp.add_argument("--conductors", type=int, default=1, help="Number of grouped circuits (default: 1).")
    cp.set_defaults(func=run_cable)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=str(args.log_level).upper(),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logger.debug("command=%s", args.command)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
