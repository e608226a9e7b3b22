"""
calc_core: pure calculation core of the Calculos Solares tools.

- shading: inter-row distance for tilted PV rows (winter solstice rule)
- cable_sizing: RTIEBT section selection, voltage drop, protection
- circuit_table: overload protection checks for a list of cable runs
- rtiebt_tables: static RTIEBT tables behind the lookups

No UI and no persistence here: every function is a pure function of its inputs.
"""

from .cable_sizing import CableInput, CableSizingResult, Observation, size_cable
from .circuit_table import CircuitResult, CircuitRow, evaluate_circuits
from .shading import ShadingInput, ShadingResult, calc_row_spacing, parse_coordinates

__all__ = [
    "CableInput",
    "CableSizingResult",
    "CircuitResult",
    "CircuitRow",
    "Observation",
    "ShadingInput",
    "ShadingResult",
    "calc_row_spacing",
    "evaluate_circuits",
    "parse_coordinates",
    "size_cable",
]
