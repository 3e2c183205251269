"""
Calculators
===========

One module per calculator page. Each exposes an immutable inputs model,
a result model and a pure ``calculate_*`` function:
- Beam size (sizing engine over beam capacity tables)
- Joist span (sizing engine over span-by-spacing tables)
- Wire size (ampacity and voltage drop constraints)
- Stair layout (risers, treads and stringers)
"""

from .base import CalculatorInputs, CalculatorResult, validate_inputs
from .beam_size import BeamSizeInputs, BeamSizeResult, calculate_beam_size
from .joist_span import JoistSizeSpan, JoistSpanInputs, JoistSpanResult, calculate_joist_span
from .stairs import StairInputs, StairResult, calculate_stairs, riser_count
from .wire_size import WireOption, WireSizeInputs, WireSizeResult, calculate_wire_size, voltage_drop

CALCULATORS = {
    "beam": (BeamSizeInputs, calculate_beam_size),
    "joist": (JoistSpanInputs, calculate_joist_span),
    "wire": (WireSizeInputs, calculate_wire_size),
    "stairs": (StairInputs, calculate_stairs),
}

__all__ = [
    "CALCULATORS",
    "BeamSizeInputs",
    "BeamSizeResult",
    "CalculatorInputs",
    "CalculatorResult",
    "JoistSizeSpan",
    "JoistSpanInputs",
    "JoistSpanResult",
    "StairInputs",
    "StairResult",
    "WireOption",
    "WireSizeInputs",
    "WireSizeResult",
    "calculate_beam_size",
    "calculate_joist_span",
    "calculate_stairs",
    "calculate_wire_size",
    "riser_count",
    "validate_inputs",
    "voltage_drop",
]
