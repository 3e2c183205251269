from __future__ import annotations

import logging
from typing import List, Literal, Optional, Tuple

from pydantic import Field, confloat

from ..config import DEFAULT_SETTINGS, Settings
from ..sizing import InvalidInput, NoAdequateSizeFound, SizingResult, capacity_at, recommend_size
from ..tables import joist_load_label, joist_species_label, joist_table
from .base import CalculatorInputs, CalculatorResult

logger = logging.getLogger(__name__)

JOIST_SUGGESTION = (
    "No standard joist reaches this span at this spacing. "
    "Reduce the spacing, add a beam to shorten the span, or use engineered joists."
)


class JoistSpanInputs(CalculatorInputs):
    joist_size: str = Field("2x10", title="Joist size")
    spacing_in: confloat(gt=0, allow_inf_nan=False) = Field(16.0, title="Spacing", description="On-center spacing (in).")
    species: str = Field("SYP", title="Species")
    grade: str = Field("#2", title="Grade")
    load_type: Literal["floor", "ceiling"] = Field("floor", title="Load type")
    desired_span_ft: Optional[confloat(gt=0, allow_inf_nan=False)] = Field(
        None, title="Desired span", description="Span to check (ft); optional."
    )


class JoistSizeSpan(CalculatorResult):
    size: str
    max_span_ft: Optional[float]


class JoistSpanResult(CalculatorResult):
    inputs: JoistSpanInputs
    species_label: str
    load_label: str
    max_span_ft: float
    span_ok: Optional[bool] = None
    recommended_size: str
    sizing: Optional[SizingResult] = None
    all_sizes: Tuple[JoistSizeSpan, ...]
    warning: Optional[str] = None


def calculate_joist_span(inputs: JoistSpanInputs, *, settings: Optional[Settings] = None) -> JoistSpanResult:
    """
    Maximum span for a joist, and the joist size to use for a desired span.

    The span table is treated as a capacity table over spacing: each size's
    "capacity" is the span it reaches at a given on-center spacing. Spacings
    between the tabulated 12/16/24 in are interpolated.
    """
    settings = settings or DEFAULT_SETTINGS
    table = joist_table(
        inputs.species,
        inputs.grade,
        ceiling=inputs.load_type == "ceiling",
        settings=settings,
    )
    if inputs.joist_size not in table.sizes:
        raise InvalidInput(["Span data not available for this combination"])

    all_sizes: List[JoistSizeSpan] = []
    for size, samples in table.sizes.items():
        span = capacity_at(samples, inputs.spacing_in, extrapolation_limit=settings.extrapolation_limit)
        all_sizes.append(JoistSizeSpan(size=size, max_span_ft=span))

    max_span = next(s.max_span_ft for s in all_sizes if s.size == inputs.joist_size)
    if max_span is None:
        raise InvalidInput([f"Spacing of {inputs.spacing_in:g} in is beyond the span tables"])

    span_ok: Optional[bool] = None
    recommended = inputs.joist_size
    sizing: Optional[SizingResult] = None
    warning: Optional[str] = None

    desired = inputs.desired_span_ft
    if desired is not None:
        span_ok = desired <= max_span
        try:
            sizing = recommend_size(table, desired, inputs.spacing_in, settings=settings)
        except NoAdequateSizeFound:
            warning = JOIST_SUGGESTION
        else:
            if not span_ok:
                recommended = sizing.recommended.size

    logger.info(
        "Joist %s @ %g in (%s %s, %s): max span %.1f ft, recommend %s",
        inputs.joist_size,
        inputs.spacing_in,
        inputs.species,
        inputs.grade,
        inputs.load_type,
        max_span,
        recommended,
    )

    return JoistSpanResult(
        inputs=inputs,
        species_label=joist_species_label(inputs.species),
        load_label=joist_load_label(inputs.load_type),
        max_span_ft=max_span,
        span_ok=span_ok,
        recommended_size=recommended,
        sizing=sizing,
        all_sizes=tuple(all_sizes),
        warning=warning,
    )
