from __future__ import annotations

import logging
from typing import Literal, Optional, Tuple

from pydantic import Field, confloat

from ..config import DEFAULT_SETTINGS, Settings
from ..sizing import SizeOption, recommend_size
from ..tables import beam_load, beam_species_label, beam_table
from .base import CalculatorInputs, CalculatorResult

logger = logging.getLogger(__name__)

BEAM_TYPE_LABELS = {
    "solid": "Solid Timber",
    "built": "Built-up",
    "any": "Any",
}


class BeamSizeInputs(CalculatorInputs):
    span_ft: confloat(gt=0, allow_inf_nan=False) = Field(..., title="Span", description="Distance between supports (ft).")
    tributary_width_ft: confloat(gt=0, allow_inf_nan=False) = Field(
        ..., title="Tributary width", description="Width of floor/roof area carried by the beam (ft)."
    )
    load_type: Literal["floor", "deck", "roof", "balcony"] = Field("floor", title="Load type")
    species: str = Field("SYP", title="Species")
    beam_type: Literal["any", "built", "solid"] = Field("solid", title="Beam type")


class BeamSizeResult(CalculatorResult):
    inputs: BeamSizeInputs
    load_psf: float
    load_plf: float
    load_label: str
    species_label: str
    beam_type_label: str
    options: Tuple[SizeOption, ...]
    recommended: SizeOption
    total_adequate: int
    not_applicable: Tuple[str, ...] = ()


def calculate_beam_size(inputs: BeamSizeInputs, *, settings: Optional[Settings] = None) -> BeamSizeResult:
    """
    Size a beam for a uniform load.

    load_plf = design load (psf) x tributary width; every beam in the
    species table is checked at the span and the tightest adequate one is
    recommended. Raises NoAdequateSizeFound when none carries the load.
    """
    settings = settings or DEFAULT_SETTINGS
    load = beam_load(inputs.load_type)
    load_plf = float(load.psf) * inputs.tributary_width_ft
    table = beam_table(inputs.species, inputs.beam_type)

    sizing = recommend_size(table, load_plf, inputs.span_ft, limit=settings.display_limit, settings=settings)
    logger.info(
        "Beam %.1f ft span, %.0f plf: recommend %s (%d%%)",
        inputs.span_ft,
        load_plf,
        sizing.recommended.size,
        sizing.recommended.utilization_percent,
    )

    return BeamSizeResult(
        inputs=inputs,
        load_psf=float(load.psf),
        load_plf=load_plf,
        load_label=load.label,
        species_label=beam_species_label(inputs.species),
        beam_type_label=BEAM_TYPE_LABELS[inputs.beam_type],
        options=sizing.options,
        recommended=sizing.recommended,
        total_adequate=sizing.total_adequate,
        not_applicable=sizing.not_applicable,
    )
