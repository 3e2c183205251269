from __future__ import annotations

import logging
import math
from typing import Optional

from pydantic import Field, computed_field, confloat

from ..config import DEFAULT_SETTINGS, Settings
from ..sizing import round_half_up
from .base import CalculatorInputs, CalculatorResult

logger = logging.getLogger(__name__)

COMFORT_TARGET_IN = 25.0  # 2R + T
COMFORT_RANGE_IN = (24.0, 25.0)
MAX_COMFORT_TREAD_IN = 11.0
# wood needed above the notch of a cut stringer
STRINGER_THROAT_IN = 3.5
# actual depth of a 2x10
TWO_BY_TEN_DEPTH_IN = 9.25


class StairInputs(CalculatorInputs):
    total_rise_in: confloat(gt=0, allow_inf_nan=False) = Field(..., title="Total rise", description="Floor to floor height (in).")
    total_run_in: Optional[confloat(gt=0, allow_inf_nan=False)] = Field(
        None, title="Total run", description="Horizontal length available (in); derived from the comfort rule if omitted."
    )
    stair_width_in: confloat(gt=0, allow_inf_nan=False) = Field(36.0, title="Stair width")
    stringer_spacing_in: confloat(gt=0, allow_inf_nan=False) = Field(16.0, title="Stringer spacing")
    preferred_riser_in: confloat(gt=0, allow_inf_nan=False) = Field(7.5, title="Preferred riser height")
    nosing_in: confloat(ge=0, allow_inf_nan=False) = Field(1.0, title="Nosing overhang")


class StairResult(CalculatorResult):
    inputs: StairInputs
    risers: int
    treads: int
    riser_height_in: float
    tread_depth_in: float
    effective_tread_in: float
    total_run_in: float
    stringer_length_in: float
    stringer_stock_ft: int
    stringers: int
    notch_depth_in: float
    recommended_stock: str
    angle_deg: float
    comfort_value_in: float
    riser_compliant: bool
    tread_compliant: bool
    comfort_compliant: bool

    @computed_field
    @property
    def code_compliant(self) -> bool:
        return self.riser_compliant and self.tread_compliant


def riser_count(total_rise_in: float, preferred_riser_in: float, *, settings: Optional[Settings] = None) -> int:
    """
    Number of risers for a flight.

    Start from the riser count nearest the preferred height. If that makes
    risers too tall, use the fewest risers that respect the maximum
    (ceil); if too short, the most risers that respect the minimum
    (floor), unless that would break the maximum. Never fewer than one.
    """
    settings = settings or DEFAULT_SETTINGS
    n = max(1, round_half_up(total_rise_in / preferred_riser_in))
    height = total_rise_in / n
    if height > settings.max_riser_in:
        n = math.ceil(total_rise_in / settings.max_riser_in)
    elif height < settings.min_riser_in:
        n = max(1, math.floor(total_rise_in / settings.min_riser_in))
        # no count satisfies both limits: keep risers under the maximum
        if total_rise_in / n > settings.max_riser_in:
            n = math.ceil(total_rise_in / settings.max_riser_in)
    return n


def _comfort_tread(riser_in: float, settings: Settings) -> float:
    return min(max(COMFORT_TARGET_IN - 2.0 * riser_in, settings.min_tread_in), MAX_COMFORT_TREAD_IN)


def calculate_stairs(inputs: StairInputs, *, settings: Optional[Settings] = None) -> StairResult:
    """Lay out a straight stair flight and its cut stringers."""
    settings = settings or DEFAULT_SETTINGS
    rise = inputs.total_rise_in

    risers = riser_count(rise, inputs.preferred_riser_in, settings=settings)
    riser_h = rise / risers
    # the top riser lands on the upper floor, so one tread fewer than risers
    treads = risers - 1

    if inputs.total_run_in is not None:
        run = inputs.total_run_in
        tread = run / treads if treads > 0 else _comfort_tread(riser_h, settings)
    else:
        tread = _comfort_tread(riser_h, settings)
        run = tread * treads

    stringer_len = math.hypot(rise, run)
    angle = math.degrees(math.atan2(rise, run))
    comfort = 2.0 * riser_h + tread
    stringers = math.ceil(inputs.stair_width_in / inputs.stringer_spacing_in) + 1
    # notch depth measured square to the stringer edge
    notch = riser_h * tread / math.hypot(riser_h, tread) if tread > 0 else riser_h
    stock = "2x10" if notch + STRINGER_THROAT_IN <= TWO_BY_TEN_DEPTH_IN else "2x12"

    logger.info("Stairs %.2f in rise: %d risers at %.2f in, %d treads at %.2f in", rise, risers, riser_h, treads, tread)

    return StairResult(
        inputs=inputs,
        risers=risers,
        treads=treads,
        riser_height_in=riser_h,
        tread_depth_in=tread,
        effective_tread_in=tread + inputs.nosing_in,
        total_run_in=run,
        stringer_length_in=stringer_len,
        stringer_stock_ft=math.ceil(stringer_len / 12.0),
        stringers=stringers,
        notch_depth_in=notch,
        recommended_stock=stock,
        angle_deg=angle,
        comfort_value_in=comfort,
        riser_compliant=settings.min_riser_in <= riser_h <= settings.max_riser_in,
        tread_compliant=treads == 0 or tread >= settings.min_tread_in,
        comfort_compliant=COMFORT_RANGE_IN[0] <= comfort <= COMFORT_RANGE_IN[1],
    )
