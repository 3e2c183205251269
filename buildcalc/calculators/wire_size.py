from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import Field, confloat

from ..config import DEFAULT_SETTINGS, Settings
from ..sizing import NoAdequateSizeFound, smallest_adequate
from ..tables import wire_catalog, wire_material
from .base import CalculatorInputs, CalculatorResult

logger = logging.getLogger(__name__)

WIRE_SUGGESTION = (
    "Load exceeds calculator capacity. Use parallel conductors or a higher "
    "supply voltage, or consult an electrician."
)


class WireSizeInputs(CalculatorInputs):
    amperage: confloat(gt=0, allow_inf_nan=False) = Field(..., title="Amperage", description="Load current (A).")
    distance_ft: confloat(gt=0, allow_inf_nan=False) = Field(
        ..., title="One-way distance", description="One-way run length (ft)."
    )
    voltage: confloat(gt=0, allow_inf_nan=False) = Field(120.0, title="Voltage")
    material: Literal["copper", "aluminum"] = Field("copper", title="Wire type")
    cable_type: Literal["romex", "thhn", "uf", "ser"] = Field("romex", title="Cable type")
    max_voltage_drop_percent: confloat(gt=0, le=10) = Field(3.0, title="Maximum voltage drop")


class WireOption(CalculatorResult):
    size: str
    ampacity: float
    usable_ampacity: float
    voltage_drop_v: float
    voltage_drop_percent: float
    meets_ampacity: bool
    meets_voltage_drop: bool


class WireSizeResult(CalculatorResult):
    inputs: WireSizeInputs
    recommended_size: str
    minimum_by_ampacity: str
    minimum_by_voltage_drop: str
    voltage_drop_v: float
    voltage_drop_percent: float
    resistance_ohm_per_kft: float
    total_wire_ft: float
    cost_estimate: float
    options: Tuple[WireOption, ...]
    notes: Tuple[str, ...] = ()


def voltage_drop(distance_ft: float, resistance_ohm_per_kft: float, amps: float) -> float:
    """Single-phase drop over the round trip: VD = 2 x L x R x I / 1000."""
    return 2.0 * distance_ft * resistance_ohm_per_kft * amps / 1000.0


def _max_amps_for_drop(distance_ft: float, resistance: float, volts: float, max_pct: float) -> float:
    return (max_pct / 100.0) * volts * 1000.0 / (2.0 * distance_ft * resistance)


def calculate_wire_size(inputs: WireSizeInputs, *, settings: Optional[Settings] = None) -> WireSizeResult:
    """
    Pick a conductor that satisfies both ampacity and voltage drop.

    Each constraint is expressed as an amp rating per size: derated
    ampacity, and the largest current that keeps the drop within budget.
    The recommendation is the larger of the two minimum sizes.
    """
    settings = settings or DEFAULT_SETTINGS
    catalog = wire_catalog()
    mat = wire_material(inputs.material)
    order = [s for s in catalog.size_order if s in mat.ampacity and s in mat.resistance_ohm_per_kft]

    usable: Dict[str, float] = {s: mat.ampacity[s] * settings.continuous_derating for s in order}
    drop_limited: Dict[str, float] = {
        s: _max_amps_for_drop(
            inputs.distance_ft, mat.resistance_ohm_per_kft[s], inputs.voltage, inputs.max_voltage_drop_percent
        )
        for s in order
    }

    by_ampacity = smallest_adequate(order, usable, inputs.amperage)
    by_drop = smallest_adequate(order, drop_limited, inputs.amperage)

    if by_ampacity is None or by_drop is None:
        logger.info(
            "Wire %s: no size for %g A over %g ft (ampacity=%s, drop=%s)",
            inputs.material,
            inputs.amperage,
            inputs.distance_ft,
            by_ampacity,
            by_drop,
        )
        best = max(min(usable[s], drop_limited[s]) for s in order)
        raise NoAdequateSizeFound(
            inputs.amperage,
            inputs.distance_ft,
            best_capacity=best,
            suggestion=WIRE_SUGGESTION,
        )

    recommended = order[max(order.index(by_ampacity), order.index(by_drop))]
    resistance = mat.resistance_ohm_per_kft[recommended]
    drop_v = voltage_drop(inputs.distance_ft, resistance, inputs.amperage)
    drop_pct = drop_v / inputs.voltage * 100.0
    total_ft = inputs.distance_ft * 2.0

    options: List[WireOption] = []
    for s in order:
        vd = voltage_drop(inputs.distance_ft, mat.resistance_ohm_per_kft[s], inputs.amperage)
        options.append(
            WireOption(
                size=s,
                ampacity=mat.ampacity[s],
                usable_ampacity=usable[s],
                voltage_drop_v=vd,
                voltage_drop_percent=vd / inputs.voltage * 100.0,
                meets_ampacity=usable[s] >= inputs.amperage,
                meets_voltage_drop=drop_limited[s] >= inputs.amperage,
            )
        )

    notes: List[str] = []
    if inputs.cable_type == "romex":
        notes.append("NM-B (Romex) limited to 14-6 AWG for residential")
    if inputs.material == "aluminum":
        notes.append("Aluminum requires anti-oxidant compound and proper connectors")
        notes.append("Increase aluminum wire two sizes vs copper for same ampacity")
    if inputs.voltage == 240:
        notes.append("240V circuits have lower voltage drop for same amperage")
    if 3 < drop_pct <= 5:
        notes.append("3-5% voltage drop acceptable for branch circuits")
    if order.index(recommended) > order.index(by_ampacity):
        notes.append("Wire size increased due to voltage drop requirements")

    logger.info("Wire %g A over %g ft: %s AWG %s", inputs.amperage, inputs.distance_ft, recommended, inputs.material)

    return WireSizeResult(
        inputs=inputs,
        recommended_size=recommended,
        minimum_by_ampacity=by_ampacity,
        minimum_by_voltage_drop=by_drop,
        voltage_drop_v=drop_v,
        voltage_drop_percent=drop_pct,
        resistance_ohm_per_kft=resistance,
        total_wire_ft=total_ft,
        cost_estimate=mat.price_per_ft[recommended] * total_ft,
        options=tuple(options),
        notes=tuple(notes),
    )
