"""
Static capacity tables.

The tables ship as JSON files next to this module and are validated into
frozen pydantic models on first use. Nothing here computes capacities;
the helpers only reshape table data into ``CapacityTable`` views.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat

from ..config import DEFAULT_SETTINGS, Settings
from ..sizing.errors import InvalidInput
from ..sizing.models import CapacityTable

logger = logging.getLogger(__name__)

BeamType = Literal["any", "built", "solid"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class BeamSpecies(_Frozen):
    label: str
    sizes: Dict[str, List[Tuple[PositiveFloat, float]]]


class BeamCapacityFile(_Frozen):
    name: str
    span_unit: str = "ft"
    capacity_unit: str = "plf"
    notes: List[str] = Field(default_factory=list)
    species: Dict[str, BeamSpecies]


class LoadEntry(_Frozen):
    psf: Optional[PositiveFloat] = None
    label: str


class LoadTablesFile(_Frozen):
    beam_loads_psf: Dict[str, LoadEntry]
    joist_loads: Dict[str, LoadEntry]


class JoistSpecies(_Frozen):
    label: str
    # grade -> size -> spacing (in, as text) -> max span (ft)
    grades: Dict[str, Dict[str, Dict[str, PositiveFloat]]]


class JoistSpanFile(_Frozen):
    name: str
    span_unit: str = "in"
    capacity_unit: str = "ft"
    notes: List[str] = Field(default_factory=list)
    size_order: List[str]
    species: Dict[str, JoistSpecies]


class WireMaterial(_Frozen):
    label: str
    ampacity: Dict[str, PositiveFloat]
    resistance_ohm_per_kft: Dict[str, PositiveFloat]
    price_per_ft: Dict[str, PositiveFloat]


class WireCatalog(_Frozen):
    name: str
    size_order: List[str]
    materials: Dict[str, WireMaterial]


def _read_json(name: str) -> dict:
    path = resources.files(__package__).joinpath("data").joinpath(f"{name}.json")
    logger.debug("Loading table data %s", name)
    return json.loads(path.read_text(encoding="utf-8"))


@lru_cache(maxsize=None)
def beam_capacities() -> BeamCapacityFile:
    return BeamCapacityFile.model_validate(_read_json("beam_capacities"))


@lru_cache(maxsize=None)
def load_tables() -> LoadTablesFile:
    return LoadTablesFile.model_validate(_read_json("load_tables"))


@lru_cache(maxsize=None)
def joist_spans() -> JoistSpanFile:
    return JoistSpanFile.model_validate(_read_json("joist_spans"))


@lru_cache(maxsize=None)
def wire_catalog() -> WireCatalog:
    return WireCatalog.model_validate(_read_json("wire_catalog"))


def _checked(table: CapacityTable) -> CapacityTable:
    bad = table.non_monotonic_sizes()
    if bad:
        logger.warning("%s: capacity rises with span for %s", table.name, ", ".join(bad))
    return table


def beam_species_label(species: str) -> str:
    data = beam_capacities().species.get(species)
    if data is None:
        raise InvalidInput([f"Unknown species: {species}"])
    return data.label


@lru_cache(maxsize=None)
def beam_table(species: str = "SYP", beam_type: BeamType = "any") -> CapacityTable:
    """Beam capacity table for one species, optionally only built-up or solid sizes."""
    raw = beam_capacities()
    data = raw.species.get(species)
    if data is None:
        raise InvalidInput([f"Unknown species: {species}"])

    table = CapacityTable.from_pairs(
        data.sizes,
        name=f"{raw.name} ({data.label})",
        span_unit=raw.span_unit,
        capacity_unit=raw.capacity_unit,
        notes=tuple(raw.notes),
    )
    if beam_type == "solid":
        table = table.filter(lambda size: "-" not in size)
    elif beam_type == "built":
        table = table.filter(lambda size: "-" in size)
    elif beam_type != "any":
        raise InvalidInput([f"Unknown beam type: {beam_type}"])
    return _checked(table)


def beam_load(load_type: str) -> LoadEntry:
    entry = load_tables().beam_loads_psf.get(load_type)
    if entry is None or entry.psf is None:
        raise InvalidInput([f"Unknown load type: {load_type}"])
    return entry


def joist_load_label(load_type: str) -> str:
    entry = load_tables().joist_loads.get(load_type)
    if entry is None:
        raise InvalidInput([f"Unknown load type: {load_type}"])
    return entry.label


def joist_species_label(species: str) -> str:
    data = joist_spans().species.get(species)
    if data is None:
        raise InvalidInput([f"Unknown species: {species}"])
    return data.label


def joist_table(
    species: str,
    grade: str,
    *,
    ceiling: bool = False,
    settings: Optional[Settings] = None,
) -> CapacityTable:
    """
    Joist span table for one species and grade.

    Each size's samples are (on-center spacing in inches, maximum span in
    feet); the span a joist can reach falls as spacing widens. Ceiling
    joists get ``settings.ceiling_span_multiplier`` on every span.
    """
    settings = settings or DEFAULT_SETTINGS
    raw = joist_spans()
    grades = raw.species.get(species)
    sizes = grades.grades.get(grade) if grades is not None else None
    if not sizes:
        raise InvalidInput(["Span data not available for this combination"])

    ordered = [s for s in raw.size_order if s in sizes] + [s for s in sizes if s not in raw.size_order]
    pairs = {size: [(float(sp), span) for sp, span in sizes[size].items()] for size in ordered}
    table = CapacityTable.from_pairs(
        pairs,
        name=f"{raw.name} ({grades.label} {grade})",
        span_unit=raw.span_unit,
        capacity_unit=raw.capacity_unit,
        notes=tuple(raw.notes),
    )
    if ceiling:
        table = table.scaled(settings.ceiling_span_multiplier)
    return _checked(table)


def wire_material(material: str) -> WireMaterial:
    data = wire_catalog().materials.get(material)
    if data is None:
        raise InvalidInput([f"Unknown wire material: {material}"])
    return data
