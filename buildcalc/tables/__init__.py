"""
Capacity Tables
===============

Static, versioned table data kept apart from the calculation code:
- Beam allowable loads (plf) by span
- Joist maximum spans by species, grade and spacing
- Wire ampacity, resistance and price by AWG size
- Design loads (psf) by occupancy
"""

from .loader import (
    beam_capacities,
    beam_load,
    beam_species_label,
    beam_table,
    joist_load_label,
    joist_species_label,
    joist_spans,
    joist_table,
    load_tables,
    wire_catalog,
    wire_material,
)

__all__ = [
    "beam_capacities",
    "beam_load",
    "beam_species_label",
    "beam_table",
    "joist_load_label",
    "joist_species_label",
    "joist_spans",
    "joist_table",
    "load_tables",
    "wire_catalog",
    "wire_material",
]
