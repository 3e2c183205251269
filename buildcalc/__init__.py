"""
Building Calculators
====================

Table-driven sizing tools for residential construction and wiring:
- Beam sizing from span/capacity tables
- Joist span lookup by species, grade and spacing
- Wire gauge selection by ampacity and voltage drop
- Stair layout (risers, treads, stringers)

Architecture:
- sizing/: Constraint-based table sizing engine
- tables/: Static capacity tables (JSON data) and loaders
- calculators/: Per-calculator inputs, formulas and results
- cli.py: Command line front-end
- ui/: Streamlit calculator pages
"""

__version__ = "1.0.0"
