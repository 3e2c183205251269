"""
Sizing Engine
=============

Table-driven selection of standard sizes:
- Capacity at any span from sparse span/capacity samples
- Adequate sizes ranked by utilization (tightest fit first)
- Single-rating catalogue lookup (first size that meets a rating)
"""

from .errors import InvalidInput, NoAdequateSizeFound, SizingError
from .models import CapacityTable, Query, Sample, SizeOption, SizingResult
from .engine import capacity_at, find_adequate_sizes, recommend_size, round_half_up, smallest_adequate

__all__ = [
    "CapacityTable",
    "InvalidInput",
    "NoAdequateSizeFound",
    "Query",
    "Sample",
    "SizeOption",
    "SizingError",
    "SizingResult",
    "capacity_at",
    "find_adequate_sizes",
    "recommend_size",
    "round_half_up",
    "smallest_adequate",
]
