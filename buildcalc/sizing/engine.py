"""
Constraint-based table sizing.

Capacity tables give, for each standard size, the capacity measured at a
few spans. The engine reads a size's capacity at any span (interpolating
between samples, reducing conservatively a short way past the last one)
and picks the sizes that carry a required capacity, tightest fit first.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import DEFAULT_SETTINGS, Settings
from .errors import InvalidInput, NoAdequateSizeFound
from .models import CapacityTable, Query, Sample, SizeKey, SizeOption, SizingResult

logger = logging.getLogger(__name__)

SampleLike = Union[Sample, Tuple[float, float], Mapping[str, float]]


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _as_points(samples: Iterable[SampleLike]) -> Tuple[np.ndarray, np.ndarray]:
    pts: List[Tuple[float, float]] = []
    for s in samples:
        if isinstance(s, Sample):
            pts.append((s.span, s.capacity))
        elif isinstance(s, Mapping):
            pts.append((float(s["span"]), float(s["capacity"])))
        else:
            span, cap = s
            pts.append((float(span), float(cap)))
    if not pts:
        raise InvalidInput(["Capacity data is empty"])
    arr = np.asarray(pts, dtype=float)
    if not np.all(np.isfinite(arr)):
        raise InvalidInput(["Capacity data must be numeric"])
    order = np.argsort(arr[:, 0], kind="stable")
    return arr[order, 0], arr[order, 1]


def _positive(value: Any, label: str) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidInput([f"Please enter a valid {label}"]) from None
    if not math.isfinite(v) or v <= 0:
        raise InvalidInput([f"Please enter a valid {label}"])
    return v


def _extrapolate(
    spans: np.ndarray, caps: np.ndarray, t: float, limit: float
) -> Tuple[Optional[float], bool]:
    last_span = float(spans[-1])
    cutoff = last_span * limit
    if t <= cutoff or math.isclose(t, cutoff, rel_tol=1e-9):
        return float(caps[-1]) * last_span / t, True
    return None, False


def _capacity(
    spans: np.ndarray, caps: np.ndarray, t: float, limit: float
) -> Tuple[Optional[float], bool]:
    """Capacity at span ``t`` plus whether it was extrapolated."""
    if t <= spans[0]:
        return float(caps[0]), False
    if t > spans[-1]:
        return _extrapolate(spans, caps, t, limit)

    hi = int(np.searchsorted(spans, t, side="left"))
    if spans[hi] == t:
        return float(caps[hi]), False
    lo = hi - 1
    ratio = (t - spans[lo]) / (spans[hi] - spans[lo])
    return float(caps[lo] - ratio * (caps[lo] - caps[hi])), False


def capacity_at(
    samples: Iterable[SampleLike],
    target_span: float,
    *,
    extrapolation_limit: float = DEFAULT_SETTINGS.extrapolation_limit,
) -> Optional[float]:
    """
    Capacity of one size at ``target_span``.

    - At or below the shortest sampled span: that span's capacity
      (no extrapolation toward shorter spans).
    - Between samples: linear interpolation.
    - Past the longest span by at most ``extrapolation_limit``:
      ``last.capacity * last.span / target_span``.
    - Further out: ``None`` (not applicable).
    """
    spans, caps = _as_points(samples)
    t = _positive(target_span, "span")
    cap, _ = _capacity(spans, caps, t, float(extrapolation_limit))
    return cap


def _evaluate(
    table: CapacityTable, query: Query, settings: Settings
) -> Tuple[List[SizeOption], List[SizeKey], Optional[float]]:
    adequate: List[SizeOption] = []
    not_applicable: List[SizeKey] = []
    best: Optional[float] = None

    for size, samples in table.sizes.items():
        spans, caps = _as_points(samples)
        cap, extrapolated = _capacity(spans, caps, query.required_span, settings.extrapolation_limit)
        if cap is None:
            logger.debug("%s: not applicable at span %g", size, query.required_span)
            not_applicable.append(size)
            continue
        logger.debug("%s: capacity %.1f at span %g", size, cap, query.required_span)
        if best is None or cap > best:
            best = cap
        if cap >= query.required_capacity:
            adequate.append(
                SizeOption(
                    size=size,
                    interpolated_capacity=cap,
                    utilization_percent=round_half_up(query.required_capacity / cap * 100.0),
                    extrapolated=extrapolated,
                )
            )
    return adequate, not_applicable, best


def _rank(table: CapacityTable, query: Query, settings: Settings) -> Tuple[List[SizeOption], List[SizeKey]]:
    adequate, not_applicable, best = _evaluate(table, query, settings)

    if not adequate:
        logger.info(
            "%s: no adequate size for %g %s at %g %s",
            table.name,
            query.required_capacity,
            table.capacity_unit,
            query.required_span,
            table.span_unit,
        )
        raise NoAdequateSizeFound(
            query.required_capacity,
            query.required_span,
            best_capacity=best,
            not_applicable=not_applicable,
        )

    # sorted() is stable: equal utilizations stay in table order
    return sorted(adequate, key=lambda o: -o.utilization_percent), not_applicable


def find_adequate_sizes(
    table: CapacityTable,
    required_capacity: float,
    target_span: float,
    *,
    settings: Optional[Settings] = None,
) -> Iterator[SizeOption]:
    """
    Adequate sizes of ``table`` for the query, highest utilization first.

    Sizes with equal utilization keep table order. Raises InvalidInput
    for a bad query and NoAdequateSizeFound when nothing qualifies; both
    are raised at call time, before any item is consumed.
    """
    settings = settings or DEFAULT_SETTINGS
    query = Query.build(required_capacity, target_span)
    ordered, _ = _rank(table, query, settings)
    return iter(ordered)


def recommend_size(
    table: CapacityTable,
    required_capacity: float,
    target_span: float,
    *,
    limit: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> SizingResult:
    """Run the engine and package the display list plus the recommendation."""
    settings = settings or DEFAULT_SETTINGS
    query = Query.build(required_capacity, target_span)
    options, not_applicable = _rank(table, query, settings)
    shown = options if limit is None else options[: max(1, int(limit))]
    return SizingResult(
        query=query,
        options=tuple(shown),
        recommended=options[0],
        not_applicable=tuple(not_applicable),
        total_adequate=len(options),
    )


def smallest_adequate(
    ordered_sizes: Sequence[SizeKey],
    rating: Mapping[SizeKey, float],
    required: float,
) -> Optional[SizeKey]:
    """First size, in catalogue order, whose rating meets ``required``."""
    for size in ordered_sizes:
        r = rating.get(size)
        if r is not None and r >= required:
            return size
    return None
