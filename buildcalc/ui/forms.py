"""
Form handling shared by the calculator pages.

Kept free of Streamlit so the Calculate action can be exercised directly:
raw widget values go in, a tagged outcome comes out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

import numpy as np
import pandas as pd

from ..calculators import CALCULATORS, CalculatorResult, validate_inputs
from ..config import DEFAULT_SETTINGS, Settings
from ..sizing import InvalidInput, NoAdequateSizeFound, SizeOption, capacity_at
from ..sizing.models import CapacityTable

logger = logging.getLogger(__name__)


@dataclass
class FormOutcome:
    """Result of one Calculate click: exactly one of result / errors / warning is set."""
    result: Optional[CalculatorResult] = None
    errors: List[str] = field(default_factory=list)
    warning: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def run_form(calculator: str, raw: Mapping[str, Any], *, settings: Optional[Settings] = None) -> FormOutcome:
    """Validate form values and run the calculator."""
    model, calculate = CALCULATORS[calculator]
    try:
        inputs = validate_inputs(model, raw)
        return FormOutcome(result=calculate(inputs, settings=settings or DEFAULT_SETTINGS))
    except InvalidInput as e:
        logger.debug("%s: invalid input %s", calculator, e.messages)
        return FormOutcome(errors=e.messages)
    except NoAdequateSizeFound as e:
        return FormOutcome(warning=e.suggestion)


def options_frame(options: List[SizeOption], capacity_unit: str = "plf") -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Size": [o.size for o in options],
            f"Capacity ({capacity_unit})": [round(o.interpolated_capacity) for o in options],
            "Utilization (%)": [o.utilization_percent for o in options],
            "Extrapolated": ["yes" if o.extrapolated else "" for o in options],
        }
    )


def capacity_curve(
    table: CapacityTable,
    size: str,
    *,
    points: int = 60,
    settings: Optional[Settings] = None,
) -> pd.DataFrame:
    """Capacity of ``size`` across its span range, for plotting."""
    settings = settings or DEFAULT_SETTINGS
    samples = table.samples(size)
    lo = samples[0].span
    hi = samples[-1].span * settings.extrapolation_limit
    spans = np.linspace(lo, hi, points)
    caps = [capacity_at(samples, s, extrapolation_limit=settings.extrapolation_limit) for s in spans]
    return pd.DataFrame({"span": spans, "capacity": caps})
