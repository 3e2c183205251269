from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, confloat, conint, model_validator

ENV_PREFIX = "BUILDCALC_"


class Settings(BaseModel):
    """Tunables shared by the sizing engine and the calculators."""

    model_config = ConfigDict(frozen=True)

    extrapolation_limit: confloat(gt=1.0, le=2.0) = Field(
        1.2,
        description="Largest span, as a multiple of the last tabulated span, that is still extrapolated.",
    )
    display_limit: conint(ge=1) = Field(5, description="Number of adequate sizes shown to the user.")
    continuous_derating: confloat(gt=0, le=1) = Field(
        0.8, description="Fraction of conductor ampacity usable for continuous loads."
    )
    ceiling_span_multiplier: confloat(ge=1) = Field(
        1.33, description="Span allowance for ceiling joists relative to floor joists."
    )
    max_riser_in: confloat(gt=0) = Field(7.75, description="Maximum riser height (in).")
    min_riser_in: confloat(gt=0) = Field(4.0, description="Minimum riser height (in).")
    min_tread_in: confloat(gt=0) = Field(10.0, description="Minimum tread depth (in).")

    @model_validator(mode="after")
    def _riser_bounds_ordered(self) -> "Settings":
        if float(self.min_riser_in) >= float(self.max_riser_in):
            raise ValueError("min_riser_in must be less than max_riser_in")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``BUILDCALC_<FIELD>`` environment variables."""
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                data[name] = raw.strip()
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: str) -> "Settings":
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Settings JSON not found: {path}")
        return cls.model_validate(json.loads(p.read_text()))


DEFAULT_SETTINGS = Settings()
