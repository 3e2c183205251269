from __future__ import annotations

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, confloat, field_validator

from .errors import InvalidInput, messages_from_validation_error

SizeKey = str


class Sample(BaseModel):
    """One measured point of a size's capacity curve."""

    model_config = ConfigDict(frozen=True)

    span: confloat(gt=0, allow_inf_nan=False) = Field(..., description="Span, distance or spacing.")
    capacity: confloat(ge=0, allow_inf_nan=False) = Field(..., description="Capacity at that span.")


class CapacityTable(BaseModel):
    """
    Standard sizes with capacity sampled at discrete spans.

    Samples are stored sorted ascending by span. Capacity is expected to
    fall (or stay flat) as span grows; the loaders warn when a table does
    not, but the engine does not reject it.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field("capacity table", description="Human readable table name.")
    span_unit: str = Field("ft", description="Unit of the span axis.")
    capacity_unit: str = Field("plf", description="Unit of the capacity axis.")
    sizes: Dict[SizeKey, Tuple[Sample, ...]] = Field(..., description="Samples per size, in table order.")
    notes: Tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("sizes")
    @classmethod
    def _sorted_unique_samples(cls, v: Dict[SizeKey, Tuple[Sample, ...]]) -> Dict[SizeKey, Tuple[Sample, ...]]:
        if not v:
            raise ValueError("capacity table has no sizes")
        out: Dict[SizeKey, Tuple[Sample, ...]] = {}
        for size, samples in v.items():
            if not samples:
                raise ValueError(f"size {size!r} has no samples")
            ordered = tuple(sorted(samples, key=lambda s: s.span))
            spans = [s.span for s in ordered]
            if len(set(spans)) != len(spans):
                raise ValueError(f"size {size!r} has duplicate spans")
            out[str(size)] = ordered
        return out

    @classmethod
    def from_pairs(cls, sizes: Dict[SizeKey, Any], **kwargs: Any) -> "CapacityTable":
        """Build a table from ``{size: [(span, capacity), ...]}``."""
        converted = {
            size: tuple(Sample(span=span, capacity=cap) for span, cap in pairs)
            for size, pairs in sizes.items()
        }
        return cls(sizes=converted, **kwargs)

    def size_keys(self) -> List[SizeKey]:
        return list(self.sizes.keys())

    def samples(self, size: SizeKey) -> Tuple[Sample, ...]:
        try:
            return self.sizes[size]
        except KeyError:
            raise InvalidInput([f"Unknown size: {size}"]) from None

    def non_monotonic_sizes(self) -> List[SizeKey]:
        """Sizes whose capacity rises somewhere as span grows."""
        bad: List[SizeKey] = []
        for size, samples in self.sizes.items():
            caps = [s.capacity for s in samples]
            if any(b > a for a, b in zip(caps, caps[1:])):
                bad.append(size)
        return bad

    def filter(self, keep) -> "CapacityTable":
        """Return a copy holding only the sizes for which ``keep(size)`` is true."""
        kept = {k: v for k, v in self.sizes.items() if keep(k)}
        return self.model_copy(update={"sizes": kept})

    def scaled(self, factor: float) -> "CapacityTable":
        """Return a copy with every capacity multiplied by ``factor``."""
        scaled = {
            k: tuple(Sample(span=s.span, capacity=s.capacity * factor) for s in v)
            for k, v in self.sizes.items()
        }
        return self.model_copy(update={"sizes": scaled})


class Query(BaseModel):
    model_config = ConfigDict(frozen=True)

    required_capacity: confloat(gt=0, allow_inf_nan=False) = Field(
        ..., title="Required capacity", description="Load, current or span that must be carried."
    )
    required_span: confloat(gt=0, allow_inf_nan=False) = Field(
        ..., title="Span", description="Span, distance or spacing at which it must be carried."
    )

    @classmethod
    def build(cls, required_capacity: Any, required_span: Any) -> "Query":
        """Validate raw values, raising InvalidInput with form-ready messages."""
        try:
            return cls(required_capacity=required_capacity, required_span=required_span)
        except ValidationError as e:
            raise InvalidInput(messages_from_validation_error(e, cls)) from e


class SizeOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    size: SizeKey
    interpolated_capacity: float
    utilization_percent: int
    extrapolated: bool = Field(False, description="Capacity came from the beyond-table reduction rule.")


class SizingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: Query
    options: Tuple[SizeOption, ...] = Field(..., description="Adequate sizes, tightest fit first.")
    recommended: SizeOption
    not_applicable: Tuple[SizeKey, ...] = Field(
        default_factory=tuple, description="Sizes with no data at the requested span."
    )
    total_adequate: int = Field(0, description="Adequate sizes before the display limit was applied.")
