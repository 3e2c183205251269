from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Type

from pydantic import BaseModel, ValidationError

# pydantic error types that mean "missing, not a number, or not positive"
_INVALID_VALUE_TYPES = {
    "missing",
    "float_type",
    "float_parsing",
    "int_type",
    "int_parsing",
    "finite_number",
    "greater_than",
    "greater_than_equal",
}


class SizingError(Exception):
    """Base class for recoverable calculation errors."""


class InvalidInput(SizingError, ValueError):
    """User input is missing, non-numeric, zero, negative or out of range."""

    def __init__(self, messages: Iterable[str]):
        self.messages: List[str] = [str(m) for m in messages] or ["Invalid input"]
        super().__init__("; ".join(self.messages))


class NoAdequateSizeFound(SizingError):
    """No candidate in a table meets the requirement."""

    DEFAULT_SUGGESTION = (
        "No standard size carries this load at this span. "
        "Shorten the span (add a post or support), reduce the load, "
        "or consult a structural engineer."
    )

    def __init__(
        self,
        required_capacity: float,
        target_span: float,
        *,
        best_capacity: Optional[float] = None,
        not_applicable: Sequence[str] = (),
        suggestion: Optional[str] = None,
    ):
        self.required_capacity = float(required_capacity)
        self.target_span = float(target_span)
        self.best_capacity = best_capacity
        self.not_applicable = list(not_applicable)
        self.suggestion = suggestion or self.DEFAULT_SUGGESTION
        detail = f"required {self.required_capacity:g} at span {self.target_span:g}"
        if best_capacity is not None:
            detail += f", best available {best_capacity:.0f}"
        super().__init__(f"No adequate size found ({detail}). {self.suggestion}")


def _field_label(model: Type[BaseModel], name: str) -> str:
    info = model.model_fields.get(name)
    if info is not None and info.title:
        return info.title
    return name.replace("_", " ")


def messages_from_validation_error(exc: ValidationError, model: Type[BaseModel]) -> List[str]:
    """Turn a pydantic ValidationError into plain-language form messages."""
    messages: List[str] = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        if loc and isinstance(loc[0], str):
            label = _field_label(model, loc[0])
        else:
            label = ""
        if label and err.get("type") in _INVALID_VALUE_TYPES:
            msg = f"Please enter a valid {label.lower()}"
        elif label:
            msg = f"{label}: {err.get('msg', 'invalid value')}"
        else:
            msg = str(err.get("msg", "Invalid input")).removeprefix("Value error, ")
        if msg not in messages:
            messages.append(msg)
    return messages
