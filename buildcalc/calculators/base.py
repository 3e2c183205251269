from __future__ import annotations

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..sizing.errors import InvalidInput, messages_from_validation_error

M = TypeVar("M", bound=BaseModel)


class CalculatorInputs(BaseModel):
    """Immutable form values for one calculation."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class CalculatorResult(BaseModel):
    model_config = ConfigDict(frozen=True)


def validate_inputs(model: Type[M], data: Mapping[str, Any]) -> M:
    """
    Validate raw form/JSON values into ``model``.

    Blank strings count as missing so that an empty form field yields the
    same "Please enter a valid ..." message as an absent one.
    """
    cleaned = {k: v for k, v in data.items() if not (isinstance(v, str) and not v.strip())}
    try:
        return model.model_validate(cleaned)
    except ValidationError as e:
        raise InvalidInput(messages_from_validation_error(e, model)) from e
