"""
agcod_sdk.tier1_runtime.validate
─────────────────────────────────
Input/schema validation via Pydantic v2. Raises the SDK's ValidationError
(not raw Pydantic errors) so callers only ever catch one error family.
"""
from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from agcod_sdk.tier0_core.errors import ValidationError

T = TypeVar("T", bound=BaseModel)


def validate_input(model: Type[T], data: Any) -> T:
    """
    Validate raw data against a Pydantic model.
    Raises agcod_sdk ValidationError (not Pydantic's) on failure.

    Usage:
        body = validate_input(CreateGiftCardRequest, {...})
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ValidationError(
            code="validation_error",
            user_message="Request validation failed.",
            fields=fields,
        ) from exc


__all__ = ["validate_input"]
