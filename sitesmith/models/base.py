"""Shared pydantic base and merge helpers for sitesmith models."""

import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

_UNDERSCORE_RE = re.compile(r"_([a-z0-9])")

ModelT = TypeVar("ModelT", bound="SitesmithModel")


def to_camel(name: str) -> str:
    """Convert a snake_case name to camelCase.

    Already camelCased names are returned unchanged.
    """
    return _UNDERSCORE_RE.sub(lambda match: match.group(1).upper(), name)


def new_id() -> str:
    """Generate a new identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


def camelize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize the keys of a (nested) patch dict to their camelCase aliases.

    Lists are left untouched since they replace stored values wholesale and
    are validated by the model itself.
    """
    result: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = camelize_keys(value)
        result[to_camel(key)] = value
    return result


def deep_merge(base: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``patch`` over ``base``.

    Nested dicts merge key by key; every other value (lists included)
    replaces the stored one.
    """
    merged = dict(base)
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class SitesmithModel(BaseModel):
    """Base model for sitesmith entities.

    Accepts snake_case and camelCase keys and dumps camelCase, which is the
    shape stored in JSON columns and emitted by the CLI.
    """

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        validate_by_name = True
        use_enum_values = True

    def to_document(self) -> Dict[str, Any]:
        """Dump the model as a JSON-compatible dict keyed by alias."""
        return self.model_dump(by_alias=True, mode="json")


def merge_model(model: ModelT, patch: Optional[Dict[str, Any]]) -> ModelT:
    """Return a copy of ``model`` with a partial patch merged over it.

    Args:
        model: Model holding the current values
        patch: Partial values keyed by field name or alias

    Returns:
        A new, fully validated model instance

    Raises:
        ValidationError: If the merged values are invalid
    """
    if not patch:
        return model.model_copy(deep=True)

    model_class: Type[ModelT] = type(model)
    return validate_model(model_class, deep_merge(model.to_document(), camelize_keys(patch)))


def validate_model(model_class: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """Validate raw values into a model, raising sitesmith's ValidationError.

    Raises:
        ValidationError: If the values are invalid
    """
    try:
        return model_class.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(
            f"Invalid {model_class.__name__} values: {first.get('msg', e)}",
            field=field,
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e
