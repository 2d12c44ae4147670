"""Validation of incoming entry payloads.

Pure checks: no database access. Pydantic does the field work; this
module turns its report into one ``{field, message}`` item per
violated field.
"""

from __future__ import annotations

from typing import Any

import pydantic

from medialib.core.errors import ValidationError
from medialib.models.types import EntryCreate, EntryUpdate


def _field_errors(exc: pydantic.ValidationError) -> list[dict[str, str]]:
    """Collapse pydantic errors to the first message per field."""
    errors: list[dict[str, str]] = []
    seen: set[str] = set()
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "body"
        if field in seen:
            continue
        seen.add(field)
        errors.append({"field": field, "message": err["msg"]})
    return errors


def _require_mapping(payload: Any) -> None:
    if not isinstance(payload, dict):
        raise ValidationError([{"field": "body", "message": "Expected a JSON object"}])


def validate_create(payload: Any) -> dict[str, Any]:
    """Validate a create payload.

    Args:
        payload: Decoded JSON body.

    Returns:
        Column values for the new entry, with unset optional fields as None.

    Raises:
        ValidationError: Listing every violated field.
    """
    _require_mapping(payload)
    try:
        model = EntryCreate.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(_field_errors(e)) from e
    return model.model_dump()


def validate_update(payload: Any) -> dict[str, Any]:
    """Validate a partial update payload.

    Only fields present in the payload are returned, so absent fields are
    left unchanged by the store.

    Raises:
        ValidationError: Listing every violated field.
    """
    _require_mapping(payload)
    try:
        model = EntryUpdate.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(_field_errors(e)) from e
    return model.model_dump(exclude_unset=True)
