"""
Application Helpers

Utilities for turning raw request data into validated application payloads.
Multipart requests carry each section as a JSON-encoded form field, so
decoding and validation errors are both reported as a ValidationError that
lists every offending field.
"""

import json
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validation_error_fields(exc: PydanticValidationError, prefix: str | None = None) -> list[str]:
    """
    Flatten a Pydantic error into dotted field paths.

    Example: ``personal_info.email``, ``course_selection.intake_year``
    """
    fields: list[str] = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"])
        if prefix:
            path = f"{prefix}.{path}" if path else prefix
        if path not in fields:
            fields.append(path)
    return fields


def validate_payload(
    model_cls: type[ModelT],
    raw: dict[str, Any],
    prefix: str | None = None,
) -> ModelT:
    """
    Validate raw data against a schema.

    Raises:
        ValidationError: Listing every missing or malformed field
    """
    try:
        return model_cls.model_validate(raw)
    except PydanticValidationError as e:
        fields = validation_error_fields(e, prefix)
        raise ValidationError(
            f"Invalid or missing fields: {', '.join(fields)}",
            fields=fields,
        ) from e


def parse_json_field(name: str, value: str | None) -> Any:
    """
    Decode a JSON-encoded form field.

    Returns:
        The decoded value, or None when the field was not sent

    Raises:
        ValidationError: If the value is not valid JSON
    """
    if value is None or value == "":
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise ValidationError(f"{name} must be valid JSON", fields=[name]) from e


def collect_json_fields(fields: dict[str, str | None]) -> dict[str, Any]:
    """Decode every provided JSON form field, skipping those not sent."""
    decoded: dict[str, Any] = {}
    invalid: list[str] = []
    for name, value in fields.items():
        try:
            parsed = parse_json_field(name, value)
        except ValidationError:
            invalid.append(name)
            continue
        if parsed is not None:
            decoded[name] = parsed
    if invalid:
        raise ValidationError(f"Fields must be valid JSON: {', '.join(invalid)}", fields=invalid)
    return decoded
