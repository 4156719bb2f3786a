"""Validation of challenge-defined extra form fields."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pulsar_validator.constants import CustomFieldType
from pulsar_validator.validation.rules import CustomFieldRule
from pulsar_validator.validation.schemas import (
    ContentSubmission,
    CustomFieldStatus,
)


def _is_missing(value: Any) -> bool:
    # An unticked boolean does not satisfy a required field.
    if value is None or value is False:
        return True
    return isinstance(value, str) and value.strip() == ""


def validate_custom_fields(
    data: ContentSubmission,
    rules: Mapping[str, CustomFieldRule],
) -> dict[str, CustomFieldStatus]:
    """Check each declared field; undeclared fields are not reported.

    Returns an empty mapping when the submission carries no custom
    fields at all.
    """
    if data.custom_fields is None:
        return {}

    results: dict[str, CustomFieldStatus] = {}
    for name, rule in rules.items():
        value = data.custom_fields.get(name)

        if rule.required and _is_missing(value):
            results[name] = CustomFieldStatus(
                is_valid=False, message=f"{name} is required"
            )
        elif (
            rule.field_type == CustomFieldType.TEXT
            and rule.max_length is not None
            and isinstance(value, str)
            and len(value) > rule.max_length
        ):
            results[name] = CustomFieldStatus(
                is_valid=False,
                message=f"{name} must be under {rule.max_length} characters",
            )
        else:
            results[name] = CustomFieldStatus(is_valid=True)

    return results
