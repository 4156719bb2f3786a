"""Tests for challenge-defined custom field validation."""

from pulsar_validator.constants import CustomFieldType
from pulsar_validator.validation.custom_fields import validate_custom_fields
from pulsar_validator.validation.rules import (
    DEFAULT_CUSTOM_FIELD_RULES,
    CustomFieldRule,
)
from tests.conftest import make_submission


def test_absent_custom_fields_reports_nothing() -> None:
    data = make_submission()
    assert validate_custom_fields(data, DEFAULT_CUSTOM_FIELD_RULES) == {}


def test_empty_custom_fields_flags_required() -> None:
    data = make_submission(customFields={})
    result = validate_custom_fields(data, DEFAULT_CUSTOM_FIELD_RULES)
    assert set(result) == {
        "ridingExperience",
        "safetyGearUsed",
        "locationDescription",
    }
    assert result["ridingExperience"].is_valid is False
    assert result["ridingExperience"].message == "ridingExperience is required"
    assert result["safetyGearUsed"].is_valid is False
    assert result["locationDescription"].is_valid is True


def test_false_does_not_satisfy_required_boolean() -> None:
    data = make_submission(
        customFields={"ridingExperience": "Beginner", "safetyGearUsed": False}
    )
    result = validate_custom_fields(data, DEFAULT_CUSTOM_FIELD_RULES)
    assert result["ridingExperience"].is_valid is True
    assert result["safetyGearUsed"].is_valid is False
    assert result["safetyGearUsed"].message == "safetyGearUsed is required"


def test_true_satisfies_required_boolean() -> None:
    data = make_submission(
        customFields={"ridingExperience": "Beginner", "safetyGearUsed": True}
    )
    result = validate_custom_fields(data, DEFAULT_CUSTOM_FIELD_RULES)
    assert all(status.is_valid for status in result.values())


def test_blank_string_counts_as_missing() -> None:
    data = make_submission(
        customFields={"ridingExperience": "  ", "safetyGearUsed": True}
    )
    result = validate_custom_fields(data, DEFAULT_CUSTOM_FIELD_RULES)
    assert result["ridingExperience"].is_valid is False


def test_text_over_max_length() -> None:
    data = make_submission(
        customFields={
            "ridingExperience": "Expert",
            "safetyGearUsed": True,
            "locationDescription": "x" * 201,
        }
    )
    result = validate_custom_fields(data, DEFAULT_CUSTOM_FIELD_RULES)
    status = result["locationDescription"]
    assert status.is_valid is False
    assert status.message == "locationDescription must be under 200 characters"


def test_text_at_max_length_passes() -> None:
    rules = {
        "bio": CustomFieldRule(
            required=False, field_type=CustomFieldType.TEXT, max_length=5
        )
    }
    data = make_submission(customFields={"bio": "hello"})
    assert validate_custom_fields(data, rules)["bio"].is_valid is True


def test_undeclared_fields_are_ignored() -> None:
    data = make_submission(customFields={"favouriteColour": "teal"})
    result = validate_custom_fields(data, {})
    assert result == {}


def test_serialized_status_uses_camel_case() -> None:
    data = make_submission(customFields={})
    result = validate_custom_fields(data, DEFAULT_CUSTOM_FIELD_RULES)
    payload = result["locationDescription"].model_dump(
        by_alias=True, exclude_none=True
    )
    assert payload == {"isValid": True}
