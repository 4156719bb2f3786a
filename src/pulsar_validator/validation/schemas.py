"""Pydantic models for submission input and validation output."""

from __future__ import annotations

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from pulsar_validator.constants import (
    IssueCategory,
    IssueKind,
    ReadinessLevel,
    Severity,
)


class SubmissionMetadata(BaseModel):
    """Technical properties reported for the uploaded payload."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True
    )

    duration: float | None = None  # seconds
    resolution: str | None = None  # "WxH"
    file_size_bytes: int | None = Field(
        default=None,
        validation_alias=AliasChoices("fileSizeBytes", "fileSize"),
        serialization_alias="fileSizeBytes",
    )
    format: str | None = None


class ContentSubmission(BaseModel):
    """A single submission attempt, as posted by the client."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True
    )

    # Kept as a plain string: unknown kinds are a handled edge case,
    # not a request error.
    content_type: str = Field(
        validation_alias=AliasChoices("contentType", "type"),
        serialization_alias="contentType",
    )
    title: str = ""
    description: str = ""
    content: Any = None
    metadata: SubmissionMetadata = Field(
        default_factory=SubmissionMetadata
    )
    challenge_id: str = ""
    user_id: str = ""
    custom_fields: dict[str, Any] | None = None
    tags: list[str] = Field(default_factory=lambda: list[str]())

    @field_validator(
        "title", "description", "challenge_id", "user_id", mode="before"
    )
    @classmethod
    def _null_text_is_empty(cls, v: object) -> object:
        """JSON null on a text field reads as an empty string."""
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags_is_empty(cls, v: object) -> object:
        return [] if v is None else v

    def field_value(self, name: str) -> Any:
        """Resolve a rule field name against the submission."""
        if name == "title":
            return self.title
        if name == "description":
            return self.description
        if name == "tags":
            return self.tags
        if name == "type":
            return self.content_type
        return (self.custom_fields or {}).get(name)


class ValidationIssue(BaseModel):
    """One detected problem with a submission."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: IssueKind = Field(alias="type")
    category: IssueCategory
    message: str
    severity: Severity
    fixable: bool
    suggestion: str | None = None
    rule_id: str | None = Field(default=None, alias="ruleId")


class CustomFieldStatus(BaseModel):
    """Outcome for one challenge-defined form field."""

    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    message: str | None = None


class ValidationResult(BaseModel):
    """The single output of a validation call."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True
    )

    is_valid: bool
    score: int = Field(ge=0, le=100)
    issues: list[ValidationIssue] = Field(
        default_factory=lambda: list[ValidationIssue]()
    )
    suggestions: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    readiness_level: ReadinessLevel
    challenge_specific_score: int = Field(default=0, ge=0, le=100)
    custom_field_validation: dict[str, CustomFieldStatus] = Field(
        default_factory=lambda: dict[str, CustomFieldStatus]()
    )
    meets_quality_threshold: bool | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the camelCase wire names."""
        return self.model_dump(
            mode="json", by_alias=True, exclude_none=True
        )
