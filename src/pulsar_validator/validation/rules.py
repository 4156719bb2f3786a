"""Per-challenge validation configuration.

Each challenge carries its own rules, content requirements and
quality thresholds. The catalog (catalog.py) serves these configs
to the challenge-specific validator, which consumes them directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from pulsar_validator.constants import (
    BYTES_PER_MB,
    DEFAULT_MINIMUM_SCORE,
    CustomFieldType,
    RequirementType,
    RuleKind,
    RuleSeverity,
)


def parse_resolution(value: str) -> tuple[int, int]:
    """Parse a ``"WxH"`` string into ``(width, height)``.

    Raises ValueError on anything that is not two integers
    separated by ``x``.
    """
    parts = value.lower().split("x")
    if len(parts) != 2:
        msg = f"Malformed resolution: {value!r}"
        raise ValueError(msg)
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        msg = f"Malformed resolution: {value!r}"
        raise ValueError(msg) from None


@dataclass(frozen=True)
class ValidationRule:
    """A declarative check against one submission field."""

    field: str
    kind: RuleKind
    severity: RuleSeverity = RuleSeverity.ERROR
    value: Any = None
    message: str | None = None

    @property
    def min_length(self) -> int | None:
        if isinstance(self.value, dict):
            raw = self.value.get("minLength")  # pyright: ignore[reportUnknownMemberType]
            return int(raw) if raw else None
        return None

    @property
    def required_tags(self) -> tuple[str, ...]:
        if isinstance(self.value, dict):
            raw = self.value.get("requiredTags") or ()  # pyright: ignore[reportUnknownMemberType]
            return tuple(str(t) for t in raw)  # pyright: ignore[reportUnknownVariableType]
        return ()

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "field": self.field,
            "type": str(self.kind),
            "severity": str(self.severity),
        }
        if self.value is not None:
            payload["value"] = self.value
        if self.message is not None:
            payload["message"] = self.message
        return payload


@dataclass(frozen=True)
class ContentRequirement:
    """Format, size, duration and resolution limits for a content type."""

    applies_to: RequirementType
    allowed_formats: tuple[str, ...]
    max_size_bytes: int
    min_resolution: str | None = None
    max_duration_seconds: float | None = None
    # Declared for configuration parity; presence is checked by rules.
    required_fields: tuple[str, ...] = ()

    def applies(self, content_type: str) -> bool:
        return (
            self.applies_to == RequirementType.ANY
            or self.applies_to == content_type
        )

    @property
    def max_size_mb(self) -> int:
        return round(self.max_size_bytes / BYTES_PER_MB)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": str(self.applies_to),
            "formats": list(self.allowed_formats),
            "maxSize": self.max_size_bytes,
            "requiredFields": list(self.required_fields),
        }
        if self.min_resolution is not None:
            payload["minResolution"] = self.min_resolution
        if self.max_duration_seconds is not None:
            payload["maxDuration"] = self.max_duration_seconds
        return payload


@dataclass(frozen=True)
class QualityThresholds:
    minimum_score: int = DEFAULT_MINIMUM_SCORE
    require_preview: bool = False
    auto_reject: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {
            "minimumScore": self.minimum_score,
            "requirePreview": self.require_preview,
            "autoReject": self.auto_reject,
        }


@dataclass(frozen=True)
class ChallengeValidationConfig:
    """Everything the validator needs to know about one challenge."""

    challenge_id: str
    validation_rules: tuple[ValidationRule, ...] = ()
    content_requirements: tuple[ContentRequirement, ...] = ()
    quality_thresholds: QualityThresholds = field(
        default_factory=QualityThresholds
    )
    version: int = 1
    updated_by: str = "system"
    last_modified: datetime = field(
        default_factory=lambda: datetime.now(UTC)
    )

    def to_payload(self) -> dict[str, Any]:
        return {
            "challengeId": self.challenge_id,
            "validationRules": [
                r.to_payload() for r in self.validation_rules
            ],
            "contentRequirements": [
                r.to_payload() for r in self.content_requirements
            ],
            "qualityThresholds": self.quality_thresholds.to_payload(),
            "version": self.version,
            "updatedBy": self.updated_by,
            "lastModified": self.last_modified.isoformat(),
        }


@dataclass(frozen=True)
class CustomFieldRule:
    """Constraints on one challenge-defined form field."""

    required: bool
    field_type: CustomFieldType
    max_length: int | None = None


_REQUIRED_FIELDS = ("title", "description", "tags")

NIGHT_RIDER_CONFIG = ChallengeValidationConfig(
    challenge_id="1",
    validation_rules=(
        ValidationRule(
            field="title",
            kind=RuleKind.REQUIRED,
            severity=RuleSeverity.ERROR,
            message="Title is required for all submissions",
        ),
        ValidationRule(
            field="description",
            kind=RuleKind.CUSTOM,
            severity=RuleSeverity.ERROR,
            value={"minLength": 50},
            message="Description must be at least 50 characters",
        ),
        ValidationRule(
            field="tags",
            kind=RuleKind.CUSTOM,
            severity=RuleSeverity.WARNING,
            value={
                "requiredTags": ["nightrider", "pulsar", "nightride"]
            },
            message=(
                "Must include at least one of: "
                "#nightrider, #pulsar, #nightride"
            ),
        ),
    ),
    content_requirements=(
        ContentRequirement(
            applies_to=RequirementType.IMAGE,
            allowed_formats=("jpg", "jpeg", "png", "webp"),
            max_size_bytes=50 * BYTES_PER_MB,
            min_resolution="1920x1080",
            required_fields=_REQUIRED_FIELDS,
        ),
        ContentRequirement(
            applies_to=RequirementType.VIDEO,
            allowed_formats=("mp4", "mov", "webm"),
            max_size_bytes=100 * BYTES_PER_MB,
            max_duration_seconds=120,
            required_fields=_REQUIRED_FIELDS,
        ),
    ),
    quality_thresholds=QualityThresholds(
        minimum_score=70,
        require_preview=True,
        auto_reject=False,
    ),
    updated_by="admin@pulsar.com",
)

DEFAULT_CHALLENGE_CONFIGS: dict[str, ChallengeValidationConfig] = {
    NIGHT_RIDER_CONFIG.challenge_id: NIGHT_RIDER_CONFIG,
}

DEFAULT_CUSTOM_FIELD_RULES: dict[str, CustomFieldRule] = {
    "ridingExperience": CustomFieldRule(
        required=True, field_type=CustomFieldType.SELECT
    ),
    "safetyGearUsed": CustomFieldRule(
        required=True, field_type=CustomFieldType.BOOLEAN
    ),
    "locationDescription": CustomFieldRule(
        required=False, field_type=CustomFieldType.TEXT, max_length=200
    ),
}
