"""Challenge-specific validation driven by the rule catalog."""

from __future__ import annotations

import logging
from typing import Any

from pulsar_validator.constants import (
    IssueCategory,
    IssueKind,
    RuleKind,
    RuleSeverity,
    Severity,
)
from pulsar_validator.validation.rules import (
    ChallengeValidationConfig,
    ContentRequirement,
    ValidationRule,
    parse_resolution,
)
from pulsar_validator.validation.schemas import (
    ContentSubmission,
    ValidationIssue,
)

logger = logging.getLogger(__name__)

# Rule severity → (issue kind, issue severity), per rule family.
_REQUIRED_MAPPING: dict[RuleSeverity, tuple[IssueKind, Severity]] = {
    RuleSeverity.ERROR: (IssueKind.ERROR, Severity.HIGH),
    RuleSeverity.WARNING: (IssueKind.WARNING, Severity.MEDIUM),
    RuleSeverity.INFO: (IssueKind.INFO, Severity.LOW),
}

_MIN_LENGTH_MAPPING: dict[RuleSeverity, tuple[IssueKind, Severity]] = {
    RuleSeverity.ERROR: (IssueKind.ERROR, Severity.HIGH),
    RuleSeverity.WARNING: (IssueKind.WARNING, Severity.MEDIUM),
    RuleSeverity.INFO: (IssueKind.WARNING, Severity.MEDIUM),
}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0  # pyright: ignore[reportUnknownArgumentType]
    return False


def apply_validation_rule(
    rule: ValidationRule, data: ContentSubmission
) -> ValidationIssue | None:
    """Evaluate one rule; return an issue or None.

    Rule/field combinations this function does not know how to
    evaluate are a no-op.
    """
    value = data.field_value(rule.field)

    if rule.kind == RuleKind.REQUIRED:
        if _is_blank(value):
            kind, severity = _REQUIRED_MAPPING[rule.severity]
            return ValidationIssue(
                kind=kind,
                category=IssueCategory.CHALLENGE_SPECIFIC,
                message=rule.message or f"{rule.field} is required",
                severity=severity,
                fixable=True,
                suggestion=f"Please provide a value for {rule.field}",
            )
        return None

    if rule.kind != RuleKind.CUSTOM:
        return None

    min_length = rule.min_length
    if rule.field == "description" and min_length:
        if len(data.description) < min_length:
            kind, severity = _MIN_LENGTH_MAPPING[rule.severity]
            return ValidationIssue(
                kind=kind,
                category=IssueCategory.CHALLENGE_SPECIFIC,
                message=(
                    rule.message
                    or f"{rule.field} must be at least {min_length} characters"
                ),
                severity=severity,
                fixable=True,
                suggestion=(
                    f"Please expand your {rule.field} to at least "
                    f"{min_length} characters"
                ),
            )

    required_tags = rule.required_tags
    if rule.field == "tags" and required_tags:
        user_tags = [t.lower() for t in data.tags]
        has_required = any(
            tag.lower() in user_tag
            for tag in required_tags
            for user_tag in user_tags
        )
        if not has_required:
            # Fixed severity, whatever the rule declares.
            return ValidationIssue(
                kind=IssueKind.WARNING,
                category=IssueCategory.CHALLENGE_SPECIFIC,
                message=rule.message or "Must include required tags",
                severity=Severity.MEDIUM,
                fixable=True,
                suggestion=(
                    "Include at least one of these tags: "
                    + ", ".join(required_tags)
                ),
            )

    return None


def check_content_requirement(
    requirement: ContentRequirement, data: ContentSubmission
) -> list[ValidationIssue]:
    """Challenge format/size/duration/resolution limits.

    Issues come out labelled ``technical``; see
    ``as_challenge_issues`` for the relabelling step.
    """
    issues: list[ValidationIssue] = []
    meta = data.metadata

    if meta.format and meta.format.lower() not in requirement.allowed_formats:
        issues.append(
            ValidationIssue(
                kind=IssueKind.ERROR,
                category=IssueCategory.TECHNICAL,
                message=f"Format {meta.format} not allowed for this challenge",
                severity=Severity.HIGH,
                fixable=True,
                suggestion=(
                    "Please use one of these formats: "
                    + ", ".join(requirement.allowed_formats)
                ),
            )
        )

    if meta.file_size_bytes and meta.file_size_bytes > requirement.max_size_bytes:
        issues.append(
            ValidationIssue(
                kind=IssueKind.ERROR,
                category=IssueCategory.TECHNICAL,
                message=(
                    "File size exceeds challenge limit of "
                    f"{requirement.max_size_mb}MB"
                ),
                severity=Severity.HIGH,
                fixable=True,
                suggestion=(
                    "Please reduce file size to under "
                    f"{requirement.max_size_mb}MB"
                ),
            )
        )

    max_duration = requirement.max_duration_seconds
    if max_duration and meta.duration and meta.duration > max_duration:
        issues.append(
            ValidationIssue(
                kind=IssueKind.WARNING,
                category=IssueCategory.TECHNICAL,
                message=(
                    "Content duration exceeds recommended "
                    f"{max_duration:g} seconds"
                ),
                severity=Severity.MEDIUM,
                fixable=True,
                suggestion=(
                    f"Consider trimming content to under {max_duration:g} seconds"
                ),
            )
        )

    if requirement.min_resolution and meta.resolution:
        min_width, min_height = parse_resolution(requirement.min_resolution)
        width, height = parse_resolution(meta.resolution)
        if width < min_width or height < min_height:
            # Resolution is fixed at capture time.
            issues.append(
                ValidationIssue(
                    kind=IssueKind.WARNING,
                    category=IssueCategory.TECHNICAL,
                    message=(
                        f"Resolution {meta.resolution} is below "
                        f"recommended {requirement.min_resolution}"
                    ),
                    severity=Severity.MEDIUM,
                    fixable=False,
                    suggestion="Use higher resolution content for better quality",
                )
            )

    return issues


def as_challenge_issues(
    issues: list[ValidationIssue],
) -> list[ValidationIssue]:
    """Relabel requirement issues as challenge-specific copies."""
    return [
        issue.model_copy(
            update={"category": IssueCategory.CHALLENGE_SPECIFIC}
        )
        for issue in issues
    ]


def check_challenge_specific(
    data: ContentSubmission,
    config: ChallengeValidationConfig | None,
) -> list[ValidationIssue]:
    """Apply a challenge's rules and matching content requirements."""
    if config is None:
        return []

    issues: list[ValidationIssue] = []
    for rule in config.validation_rules:
        issue = apply_validation_rule(rule, data)
        if issue is not None:
            issues.append(
                issue.model_copy(
                    update={
                        "category": IssueCategory.CHALLENGE_SPECIFIC,
                        "rule_id": f"{data.challenge_id}-{rule.field}",
                    }
                )
            )

    for requirement in config.content_requirements:
        if requirement.applies(data.content_type):
            issues.extend(
                as_challenge_issues(
                    check_content_requirement(requirement, data)
                )
            )

    logger.debug(
        "event=challenge_checks challenge_id=%s rules=%d issues=%d",
        config.challenge_id,
        len(config.validation_rules),
        len(issues),
    )
    return issues
