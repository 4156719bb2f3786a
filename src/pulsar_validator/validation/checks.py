"""Challenge-independent checks: content, technical, guidelines, quality.

Each checker is a pure function of the submission returning its own
issue list. Severities are fixed per check; they do not depend on
any challenge configuration.
"""

from __future__ import annotations

import re

from pulsar_validator.constants import (
    ALL_CAPS_MIN_LENGTH,
    BLOCKED_KEYWORDS,
    BYTES_PER_MB,
    DESCRIPTION_MIN_LENGTH,
    DESCRIPTION_MIN_SENTENCES,
    MAX_FILE_SIZE_BYTES,
    MAX_RECOMMENDED_DURATION_SECONDS,
    RIGHTS_KEYWORDS,
    SUPPORTED_FORMATS,
    TIMED_CONTENT_TYPES,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    TITLE_MIN_WORDS,
    VIDEO_MIN_HEIGHT,
    VIDEO_MIN_WIDTH,
    ContentType,
    IssueCategory,
    IssueKind,
    Severity,
)
from pulsar_validator.validation.rules import parse_resolution
from pulsar_validator.validation.schemas import (
    ContentSubmission,
    ValidationIssue,
)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def has_content(content: object) -> bool:
    """True unless the payload is falsy: None, 0, False or empty."""
    return bool(content)


def check_basic_content(data: ContentSubmission) -> list[ValidationIssue]:
    """Title, description and payload presence."""
    issues: list[ValidationIssue] = []

    title = data.title.strip()
    if len(title) < TITLE_MIN_LENGTH:
        issues.append(
            ValidationIssue(
                kind=IssueKind.ERROR,
                category=IssueCategory.CONTENT,
                message="Title must be at least 3 characters long",
                severity=Severity.HIGH,
                fixable=True,
                suggestion="Provide a descriptive title for your submission",
            )
        )
    elif len(data.title) > TITLE_MAX_LENGTH:
        issues.append(
            ValidationIssue(
                kind=IssueKind.WARNING,
                category=IssueCategory.CONTENT,
                message="Title is very long and may be truncated",
                severity=Severity.MEDIUM,
                fixable=True,
                suggestion=(
                    "Consider shortening your title to under "
                    f"{TITLE_MAX_LENGTH} characters"
                ),
            )
        )

    if len(data.description.strip()) < DESCRIPTION_MIN_LENGTH:
        issues.append(
            ValidationIssue(
                kind=IssueKind.WARNING,
                category=IssueCategory.CONTENT,
                message=(
                    "Description should be at least 10 characters "
                    "for better engagement"
                ),
                severity=Severity.MEDIUM,
                fixable=True,
                suggestion=(
                    "Add a detailed description to help viewers "
                    "understand your submission"
                ),
            )
        )

    # Nothing to fix on our side: no data was sent at all.
    if not has_content(data.content):
        issues.append(
            ValidationIssue(
                kind=IssueKind.ERROR,
                category=IssueCategory.CONTENT,
                message="No content provided",
                severity=Severity.CRITICAL,
                fixable=False,
            )
        )

    return issues


def check_technical_specs(data: ContentSubmission) -> list[ValidationIssue]:
    """Platform-wide size, format and duration limits.

    Unknown content types have no size or format limits; the
    lookups below are total and never raise.
    """
    issues: list[ValidationIssue] = []
    meta = data.metadata
    content_type = data.content_type

    max_size = MAX_FILE_SIZE_BYTES.get(content_type)
    if meta.file_size_bytes and max_size is not None:
        if meta.file_size_bytes > max_size:
            issues.append(
                ValidationIssue(
                    kind=IssueKind.ERROR,
                    category=IssueCategory.TECHNICAL,
                    message=(
                        "File size exceeds maximum allowed for "
                        f"{content_type} content"
                    ),
                    severity=Severity.HIGH,
                    fixable=True,
                    suggestion=(
                        f"Compress your {content_type} to under "
                        f"{round(max_size / BYTES_PER_MB)}MB"
                    ),
                )
            )

    formats = SUPPORTED_FORMATS.get(content_type)
    if meta.format and formats is not None:
        if meta.format.lower() not in formats:
            issues.append(
                ValidationIssue(
                    kind=IssueKind.ERROR,
                    category=IssueCategory.TECHNICAL,
                    message=f"Unsupported format: {meta.format}",
                    severity=Severity.HIGH,
                    fixable=True,
                    suggestion=(
                        "Convert to a supported format: "
                        + ", ".join(formats)
                    ),
                )
            )

    if (
        content_type in TIMED_CONTENT_TYPES
        and meta.duration
        and meta.duration > MAX_RECOMMENDED_DURATION_SECONDS
    ):
        issues.append(
            ValidationIssue(
                kind=IssueKind.WARNING,
                category=IssueCategory.TECHNICAL,
                message="Content duration is quite long",
                severity=Severity.MEDIUM,
                fixable=True,
                suggestion=(
                    "Consider trimming to under 5 minutes "
                    "for better engagement"
                ),
            )
        )

    return issues


def check_guidelines(data: ContentSubmission) -> list[ValidationIssue]:
    """Keyword policy scan and challenge association.

    Plain substring matching: "disharmful" trips "harmful".
    """
    issues: list[ValidationIssue] = []
    text = f"{data.title} {data.description}".lower()

    if any(keyword in text for keyword in BLOCKED_KEYWORDS):
        issues.append(
            ValidationIssue(
                kind=IssueKind.ERROR,
                category=IssueCategory.GUIDELINES,
                message="Content may violate community guidelines",
                severity=Severity.CRITICAL,
                fixable=True,
                suggestion=(
                    "Please review and modify content to comply "
                    "with community standards"
                ),
            )
        )

    if any(keyword in text for keyword in RIGHTS_KEYWORDS):
        issues.append(
            ValidationIssue(
                kind=IssueKind.WARNING,
                category=IssueCategory.GUIDELINES,
                message="Potential copyright concerns detected",
                severity=Severity.HIGH,
                fixable=True,
                suggestion=(
                    "Ensure you have rights to use all content "
                    "in your submission"
                ),
            )
        )

    if not data.challenge_id:
        issues.append(
            ValidationIssue(
                kind=IssueKind.ERROR,
                category=IssueCategory.GUIDELINES,
                message="Submission must be associated with a challenge",
                severity=Severity.CRITICAL,
                fixable=False,
            )
        )

    return issues


def assess_quality(data: ContentSubmission) -> list[ValidationIssue]:
    """Heuristic quality nudges.

    Raises ValueError if a video resolution is not ``WxH``.
    """
    issues: list[ValidationIssue] = []

    if data.title:
        if len(data.title.split()) < TITLE_MIN_WORDS:
            issues.append(
                ValidationIssue(
                    kind=IssueKind.INFO,
                    category=IssueCategory.QUALITY,
                    message="Title could be more descriptive",
                    severity=Severity.LOW,
                    fixable=True,
                    suggestion=(
                        "Consider adding more descriptive words "
                        "to your title"
                    ),
                )
            )

        if (
            data.title == data.title.upper()
            and len(data.title) > ALL_CAPS_MIN_LENGTH
        ):
            issues.append(
                ValidationIssue(
                    kind=IssueKind.WARNING,
                    category=IssueCategory.QUALITY,
                    message="Title is in all caps",
                    severity=Severity.MEDIUM,
                    fixable=True,
                    suggestion=(
                        "Use proper capitalization for better readability"
                    ),
                )
            )

    if data.description:
        sentences = [
            s
            for s in _SENTENCE_SPLIT.split(data.description)
            if s.strip()
        ]
        if len(sentences) < DESCRIPTION_MIN_SENTENCES:
            issues.append(
                ValidationIssue(
                    kind=IssueKind.INFO,
                    category=IssueCategory.QUALITY,
                    message="Description could be more detailed",
                    severity=Severity.LOW,
                    fixable=True,
                    suggestion=(
                        "Add more context about your submission "
                        "to engage viewers"
                    ),
                )
            )

    resolution = data.metadata.resolution
    if resolution and data.content_type == ContentType.VIDEO:
        width, height = parse_resolution(resolution)
        if width < VIDEO_MIN_WIDTH or height < VIDEO_MIN_HEIGHT:
            issues.append(
                ValidationIssue(
                    kind=IssueKind.INFO,
                    category=IssueCategory.QUALITY,
                    message="Video resolution is quite low",
                    severity=Severity.LOW,
                    fixable=True,
                    suggestion=(
                        "Consider using higher resolution (720p or above) "
                        "for better quality"
                    ),
                )
            )

    return issues
