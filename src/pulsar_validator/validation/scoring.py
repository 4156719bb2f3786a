"""Score aggregation, readiness level and suggestion generation.

Scoring rules:
- Each checker's own issue list is scored with its own weight
  table (five independent passes), before the lists are merged.
- Severities absent from a table deduct nothing in that pass.
- Scores are floored at 0.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pulsar_validator.constants import (
    DESCRIPTION_DETAILED_LENGTH,
    EXCELLENT_SCORE,
    GOOD_SCORE,
    MAX_SCORE,
    MAX_SUGGESTIONS,
    TIMED_CONTENT_TYPES,
    IssueKind,
    ReadinessLevel,
    Severity,
)
from pulsar_validator.validation.schemas import (
    ContentSubmission,
    ValidationIssue,
)

type WeightTable = Mapping[Severity, int]

BASIC_WEIGHTS: WeightTable = {
    Severity.HIGH: 15,
    Severity.MEDIUM: 10,
    Severity.LOW: 5,
}
TECHNICAL_WEIGHTS: WeightTable = {
    Severity.HIGH: 20,
    Severity.MEDIUM: 15,
}
GUIDELINE_WEIGHTS: WeightTable = {
    Severity.CRITICAL: 30,
    Severity.HIGH: 20,
}
QUALITY_WEIGHTS: WeightTable = {
    Severity.MEDIUM: 10,
}
CHALLENGE_WEIGHTS: WeightTable = {
    Severity.CRITICAL: 30,
    Severity.HIGH: 20,
    Severity.MEDIUM: 10,
}
# Standalone challenge score, stricter than its share of the overall score.
CHALLENGE_SCORE_WEIGHTS: WeightTable = {
    Severity.CRITICAL: 40,
    Severity.HIGH: 25,
    Severity.MEDIUM: 15,
    Severity.LOW: 5,
}

CAPTIONS_TIP = "Consider adding captions or transcripts for accessibility"
DESCRIPTION_TIP = "Add a detailed description to increase engagement"
PREVIEW_TIP = "Preview your submission before final submission"
THEME_TIP = "Check that your content aligns with the challenge theme"


def deduction(issues: Iterable[ValidationIssue], weights: WeightTable) -> int:
    """Total penalty for one issue list under one weight table."""
    return sum(weights.get(issue.severity, 0) for issue in issues)


def compute_score(
    passes: Iterable[tuple[list[ValidationIssue], WeightTable]],
) -> int:
    """100 minus every pass's deduction, floored at 0."""
    score = MAX_SCORE
    for issues, weights in passes:
        score -= deduction(issues, weights)
    return max(0, score)


def compute_challenge_score(
    challenge_issues: list[ValidationIssue], *, configured: bool
) -> int:
    if not configured:
        return 0
    return compute_score([(challenge_issues, CHALLENGE_SCORE_WEIGHTS)])


def readiness_level(
    score: int, issues: list[ValidationIssue]
) -> ReadinessLevel:
    blocked = any(
        i.kind == IssueKind.ERROR or i.severity == Severity.CRITICAL
        for i in issues
    )
    if blocked:
        return ReadinessLevel.NOT_READY
    if score >= EXCELLENT_SCORE:
        return ReadinessLevel.EXCELLENT
    if score >= GOOD_SCORE:
        return ReadinessLevel.GOOD
    return ReadinessLevel.NEEDS_IMPROVEMENT


def generate_suggestions(
    issues: list[ValidationIssue],
    data: ContentSubmission,
    *,
    limit: int = MAX_SUGGESTIONS,
) -> list[str]:
    """Issue-specific suggestions first, then general tips.

    Deduplicated in first-seen order and capped at ``limit``, so
    general tips drop off when issues already fill the quota.
    """
    candidates = [
        issue.suggestion
        for issue in issues
        if issue.fixable and issue.suggestion
    ]

    if data.content_type in TIMED_CONTENT_TYPES:
        candidates.append(CAPTIONS_TIP)
    if len(data.description) < DESCRIPTION_DETAILED_LENGTH:
        candidates.append(DESCRIPTION_TIP)
    candidates.extend((PREVIEW_TIP, THEME_TIP))

    return list(dict.fromkeys(candidates))[:limit]
