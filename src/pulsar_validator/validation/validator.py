"""Submission validator: runs every checker and aggregates the result."""

from __future__ import annotations

import logging

from pulsar_validator.constants import MAX_SUGGESTIONS, IssueKind
from pulsar_validator.validation.catalog import (
    CustomFieldCatalog,
    InMemoryRuleCatalog,
    RuleCatalog,
    StaticCustomFieldCatalog,
)
from pulsar_validator.validation.challenge import check_challenge_specific
from pulsar_validator.validation.checks import (
    assess_quality,
    check_basic_content,
    check_guidelines,
    check_technical_specs,
)
from pulsar_validator.validation.custom_fields import validate_custom_fields
from pulsar_validator.validation.schemas import (
    ContentSubmission,
    ValidationResult,
)
from pulsar_validator.validation.scoring import (
    BASIC_WEIGHTS,
    CHALLENGE_WEIGHTS,
    GUIDELINE_WEIGHTS,
    QUALITY_WEIGHTS,
    TECHNICAL_WEIGHTS,
    compute_challenge_score,
    compute_score,
    generate_suggestions,
    readiness_level,
)

logger = logging.getLogger(__name__)


class SubmissionValidator:
    """Stateless scorer over a submission and a read-only catalog.

    The catalogs are injected so callers can back them with a
    database and tests can pass fixtures.
    """

    def __init__(
        self,
        catalog: RuleCatalog | None = None,
        custom_fields: CustomFieldCatalog | None = None,
        *,
        max_suggestions: int = MAX_SUGGESTIONS,
    ) -> None:
        self._catalog = catalog if catalog is not None else InMemoryRuleCatalog()
        self._custom_fields = (
            custom_fields
            if custom_fields is not None
            else StaticCustomFieldCatalog()
        )
        self._max_suggestions = max_suggestions

    @property
    def catalog(self) -> RuleCatalog:
        return self._catalog

    def validate(self, data: ContentSubmission) -> ValidationResult:
        """Score one submission.

        Issue order: basic, technical, guidelines, quality,
        challenge-specific. Raises ValueError only for malformed
        resolution strings.
        """
        config = (
            self._catalog.get(data.challenge_id)
            if data.challenge_id
            else None
        )

        basic = check_basic_content(data)
        technical = check_technical_specs(data)
        guidelines = check_guidelines(data)
        quality = assess_quality(data)
        challenge = check_challenge_specific(data, config)

        score = compute_score([
            (basic, BASIC_WEIGHTS),
            (technical, TECHNICAL_WEIGHTS),
            (guidelines, GUIDELINE_WEIGHTS),
            (quality, QUALITY_WEIGHTS),
            (challenge, CHALLENGE_WEIGHTS),
        ])
        issues = [*basic, *technical, *guidelines, *quality, *challenge]

        result = ValidationResult(
            is_valid=not any(i.kind == IssueKind.ERROR for i in issues),
            score=score,
            issues=issues,
            suggestions=generate_suggestions(
                issues, data, limit=self._max_suggestions
            ),
            readiness_level=readiness_level(score, issues),
            challenge_specific_score=compute_challenge_score(
                challenge, configured=config is not None
            ),
            custom_field_validation=validate_custom_fields(
                data, self._custom_fields.rules_for(data.challenge_id)
            ),
            meets_quality_threshold=(
                score >= config.quality_thresholds.minimum_score
                if config is not None
                else None
            ),
        )

        logger.debug(
            "event=validated challenge_id=%s score=%d readiness=%s issues=%d",
            data.challenge_id or "-",
            result.score,
            result.readiness_level,
            len(issues),
        )
        return result
