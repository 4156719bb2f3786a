"""Content submission validation and scoring."""

from pulsar_validator.validation.schemas import (
    ContentSubmission,
    ValidationIssue,
    ValidationResult,
)
from pulsar_validator.validation.validator import SubmissionValidator

__all__ = [
    "ContentSubmission",
    "SubmissionValidator",
    "ValidationIssue",
    "ValidationResult",
]
