"""Shared constants: single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so downstream code (JSON
payloads, YAML catalogs, log lines) works unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class ContentType(StrEnum):
    """Kinds of content a submission can carry."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"


class RequirementType(StrEnum):
    """Content types a challenge requirement can target."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"
    ANY = "any"


class IssueKind(StrEnum):
    """Issue type; drives the overall pass/fail decision."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCategory(StrEnum):
    """Which checker family an issue belongs to."""

    CONTENT = "content"
    TECHNICAL = "technical"
    GUIDELINES = "guidelines"
    QUALITY = "quality"
    CHALLENGE_SPECIFIC = "challenge-specific"


class Severity(StrEnum):
    """Issue severity; drives the score deduction."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RuleKind(StrEnum):
    """Challenge validation rule kinds."""

    REQUIRED = "required"
    FORMAT = "format"
    SIZE = "size"
    CUSTOM = "custom"


class RuleSeverity(StrEnum):
    """Severity vocabulary used by challenge rule declarations."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ReadinessLevel(StrEnum):
    """Publication readiness derived from score and issues."""

    NOT_READY = "not-ready"
    NEEDS_IMPROVEMENT = "needs-improvement"
    GOOD = "good"
    EXCELLENT = "excellent"


class CustomFieldType(StrEnum):
    """Input types for challenge-defined form fields."""

    TEXT = "text"
    SELECT = "select"
    BOOLEAN = "boolean"
    NUMBER = "number"


# ── Technical Limits ─────────────────────────────────────

BYTES_PER_MB = 1024 * 1024

MAX_FILE_SIZE_BYTES: dict[str, int] = {
    ContentType.IMAGE: 10 * BYTES_PER_MB,
    ContentType.VIDEO: 100 * BYTES_PER_MB,
    ContentType.AUDIO: 25 * BYTES_PER_MB,
    ContentType.TEXT: 1 * BYTES_PER_MB,
}

SUPPORTED_FORMATS: dict[str, tuple[str, ...]] = {
    ContentType.IMAGE: ("jpg", "jpeg", "png", "webp", "gif"),
    ContentType.VIDEO: ("mp4", "webm", "mov", "avi"),
    ContentType.AUDIO: ("mp3", "wav", "ogg", "m4a"),
    ContentType.TEXT: ("txt", "md", "json"),
}

TIMED_CONTENT_TYPES = frozenset({ContentType.VIDEO, ContentType.AUDIO})

MAX_RECOMMENDED_DURATION_SECONDS = 300

# ── Content Heuristics ───────────────────────────────────

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_DETAILED_LENGTH = 50
TITLE_MIN_WORDS = 2
ALL_CAPS_MIN_LENGTH = 5
DESCRIPTION_MIN_SENTENCES = 2
VIDEO_MIN_WIDTH = 720
VIDEO_MIN_HEIGHT = 480

# ── Guidelines ───────────────────────────────────────────

BLOCKED_KEYWORDS = ("spam", "explicit", "harmful", "offensive")
RIGHTS_KEYWORDS = ("copyright", "trademark")

# ── Scoring ──────────────────────────────────────────────

MAX_SCORE = 100
EXCELLENT_SCORE = 90
GOOD_SCORE = 75
DEFAULT_MINIMUM_SCORE = 70
MAX_SUGGESTIONS = 5

# ── Auth Exempt Paths ────────────────────────────────────

AUTH_EXEMPT_PATHS = frozenset({
    "/api/health",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
})

AUTH_EXEMPT_PREFIXES = ("/api/health",)

# ── Misc ─────────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 200
ID_HEX_LENGTH = 12
