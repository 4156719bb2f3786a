"""Challenge rule catalog: protocols, in-memory store, YAML loader.

The validator depends on the ``RuleCatalog`` protocol only. The
in-memory implementation satisfies it structurally and can be
swapped for a persistence-backed lookup without touching checkers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

import yaml

from pulsar_validator.constants import (
    DEFAULT_MINIMUM_SCORE,
    CustomFieldType,
    RequirementType,
    RuleKind,
    RuleSeverity,
)
from pulsar_validator.validation.rules import (
    DEFAULT_CHALLENGE_CONFIGS,
    DEFAULT_CUSTOM_FIELD_RULES,
    ChallengeValidationConfig,
    ContentRequirement,
    CustomFieldRule,
    QualityThresholds,
    ValidationRule,
)

logger = logging.getLogger(__name__)


class RuleCatalog(Protocol):
    def get(self, challenge_id: str) -> ChallengeValidationConfig | None: ...
    def challenge_ids(self) -> list[str]: ...


class CustomFieldCatalog(Protocol):
    def rules_for(self, challenge_id: str) -> Mapping[str, CustomFieldRule]: ...


class InMemoryRuleCatalog:
    """Dict-backed RuleCatalog.

    Configs are immutable; ``upsert`` swaps whole entries under a
    lock, so readers always see a complete config.
    """

    def __init__(
        self,
        configs: Mapping[str, ChallengeValidationConfig] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._store: dict[str, ChallengeValidationConfig] = dict(
            DEFAULT_CHALLENGE_CONFIGS if configs is None else configs
        )

    def get(self, challenge_id: str) -> ChallengeValidationConfig | None:
        return self._store.get(challenge_id)

    def challenge_ids(self) -> list[str]:
        return sorted(self._store)

    def upsert(
        self, config: ChallengeValidationConfig
    ) -> ChallengeValidationConfig:
        with self._lock:
            self._store[config.challenge_id] = config
        logger.info(
            "event=catalog_upsert challenge_id=%s version=%d",
            config.challenge_id,
            config.version,
        )
        return config


class StaticCustomFieldCatalog:
    """Serves the same custom-field table for every challenge."""

    def __init__(
        self, rules: Mapping[str, CustomFieldRule] | None = None
    ) -> None:
        self._rules = dict(
            DEFAULT_CUSTOM_FIELD_RULES if rules is None else rules
        )

    def rules_for(self, challenge_id: str) -> Mapping[str, CustomFieldRule]:
        return self._rules


# ── Parsing ──────────────────────────────────────────────


def _enum_value[E: (RuleKind, RuleSeverity, RequirementType)](
    enum_cls: type[E], raw: Any, what: str, challenge_id: str
) -> E:
    try:
        return enum_cls(str(raw))
    except ValueError:
        allowed = sorted(m.value for m in enum_cls)
        msg = (
            f"Invalid {what} {raw!r} in challenge "
            f"'{challenge_id}'. Must be one of: {allowed}"
        )
        raise ValueError(msg) from None


def parse_rule(raw: Mapping[str, Any], challenge_id: str) -> ValidationRule:
    field_name = str(raw.get("field", "")).strip()
    if not field_name:
        msg = f"Validation rule without a field in challenge '{challenge_id}'"
        raise ValueError(msg)
    value = raw.get("value")
    if isinstance(value, Mapping) and "requiredTags" in value:
        if not isinstance(value["requiredTags"], list):
            msg = f"requiredTags must be a list in challenge '{challenge_id}'"
            raise ValueError(msg)
    message = raw.get("message")
    return ValidationRule(
        field=field_name,
        kind=_enum_value(RuleKind, raw.get("type"), "rule type", challenge_id),
        severity=_enum_value(
            RuleSeverity,
            raw.get("severity", RuleSeverity.ERROR),
            "rule severity",
            challenge_id,
        ),
        value=value,
        message=str(message) if message is not None else None,
    )


def parse_requirement(
    raw: Mapping[str, Any], challenge_id: str
) -> ContentRequirement:
    try:
        max_size = int(raw["maxSize"])
    except (KeyError, TypeError, ValueError):
        msg = (
            f"Content requirement in challenge '{challenge_id}' "
            "needs an integer maxSize"
        )
        raise ValueError(msg) from None
    max_duration = raw.get("maxDuration")
    min_resolution = raw.get("minResolution")
    return ContentRequirement(
        applies_to=_enum_value(
            RequirementType,
            raw.get("type", RequirementType.ANY),
            "requirement type",
            challenge_id,
        ),
        allowed_formats=tuple(
            str(f).lower() for f in raw.get("formats", ())
        ),
        max_size_bytes=max_size,
        min_resolution=(
            str(min_resolution) if min_resolution else None
        ),
        max_duration_seconds=(
            float(max_duration) if max_duration else None
        ),
        required_fields=tuple(
            str(f) for f in raw.get("requiredFields", ())
        ),
    )


def parse_thresholds(raw: Mapping[str, Any]) -> QualityThresholds:
    return QualityThresholds(
        minimum_score=int(
            raw.get("minimumScore", DEFAULT_MINIMUM_SCORE)
        ),
        require_preview=bool(raw.get("requirePreview", False)),
        auto_reject=bool(raw.get("autoReject", False)),
    )


def parse_challenge_config(
    raw: Mapping[str, Any],
) -> ChallengeValidationConfig:
    """Build a config from its camelCase mapping form.

    Raises ValueError if the challenge id is missing or any rule,
    severity or requirement type is unknown.
    """
    challenge_id = str(raw.get("challengeId", "")).strip()
    if not challenge_id:
        msg = "Challenge ID is required"
        raise ValueError(msg)

    return ChallengeValidationConfig(
        challenge_id=challenge_id,
        validation_rules=tuple(
            parse_rule(r, challenge_id)
            for r in raw.get("validationRules", ())
        ),
        content_requirements=tuple(
            parse_requirement(r, challenge_id)
            for r in raw.get("contentRequirements", ())
        ),
        quality_thresholds=parse_thresholds(
            raw.get("qualityThresholds") or {}
        ),
        version=int(raw.get("version", 1)),
        updated_by=str(raw.get("updatedBy", "system")),
    )


def merge_config(
    existing: ChallengeValidationConfig | None,
    update: Mapping[str, Any],
    *,
    updated_by: str,
) -> ChallengeValidationConfig:
    """Overlay a partial update onto an existing config.

    Top-level keys present in ``update`` replace the existing ones.
    The version is bumped (1 for a new challenge) and the
    modification stamp refreshed.
    """
    base: dict[str, Any] = existing.to_payload() if existing else {}
    merged = {**base, **update}
    config = parse_challenge_config(merged)
    return ChallengeValidationConfig(
        challenge_id=config.challenge_id,
        validation_rules=config.validation_rules,
        content_requirements=config.content_requirements,
        quality_thresholds=config.quality_thresholds,
        version=existing.version + 1 if existing else 1,
        updated_by=updated_by,
        last_modified=datetime.now(UTC),
    )


def parse_custom_field_rules(
    raw: Mapping[str, Any],
) -> dict[str, CustomFieldRule]:
    rules: dict[str, CustomFieldRule] = {}
    for name, spec in raw.items():
        try:
            field_type = CustomFieldType(str(spec.get("type", "text")))
        except ValueError:
            msg = f"Invalid custom field type for '{name}'"
            raise ValueError(msg) from None
        max_length = spec.get("maxLength")
        rules[str(name)] = CustomFieldRule(
            required=bool(spec.get("required", False)),
            field_type=field_type,
            max_length=int(max_length) if max_length else None,
        )
    return rules


def _read_catalog_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        msg = f"Catalog not found: {path}"
        raise FileNotFoundError(msg)

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Catalog {path} is not valid YAML: {exc}"
        raise ValueError(msg) from exc
    if not isinstance(raw, dict):
        msg = f"Catalog {path} must be a mapping with a 'challenges' list"
        raise ValueError(msg)
    return raw  # pyright: ignore[reportUnknownVariableType]


def load_custom_field_catalog(path: Path) -> StaticCustomFieldCatalog:
    """Load the ``customFields`` table from a catalog file.

    Falls back to the built-in table when the file declares none.
    """
    raw = _read_catalog_file(path)
    fields = raw.get("customFields")
    if not fields:
        return StaticCustomFieldCatalog()
    return StaticCustomFieldCatalog(parse_custom_field_rules(fields))


def load_catalog(path: Path) -> InMemoryRuleCatalog:
    """Load challenge configurations from a YAML file.

    Expected shape::

        challenges:
          - challengeId: "1"
            validationRules: [...]
            contentRequirements: [...]
            qualityThresholds: {minimumScore: 70}
        customFields:            # optional
          ridingExperience: {required: true, type: select}

    Raises ``FileNotFoundError`` if the file doesn't exist and
    ``ValueError`` if the content is malformed.
    """
    raw = _read_catalog_file(path)

    configs: dict[str, ChallengeValidationConfig] = {}
    for entry in raw.get("challenges") or []:  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(entry, dict):
            msg = f"Catalog {path} has a challenge entry that is not a mapping"
            raise ValueError(msg)
        config = parse_challenge_config(entry)  # pyright: ignore[reportUnknownArgumentType]
        if config.challenge_id in configs:
            logger.warning(
                "event=catalog_duplicate challenge_id=%s path=%s",
                config.challenge_id,
                path,
            )
        configs[config.challenge_id] = config

    logger.info(
        "event=catalog_loaded path=%s challenges=%d", path, len(configs)
    )
    return InMemoryRuleCatalog(configs)
