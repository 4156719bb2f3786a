"""CLI entry point: ``pulsar-validator validate``, ``challenges``, ``serve``."""

from __future__ import annotations

from pulsar_validator.logging_config import setup_logging

setup_logging("WARNING")

import argparse  # noqa: E402
import json  # noqa: E402
import logging  # noqa: E402
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

from pydantic import ValidationError  # noqa: E402

from pulsar_validator import __version__  # noqa: E402
from pulsar_validator.validation.catalog import (  # noqa: E402
    InMemoryRuleCatalog,
    StaticCustomFieldCatalog,
    load_catalog,
    load_custom_field_catalog,
)
from pulsar_validator.validation.schemas import ContentSubmission  # noqa: E402
from pulsar_validator.validation.validator import (  # noqa: E402
    SubmissionValidator,
)

logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_FAILURE = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"pulsar-validator {__version__}")
        return EXIT_VALID

    if args.command == "validate":
        return _run_validate(args)
    if args.command == "challenges":
        return _run_challenges(args)
    if args.command == "serve":
        return _run_serve(args)

    parser.print_help()
    return EXIT_VALID


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pulsar-validator",
        description=(
            "Validate and score Pulsar challenge submissions."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    validate = sub.add_parser(
        "validate",
        help="Validate a submission JSON file",
    )
    validate.add_argument(
        "submission",
        type=str,
        help="Path to submission JSON ('-' for stdin)",
    )
    validate.add_argument(
        "--catalog",
        "-c",
        default=None,
        help="Challenge catalog YAML (default: built-in)",
    )
    validate.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output",
    )

    challenges = sub.add_parser(
        "challenges",
        help="List configured challenge ids",
    )
    challenges.add_argument(
        "--catalog",
        "-c",
        default=None,
        help="Challenge catalog YAML (default: built-in)",
    )

    serve = sub.add_parser(
        "serve",
        help="Run the HTTP API",
    )
    serve.add_argument(
        "--host",
        default="127.0.0.1",
        help="Bind address (default: 127.0.0.1)",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port (default: 8000)",
    )

    return parser


def _build_validator(catalog_path: str | None) -> SubmissionValidator:
    if catalog_path is None:
        return SubmissionValidator(
            InMemoryRuleCatalog(), StaticCustomFieldCatalog()
        )
    path = Path(catalog_path)
    return SubmissionValidator(
        load_catalog(path), load_custom_field_catalog(path)
    )


def _read_submission(source: str) -> ContentSubmission:
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(
        encoding="utf-8"
    )
    return ContentSubmission.model_validate_json(raw)


def _run_validate(args: argparse.Namespace) -> int:
    try:
        validator = _build_validator(args.catalog)
        submission = _read_submission(args.submission)
        result = validator.validate(submission)
    except (OSError, ValueError, ValidationError) as exc:
        logger.debug("validate failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    print(
        json.dumps(
            result.to_payload(), indent=2 if args.pretty else None
        )
    )
    return EXIT_VALID if result.is_valid else EXIT_INVALID


def _run_challenges(args: argparse.Namespace) -> int:
    try:
        catalog = (
            load_catalog(Path(args.catalog))
            if args.catalog
            else InMemoryRuleCatalog()
        )
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    for challenge_id in catalog.challenge_ids():
        config = catalog.get(challenge_id)
        if config is None:
            continue
        print(
            f"{challenge_id}\t"
            f"rules={len(config.validation_rules)}\t"
            f"requirements={len(config.content_requirements)}\t"
            f"min_score={config.quality_thresholds.minimum_score}"
        )
    return EXIT_VALID


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "pulsar_validator.main:app",
        host=args.host,
        port=args.port,
    )
    return EXIT_VALID


if __name__ == "__main__":
    sys.exit(main())
