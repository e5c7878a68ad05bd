"""Darwin CLI - deterministic command-line interface to the readiness engine.

Usage:
    darwin assess --config PATH [--answers PATH] [--context PATH] [--stage S]
    darwin simulate --config PATH [--preset ID] [--scores PATH] [--context PATH] [--stage S]
    darwin validate-config --input PATH

Output is JSON on stdout with sorted keys. Logs go to stderr
(level from DARWIN_LOG_LEVEL).

Exit codes:
    0: Success / validation passed
    1: Internal error (unexpected)
    2: Invalid input / validation failed
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from darwin.models.answers import Answer, AnswerSetError, load_answers
from darwin.models.config import ConfigurationError, ConfigurationSnapshot, load_configuration
from darwin.report.builder import build_report, build_report_from_result
from darwin.settings import get_default_stage, get_log_level
from darwin.simulator import apply_preset, find_preset, simulate
from darwin.validators.config_validator import validate_configuration

logger = logging.getLogger(__name__)


class CliInputError(Exception):
    """Raised for unreadable or invalid command-line input files."""

    def __init__(self, code: str, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.errors = errors or []


def _output_json(data: Any) -> None:
    """Output JSON to stdout with deterministic ordering."""
    print(json.dumps(data, sort_keys=True, indent=2))


def _make_error_result(code: str, message: str, details: list[str] | None = None) -> dict:
    return {
        "errors": [{"code": code, "message": message, "path": "$"}]
        + [{"code": code, "message": d, "path": "$"} for d in details or []],
        "pass": False,
        "warnings": [],
    }


def _load_json_file(path: str) -> Any:
    """Load JSON from a file. Raises CliInputError on any read/parse error."""
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError as e:
        raise CliInputError("INVALID_JSON", f"File not found: {path}") from e
    except OSError as e:
        raise CliInputError("INVALID_JSON", f"Cannot read input: {e}") from e

    if not content.strip():
        raise CliInputError("INVALID_JSON", f"Empty input: {path}")
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise CliInputError("INVALID_JSON", f"Invalid JSON in {path}: {e}") from e


def _load_config(path: str) -> ConfigurationSnapshot:
    try:
        return load_configuration(_load_json_file(path))
    except ConfigurationError as e:
        raise CliInputError("INVALID_CONFIG", e.message, e.errors) from e


def _is_number_map(data: Any) -> bool:
    return isinstance(data, dict) and all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in data.values()
    )


def _load_numeric_context(path: str | None) -> dict[str, float]:
    if path is None:
        return {}
    data = _load_json_file(path)
    if not _is_number_map(data):
        raise CliInputError("INVALID_CONTEXT", "Numeric context must map field names to numbers")
    return {k: float(v) for k, v in data.items()}


def cmd_assess(args: argparse.Namespace) -> int:
    """Score an assessment and print its full report."""
    config = _load_config(args.config)
    answers: list[Answer] = []
    if args.answers:
        try:
            answers = load_answers(_load_json_file(args.answers))
        except AnswerSetError as e:
            raise CliInputError("INVALID_ANSWERS", e.message, e.errors) from e
    context = _load_numeric_context(args.context)
    stage = args.stage or get_default_stage()

    report = build_report(config, answers, stage, context)
    _output_json(report.model_dump(mode="json"))
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    """Score a hypothetical profile given by preset and/or slider scores."""
    config = _load_config(args.config)
    context = _load_numeric_context(args.context)
    stage = args.stage or get_default_stage()
    sliders: dict[str, float] = {}

    if args.preset:
        preset = find_preset(config, args.preset)
        if preset is None:
            raise CliInputError("UNKNOWN_PRESET", f"Unknown simulator preset: '{args.preset}'")
        sliders, context = apply_preset(preset, context)

    if args.scores:
        raw = _load_json_file(args.scores)
        if not _is_number_map(raw):
            raise CliInputError(
                "INVALID_SCORES", "Slider scores must map dimension ids to numbers"
            )
        sliders.update({k: float(v) for k, v in raw.items()})

    result = simulate(config, sliders, stage, context)
    report = build_report_from_result(config, result, stage)
    _output_json(report.model_dump(mode="json"))
    return 0


def cmd_validate_config(args: argparse.Namespace) -> int:
    """Validate a configuration document.

    Exit codes:
        0: pass=True
        2: pass=False
    """
    data = _load_json_file(args.input)
    result = validate_configuration(data)
    _output_json(result.to_dict())
    return 0 if result.passed else 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="darwin",
        description="Darwin - startup readiness scoring engine CLI",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    assess_parser = subparsers.add_parser("assess", help="Score answers and print the report")
    assess_parser.add_argument("--config", required=True, metavar="PATH")
    assess_parser.add_argument(
        "--answers", metavar="PATH", help="JSON list of answers (empty when omitted)"
    )
    assess_parser.add_argument(
        "--context", metavar="PATH", help="JSON object of numeric business metrics"
    )
    assess_parser.add_argument(
        "--stage", help="Stage key (default: $DARWIN_DEFAULT_STAGE or 'seed')"
    )

    simulate_parser = subparsers.add_parser(
        "simulate", help="Score a hypothetical profile from slider scores"
    )
    simulate_parser.add_argument("--config", required=True, metavar="PATH")
    simulate_parser.add_argument("--preset", metavar="ID", help="Simulator preset id")
    simulate_parser.add_argument(
        "--scores", metavar="PATH", help="JSON object dimension_id -> slider score"
    )
    simulate_parser.add_argument("--context", metavar="PATH")
    simulate_parser.add_argument("--stage")

    validate_parser = subparsers.add_parser(
        "validate-config", help="Validate a configuration document"
    )
    validate_parser.add_argument("--input", required=True, metavar="PATH")

    return parser


COMMANDS = {
    "assess": cmd_assess,
    "simulate": cmd_simulate,
    "validate-config": cmd_validate_config,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return COMMANDS[args.command](args)
    except CliInputError as e:
        logger.warning("Rejected input: %s", e.message)
        _output_json(_make_error_result(e.code, e.message, e.errors))
        return 2
    except Exception as e:
        logger.exception("Unexpected error in '%s'", args.command)
        _output_json(_make_error_result("INTERNAL_ERROR", str(e)))
        return 1


if __name__ == "__main__":
    sys.exit(main())
