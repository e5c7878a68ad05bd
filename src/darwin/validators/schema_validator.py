"""JSON Schema validator with fail-closed behavior.

Loads the JSON schemas shipped in darwin/schemas and validates parsed JSON
against them. Any error or uncertainty results in rejection.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import Draft202012Validator

DEFAULT_SCHEMA_DIR = Path(__file__).parent.parent / "schemas"


@dataclass(frozen=True)
class ValidationError:
    """A single validation error."""

    code: str
    message: str
    path: str


@dataclass
class ValidationResult:
    """Result of validation - fail-closed by default."""

    passed: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @classmethod
    def fail(
        cls,
        errors: list[ValidationError],
        warnings: list[ValidationError] | None = None,
    ) -> ValidationResult:
        """Create a failed result."""
        return cls(passed=False, errors=errors, warnings=warnings or [])

    @classmethod
    def success(cls, warnings: list[ValidationError] | None = None) -> ValidationResult:
        """Create a successful result."""
        return cls(passed=True, warnings=warnings or [])

    @classmethod
    def fail_closed(cls, reason: str) -> ValidationResult:
        """Fail closed with a single error - used when validation cannot proceed."""
        return cls(
            passed=False,
            errors=[ValidationError(code="FAIL_CLOSED", message=reason, path="$")],
        )

    def to_dict(self) -> dict[str, Any]:
        """Deterministic dict form for JSON output."""
        return {
            "errors": [{"code": e.code, "message": e.message, "path": e.path} for e in self.errors],
            "pass": self.passed,
            "warnings": [
                {"code": w.code, "message": w.message, "path": w.path} for w in self.warnings
            ],
        }


def _format_path(parts: Any) -> str:
    return "$" + "".join(f".{p}" if isinstance(p, str) else f"[{p}]" for p in parts)


class SchemaValidator:
    """Validates JSON data against named JSON schemas with fail-closed behavior."""

    def __init__(self, schema_dir: Path | str | None = None) -> None:
        """Initialize validator with schema directory.

        Args:
            schema_dir: Directory containing *.schema.json files.
                        Defaults to the package's schemas/ directory.
        """
        self._schema_dir = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        self._validators: dict[str, Draft202012Validator] = {}

    def _get_validator(self, schema_name: str) -> Draft202012Validator | None:
        """Get a validator for a schema. Returns None on error (fail closed)."""
        if schema_name in self._validators:
            return self._validators[schema_name]

        schema_file = self._schema_dir / f"{schema_name}.schema.json"
        try:
            with schema_file.open("r", encoding="utf-8") as f:
                schema: dict[str, Any] = json.load(f)
            Draft202012Validator.check_schema(schema)
        except (OSError, json.JSONDecodeError, jsonschema.SchemaError):
            return None

        validator = Draft202012Validator(schema)
        self._validators[schema_name] = validator
        return validator

    def validate(self, schema_name: str, data: Any) -> ValidationResult:
        """Validate data against a named schema.

        Args:
            schema_name: Name of schema (without .schema.json extension)
            data: Parsed JSON data to validate

        Returns:
            ValidationResult with pass/fail and any errors.
        """
        if data is None:
            return ValidationResult.fail_closed("Data is None - cannot validate")

        validator = self._get_validator(schema_name)
        if validator is None:
            return ValidationResult.fail_closed(
                f"Cannot load or parse schema '{schema_name}' - validation fails closed"
            )

        errors = [
            ValidationError(
                code=str(error.validator),
                message=error.message,
                path=_format_path(error.absolute_path),
            )
            for error in sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.path)))
        ]
        if errors:
            return ValidationResult.fail(errors)
        return ValidationResult.success()
