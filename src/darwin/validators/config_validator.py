"""Structural validation of configuration documents before import.

Two passes:
1. JSON Schema (darwin/schemas/configuration.schema.json) - errors fail the document
2. Reference checks - dangling references become warnings, since the engine
   treats them as non-matching rather than failing
"""

from __future__ import annotations

from typing import Any

from darwin.validators.schema_validator import SchemaValidator, ValidationError, ValidationResult

CONFIGURATION_SCHEMA = "configuration"


def _duplicates(values: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for v in values:
        if v in seen and v not in dupes:
            dupes.append(v)
        seen.add(v)
    return dupes


def _reference_warnings(data: dict[str, Any]) -> list[ValidationError]:
    warnings: list[ValidationError] = []
    dimension_ids = [d["id"] for d in data.get("dimensions", [])]
    known_dimensions = set(dimension_ids)

    for dim_id in _duplicates(dimension_ids):
        warnings.append(
            ValidationError(
                code="DUPLICATE_DIMENSION_ID",
                message=f"Dimension id '{dim_id}' is defined more than once",
                path="$.dimensions",
            )
        )

    for i, q in enumerate(data.get("questions", [])):
        if q["dimension_id"] not in known_dimensions:
            warnings.append(
                ValidationError(
                    code="UNKNOWN_DIMENSION_REF",
                    message=f"Question '{q['id']}' references unknown dimension "
                    f"'{q['dimension_id']}'",
                    path=f"$.questions[{i}].dimension_id",
                )
            )

    red_flags = data.get("red_flags") or []
    for code in _duplicates([rf["code"] for rf in red_flags]):
        warnings.append(
            ValidationError(
                code="DUPLICATE_RED_FLAG_CODE",
                message=f"Red flag code '{code}' is defined more than once",
                path="$.red_flags",
            )
        )

    for i, rf in enumerate(red_flags):
        for j, trigger in enumerate(rf.get("triggers", [])):
            dim_id = trigger.get("dimension_id")
            if dim_id and dim_id not in known_dimensions:
                warnings.append(
                    ValidationError(
                        code="UNKNOWN_DIMENSION_REF",
                        message=f"Red flag '{rf['code']}' trigger references unknown "
                        f"dimension '{dim_id}'",
                        path=f"$.red_flags[{i}].triggers[{j}].dimension_id",
                    )
                )

    return warnings


def validate_configuration(data: Any) -> ValidationResult:
    """Validate a parsed configuration document. Never raises.

    Args:
        data: Parsed configuration JSON.

    Returns:
        ValidationResult: schema violations as errors, dangling references
        and duplicate ids as warnings.
    """
    schema_result = SchemaValidator().validate(CONFIGURATION_SCHEMA, data)
    if not schema_result.passed:
        return schema_result
    return ValidationResult.success(warnings=_reference_warnings(data))
