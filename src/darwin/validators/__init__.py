"""Darwin validators - fail-closed structural checks for configuration import."""

from darwin.validators.config_validator import validate_configuration
from darwin.validators.schema_validator import (
    SchemaValidator,
    ValidationError,
    ValidationResult,
)

__all__ = [
    "SchemaValidator",
    "ValidationError",
    "ValidationResult",
    "validate_configuration",
]
