"""Validation module for source documents and transformed target models."""

from sysml_to_autosar.validation.errors import (
    ErrorCodes,
    ValidationIssue,
    ValidationLocation,
    ValidationResult,
    ValidationSeverity,
)
from sysml_to_autosar.validation.target_validators import TargetCompletenessValidator
from sysml_to_autosar.validation.validator import (
    SourceValidator,
    ValidationError,
)

__all__ = [
    "ErrorCodes",
    "SourceValidator",
    "TargetCompletenessValidator",
    "ValidationError",
    "ValidationIssue",
    "ValidationLocation",
    "ValidationResult",
    "ValidationSeverity",
]
