"""Validation error types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ValidationLocation:
    """Location in the source document (or target model) where an issue was found."""

    path: str
    """Dotted path to the issue (e.g., 'Powertrain.EngineCtrl.pSpeed')."""

    line: int | None = None
    """Line number in the source file (if available)."""

    column: int | None = None
    """Column number in the source file (if available)."""

    def __str__(self) -> str:
        """Format location as string."""
        if self.line is not None:
            if self.column is not None:
                return f"{self.path} (line {self.line}, col {self.column})"
            return f"{self.path} (line {self.line})"
        return self.path


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation issue."""

    code: str
    """Unique error code (e.g., 'E001', 'W001')."""

    message: str
    """Human-readable error message."""

    severity: ValidationSeverity
    """Severity level."""

    location: ValidationLocation | None = None
    """Location of the offending element."""

    suggestion: str | None = None
    """Suggested fix."""

    context: dict[str, Any] = field(default_factory=dict)
    """Additional context for debugging."""

    def __str__(self) -> str:
        """Format issue as string."""
        parts = [f"[{self.code}]", self.severity.value.upper(), self.message]
        if self.location:
            parts.append(f"at {self.location}")
        if self.suggestion:
            parts.append(f"(hint: {self.suggestion})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validation containing all issues."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def is_valid(self) -> bool:
        """Check if there are no errors (warnings are OK)."""
        return len(self.errors) == 0

    def add(self, issue: ValidationIssue) -> None:
        """Add an issue to the result."""
        self.issues.append(issue)

    def add_error(
        self,
        code: str,
        message: str,
        path: str,
        suggestion: str | None = None,
        **context: Any,
    ) -> None:
        """Add an error issue."""
        self.add(
            ValidationIssue(
                code=code,
                message=message,
                severity=ValidationSeverity.ERROR,
                location=ValidationLocation(path=path),
                suggestion=suggestion,
                context=context,
            )
        )

    def add_warning(
        self,
        code: str,
        message: str,
        path: str,
        suggestion: str | None = None,
        **context: Any,
    ) -> None:
        """Add a warning issue."""
        self.add(
            ValidationIssue(
                code=code,
                message=message,
                severity=ValidationSeverity.WARNING,
                location=ValidationLocation(path=path),
                suggestion=suggestion,
                context=context,
            )
        )

    def merge(self, other: ValidationResult) -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)


class ErrorCodes:
    """Standard validation error codes."""

    # E0xx - Reference errors
    E001_UNDEFINED_TYPE = "E001"
    E002_UNDEFINED_EVENT = "E002"
    E003_UNDEFINED_INTERFACE = "E003"
    E004_UNDEFINED_COMPONENT = "E004"
    E005_UNDEFINED_INSTANCE = "E005"
    E006_UNDEFINED_PORT = "E006"

    # E1xx - Duplicate errors
    E101_DUPLICATE_NAME = "E101"

    # E2xx - Value errors
    E200_INVALID_PERIOD = "E200"

    # W0xx - Warnings
    W001_UNUSED_TYPE = "W001"
    W002_UNUSED_INSTANCE = "W002"
    W005_UNCLASSIFIABLE_PORT = "W005"
    W006_MIXED_INTERFACE = "W006"
    W007_MISSING_TAG = "W007"
    W008_UNKNOWN_EVENT_TAG = "W008"

    # T4xx - Target model completeness
    T401_INCOMPLETE_NODE = "T401"
    T402_PORT_WITHOUT_INTERFACE = "T402"
    T403_EVENT_WITHOUT_RUNNABLE = "T403"
    T404_CONNECTOR_INCOMPLETE = "T404"
    T405_DETACHED_REFERENCE = "T405"
