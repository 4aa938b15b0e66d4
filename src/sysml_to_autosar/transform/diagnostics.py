"""Diagnostics sink for the transformation.

Rules never raise to report a problem; they record a diagnostic and return.
Every record is kept on the log and also forwarded to the standard logging
module so host applications can route it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class DiagnosticSeverity(Enum):
    """Severity level of a transformation diagnostic."""

    INFO = "info"
    WARNING = "warning"
    SEVERE = "severe"


_LOG_LEVELS = {
    DiagnosticSeverity.INFO: logging.INFO,
    DiagnosticSeverity.WARNING: logging.WARNING,
    DiagnosticSeverity.SEVERE: logging.ERROR,
}


def element_label(element: object) -> str | None:
    """Readable name of a source or target element."""
    if element is None:
        return None
    name = getattr(element, "short_name", None) or getattr(element, "name", None)
    return str(name) if name else type(element).__name__


@dataclass(frozen=True)
class Diagnostic:
    """A single transformation diagnostic."""

    code: str
    """Diagnostic code (e.g., 'C001', 'M101')."""

    message: str
    """Human-readable message."""

    severity: DiagnosticSeverity
    """Severity level."""

    rule: str | None = None
    """Name of the rule or predicate that reported it."""

    element: object | None = field(default=None, compare=False, repr=False)
    """Source or target element the diagnostic is about."""

    @property
    def element_name(self) -> str | None:
        return element_label(self.element)

    def __str__(self) -> str:
        """Format diagnostic as string."""
        parts = [f"[{self.code}]", self.severity.value.upper()]
        if self.rule:
            parts.append(f"{self.rule}:")
        parts.append(self.message)
        return " ".join(parts)


class DiagnosticCodes:
    """Standard transformation diagnostic codes."""

    # C0xx - Classification
    C001_PARTIAL_SENDER_RECEIVER = "C001"
    C002_UNCLASSIFIABLE_PORT = "C002"
    C003_UNCLASSIFIED_INTERFACE = "C003"
    C004_UNSUPPORTED_PORT_INTERFACE = "C004"

    # M1xx - Missing correspondence
    M100_UNREGISTERED_ELEMENT = "M100"
    M101_MISSING_INTERFACE = "M101"
    M102_MISSING_DATA_ELEMENT = "M102"
    M103_MISSING_PORT = "M103"
    M104_MISSING_COMPONENT = "M104"
    M105_MISSING_OPERATION = "M105"
    M106_MISSING_PROVIDER = "M106"
    M107_MISSING_ARGUMENT = "M107"

    # D2xx - Missing optional data
    D200_MISSING_TYPE = "D200"
    D201_MISSING_PERIOD = "D201"
    D202_INVALID_PERIOD = "D202"
    D203_MISSING_TAG = "D203"
    D204_MISSING_RUNNABLE = "D204"
    D205_MISSING_UNIT = "D205"
    D206_AMBIGUOUS_MATCH = "D206"
    D207_MISSING_PER_INSTANCE_MEMORY = "D207"

    # I3xx - Trace
    I300_ELEMENT_CREATED = "I300"
    I301_ELEMENT_RENAMED = "I301"
    I302_ELEMENT_SKIPPED = "I302"

    # S9xx - Rule failure
    S900_RULE_FAILED = "S900"


@dataclass
class DiagnosticLog:
    """Ordered collection of diagnostics."""

    records: list[Diagnostic] = field(default_factory=list)

    @property
    def severe_records(self) -> list[Diagnostic]:
        """Get only severe diagnostics."""
        return [d for d in self.records if d.severity == DiagnosticSeverity.SEVERE]

    @property
    def warnings(self) -> list[Diagnostic]:
        """Get only warning diagnostics."""
        return [d for d in self.records if d.severity == DiagnosticSeverity.WARNING]

    @property
    def infos(self) -> list[Diagnostic]:
        """Get only info diagnostics."""
        return [d for d in self.records if d.severity == DiagnosticSeverity.INFO]

    @property
    def has_severe(self) -> bool:
        return any(d.severity == DiagnosticSeverity.SEVERE for d in self.records)

    def codes(self) -> list[str]:
        """Codes of all records, in order."""
        return [d.code for d in self.records]

    def add(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic and forward it to logging."""
        self.records.append(diagnostic)
        logger.log(_LOG_LEVELS[diagnostic.severity], "%s", diagnostic)

    def info(
        self,
        code: str,
        message: str,
        rule: str | None = None,
        element: object | None = None,
    ) -> None:
        """Record an info diagnostic."""
        self.add(Diagnostic(code, message, DiagnosticSeverity.INFO, rule, element))

    def warning(
        self,
        code: str,
        message: str,
        rule: str | None = None,
        element: object | None = None,
    ) -> None:
        """Record a warning diagnostic."""
        self.add(Diagnostic(code, message, DiagnosticSeverity.WARNING, rule, element))

    def severe(
        self,
        code: str,
        message: str,
        rule: str | None = None,
        element: object | None = None,
    ) -> None:
        """Record a severe diagnostic."""
        self.add(Diagnostic(code, message, DiagnosticSeverity.SEVERE, rule, element))

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
