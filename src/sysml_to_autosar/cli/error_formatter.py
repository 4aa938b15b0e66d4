"""Validation issue and transformation diagnostic formatting with Rich."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from sysml_to_autosar.transform.diagnostics import DiagnosticSeverity

if TYPE_CHECKING:
    from sysml_to_autosar.transform.diagnostics import DiagnosticLog
    from sysml_to_autosar.validation.errors import ValidationIssue, ValidationResult

SEVERITY_STYLES = {
    "error": "red",
    "severe": "red",
    "warning": "yellow",
    "info": "dim",
}


class ErrorFormatter:
    """Formats validation issues for terminal display."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def format_validation_result(
        self,
        result: ValidationResult,
        source_path: Path | None = None,
        title: str | None = None,
    ) -> None:
        """Format and print validation result.

        Args:
        ----
            result: The validation result to format.
            source_path: Path to source file (for display).
            title: Panel title; defaults to a failed/warnings title.

        """
        if result.is_valid and not result.warnings:
            self._print_success("Validation passed")
            return

        error_count = len(result.errors)
        warning_count = len(result.warnings)

        summary = self._build_summary(error_count, warning_count, source_path, title)
        self.console.print(summary)
        self.console.print()

        # Print errors first
        for issue in result.errors:
            self._print_issue(issue, "red")

        # Then warnings
        for issue in result.warnings:
            self._print_issue(issue, "yellow")

        self.console.print()
        if error_count > 0:
            self.console.print(f"[red bold]✗ {error_count} error(s)[/red bold]", end="")
        if warning_count > 0:
            if error_count > 0:
                self.console.print(", ", end="")
            self.console.print(f"[yellow]{warning_count} warning(s)[/yellow]", end="")
        self.console.print()

    def _build_summary(
        self,
        errors: int,
        warnings: int,
        source_path: Path | None,
        title: str | None,
    ) -> Panel:
        """Build summary panel."""
        if title is None:
            title = "Validation Failed" if errors > 0 else "Validation Warnings"
        style = "red" if errors > 0 else "yellow"

        content = Text()
        if source_path:
            content.append(f"File: {source_path}\n", style="dim")

        if errors > 0:
            content.append(f"Errors: {errors}", style="red bold")
        if warnings > 0:
            if errors > 0:
                content.append("  ")
            content.append(f"Warnings: {warnings}", style="yellow")

        return Panel(content, title=title, border_style=style)

    def _print_issue(self, issue: ValidationIssue, color: str) -> None:
        severity = issue.severity.value.upper()
        self.console.print(
            f"[{color} bold]{severity}[/{color} bold] "
            f"[{color}][{issue.code}][/{color}] "
            f"{issue.message}"
        )

        if issue.location:
            self.console.print(f"  [dim]at {issue.location}[/dim]")

        if issue.suggestion:
            self.console.print(f"  [green]💡 {issue.suggestion}[/green]")

        self.console.print()

    def _print_success(self, message: str) -> None:
        self.console.print(f"[green]✓ {message}[/green]")


class ErrorTree:
    """Display issues as a tree grouped by package."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize error tree formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_result(self, result: ValidationResult) -> None:
        """Print validation result as tree."""
        tree = Tree("[bold]Validation Issues[/bold]")

        # Group by package, the first path segment
        by_package: dict[str, list[ValidationIssue]] = {}

        for issue in result.issues:
            package = issue.location.path.split(".")[0] if issue.location else "general"
            by_package.setdefault(package, []).append(issue)

        for package, issues in sorted(by_package.items()):
            package_node = tree.add(f"[cyan]{package}[/cyan] ({len(issues)} issues)")

            for issue in issues:
                color = SEVERITY_STYLES[issue.severity.value]
                package_node.add(f"[{color}]{issue.code}[/{color}] {issue.message}")

        self.console.print(tree)


class ErrorTable:
    """Display issues as a table."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize error table formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_result(self, result: ValidationResult) -> None:
        """Print validation result as table."""
        table = Table(title="Validation Issues")

        table.add_column("Code", style="cyan", width=6)
        table.add_column("Severity", width=8)
        table.add_column("Location", style="dim")
        table.add_column("Message")

        for issue in result.issues:
            severity_style = SEVERITY_STYLES[issue.severity.value]
            severity = f"[{severity_style}]{issue.severity.value.upper()}[/{severity_style}]"

            location = str(issue.location) if issue.location else "-"

            table.add_row(
                issue.code,
                severity,
                location,
                issue.message,
            )

        self.console.print(table)


class DiagnosticTable:
    """Display transformation diagnostics as a table.

    Info records are only shown when ``show_info`` is set.
    """

    def __init__(self, console: Console | None = None, show_info: bool = False) -> None:
        """Initialize diagnostic table formatter.

        Args:
        ----
            console: Rich Console for output.
            show_info: Include info-level trace records.

        """
        self.console = console or Console(stderr=True)
        self.show_info = show_info

    def print_log(self, diagnostics: DiagnosticLog) -> None:
        """Print the diagnostics of a transformation pass."""
        records = [
            d
            for d in diagnostics
            if self.show_info or d.severity is not DiagnosticSeverity.INFO
        ]
        if not records:
            return

        table = Table(title="Transformation Diagnostics")
        table.add_column("Code", style="cyan", width=6)
        table.add_column("Severity", width=8)
        table.add_column("Rule", style="dim")
        table.add_column("Element")
        table.add_column("Message")

        for record in records:
            style = SEVERITY_STYLES[record.severity.value]
            table.add_row(
                record.code,
                f"[{style}]{record.severity.value.upper()}[/{style}]",
                record.rule or "-",
                record.element_name or "-",
                record.message,
            )

        self.console.print(table)
