"""CLI exception handling."""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel

from sysml_to_autosar.models.loader import LoaderError
from sysml_to_autosar.source.builder import SourceModelError
from sysml_to_autosar.transform.registry import DuplicateCorrespondenceError
from sysml_to_autosar.transform.transformer import TransformFailedError
from sysml_to_autosar.validation.validator import ValidationError

T = TypeVar("T")

console = Console(stderr=True)


def handle_exceptions(
    verbose: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Handle exceptions in CLI commands with formatted output.

    Every handled exception ends the command with exit code 1.

    Args:
    ----
        verbose: Whether to show full tracebacks.

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except ValidationError as e:
                _handle_validation_error(e, verbose)
                raise typer.Exit(1) from None
            except PydanticValidationError as e:
                _handle_pydantic_error(e, verbose)
                raise typer.Exit(1) from None
            except LoaderError as e:
                _handle_loader_error(e, verbose)
                raise typer.Exit(1) from None
            except SourceModelError as e:
                _handle_source_model_error(e, verbose)
                raise typer.Exit(1) from None
            except TransformFailedError as e:
                _handle_transform_failed(e, verbose)
                raise typer.Exit(1) from None
            except DuplicateCorrespondenceError as e:
                _handle_generic_error(e, verbose)
                raise typer.Exit(1) from None
            except FileNotFoundError as e:
                _handle_file_error(e, verbose)
                raise typer.Exit(1) from None
            except PermissionError as e:
                _handle_permission_error(e, verbose)
                raise typer.Exit(1) from None
            except Exception as e:
                _handle_generic_error(e, verbose)
                raise typer.Exit(1) from None

        return wrapper

    return decorator


def _handle_validation_error(error: ValidationError, verbose: bool) -> None:
    """Handle semantic validation errors."""
    from sysml_to_autosar.cli.error_formatter import ErrorFormatter

    formatter = ErrorFormatter(console)
    formatter.format_validation_result(error.result)


def _handle_pydantic_error(error: PydanticValidationError, verbose: bool) -> None:
    """Handle Pydantic validation errors."""
    from sysml_to_autosar.cli.pydantic_errors import (
        format_pydantic_location,
        get_suggestion_for_error,
        translate_pydantic_error,
    )

    console.print("[red bold]Schema Validation Failed[/red bold]")
    console.print()

    for err in error.errors():
        location = format_pydantic_location(err["loc"])
        msg = translate_pydantic_error(err)
        suggestion = get_suggestion_for_error(err)

        console.print(f"[red]✗[/red] {location}")
        console.print(f"  {msg}")
        console.print(f"  [dim]({err['type']})[/dim]")

        if suggestion:
            console.print(f"  [green]💡 {suggestion}[/green]")

        console.print()

    if verbose:
        console.print("[dim]Full error:[/dim]")
        console.print(str(error))


def _handle_loader_error(error: LoaderError, verbose: bool) -> None:
    """Handle unreadable or malformed input files."""
    console.print(
        Panel(
            f"[red]{error}[/red]\n\n" "Check that the file is a YAML or JSON mapping.",
            title="Load Error",
            border_style="red",
        )
    )


def _handle_source_model_error(error: SourceModelError, verbose: bool) -> None:
    """Handle references that could not be resolved while building the source graph."""
    console.print(
        Panel(
            f"[red]{error}[/red]\n\n" "Run 'sysml-to-autosar validate' for a full report.",
            title="Unresolved Reference",
            border_style="red",
        )
    )


def _handle_transform_failed(error: TransformFailedError, verbose: bool) -> None:
    """Handle strict transformations that reported severe diagnostics."""
    from sysml_to_autosar.cli.error_formatter import DiagnosticTable

    console.print(
        Panel(
            f"[red]{error}[/red]\n\n" "Nothing was written. Rerun without --strict to keep "
            "the partial result.",
            title="Transformation Failed",
            border_style="red",
        )
    )
    DiagnosticTable(console, show_info=verbose).print_log(error.result.diagnostics)


def _handle_file_error(error: FileNotFoundError, verbose: bool) -> None:
    """Handle file not found errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]File not found: {filename}[/red]\n\n"
            "Please check that the file path is correct.",
            title="Error",
            border_style="red",
        )
    )


def _handle_permission_error(error: PermissionError, verbose: bool) -> None:
    """Handle permission errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]Permission denied: {filename}[/red]\n\n" "Check file permissions and try again.",
            title="Error",
            border_style="red",
        )
    )


def _handle_generic_error(error: Exception, verbose: bool) -> None:
    """Handle unexpected errors."""
    console.print(
        Panel(
            f"[red]An unexpected error occurred:[/red]\n{error}",
            title="Error",
            border_style="red",
        )
    )

    if verbose:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc())
    else:
        console.print("\n[dim]Use --verbose for full traceback[/dim]")
