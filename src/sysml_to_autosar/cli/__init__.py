"""CLI module for sysml-to-autosar."""

from sysml_to_autosar.cli.error_formatter import (
    DiagnosticTable,
    ErrorFormatter,
    ErrorTable,
    ErrorTree,
)
from sysml_to_autosar.cli.exception_handler import handle_exceptions
from sysml_to_autosar.cli.pydantic_errors import (
    format_pydantic_location,
    get_suggestion_for_error,
    translate_pydantic_error,
)

__all__ = [
    "DiagnosticTable",
    "ErrorFormatter",
    "ErrorTable",
    "ErrorTree",
    "handle_exceptions",
    "format_pydantic_location",
    "get_suggestion_for_error",
    "translate_pydantic_error",
]
