"""Translate Pydantic errors to user-friendly messages."""

from __future__ import annotations

from pydantic_core import ErrorDetails

from sysml_to_autosar.models.root import SCHEMA_VERSION

# Translation map for Pydantic error types
ERROR_TRANSLATIONS: dict[str, str] = {
    "missing": "This field is required but was not provided",
    "extra_forbidden": "This field is not allowed in this context",
    "string_type": "Must be a string",
    "int_type": "Must be an integer",
    "bool_type": "Must be true or false",
    "list_type": "Must be a list",
    "dict_type": "Must be an object/dictionary",
    "literal_error": "Must be one of the allowed values",
    "value_error": "Invalid value",
    "string_pattern_mismatch": "Does not match the required pattern",
    "string_too_short": "String is too short",
    "too_short": "List is too short",
}

# Names must be usable as AUTOSAR short names
IDENTIFIER_PATTERN_HINT = (
    "Names start with a letter or underscore and contain only letters, digits and underscores"
)

# Common misspellings of document keys
FIELD_NAME_TYPOS: dict[str, str] = {
    "provided": "provides",
    "required": "requires",
    "stereotype": "stereotypes",
    "tag": "tags",
    "literal": "literals",
    "item": "items",
    "operation": "operations",
    "attribute": "attributes",
    "port": "ports",
    "is_static": "static",
}


def translate_pydantic_error(error: ErrorDetails) -> str:
    """Translate a Pydantic error to a user-friendly message.

    Args:
    ----
        error: The Pydantic error details.

    Returns:
    -------
        User-friendly error message.

    """
    error_type = error["type"]
    msg = error["msg"]
    ctx = error.get("ctx") or {}

    base_msg = ERROR_TRANSLATIONS.get(error_type, msg)

    if error_type == "literal_error":
        expected = ctx.get("expected", "unknown")
        base_msg = f"Must be one of: {expected}"

    elif error_type == "string_pattern_mismatch":
        pattern = ctx.get("pattern", "")
        base_msg = f"Does not match pattern: {pattern}"

    elif error_type == "string_too_short":
        min_length = ctx.get("min_length", 0)
        base_msg = f"Must be at least {min_length} characters"

    elif error_type == "too_short":
        min_length = ctx.get("min_length", 0)
        base_msg = f"Must contain at least {min_length} item(s)"

    elif error_type == "value_error":
        # Model validators raise ValueError with a complete sentence
        base_msg = msg.removeprefix("Value error, ")

    return base_msg


def format_pydantic_location(loc: tuple[str | int, ...]) -> str:
    """Format Pydantic location tuple to readable path.

    Args:
    ----
        loc: Location tuple from Pydantic error.

    Returns:
    -------
        Formatted path string, e.g. ``packages[0].components[1].name``.

    """
    parts: list[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            if parts:
                parts.append(".")
            parts.append(str(part))

    return "".join(parts)


def get_suggestion_for_error(error: ErrorDetails) -> str | None:
    """Get a suggestion for how to fix the error.

    Suggestions look at the failing field as well as the error type, so a
    misspelled port key or a missing package list gets a concrete hint.

    Args:
    ----
        error: The Pydantic error details.

    Returns:
    -------
        Suggestion string or None.

    """
    error_type = error["type"]
    ctx = error.get("ctx") or {}
    field = error["loc"][-1] if error["loc"] else None

    if error_type == "extra_forbidden" and field in FIELD_NAME_TYPOS:
        return f"Did you mean '{FIELD_NAME_TYPOS[field]}'?"
    if error_type == "literal_error" and field == "schema":
        return f"Start the document with 'schema: {SCHEMA_VERSION}'"
    if error_type == "too_short" and field == "packages":
        return "Declare at least one package under 'packages'"

    suggestions: dict[str, str] = {
        "missing": "Add the required field to your YAML",
        "extra_forbidden": "Remove this field or check for typos",
        "literal_error": (
            f"Use one of the allowed values: {ctx.get('expected', 'check documentation')}"
        ),
        "string_pattern_mismatch": IDENTIFIER_PATTERN_HINT,
        "string_too_short": IDENTIFIER_PATTERN_HINT,
    }

    return suggestions.get(error_type)
