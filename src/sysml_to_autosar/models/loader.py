"""YAML/JSON file loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sysml_to_autosar.models.root import SourceDocument


class LoaderError(Exception):
    """Error during YAML/JSON file loading."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize LoaderError.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path to the file that caused the error.

        """
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON file and return the raw dictionary.

    Args:
    ----
        path: Path to the YAML or JSON file.

    Returns:
    -------
        Parsed dictionary from the file.

    Raises:
    ------
        LoaderError: If the file cannot be loaded or parsed.

    """
    path = Path(path)
    if not path.exists():
        raise LoaderError(f"File not found: {path}", path)

    if not path.is_file():
        raise LoaderError(f"Not a file: {path}", path)

    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise LoaderError(
            f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json",
            path,
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoaderError(f"YAML parsing error: {e}", path) from e
    except OSError as e:
        raise LoaderError(f"File read error: {e}", path) from e

    if data is None:
        raise LoaderError("File is empty", path)

    if not isinstance(data, dict):
        raise LoaderError(
            f"Expected dictionary at root level, got {type(data).__name__}",
            path,
        )

    return data


def load_source_document(path: Path) -> SourceDocument:
    """Load and validate a source document from a YAML/JSON file.

    Args:
    ----
        path: Path to the source document.

    Returns:
    -------
        Validated SourceDocument model instance.

    Raises:
    ------
        LoaderError: If the file cannot be loaded.
        ValidationError: If the file content is invalid.

    """
    data = load_yaml_file(path)
    return SourceDocument.model_validate(data)


def validate_source_document(path: Path) -> list[str]:
    """Validate a source document file and return a list of errors.

    This is a non-throwing version of load_source_document,
    useful for validation CLI commands.

    Args:
    ----
        path: Path to the source document.

    Returns:
    -------
        List of error messages (empty if valid).

    """
    errors: list[str] = []

    try:
        data = load_yaml_file(path)
    except LoaderError as e:
        return [str(e)]

    try:
        SourceDocument.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            msg = error["msg"]
            errors.append(f"{loc}: {msg}")

    return errors
