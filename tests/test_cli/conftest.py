"""Fixtures for CLI tests."""

from __future__ import annotations

import copy
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from tests.fixtures.sample_yamls import (
    YAML_INVALID_SCHEMA,
    YAML_WITH_MIXED_INTERFACE,
    YAML_WITH_UNDEFINED_REFERENCES,
)

YamlFileFactory = Callable[[str, dict[str, Any]], Path]


@pytest.fixture
def write_yaml(tmp_path: Path) -> YamlFileFactory:
    """Return a factory writing a document to ``tmp_path/<name>``."""

    def _write(name: str, data: dict[str, Any]) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(copy.deepcopy(data), sort_keys=False))
        return path

    return _write


@pytest.fixture
def mixed_yaml_file(write_yaml: YamlFileFactory) -> Path:
    """Document whose only interface mixes both communication styles."""
    return write_yaml("mixed.yaml", YAML_WITH_MIXED_INTERFACE)


@pytest.fixture
def broken_yaml_file(write_yaml: YamlFileFactory) -> Path:
    """Document with unresolved references."""
    return write_yaml("broken.yaml", YAML_WITH_UNDEFINED_REFERENCES)


@pytest.fixture
def invalid_schema_file(write_yaml: YamlFileFactory) -> Path:
    """Document with the wrong schema identifier."""
    return write_yaml("invalid.yaml", YAML_INVALID_SCHEMA)
