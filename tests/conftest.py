"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest
import yaml
from sysml_to_autosar.models import SourceDocument
from sysml_to_autosar.source import SourceModel, build_source_model
from sysml_to_autosar.transform import SysmlToAutosarTransformer, TransformResult

from tests.fixtures.sample_yamls import FULL_YAML, MINIMAL_YAML


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def full_data() -> dict[str, Any]:
    """Return a private copy of the full sample document."""
    return copy.deepcopy(FULL_YAML)


@pytest.fixture
def minimal_data() -> dict[str, Any]:
    """Return a private copy of the minimal sample document."""
    return copy.deepcopy(MINIMAL_YAML)


@pytest.fixture
def full_doc(full_data: dict[str, Any]) -> SourceDocument:
    """Validated full sample document."""
    return SourceDocument.model_validate(full_data)


@pytest.fixture
def full_source(full_doc: SourceDocument) -> SourceModel:
    """Source graph of the full sample document."""
    return build_source_model(full_doc)


@pytest.fixture
def full_result(full_source: SourceModel) -> TransformResult:
    """Transformation result of the full sample document."""
    return SysmlToAutosarTransformer().transform(full_source)


@pytest.fixture
def full_yaml_file(tmp_path: Path, full_data: dict[str, Any]) -> Path:
    """Write the full sample document to a temporary YAML file."""
    path = tmp_path / "powertrain.yaml"
    path.write_text(yaml.safe_dump(full_data, sort_keys=False))
    return path


@pytest.fixture
def minimal_yaml_file(tmp_path: Path, minimal_data: dict[str, Any]) -> Path:
    """Write the minimal sample document to a temporary YAML file."""
    path = tmp_path / "minimal.yaml"
    path.write_text(yaml.safe_dump(minimal_data, sort_keys=False))
    return path
