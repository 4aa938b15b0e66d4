"""Fixtures for transformation tests."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest
from sysml_to_autosar.models import SourceDocument
from sysml_to_autosar.source import SourceModel, build_source_model
from sysml_to_autosar.transform import DiagnosticLog

from tests.fixtures.sample_yamls import YAML_WITH_MIXED_INTERFACE, YAML_WITH_SUFFIX_CLASH


@pytest.fixture
def diagnostics() -> DiagnosticLog:
    """Empty diagnostics sink."""
    return DiagnosticLog()


@pytest.fixture
def build_source() -> Callable[[dict[str, Any]], SourceModel]:
    """Return a function building a source graph from document data."""

    def _build(data: dict[str, Any]) -> SourceModel:
        return build_source_model(SourceDocument.model_validate(copy.deepcopy(data)))

    return _build


@pytest.fixture
def suffix_source(build_source: Callable[[dict[str, Any]], SourceModel]) -> SourceModel:
    """Source graph with implementation names matching several operations."""
    return build_source(YAML_WITH_SUFFIX_CLASH)


@pytest.fixture
def mixed_source(build_source: Callable[[dict[str, Any]], SourceModel]) -> SourceModel:
    """Source graph with an interface mixing both communication styles."""
    return build_source(YAML_WITH_MIXED_INTERFACE)
