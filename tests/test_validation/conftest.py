"""Fixtures for validation tests."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest
from sysml_to_autosar.models import SourceDocument

from tests.fixtures.sample_yamls import (
    YAML_WITH_MIXED_INTERFACE,
    YAML_WITH_UNDEFINED_REFERENCES,
)

DocFactory = Callable[[dict[str, Any]], SourceDocument]


@pytest.fixture
def make_doc() -> DocFactory:
    """Return a function validating document data into a SourceDocument."""

    def _make(data: dict[str, Any]) -> SourceDocument:
        return SourceDocument.model_validate(copy.deepcopy(data))

    return _make


@pytest.fixture
def doc_with_undefined_references(make_doc: DocFactory) -> SourceDocument:
    """Document whose references point at nothing."""
    return make_doc(YAML_WITH_UNDEFINED_REFERENCES)


@pytest.fixture
def doc_with_mixed_interface(make_doc: DocFactory) -> SourceDocument:
    """Document with an interface mixing both communication styles."""
    return make_doc(YAML_WITH_MIXED_INTERFACE)


@pytest.fixture
def package_data(full_data: dict[str, Any]) -> dict[str, Any]:
    """The single package of the full sample, editable in place."""
    return full_data["packages"][0]
