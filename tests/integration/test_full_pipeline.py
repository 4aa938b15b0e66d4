"""Full pipeline integration tests for sysml-to-autosar.

Tests the complete conversion flow: YAML -> Pydantic -> source graph ->
target model -> ARXML.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from lxml import etree
from pydantic import ValidationError
from sysml_to_autosar.converters import ArxmlWriter, YamlWriter, convert_source_to_arxml
from sysml_to_autosar.converters.arxml_writer import AUTOSAR_NAMESPACE
from sysml_to_autosar.models import load_source_document
from sysml_to_autosar.source import build_source_model
from sysml_to_autosar.target import (
    ApplicationSwComponentType,
    AssemblySwConnector,
    RunnableEntity,
)
from sysml_to_autosar.transform import DiagnosticCodes, SysmlToAutosarTransformer
from sysml_to_autosar.validation import SourceValidator, TargetCompletenessValidator

from tests.fixtures.sample_yamls import YAML_INVALID_SCHEMA, YAML_WITH_SUFFIX_CLASH

NS = {"ar": AUTOSAR_NAMESPACE}


def _short_name_paths(root: etree._Element) -> set[str]:
    """Absolute paths of every element that carries a SHORT-NAME."""
    paths = set()
    for short_name in root.iter(f"{{{AUTOSAR_NAMESPACE}}}SHORT-NAME"):
        names = []
        node = short_name.getparent()
        while node is not None:
            name = node.find("ar:SHORT-NAME", NS)
            if name is not None:
                names.append(name.text)
            node = node.getparent()
        paths.add("/" + "/".join(reversed(names)))
    return paths


class TestFullPipeline:
    """Integration tests for the full conversion pipeline."""

    def test_minimal_pipeline(self, minimal_yaml_file: Path) -> None:
        """Should process the minimal document through every step."""
        # Step 1: Load and validate
        doc = load_source_document(minimal_yaml_file)
        assert SourceValidator(strict=True).validate(doc).issues == []

        # Step 2: Build the source graph and transform it
        result = SysmlToAutosarTransformer(strict=True).transform(build_source_model(doc))
        assert result.success

        # Step 3: Write ARXML
        root = etree.fromstring(ArxmlWriter().write_bytes(result.model))
        assert root.xpath("//ar:SHORT-NAME/text()", namespaces=NS) == ["Minimal"]

    def test_full_pipeline(self, full_yaml_file: Path) -> None:
        """Should produce a complete model from the full document."""
        doc = load_source_document(full_yaml_file)
        SourceValidator(strict=True).validate_and_raise(doc)

        source = build_source_model(doc)
        result = SysmlToAutosarTransformer(strict=True).transform(source)

        assert result.success
        assert result.model.count(ApplicationSwComponentType) == 2
        assert result.model.count(RunnableEntity) == 7
        assert result.model.count(AssemblySwConnector) == 1
        assert TargetCompletenessValidator().validate(result.model).issues == []

    def test_every_reference_resolves_in_arxml(self, full_yaml_file: Path, tmp_path: Path) -> None:
        """Should only reference paths that exist in the written document."""
        output = tmp_path / "powertrain.arxml"
        convert_source_to_arxml(full_yaml_file, output, strict=True)

        root = etree.parse(str(output)).getroot()
        paths = _short_name_paths(root)
        references = root.xpath("//*[@DEST]")

        assert references
        for reference in references:
            assert reference.text in paths, reference.text

    def test_output_is_deterministic(self, full_yaml_file: Path) -> None:
        """Should write identical bytes for identical input."""
        outputs = []
        for _ in range(2):
            doc = load_source_document(full_yaml_file)
            result = SysmlToAutosarTransformer().transform(build_source_model(doc))
            outputs.append(ArxmlWriter().write_bytes(result.model))

        assert outputs[0] == outputs[1]

    def test_yaml_dump_matches_arxml_packages(self, full_yaml_file: Path) -> None:
        """Should expose the same package tree in both formats."""
        doc = load_source_document(full_yaml_file)
        result = SysmlToAutosarTransformer().transform(build_source_model(doc))

        dump = yaml.safe_load(YamlWriter().write_text(result.model))
        root = etree.fromstring(ArxmlWriter().write_bytes(result.model))

        top = dump["packages"][0]
        arxml_names = root.xpath(
            "ar:AR-PACKAGES/ar:AR-PACKAGE/ar:AR-PACKAGES/ar:AR-PACKAGE/ar:SHORT-NAME/text()",
            namespaces=NS,
        )
        assert [p["short_name"] for p in top["ar_packages"]] == arxml_names

    def test_ambiguous_suffix_still_converts(self, tmp_path: Path) -> None:
        """Should warn about an ambiguous implementation and keep going."""
        path = tmp_path / "suffixes.yaml"
        path.write_text(yaml.safe_dump(YAML_WITH_SUFFIX_CLASH, sort_keys=False))

        doc = load_source_document(path)
        result = SysmlToAutosarTransformer().transform(build_source_model(doc))

        assert DiagnosticCodes.D206_AMBIGUOUS_MATCH in result.diagnostics.codes()

    def test_invalid_schema_stops_pipeline(self, tmp_path: Path) -> None:
        """Should reject a document with the wrong schema identifier."""
        path = tmp_path / "invalid.yaml"
        path.write_text(yaml.safe_dump(YAML_INVALID_SCHEMA))

        with pytest.raises(ValidationError):
            convert_source_to_arxml(path, tmp_path / "invalid.arxml")

        assert not (tmp_path / "invalid.arxml").exists()
