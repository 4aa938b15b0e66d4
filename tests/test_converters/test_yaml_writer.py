"""Tests for the YAML dump writer."""

from pathlib import Path

import yaml
from sysml_to_autosar.converters import YamlWriter, model_to_dict, node_to_dict
from sysml_to_autosar.target import (
    ApplicationSwComponentType,
    CompuScale,
    Limit,
    PPortPrototype,
    SenderReceiverInterface,
)
from sysml_to_autosar.transform import TransformResult


class TestNodeToDict:
    """Tests for node_to_dict."""

    def test_kind_and_name(self) -> None:
        """Should start with the kind and short name."""
        data = node_to_dict(ApplicationSwComponentType(short_name="Comp"))

        assert data == {"kind": "APPLICATION-SW-COMPONENT-TYPE", "short_name": "Comp"}

    def test_reference_as_path(self, full_result: TransformResult) -> None:
        """Should write references as absolute paths."""
        model = model_to_dict(full_result.model)
        software = next(
            p for p in model["packages"][0]["ar_packages"] if p["short_name"] == "SoftwareTypes"
        )
        components = next(
            p for p in software["ar_packages"] if p["short_name"] == "ComponentTypes"
        )
        engine = next(e for e in components["elements"] if e["short_name"] == "EngineCtrl")
        port = next(p for p in engine["ports"] if p["short_name"] == "pEngine")

        assert port["provided_interface"] == (
            "/Powertrain/SoftwareTypes/Interfaces/IEngineControl"
        )

    def test_limit(self) -> None:
        """Should write limits as value and interval type."""
        data = node_to_dict(CompuScale(lower_limit=Limit(3), vt="THREE"))

        assert data == {
            "kind": "COMPU-SCALE",
            "lower_limit": {"value": 3, "interval_type": "CLOSED"},
            "vt": "THREE",
        }

    def test_contained_children(self) -> None:
        """Should nest contained children and skip empty lists."""
        interface = SenderReceiverInterface(short_name="IData")
        component = ApplicationSwComponentType(
            short_name="Comp",
            ports=[PPortPrototype(short_name="pOut")],
        )
        component.ports[0].provided_interface = interface

        data = node_to_dict(component)

        assert "internal_behaviors" not in data
        # A detached interface has only its own name as path
        assert data["ports"] == [
            {"kind": "P-PORT-PROTOTYPE", "short_name": "pOut", "provided_interface": "/IData"}
        ]


class TestYamlWriter:
    """Tests for YamlWriter."""

    def test_write_text_round_trips(self, full_result: TransformResult) -> None:
        """Should produce YAML that loads back to the same data."""
        text = YamlWriter().write_text(full_result.model)

        assert yaml.safe_load(text) == model_to_dict(full_result.model)

    def test_keeps_field_order(self, full_result: TransformResult) -> None:
        """Should not sort keys."""
        text = YamlWriter().write_text(full_result.model)

        assert text.startswith("name: Powertrain\npackages:\n")

    def test_write_creates_parent_dirs(self, tmp_path: Path, full_result: TransformResult) -> None:
        """Should create parent directories if needed."""
        output_path = tmp_path / "nested" / "model.yaml"

        YamlWriter().write(full_result.model, output_path)

        assert yaml.safe_load(output_path.read_text())["name"] == "Powertrain"
