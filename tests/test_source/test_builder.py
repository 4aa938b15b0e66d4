"""Tests for building the source graph."""

from __future__ import annotations

from typing import Any

import pytest
from sysml_to_autosar.models import SourceDocument
from sysml_to_autosar.source import (
    Classifier,
    ClassifierKind,
    DataTypeKind,
    EventReception,
    MetaClass,
    Operation,
    SourceModel,
    SourceModelError,
    build_source_model,
)


def _build(data: dict[str, Any]) -> SourceModel:
    return build_source_model(SourceDocument.model_validate(data))


class TestSourceModelBuilder:
    """Tests for SourceModelBuilder."""

    def test_model_metadata(self, full_source: SourceModel) -> None:
        """The model takes its name from the document metadata."""
        assert full_source.name == "Powertrain"
        assert full_source.author == "Integration Test Suite"
        assert full_source.revision == "1.0.0"
        assert full_source.find_package("Powertrain") is not None

    def test_data_types(self, full_source: SourceModel) -> None:
        """Types keep their kind and literals."""
        package = full_source.packages[0]
        gear, speed, uint8 = package.data_types

        assert gear.kind is DataTypeKind.ENUMERATION
        assert [(lit.name, lit.value) for lit in gear.literals] == [("PARK", 0), ("DRIVE", 1)]
        assert speed.is_typedef
        assert speed.tag_value("unit") == "kmh"
        assert uint8.kind is DataTypeKind.PRIMITIVE

    def test_literal_value_defaults_to_position(self, full_data: dict[str, Any]) -> None:
        """Literals without a value are numbered by position."""
        full_data["packages"][0]["types"][0]["literals"] = [{"name": "A"}, {"name": "B"}]

        gear = _build(full_data).packages[0].data_types[0]

        assert [lit.value for lit in gear.literals] == [0, 1]

    def test_classifiers(self, full_source: SourceModel) -> None:
        """Interfaces and components share the classifier list."""
        package = full_source.packages[0]

        assert [i.name for i in package.interfaces] == ["IEngineControl", "ISpeed"]
        assert [c.name for c in package.software_components] == ["EngineCtrl", "Dashboard"]
        assert package.interfaces[0].meta_class is MetaClass.INTERFACE
        assert package.software_components[0].meta_class is MetaClass.SOFTWARE_COMPONENT

    def test_interface_items_in_order(self, full_source: SourceModel) -> None:
        """Operations and receptions keep their declaration order."""
        speed = full_source.packages[0].find_classifier("ISpeed")
        assert speed is not None
        update, reception = speed.interface_items

        assert isinstance(update, Operation)
        assert isinstance(reception, EventReception)
        assert reception.name == "evSpeedChanged"
        assert reception.owner is speed

    def test_reception_arguments_come_from_event(self, full_source: SourceModel) -> None:
        """A reception exposes the arguments of its event."""
        package = full_source.packages[0]
        speed = package.find_classifier("ISpeed")
        event = package.find_event("evSpeedChanged")
        assert speed is not None and event is not None

        reception = speed.interface_items[1]

        assert reception.arguments == event.arguments

    def test_structured_tag_resolves_type(self, full_source: SourceModel) -> None:
        """A structured tag's type names a data type of the graph."""
        package = full_source.packages[0]
        speed = package.find_classifier("ISpeed")
        assert speed is not None

        tag = speed.interface_items[0].tag("dataReceived")

        assert tag is not None
        assert tag.value == "speed"
        assert tag.type is package.data_types[1]

    def test_scalar_type_tag_resolves_type(self, full_source: SourceModel) -> None:
        """A scalar 'type' tag names a data type too."""
        package = full_source.packages[0]
        event = package.find_event("evSpeedChanged")
        assert event is not None

        tag = event.tag("type")

        assert tag is not None
        assert tag.type is package.data_types[1]

    def test_scalar_tags_become_text(self, full_source: SourceModel) -> None:
        """Numeric tags are kept as text."""
        engine = full_source.packages[0].find_classifier("EngineCtrl")
        assert engine is not None

        assert engine.operations[1].tag_value("period") == "0.01"

    def test_ports_resolve_interfaces(self, full_source: SourceModel) -> None:
        """Ports point at interface classifiers."""
        package = full_source.packages[0]
        engine = package.find_classifier("EngineCtrl")
        assert engine is not None
        p_engine, p_speed = engine.ports

        assert p_engine.provided_interfaces == [package.find_classifier("IEngineControl")]
        assert p_speed.required_interfaces == [package.find_classifier("ISpeed")]
        assert p_engine.package is package

    def test_attributes(self, full_source: SourceModel) -> None:
        """Attributes keep type, static flag and stereotypes."""
        package = full_source.packages[0]
        engine = package.find_classifier("EngineCtrl")
        assert engine is not None
        counter = engine.attributes[0]

        assert counter.is_static
        assert counter.type is package.data_types[2]
        assert counter.has_stereotype("PIMProperty")

    def test_links(self, full_source: SourceModel) -> None:
        """Links resolve instances and their type's ports."""
        package = full_source.packages[0]
        link = package.links[0]

        assert link.name == "itsEngine_pSpeed_itsDashboard_rSpeed"
        assert link.from_instance is package.instances[0]
        assert link.from_port is package.instances[0].type.ports[1]
        assert link.to_port is package.instances[1].type.ports[0]

    def test_plain_block(self, minimal_data: dict[str, Any]) -> None:
        """Blocks are classifiers but not software components."""
        minimal_data["packages"][0]["components"] = [{"name": "Frame", "kind": "block"}]

        package = _build(minimal_data).packages[0]
        block = package.classifiers[0]

        assert isinstance(block, Classifier)
        assert block.kind is ClassifierKind.BLOCK
        assert package.software_components == []

    def test_cross_package_resolution(self, minimal_data: dict[str, Any]) -> None:
        """Names not found locally are looked up in the other packages."""
        minimal_data["packages"] = [
            {"name": "Types", "types": [{"name": "uint8"}]},
            {
                "name": "App",
                "components": [
                    {"name": "C", "attributes": [{"name": "a", "type": "uint8", "static": True}]}
                ],
            },
        ]

        model = _build(minimal_data)

        attribute = model.packages[1].classifiers[0].attributes[0]
        assert attribute.type is model.packages[0].data_types[0]


class TestUnresolvedReferences:
    """Tests for SourceModelError."""

    def test_unknown_type(self, minimal_data: dict[str, Any]) -> None:
        """An undefined attribute type cannot be resolved."""
        minimal_data["packages"][0]["components"] = [
            {"name": "C", "attributes": [{"name": "a", "type": "Missing"}]}
        ]

        with pytest.raises(SourceModelError, match="Unknown data type 'Missing'") as exc_info:
            _build(minimal_data)
        assert exc_info.value.location == "Minimal.C.a"

    def test_unknown_event(self, minimal_data: dict[str, Any]) -> None:
        """A reception of an undefined event cannot be resolved."""
        minimal_data["packages"][0]["interfaces"] = [
            {"name": "I", "items": [{"kind": "reception", "event": "evMissing"}]}
        ]

        with pytest.raises(SourceModelError, match="Unknown event"):
            _build(minimal_data)

    def test_port_requires_component(self, minimal_data: dict[str, Any]) -> None:
        """A port cannot provide a component."""
        minimal_data["packages"][0]["components"] = [
            {"name": "A"},
            {"name": "B", "ports": [{"name": "p", "provides": ["A"]}]},
        ]

        with pytest.raises(SourceModelError, match="'A' is not an interface"):
            _build(minimal_data)

    def test_unknown_link_port(self, full_data: dict[str, Any]) -> None:
        """A link endpoint must name a port of the instance's type."""
        full_data["packages"][0]["links"][0]["to"]["port"] = "rMissing"

        with pytest.raises(SourceModelError, match="has no port 'rMissing'"):
            _build(full_data)
