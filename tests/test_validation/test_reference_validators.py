"""Tests for reference validators."""

from collections.abc import Callable
from typing import Any

from sysml_to_autosar.models import SourceDocument
from sysml_to_autosar.validation import ErrorCodes, SourceValidator, ValidationResult

DocFactory = Callable[[dict[str, Any]], SourceDocument]


def _codes(result: ValidationResult, code: str) -> list[str]:
    """Locations of the issues with ``code``."""
    return [str(i.location) for i in result.issues if i.code == code]


class TestTypeReferenceValidator:
    """Tests for TypeReferenceValidator."""

    def test_valid_type_references(self, full_doc: SourceDocument) -> None:
        """Should pass when every type reference resolves."""
        result = SourceValidator().validate(full_doc)

        assert _codes(result, ErrorCodes.E001_UNDEFINED_TYPE) == []

    def test_undefined_attribute_type(
        self, doc_with_undefined_references: SourceDocument
    ) -> None:
        """Should error when an attribute type is undefined."""
        result = SourceValidator().validate(doc_with_undefined_references)

        type_errors = [e for e in result.errors if e.code == ErrorCodes.E001_UNDEFINED_TYPE]
        assert len(type_errors) == 1
        assert "UnknownType" in type_errors[0].message
        assert str(type_errors[0].location) == "Broken.Comp.value.type"
        assert type_errors[0].context["referenced_type"] == "UnknownType"

    def test_undefined_tag_type(
        self, make_doc: DocFactory, full_data: dict[str, Any], package_data: dict[str, Any]
    ) -> None:
        """Should error when a 'type' tag names an undefined type."""
        package_data["events"][1]["tags"]["type"] = "Nope"

        result = SourceValidator().validate(make_doc(full_data))

        assert _codes(result, ErrorCodes.E001_UNDEFINED_TYPE) == [
            "Powertrain.evSpeedChanged.tags.type"
        ]

    def test_undefined_structured_tag_type(
        self, make_doc: DocFactory, full_data: dict[str, Any], package_data: dict[str, Any]
    ) -> None:
        """Should error when a structured tag's type is undefined."""
        package_data["interfaces"][1]["items"][0]["tags"]["dataReceived"]["type"] = "Nope"

        result = SourceValidator().validate(make_doc(full_data))

        assert _codes(result, ErrorCodes.E001_UNDEFINED_TYPE) == [
            "Powertrain.ISpeed.Update.tags.dataReceived.type"
        ]


class TestEventReferenceValidator:
    """Tests for EventReferenceValidator."""

    def test_undefined_reception_event(
        self, doc_with_undefined_references: SourceDocument
    ) -> None:
        """Should error when a reception names an undefined event."""
        result = SourceValidator().validate(doc_with_undefined_references)

        event_errors = [e for e in result.errors if e.code == ErrorCodes.E002_UNDEFINED_EVENT]
        assert len(event_errors) == 1
        assert "evMissing" in event_errors[0].message
        assert str(event_errors[0].location) == "Broken.IData.evMissing"

    def test_unknown_event_tag_warns(
        self, make_doc: DocFactory, full_data: dict[str, Any], package_data: dict[str, Any]
    ) -> None:
        """Should warn when an «operationWevent» tag names no event."""
        package_data["interfaces"][0]["items"][0]["tags"]["event"] = "evNope"

        result = SourceValidator().validate(make_doc(full_data))

        assert _codes(result, ErrorCodes.W008_UNKNOWN_EVENT_TAG) == [
            "Powertrain.IEngineControl.Start.tags.event"
        ]
        assert result.is_valid


class TestInterfaceReferenceValidator:
    """Tests for InterfaceReferenceValidator."""

    def test_undefined_interface(self, doc_with_undefined_references: SourceDocument) -> None:
        """Should error when a port requires an undefined interface."""
        result = SourceValidator().validate(doc_with_undefined_references)

        errors = [e for e in result.errors if e.code == ErrorCodes.E003_UNDEFINED_INTERFACE]
        assert len(errors) == 1
        assert "IUnknown" in errors[0].message
        assert str(errors[0].location) == "Broken.Comp.pData.requires"


class TestComponentReferenceValidator:
    """Tests for ComponentReferenceValidator."""

    def test_undefined_component(self, doc_with_undefined_references: SourceDocument) -> None:
        """Should error when an instance is typed by an undefined component."""
        result = SourceValidator().validate(doc_with_undefined_references)

        errors = [e for e in result.errors if e.code == ErrorCodes.E004_UNDEFINED_COMPONENT]
        assert len(errors) == 1
        assert "GhostComponent" in errors[0].message


class TestLinkReferenceValidator:
    """Tests for LinkReferenceValidator."""

    def test_valid_links(self, full_doc: SourceDocument) -> None:
        """Should pass when both endpoints resolve."""
        result = SourceValidator().validate(full_doc)

        assert _codes(result, ErrorCodes.E005_UNDEFINED_INSTANCE) == []
        assert _codes(result, ErrorCodes.E006_UNDEFINED_PORT) == []

    def test_undefined_instance(
        self, make_doc: DocFactory, full_data: dict[str, Any], package_data: dict[str, Any]
    ) -> None:
        """Should error when an endpoint names an undefined instance."""
        package_data["links"][0]["to"]["instance"] = "itsNobody"

        result = SourceValidator().validate(make_doc(full_data))

        assert _codes(result, ErrorCodes.E005_UNDEFINED_INSTANCE) == [
            "Powertrain.itsEngine_pSpeed_itsNobody_rSpeed.to.instance"
        ]

    def test_undefined_port(
        self, make_doc: DocFactory, full_data: dict[str, Any], package_data: dict[str, Any]
    ) -> None:
        """Should error when the instance's component has no such port."""
        package_data["links"][0]["from"]["port"] = "pMissing"

        result = SourceValidator().validate(make_doc(full_data))

        errors = [e for e in result.errors if e.code == ErrorCodes.E006_UNDEFINED_PORT]
        assert len(errors) == 1
        assert "pMissing" in errors[0].message
        assert errors[0].context["available_ports"] == ["pEngine", "pSpeed"]
