"""Tests for the transformation context and hierarchy builders."""

from __future__ import annotations

from sysml_to_autosar.source import Attribute, DataType, Package
from sysml_to_autosar.target import (
    ApplicationSwComponentType,
    ARPackage,
    CompositionSwComponentType,
    RunnableEntity,
    SenderReceiverInterface,
)
from sysml_to_autosar.transform import DiagnosticCodes, DiagnosticSeverity
from sysml_to_autosar.transform.context import (
    TransformContext,
    ensure_component_prototype,
    ensure_data_types_structure,
    ensure_internal_behavior,
    ensure_package_path,
    ensure_sender_receiver_holder,
    ensure_unit,
    find_package_path,
)


class TestPackageHierarchy:
    """Tests for package path builders."""

    def test_ensure_package_path_is_idempotent(self) -> None:
        """Repeated calls return the same package without new siblings."""
        root = ARPackage(short_name="Root")

        first = ensure_package_path(root, "SoftwareTypes", "Interfaces")
        second = ensure_package_path(root, "SoftwareTypes", "Interfaces")

        assert first is second
        assert len(root.ar_packages) == 1
        assert first.path == "/Root/SoftwareTypes/Interfaces"

    def test_find_package_path_does_not_create(self) -> None:
        """Lookup only."""
        root = ARPackage(short_name="Root")

        assert find_package_path(root, "DataTypes") is None
        assert len(root.ar_packages) == 0
        assert find_package_path(root) is root

    def test_data_types_structure(self) -> None:
        """DataTypes gets ImplementationDataTypes and BaseTypes children."""
        root = ARPackage(short_name="Root")

        data_types, implementation, base_types = ensure_data_types_structure(root)
        again = ensure_data_types_structure(root)

        assert data_types.short_name == "DataTypes"
        assert [p.short_name for p in data_types.ar_packages] == [
            "ImplementationDataTypes",
            "BaseTypes",
        ]
        assert again == (data_types, implementation, base_types)

    def test_ensure_unit(self) -> None:
        """Units live in DataTypes/Units and are reused by name."""
        root = ARPackage(short_name="Root")

        unit = ensure_unit(root, "kmh")

        assert ensure_unit(root, "kmh") is unit
        assert unit.path == "/Root/DataTypes/Units/kmh"


class TestContainers:
    """Tests for container builders."""

    def test_internal_behavior_created_once(self) -> None:
        """The behavior is named after the component."""
        component = ApplicationSwComponentType(short_name="EngineCtrl")

        behavior = ensure_internal_behavior(component)

        assert behavior.short_name == "IB_EngineCtrl"
        assert ensure_internal_behavior(component) is behavior
        assert len(component.internal_behaviors) == 1

    def test_sender_receiver_holder(self) -> None:
        """The holder interface is named after the block."""
        package = ARPackage(short_name="Interfaces")

        holder = ensure_sender_receiver_holder(package, "evSpeedChanged")

        assert isinstance(holder, SenderReceiverInterface)
        assert holder.short_name == "SRI_evSpeedChanged"
        assert ensure_sender_receiver_holder(package, "evSpeedChanged") is holder

    def test_component_prototype_keeps_first_type(self) -> None:
        """An existing prototype is returned unchanged."""
        composition = CompositionSwComponentType(short_name="Top_Cmpstn")
        engine = ApplicationSwComponentType(short_name="EngineCtrl")
        other = ApplicationSwComponentType(short_name="Other")

        prototype = ensure_component_prototype(composition, "itsEngine", engine)
        again = ensure_component_prototype(composition, "itsEngine", other)

        assert again is prototype
        assert prototype.short_name == "CtSt_itsEngine"
        assert prototype.type is engine


class TestTransformContext:
    """Tests for TransformContext lookups."""

    def test_root_package(self) -> None:
        """An element's package maps to its registered root package."""
        ctx = TransformContext()
        package = Package(name="P")
        attribute = Attribute(name="a", owner=package)
        root = ARPackage(short_name="P")
        ctx.registry.register(package, root)

        assert ctx.root_package(package) is root
        assert ctx.root_package(attribute) is root

    def test_source_of_missing_is_severe(self) -> None:
        """An unregistered target node yields M100."""
        ctx = TransformContext()
        runnable = RunnableEntity(short_name="orphan")

        assert ctx.source_of(runnable, Attribute, "rule") is None
        assert ctx.diagnostics.codes() == [DiagnosticCodes.M100_UNREGISTERED_ELEMENT]
        assert ctx.diagnostics.records[0].rule == "rule"

    def test_source_of_wrong_class_is_severe(self) -> None:
        """A source of another class counts as missing."""
        ctx = TransformContext()
        runnable = RunnableEntity(short_name="r")
        ctx.registry.register(Package(name="P"), runnable)

        assert ctx.source_of(runnable, Attribute, "rule") is None
        assert ctx.diagnostics.has_severe

    def test_component_of_missing(self) -> None:
        """An unregistered classifier yields M104."""
        ctx = TransformContext()

        assert ctx.component_of(None, "rule") is None
        assert ctx.diagnostics.codes() == [DiagnosticCodes.M104_MISSING_COMPONENT]

    def test_data_type_of_missing_is_warning(self) -> None:
        """An unregistered data type yields a D200 warning."""
        ctx = TransformContext()
        attribute = Attribute(name="a", type=DataType(name="T"))

        assert ctx.data_type_of(attribute.type, "rule", attribute) is None
        assert ctx.diagnostics.codes() == [DiagnosticCodes.D200_MISSING_TYPE]
        assert ctx.diagnostics.records[0].severity is DiagnosticSeverity.WARNING
        assert "'T'" in ctx.diagnostics.records[0].message

    def test_data_type_of_untyped(self) -> None:
        """An element with no type is reported by name."""
        ctx = TransformContext()
        attribute = Attribute(name="a")

        assert ctx.data_type_of(None, "rule", attribute) is None
        assert "No type set" in ctx.diagnostics.records[0].message
