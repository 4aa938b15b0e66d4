"""Tests for compute-method synthesis."""

from sysml_to_autosar.source import DataType, DataTypeKind, EnumerationLiteral, Package
from sysml_to_autosar.target import ARPackage, CompuMethod, Limit
from sysml_to_autosar.transform.compu import (
    create_compu_method,
    enum_compu_scales,
    enum_literal_scale,
)
from sysml_to_autosar.transform.context import TransformContext


def _enumeration(package: Package | None = None) -> DataType:
    enumeration = DataType(name="Mode", owner=package, kind=DataTypeKind.ENUMERATION)
    enumeration.literals = [
        EnumerationLiteral(name="A", owner=enumeration, value=0),
        EnumerationLiteral(name="B", owner=enumeration, value=1),
    ]
    return enumeration


class TestCompuScales:
    """Tests for literal scales."""

    def test_single_point_scale(self) -> None:
        """Lower and upper limits are the literal value, closed."""
        scale = enum_literal_scale(EnumerationLiteral(name="DRIVE", value=3))

        assert scale.lower_limit == Limit(3, "CLOSED")
        assert scale.upper_limit == Limit(3, "CLOSED")
        assert scale.vt == "DRIVE"

    def test_one_scale_per_literal(self) -> None:
        """Scales follow declaration order."""
        scales = enum_compu_scales(_enumeration())

        assert [(s.lower_limit.value, s.vt) for s in scales] == [(0, "A"), (1, "B")]


class TestCreateCompuMethod:
    """Tests for create_compu_method."""

    def test_detached_without_package(self) -> None:
        """With no registered package the method is returned detached."""
        method = create_compu_method(TransformContext(), _enumeration())

        assert method.short_name == "Mode"
        assert method.category == "TEXTTABLE"
        assert method.container is None
        assert len(method.compu_scales) == 2

    def test_stored_and_reused(self) -> None:
        """The method lands in DataTypes/CompuMethods and is reused by name."""
        ctx = TransformContext()
        package = Package(name="P")
        root = ARPackage(short_name="P")
        ctx.registry.register(package, root)
        enumeration = _enumeration(package)

        method = create_compu_method(ctx, enumeration)
        again = create_compu_method(ctx, enumeration)

        assert again is method
        assert method.path == "/P/DataTypes/CompuMethods/Mode"
        compu_methods = root.find_package("DataTypes").find_package("CompuMethods")
        assert list(compu_methods.elements_of(CompuMethod)) == [method]
