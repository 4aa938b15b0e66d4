"""Compute-method synthesis for enumeration data types."""

from __future__ import annotations

from sysml_to_autosar.source.graph import DataType, EnumerationLiteral
from sysml_to_autosar.target.elements import CompuMethod, CompuScale, Limit
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.transform.context import TransformContext, compu_methods_package


def enum_literal_scale(literal: EnumerationLiteral) -> CompuScale:
    """Create the single-point scale of one literal.

    Args:
    ----
        literal: Enumeration literal.

    Returns:
    -------
        CompuScale with closed lower and upper limits equal to the literal
        value and the literal name as constant text.

    """
    limit = Limit(literal.value, "CLOSED")
    return CompuScale(lower_limit=limit, upper_limit=limit, vt=literal.name)


def enum_compu_scales(enumeration: DataType) -> list[CompuScale]:
    """One scale per literal, in declaration order."""
    return [enum_literal_scale(literal) for literal in enumeration.literals]


def create_compu_method(ctx: TransformContext, enumeration: DataType) -> CompuMethod:
    """Create a TEXTTABLE compute method named after the enumeration.

    The method is stored in ``DataTypes/CompuMethods`` of the enumeration's
    root package; an existing method of the same name is reused.

    Args:
    ----
        ctx: Transformation context.
        enumeration: Source enumeration data type.

    Returns:
    -------
        The compute method. It is left detached if the enumeration's package
        has no registered target package.

    """
    package = compu_methods_package(ctx, enumeration)
    if package is not None:
        existing = package.find_element(enumeration.name, CompuMethod)
        if isinstance(existing, CompuMethod):
            return existing

    method = CompuMethod(short_name=enumeration.name, category=cv.COMPU_CATEGORY_TEXTTABLE)
    method.compu_scales.extend(enum_compu_scales(enumeration))
    if package is not None:
        package.elements.append(method)
    return method
