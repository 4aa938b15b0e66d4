"""Transformation context and idempotent hierarchy builders.

Every ``ensure_*`` builder locates an existing container by short name
before creating one, so calling it repeatedly, or from rules running in any
order, never produces duplicate siblings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar

from sysml_to_autosar.source.graph import Link, Package, SourceElement
from sysml_to_autosar.target.base import ARElement
from sysml_to_autosar.target.elements import (
    ApplicationPrimitiveDataType,
    ApplicationSwComponentType,
    ARPackage,
    AssemblySwConnector,
    CompositionSwComponentType,
    DataType,
    ImplementationDataType,
    SenderReceiverInterface,
    SwcInternalBehavior,
    SwComponentPrototype,
    Unit,
)
from sysml_to_autosar.target.model import ARModel
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.transform.diagnostics import DiagnosticCodes, DiagnosticLog, element_label
from sysml_to_autosar.transform.registry import CorrespondenceRegistry

S = TypeVar("S", bound=SourceElement)


@dataclass
class TransformContext:
    """Everything a rule needs: registry, target model and diagnostics.

    Attributes
    ----------
        model: Target model under construction.
        registry: Source/target correspondences.
        diagnostics: Sink for info, warning and severe records.

    """

    model: ARModel = field(default_factory=ARModel)
    registry: CorrespondenceRegistry = field(default_factory=CorrespondenceRegistry)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    def root_package(self, element: SourceElement) -> ARPackage | None:
        """Target package registered for the source element's package."""
        package = element if isinstance(element, Package) else element.package
        return self.registry.lookup_as(package, ARPackage)

    def source_of(self, target: ARElement, cls: type[S], rule: str) -> S | None:
        """Recover the source of a target node, reporting severe if it is missing.

        Args:
        ----
            target: Target node a rule works on.
            cls: Expected source element class.
            rule: Name of the calling rule.

        Returns:
        -------
            The registered source element, or None.

        """
        source = self.registry.reverse_lookup(target)
        if not isinstance(source, cls):
            self.diagnostics.severe(
                DiagnosticCodes.M100_UNREGISTERED_ELEMENT,
                f"No {cls.__name__} registered for '{target.short_name}'",
                rule=rule,
                element=target,
            )
            return None
        return source

    def component_of(
        self, classifier: SourceElement | None, rule: str
    ) -> ApplicationSwComponentType | None:
        """Registered component type of a source classifier, reporting severe if missing."""
        component = self.registry.lookup_as(classifier, ApplicationSwComponentType)
        if component is None:
            name = classifier.name if classifier is not None else "<none>"
            self.diagnostics.severe(
                DiagnosticCodes.M104_MISSING_COMPONENT,
                f"No ApplicationSwComponentType registered for '{name}'",
                rule=rule,
                element=classifier,
            )
        return component

    def data_type_of(
        self, source_type: SourceElement | None, rule: str, element: object
    ) -> DataType | None:
        """Registered target type of a source data type, warning if there is none."""
        target = self.registry.lookup(source_type)
        if isinstance(target, (ApplicationPrimitiveDataType, ImplementationDataType)):
            return target
        if source_type is None:
            message = f"No type set for '{element_label(element)}'"
        else:
            message = (
                f"No data type registered for '{source_type.name}' "
                f"used by '{element_label(element)}'"
            )
        self.diagnostics.warning(
            DiagnosticCodes.D200_MISSING_TYPE, message, rule=rule, element=element
        )
        return None


# =============================================================================
# Package hierarchy
# =============================================================================


def find_package_path(root: ARPackage, *segments: str) -> ARPackage | None:
    """Follow ``segments`` below ``root`` without creating anything."""
    node: ARPackage | None = root
    for segment in segments:
        if node is None:
            return None
        node = node.find_package(segment)
    return node


def ensure_package_path(root: ARPackage, *segments: str) -> ARPackage:
    """Walk ``segments`` below ``root``, creating missing packages.

    Args:
    ----
        root: Package to start from.
        *segments: Sub-package names, outermost first.

    Returns:
    -------
        The deepest package.

    Example:
    -------
        >>> interfaces = ensure_package_path(root, "SoftwareTypes", "Interfaces")
        >>> ensure_package_path(root, "SoftwareTypes", "Interfaces") is interfaces
        True

    """
    node = root
    for segment in segments:
        child = node.find_package(segment)
        if child is None:
            child = ARPackage(short_name=segment)
            node.ar_packages.append(child)
        node = child
    return node


def ensure_data_types_structure(root: ARPackage) -> tuple[ARPackage, ARPackage, ARPackage]:
    """Ensure ``DataTypes`` with ``ImplementationDataTypes`` and ``BaseTypes``.

    Returns
    -------
        ``(DataTypes, ImplementationDataTypes, BaseTypes)``

    """
    data_types = ensure_package_path(root, cv.PKG_DATA_TYPES)
    implementation = ensure_package_path(data_types, cv.PKG_IMPLEMENTATION_DATA_TYPES)
    base_types = ensure_package_path(data_types, cv.PKG_BASE_TYPES)
    return data_types, implementation, base_types


def _package_for(
    ctx: TransformContext, element: SourceElement, path: tuple[str, ...]
) -> ARPackage | None:
    root = ctx.root_package(element)
    if root is None:
        return None
    return ensure_package_path(root, *path)


def component_types_package(ctx: TransformContext, element: SourceElement) -> ARPackage | None:
    """``SoftwareTypes/ComponentTypes`` below the element's root package."""
    return _package_for(ctx, element, cv.COMPONENT_TYPES_PATH)


def interfaces_package(ctx: TransformContext, element: SourceElement) -> ARPackage | None:
    """``SoftwareTypes/Interfaces`` below the element's root package."""
    return _package_for(ctx, element, cv.INTERFACES_PATH)


def application_data_types_package(
    ctx: TransformContext, element: SourceElement
) -> ARPackage | None:
    """``DataTypes/ApplicationDataTypes`` below the element's root package."""
    return _package_for(ctx, element, cv.APPLICATION_DATA_TYPES_PATH)


def implementation_data_types_package(
    ctx: TransformContext, element: SourceElement
) -> ARPackage | None:
    """``DataTypes/ImplementationDataTypes`` below the element's root package."""
    root = ctx.root_package(element)
    if root is None:
        return None
    return ensure_data_types_structure(root)[1]


def compu_methods_package(ctx: TransformContext, element: SourceElement) -> ARPackage | None:
    """``DataTypes/CompuMethods`` below the element's root package."""
    return _package_for(ctx, element, cv.COMPU_METHODS_PATH)


# =============================================================================
# Containers
# =============================================================================


def ensure_internal_behavior(component: ApplicationSwComponentType) -> SwcInternalBehavior:
    """Return the component's internal behavior, creating ``IB_<component>`` if absent."""
    behavior = component.internal_behavior
    if behavior is None:
        behavior = SwcInternalBehavior(
            short_name=cv.PREFIX_INTERNAL_BEHAVIOR + component.short_name,
            supports_multiple_instantiation=cv.SUPPORTS_MULTIPLE_INSTANTIATION,
        )
        component.internal_behaviors.append(behavior)
    return behavior


def ensure_sender_receiver_holder(package: ARPackage, block_name: str) -> SenderReceiverInterface:
    """Find or create the ``SRI_<block>`` interface holding a block's data elements."""
    name = cv.PREFIX_SENDER_RECEIVER_HOLDER + block_name
    holder = package.find_element(name, SenderReceiverInterface)
    if holder is None:
        holder = SenderReceiverInterface(short_name=name)
        package.elements.append(holder)
    return holder


def ensure_composition(
    ctx: TransformContext, connector: AssemblySwConnector
) -> CompositionSwComponentType | None:
    """Find or create ``<Block>_Cmpstn`` for a connector.

    The block is the owner of the link's from-port; the composition sits in
    the same package as that block's component type. Returns None when the
    connector or the block's component type is not registered.
    """
    link = ctx.registry.reverse_lookup(connector)
    if not isinstance(link, Link) or link.from_port is None:
        return None
    block = link.from_port.owner
    component = ctx.registry.lookup_as(block, ApplicationSwComponentType)
    if block is None or component is None:
        return None
    package = component.container
    if not isinstance(package, ARPackage):
        return None
    name = block.name + cv.SUFFIX_COMPOSITION
    composition = package.find_element(name, CompositionSwComponentType)
    if composition is None:
        composition = CompositionSwComponentType(short_name=name)
        package.elements.append(composition)
    return composition


def ensure_component_prototype(
    composition: CompositionSwComponentType,
    instance_name: str,
    component_type: ApplicationSwComponentType | None,
) -> SwComponentPrototype:
    """Find or create the ``CtSt_<instance>`` prototype in a composition.

    The type is set only when the prototype is created.
    """
    name = cv.PREFIX_COMPONENT_PROTOTYPE + instance_name
    prototype = composition.find_component(name)
    if prototype is None:
        prototype = SwComponentPrototype(short_name=name, type=component_type)
        composition.components.append(prototype)
    return prototype


def ensure_unit(root: ARPackage, unit_name: str) -> Unit:
    """Find or create a unit in ``DataTypes/Units``."""
    units = ensure_package_path(root, *cv.UNITS_PATH)
    unit = units.find_element(unit_name, Unit)
    if unit is None:
        unit = Unit(short_name=unit_name)
        units.elements.append(unit)
    return unit
