"""Enrichment rules for data prototypes and application data types."""

from __future__ import annotations

from sysml_to_autosar.source.graph import Argument, DataType, EventReception, Operation
from sysml_to_autosar.target.elements import (
    ApplicationPrimitiveDataType,
    ArgumentDataPrototype,
    SenderReceiverInterface,
    VariableDataPrototype,
)
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.transform.compu import create_compu_method
from sysml_to_autosar.transform.context import TransformContext, ensure_unit
from sysml_to_autosar.transform.diagnostics import DiagnosticCodes
from sysml_to_autosar.transform.rules_behavior import create_sw_data_def_props


def add_argument_type(
    ctx: TransformContext, prototype: ArgumentDataPrototype | VariableDataPrototype
) -> None:
    """Type an argument's prototype with the registered type of the argument."""
    rule = "add_argument_type"
    argument = ctx.source_of(prototype, Argument, rule)
    if argument is None:
        return
    prototype.type = ctx.data_type_of(argument.type, rule, argument)


def change_data_prototype_name_and_set_type(
    ctx: TransformContext, data_element: VariableDataPrototype
) -> None:
    """Name and type the data element of an «operationWdata» operation.

    The ``dataReceived`` tag carries the data name and its type; the element
    is renamed ``<data>_<operation>``.
    """
    rule = "change_data_prototype_name_and_set_type"
    operation = ctx.source_of(data_element, Operation, rule)
    if operation is None:
        return

    tag = operation.tag(cv.TAG_DATA_RECEIVED)
    if tag is None or not tag.value:
        ctx.diagnostics.warning(
            DiagnosticCodes.D203_MISSING_TAG,
            f"Operation '{operation.name}' has no '{cv.TAG_DATA_RECEIVED}' tag",
            rule=rule,
            element=operation,
        )
        return
    data_element.short_name = f"{tag.value}_{operation.name}"
    data_element.type = ctx.data_type_of(tag.type, rule, operation)


def add_event_parameters(ctx: TransformContext, data_element: VariableDataPrototype) -> None:
    """Add a reception's data element to its interface, typed by the event's ``type`` tag."""
    rule = "add_event_parameters"
    reception = ctx.source_of(data_element, EventReception, rule)
    if reception is None:
        return

    interface = ctx.registry.lookup_as(reception.owner, SenderReceiverInterface)
    if interface is None:
        owner_name = reception.owner.name if reception.owner is not None else "<none>"
        ctx.diagnostics.severe(
            DiagnosticCodes.M101_MISSING_INTERFACE,
            f"No SenderReceiverInterface found for interface '{owner_name}'",
            rule=rule,
            element=reception,
        )
        return
    if data_element not in interface.data_elements:
        interface.data_elements.append(data_element)

    tag = reception.event.tag(cv.TAG_TYPE) if reception.event is not None else None
    if tag is None:
        ctx.diagnostics.warning(
            DiagnosticCodes.D203_MISSING_TAG,
            f"Event of reception '{reception.name}' has no '{cv.TAG_TYPE}' tag",
            rule=rule,
            element=reception,
        )
        return
    data_element.type = ctx.data_type_of(tag.type, rule, reception)


def add_app_data_type_structure(
    ctx: TransformContext, data_type: ApplicationPrimitiveDataType
) -> None:
    """Complete an application data type.

    Enumerations get a TEXTTABLE compute method and the ``EnumUnit`` unit;
    typedefs get the unit named by their ``unit`` tag.
    """
    rule = "add_app_data_type_structure"
    source = ctx.source_of(data_type, DataType, rule)
    if source is None:
        return
    data_type.category = cv.APP_DATA_TYPE_CATEGORY

    root = ctx.root_package(source)
    if root is None:
        ctx.diagnostics.severe(
            DiagnosticCodes.M100_UNREGISTERED_ELEMENT,
            f"No ARPackage registered for the package of '{source.name}'",
            rule=rule,
            element=source,
        )
        return

    if source.is_enumeration:
        props, conditional = create_sw_data_def_props()
        data_type.sw_data_def_props = props
        compu_method = create_compu_method(ctx, source)
        unit = ensure_unit(root, cv.ENUM_UNIT_NAME)
        compu_method.unit = unit
        conditional.compu_method = compu_method
        conditional.unit = unit
    elif source.is_typedef:
        props, conditional = create_sw_data_def_props()
        data_type.sw_data_def_props = props
        unit_name = source.tag_value(cv.TAG_UNIT)
        if not unit_name:
            ctx.diagnostics.warning(
                DiagnosticCodes.D205_MISSING_UNIT,
                f"Typedef '{source.name}' has no '{cv.TAG_UNIT}' tag",
                rule=rule,
                element=source,
            )
            return
        conditional.unit = ensure_unit(root, unit_name)
