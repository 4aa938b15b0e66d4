"""Enrichment rules wiring port prototypes.

A port's shape depends on its role and on its interface's kind:

===========  ===================  =========================================
Port         Interface            Target structure
===========  ===================  =========================================
provided     client-server        PPort, server com specs
provided     sender-receiver      RPort (receiver), data received events
required     client-server        RPort (client), server call points
required     sender-receiver      PPort (sender), data send points
===========  ===================  =========================================
"""

from __future__ import annotations

from typing import TypeVar

from sysml_to_autosar.source.graph import Argument, Classifier, Port, SourceElement
from sysml_to_autosar.target.elements import (
    AutosarVariableRef,
    ClientComSpec,
    ClientServerInterface,
    ClientServerOperation,
    DataReceivedEvent,
    NonqueuedReceiverComSpec,
    NonqueuedSenderComSpec,
    NumericalValueSpecification,
    PortPrototype,
    PPortPrototype,
    ROperationInAtomicSwcInstanceRef,
    RPortPrototype,
    RunnableEntity,
    RVariableInAtomicSwcInstanceRef,
    SenderReceiverInterface,
    ServerComSpec,
    SwcInternalBehavior,
    SynchronousServerCallPoint,
    VariableAccess,
    VariableDataPrototype,
    VariableInAtomicSwcTypeInstanceRef,
)
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.transform.context import TransformContext, ensure_internal_behavior
from sysml_to_autosar.transform.diagnostics import DiagnosticCodes
from sysml_to_autosar.transform.predicates import (
    InterfaceKind,
    classify_interface,
    is_event_reception,
)
from sysml_to_autosar.transform.rules_behavior import create_runnable

T = TypeVar("T")

# =============================================================================
# Builders
# =============================================================================


def create_init_value() -> NumericalValueSpecification:
    return NumericalValueSpecification(value=cv.INIT_VALUE)


def create_variable_access(
    name: str, port: PortPrototype, data_prototype: VariableDataPrototype
) -> VariableAccess:
    """Create a variable access reaching ``data_prototype`` through ``port``.

    Args:
    ----
        name: Short name of the access.
        port: Port prototype the data travels through.
        data_prototype: Data element that is read or written.

    Returns:
    -------
        VariableAccess -> AutosarVariableRef -> VariableInAtomicSwcTypeInstanceRef

    """
    instance_ref = VariableInAtomicSwcTypeInstanceRef(
        port_prototype=port, target_data_prototype=data_prototype
    )
    return VariableAccess(
        short_name=name,
        accessed_variable=AutosarVariableRef(autosar_variable=instance_ref),
    )


def create_data_received_event(
    name: str,
    port: RPortPrototype,
    data_element: VariableDataPrototype,
    runnable: RunnableEntity,
) -> DataReceivedEvent:
    """Create a data received event on ``data_element`` starting ``runnable``."""
    return DataReceivedEvent(
        short_name=name,
        start_on_event=runnable,
        data=RVariableInAtomicSwcInstanceRef(
            context_r_port=port, target_data_element=data_element
        ),
    )


# =============================================================================
# Shared lookups
# =============================================================================


def _port_behavior(
    ctx: TransformContext, port: Port, rule: str
) -> SwcInternalBehavior | None:
    component = ctx.component_of(port.owner, rule)
    if component is None:
        return None
    return ensure_internal_behavior(component)


def _registered_interface(
    ctx: TransformContext, interface: Classifier, cls: type[T], rule: str
) -> T | None:
    target = ctx.registry.lookup_as(interface, cls)
    if target is None:
        ctx.diagnostics.severe(
            DiagnosticCodes.M101_MISSING_INTERFACE,
            f"No target {cls.__name__} found for interface '{interface.name}'",
            rule=rule,
            element=interface,
        )
    return target


def _data_element(
    ctx: TransformContext, element: SourceElement, rule: str
) -> VariableDataPrototype | None:
    prototype = ctx.registry.lookup_as(element, VariableDataPrototype)
    if prototype is None:
        if isinstance(element, Argument):
            code, kind = DiagnosticCodes.M107_MISSING_ARGUMENT, "argument"
        else:
            code, kind = DiagnosticCodes.M102_MISSING_DATA_ELEMENT, "item"
        ctx.diagnostics.severe(
            code,
            f"No VariableDataPrototype found for {kind} '{element.name}'",
            rule=rule,
            element=element,
        )
    return prototype


def _requiring_ports(port: Port, interface: Classifier) -> list[Port]:
    """Software component ports of the port's package requiring an interface of the same name."""
    package = port.package
    if package is None:
        return []
    return [
        candidate
        for component in package.software_components
        for candidate in component.ports
        if any(required.name == interface.name for required in candidate.required_interfaces)
    ]


# =============================================================================
# Required ports
# =============================================================================


def add_rport_structure(ctx: TransformContext, rport: RPortPrototype) -> None:
    """Populate a required port prototype.

    Receiver (the source port provides a sender-receiver interface): one
    receiver com spec, runnable and data received event per interface item,
    plus read accesses for every software component port of the package
    that requires the same interface.

    Client (the source port requires a client-server interface): one
    runnable with a synchronous server call point and one client com spec
    per operation.
    """
    rule = "add_rport_structure"
    port = ctx.source_of(rport, Port, rule)
    if port is None:
        return

    if port.provided_interfaces and not port.required_interfaces:
        interface = port.provided_interfaces[0]
        if classify_interface(interface) is InterfaceKind.SENDER_RECEIVER:
            _add_receiver_structure(ctx, rport, port, interface, rule)
    elif port.required_interfaces and not port.provided_interfaces:
        interface = port.required_interfaces[0]
        if classify_interface(interface) is InterfaceKind.CLIENT_SERVER:
            _add_client_structure(ctx, rport, port, interface, rule)


def _add_receiver_structure(
    ctx: TransformContext,
    rport: RPortPrototype,
    port: Port,
    interface: Classifier,
    rule: str,
) -> None:
    target_interface = _registered_interface(ctx, interface, SenderReceiverInterface, rule)
    if target_interface is None:
        return
    rport.required_interface = target_interface
    behavior = _port_behavior(ctx, port, rule)
    if behavior is None:
        return
    readers = _requiring_ports(port, interface)

    for item in interface.interface_items:
        data_element = _data_element(ctx, item, rule)
        if data_element is None:
            continue
        rport.required_com_specs.append(
            NonqueuedReceiverComSpec(data_element=data_element, init_value=create_init_value())
        )
        runnable = create_runnable(item.name)
        behavior.runnables.append(runnable)
        behavior.events.append(
            create_data_received_event(
                cv.PREFIX_DATA_RECEIVED + item.name, rport, data_element, runnable
            )
        )

        for _reader in readers:
            runnable.data_read_accesses.append(
                create_variable_access(cv.PREFIX_DATA_RECEIVED + item.name, rport, data_element)
            )
            for argument in item.arguments:
                argument_element = _data_element(ctx, argument, rule)
                if argument_element is None:
                    continue
                if argument_element not in target_interface.data_elements:
                    target_interface.data_elements.append(argument_element)
                behavior.events.append(
                    create_data_received_event(
                        f"{cv.PREFIX_DATA_RECEIVED}{item.name}_{argument.name}",
                        rport,
                        argument_element,
                        runnable,
                    )
                )
                runnable.data_read_accesses.append(
                    create_variable_access(
                        cv.PREFIX_DATA_RECEIVED + argument.name, rport, argument_element
                    )
                )


def _add_client_structure(
    ctx: TransformContext,
    rport: RPortPrototype,
    port: Port,
    interface: Classifier,
    rule: str,
) -> None:
    target_interface = _registered_interface(ctx, interface, ClientServerInterface, rule)
    if target_interface is None:
        return
    rport.required_interface = target_interface
    behavior = _port_behavior(ctx, port, rule)
    if behavior is None:
        return

    for item in interface.interface_items:
        operation = ctx.registry.lookup_as(item, ClientServerOperation)
        if operation is None:
            ctx.diagnostics.severe(
                DiagnosticCodes.M105_MISSING_OPERATION,
                f"No ClientServerOperation found for operation '{item.name}'",
                rule=rule,
                element=item,
            )
            continue
        runnable = create_runnable(f"{port.name}_{item.name}")
        behavior.runnables.append(runnable)
        runnable.server_call_points.append(
            SynchronousServerCallPoint(
                short_name=cv.PREFIX_SERVER_CALL_POINT + item.name,
                timeout=cv.SERVER_CALL_TIMEOUT,
                operation=ROperationInAtomicSwcInstanceRef(
                    context_r_port=rport, target_required_operation=operation
                ),
            )
        )
        rport.required_com_specs.append(ClientComSpec(operation=operation))


# =============================================================================
# Provided ports
# =============================================================================


def add_pport_structure(ctx: TransformContext, pport: PPortPrototype) -> None:
    """Populate a provided port prototype.

    Server (the source port provides a client-server interface): one server
    com spec per operation; runnables come from the implementation
    operations, not from this rule.

    Sender (the source port requires a sender-receiver interface): per data
    element a sender com spec and a runnable with a data send point; event
    receptions add one more send point per event argument.
    """
    rule = "add_pport_structure"
    port = ctx.source_of(pport, Port, rule)
    if port is None:
        return

    if port.provided_interfaces and not port.required_interfaces:
        interface = port.provided_interfaces[0]
        if classify_interface(interface) is InterfaceKind.CLIENT_SERVER:
            _add_server_structure(ctx, pport, interface, rule)
    elif port.required_interfaces and not port.provided_interfaces:
        interface = port.required_interfaces[0]
        if classify_interface(interface) is InterfaceKind.SENDER_RECEIVER:
            _add_sender_structure(ctx, pport, port, interface, rule)


def _add_server_structure(
    ctx: TransformContext, pport: PPortPrototype, interface: Classifier, rule: str
) -> None:
    target_interface = _registered_interface(ctx, interface, ClientServerInterface, rule)
    if target_interface is None:
        return
    pport.provided_interface = target_interface
    for item in interface.interface_items:
        operation = ctx.registry.lookup_as(item, ClientServerOperation)
        if operation is None:
            ctx.diagnostics.severe(
                DiagnosticCodes.M105_MISSING_OPERATION,
                f"No ClientServerOperation found for operation '{item.name}'",
                rule=rule,
                element=item,
            )
            continue
        pport.provided_com_specs.append(ServerComSpec(operation=operation))


def _add_sender_structure(
    ctx: TransformContext,
    pport: PPortPrototype,
    port: Port,
    interface: Classifier,
    rule: str,
) -> None:
    target_interface = _registered_interface(ctx, interface, SenderReceiverInterface, rule)
    if target_interface is None:
        return
    pport.provided_interface = target_interface
    behavior = _port_behavior(ctx, port, rule)
    if behavior is None:
        return

    for item in interface.interface_items:
        data_element = _data_element(ctx, item, rule)
        if data_element is None:
            continue
        pport.provided_com_specs.append(
            NonqueuedSenderComSpec(data_element=data_element, init_value=create_init_value())
        )
        runnable = create_runnable(f"{port.name}_{item.name}")
        behavior.runnables.append(runnable)
        runnable.data_send_points.append(
            create_variable_access(cv.PREFIX_DATA_SEND + item.name, pport, data_element)
        )

        if not is_event_reception(item):
            continue
        for argument in item.arguments:
            argument_element = _data_element(ctx, argument, rule)
            if argument_element is None:
                continue
            runnable.data_send_points.append(
                create_variable_access(cv.PREFIX_DATA_SEND + argument.name, pport, argument_element)
            )
