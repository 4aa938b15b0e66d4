"""Name-resolution helpers.

Implementation operations of a component are matched to interface
operations by name suffix: ``impl.name.endswith(interface_operation.name)``,
since implementation names are usually prefixed. The search order is
component port order, then interface order within the port, then operation
order within the interface. ``find_*`` helpers return the first match;
``find_all_*`` helpers return every match so callers can report ambiguity.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sysml_to_autosar.source.graph import Classifier, Event, Operation, Port
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.transform.diagnostics import DiagnosticCodes
from sysml_to_autosar.transform.predicates import (
    is_client_server_interface,
    is_operation_with_event,
)

if TYPE_CHECKING:
    from sysml_to_autosar.transform.diagnostics import DiagnosticLog


@dataclass(frozen=True, eq=False)
class OperationMatch:
    """An interface operation reached through a component port."""

    port: Port
    interface: Classifier
    operation: Operation

    @property
    def component(self) -> Classifier | None:
        owner = self.port.owner
        return owner if isinstance(owner, Classifier) else None


def _port_interfaces(port: Port, provided: bool) -> list[Classifier]:
    return port.provided_interfaces if provided else port.required_interfaces


def _iter_interface_operations(
    component: Classifier, provided: bool
) -> Iterator[OperationMatch]:
    for port in component.ports:
        for interface in _port_interfaces(port, provided):
            for operation in interface.operations:
                yield OperationMatch(port, interface, operation)


# =============================================================================
# Implementation operation -> port
# =============================================================================


def find_all_operation_matches(impl: Operation, provided: bool = True) -> list[OperationMatch]:
    """Every interface operation the implementation operation matches by suffix.

    Args:
    ----
        impl: Operation owned by a component.
        provided: Search provided interfaces if True, required ones otherwise.

    Returns:
    -------
        Matches in search order; empty if the owner is not a classifier.

    """
    component = impl.owner
    if not isinstance(component, Classifier):
        return []
    return [
        match
        for match in _iter_interface_operations(component, provided)
        if impl.name.endswith(match.operation.name)
    ]


def find_operation_match(impl: Operation, provided: bool = True) -> OperationMatch | None:
    """First interface operation the implementation operation matches by suffix."""
    component = impl.owner
    if not isinstance(component, Classifier):
        return None
    for match in _iter_interface_operations(component, provided):
        if impl.name.endswith(match.operation.name):
            return match
    return None


def find_providing_port(impl: Operation) -> Port | None:
    """Port whose provided interface has an operation the implementation matches."""
    match = find_operation_match(impl, provided=True)
    return match.port if match is not None else None


def find_requiring_port(impl: Operation) -> Port | None:
    """Port whose required interface has an operation the implementation matches."""
    match = find_operation_match(impl, provided=False)
    return match.port if match is not None else None


def _distinct_ports(matches: list[OperationMatch]) -> list[Port]:
    ports: list[Port] = []
    for match in matches:
        if not any(port is match.port for port in ports):
            ports.append(match.port)
    return ports


def find_all_providing_ports(impl: Operation) -> list[Port]:
    return _distinct_ports(find_all_operation_matches(impl, provided=True))


def find_all_requiring_ports(impl: Operation) -> list[Port]:
    return _distinct_ports(find_all_operation_matches(impl, provided=False))


def is_provided_operation_impl(impl: Operation) -> bool:
    """Implementation of an operation of some provided interface of its owner."""
    return find_operation_match(impl, provided=True) is not None


def is_client_server_operation_impl(impl: Operation, component: Classifier) -> bool:
    """Check the first provided interface operation with the exact same name.

    Returns True if that operation belongs to a client-server interface.
    """
    for match in _iter_interface_operations(component, provided=True):
        if match.operation.name == impl.name:
            return is_client_server_interface(match.interface)
    return False


# =============================================================================
# Event -> operation
# =============================================================================


def _implementations(match: OperationMatch) -> list[Operation]:
    owner = match.component
    if owner is None:
        return []
    return [op for op in owner.operations if op.name.endswith(match.operation.name)]


def _event_operations(
    event: Event, provided: bool, component: Classifier | None
) -> Iterator[OperationMatch]:
    if component is not None:
        components = [component]
    else:
        package = event.package
        components = package.software_components if package is not None else []
    for candidate in components:
        for match in _iter_interface_operations(candidate, provided):
            if (
                is_operation_with_event(match.operation)
                and match.operation.tag_value(cv.TAG_EVENT) == event.name
            ):
                yield match


def find_operation_with_event(
    event: Event, provided: bool = True, component: Classifier | None = None
) -> OperationMatch | None:
    """Find the «operationWevent» operation whose ``event`` tag names the event.

    Args:
    ----
        event: Package-level event.
        provided: Search provided interfaces if True, required ones otherwise.
        component: Restrict the search to this component's ports; by default
            every software component of the event's package is searched.

    Returns:
    -------
        The first match, or None.

    """
    return next(_event_operations(event, provided, component), None)


def find_all_operations_with_event(
    event: Event, provided: bool = True, component: Classifier | None = None
) -> list[OperationMatch]:
    return list(_event_operations(event, provided, component))


def find_all_operation_impls_for_event(
    event: Event, provided: bool = True, component: Classifier | None = None
) -> list[Operation]:
    """Every component operation implementing the operation triggered by the event."""
    match = find_operation_with_event(event, provided, component)
    return _implementations(match) if match is not None else []


def find_operation_impl_for_event(
    event: Event,
    provided: bool = True,
    component: Classifier | None = None,
    diagnostics: DiagnosticLog | None = None,
) -> Operation | None:
    """Find the component operation that implements the event's operation.

    The interface operation is located with ``find_operation_with_event``;
    the implementation is the first operation of the port's owner whose name
    ends with the interface operation's name.
    """
    match = find_operation_with_event(event, provided, component)
    if match is None:
        if diagnostics is not None:
            diagnostics.severe(
                DiagnosticCodes.M105_MISSING_OPERATION,
                f"No matching «operationWevent» operation found for event '{event.name}'",
                rule="find_operation_impl_for_event",
                element=event,
            )
        return None
    impls = _implementations(match)
    return impls[0] if impls else None
