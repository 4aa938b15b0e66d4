"""Classification predicates.

Pure functions that decide whether a source element takes part in the
transformation and which of the mutually exclusive target shapes it gets.
Predicates that report a classification problem accept an optional
diagnostics sink; without one they stay silent.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sysml_to_autosar.source.graph import (
    Argument,
    Attribute,
    Classifier,
    Event,
    EventReception,
    Instance,
    InterfaceItem,
    Operation,
    Port,
    SourceElement,
)
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.transform.diagnostics import DiagnosticCodes

if TYPE_CHECKING:
    from sysml_to_autosar.transform.diagnostics import DiagnosticLog


class PortRole(Enum):
    """Target shape of a source port."""

    PROVIDED = "provided"
    REQUIRED = "required"
    NONE = "none"


class InterfaceKind(Enum):
    """Communication style of a source interface."""

    SENDER_RECEIVER = "sender_receiver"
    CLIENT_SERVER = "client_server"
    NONE = "none"


# =============================================================================
# Interface items
# =============================================================================


def is_operation_with_event(item: SourceElement) -> bool:
    """Operation marked «operationWevent»."""
    return isinstance(item, Operation) and item.has_stereotype(cv.STEREOTYPE_OPERATION_WITH_EVENT)


def is_operation_with_data(item: SourceElement) -> bool:
    """Operation marked «operationWdata»."""
    return isinstance(item, Operation) and item.has_stereotype(cv.STEREOTYPE_OPERATION_WITH_DATA)


def is_event_reception(item: SourceElement) -> bool:
    return isinstance(item, EventReception)


def is_sender_receiver_item(item: InterfaceItem) -> bool:
    """Item that fits a sender-receiver interface."""
    return is_operation_with_data(item) or is_event_reception(item)


# =============================================================================
# Interface kind
# =============================================================================


def is_sender_receiver_interface(
    interface: Classifier, diagnostics: DiagnosticLog | None = None
) -> bool:
    """Check whether every item is an «operationWdata» operation or a reception.

    A partial match is reported as severe: such an interface is left
    untransformed instead of being transformed halfway.

    Args:
    ----
        interface: Source interface.
        diagnostics: Sink for the partial-match report.

    Returns:
    -------
        True if the interface becomes a SenderReceiverInterface.

    """
    items = interface.interface_items
    matching = sum(1 for item in items if is_sender_receiver_item(item))
    if matching == len(items):
        return True
    if matching > 0 and diagnostics is not None:
        diagnostics.severe(
            DiagnosticCodes.C001_PARTIAL_SENDER_RECEIVER,
            f"Interface '{interface.name}' should only contain «operationWdata» "
            "operations or receptions",
            rule="is_sender_receiver_interface",
            element=interface,
        )
    return False


def is_client_server_interface(interface: Classifier) -> bool:
    """Check whether every item is an «operationWevent» operation.

    Unlike the sender-receiver check, a partial match is not reported.
    """
    return all(is_operation_with_event(item) for item in interface.interface_items)


def classify_interface(
    interface: Classifier, diagnostics: DiagnosticLog | None = None
) -> InterfaceKind:
    """Sender-receiver is checked first, so an empty interface is sender-receiver."""
    if is_sender_receiver_interface(interface, diagnostics):
        return InterfaceKind.SENDER_RECEIVER
    if is_client_server_interface(interface):
        return InterfaceKind.CLIENT_SERVER
    return InterfaceKind.NONE


# =============================================================================
# Port role
# =============================================================================


def port_interface(port: Port) -> Classifier | None:
    """The single interface that classifies a port.

    Returns the first interface of whichever list is populated, or None if
    both or neither are.
    """
    if port.provided_interfaces and not port.required_interfaces:
        return port.provided_interfaces[0]
    if port.required_interfaces and not port.provided_interfaces:
        return port.required_interfaces[0]
    return None


def classify_port(port: Port, diagnostics: DiagnosticLog | None = None) -> PortRole:
    """Decide which port prototype a source port becomes.

    * provided client-server or required sender-receiver: provided port
      (server or sender)
    * provided sender-receiver or required client-server: required port
      (receiver or client)

    The interface kind comes from ``classify_interface``, so an empty
    interface counts as sender-receiver here as well. Interface level
    problems are reported where interfaces are processed; only a port with
    both or neither interface lists populated is reported here, as a
    warning, and gets no role.
    """
    provided = port.provided_interfaces
    required = port.required_interfaces
    if provided and not required:
        kind = classify_interface(provided[0])
        if kind is InterfaceKind.CLIENT_SERVER:
            return PortRole.PROVIDED
        if kind is InterfaceKind.SENDER_RECEIVER:
            return PortRole.REQUIRED
        return PortRole.NONE
    if required and not provided:
        kind = classify_interface(required[0])
        if kind is InterfaceKind.SENDER_RECEIVER:
            return PortRole.PROVIDED
        if kind is InterfaceKind.CLIENT_SERVER:
            return PortRole.REQUIRED
        return PortRole.NONE
    if diagnostics is not None:
        state = "both provided and required" if provided else "no"
        diagnostics.warning(
            DiagnosticCodes.C002_UNCLASSIFIABLE_PORT,
            f"Port '{port.name}' has {state} interfaces",
            rule="classify_port",
            element=port,
        )
    return PortRole.NONE


def is_provided_port(port: Port, diagnostics: DiagnosticLog | None = None) -> bool:
    """Server port (provides client-server) or sender port (requires sender-receiver)."""
    return classify_port(port, diagnostics) is PortRole.PROVIDED


def is_required_port(port: Port, diagnostics: DiagnosticLog | None = None) -> bool:
    """Receiver port (provides sender-receiver) or client port (requires client-server)."""
    return classify_port(port, diagnostics) is PortRole.REQUIRED


# =============================================================================
# Element level
# =============================================================================


def is_event_for_operation_with_event(event: Event) -> bool:
    """Event named by the ``event`` tag of an «operationWevent» operation.

    Only operations of interfaces provided by software component ports in
    the event's package count.
    """
    # resolution imports this module
    from sysml_to_autosar.transform.resolution import find_operation_with_event

    return find_operation_with_event(event, provided=True) is not None


def is_reception_for_data_element(reception: EventReception) -> bool:
    """Reception whose event does not trigger an «operationWevent» operation."""
    if reception.event is None:
        return False
    return not is_event_for_operation_with_event(reception.event)


def is_event_with_parameter(event: Event) -> bool:
    return len(event.arguments) > 0


def is_static_attribute(attribute: Attribute) -> bool:
    """Static attribute of a software component."""
    owner = attribute.owner
    return (
        attribute.is_static
        and isinstance(owner, Classifier)
        and owner.is_software_component
    )


def is_client_server_argument(argument: Argument) -> bool:
    """Argument of an operation of a client-server interface."""
    operation = argument.owner
    if not isinstance(operation, Operation):
        return False
    interface = operation.owner
    if not isinstance(interface, Classifier) or not interface.is_interface:
        return False
    return is_client_server_interface(interface)


def is_sender_receiver_argument(argument: Argument) -> bool:
    """Argument of a sender-receiver operation or of an event received by one.

    For event arguments the first interface of the event's package with a
    reception of that event decides.
    """
    owner = argument.owner
    if isinstance(owner, Operation):
        interface = owner.owner
        if isinstance(interface, Classifier) and interface.is_interface:
            return is_sender_receiver_interface(interface)
        return False
    if isinstance(owner, Event):
        package = owner.package
        if package is None:
            return False
        for interface in package.interfaces:
            for item in interface.interface_items:
                if isinstance(item, EventReception) and item.event is owner:
                    return is_sender_receiver_interface(interface)
    return False


def owner_is_software_component(operation: Operation) -> bool:
    owner = operation.owner
    return isinstance(owner, Classifier) and owner.is_software_component


def owner_is_interface(operation: Operation) -> bool:
    owner = operation.owner
    return isinstance(owner, Classifier) and owner.is_interface


def is_periodic_operation(operation: Operation) -> bool:
    """Component operation marked «periodic»: it becomes a timing event."""
    return owner_is_software_component(operation) and operation.has_stereotype(
        cv.STEREOTYPE_PERIODIC
    )


def is_used_in_link(instance: Instance) -> bool:
    """Instance that is an endpoint of a link in its package."""
    package = instance.package
    if package is None:
        return False
    return any(
        link.from_instance is instance or link.to_instance is instance for link in package.links
    )
