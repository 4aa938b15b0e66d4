"""Hand-built source graph elements for predicate and resolution tests."""

from sysml_to_autosar.source import (
    Attribute,
    Classifier,
    ClassifierKind,
    EventReception,
    InterfaceItem,
    Operation,
    Package,
    Port,
    Tag,
)


def make_interface(name: str, *items: InterfaceItem, package: Package | None = None) -> Classifier:
    """Create an interface owning ``items``."""
    interface = Classifier(name=name, owner=package, kind=ClassifierKind.INTERFACE)
    for item in items:
        item.owner = interface
        interface.interface_items.append(item)
    if package is not None:
        package.classifiers.append(interface)
    return interface


def make_component(
    name: str,
    *,
    ports: list[Port] | None = None,
    operations: list[Operation] | None = None,
    attributes: list[Attribute] | None = None,
    kind: ClassifierKind = ClassifierKind.SOFTWARE_COMPONENT,
    package: Package | None = None,
) -> Classifier:
    """Create a component owning its ports, operations and attributes."""
    component = Classifier(name=name, owner=package, kind=kind)
    for port in ports or []:
        port.owner = component
        component.ports.append(port)
    for operation in operations or []:
        operation.owner = component
        component.interface_items.append(operation)
    for attribute in attributes or []:
        attribute.owner = component
        component.attributes.append(attribute)
    if package is not None:
        package.classifiers.append(component)
    return component


def cs_operation(name: str, event: str | None = None) -> Operation:
    """An «operationWevent» operation, optionally tagged with its event."""
    operation = Operation(name=name, stereotypes=["operationWevent"])
    if event is not None:
        operation.tags = {"event": Tag(name="event", value=event)}
    return operation


def sr_operation(name: str) -> Operation:
    """An «operationWdata» operation."""
    return Operation(name=name, stereotypes=["operationWdata"])


def reception(name: str) -> EventReception:
    """A reception without an event."""
    return EventReception(name=name)
