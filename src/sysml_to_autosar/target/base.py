"""Building blocks of the target graph.

Target nodes are mutable dataclasses. Every field is tagged through its
metadata with a role:

* ``contained``: the node owns the child (or list of children); assigning or
  appending sets the child's ``container`` back-reference.
* ``reference``: a cross-reference to a node owned elsewhere.
* ``value``: a plain scalar attribute.

Writers walk the fields generically using the role and the AUTOSAR XML tag
stored next to it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import Field, dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar


class ARKind(Enum):
    """Closed set of target node kinds.

    Values are the AUTOSAR XML element names.
    """

    AR_PACKAGE = "AR-PACKAGE"
    APPLICATION_SW_COMPONENT_TYPE = "APPLICATION-SW-COMPONENT-TYPE"
    COMPOSITION_SW_COMPONENT_TYPE = "COMPOSITION-SW-COMPONENT-TYPE"
    SWC_INTERNAL_BEHAVIOR = "SWC-INTERNAL-BEHAVIOR"
    RUNNABLE_ENTITY = "RUNNABLE-ENTITY"
    DATA_RECEIVED_EVENT = "DATA-RECEIVED-EVENT"
    TIMING_EVENT = "TIMING-EVENT"
    OPERATION_INVOKED_EVENT = "OPERATION-INVOKED-EVENT"
    P_PORT_PROTOTYPE = "P-PORT-PROTOTYPE"
    R_PORT_PROTOTYPE = "R-PORT-PROTOTYPE"
    SENDER_RECEIVER_INTERFACE = "SENDER-RECEIVER-INTERFACE"
    CLIENT_SERVER_INTERFACE = "CLIENT-SERVER-INTERFACE"
    CLIENT_SERVER_OPERATION = "CLIENT-SERVER-OPERATION"
    ARGUMENT_DATA_PROTOTYPE = "ARGUMENT-DATA-PROTOTYPE"
    VARIABLE_DATA_PROTOTYPE = "VARIABLE-DATA-PROTOTYPE"
    PARAMETER_DATA_PROTOTYPE = "PARAMETER-DATA-PROTOTYPE"
    PER_INSTANCE_MEMORY = "PER-INSTANCE-MEMORY"
    NONQUEUED_SENDER_COM_SPEC = "NONQUEUED-SENDER-COM-SPEC"
    NONQUEUED_RECEIVER_COM_SPEC = "NONQUEUED-RECEIVER-COM-SPEC"
    SERVER_COM_SPEC = "SERVER-COM-SPEC"
    CLIENT_COM_SPEC = "CLIENT-COM-SPEC"
    SYNCHRONOUS_SERVER_CALL_POINT = "SYNCHRONOUS-SERVER-CALL-POINT"
    VARIABLE_ACCESS = "VARIABLE-ACCESS"
    AUTOSAR_VARIABLE_REF = "AUTOSAR-VARIABLE-REF"
    VARIABLE_IN_ATOMIC_SWC_TYPE_INSTANCE_REF = "VARIABLE-IN-ATOMIC-SWC-TYPE-INSTANCE-REF"
    R_VARIABLE_IN_ATOMIC_SWC_INSTANCE_REF = "R-VARIABLE-IN-ATOMIC-SWC-INSTANCE-REF"
    R_OPERATION_IN_ATOMIC_SWC_INSTANCE_REF = "R-OPERATION-IN-ATOMIC-SWC-INSTANCE-REF"
    P_OPERATION_IN_ATOMIC_SWC_INSTANCE_REF = "P-OPERATION-IN-ATOMIC-SWC-INSTANCE-REF"
    SW_COMPONENT_PROTOTYPE = "SW-COMPONENT-PROTOTYPE"
    ASSEMBLY_SW_CONNECTOR = "ASSEMBLY-SW-CONNECTOR"
    P_PORT_IN_COMPOSITION_INSTANCE_REF = "P-PORT-IN-COMPOSITION-INSTANCE-REF"
    R_PORT_IN_COMPOSITION_INSTANCE_REF = "R-PORT-IN-COMPOSITION-INSTANCE-REF"
    SW_DATA_DEF_PROPS = "SW-DATA-DEF-PROPS"
    SW_DATA_DEF_PROPS_CONDITIONAL = "SW-DATA-DEF-PROPS-CONDITIONAL"
    NUMERICAL_VALUE_SPECIFICATION = "NUMERICAL-VALUE-SPECIFICATION"
    APPLICATION_PRIMITIVE_DATA_TYPE = "APPLICATION-PRIMITIVE-DATA-TYPE"
    IMPLEMENTATION_DATA_TYPE = "IMPLEMENTATION-DATA-TYPE"
    COMPU_METHOD = "COMPU-METHOD"
    COMPU_SCALE = "COMPU-SCALE"
    UNIT = "UNIT"


class FieldRole(Enum):
    """Role of a target node field."""

    CONTAINED = "contained"
    REFERENCE = "reference"
    VALUE = "value"


def contained_list(tag: str) -> Any:
    """Declare a list of owned children written under ``tag``."""
    return field(default_factory=list, metadata={"role": FieldRole.CONTAINED, "tag": tag})


def contained(tag: str, *, wrap: bool = False) -> Any:
    """Declare a single owned child.

    With ``wrap`` the child is written inside its own kind element, otherwise
    its content is written directly under ``tag``.
    """
    return field(
        default=None,
        metadata={"role": FieldRole.CONTAINED, "tag": tag, "wrap": wrap},
    )


def reference(tag: str) -> Any:
    """Declare a cross-reference written as a ``DEST``-typed path."""
    return field(default=None, repr=False, metadata={"role": FieldRole.REFERENCE, "tag": tag})


def attribute(tag: str, default: Any = None) -> Any:
    """Declare a scalar attribute."""
    return field(default=default, metadata={"role": FieldRole.VALUE, "tag": tag})


def role_fields(cls: type) -> tuple[Field, ...]:
    """Fields of a node class that carry a role, in declaration order."""
    return tuple(f for f in fields(cls) if "role" in f.metadata)


_CONTAINED_FIELDS: dict[type, tuple[str, ...]] = {}


def contained_field_names(cls: type) -> tuple[str, ...]:
    """Names of the ``contained`` fields of a node class, in declaration order."""
    names = _CONTAINED_FIELDS.get(cls)
    if names is None:
        names = tuple(
            f.name for f in fields(cls) if f.metadata.get("role") is FieldRole.CONTAINED
        )
        _CONTAINED_FIELDS[cls] = names
    return names


class Containment(list):
    """A list that owns its items.

    Adding an item sets its ``container`` to the owner; an item that already
    sits in another owning collection is moved.
    """

    def __init__(self, owner: ARElement | None, items: Iterable[ARElement] = ()) -> None:
        super().__init__()
        self.owner = owner
        self.extend(items)

    def _adopt(self, item: ARElement) -> None:
        if item.container is not None:
            item.detach()
        item.container = self.owner

    def append(self, item: ARElement) -> None:
        self._adopt(item)
        super().append(item)

    def insert(self, index: int, item: ARElement) -> None:  # type: ignore[override]
        self._adopt(item)
        super().insert(index, item)

    def extend(self, items: Iterable[ARElement]) -> None:
        for item in items:
            self.append(item)

    def __iadd__(self, items: Iterable[ARElement]) -> Containment:  # type: ignore[override]
        self.extend(items)
        return self

    def remove_identity(self, item: ARElement) -> bool:
        """Remove ``item`` by identity; return True if it was present."""
        for index, child in enumerate(self):
            if child is item:
                del self[index]
                return True
        return False


@dataclass(eq=False)
class ARElement:
    """Common base of all target nodes.

    Attributes
    ----------
        short_name: AUTOSAR short name (empty for non-referrable nodes).
        container: Owning node, set when the node is added to a collection.
        in_progress: Set while an enrichment rule works on the node.

    """

    short_name: str = ""
    container: ARElement | None = field(default=None, repr=False)
    in_progress: bool = field(default=False, repr=False)

    KIND: ClassVar[ARKind]
    REFERRABLE: ClassVar[bool] = True

    def __setattr__(self, name: str, new_value: Any) -> None:
        if name in contained_field_names(type(self)):
            if isinstance(new_value, list) and not isinstance(new_value, Containment):
                new_value = Containment(self, new_value)
            elif isinstance(new_value, ARElement):
                if new_value.container is not None and new_value.container is not self:
                    new_value.detach()
                new_value.container = self
        super().__setattr__(name, new_value)

    @property
    def kind(self) -> ARKind:
        return self.KIND

    @property
    def path(self) -> str:
        """Absolute reference path, e.g. ``/Powertrain/SoftwareTypes/Interfaces/ISpeed``."""
        names: list[str] = []
        node: ARElement | None = self
        while node is not None:
            if node.REFERRABLE and node.short_name:
                names.append(node.short_name)
            node = node.container
        return "/" + "/".join(reversed(names))

    def detach(self) -> None:
        """Remove this node from its current container."""
        owner = self.container
        if owner is None:
            return
        for name in contained_field_names(type(owner)):
            current = getattr(owner, name)
            if isinstance(current, Containment):
                if current.remove_identity(self):
                    break
            elif current is self:
                object.__setattr__(owner, name, None)
                break
        self.container = None

    def children(self) -> Iterator[ARElement]:
        """Directly contained nodes, in field order."""
        for name in contained_field_names(type(self)):
            current = getattr(self, name)
            if isinstance(current, list):
                yield from current
            elif current is not None:
                yield current

    def walk(self) -> Iterator[ARElement]:
        """This node and all nodes contained below it, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()

    def ancestor(self, cls: type[ARElement]) -> ARElement | None:
        """Nearest container that is an instance of ``cls``."""
        node = self.container
        while node is not None:
            if isinstance(node, cls):
                return node
            node = node.container
        return None
