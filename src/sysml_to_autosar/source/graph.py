"""Source graph: the SysML-like architecture model read by the transformation.

The graph is built once (see ``sysml_to_autosar.source.builder``) and treated as
read-only afterwards. Every element keeps a back-reference to its owner so rules
can navigate upwards (argument -> operation -> interface -> package) the same way
the modeling tool's reflective API allows.

Elements compare and hash by identity; two components with the same name in
different packages are different elements.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class MetaClass(Enum):
    """Closed set of source element categories.

    Replaces comparisons against user-defined meta-class strings.
    """

    PACKAGE = "Package"
    INTERFACE = "Interface"
    SOFTWARE_COMPONENT = "SoftwareComponent"
    BLOCK = "Block"
    OPERATION = "Operation"
    EVENT_RECEPTION = "EventReception"
    EVENT = "Event"
    ARGUMENT = "Argument"
    ATTRIBUTE = "Attribute"
    PORT = "Port"
    INSTANCE = "Instance"
    LINK = "Link"
    DATA_TYPE = "Type"
    ENUMERATION_LITERAL = "EnumerationLiteral"


class ClassifierKind(str, Enum):
    """Kind of a classifier in a package."""

    INTERFACE = "interface"
    SOFTWARE_COMPONENT = "software_component"
    BLOCK = "block"


class DataTypeKind(str, Enum):
    """Kind of a data type definition."""

    ENUMERATION = "enumeration"
    TYPEDEF = "typedef"
    PRIMITIVE = "primitive"


_CLASSIFIER_META_CLASS: dict[ClassifierKind, MetaClass] = {
    ClassifierKind.INTERFACE: MetaClass.INTERFACE,
    ClassifierKind.SOFTWARE_COMPONENT: MetaClass.SOFTWARE_COMPONENT,
    ClassifierKind.BLOCK: MetaClass.BLOCK,
}


@dataclass(frozen=True)
class Tag:
    """A tagged value attached to a source element.

    Attributes
    ----------
        name: Tag name (e.g. ``period``, ``event``, ``dataReceived``).
        value: Raw textual value, if any.
        type: Data type the tag's value specification points at, if any.

    """

    name: str
    value: str | None = None
    type: DataType | None = None


@dataclass(eq=False)
class SourceElement:
    """Common base of all source elements."""

    name: str
    owner: SourceElement | None = field(default=None, repr=False)
    stereotypes: list[str] = field(default_factory=list)
    tags: dict[str, Tag] = field(default_factory=dict, repr=False)

    META_CLASS: ClassVar[MetaClass]

    @property
    def meta_class(self) -> MetaClass:
        """Category of this element."""
        return self.META_CLASS

    @property
    def package(self) -> Package | None:
        """Nearest owning package."""
        node = self.owner
        while node is not None and not isinstance(node, Package):
            node = node.owner
        return node

    def has_stereotype(self, stereotype: str) -> bool:
        """Return True if the element carries the named stereotype."""
        return stereotype in self.stereotypes

    def tag(self, name: str) -> Tag | None:
        """Look up a tag by name."""
        return self.tags.get(name)

    def tag_value(self, name: str) -> str | None:
        """Return the raw value of a tag, or None when absent or empty."""
        tag = self.tags.get(name)
        return tag.value if tag is not None else None


@dataclass(eq=False)
class EnumerationLiteral(SourceElement):
    """A literal of an enumeration data type."""

    value: int = 0

    META_CLASS: ClassVar[MetaClass] = MetaClass.ENUMERATION_LITERAL


@dataclass(eq=False)
class DataType(SourceElement):
    """A data type (enumeration, typedef or primitive)."""

    kind: DataTypeKind = DataTypeKind.PRIMITIVE
    literals: list[EnumerationLiteral] = field(default_factory=list)

    META_CLASS: ClassVar[MetaClass] = MetaClass.DATA_TYPE

    @property
    def is_enumeration(self) -> bool:
        return self.kind == DataTypeKind.ENUMERATION

    @property
    def is_typedef(self) -> bool:
        return self.kind == DataTypeKind.TYPEDEF


@dataclass(eq=False)
class Argument(SourceElement):
    """An argument of an operation or an event."""

    type: DataType | None = None

    META_CLASS: ClassVar[MetaClass] = MetaClass.ARGUMENT


@dataclass(eq=False)
class Event(SourceElement):
    """A package-level event, possibly carrying arguments."""

    arguments: list[Argument] = field(default_factory=list)

    META_CLASS: ClassVar[MetaClass] = MetaClass.EVENT


@dataclass(eq=False)
class InterfaceItem(SourceElement):
    """Base of the items owned by a classifier (operations and receptions)."""

    @property
    def arguments(self) -> list[Argument]:
        return []


@dataclass(eq=False)
class Operation(InterfaceItem):
    """An operation of an interface or an implementation operation of a component."""

    operation_arguments: list[Argument] = field(default_factory=list)

    META_CLASS: ClassVar[MetaClass] = MetaClass.OPERATION

    @property
    def arguments(self) -> list[Argument]:
        return self.operation_arguments


@dataclass(eq=False)
class EventReception(InterfaceItem):
    """Reception of an event by an interface.

    The arguments of a reception are the arguments of its event.
    """

    event: Event | None = None

    META_CLASS: ClassVar[MetaClass] = MetaClass.EVENT_RECEPTION

    @property
    def arguments(self) -> list[Argument]:
        if self.event is None:
            return []
        return self.event.arguments


@dataclass(eq=False)
class Attribute(SourceElement):
    """An attribute of a classifier."""

    type: DataType | None = None
    is_static: bool = False

    META_CLASS: ClassVar[MetaClass] = MetaClass.ATTRIBUTE


@dataclass(eq=False)
class Port(SourceElement):
    """A port of a classifier with provided and required interface lists."""

    provided_interfaces: list[Classifier] = field(default_factory=list)
    required_interfaces: list[Classifier] = field(default_factory=list)

    META_CLASS: ClassVar[MetaClass] = MetaClass.PORT


@dataclass(eq=False)
class Classifier(SourceElement):
    """An interface, software component or plain block."""

    kind: ClassifierKind = ClassifierKind.BLOCK
    interface_items: list[InterfaceItem] = field(default_factory=list)
    ports: list[Port] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)

    @property
    def meta_class(self) -> MetaClass:
        return _CLASSIFIER_META_CLASS[self.kind]

    @property
    def operations(self) -> list[Operation]:
        """Operations among the interface items, in declaration order."""
        return [item for item in self.interface_items if isinstance(item, Operation)]

    @property
    def is_interface(self) -> bool:
        return self.kind == ClassifierKind.INTERFACE

    @property
    def is_software_component(self) -> bool:
        return self.kind == ClassifierKind.SOFTWARE_COMPONENT


@dataclass(eq=False)
class Instance(SourceElement):
    """A part (object) typed by a classifier."""

    type: Classifier | None = None

    META_CLASS: ClassVar[MetaClass] = MetaClass.INSTANCE


@dataclass(eq=False)
class Link(SourceElement):
    """A link between two instances through named ports."""

    from_instance: Instance | None = None
    from_port: Port | None = None
    to_instance: Instance | None = None
    to_port: Port | None = None

    META_CLASS: ClassVar[MetaClass] = MetaClass.LINK


@dataclass(eq=False)
class Package(SourceElement):
    """A package holding classifiers, events, data types, instances and links."""

    classifiers: list[Classifier] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    data_types: list[DataType] = field(default_factory=list)
    instances: list[Instance] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    META_CLASS: ClassVar[MetaClass] = MetaClass.PACKAGE

    @property
    def interfaces(self) -> list[Classifier]:
        return [c for c in self.classifiers if c.is_interface]

    @property
    def software_components(self) -> list[Classifier]:
        return [c for c in self.classifiers if c.is_software_component]

    def find_classifier(self, name: str) -> Classifier | None:
        """Find a classifier by name."""
        return next((c for c in self.classifiers if c.name == name), None)

    def find_event(self, name: str) -> Event | None:
        """Find an event by name."""
        return next((e for e in self.events if e.name == name), None)


@dataclass
class SourceModel:
    """The complete source graph.

    Attributes
    ----------
        name: Model name (taken from document metadata).
        packages: Top-level packages in declaration order.
        author: Optional author from the document metadata.
        revision: Optional revision string.

    """

    name: str
    packages: list[Package] = field(default_factory=list)
    author: str | None = None
    revision: str | None = None

    def find_package(self, name: str) -> Package | None:
        """Find a package by name."""
        return next((p for p in self.packages if p.name == name), None)
