"""Source graph (SysML-like architecture model) and its document builder."""

from sysml_to_autosar.source.builder import (
    SourceModelBuilder,
    SourceModelError,
    build_source_model,
)
from sysml_to_autosar.source.graph import (
    Argument,
    Attribute,
    Classifier,
    ClassifierKind,
    DataType,
    DataTypeKind,
    EnumerationLiteral,
    Event,
    EventReception,
    Instance,
    InterfaceItem,
    Link,
    MetaClass,
    Operation,
    Package,
    Port,
    SourceElement,
    SourceModel,
    Tag,
)

__all__ = [
    "Argument",
    "Attribute",
    "Classifier",
    "ClassifierKind",
    "DataType",
    "DataTypeKind",
    "EnumerationLiteral",
    "Event",
    "EventReception",
    "Instance",
    "InterfaceItem",
    "Link",
    "MetaClass",
    "Operation",
    "Package",
    "Port",
    "SourceElement",
    "SourceModel",
    "SourceModelBuilder",
    "SourceModelError",
    "Tag",
    "build_source_model",
]
