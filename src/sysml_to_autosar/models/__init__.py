"""Pydantic models for sysml2ar source documents.

These models validate the YAML/JSON architecture description before it is
turned into the source graph.

Primary Entry Points:
    load_source_document(path): Load and validate a YAML/JSON file
    validate_source_document(path): Validate and return list of errors
    SourceDocument: Root model for the entire document

Model Hierarchy:
    SourceDocument (root)
    ├── Meta - document metadata
    └── PackageDefinition[] - packages
        ├── DataTypeDefinition - enumerations, typedefs, primitives
        ├── EventDefinition - events with arguments
        ├── InterfaceDefinition - operations and receptions
        ├── ComponentDefinition - ports, operations, attributes
        ├── InstanceDefinition - parts typed by components
        └── LinkDefinition - connections between instance ports
"""

from sysml_to_autosar.models.common import (
    ElementDefinition,
    Identifier,
    StereotypeList,
    TagDefinition,
    TagValue,
    normalize_stereotypes,
)
from sysml_to_autosar.models.elements import (
    ArgumentDefinition,
    AttributeDefinition,
    ComponentDefinition,
    DataTypeDefinition,
    EventDefinition,
    InstanceDefinition,
    InterfaceDefinition,
    InterfaceItemDefinition,
    LinkDefinition,
    LinkEndpoint,
    LiteralDefinition,
    OperationDefinition,
    PackageDefinition,
    PortDefinition,
    ReceptionDefinition,
)
from sysml_to_autosar.models.loader import (
    LoaderError,
    load_source_document,
    load_yaml_file,
    validate_source_document,
)
from sysml_to_autosar.models.meta import Meta
from sysml_to_autosar.models.root import SCHEMA_VERSION, SourceDocument

__all__ = [
    "SCHEMA_VERSION",
    "ArgumentDefinition",
    "AttributeDefinition",
    "ComponentDefinition",
    "DataTypeDefinition",
    "ElementDefinition",
    "EventDefinition",
    "Identifier",
    "InstanceDefinition",
    "InterfaceDefinition",
    "InterfaceItemDefinition",
    "LinkDefinition",
    "LinkEndpoint",
    "LiteralDefinition",
    "LoaderError",
    "Meta",
    "OperationDefinition",
    "PackageDefinition",
    "PortDefinition",
    "ReceptionDefinition",
    "SourceDocument",
    "StereotypeList",
    "TagDefinition",
    "TagValue",
    "load_source_document",
    "load_yaml_file",
    "validate_source_document",
]
