"""Source graph to AUTOSAR transformation module.

This module turns a source graph (see ``sysml_to_autosar.source``) into an
AUTOSAR target graph (see ``sysml_to_autosar.target``).

The transformation process:
    1. Create one root AR package per source package
    2. Process data types into application and implementation data types
    3. Classify interfaces as sender-receiver or client-server
    4. Process software components, their attributes, operations and ports
    5. Process events into operation-invoked events
    6. Wire port prototypes (com specs, runnables, RTE events)
    7. Process links into assembly connectors

Primary Class:
    SysmlToAutosarTransformer: Main transformer class

Example:
-------
    >>> from sysml_to_autosar.models import load_source_document
    >>> from sysml_to_autosar.source import build_source_model
    >>> from sysml_to_autosar.transform import SysmlToAutosarTransformer
    >>>
    >>> doc = load_source_document("powertrain.yaml")
    >>> result = SysmlToAutosarTransformer().transform(build_source_model(doc))
    >>> print(f"Severe: {len(result.diagnostics.severe_records)}")

"""

from sysml_to_autosar.transform.context import TransformContext
from sysml_to_autosar.transform.diagnostics import (
    Diagnostic,
    DiagnosticCodes,
    DiagnosticLog,
    DiagnosticSeverity,
)
from sysml_to_autosar.transform.registry import (
    CorrespondenceRegistry,
    DuplicateCorrespondenceError,
)
from sysml_to_autosar.transform.transformer import (
    SysmlToAutosarTransformer,
    TransformFailedError,
    TransformResult,
)

__all__ = [
    "CorrespondenceRegistry",
    "Diagnostic",
    "DiagnosticCodes",
    "DiagnosticLog",
    "DiagnosticSeverity",
    "DuplicateCorrespondenceError",
    "SysmlToAutosarTransformer",
    "TransformContext",
    "TransformFailedError",
    "TransformResult",
]
