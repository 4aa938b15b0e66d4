"""sysml-to-autosar: Converter from SysML-like architecture models to AUTOSAR software components.

This package provides tools for:
- Loading and validating YAML/JSON architecture descriptions
- Building the source graph (packages, components, ports, interfaces, events)
- Transforming it into an AUTOSAR target graph with a rule-driven core
- Writing the target graph as ARXML or YAML

Quick Start:
    >>> from pathlib import Path
    >>> from sysml_to_autosar.models import load_source_document
    >>> from sysml_to_autosar.source import build_source_model
    >>> from sysml_to_autosar.transform import SysmlToAutosarTransformer
    >>> from sysml_to_autosar.converters import ArxmlWriter
    >>>
    >>> doc = load_source_document("powertrain.yaml")
    >>> result = SysmlToAutosarTransformer().transform(build_source_model(doc))
    >>> ArxmlWriter().write(result.model, Path("powertrain.arxml"))

Modules:
    models: Pydantic models for the source document schema
    source: Source graph (SysML-like) and document builder
    target: Target graph (AUTOSAR-like) element kinds
    transform: Rule-driven transformation core and default driver
    validation: Source reference checks and target completeness checks
    converters: ARXML and YAML writers
    cli: Command-line interface
"""

__version__ = "0.1.0"
