"""Writers turning the target model into files.

Output Formats:
    arxml: AUTOSAR XML with an ``AUTOSAR/AR-PACKAGES`` root; references are
        absolute ``/Package/Sub/Name`` paths with a ``DEST`` kind attribute
    yaml: Plain YAML dump of the same tree, for review and diffing

Primary Classes:
    ArxmlWriter: Writes ARXML files (lxml)
    YamlWriter: Writes YAML dumps (PyYAML)

Example:
-------
    >>> from pathlib import Path
    >>> from sysml_to_autosar.converters import ArxmlWriter
    >>>
    >>> # Assuming result is a TransformResult
    >>> ArxmlWriter().write(result.model, Path("output.arxml"))
    >>>
    >>> # Get bytes without writing to file
    >>> xml_bytes = ArxmlWriter(pretty_print=False).write_bytes(result.model)

"""

from sysml_to_autosar.converters.arxml_writer import (
    ArxmlWriter,
    convert_source_to_arxml,
    format_value,
    write_arxml,
)
from sysml_to_autosar.converters.yaml_writer import YamlWriter, model_to_dict, node_to_dict

__all__ = [
    "ArxmlWriter",
    "YamlWriter",
    "convert_source_to_arxml",
    "format_value",
    "model_to_dict",
    "node_to_dict",
    "write_arxml",
]
