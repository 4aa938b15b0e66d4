"""Write the target model as AUTOSAR XML (ARXML).

The writer walks node fields generically: the role and XML tag stored in
each field's metadata decide how the field is written.

* value fields become text elements; a ``/`` in the tag nests elements
* reference fields become ``<TAG DEST="KIND">/absolute/path</TAG>``
* contained lists become a tag holding one kind element per child
* a single contained child is written inline under its tag, or inside its
  own kind element when the field is declared with ``wrap``
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from lxml import etree

from sysml_to_autosar.target.base import ARElement, FieldRole, role_fields
from sysml_to_autosar.target.elements import Limit
from sysml_to_autosar.target.model import ARModel

logger = logging.getLogger(__name__)

AUTOSAR_NAMESPACE = "http://autosar.org/schema/r4.0"
AUTOSAR_SCHEMA_LOCATION = f"{AUTOSAR_NAMESPACE} AUTOSAR_4-0-3.xsd"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"


def format_value(value: Any) -> str:
    """Format a scalar attribute as ARXML text.

    Examples:
    --------
        >>> format_value(True)
        'true'
        >>> format_value(100.0)
        '100'
        >>> format_value(0.01)
        '0.01'

    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


class ArxmlWriter:
    """Serialize an ARModel to ARXML.

    Usage:
        writer = ArxmlWriter()
        writer.write(model, Path("output.arxml"))

    Or for in-memory conversion:
        xml_bytes = writer.write_bytes(model)
    """

    def __init__(self, pretty_print: bool = True) -> None:
        """Initialize the writer.

        Args:
        ----
            pretty_print: Indent the generated XML.

        """
        self._pretty_print = pretty_print

    def write(self, model: ARModel, output_path: Path) -> None:
        """Write the model to an ARXML file.

        Args:
        ----
            model: The target model to write.
            output_path: Output file path. Parent directories will be created.

        """
        xml_bytes = self.write_bytes(model)

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "wb") as f:
            f.write(xml_bytes)
        logger.info("Wrote %d bytes of ARXML to %s", len(xml_bytes), output_path)

    def write_bytes(self, model: ARModel) -> bytes:
        """Serialize the model without writing to a file.

        Args:
        ----
            model: The target model to serialize.

        Returns:
        -------
            UTF-8 encoded ARXML document with XML declaration.

        """
        root = self.build_tree(model)
        return etree.tostring(
            root,
            pretty_print=self._pretty_print,
            xml_declaration=True,
            encoding="UTF-8",
        )

    def build_tree(self, model: ARModel) -> etree._Element:
        """Build the ``AUTOSAR`` root element for the model."""
        root = etree.Element(
            _qname("AUTOSAR"),
            nsmap={None: AUTOSAR_NAMESPACE, "xsi": XSI_NAMESPACE},
        )
        root.set(f"{{{XSI_NAMESPACE}}}schemaLocation", AUTOSAR_SCHEMA_LOCATION)
        packages = etree.SubElement(root, _qname("AR-PACKAGES"))
        for package in model.packages:
            self._write_node(packages, package)
        return root

    # ------------------------------------------------------------------
    # Node serialization
    # ------------------------------------------------------------------

    def _write_node(self, parent: etree._Element, node: ARElement) -> etree._Element:
        element = etree.SubElement(parent, _qname(node.kind.value))
        self._write_content(element, node)
        return element

    def _write_content(self, element: etree._Element, node: ARElement) -> None:
        if node.REFERRABLE and node.short_name:
            etree.SubElement(element, _qname("SHORT-NAME")).text = node.short_name

        for f in role_fields(type(node)):
            value = getattr(node, f.name)
            if value is None or (isinstance(value, list) and not value):
                continue
            role = f.metadata["role"]
            tag = f.metadata["tag"]

            if role is FieldRole.VALUE:
                self._write_value(element, tag, value)
            elif role is FieldRole.REFERENCE:
                ref = _sub_path(element, tag)
                ref.set("DEST", value.kind.value)
                ref.text = value.path
            elif isinstance(value, list):
                holder = _sub_path(element, tag)
                for child in value:
                    self._write_node(holder, child)
            elif f.metadata.get("wrap"):
                self._write_node(_sub_path(element, tag), value)
            else:
                self._write_content(_sub_path(element, tag), value)

    def _write_value(self, element: etree._Element, tag: str, value: Any) -> None:
        target = _sub_path(element, tag)
        if isinstance(value, Limit):
            target.set("INTERVAL-TYPE", value.interval_type)
            target.text = format_value(value.value)
        else:
            target.text = format_value(value)


def _qname(tag: str) -> str:
    return f"{{{AUTOSAR_NAMESPACE}}}{tag}"


def _sub_path(parent: etree._Element, tag: str) -> etree._Element:
    """Create nested elements for a ``A/B`` tag path and return the innermost."""
    element = parent
    for part in tag.split("/"):
        element = etree.SubElement(element, _qname(part))
    return element


def write_arxml(model: ARModel, output_path: Path) -> None:
    """Write ``model`` to ``output_path`` with default settings."""
    ArxmlWriter().write(model, output_path)


def convert_source_to_arxml(source_path: Path, output_path: Path, strict: bool = False) -> None:
    """High-level function to convert a source document to ARXML.

    This is a convenience function that handles the full pipeline:
    1. Load and validate the YAML/JSON document
    2. Build the source graph
    3. Transform it into the target model
    4. Write the ARXML file

    Args:
    ----
        source_path: Input YAML/JSON file path.
        output_path: Output ARXML file path.
        strict: Fail on validation warnings and on severe transformation
            diagnostics.

    Raises:
    ------
        LoaderError: If the file cannot be read.
        pydantic.ValidationError: If the document does not match the schema.
        ValidationError: If cross-reference validation fails.
        TransformFailedError: In strict mode, if the transformation reported
            severe diagnostics.

    """
    from sysml_to_autosar.models.loader import load_source_document
    from sysml_to_autosar.source.builder import build_source_model
    from sysml_to_autosar.transform.transformer import SysmlToAutosarTransformer
    from sysml_to_autosar.validation.validator import SourceValidator

    doc = load_source_document(source_path)
    SourceValidator(strict=strict).validate_and_raise(doc)

    result = SysmlToAutosarTransformer(strict=strict).transform(build_source_model(doc))

    ArxmlWriter().write(result.model, output_path)
