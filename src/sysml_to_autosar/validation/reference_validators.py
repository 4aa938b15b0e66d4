"""Validators for cross-references between source document elements."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sysml_to_autosar.models.common import TagDefinition
from sysml_to_autosar.models.elements import (
    ArgumentDefinition,
    AttributeDefinition,
    ComponentDefinition,
    LinkEndpoint,
    PackageDefinition,
    ReceptionDefinition,
)
from sysml_to_autosar.source.builder import TYPE_REFERENCE_TAGS
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.validation.base import BaseValidator, iter_definitions
from sysml_to_autosar.validation.errors import ErrorCodes, ValidationResult

if TYPE_CHECKING:
    from sysml_to_autosar.models.root import SourceDocument


class TypeReferenceValidator(BaseValidator):
    """Validates that type references point to defined data types.

    Checks argument and attribute types, structured tags with a ``type``
    and scalar ``type`` tags.
    """

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Validate type references of every element."""
        defined_types = {t.name for package in doc.packages for t in package.types}

        for path, definition in iter_definitions(doc):
            if isinstance(definition, ArgumentDefinition | AttributeDefinition):
                self._check(definition.type, f"{path}.type", defined_types, result)
            for tag_name, raw in definition.tags.items():
                tag_path = f"{path}.tags.{tag_name}"
                if isinstance(raw, TagDefinition):
                    self._check(raw.type, f"{tag_path}.type", defined_types, result)
                elif tag_name in TYPE_REFERENCE_TAGS and raw is not None:
                    self._check(str(raw), tag_path, defined_types, result)

    def _check(
        self,
        type_name: str | None,
        path: str,
        defined_types: set[str],
        result: ValidationResult,
    ) -> None:
        if type_name is None or type_name in defined_types:
            return
        result.add_error(
            code=ErrorCodes.E001_UNDEFINED_TYPE,
            message=f"Reference to undefined data type '{type_name}'",
            path=path,
            suggestion=f"Define '{type_name}' in the 'types' section of a package",
            referenced_type=type_name,
            available_types=sorted(defined_types),
        )


class EventReferenceValidator(BaseValidator):
    """Validates that receptions and «operationWevent» tags name defined events."""

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Check reception events and ``event`` tags."""
        defined_events = {e.name for package in doc.packages for e in package.events}

        for package in doc.packages:
            for interface in package.interfaces:
                for item in interface.items:
                    if not isinstance(item, ReceptionDefinition):
                        continue
                    if item.event not in defined_events:
                        result.add_error(
                            code=ErrorCodes.E002_UNDEFINED_EVENT,
                            message=(
                                f"Interface '{interface.name}' receives undefined "
                                f"event '{item.event}'"
                            ),
                            path=f"{package.name}.{interface.name}.{item.effective_name}",
                            suggestion=f"Define '{item.event}' in the 'events' section",
                        )

        for path, definition in iter_definitions(doc):
            if cv.STEREOTYPE_OPERATION_WITH_EVENT not in definition.stereotypes:
                continue
            event_name = definition.tags.get(cv.TAG_EVENT)
            if isinstance(event_name, str) and event_name not in defined_events:
                result.add_warning(
                    code=ErrorCodes.W008_UNKNOWN_EVENT_TAG,
                    message=(
                        f"Operation '{definition.name}' names event '{event_name}' "
                        "which is not defined; it never gets an operation invoked event"
                    ),
                    path=f"{path}.tags.{cv.TAG_EVENT}",
                )


class InterfaceReferenceValidator(BaseValidator):
    """Validates that ports provide and require defined interfaces."""

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Check the ``provides`` and ``requires`` lists of every port."""
        interfaces = {i.name for package in doc.packages for i in package.interfaces}

        for package in doc.packages:
            for component in package.components:
                for port in component.ports:
                    port_path = f"{package.name}.{component.name}.{port.name}"
                    for key, names in (("provides", port.provides), ("requires", port.requires)):
                        for name in names:
                            if name in interfaces:
                                continue
                            result.add_error(
                                code=ErrorCodes.E003_UNDEFINED_INTERFACE,
                                message=(
                                    f"Port '{port.name}' {key} undefined interface '{name}'"
                                ),
                                path=f"{port_path}.{key}",
                                suggestion=f"Define '{name}' in the 'interfaces' section",
                            )


class ComponentReferenceValidator(BaseValidator):
    """Validates that instances are typed by defined components."""

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Check the type of every instance."""
        components = {c.name for package in doc.packages for c in package.components}

        for package in doc.packages:
            for instance in package.instances:
                if instance.type not in components:
                    result.add_error(
                        code=ErrorCodes.E004_UNDEFINED_COMPONENT,
                        message=(
                            f"Instance '{instance.name}' is typed by undefined "
                            f"component '{instance.type}'"
                        ),
                        path=f"{package.name}.{instance.name}.type",
                        suggestion=f"Define '{instance.type}' in the 'components' section",
                    )


class LinkReferenceValidator(BaseValidator):
    """Validates that link endpoints name instances of the package and their ports."""

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Check both endpoints of every link."""
        for package in doc.packages:
            for link in package.links:
                link_path = f"{package.name}.{link.effective_name}"
                self._check_endpoint(doc, package, link.from_, f"{link_path}.from", result)
                self._check_endpoint(doc, package, link.to, f"{link_path}.to", result)

    def _check_endpoint(
        self,
        doc: SourceDocument,
        package: PackageDefinition,
        endpoint: LinkEndpoint,
        path: str,
        result: ValidationResult,
    ) -> None:
        instance = next((i for i in package.instances if i.name == endpoint.instance), None)
        if instance is None:
            result.add_error(
                code=ErrorCodes.E005_UNDEFINED_INSTANCE,
                message=f"Link endpoint references undefined instance '{endpoint.instance}'",
                path=f"{path}.instance",
                suggestion=f"Add '{endpoint.instance}' to the 'instances' of '{package.name}'",
            )
            return

        component = _find_component(doc, package, instance.type)
        if component is None:
            # Reported by ComponentReferenceValidator
            return
        if not any(port.name == endpoint.port for port in component.ports):
            result.add_error(
                code=ErrorCodes.E006_UNDEFINED_PORT,
                message=(
                    f"Instance '{instance.name}' of '{component.name}' has no "
                    f"port '{endpoint.port}'"
                ),
                path=f"{path}.port",
                available_ports=[port.name for port in component.ports],
            )


def _find_component(
    doc: SourceDocument, package: PackageDefinition, name: str
) -> ComponentDefinition | None:
    """Resolve a component name in its own package first, then across packages."""
    for candidate in [package] + [p for p in doc.packages if p is not package]:
        for component in candidate.components:
            if component.name == name:
                return component
    return None
