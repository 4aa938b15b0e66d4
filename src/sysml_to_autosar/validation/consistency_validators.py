"""Validators for semantic consistency checks."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

from sysml_to_autosar.models.common import TagDefinition
from sysml_to_autosar.models.elements import (
    ArgumentDefinition,
    AttributeDefinition,
    InterfaceItemDefinition,
    OperationDefinition,
    ReceptionDefinition,
)
from sysml_to_autosar.source.builder import TYPE_REFERENCE_TAGS
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.validation.base import BaseValidator, iter_definitions
from sysml_to_autosar.validation.errors import ErrorCodes, ValidationResult

if TYPE_CHECKING:
    from sysml_to_autosar.models.root import SourceDocument


def _report_duplicates(
    names: Iterable[str], scope: str, kind: str, result: ValidationResult
) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            result.add_error(
                code=ErrorCodes.E101_DUPLICATE_NAME,
                message=f"Duplicate {kind} name '{name}' in '{scope}'",
                path=f"{scope}.{name}",
                suggestion=f"Each {kind} in '{scope}' must have a unique name",
            )
        seen.add(name)


class UniqueNameValidator(BaseValidator):
    """Validates that names are unique within their scope.

    Interfaces and components share one namespace per package since both
    are looked up as classifiers.
    """

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Check for duplicate names."""
        for package in doc.packages:
            scope = package.name
            _report_duplicates((t.name for t in package.types), scope, "type", result)
            _report_duplicates((e.name for e in package.events), scope, "event", result)
            _report_duplicates(
                [i.name for i in package.interfaces] + [c.name for c in package.components],
                scope,
                "classifier",
                result,
            )
            _report_duplicates((i.name for i in package.instances), scope, "instance", result)
            _report_duplicates(
                (link.effective_name for link in package.links), scope, "link", result
            )

            for type_def in package.types:
                _report_duplicates(
                    (lit.name for lit in type_def.literals),
                    f"{scope}.{type_def.name}",
                    "literal",
                    result,
                )
            for event in package.events:
                _report_duplicates(
                    (a.name for a in event.arguments), f"{scope}.{event.name}", "argument", result
                )
            for interface in package.interfaces:
                _report_duplicates(
                    (_item_name(item) for item in interface.items),
                    f"{scope}.{interface.name}",
                    "interface item",
                    result,
                )
            for component in package.components:
                comp_scope = f"{scope}.{component.name}"
                _report_duplicates((p.name for p in component.ports), comp_scope, "port", result)
                _report_duplicates(
                    (o.name for o in component.operations), comp_scope, "operation", result
                )
                _report_duplicates(
                    (a.name for a in component.attributes), comp_scope, "attribute", result
                )


def _item_name(item: InterfaceItemDefinition) -> str:
    if isinstance(item, ReceptionDefinition):
        return item.effective_name
    return item.name


class PortInterfaceValidator(BaseValidator):
    """Validates that every port either provides or requires interfaces, not both."""

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Check the interface lists of every port."""
        for package in doc.packages:
            for component in package.components:
                for port in component.ports:
                    path = f"{package.name}.{component.name}.{port.name}"
                    if port.provides and port.requires:
                        result.add_warning(
                            code=ErrorCodes.W005_UNCLASSIFIABLE_PORT,
                            message=(
                                f"Port '{port.name}' both provides and requires interfaces; "
                                "it is not transformed"
                            ),
                            path=path,
                            suggestion="Split it into a providing and a requiring port",
                        )
                    elif not port.provides and not port.requires:
                        result.add_warning(
                            code=ErrorCodes.W005_UNCLASSIFIABLE_PORT,
                            message=f"Port '{port.name}' has no interface; it is not transformed",
                            path=path,
                        )
                    elif len(port.provides) > 1 or len(port.requires) > 1:
                        result.add_warning(
                            code=ErrorCodes.W005_UNCLASSIFIABLE_PORT,
                            message=(
                                f"Port '{port.name}' lists several interfaces; "
                                "only the first one is used"
                            ),
                            path=path,
                        )


class InterfaceKindValidator(BaseValidator):
    """Validates that interface items agree on one communication style.

    A sender-receiver interface holds only «operationWdata» operations and
    receptions; a client-server interface only «operationWevent» operations.
    """

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Check that every interface is sender-receiver or client-server."""
        for package in doc.packages:
            for interface in package.interfaces:
                items = interface.items
                sender_receiver = [i for i in items if _is_sender_receiver_item(i)]
                client_server = [
                    i
                    for i in items
                    if isinstance(i, OperationDefinition)
                    and cv.STEREOTYPE_OPERATION_WITH_EVENT in i.stereotypes
                ]
                if len(sender_receiver) == len(items) or len(client_server) == len(items):
                    continue
                offending = [
                    _item_name(i)
                    for i in items
                    if i not in sender_receiver and i not in client_server
                ]
                result.add_warning(
                    code=ErrorCodes.W006_MIXED_INTERFACE,
                    message=(
                        f"Interface '{interface.name}' is neither sender-receiver nor "
                        "client-server; it is not transformed"
                    ),
                    path=f"{package.name}.{interface.name}",
                    suggestion=(
                        f"Use only «{cv.STEREOTYPE_OPERATION_WITH_DATA}» operations and "
                        f"receptions, or only «{cv.STEREOTYPE_OPERATION_WITH_EVENT}» operations"
                    ),
                    offending_items=offending,
                )


def _is_sender_receiver_item(item: InterfaceItemDefinition) -> bool:
    if isinstance(item, ReceptionDefinition):
        return True
    return cv.STEREOTYPE_OPERATION_WITH_DATA in item.stereotypes


class StereotypeTagValidator(BaseValidator):
    """Validates the tags that stereotyped elements rely on."""

    REQUIRED_TAGS = {
        cv.STEREOTYPE_OPERATION_WITH_EVENT: cv.TAG_EVENT,
        cv.STEREOTYPE_OPERATION_WITH_DATA: cv.TAG_DATA_RECEIVED,
        cv.STEREOTYPE_PERIODIC: cv.TAG_PERIOD,
    }

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Check required tags and the period value."""
        for path, definition in iter_definitions(doc):
            for stereotype, tag_name in self.REQUIRED_TAGS.items():
                if stereotype in definition.stereotypes and tag_name not in definition.tags:
                    result.add_warning(
                        code=ErrorCodes.W007_MISSING_TAG,
                        message=(
                            f"«{stereotype}» element '{definition.name}' has no "
                            f"'{tag_name}' tag"
                        ),
                        path=f"{path}.tags",
                    )
            if cv.STEREOTYPE_PERIODIC in definition.stereotypes:
                self._check_period(definition.tags.get(cv.TAG_PERIOD), path, result)

        for package in doc.packages:
            for type_def in package.types:
                if type_def.kind == "typedef" and cv.TAG_UNIT not in type_def.tags:
                    result.add_warning(
                        code=ErrorCodes.W007_MISSING_TAG,
                        message=f"Typedef '{type_def.name}' has no '{cv.TAG_UNIT}' tag",
                        path=f"{package.name}.{type_def.name}.tags",
                    )

    def _check_period(self, raw: object, path: str, result: ValidationResult) -> None:
        if raw is None:
            return
        if isinstance(raw, TagDefinition):
            raw = raw.value
        try:
            period = float(str(raw))
        except ValueError:
            period = math.nan
        if math.isnan(period) or period <= 0:
            result.add_error(
                code=ErrorCodes.E200_INVALID_PERIOD,
                message=f"Period '{raw}' is not a positive number of seconds",
                path=f"{path}.tags.{cv.TAG_PERIOD}",
                suggestion="Use a number such as 0.01",
            )


class UnusedDefinitionsValidator(BaseValidator):
    """Warns about unused data types and unlinked instances."""

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Check for unused definitions."""
        used_types = self._referenced_types(doc)
        for package in doc.packages:
            for type_def in package.types:
                if type_def.name not in used_types:
                    result.add_warning(
                        code=ErrorCodes.W001_UNUSED_TYPE,
                        message=f"Data type '{type_def.name}' is defined but never used",
                        path=f"{package.name}.{type_def.name}",
                    )

            linked = {
                endpoint.instance
                for link in package.links
                for endpoint in (link.from_, link.to)
            }
            for instance in package.instances:
                if instance.name not in linked:
                    result.add_warning(
                        code=ErrorCodes.W002_UNUSED_INSTANCE,
                        message=(
                            f"Instance '{instance.name}' takes part in no link; "
                            "it gets no component prototype"
                        ),
                        path=f"{package.name}.{instance.name}",
                    )

    def _referenced_types(self, doc: SourceDocument) -> set[str]:
        used: set[str] = set()
        for _path, definition in iter_definitions(doc):
            if isinstance(definition, ArgumentDefinition | AttributeDefinition) and definition.type:
                used.add(definition.type)
            for tag_name, raw in definition.tags.items():
                if isinstance(raw, TagDefinition) and raw.type:
                    used.add(raw.type)
                elif tag_name in TYPE_REFERENCE_TAGS and raw is not None:
                    used.add(str(raw))
        return used
