"""Completeness checks of a transformed target model.

The checks only report; nothing is removed from the model.
"""

from __future__ import annotations

from dataclasses import fields

from sysml_to_autosar.target.base import ARElement, FieldRole
from sysml_to_autosar.target.elements import (
    AssemblySwConnector,
    DataReceivedEvent,
    OperationInvokedEvent,
    PPortPrototype,
    RPortPrototype,
    TimingEvent,
)
from sysml_to_autosar.target.model import ARModel
from sysml_to_autosar.validation.errors import ErrorCodes, ValidationResult


class TargetCompletenessValidator:
    """Reports target nodes that were left incomplete by the transformation.

    Usage:
        result = TargetCompletenessValidator().validate(transform_result.model)
        for issue in result.issues:
            print(issue)
    """

    def validate(self, model: ARModel) -> ValidationResult:
        """Check every node of the model.

        Args:
        ----
            model: The transformed target model.

        Returns:
        -------
            ValidationResult; nodes still marked in progress are errors,
            everything else is a warning.

        """
        result = ValidationResult()
        nodes = list(model.walk())
        attached = {id(node) for node in nodes}

        for node in nodes:
            path = _describe(node)
            if node.in_progress:
                result.add_error(
                    code=ErrorCodes.T401_INCOMPLETE_NODE,
                    message=f"{node.kind.value} was left in progress by a failed rule",
                    path=path,
                )
            self._check_structure(node, path, result)
            self._check_references(node, path, attached, result)

        return result

    def _check_structure(self, node: ARElement, path: str, result: ValidationResult) -> None:
        if isinstance(node, PPortPrototype | RPortPrototype) and node.port_interface is None:
            result.add_warning(
                code=ErrorCodes.T402_PORT_WITHOUT_INTERFACE,
                message=f"Port '{node.short_name}' has no port interface",
                path=path,
            )
        elif (
            isinstance(node, DataReceivedEvent | TimingEvent | OperationInvokedEvent)
            and node.start_on_event is None
        ):
            result.add_warning(
                code=ErrorCodes.T403_EVENT_WITHOUT_RUNNABLE,
                message=f"Event '{node.short_name}' starts no runnable",
                path=path,
            )
        elif isinstance(node, AssemblySwConnector):
            missing = [
                side
                for side, value in (("provider", node.provider), ("requester", node.requester))
                if value is None
            ]
            if missing:
                result.add_warning(
                    code=ErrorCodes.T404_CONNECTOR_INCOMPLETE,
                    message=f"Connector '{node.short_name}' has no {' or '.join(missing)}",
                    path=path,
                )

    def _check_references(
        self,
        node: ARElement,
        path: str,
        attached: set[int],
        result: ValidationResult,
    ) -> None:
        for f in fields(node):
            if f.metadata.get("role") is not FieldRole.REFERENCE:
                continue
            target = getattr(node, f.name)
            if target is None or id(target) in attached:
                continue
            result.add_warning(
                code=ErrorCodes.T405_DETACHED_REFERENCE,
                message=(
                    f"{f.metadata['tag']} refers to {target.kind.value} "
                    f"'{target.short_name}' which is not part of the model"
                ),
                path=path,
            )


def _describe(node: ARElement) -> str:
    """Path of the nearest referrable node, e.g. ``/Pkg/Comp/pSpeed``."""
    current: ARElement | None = node
    while current is not None and not (current.REFERRABLE and current.short_name):
        current = current.container
    if current is None:
        return node.kind.value
    if current is node:
        return node.path
    return f"{current.path} ({node.kind.value})"
