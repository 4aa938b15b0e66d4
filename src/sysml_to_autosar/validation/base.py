"""Base validator class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING

from sysml_to_autosar.models.elements import OperationDefinition
from sysml_to_autosar.validation.errors import ValidationResult

if TYPE_CHECKING:
    from sysml_to_autosar.models.common import ElementDefinition
    from sysml_to_autosar.models.root import SourceDocument


class BaseValidator(ABC):
    """Base class for source document validators."""

    @abstractmethod
    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Validate the document and add issues to result.

        Args:
        ----
            doc: The source document to validate.
            result: The result object to add issues to.

        """
        ...


class CompositeValidator(BaseValidator):
    """Combines multiple validators."""

    def __init__(self, validators: list[BaseValidator] | None = None) -> None:
        """Initialize with optional list of validators.

        Args:
        ----
            validators: List of validators to combine.

        """
        self.validators = validators or []

    def add(self, validator: BaseValidator) -> None:
        """Add a validator.

        Args:
        ----
            validator: Validator to add.

        """
        self.validators.append(validator)

    def validate(
        self,
        doc: SourceDocument,
        result: ValidationResult,
    ) -> None:
        """Run all validators in order."""
        for validator in self.validators:
            validator.validate(doc, result)


def iter_definitions(doc: SourceDocument) -> Iterator[tuple[str, ElementDefinition]]:
    """Yield every named element definition with its dotted path.

    Paths follow the locations used when building the source graph, e.g.
    ``Powertrain.EngineCtrl.pSpeed`` or ``Powertrain.evStart.speed``.
    """
    for package in doc.packages:
        yield package.name, package
        for type_def in package.types:
            yield f"{package.name}.{type_def.name}", type_def
        for event in package.events:
            event_path = f"{package.name}.{event.name}"
            yield event_path, event
            for argument in event.arguments:
                yield f"{event_path}.{argument.name}", argument
        for interface in package.interfaces:
            iface_path = f"{package.name}.{interface.name}"
            yield iface_path, interface
            for item in interface.items:
                if isinstance(item, OperationDefinition):
                    yield from _iter_operation(iface_path, item)
        for component in package.components:
            comp_path = f"{package.name}.{component.name}"
            yield comp_path, component
            for port in component.ports:
                yield f"{comp_path}.{port.name}", port
            for operation in component.operations:
                yield from _iter_operation(comp_path, operation)
            for attribute in component.attributes:
                yield f"{comp_path}.{attribute.name}", attribute
        for instance in package.instances:
            yield f"{package.name}.{instance.name}", instance


def _iter_operation(
    owner_path: str, operation: OperationDefinition
) -> Iterator[tuple[str, ElementDefinition]]:
    op_path = f"{owner_path}.{operation.name}"
    yield op_path, operation
    for argument in operation.arguments:
        yield f"{op_path}.{argument.name}", argument
