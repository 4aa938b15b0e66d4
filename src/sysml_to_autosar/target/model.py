"""Target model root and node factory."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TypeVar, overload

from sysml_to_autosar.target import elements as el
from sysml_to_autosar.target.base import ARElement, ARKind, Containment

T = TypeVar("T", bound=ARElement)

KIND_TO_CLASS: dict[ARKind, type[ARElement]] = {
    cls.KIND: cls
    for cls in (
        el.ARPackage,
        el.ApplicationSwComponentType,
        el.CompositionSwComponentType,
        el.SwcInternalBehavior,
        el.RunnableEntity,
        el.DataReceivedEvent,
        el.TimingEvent,
        el.OperationInvokedEvent,
        el.PPortPrototype,
        el.RPortPrototype,
        el.SenderReceiverInterface,
        el.ClientServerInterface,
        el.ClientServerOperation,
        el.ArgumentDataPrototype,
        el.VariableDataPrototype,
        el.ParameterDataPrototype,
        el.PerInstanceMemory,
        el.NonqueuedSenderComSpec,
        el.NonqueuedReceiverComSpec,
        el.ServerComSpec,
        el.ClientComSpec,
        el.SynchronousServerCallPoint,
        el.VariableAccess,
        el.AutosarVariableRef,
        el.VariableInAtomicSwcTypeInstanceRef,
        el.RVariableInAtomicSwcInstanceRef,
        el.ROperationInAtomicSwcInstanceRef,
        el.POperationInAtomicSwcInstanceRef,
        el.SwComponentPrototype,
        el.AssemblySwConnector,
        el.PPortInCompositionInstanceRef,
        el.RPortInCompositionInstanceRef,
        el.SwDataDefProps,
        el.SwDataDefPropsConditional,
        el.NumericalValueSpecification,
        el.ApplicationPrimitiveDataType,
        el.ImplementationDataType,
        el.CompuMethod,
        el.CompuScale,
        el.Unit,
    )
}


@dataclass(eq=False)
class ARModel:
    """The target graph: root packages plus the node factory.

    Attributes
    ----------
        packages: Root AR packages, one per source package.
        name: Model name carried over from the source document.

    """

    name: str = ""
    packages: list[el.ARPackage] = field(default_factory=lambda: Containment(None))

    @overload
    def create(self, kind: type[T], short_name: str = "") -> T: ...

    @overload
    def create(self, kind: ARKind, short_name: str = "") -> ARElement: ...

    def create(self, kind: ARKind | type[ARElement], short_name: str = "") -> ARElement:
        """Create a bare, detached node of the given kind.

        Args:
        ----
            kind: Target kind, either an ``ARKind`` or a node class.
            short_name: Initial short name.

        Returns:
        -------
            The new node; the caller adds it to a container.

        """
        cls = kind if isinstance(kind, type) else KIND_TO_CLASS[kind]
        return cls(short_name=short_name)

    def find_package(self, name: str) -> el.ARPackage | None:
        """Find a root package by short name."""
        return next((p for p in self.packages if p.short_name == name), None)

    def add_package(self, package: el.ARPackage) -> None:
        """Add a root package."""
        self.packages.append(package)

    def walk(self) -> Iterator[ARElement]:
        """Every node of the model, depth first."""
        for package in self.packages:
            yield from package.walk()

    def count(self, cls: type[ARElement]) -> int:
        """Number of nodes that are instances of ``cls``."""
        return sum(1 for node in self.walk() if isinstance(node, cls))
