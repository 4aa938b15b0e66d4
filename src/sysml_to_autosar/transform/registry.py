"""Correspondence registry between source and target elements."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from sysml_to_autosar.source.graph import SourceElement
    from sysml_to_autosar.target.base import ARElement

T = TypeVar("T")


class DuplicateCorrespondenceError(Exception):
    """A source or target element is already registered with another partner."""

    def __init__(self, source: SourceElement, target: ARElement, existing: object) -> None:
        """Initialize DuplicateCorrespondenceError.

        Args:
        ----
            source: Source element being registered.
            target: Target element being registered.
            existing: The partner already registered for one of them.

        """
        self.source = source
        self.target = target
        self.existing = existing
        super().__init__(
            f"Cannot register '{source.name}' -> '{target.short_name}': "
            f"already registered with {existing!r}"
        )


class CorrespondenceRegistry:
    """Bidirectional map between source elements and target elements.

    Source to target is partial (at most one target per source); target to
    source is total over registered targets. Both directions compare by
    identity.

    Usage:
        registry = CorrespondenceRegistry()
        registry.register(operation, cs_operation)
        registry.lookup(operation)  # -> cs_operation
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._forward: dict[int, tuple[SourceElement, ARElement]] = {}
        self._reverse: dict[int, tuple[ARElement, SourceElement]] = {}

    def register(self, source: SourceElement, target: ARElement) -> None:
        """Record that ``target`` was produced from ``source``.

        Registering the identical pair again is a no-op.

        Raises
        ------
            DuplicateCorrespondenceError: If ``source`` already maps to a
                different target or ``target`` to a different source.

        """
        existing = self._forward.get(id(source))
        if existing is not None:
            if existing[1] is target:
                return
            raise DuplicateCorrespondenceError(source, target, existing[1])
        previous = self._reverse.get(id(target))
        if previous is not None:
            raise DuplicateCorrespondenceError(source, target, previous[1])
        self._forward[id(source)] = (source, target)
        self._reverse[id(target)] = (target, source)

    def lookup(self, source: SourceElement | None) -> ARElement | None:
        """Return the target registered for ``source``."""
        if source is None:
            return None
        entry = self._forward.get(id(source))
        return entry[1] if entry is not None else None

    def lookup_as(self, source: SourceElement | None, cls: type[T]) -> T | None:
        """Return the registered target only if it is an instance of ``cls``."""
        target = self.lookup(source)
        return target if isinstance(target, cls) else None

    def reverse_lookup(self, target: ARElement | None) -> SourceElement | None:
        """Return the source that ``target`` was produced from."""
        if target is None:
            return None
        entry = self._reverse.get(id(target))
        return entry[1] if entry is not None else None

    def items(self) -> Iterator[tuple[SourceElement, ARElement]]:
        """Registered pairs in registration order."""
        return iter(list(self._forward.values()))

    def __contains__(self, source: object) -> bool:
        entry = self._forward.get(id(source))
        return entry is not None and entry[0] is source

    def __len__(self) -> int:
        return len(self._forward)
