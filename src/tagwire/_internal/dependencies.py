from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from tagwire._internal.descriptors import TypeDescriptor
from tagwire.exceptions import (
    TagwireAmbiguousTypeError,
    TagwireNotFoundError,
    TagwireNotFoundForTypeError,
    TagwireNotInjectableError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Dependency:
    """A registered value together with its structural descriptor."""

    value: Any
    descriptor: TypeDescriptor

    def is_assignable_to(self, target: Any) -> bool:
        return self.descriptor.is_assignable_to(self.value, target)

    def assign(self, field_name: str, field_value: Any) -> None:
        """Set ``field_name`` on the referenced record in place.

        Raises:
            TagwireNotInjectableError: If the record refuses the assignment,
                as frozen attrs classes or slotted classes without the field do.

        """
        try:
            setattr(self.value, field_name, field_value)
        except (AttributeError, TypeError) as error:
            raise TagwireNotInjectableError(self.descriptor.record_type) from error


class DependencyTable:
    """Store dependencies by unique name.

    The table only grows: there is no way to replace or remove a binding.
    Callers are expected to check ``__contains__`` before ``add``.
    """

    def __init__(self) -> None:
        self._dependencies_by_name: dict[str, Dependency] = {}

    def add(self, name: str, dependency: Dependency) -> None:
        """Bind ``dependency`` under ``name``.

        Args:
            name: Unused dependency name.
            dependency: Dependency to bind.

        """
        self._dependencies_by_name[name] = dependency

    def get(self, name: str) -> Dependency:
        """Get a dependency by name.

        Args:
            name: Dependency name to look up.

        Raises:
            TagwireNotFoundError: If nothing is bound under ``name``.

        """
        dependency = self._dependencies_by_name.get(name)
        if dependency is None:
            raise TagwireNotFoundError(name)
        return dependency

    def find(self, name: str) -> Dependency | None:
        return self._dependencies_by_name.get(name)

    def get_by_type(self, dependency_type: Any) -> Dependency:
        """Get the single dependency assignable to ``dependency_type``.

        Every binding is inspected, so ambiguity is reported whatever the
        iteration order of the table is.

        Args:
            dependency_type: Declared type of the field or parameter to fill.

        Raises:
            TagwireNotFoundForTypeError: If no dependency is assignable.
            TagwireAmbiguousTypeError: If more than one dependency is assignable.

        """
        matches = [
            (name, dependency)
            for name, dependency in self._dependencies_by_name.items()
            if dependency.is_assignable_to(dependency_type)
        ]
        if not matches:
            raise TagwireNotFoundForTypeError(dependency_type)
        if len(matches) > 1:
            raise TagwireAmbiguousTypeError(dependency_type, sorted(name for name, _ in matches))

        name, dependency = matches[0]
        logger.debug("Resolved %r by type to dependency '%s'", dependency_type, name)
        return dependency

    def names(self) -> list[str]:
        """Get all bound names in registration order."""
        return list(self._dependencies_by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._dependencies_by_name

    def __len__(self) -> int:
        return len(self._dependencies_by_name)


__all__ = ["Dependency", "DependencyTable"]
