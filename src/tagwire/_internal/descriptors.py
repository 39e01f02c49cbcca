from __future__ import annotations

import dataclasses
import functools
import types
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from tagwire._internal.tags import FieldTag, FieldTagParser
from tagwire._internal.type_checks import is_assignable, is_runtime_class

_FUNCTION_TYPES: tuple[type[Any], ...] = (
    types.FunctionType,
    types.MethodType,
    types.BuiltinFunctionType,
    functools.partial,
)


class ValueKind(Enum):
    """Describe how a value can take part in field population."""

    MUTABLE_RECORD = auto()
    """An instance whose attributes can be assigned in place."""

    FROZEN_RECORD = auto()
    """A record held by value: ``NamedTuple`` and frozen dataclass instances."""

    CLASS = auto()
    """A class object rather than an instance of it."""

    FUNCTION = auto()
    """A plain function, bound method or ``functools.partial``."""

    VALUE = auto()
    """Any other value, for example builtins and collections."""


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Structural description of a value, built once when the value enters the container.

    ``record_type`` is the class whose injection tags apply to the value: the
    value's own type for instances, the class itself for class objects.
    """

    kind: ValueKind
    value_type: type[Any]
    record_type: type[Any]
    tags: tuple[FieldTag, ...]

    @property
    def is_injectable(self) -> bool:
        return self.kind is ValueKind.MUTABLE_RECORD

    def is_assignable_to(self, value: Any, target: Any) -> bool:
        """Return true when ``value`` described by this descriptor fits a ``target`` slot."""
        return is_assignable(value, self.value_type, target)


class TypeDescriber:
    """Build ``TypeDescriptor`` objects, sharing one tag parser across values."""

    def __init__(self, tag_parser: FieldTagParser | None = None) -> None:
        self._tag_parser = tag_parser or FieldTagParser()

    def describe(self, value: Any) -> TypeDescriptor:
        kind = self._classify(value)
        value_type = type(value)
        if kind is ValueKind.FUNCTION:
            return TypeDescriptor(kind=kind, value_type=value_type, record_type=value_type, tags=())

        record_type = value if kind is ValueKind.CLASS else value_type
        return TypeDescriptor(
            kind=kind,
            value_type=value_type,
            record_type=record_type,
            tags=self._tag_parser.parse(record_type),
        )

    def _classify(self, value: Any) -> ValueKind:
        if isinstance(value, _FUNCTION_TYPES):
            return ValueKind.FUNCTION
        if is_runtime_class(value):
            return ValueKind.CLASS
        if isinstance(value, tuple) or _is_frozen_dataclass(value):
            return ValueKind.FROZEN_RECORD
        if hasattr(value, "__dict__") or _declares_slots(type(value)):
            return ValueKind.MUTABLE_RECORD
        return ValueKind.VALUE


def _is_frozen_dataclass(value: Any) -> bool:
    if not dataclasses.is_dataclass(value):
        return False
    params = getattr(value, "__dataclass_params__", None)
    return bool(params is not None and params.frozen)


def _declares_slots(value_type: type[Any]) -> bool:
    return any("__slots__" in vars(klass) for klass in value_type.__mro__ if klass is not object)


__all__ = ["TypeDescriber", "TypeDescriptor", "ValueKind"]
