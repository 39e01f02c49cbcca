from __future__ import annotations

import types
from typing import Annotated, Any, TypeGuard, Union, get_args, get_origin

from typing_extensions import get_protocol_members, is_protocol


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_exception_type(annotation: Any) -> bool:
    """Return true when annotation describes an exception, optionally joined with ``None``.

    ``Exception``, ``ValueError | None`` and ``Optional[BaseException]`` qualify,
    while ``None`` alone or a union with a non-exception arm does not.

    Args:
        annotation: Resolved return-type component of a factory function.

    """
    annotation = strip_annotated(annotation)
    if _is_union(annotation):
        arms = [arm for arm in get_args(annotation) if arm is not type(None)]
        return bool(arms) and all(is_exception_type(arm) for arm in arms)
    return is_runtime_class(annotation) and issubclass(annotation, BaseException)


def strip_annotated(annotation: Any) -> Any:
    """Return the inner type of ``Annotated[T, ...]``, or the annotation itself."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def is_assignable(value: Any, value_type: type[Any], target: Any) -> bool:
    """Return true when a value of ``value_type`` can be stored in a ``target`` slot.

    The check accepts identical types, subclasses and structural matches
    against ``typing.Protocol`` members. Unions accept any arm, ``Annotated``
    is unwrapped and parametrised generics are compared on their origin only.

    Args:
        value: The candidate value. Only consulted for ``type[X]`` targets.
        value_type: Runtime type of ``value``.
        target: Declared type of the field or parameter.

    """
    target = strip_annotated(target)
    if target is Any or target is object:
        return True
    if target is None or target is type(None):
        return value_type is type(None)
    if _is_union(target):
        return any(is_assignable(value, value_type, arm) for arm in get_args(target))

    origin = get_origin(target)
    if origin is type:
        return _is_assignable_to_type_of(value, target)
    if origin is not None:
        # list[int], Callable[[int], str], Mapping[str, Any] ...
        if not is_runtime_class(origin):
            return False
        if is_protocol(origin):
            return _satisfies_protocol(value, value_type, origin)
        return _is_subclass(value_type, origin)

    if not is_runtime_class(target):
        return False
    if is_protocol(target):
        return _satisfies_protocol(value, value_type, target)
    return _is_subclass(value_type, target)


def _is_assignable_to_type_of(value: Any, target: Any) -> bool:
    if not is_runtime_class(value):
        return False
    args = get_args(target)
    if not args:
        return True
    # type[X] compares the class itself against X, not its metaclass.
    return is_assignable(value, value, args[0])


def _satisfies_protocol(value: Any, value_type: type[Any], protocol: type[Any]) -> bool:
    if _is_subclass(value_type, protocol):
        return True
    return all(hasattr(value, member) for member in get_protocol_members(protocol))


def _is_subclass(value_type: type[Any], target: type[Any]) -> bool:
    try:
        return issubclass(value_type, target)
    except TypeError:
        # Non runtime-checkable protocols and some ABC registrations refuse issubclass.
        return False


def _is_union(annotation: Any) -> bool:
    return get_origin(annotation) in (Union, types.UnionType)


__all__ = [
    "is_assignable",
    "is_exception_type",
    "is_runtime_class",
    "strip_annotated",
]
