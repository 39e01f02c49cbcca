from __future__ import annotations

from typing import Any

from tagwire._internal.type_checks import is_runtime_class


def _type_name(value: Any) -> str:
    if is_runtime_class(value):
        return value.__qualname__
    return repr(value)


class TagwireError(Exception):
    """Represent a base class for all tagwire-specific failures.

    Catch this type when you want to handle any tagwire error path without
    matching each concrete exception class individually. Failures produced by
    user factories are never wrapped into this hierarchy.
    """


class TagwireNameError(TagwireError):
    """Signal a name that cannot be bound in the container."""

    def __init__(self, name: object, message: str) -> None:
        self.name = name
        super().__init__(message)


class TagwireDuplicateNameError(TagwireNameError):
    """Signal a registration under a name that is already bound.

    Raised by ``Container.register_named`` and
    ``Container.register_named_from_factory``. The existing binding is left
    untouched.

    Typical fix is choosing a different name or using the unnamed
    ``register`` variants.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name, f"tagwire: {name} is already registered")


class TagwireReservedNameError(TagwireNameError):
    """Signal a registration under the reserved ``"auto"`` name.

    ``"auto"`` is the tag value meaning "resolve by type", so it can never be
    a dependency name.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name, f"tagwire: {name} is reserved, please use a different name")


class TagwireInvalidNameError(TagwireNameError):
    """Signal a name that is not a non-empty string.

    Raised by named registrations and by ``Container`` when the configured
    ``unnamed_prefix`` is unusable.
    """

    def __init__(self, name: object) -> None:
        super().__init__(name, f"tagwire: {name!r} is not a valid dependency name")


class TagwireNotFoundError(TagwireError):
    """Signal a ``get`` for a name that has no binding."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"tagwire: the requested dependency {name} couldn't be found")


class TagwireNotInjectableError(TagwireError):
    """Signal population of a value whose fields cannot be assigned.

    Raised when the value's record type declares injection tags but the value
    is not a mutable instance, for example a ``NamedTuple``, a frozen
    dataclass, or the class object itself instead of an instance.

    Typical fix is passing a mutable instance of the class.
    """

    def __init__(self, value_type: Any) -> None:
        self.value_type = value_type
        super().__init__(
            f"tagwire: {_type_name(value_type)} is not injectable, a mutable instance is expected",
        )


class TagwireNotRegisteredError(TagwireError):
    """Signal a field tag naming a dependency that is not registered.

    Dependencies are never resolved lazily: register the named dependency
    before registering or injecting anything that requests it.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"tagwire: {name} is not registered")


class TagwireNotAssignableError(TagwireError):
    """Signal a resolved dependency whose type does not fit the field type."""

    def __init__(self, field_type: Any, value_type: Any) -> None:
        self.field_type = field_type
        self.value_type = value_type
        super().__init__(
            f"tagwire: {_type_name(field_type)} is not assignable from {_type_name(value_type)}",
        )


class TagwireUnsupportedFactoryError(TagwireError):
    """Signal a factory that cannot be invoked by the container.

    Factory functions must be synchronous, return one value or a
    ``(value, error)`` pair, and annotate every required parameter so it can
    be resolved by type. Factory objects must implement ``create()``.
    """

    def __init__(self, factory: Any, reason: str = "unsupported factory function") -> None:
        self.factory = factory
        super().__init__(f"tagwire: {reason}")


class TagwireSecondResultNotErrorError(TagwireError):
    """Signal a two-result factory whose second result is not an exception type."""

    def __init__(self, factory: Any, result_type: Any) -> None:
        self.factory = factory
        self.result_type = result_type
        super().__init__("tagwire: 2nd result of a factory function must be an exception")


class TagwireTypeLookupError(TagwireError):
    """Signal a failed lookup of a dependency by type."""

    def __init__(self, dependency_type: Any, message: str) -> None:
        self.dependency_type = dependency_type
        super().__init__(message)


class TagwireNotFoundForTypeError(TagwireTypeLookupError):
    """Signal that no registered dependency is assignable to the requested type."""

    def __init__(self, dependency_type: Any) -> None:
        super().__init__(
            dependency_type,
            f"tagwire: couldn't find the dependency for {_type_name(dependency_type)}",
        )


class TagwireAmbiguousTypeError(TagwireTypeLookupError):
    """Signal that several registered dependencies fit the requested type.

    Type-based lookup never picks the first match. Typical fix is tagging the
    field with an explicit name, for example ``Inject("primary-db")``.
    """

    def __init__(self, dependency_type: Any, names: list[str]) -> None:
        self.names = names
        super().__init__(
            dependency_type,
            "tagwire: there is a conflict when finding the dependency for "
            f"{_type_name(dependency_type)}",
        )


class TagwireInvalidTagError(TagwireError):
    """Signal injection tags that cannot be parsed from a record type.

    Raised when the annotations of a record type cannot be evaluated (for
    example an undefined forward reference) or an ``Inject`` tag has an empty
    name.
    """

    def __init__(self, record_type: Any, reason: str) -> None:
        self.record_type = record_type
        super().__init__(f"tagwire: invalid injection tags on {_type_name(record_type)}: {reason}")
