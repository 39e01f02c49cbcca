from __future__ import annotations

import logging
from typing import Any

from tagwire._internal.call_styles import capture_error, capture_value_and_error
from tagwire._internal.dependencies import Dependency, DependencyTable
from tagwire._internal.descriptors import TypeDescriber, ValueKind
from tagwire._internal.factories import FactoryFunctionInvoker
from tagwire._internal.tags import ByType, FieldTag
from tagwire._internal.type_checks import is_runtime_class
from tagwire.defaults import AUTO_INJECTION_TAG, DEFAULT_UNNAMED_PREFIX
from tagwire.exceptions import (
    TagwireDuplicateNameError,
    TagwireInvalidNameError,
    TagwireNotAssignableError,
    TagwireNotInjectableError,
    TagwireNotRegisteredError,
    TagwireReservedNameError,
    TagwireUnsupportedFactoryError,
)
from tagwire.factory import Factory

logger = logging.getLogger(__name__)


class Container:
    """Hold named dependencies and wire tagged attributes from them.

    Values are registered under a unique name, or under a generated
    ``unnamed.<n>`` name. Registration populates every attribute of the value
    annotated with ``Inject``: by name for ``Inject("name")``, by type for
    ``Inject()`` / ``Autowired[T]``. Dependencies must be registered before
    anything that requests them; nothing is resolved lazily.

    Every raising operation has a ``try_`` counterpart that returns the
    exception instead of raising it.

    The container is not thread-safe. Build it during application startup from
    a single thread and treat it as read-only afterwards.

    Examples:
        .. code-block:: python

            class Renderer:
                service: Annotated[Service, Inject("service-a")]


            container = Container()
            container.register_named("service-a", Service())
            container.register_named("renderer", Renderer())

    """

    __slots__ = (
        "_dependencies",
        "_describer",
        "_factory_invoker",
        "_unnamed_counter",
        "_unnamed_prefix",
    )

    def __init__(self, *, unnamed_prefix: str = DEFAULT_UNNAMED_PREFIX) -> None:
        """Initialize an empty container.

        Args:
            unnamed_prefix: Prefix of the names generated for anonymous
                registrations.

        Raises:
            TagwireInvalidNameError: If ``unnamed_prefix`` is empty, not a
                string, or the reserved ``"auto"``.

        """
        if (
            not isinstance(unnamed_prefix, str)
            or not unnamed_prefix
            or unnamed_prefix == AUTO_INJECTION_TAG
        ):
            raise TagwireInvalidNameError(unnamed_prefix)

        self._dependencies = DependencyTable()
        self._describer = TypeDescriber()
        self._factory_invoker = FactoryFunctionInvoker()
        self._unnamed_counter = 0
        self._unnamed_prefix = unnamed_prefix

    def register_named(self, name: str, value: Any) -> None:
        """Register a value, or the result of a factory function, under ``name``.

        Functions are invoked first with every parameter resolved by type. The
        resulting value is then populated and bound. When population fails the
        name stays unbound, but attributes assigned before the failing one
        keep their new values.

        Args:
            name: Unique dependency name. ``"auto"`` is reserved.
            value: The value to register, or a factory function producing it.

        Raises:
            TagwireInvalidNameError: If ``name`` is not a non-empty string.
            TagwireReservedNameError: If ``name`` is ``"auto"``.
            TagwireDuplicateNameError: If ``name`` is already bound.
            TagwireNotInjectableError: If the value declares injection tags but
                is not a mutable instance.
            TagwireNotRegisteredError: If a tag names an unregistered dependency.
            TagwireNotAssignableError: If a resolved dependency does not fit the
                attribute type.
            TagwireNotFoundForTypeError: If a by-type lookup has no match.
            TagwireAmbiguousTypeError: If a by-type lookup has several matches.
            TagwireUnsupportedFactoryError: If a factory function cannot be
                invoked.
            TagwireSecondResultNotErrorError: If a factory function declares a
                second result that is not an exception type.

        Notes:
            A failure produced by a factory function is raised unchanged.

        Examples:
            .. code-block:: python

                def new_logger(config: Config) -> tuple[Logger, Exception | None]:
                    if not config.log_level:
                        return Logger(), ValueError("log level is required")
                    return Logger(level=config.log_level), None


                container.register_named("config", Config(log_level="INFO"))
                container.register_named("logger", new_logger)

        """
        self._validate_name(name)

        dependency = self._describe(value)
        if dependency.descriptor.kind is ValueKind.FUNCTION:
            dependency = self._describe(self._factory_invoker.invoke(value, self._dependencies))

        self._bind(name, dependency)

    def register(self, value: Any) -> str:
        """Register a value, or the result of a factory function, under a generated name.

        Handy for dependencies that are only ever injected by type.

        Args:
            value: The value to register, or a factory function producing it.

        Returns:
            The generated name, ``unnamed.<n>`` by default.

        Raises:
            TagwireError: Any error documented on ``register_named``.

        """
        name = self._next_generated_name()
        self.register_named(name, value)
        return name

    def register_named_from_factory(self, name: str, factory: Factory) -> None:
        """Register the value created by a factory object under ``name``.

        The factory's own tagged attributes are populated first, then
        ``factory.create()`` runs, then the created value is populated and
        bound. The created value is bound as is, even when it is a function.

        Args:
            name: Unique dependency name. ``"auto"`` is reserved.
            factory: Object exposing a ``create()`` method.

        Raises:
            TagwireUnsupportedFactoryError: If ``factory`` has no ``create()``
                method or is a class rather than an instance.
            TagwireError: Any error documented on ``register_named``.

        Notes:
            Exceptions raised by ``factory.create()`` propagate unchanged and
            nothing is bound.

        """
        self._validate_name(name)
        if is_runtime_class(factory) or not isinstance(factory, Factory):
            msg = "a factory object with a create() method is expected"
            raise TagwireUnsupportedFactoryError(factory, msg)

        self.inject(factory)
        created = factory.create()
        self._bind(name, self._describe(created))

    def register_from_factory(self, factory: Factory) -> str:
        """Register the value created by a factory object under a generated name.

        Args:
            factory: Object exposing a ``create()`` method.

        Returns:
            The generated name.

        Raises:
            TagwireError: Any error documented on ``register_named_from_factory``.

        """
        name = self._next_generated_name()
        self.register_named_from_factory(name, factory)
        return name

    def get(self, name: str) -> Any:
        """Return the value bound under ``name``.

        Args:
            name: Dependency name to look up.

        Raises:
            TagwireNotFoundError: If nothing is bound under ``name``.

        """
        return self._dependencies.get(name).value

    def inject(self, target: Any) -> None:
        """Populate the tagged attributes of ``target`` without registering it.

        Args:
            target: Mutable instance whose tagged attributes should be filled.

        Raises:
            TagwireError: Any population error documented on ``register_named``.

        """
        self._populate(self._describe(target))

    def names(self) -> list[str]:
        """Return every bound name in registration order."""
        return self._dependencies.names()

    def try_register_named(self, name: str, value: Any) -> Exception | None:
        """Run ``register_named`` and return its exception instead of raising it."""
        return capture_error(self.register_named, name, value)

    def try_register(self, value: Any) -> Exception | None:
        """Run ``register`` and return its exception instead of raising it."""
        return capture_error(self.register, value)

    def try_register_named_from_factory(self, name: str, factory: Factory) -> Exception | None:
        """Run ``register_named_from_factory`` and return its exception instead of raising it."""
        return capture_error(self.register_named_from_factory, name, factory)

    def try_register_from_factory(self, factory: Factory) -> Exception | None:
        """Run ``register_from_factory`` and return its exception instead of raising it."""
        return capture_error(self.register_from_factory, factory)

    def try_get(self, name: str) -> tuple[Any, Exception | None]:
        """Run ``get`` and return a ``(value, error)`` pair.

        The value is ``None`` whenever the error is set.
        """
        return capture_value_and_error(self.get, name)

    def try_inject(self, target: Any) -> Exception | None:
        """Run ``inject`` and return its exception instead of raising it."""
        return capture_error(self.inject, target)

    def __contains__(self, name: object) -> bool:
        return name in self._dependencies

    def __len__(self) -> int:
        return len(self._dependencies)

    def _bind(self, name: str, dependency: Dependency) -> None:
        self._populate(dependency)
        # Factories may have bound the same name while running.
        if name in self._dependencies:
            raise TagwireDuplicateNameError(name)
        self._dependencies.add(name, dependency)
        logger.debug(
            "Registered dependency '%s' of type %s",
            name,
            dependency.descriptor.value_type.__qualname__,
        )

    def _populate(self, dependency: Dependency) -> None:
        descriptor = dependency.descriptor
        if not descriptor.is_injectable:
            if descriptor.tags:
                raise TagwireNotInjectableError(descriptor.record_type)
            return

        for tag in descriptor.tags:
            resolved = self._resolve_tag(tag)
            if not resolved.is_assignable_to(tag.field_type):
                raise TagwireNotAssignableError(tag.field_type, resolved.descriptor.value_type)

            dependency.assign(tag.field_name, resolved.value)
            logger.debug(
                "Injected %s.%s",
                descriptor.record_type.__qualname__,
                tag.field_name,
            )

    def _resolve_tag(self, tag: FieldTag) -> Dependency:
        if isinstance(tag.directive, ByType):
            return self._dependencies.get_by_type(tag.field_type)

        resolved = self._dependencies.find(tag.directive.name)
        if resolved is None:
            raise TagwireNotRegisteredError(tag.directive.name)
        return resolved

    def _describe(self, value: Any) -> Dependency:
        return Dependency(value=value, descriptor=self._describer.describe(value))

    def _validate_name(self, name: str) -> None:
        if not isinstance(name, str) or not name:
            raise TagwireInvalidNameError(name)
        if name == AUTO_INJECTION_TAG:
            raise TagwireReservedNameError(name)
        if name in self._dependencies:
            raise TagwireDuplicateNameError(name)

    def _next_generated_name(self) -> str:
        while True:
            name = f"{self._unnamed_prefix}.{self._unnamed_counter}"
            if name not in self._dependencies:
                logger.debug("Generated dependency name '%s'", name)
                return name
            self._unnamed_counter += 1
