"""Tests for Container registration, naming and lookup."""

from typing import Annotated

import pytest

from tagwire.container import Container
from tagwire.exceptions import (
    TagwireDuplicateNameError,
    TagwireInvalidNameError,
    TagwireNotFoundError,
    TagwireNotRegisteredError,
    TagwireReservedNameError,
)
from tagwire.markers import Inject


class _Counter:
    def __init__(self) -> None:
        self.value = 0


class TestRegisterNamed:
    def test_register_and_get_value(self, container: Container) -> None:
        container.register_named("config", 10)

        assert container.get("config") == 10

    def test_register_populates_named_fields(self, container: Container) -> None:
        class TypeA:
            field: Annotated[int, Inject("mocked-int")]

        class TypeB:
            field: Annotated[TypeA, Inject("type-a")]

        a = TypeA()
        b = TypeB()
        container.register_named("mocked-int", 10)
        container.register_named("type-a", a)
        container.register_named("type-b", b)

        assert a.field == 10
        assert b.field is a

    def test_duplicate_name_keeps_first_binding(self, container: Container) -> None:
        first = _Counter()
        container.register_named("counter", first)

        with pytest.raises(TagwireDuplicateNameError) as exc_info:
            container.register_named("counter", _Counter())

        assert exc_info.value.name == "counter"
        assert str(exc_info.value) == "tagwire: counter is already registered"
        assert container.get("counter") is first

    def test_reserved_name_is_rejected(self, container: Container) -> None:
        with pytest.raises(TagwireReservedNameError) as exc_info:
            container.register_named("auto", 1)

        assert str(exc_info.value) == "tagwire: auto is reserved, please use a different name"
        assert "auto" not in container

    def test_reserved_name_is_rejected_before_population(self, container: Container) -> None:
        class NeedsMissing:
            field: Annotated[int, Inject("missing")]

        # Population would fail with TagwireNotRegisteredError if it ran.
        with pytest.raises(TagwireReservedNameError):
            container.register_named("auto", NeedsMissing())

    def test_reserved_name_is_rejected_before_factory_call(self, container: Container) -> None:
        calls: list[str] = []

        def factory() -> int:
            calls.append("called")
            return 1

        with pytest.raises(TagwireReservedNameError):
            container.register_named("auto", factory)

        assert calls == []

    @pytest.mark.parametrize("name", ["", None, 42])
    def test_invalid_name_is_rejected(self, container: Container, name: object) -> None:
        with pytest.raises(TagwireInvalidNameError):
            container.register_named(name, 1)  # type: ignore[arg-type]

    def test_failed_population_leaves_name_unbound(self, container: Container) -> None:
        class NeedsMissing:
            field: Annotated[int, Inject("missing")]

        with pytest.raises(TagwireNotRegisteredError):
            container.register_named("needs-missing", NeedsMissing())

        assert "needs-missing" not in container
        assert len(container) == 0


class TestRegisterUnnamed:
    def test_consecutive_registrations_get_sequential_names(self, container: Container) -> None:
        names = [container.register(value) for value in ("a", "b", "c")]

        assert names == ["unnamed.0", "unnamed.1", "unnamed.2"]
        assert container.get("unnamed.0") == "a"
        assert container.get("unnamed.1") == "b"
        assert container.get("unnamed.2") == "c"

    def test_generated_name_skips_explicit_binding(self, container: Container) -> None:
        container.register_named("unnamed.0", "explicit")

        name = container.register("generated")

        assert name == "unnamed.1"
        assert container.get("unnamed.0") == "explicit"
        assert container.get("unnamed.1") == "generated"

    def test_generated_name_skips_several_explicit_bindings(self, container: Container) -> None:
        container.register_named("unnamed.0", 0)
        container.register_named("unnamed.1", 1)
        container.register_named("unnamed.3", 3)

        assert container.register("x") == "unnamed.2"
        assert container.register("y") == "unnamed.4"

    def test_failed_unnamed_registration_does_not_consume_name(self, container: Container) -> None:
        class NeedsMissing:
            field: Annotated[int, Inject("missing")]

        with pytest.raises(TagwireNotRegisteredError):
            container.register(NeedsMissing())

        assert container.register("ok") == "unnamed.0"

    def test_custom_unnamed_prefix(self) -> None:
        container = Container(unnamed_prefix="anon")

        assert container.register(1) == "anon.0"
        assert container.register(2) == "anon.1"

    @pytest.mark.parametrize("prefix", ["", "auto"])
    def test_invalid_unnamed_prefix(self, prefix: str) -> None:
        with pytest.raises(TagwireInvalidNameError):
            Container(unnamed_prefix=prefix)


class TestGet:
    def test_get_returns_identical_value(self, container: Container) -> None:
        counter = _Counter()
        container.register_named("counter", counter)

        assert container.get("counter") is counter
        assert container.get("counter") is container.get("counter")

    def test_get_missing_name(self, container: Container) -> None:
        with pytest.raises(TagwireNotFoundError) as exc_info:
            container.get("some-dep")

        assert exc_info.value.name == "some-dep"

    def test_names_and_membership(self, container: Container) -> None:
        container.register_named("b", 1)
        container.register_named("a", 2)
        container.register(3)

        assert container.names() == ["b", "a", "unnamed.0"]
        assert "a" in container
        assert "c" not in container
        assert len(container) == 3


class TestReturningCallStyle:
    def test_try_register_named_returns_none_on_success(self, container: Container) -> None:
        assert container.try_register_named("config", 10) is None
        assert container.get("config") == 10

    def test_try_register_named_returns_error(self, container: Container) -> None:
        container.register_named("config", 10)

        error = container.try_register_named("config", 11)

        assert isinstance(error, TagwireDuplicateNameError)
        assert container.get("config") == 10

    def test_try_register_returns_error(self, container: Container) -> None:
        class NeedsMissing:
            field: Annotated[int, Inject("missing")]

        error = container.try_register(NeedsMissing())

        assert isinstance(error, TagwireNotRegisteredError)
        assert error.name == "missing"

    def test_try_get(self, container: Container) -> None:
        container.register_named("config", 10)

        assert container.try_get("config") == (10, None)

        value, error = container.try_get("missing")
        assert value is None
        assert isinstance(error, TagwireNotFoundError)

    def test_try_inject(self, container: Container) -> None:
        class NeedsConfig:
            config: Annotated[int, Inject("config")]

        target = NeedsConfig()
        assert isinstance(container.try_inject(target), TagwireNotRegisteredError)

        container.register_named("config", 7)
        assert container.try_inject(target) is None
        assert target.config == 7
