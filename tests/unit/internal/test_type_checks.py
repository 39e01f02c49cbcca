from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Annotated, Any, Optional, Protocol, runtime_checkable

import pytest

from tagwire._internal.type_checks import (
    is_assignable,
    is_exception_type,
    is_runtime_class,
    strip_annotated,
)


class _Closer(Protocol):
    def close(self) -> None: ...


@runtime_checkable
class _RuntimeCloser(Protocol):
    def close(self) -> None: ...


class _Resource:
    def close(self) -> None:
        pass


class _Base:
    pass


class _Derived(_Base):
    pass


def _check(value: Any, target: Any) -> bool:
    return is_assignable(value, type(value), target)


def test_is_runtime_class() -> None:
    assert is_runtime_class(int)
    assert not is_runtime_class(list[int])
    assert not is_runtime_class(1)


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (Exception, True),
        (ValueError, True),
        (Exception | None, True),
        (Optional[BaseException], True),  # noqa: UP007
        (Annotated[Exception, "meta"], True),
        (int, False),
        (type(None), False),
        (int | Exception, False),
        (str, False),
    ],
)
def test_is_exception_type(annotation: Any, expected: bool) -> None:
    assert is_exception_type(annotation) is expected


def test_strip_annotated() -> None:
    assert strip_annotated(Annotated[int, "a"]) is int
    assert strip_annotated(int) is int


class TestIsAssignable:
    def test_identical_type(self) -> None:
        assert _check(1, int)
        assert not _check("1", int)

    def test_subclass(self) -> None:
        assert _check(_Derived(), _Base)
        assert not _check(_Base(), _Derived)

    def test_any_and_object_accept_everything(self) -> None:
        assert _check(1, Any)
        assert _check(_Base(), object)

    def test_union_accepts_any_arm(self) -> None:
        assert _check("x", int | str)
        assert _check(None, Optional[int])  # noqa: UP007
        assert not _check(1.0, int | str)

    def test_annotated_is_unwrapped(self) -> None:
        assert _check(1, Annotated[int, "meta"])

    def test_generic_alias_uses_origin(self) -> None:
        assert _check([1], list[int])
        assert _check(["not checked"], list[int])
        assert _check([], Iterable[int])
        assert not _check((1,), list[int])

    def test_callable(self) -> None:
        assert _check(len, Callable[..., int])
        assert not _check(1, Callable[..., int])

    def test_protocol_is_structural(self) -> None:
        assert _check(_Resource(), _Closer)
        assert not _check(1, _Closer)

    def test_runtime_checkable_protocol(self) -> None:
        assert _check(_Resource(), _RuntimeCloser)
        assert not _check("x", _RuntimeCloser)

    def test_type_of(self) -> None:
        assert _check(_Derived, type[_Base])
        assert not _check(_Base, type[_Derived])
        assert not _check(_Derived(), type[_Base])
        assert _check(int, type)

    def test_none(self) -> None:
        assert _check(None, None)
        assert not _check(1, None)
