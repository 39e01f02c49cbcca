from __future__ import annotations

import pytest

from tagwire._internal.dependencies import Dependency, DependencyTable
from tagwire._internal.descriptors import TypeDescriber
from tagwire.exceptions import (
    TagwireAmbiguousTypeError,
    TagwireNotFoundError,
    TagwireNotFoundForTypeError,
)


@pytest.fixture()
def table() -> DependencyTable:
    return DependencyTable()


def _dependency(value: object) -> Dependency:
    return Dependency(value=value, descriptor=TypeDescriber().describe(value))


def test_add_get_and_find(table: DependencyTable) -> None:
    dependency = _dependency(1)
    table.add("one", dependency)

    assert table.get("one") is dependency
    assert table.find("one") is dependency
    assert table.find("two") is None
    assert "one" in table
    assert len(table) == 1


def test_get_missing(table: DependencyTable) -> None:
    with pytest.raises(TagwireNotFoundError):
        table.get("missing")


def test_get_by_type(table: DependencyTable) -> None:
    number = _dependency(1)
    table.add("number", number)
    table.add("text", _dependency("a"))

    assert table.get_by_type(int) is number


def test_get_by_type_reports_every_match(table: DependencyTable) -> None:
    table.add("z", _dependency(1))
    table.add("text", _dependency("a"))
    table.add("a", _dependency(2))

    with pytest.raises(TagwireAmbiguousTypeError) as exc_info:
        table.get_by_type(int)

    assert exc_info.value.names == ["a", "z"]


def test_get_by_type_without_match(table: DependencyTable) -> None:
    table.add("text", _dependency("a"))

    with pytest.raises(TagwireNotFoundForTypeError) as exc_info:
        table.get_by_type(bytes)

    assert exc_info.value.dependency_type is bytes


def test_assign_sets_attribute() -> None:
    class Target:
        pass

    target = Target()
    _dependency(target).assign("field", 5)

    assert target.field == 5  # type: ignore[attr-defined]
