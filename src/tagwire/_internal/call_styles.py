from __future__ import annotations

from collections.abc import Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")


def capture_error(operation: Callable[P, object], *args: P.args, **kwargs: P.kwargs) -> Exception | None:
    """Run a raising operation and return its exception instead of raising it.

    Returns ``None`` on success. Only ``Exception`` subclasses are captured;
    ``KeyboardInterrupt`` and friends still propagate.
    """
    try:
        operation(*args, **kwargs)
    except Exception as error:  # noqa: BLE001
        return error
    return None


def capture_value_and_error(
    operation: Callable[P, R],
    *args: P.args,
    **kwargs: P.kwargs,
) -> tuple[R | None, Exception | None]:
    """Run a raising operation and return a ``(value, error)`` pair."""
    try:
        return operation(*args, **kwargs), None
    except Exception as error:  # noqa: BLE001
        return None, error


__all__ = ["capture_error", "capture_value_and_error"]
