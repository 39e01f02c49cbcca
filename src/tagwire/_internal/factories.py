from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import Any, NoReturn, get_args, get_origin, get_type_hints

from typing_extensions import Never

from tagwire._internal.dependencies import DependencyTable
from tagwire._internal.type_checks import is_exception_type, strip_annotated
from tagwire.exceptions import (
    TagwireNotFoundForTypeError,
    TagwireSecondResultNotErrorError,
    TagwireUnsupportedFactoryError,
)

logger = logging.getLogger(__name__)

_MISSING_ANNOTATION: Any = object()
_RESULT_WITH_ERROR_COUNT = 2
_SKIPPED_PARAMETER_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class FactoryParameter:
    """A factory function parameter that is filled by type-based lookup."""

    parameter: Parameter
    provides: Any

    @property
    def has_default(self) -> bool:
        return self.parameter.default is not Parameter.empty


@dataclass(frozen=True, slots=True)
class FactorySignature:
    """Normalized view of a factory function: its parameters and declared results."""

    parameters: tuple[FactoryParameter, ...]
    result_types: tuple[Any, ...]

    @property
    def returns_error(self) -> bool:
        return len(self.result_types) == _RESULT_WITH_ERROR_COUNT


class FactoryFunctionInvoker:
    """Invoke factory functions with parameters resolved purely by type.

    The number of results of a factory function is read from its return
    annotation. A fixed-length ``tuple[T, E]`` annotation declares a value plus
    an error slot where ``E`` must be an exception type, optionally joined with
    ``None``. ``None`` declares no result at all. Any other annotation, or no
    annotation, declares a single result.
    """

    def invoke(self, factory: Callable[..., Any], dependencies: DependencyTable) -> Any:
        """Call ``factory`` and return the value it produced.

        Args:
            factory: Factory function to call.
            dependencies: Registered dependencies used to fill its parameters.

        Raises:
            TagwireUnsupportedFactoryError: If the function is asynchronous, a
                generator, declares zero or more than two results, or has a
                required parameter without a type annotation, or its return
                annotation cannot be resolved.
            TagwireSecondResultNotErrorError: If the second declared result is
                not an exception type.
            TagwireNotFoundForTypeError: If a parameter type has no match.
            TagwireAmbiguousTypeError: If a parameter type has several matches.

        Notes:
            A failure returned in the error slot, and any exception raised by
            the factory itself, propagate unchanged.

        """
        factory_signature = self.describe(factory)
        args, kwargs = self._resolve_arguments(factory_signature, dependencies)

        logger.debug("Invoking factory function %s", _factory_name(factory))
        result = factory(*args, **kwargs)
        if not factory_signature.returns_error:
            return result

        if not isinstance(result, tuple) or len(result) != _RESULT_WITH_ERROR_COUNT:
            msg = (
                f"factory function {_factory_name(factory)} declares a (value, error) result "
                f"but returned {type(result).__qualname__}"
            )
            raise TagwireUnsupportedFactoryError(factory, msg)

        value, failure = result
        if failure is None:
            return value
        if not isinstance(failure, BaseException):
            raise TagwireSecondResultNotErrorError(factory, type(failure))
        raise failure

    def describe(self, factory: Callable[..., Any]) -> FactorySignature:
        """Validate ``factory`` and describe the parameters and results it declares."""
        if _is_async_or_generator(factory):
            msg = f"factory function {_factory_name(factory)} must be a plain synchronous function"
            raise TagwireUnsupportedFactoryError(factory, msg)

        try:
            signature = inspect.signature(factory)
        except (TypeError, ValueError) as error:
            raise TagwireUnsupportedFactoryError(factory) from error

        annotations, hints_error = self._resolved_type_hints(factory)
        return_annotation = annotations.get("return", signature.return_annotation)
        if isinstance(return_annotation, str):
            return_annotation = self._resolve_return_annotation(
                factory,
                return_annotation,
                hints_error,
            )
        result_types = self._result_types(return_annotation)
        if not result_types or len(result_types) > _RESULT_WITH_ERROR_COUNT:
            raise TagwireUnsupportedFactoryError(factory)
        if len(result_types) == _RESULT_WITH_ERROR_COUNT and not is_exception_type(result_types[1]):
            raise TagwireSecondResultNotErrorError(factory, result_types[1])

        parameters = tuple(
            FactoryParameter(
                parameter=parameter,
                provides=self._parameter_annotation(factory, parameter, annotations),
            )
            for parameter in signature.parameters.values()
            if parameter.kind not in _SKIPPED_PARAMETER_KINDS
        )
        return FactorySignature(parameters=parameters, result_types=result_types)

    def _resolve_arguments(
        self,
        factory_signature: FactorySignature,
        dependencies: DependencyTable,
    ) -> tuple[list[Any], dict[str, Any]]:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for factory_parameter in factory_signature.parameters:
            parameter = factory_parameter.parameter
            if factory_parameter.provides is _MISSING_ANNOTATION:
                value = parameter.default
            else:
                try:
                    value = dependencies.get_by_type(factory_parameter.provides).value
                except TagwireNotFoundForTypeError:
                    if not factory_parameter.has_default:
                        raise
                    value = parameter.default

            if parameter.kind is Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value

        return args, kwargs

    def _parameter_annotation(
        self,
        factory: Callable[..., Any],
        parameter: Parameter,
        annotations: dict[str, Any],
    ) -> Any:
        annotation = annotations.get(parameter.name, _MISSING_ANNOTATION)
        if annotation is not _MISSING_ANNOTATION:
            return annotation

        raw_annotation = parameter.annotation
        if raw_annotation is not Parameter.empty and not isinstance(raw_annotation, str):
            return raw_annotation
        if parameter.default is not Parameter.empty:
            return _MISSING_ANNOTATION

        msg = (
            f"unable to infer dependency for required parameter '{parameter.name}' "
            f"in factory function {_factory_name(factory)}, add a type annotation"
        )
        raise TagwireUnsupportedFactoryError(factory, msg)

    def _resolved_type_hints(
        self,
        factory: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        try:
            return get_type_hints(_unwrap_partial(factory), include_extras=True), None
        except (AttributeError, NameError, TypeError) as error:
            return {}, error

    def _resolve_return_annotation(
        self,
        factory: Callable[..., Any],
        annotation: str,
        hints_error: Exception | None,
    ) -> Any:
        # An unresolved return annotation leaves the result count unknown.
        global_namespace = getattr(_unwrap_partial(factory), "__globals__", {})
        try:
            return eval(annotation, global_namespace)  # noqa: S307
        except (AttributeError, NameError, SyntaxError, TypeError) as error:
            msg = (
                f"unable to resolve the return annotation {annotation!r} of factory function "
                f"{_factory_name(factory)}: {error}"
            )
            raise TagwireUnsupportedFactoryError(factory, msg) from (hints_error or error)

    def _result_types(self, annotation: Any) -> tuple[Any, ...]:
        annotation = strip_annotated(annotation)
        if annotation is Parameter.empty:
            return (Any,)
        if annotation is None or annotation is type(None) or annotation in (NoReturn, Never):
            return ()
        if get_origin(annotation) is tuple:
            args = get_args(annotation)
            if args in ((), ((),)):
                return () if annotation == tuple[()] else (annotation,)
            if args[-1] is Ellipsis:
                return (annotation,)
            return args
        return (annotation,)


def _is_async_or_generator(factory: Callable[..., Any]) -> bool:
    return (
        inspect.iscoroutinefunction(factory)
        or inspect.isgeneratorfunction(factory)
        or inspect.isasyncgenfunction(factory)
    )


def _unwrap_partial(factory: Callable[..., Any]) -> Callable[..., Any]:
    return factory.func if isinstance(factory, functools.partial) else factory


def _factory_name(factory: Callable[..., Any]) -> str:
    return getattr(factory, "__qualname__", None) or repr(factory)


__all__ = ["FactoryFunctionInvoker", "FactoryParameter", "FactorySignature"]
