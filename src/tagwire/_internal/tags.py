from __future__ import annotations

import inspect
import logging
import sys
from dataclasses import dataclass
from typing import Annotated, Any, TypeAlias, get_args, get_origin, get_type_hints

from tagwire.exceptions import TagwireInvalidTagError
from tagwire.markers import Inject

logger = logging.getLogger(__name__)

_ANNOTATED_MARKER_MIN_ARGS = 2
_INJECTION_MARKER_NAMES = ("Inject", "Autowired")


@dataclass(frozen=True, slots=True)
class ByName:
    """Resolve the field from the dependency registered under ``name``."""

    name: str


@dataclass(frozen=True, slots=True)
class ByType:
    """Resolve the field from the unique dependency assignable to the field type."""


Directive: TypeAlias = ByName | ByType


@dataclass(frozen=True, slots=True)
class FieldTag:
    """Pre-parsed injection request of a single record field."""

    field_name: str
    field_type: Any
    directive: Directive


class FieldTagParser:
    """Extract injection tags from ``Annotated[T, Inject(...)]`` class annotations.

    Results are cached per record type. Tags are reported in the order
    ``typing.get_type_hints`` yields them: base classes first, then the
    subclass' own annotations.
    """

    def __init__(self) -> None:
        self._tags_cache: dict[type[Any], tuple[FieldTag, ...]] = {}

    def parse(self, record_type: type[Any]) -> tuple[FieldTag, ...]:
        """Return the injection tags declared on ``record_type``.

        Args:
            record_type: Class whose annotations are inspected.

        Raises:
            TagwireInvalidTagError: If a tagged annotation cannot be evaluated, a
                field carries more than one ``Inject`` tag, or a tag name is
                empty.

        """
        cached = self._tags_cache.get(record_type)
        if cached is not None:
            return cached

        tags = tuple(self._parse_uncached(record_type))
        self._tags_cache[record_type] = tags
        if tags:
            logger.debug(
                "Parsed %d injection tag(s) on %s: %s",
                len(tags),
                record_type.__qualname__,
                ", ".join(tag.field_name for tag in tags),
            )
        return tags

    def _parse_uncached(self, record_type: type[Any]) -> list[FieldTag]:
        try:
            hints = get_type_hints(record_type, include_extras=True)
        except (AttributeError, NameError, TypeError):
            hints = self._resolve_hints_per_field(record_type)

        tags: list[FieldTag] = []
        for field_name, hint in hints.items():
            tag = self._parse_field(record_type, field_name, hint)
            if tag is not None:
                tags.append(tag)
        return tags

    def _resolve_hints_per_field(self, record_type: type[Any]) -> dict[str, Any]:
        # Untagged fields may name types that only exist under TYPE_CHECKING.
        hints: dict[str, Any] = {}
        for klass in reversed(record_type.__mro__):
            try:
                annotations = inspect.get_annotations(klass)
            except (AttributeError, NameError, TypeError) as error:
                raise TagwireInvalidTagError(record_type, str(error)) from error

            global_namespace = getattr(sys.modules.get(klass.__module__), "__dict__", {})
            local_namespace = dict(vars(klass))
            for field_name, annotation in annotations.items():
                if not isinstance(annotation, str):
                    hints[field_name] = annotation
                    continue
                try:
                    hints[field_name] = eval(annotation, global_namespace, local_namespace)  # noqa: S307
                except (AttributeError, NameError, SyntaxError, TypeError) as error:
                    if _mentions_injection_marker(annotation):
                        msg = f"field '{field_name}': {error}"
                        raise TagwireInvalidTagError(record_type, msg) from error
                    hints.pop(field_name, None)
                    logger.debug(
                        "Skipped unresolvable untagged field %s.%s",
                        record_type.__qualname__,
                        field_name,
                    )
        return hints

    def _parse_field(self, record_type: type[Any], field_name: str, hint: Any) -> FieldTag | None:
        if get_origin(hint) is not Annotated:
            return None
        annotation_args = get_args(hint)
        if len(annotation_args) < _ANNOTATED_MARKER_MIN_ARGS:
            return None  # pragma: no cover - Annotated requires at least 2 args

        markers = [item for item in annotation_args[1:] if isinstance(item, Inject)]
        if not markers:
            return None
        if len(markers) > 1:
            msg = f"field '{field_name}' has more than one Inject tag"
            raise TagwireInvalidTagError(record_type, msg)

        marker = markers[0]
        if not isinstance(marker.name, str) or not marker.name:
            msg = f"field '{field_name}' has an empty Inject tag"
            raise TagwireInvalidTagError(record_type, msg)

        directive: Directive = ByType() if marker.is_auto else ByName(marker.name)
        return FieldTag(field_name=field_name, field_type=annotation_args[0], directive=directive)


def _mentions_injection_marker(annotation: str) -> bool:
    return any(marker in annotation for marker in _INJECTION_MARKER_NAMES)


__all__ = ["ByName", "ByType", "Directive", "FieldTag", "FieldTagParser"]
