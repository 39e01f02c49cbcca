from typing import TYPE_CHECKING, Annotated, Any, NamedTuple, TypeVar, Union, get_args, get_origin

from tagwire.defaults import AUTO_INJECTION_TAG

T = TypeVar("T")


class Inject(NamedTuple):
    """Request injection of a dependency into an annotated class attribute.

    Attach ``Inject`` metadata to ``typing.Annotated``. The tag value is either
    the name of a registered dependency or ``"auto"`` (the default) to resolve
    the unique registered dependency assignable to the annotated type.

    Examples:
        .. code-block:: python

            class Renderer:
                service: Annotated[Service, Inject("service-a")]
                config: Annotated[Config, Inject()]

    """

    name: str = AUTO_INJECTION_TAG

    @property
    def is_auto(self) -> bool:
        """Return true when the tag requests resolution by type."""
        return self.name == AUTO_INJECTION_TAG


if TYPE_CHECKING:
    Autowired = Union[T, T]  # noqa: UP007,PYI016
    """Mark a class attribute for injection by type.

    At runtime ``Autowired[T]`` becomes ``Annotated[T, Inject("auto")]``.
    """

else:

    class Autowired:
        """Mark a class attribute for injection by type.

        At runtime ``Autowired[T]`` resolves to ``Annotated[T, Inject("auto")]``.

        Examples:
            .. code-block:: python

                class Handler:
                    repository: Autowired[Repository]

        """

        def __class_getitem__(cls, item: T) -> Annotated[T, Inject]:
            if get_origin(item) is Annotated:
                args = get_args(item)
                return build_annotated((args[0], *args[1:], Inject()))
            return build_annotated((item, Inject()))


def build_annotated(params: tuple[object, ...]) -> Any:
    """Return Annotated[...] with a pre-built params tuple (Py 3.10+ compatible)."""
    try:
        return Annotated.__class_getitem__(params)  # type: ignore[attr-defined]
    except AttributeError:
        return Annotated.__getitem__(params)  # type: ignore[attr-defined]


__all__ = ["Autowired", "Inject", "build_annotated"]
