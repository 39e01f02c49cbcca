from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Factory(Protocol):
    """Create a value to register in a container.

    A factory may declare injection tags on its own attributes. The container
    populates them before calling ``create``, then populates the created value
    before binding it.

    ``create`` signals failure by raising. The exception reaches the caller of
    the registration unchanged.

    Examples:
        .. code-block:: python

            class ServiceBFactory:
                service_a: Annotated[ServiceA, Inject("service-a")]

                def create(self) -> ServiceB:
                    return ServiceB(prefix=self.service_a.prefix)


            container.register_named_from_factory("service-b", ServiceBFactory())

    """

    def create(self) -> Any:
        """Return the value to register."""
        ...
