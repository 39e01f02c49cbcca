"""Named components wired with ``Inject("name")`` and ``Autowired[T]``.

This module registers a configuration value and two services, then lets the
container fill tagged attributes by name and by type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Protocol

from tagwire import Autowired, Container, Inject


class ServiceA(Protocol):
    def render(self) -> str: ...


@dataclass
class ServiceAImpl:
    data: str

    def render(self) -> str:
        return f"data: {self.data}"


class ServiceBImpl:
    default_value: Annotated[int, Inject("config")]
    service_a: Annotated[ServiceA, Inject("service-a")]

    def render(self) -> str:
        return f"{self.service_a.render()}, default={self.default_value}"


class Report:
    service_b: Autowired[ServiceBImpl]


def main() -> None:
    container = Container()

    container.register_named("config", 10)
    container.register_named("service-a", ServiceAImpl(data="foo"))
    container.register_named("service-b", ServiceBImpl())
    generated_name = container.register(Report())

    service_b = container.get("service-b")
    print(service_b.render())  # => data: foo, default=10

    report = container.get(generated_name)
    print(generated_name)  # => unnamed.0
    print(report.service_b is service_b)  # => True


if __name__ == "__main__":
    main()
