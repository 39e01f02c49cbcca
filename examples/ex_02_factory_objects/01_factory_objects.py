"""Factory objects exposing ``create()``.

The factory's own tagged attributes are populated before ``create()`` runs,
then the created value is populated and registered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from tagwire import Autowired, Container, Inject


@dataclass
class Settings:
    dsn: str


@dataclass
class Connection:
    dsn: str


class Repository:
    connection: Autowired[Connection]

    def describe(self) -> str:
        return f"repository over {self.connection.dsn}"


class ConnectionFactory:
    settings: Annotated[Settings, Inject("settings")]

    def create(self) -> Connection:
        return Connection(dsn=self.settings.dsn)


class RepositoryFactory:
    def create(self) -> Repository:
        return Repository()


def main() -> None:
    container = Container()
    container.register_named("settings", Settings(dsn="sqlite://memory"))

    container.register_named_from_factory("connection", ConnectionFactory())
    name = container.register_from_factory(RepositoryFactory())

    print(container.get("connection").dsn)  # => sqlite://memory
    print(container.get(name).describe())  # => repository over sqlite://memory

    error = container.try_register_named_from_factory("broken", object())
    print(type(error).__name__)  # => TagwireUnsupportedFactoryError


if __name__ == "__main__":
    main()
