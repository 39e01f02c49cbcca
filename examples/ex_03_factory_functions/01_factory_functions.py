"""Factory functions with parameters resolved by type.

A function returning ``tuple[T, Exception | None]`` reports failures through
its second result. The failure is raised unchanged and nothing is registered.
"""

from __future__ import annotations

from dataclasses import dataclass

from tagwire import Container


@dataclass
class Config:
    log_level: str


@dataclass
class Logger:
    level: str


def new_logger(config: Config) -> tuple[Logger, Exception | None]:
    if not config.log_level:
        return Logger(level="NOTSET"), ValueError("log level is required")
    return Logger(level=config.log_level), None


def new_greeting(logger: Logger, punctuation: str = "!") -> str:
    return f"hello at {logger.level}{punctuation}"


def main() -> None:
    container = Container()
    container.register_named("config", Config(log_level="INFO"))
    container.register_named("logger", new_logger)
    container.register_named("greeting", new_greeting)

    print(container.get("logger").level)  # => INFO
    print(container.get("greeting"))  # => hello at INFO!

    broken = Container()
    broken.register(Config(log_level=""))
    error = broken.try_register_named("logger", new_logger)
    print(repr(error))  # => ValueError('log level is required')
    print("logger" in broken)  # => False


if __name__ == "__main__":
    main()
