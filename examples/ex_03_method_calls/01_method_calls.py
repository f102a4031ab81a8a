"""Method calls run on a service right after it is built, in declaration order."""

from __future__ import annotations

import asyncio

from diref import (
    ClassConstructorDefinition,
    Container,
    MethodCall,
    Parameter,
    Reference,
    mapping_locator,
)


class Logger:
    def __init__(self) -> None:
        self.lines: list[str] = []


class Mailer:
    def __init__(self) -> None:
        self.logger: Logger | None = None
        self.connected_to: str | None = None

    def set_logger(self, logger: Logger) -> None:
        self.logger = logger

    async def connect(self, host: str) -> None:
        await asyncio.sleep(0)
        self.connected_to = host


async def main() -> None:
    container = Container(class_locator=mapping_locator({"Mailer": Mailer}))
    container.set("logger", Logger())
    container.set_parameter("smtp.host", "smtp.local")

    definition = ClassConstructorDefinition("Mailer")
    definition.method_calls = [
        MethodCall("set_logger", [Reference("logger")]),
        MethodCall("connect", [Parameter("smtp.host")]),
    ]
    container.set_definition("mailer", definition)

    [mailer] = await container.get("mailer")

    print(f"has_logger={mailer.logger is not None}")  # => has_logger=True
    print(f"connected_to={mailer.connected_to}")  # => connected_to=smtp.local
    print(f"definition_locked={definition.used}")  # => definition_locked=True


if __name__ == "__main__":
    asyncio.run(main())
