"""The four kinds of definitions.

- ``FunctionServiceFactoryDefinition``: call a callable service.
- ``ServiceMethodFactoryDefinition``: call a method of another service.
- ``StaticMethodFactoryDefinition``: call a method of a located class.
- ``ClassConstructorDefinition``: instantiate a located class.
"""

from __future__ import annotations

import asyncio

from diref import (
    ClassConstructorDefinition,
    Container,
    FunctionServiceFactoryDefinition,
    Parameter,
    Reference,
    ServiceMethodFactoryDefinition,
    StaticMethodFactoryDefinition,
    mapping_locator,
)


class Client:
    def __init__(self, source: str) -> None:
        self.source = source

    @staticmethod
    def create(source: str) -> Client:
        return Client(source)


class ClientFactory:
    def build(self, source: str) -> Client:
        return Client(source)


async def connect(source: str) -> Client:
    await asyncio.sleep(0)
    return Client(source)


async def main() -> None:
    container = Container(class_locator=mapping_locator({"Client": Client}))
    container.set("connect", connect)
    container.set("client_factory", ClientFactory())
    container.set_parameter("label", "constructor")

    container.set_definition(
        "by_function",
        FunctionServiceFactoryDefinition(Reference("connect"), ["function"]),
    )
    container.set_definition(
        "by_service_method",
        ServiceMethodFactoryDefinition((Reference("client_factory"), "build"), ["service"]),
    )
    container.set_definition(
        "by_static_method",
        StaticMethodFactoryDefinition(("Client", "create"), ["static"]),
    )
    container.set_definition(
        "by_constructor",
        ClassConstructorDefinition("Client", [Parameter("label")]),
    )

    clients = await container.get(
        "by_function",
        "by_service_method",
        "by_static_method",
        "by_constructor",
    )

    print(",".join(client.source for client in clients))  # => function,service,static,constructor


if __name__ == "__main__":
    asyncio.run(main())
