"""Errors raised by table operations and by resolution.

Failures during ``get`` are always reported as ``GetServiceError`` naming the
requested identifier; table lookups raise their own error immediately.
"""

from __future__ import annotations

import asyncio

from diref import (
    Container,
    FunctionServiceFactoryDefinition,
    GetServiceError,
    Reference,
    ServiceDefinitionAlreadyUsedError,
    UndefinedParameterError,
)


def build(*_: object) -> object:
    return object()


async def main() -> None:
    container = Container()
    container.set("build", build)
    for service_id, dependency in (("foo", "bar"), ("bar", "qux"), ("qux", "foo")):
        container.set_definition(
            service_id,
            FunctionServiceFactoryDefinition(Reference("build"), [Reference(dependency)]),
        )

    try:
        await container.get("foo")
    except GetServiceError as error:
        print(error)  # => Error getting service "foo": Circular dependency found: foo <- qux <- bar <- foo

    try:
        container.set_definition("foo", FunctionServiceFactoryDefinition(Reference("build")))
    except ServiceDefinitionAlreadyUsedError as error:
        print(type(error).__name__)  # => ServiceDefinitionAlreadyUsedError

    try:
        container.get_parameter("missing")
    except UndefinedParameterError as error:
        print(error)  # => Undefined parameter for identifier "missing"


if __name__ == "__main__":
    asyncio.run(main())
