"""Locators: bridge classes and instances the container does not own.

The class locator below imports classes by path. The instance locator plays
the part of another framework's injector; it may be async and returns ``None``
for identifiers it does not know.
"""

from __future__ import annotations

import asyncio
from collections import OrderedDict

from diref import ClassConstructorDefinition, Container, GetServiceError, import_class_locator


class HostInjector:
    def __init__(self) -> None:
        self._services = {"clock": "host-clock"}

    async def locate(self, service_id: str) -> object | None:
        await asyncio.sleep(0)
        return self._services.get(service_id)


async def main() -> None:
    container = Container(class_locator=import_class_locator, instance_locator=HostInjector())
    container.set_definition("registry", ClassConstructorDefinition("collections:OrderedDict"))

    registry, clock = await container.get("registry", "clock")

    print(f"registry_type={type(registry) is OrderedDict}")  # => registry_type=True
    print(f"clock={clock}")  # => clock=host-clock

    try:
        await container.get("unknown_service")
    except GetServiceError as error:
        print(error)  # => Error getting service "unknown_service": Undefined service definition and instance for identifier "unknown_service"


if __name__ == "__main__":
    asyncio.run(main())
