from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing_extensions import Self

from diref.definitions import Definition
from diref.exceptions import (
    GetServiceError,
    ServiceDefinitionAlreadyUsedError,
    UndefinedParameterError,
    UndefinedServiceDefinitionError,
)
from diref.locators import ClassLocator, InstanceLocator, LocateFunction, as_locate_function
from diref.resolver import ResolutionOwner, Resolver

logger = logging.getLogger(__name__)


class Container:
    """Hold services, their definitions and parameters, and resolve them.

    Services are addressed by string identifiers. An identifier is satisfied,
    in order of precedence, by an instance stored with ``set``, by a
    definition stored with ``set_definition`` (built once, then cached), or by
    the instance locator. Parameters live in their own namespace and are
    referenced from definitions with ``Parameter``.

    Resolution is asynchronous because factories, method calls and the
    instance locator may return awaitables. Concurrent ``get`` calls for the
    same identifier share a single construction.

    Examples:
        .. code-block:: python

            container = Container(class_locator=mapping_locator({"Mailer": Mailer}))
            container.set_parameter("smtp.host", "localhost")
            container.set_definition(
                "mailer",
                ClassConstructorDefinition("Mailer", [Parameter("smtp.host")]),
            )
            [mailer] = await container.get("mailer")

    """

    def __init__(
        self,
        *,
        class_locator: ClassLocator | LocateFunction | None = None,
        instance_locator: InstanceLocator | LocateFunction | None = None,
    ) -> None:
        """Initialize an empty container.

        Args:
            class_locator: Finds classes by name for static-method and
                class-constructor definitions.
            instance_locator: Provides instances for identifiers with neither
                an instance nor a definition.

        """
        self._instances: dict[str, Any] = {}
        self._definitions: dict[str, Definition] = {}
        self._parameters: dict[str, Any] = {}
        self._resolver = Resolver(
            instances=self._instances,
            definitions=self._definitions,
            parameters=self._parameters,
        )

        if class_locator is not None:
            self.register_class_locator(class_locator)
        if instance_locator is not None:
            self.register_instance_locator(instance_locator)

    def set(self, service_id: str, instance: Any) -> Self:
        """Store ``instance`` under ``service_id``, replacing any previous one."""
        self._instances[service_id] = instance
        return self

    async def get(self, *service_ids: str) -> list[Any]:
        """Resolve services and return them in the order they were requested.

        Identifiers are resolved one after another within the same call, so a
        dependency shared by several of them is built once.

        Raises:
            GetServiceError: If any identifier cannot be resolved. The message
                names the requested identifier and the underlying failure.

        """
        owner = ResolutionOwner()
        services: list[Any] = []
        for service_id in service_ids:
            try:
                services.append(await self._resolver.resolve(service_id, (), owner))
            except Exception as exc:
                raise GetServiceError(service_id, exc) from exc
        return services

    def set_definition(self, service_id: str, definition: Definition) -> Self:
        """Store the recipe used to build ``service_id`` on first request.

        Raises:
            ServiceDefinitionAlreadyUsedError: If the current definition of
                ``service_id`` has already been used to build a service.

        """
        current = self._definitions.get(service_id)
        if current is not None and getattr(current, "used", False):
            raise ServiceDefinitionAlreadyUsedError(service_id)
        self._definitions[service_id] = definition
        return self

    def get_definition(self, service_id: str) -> Definition:
        """Return the definition stored under ``service_id``.

        Raises:
            UndefinedServiceDefinitionError: If none is stored.

        """
        try:
            return self._definitions[service_id]
        except KeyError:
            raise UndefinedServiceDefinitionError(service_id) from None

    def has_definition(self, service_id: str) -> bool:
        return service_id in self._definitions

    def has_instance(self, service_id: str) -> bool:
        return service_id in self._instances

    def has(self, service_id: str) -> bool:
        """Return whether an instance or a definition exists for ``service_id``.

        The instance locator is not consulted.
        """
        return self.has_instance(service_id) or self.has_definition(service_id)

    def set_parameter(self, name: str, value: Any) -> Self:
        self._parameters[name] = value
        return self

    def get_parameter(self, name: str) -> Any:
        """Return the parameter stored under ``name``.

        Raises:
            UndefinedParameterError: If no such parameter was set.

        """
        try:
            return self._parameters[name]
        except KeyError:
            raise UndefinedParameterError(name) from None

    def has_parameter(self, name: str) -> bool:
        return name in self._parameters

    def register_class_locator(self, locator: ClassLocator | LocateFunction) -> Self:
        """Use ``locator`` to find classes named by definitions."""
        self._resolver.class_locator = as_locate_function(locator)
        logger.debug("Registered class locator %r", locator)
        return self

    def register_instance_locator(self, locator: InstanceLocator | LocateFunction) -> Self:
        """Use ``locator`` as the fallback source of instances.

        The locator receives the identifier and returns the instance, an
        awaitable of it, or ``None`` when it does not know the identifier.
        Located instances are cached like any other.
        """
        self._resolver.instance_locator = as_locate_function(locator)
        logger.debug("Registered instance locator %r", locator)
        return self
