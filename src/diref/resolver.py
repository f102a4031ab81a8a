from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Coroutine, Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from diref.definitions import (
    ClassConstructorDefinition,
    Definition,
    DefinitionKind,
    FunctionServiceFactoryDefinition,
    ServiceMethodFactoryDefinition,
    StaticMethodFactoryDefinition,
)
from diref.exceptions import (
    CircularDependencyError,
    ClassNotLocatedError,
    EmptyServiceError,
    FactoryMethodNotFoundError,
    FactoryNotCallableError,
    InvalidDefinitionError,
    MethodNotFoundError,
    UndefinedParameterError,
    UndefinedServiceError,
)
from diref.locators import LocateFunction
from diref.values import Argument, MethodCall, Parameter, Reference

logger = logging.getLogger(__name__)

ResolutionPath: TypeAlias = tuple[str, ...]
"""Identifiers being resolved by one call chain, outermost first."""

_MISSING: Any = object()


@dataclass(eq=False)
class ResolutionOwner:
    """Identify one ``Container.get`` call.

    In-flight resolutions are attributed to their owner so that a concurrent
    call waiting on them can tell whether the owner is, directly or through
    other calls, waiting on it in return.
    """

    task: asyncio.Task[Any] | None = field(default_factory=asyncio.current_task)

    @property
    def flow(self) -> object:
        """Key shared by this call and the nested calls made from its task."""
        return self.task if self.task is not None else self


class _ResolutionAbandoned(Exception):
    """Set on a shared future when the call building it was cancelled."""


@dataclass(frozen=True, slots=True)
class _InFlight:
    future: asyncio.Future[Any]
    owner: ResolutionOwner


@dataclass(frozen=True, slots=True)
class _Wait:
    service_id: str
    path: ResolutionPath


_Builder: TypeAlias = Callable[[Any, ResolutionPath, ResolutionOwner], Awaitable[Any]]


class Resolver:
    """Turn service identifiers into instances.

    The resolver reads and fills the tables owned by the container. For each
    identifier it checks, in order: the resolution path (cycle), resolutions
    in flight in other calls, the instance cache, the definitions, and finally
    the instance locator.

    An instance is cached before its method calls run, but other calls keep
    awaiting the shared resolution until those calls have finished.

    Errors are raised as-is; ``Container.get`` adds the requested identifier.
    """

    def __init__(
        self,
        instances: MutableMapping[str, Any],
        definitions: Mapping[str, Definition],
        parameters: Mapping[str, Any],
    ) -> None:
        self._instances = instances
        self._definitions = definitions
        self._parameters = parameters

        self.class_locator: LocateFunction | None = None
        self.instance_locator: LocateFunction | None = None

        self._in_flight: dict[str, _InFlight] = {}
        # Keyed by flow: a task awaits at most one resolution at a time.
        self._waits: dict[object, _Wait] = {}
        self._builders: dict[DefinitionKind, _Builder] = {
            DefinitionKind.FUNCTION: self._call_function_factory,
            DefinitionKind.SERVICE_METHOD: self._call_service_method,
            DefinitionKind.STATIC_METHOD: self._call_static_method,
            DefinitionKind.CLASS_CONSTRUCTOR: self._construct_class,
        }

    async def resolve(
        self,
        service_id: str,
        path: ResolutionPath,
        owner: ResolutionOwner,
    ) -> Any:
        """Resolve ``service_id`` for the call chain ``path`` of ``owner``.

        Raises:
            CircularDependencyError: If ``service_id`` is already on ``path`` or
                waiting for it would never finish.
            DIRefError: For any other resolution failure.

        """
        if service_id in path:
            raise CircularDependencyError(_cycle_chain(service_id, path))

        in_flight = self._in_flight.get(service_id)
        if in_flight is not None and not _same_flow(in_flight.owner, owner):
            return await self._wait_for(service_id, path, owner, in_flight)

        if service_id in self._instances:
            return self._instances[service_id]

        if in_flight is not None:
            return await self._wait_for(service_id, path, owner, in_flight)

        definition = self._definitions.get(service_id)
        if definition is not None:
            return await self._track(
                service_id,
                owner,
                self._instantiate(service_id, definition, (*path, service_id), owner),
            )

        return await self._track(service_id, owner, self._locate_instance(service_id))

    async def resolve_arguments(
        self,
        arguments: Sequence[Argument],
        path: ResolutionPath,
        owner: ResolutionOwner,
    ) -> list[Any]:
        """Resolve an argument list positionally.

        References are resolved as services, parameters are read from the
        parameter table, and anything else is passed through unchanged.
        """
        resolved: list[Any] = []
        for argument in arguments:
            if isinstance(argument, Reference):
                resolved.append(await self.resolve(argument.id, path, owner))
            elif isinstance(argument, Parameter):
                resolved.append(self._parameter(argument.name))
            else:
                resolved.append(argument)
        return resolved

    async def _track(
        self,
        service_id: str,
        owner: ResolutionOwner,
        work: Coroutine[Any, Any, Any],
    ) -> Any:
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        entry = _InFlight(future=future, owner=owner)
        self._in_flight[service_id] = entry
        try:
            instance = await work
        except asyncio.CancelledError:
            # Waiters start over instead of inheriting the cancellation.
            future.set_exception(_ResolutionAbandoned())
            future.exception()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # Waiters re-raise it from the future.
            future.exception()
            raise
        else:
            future.set_result(instance)
            return instance
        finally:
            if self._in_flight.get(service_id) is entry:
                del self._in_flight[service_id]

    async def _wait_for(
        self,
        service_id: str,
        path: ResolutionPath,
        owner: ResolutionOwner,
        in_flight: _InFlight,
    ) -> Any:
        wait = _Wait(service_id=service_id, path=path)
        chain = self._find_wait_cycle(owner, wait, in_flight.owner)
        if chain is not None:
            raise CircularDependencyError(chain)

        logger.debug("Waiting for in-flight resolution of service %r", service_id)
        self._waits[owner.flow] = wait
        try:
            return await asyncio.shield(in_flight.future)
        except _ResolutionAbandoned:
            logger.debug("Resolution of service %r was cancelled, retrying", service_id)
        finally:
            del self._waits[owner.flow]
        return await self.resolve(service_id, path, owner)

    def _find_wait_cycle(
        self,
        owner: ResolutionOwner,
        wait: _Wait,
        blocking_owner: ResolutionOwner,
    ) -> list[str] | None:
        # Follow owner -> awaited id -> owner of that id until it loops back.
        waits = [wait]
        seen: set[object] = set()
        while not _same_flow(blocking_owner, owner):
            if blocking_owner.flow in seen:
                return None
            seen.add(blocking_owner.flow)

            # The wait may belong to a nested get() made from the owner's task.
            next_wait = self._waits.get(blocking_owner.flow)
            if next_wait is None:
                return None
            next_in_flight = self._in_flight.get(next_wait.service_id)
            if next_in_flight is None:
                return None
            waits.append(next_wait)
            blocking_owner = next_in_flight.owner

        repeated = waits[-1].service_id
        sequence = list(_tail_from(waits[0].path, repeated))
        for previous, current in zip(waits, waits[1:]):
            sequence.extend(_tail_from(current.path, previous.service_id))
        sequence.append(repeated)
        sequence.reverse()
        return sequence

    async def _instantiate(
        self,
        service_id: str,
        definition: Definition,
        path: ResolutionPath,
        owner: ResolutionOwner,
    ) -> Any:
        build = self._builders.get(getattr(definition, "kind", None))  # type: ignore[arg-type]
        if build is None:
            raise InvalidDefinitionError(definition)
        definition.mark_used()

        instance = await build(definition, path, owner)
        if inspect.isawaitable(instance):
            instance = await instance
        if instance is None:
            raise EmptyServiceError(service_id)

        stored = self._instances.setdefault(service_id, instance)
        if stored is not instance:
            logger.debug("Service %r was set while being built, keeping it", service_id)
            return stored

        # Cached before method calls run; evicted again if one of them fails.
        logger.debug("Instantiated service %r from %s", service_id, definition.kind.name)
        try:
            for method_call in definition.method_calls:
                await self._apply_method_call(instance, method_call, path, owner)
        except BaseException:
            if self._instances.get(service_id) is instance:
                del self._instances[service_id]
            raise
        return self._instances.get(service_id, instance)

    async def _apply_method_call(
        self,
        instance: Any,
        method_call: MethodCall,
        path: ResolutionPath,
        owner: ResolutionOwner,
    ) -> None:
        method = getattr(instance, method_call.method, _MISSING)
        if method is _MISSING:
            raise MethodNotFoundError(method_call.method)

        arguments = await self.resolve_arguments(method_call.arguments, path, owner)
        result = method(*arguments)
        if inspect.isawaitable(result):
            await result

    async def _locate_instance(self, service_id: str) -> Any:
        if self.instance_locator is None:
            raise UndefinedServiceError(service_id)

        instance = self.instance_locator(service_id)
        if inspect.isawaitable(instance):
            instance = await instance
        if instance is None:
            raise UndefinedServiceError(service_id)

        logger.debug("Service %r provided by the instance locator", service_id)
        return self._instances.setdefault(service_id, instance)

    async def _call_function_factory(
        self,
        definition: FunctionServiceFactoryDefinition,
        path: ResolutionPath,
        owner: ResolutionOwner,
    ) -> Any:
        factory_id = definition.factory.id
        factory = await self.resolve(factory_id, path, owner)
        if not callable(factory):
            raise FactoryNotCallableError(factory_id)

        arguments = await self.resolve_arguments(definition.arguments, path, owner)
        return factory(*arguments)

    async def _call_service_method(
        self,
        definition: ServiceMethodFactoryDefinition,
        path: ResolutionPath,
        owner: ResolutionOwner,
    ) -> Any:
        factory_reference, method_name = definition.factory
        factory_service = await self.resolve(factory_reference.id, path, owner)
        method = getattr(factory_service, method_name, _MISSING)
        if method is _MISSING:
            raise FactoryMethodNotFoundError(
                method_name,
                factory_reference.id,
                owner_kind="factory service",
            )

        arguments = await self.resolve_arguments(definition.arguments, path, owner)
        return method(*arguments)

    async def _call_static_method(
        self,
        definition: StaticMethodFactoryDefinition,
        path: ResolutionPath,
        owner: ResolutionOwner,
    ) -> Any:
        arguments = await self.resolve_arguments(definition.arguments, path, owner)

        class_name, method_name = definition.factory
        cls = self._locate_class(class_name)
        method = getattr(cls, method_name, _MISSING)
        if method is _MISSING:
            raise FactoryMethodNotFoundError(method_name, class_name, owner_kind="class")
        return method(*arguments)

    async def _construct_class(
        self,
        definition: ClassConstructorDefinition,
        path: ResolutionPath,
        owner: ResolutionOwner,
    ) -> Any:
        arguments = await self.resolve_arguments(definition.arguments, path, owner)
        return self._locate_class(definition.class_name)(*arguments)

    def _locate_class(self, class_name: str) -> Any:
        cls = self.class_locator(class_name) if self.class_locator is not None else None
        if cls is None:
            raise ClassNotLocatedError(class_name)
        return cls

    def _parameter(self, name: str) -> Any:
        try:
            return self._parameters[name]
        except KeyError:
            raise UndefinedParameterError(name) from None


def _cycle_chain(service_id: str, path: ResolutionPath) -> list[str]:
    return [service_id, *reversed(path[path.index(service_id) :])]


def _tail_from(path: ResolutionPath, service_id: str) -> ResolutionPath:
    if service_id in path:
        return path[path.index(service_id) :]
    return (service_id, *path)


def _same_flow(first: ResolutionOwner, second: ResolutionOwner) -> bool:
    # Nested get() calls made by a factory run in the task of the outer call.
    return first.flow is second.flow
