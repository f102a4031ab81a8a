from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar

from diref.exceptions import DefinitionLockedError
from diref.values import Argument, MethodCall, Reference


class DefinitionKind(Enum):
    """Tag each definition variant with the way it produces its service."""

    FUNCTION = auto()
    """Call a callable service."""

    SERVICE_METHOD = auto()
    """Call a method of another service."""

    STATIC_METHOD = auto()
    """Call a method looked up on a located class."""

    CLASS_CONSTRUCTOR = auto()
    """Instantiate a located class."""


class Definition:
    """Describe how a single service identifier is produced.

    Subclasses are dataclasses that add a factory source in front of the shared
    ``arguments`` and ``method_calls`` fields. ``arguments`` are passed
    positionally to the factory once resolved; ``method_calls`` are applied in
    order to the produced instance.

    A definition becomes read-only as soon as the container uses it to build
    a service: later assignments raise ``DefinitionLockedError``.
    """

    kind: ClassVar[DefinitionKind]
    used: bool = False
    arguments: Sequence[Argument]
    method_calls: Sequence[MethodCall]

    def __setattr__(self, name: str, value: Any) -> None:
        if self.used:
            raise DefinitionLockedError(name)
        if name in {"arguments", "method_calls"}:
            value = tuple(value)
        super().__setattr__(name, value)

    def mark_used(self) -> None:
        """Lock the definition against further modification."""
        object.__setattr__(self, "used", True)


@dataclass(eq=False)
class FunctionServiceFactoryDefinition(Definition):
    """Produce the service by calling the callable registered under ``factory``.

    Examples:
        .. code-block:: python

            container.set("app.connect", connect)
            container.set_definition(
                "app.db",
                FunctionServiceFactoryDefinition(Reference("app.connect"), [Parameter("dsn")]),
            )

    """

    kind: ClassVar[DefinitionKind] = DefinitionKind.FUNCTION

    factory: Reference
    arguments: Sequence[Argument] = field(default=())
    method_calls: Sequence[MethodCall] = field(default=())


@dataclass(eq=False)
class ServiceMethodFactoryDefinition(Definition):
    """Produce the service by calling ``factory[1]`` on the service ``factory[0]``."""

    kind: ClassVar[DefinitionKind] = DefinitionKind.SERVICE_METHOD

    factory: tuple[Reference, str]
    arguments: Sequence[Argument] = field(default=())
    method_calls: Sequence[MethodCall] = field(default=())


@dataclass(eq=False)
class StaticMethodFactoryDefinition(Definition):
    """Produce the service by calling ``factory[1]`` on the class named ``factory[0]``.

    The class is obtained from the container's class locator.
    """

    kind: ClassVar[DefinitionKind] = DefinitionKind.STATIC_METHOD

    factory: tuple[str, str]
    arguments: Sequence[Argument] = field(default=())
    method_calls: Sequence[MethodCall] = field(default=())


@dataclass(eq=False)
class ClassConstructorDefinition(Definition):
    """Produce the service by instantiating the class named ``class_name``."""

    kind: ClassVar[DefinitionKind] = DefinitionKind.CLASS_CONSTRUCTOR

    class_name: str
    arguments: Sequence[Argument] = field(default=())
    method_calls: Sequence[MethodCall] = field(default=())
