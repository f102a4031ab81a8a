from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class Reference:
    """Point at another service by identifier.

    Used as a definition argument, a method call argument, or as the factory
    source of function and service-method definitions. The referenced service
    is resolved and its instance is passed in place of the reference.
    """

    id: str


@dataclass(frozen=True, slots=True)
class Parameter:
    """Point at a value stored with ``Container.set_parameter``."""

    name: str


Argument: TypeAlias = Any
"""A ``Reference``, a ``Parameter``, or any literal value passed through as-is."""


@dataclass(frozen=True, slots=True)
class MethodCall:
    """Describe a method invoked on a service right after it is built.

    Examples:
        .. code-block:: python

            definition.method_calls = [
                MethodCall("set_logger", [Reference("logger")]),
                MethodCall("configure", [Parameter("debug")]),
            ]

    """

    method: str
    arguments: Sequence[Argument] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))
