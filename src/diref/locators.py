"""Collaborators the container consults for things it does not own.

A class locator turns a class name into a class for ``StaticMethodFactoryDefinition``
and ``ClassConstructorDefinition``. An instance locator is the last resort for
identifiers with neither an instance nor a definition, which is how a host
framework's own injector is bridged into the container. Both may be given as a
plain callable or as an object with a ``locate`` method.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol, TypeAlias, runtime_checkable

logger = logging.getLogger(__name__)

LocateFunction: TypeAlias = Callable[[str], Any]


@runtime_checkable
class ClassLocator(Protocol):
    """Find a class by name; return ``None`` when it is unknown."""

    def locate(self, class_name: str) -> type[Any] | Callable[..., Any] | None: ...


@runtime_checkable
class InstanceLocator(Protocol):
    """Find a ready instance by identifier; may return an awaitable of it."""

    def locate(self, service_id: str) -> Any | Awaitable[Any] | None: ...


def as_locate_function(locator: ClassLocator | InstanceLocator | LocateFunction) -> LocateFunction:
    """Normalize a locator object or callable into a single-argument callable."""
    if isinstance(locator, (ClassLocator, InstanceLocator)):
        return locator.locate
    if callable(locator):
        return locator
    msg = f"Locator must be callable or define a locate() method, got {type(locator).__name__}"
    raise TypeError(msg)


def mapping_locator(mapping: Mapping[str, Any]) -> LocateFunction:
    """Build a locator that reads names from ``mapping``.

    The mapping is read on every call, so entries added later are found too.
    """

    def locate(name: str) -> Any:
        return mapping.get(name)

    return locate


def import_class_locator(class_name: str) -> Any:
    """Locate a class by import path.

    Accepts ``"package.module:Name"`` and ``"package.module.Name"``; nested
    attributes are allowed after the colon (``"module:Outer.Inner"``). Returns
    ``None`` when the module or any attribute is missing.
    """
    if ":" in class_name:
        module_name, _, qualname = class_name.partition(":")
    else:
        module_name, _, qualname = class_name.rpartition(".")
    if not module_name or not qualname:
        return None

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError:
        logger.debug("Module %r for class %r could not be imported", module_name, class_name)
        return None

    for attribute in qualname.split("."):
        target = getattr(target, attribute, None)
        if target is None:
            return None
    return target
