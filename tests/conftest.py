"""Shared pytest fixtures for diref tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from diref.container import Container
from diref.definitions import ServiceMethodFactoryDefinition
from diref.values import Reference

AddFactoryDefinition = Callable[..., ServiceMethodFactoryDefinition]


@pytest.fixture()
def container() -> Container:
    """Empty container without locators."""
    return Container()


class _Factory:
    def __init__(self, instantiate: Callable[..., Any]) -> None:
        self.instantiate = instantiate


@pytest.fixture()
def add_factory_definition(container: Container) -> AddFactoryDefinition:
    """Register ``app.<id>_factory`` and a service-method definition using it."""

    def add(
        service_id: str,
        instantiate: Callable[..., Any] = lambda *_: None,
        arguments: Sequence[Any] = (),
    ) -> ServiceMethodFactoryDefinition:
        factory_id = f"app.{service_id}_factory"
        container.set(factory_id, _Factory(instantiate))
        definition = ServiceMethodFactoryDefinition(
            (Reference(factory_id), "instantiate"),
            arguments,
        )
        container.set_definition(service_id, definition)
        return definition

    return add
