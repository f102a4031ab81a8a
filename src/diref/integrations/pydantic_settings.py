"""Copy pydantic-settings values into a container's parameter table.

Pydantic is optional: supported ``BaseSettings`` bases are discovered lazily and
an environment without pydantic simply has none.

Examples:
    .. code-block:: python

        class AppSettings(BaseSettings):
            smtp_host: str = "localhost"

        register_settings_parameters(container, AppSettings(), prefix="app.")
        container.get_parameter("app.smtp_host")  # "localhost"

"""

from __future__ import annotations

import importlib
import logging
import warnings
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from diref.container import Container

logger = logging.getLogger(__name__)

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_base_settings(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_settings = getattr(module, "BaseSettings", None)
    if isinstance(base_settings, type):
        return base_settings
    return None


def _load_pydantic_v1_base() -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        return _load_base_settings("pydantic.v1")


def _build_settings_bases() -> tuple[type[Any], ...]:
    bases: list[type[Any]] = []
    for candidate in (_load_base_settings("pydantic_settings"), _load_pydantic_v1_base()):
        if candidate is not None and candidate not in bases:
            bases.append(candidate)
    return tuple(bases)


SETTINGS_BASES: tuple[type[Any], ...] = _build_settings_bases()


def is_pydantic_settings_instance(candidate: object) -> bool:
    """Return true when candidate is an instance of a supported settings base."""
    return isinstance(candidate, SETTINGS_BASES) if SETTINGS_BASES else False


def register_settings_parameters(
    container: Container,
    settings: Any,
    *,
    prefix: str = "",
) -> list[str]:
    """Store every settings field as a container parameter.

    Each field is stored under ``prefix + field_name``. Fields holding nested
    models are stored whole and, in addition, leaf by leaf under dotted names
    (``"database.host"``).

    Args:
        container: Container receiving the parameters.
        settings: A ``pydantic_settings.BaseSettings`` (or pydantic v1
            ``BaseSettings``) instance.
        prefix: Prepended to every parameter name.

    Returns:
        The names of the parameters that were set, in field order.

    Raises:
        TypeError: If ``settings`` is not a supported settings instance.

    """
    if not is_pydantic_settings_instance(settings):
        msg = f"Expected a pydantic settings instance, got {type(settings).__name__}"
        raise TypeError(msg)

    values = settings.model_dump() if hasattr(settings, "model_dump") else settings.dict()
    names: list[str] = []
    for name, value in _flatten(values, prefix):
        container.set_parameter(name, value)
        names.append(name)

    logger.debug("Registered %d parameters from %s", len(names), type(settings).__name__)
    return names


def _flatten(values: Mapping[str, Any], prefix: str) -> list[tuple[str, Any]]:
    items: list[tuple[str, Any]] = []
    for key, value in values.items():
        name = f"{prefix}{key}"
        items.append((name, value))
        if isinstance(value, Mapping):
            items.extend(_flatten(value, f"{name}."))
    return items


__all__ = [
    "SETTINGS_BASES",
    "is_pydantic_settings_instance",
    "register_settings_parameters",
]
