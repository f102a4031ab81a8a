from __future__ import annotations


class DIRefError(Exception):
    """Represent a base class for all diref-specific failures.

    Catch this type when you want to handle any diref error path without
    matching each concrete exception class individually.
    """


class UndefinedServiceDefinitionError(DIRefError):
    """Signal a lookup of a definition that was never registered.

    Raised by ``Container.get_definition``. Check ``Container.has_definition``
    first when the definition is optional.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(f'Undefined service definition for identifier "{service_id}"')


class ServiceDefinitionAlreadyUsedError(DIRefError):
    """Signal replacement of a definition that already produced a service.

    Raised by ``Container.set_definition``. Once a definition has been used to
    build an instance it is locked for the lifetime of the container.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(
            f'Service definition for "{service_id}" has already been used '
            "to instantiate a service, refusing to modify it",
        )


class UndefinedParameterError(DIRefError):
    """Signal a lookup of a parameter that was never set.

    Raised by ``Container.get_parameter`` and, wrapped in ``GetServiceError``,
    when a ``Parameter`` argument names a missing value during ``get``.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Undefined parameter for identifier "{name}"')


class DefinitionLockedError(DIRefError):
    """Signal mutation of a definition after it has been used."""

    def __init__(self, attribute: str) -> None:
        self.attribute = attribute
        super().__init__(
            f'Cannot set "{attribute}": service definition has already been used',
        )


class GetServiceError(DIRefError):
    """Signal that ``Container.get`` failed for a requested identifier.

    The message names the identifier passed to ``get`` (not the nested one that
    actually failed) followed by the message of the underlying error, which is
    also available as ``cause`` and ``__cause__``.
    """

    def __init__(self, service_id: str, cause: BaseException) -> None:
        self.service_id = service_id
        self.cause = cause
        super().__init__(f'Error getting service "{service_id}": {cause}')


class DIRefResolutionError(DIRefError):
    """Represent a failure that happens while a service is being resolved.

    These errors never reach callers of ``Container.get`` directly: they are
    wrapped in ``GetServiceError``.
    """


class CircularDependencyError(DIRefResolutionError):
    """Signal that an identifier was requested while it was being resolved.

    ``chain`` lists identifiers from the re-entered one back to its first
    occurrence, e.g. ``["foo", "qux", "bar", "foo"]``.
    """

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__(f"Circular dependency found: {' <- '.join(chain)}")


class FactoryNotCallableError(DIRefResolutionError):
    """Signal that a function factory reference resolved to a non-callable."""

    def __init__(self, factory_id: str) -> None:
        self.factory_id = factory_id
        super().__init__(f'Factory service "{factory_id}" is not callable')


class FactoryMethodNotFoundError(DIRefResolutionError):
    """Signal a factory method missing from its factory service or class."""

    def __init__(self, method: str, owner: str, *, owner_kind: str) -> None:
        self.method = method
        self.owner = owner
        super().__init__(f'Factory method "{method}" in {owner_kind} "{owner}" does not exist')


class MethodNotFoundError(DIRefResolutionError):
    """Signal a declared method call naming a method the instance lacks."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f'Method "{method}" does not exist')


class EmptyServiceError(DIRefResolutionError):
    """Signal that a factory produced ``None`` instead of a service."""

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(f'Factory method for identifier "{service_id}" returns nothing')


class ClassNotLocatedError(DIRefResolutionError):
    """Signal that the class locator could not provide a named class.

    Also raised when no class locator has been registered at all. Register one
    with ``Container.register_class_locator``.
    """

    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(f'Cannot locate service class constructor for class "{class_name}"')


class InvalidDefinitionError(DIRefResolutionError):
    """Signal that a registered definition has no supported kind."""

    def __init__(self, definition: object) -> None:
        self.definition = definition
        super().__init__(
            f'Unsupported service definition of type "{type(definition).__name__}"',
        )


class UndefinedServiceError(DIRefResolutionError):
    """Signal an identifier with no instance, no definition and no locator hit."""

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(
            f'Undefined service definition and instance for identifier "{service_id}"',
        )
