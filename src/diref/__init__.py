from diref.container import Container
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
    DefinitionLockedError,
    DIRefError,
    DIRefResolutionError,
    EmptyServiceError,
    FactoryMethodNotFoundError,
    FactoryNotCallableError,
    GetServiceError,
    InvalidDefinitionError,
    MethodNotFoundError,
    ServiceDefinitionAlreadyUsedError,
    UndefinedParameterError,
    UndefinedServiceDefinitionError,
    UndefinedServiceError,
)
from diref.locators import ClassLocator, InstanceLocator, import_class_locator, mapping_locator
from diref.values import MethodCall, Parameter, Reference

__all__ = [
    "CircularDependencyError",
    "ClassConstructorDefinition",
    "ClassLocator",
    "ClassNotLocatedError",
    "Container",
    "DIRefError",
    "DIRefResolutionError",
    "Definition",
    "DefinitionKind",
    "DefinitionLockedError",
    "EmptyServiceError",
    "FactoryMethodNotFoundError",
    "FactoryNotCallableError",
    "FunctionServiceFactoryDefinition",
    "GetServiceError",
    "InstanceLocator",
    "InvalidDefinitionError",
    "MethodCall",
    "MethodNotFoundError",
    "Parameter",
    "Reference",
    "ServiceDefinitionAlreadyUsedError",
    "ServiceMethodFactoryDefinition",
    "StaticMethodFactoryDefinition",
    "UndefinedParameterError",
    "UndefinedServiceDefinitionError",
    "UndefinedServiceError",
    "import_class_locator",
    "mapping_locator",
]
