"""Tests for the exception hierarchy and messages."""

import pytest

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


class TestMessages:
    def test_circular_dependency_joins_chain(self) -> None:
        error = CircularDependencyError(["foo", "qux", "bar", "foo"])

        assert str(error) == "Circular dependency found: foo <- qux <- bar <- foo"
        assert error.chain == ["foo", "qux", "bar", "foo"]

    def test_get_service_error_keeps_cause(self) -> None:
        cause = UndefinedServiceError("bar")
        error = GetServiceError("foo", cause)

        assert str(error) == (
            'Error getting service "foo": '
            'Undefined service definition and instance for identifier "bar"'
        )
        assert error.service_id == "foo"
        assert error.cause is cause

    def test_factory_method_not_found_names_owner_kind(self) -> None:
        error = FactoryMethodNotFoundError("create", "Mailer", owner_kind="class")

        assert str(error) == 'Factory method "create" in class "Mailer" does not exist'

    def test_definition_already_used(self) -> None:
        assert str(ServiceDefinitionAlreadyUsedError("foo")) == (
            'Service definition for "foo" has already been used to instantiate a service, '
            "refusing to modify it"
        )


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            UndefinedServiceDefinitionError("foo"),
            ServiceDefinitionAlreadyUsedError("foo"),
            UndefinedParameterError("foo"),
            DefinitionLockedError("arguments"),
            GetServiceError("foo", RuntimeError("boom")),
        ],
    )
    def test_table_errors_are_diref_errors(self, error: DIRefError) -> None:
        assert isinstance(error, DIRefError)
        assert not isinstance(error, DIRefResolutionError)

    @pytest.mark.parametrize(
        "error",
        [
            CircularDependencyError(["foo", "foo"]),
            FactoryNotCallableError("foo"),
            FactoryMethodNotFoundError("create", "foo", owner_kind="factory service"),
            MethodNotFoundError("spy"),
            EmptyServiceError("foo"),
            ClassNotLocatedError("Foo"),
            InvalidDefinitionError({}),
            UndefinedServiceError("foo"),
        ],
    )
    def test_nested_causes_are_resolution_errors(self, error: DIRefResolutionError) -> None:
        assert isinstance(error, DIRefResolutionError)
        assert isinstance(error, DIRefError)
