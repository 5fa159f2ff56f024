"""Tests for custom exception classes."""

from __future__ import annotations

from app.exceptions import (
    AppError,
    ConfigurationError,
    DatabaseError,
    MethodNotAllowedError,
    UpstreamError,
    ValidationError,
)


class TestAppError:
    """Tests for base AppError class."""

    def test_default_status_code(self) -> None:
        error = AppError('Something went wrong')
        assert error.status_code == 500
        assert error.message == 'Something went wrong'

    def test_to_dict_without_detail(self) -> None:
        assert AppError('Error message').to_dict() == {'error': 'Error message'}

    def test_to_dict_with_detail(self) -> None:
        result = AppError('Error', detail='Additional info').to_dict()
        assert result == {'error': 'Error', 'detail': 'Additional info'}


class TestSubclasses:
    def test_validation_error_is_400(self) -> None:
        error = ValidationError('Invalid value', field='account_id')
        assert error.status_code == 400
        assert error.field == 'account_id'
        assert 'account_id' in error.detail

    def test_method_not_allowed_is_405(self) -> None:
        error = MethodNotAllowedError('PATCH')
        assert error.status_code == 405
        assert error.method == 'PATCH'

    def test_configuration_error_names_variable(self) -> None:
        error = ConfigurationError('SERVICE_ROLE_KEY')
        assert error.status_code == 500
        assert 'SERVICE_ROLE_KEY' in error.message

    def test_database_error_passes_message_through(self) -> None:
        error = DatabaseError('duplicate key')
        assert error.status_code == 500
        assert error.to_dict() == {'error': 'duplicate key'}

    def test_upstream_error_keeps_url(self) -> None:
        error = UpstreamError('connection refused', url='http://backend/api')
        assert error.status_code == 500
        assert error.url == 'http://backend/api'
        assert error.to_dict() == {'error': 'connection refused'}

    def test_all_inherit_from_app_error(self) -> None:
        for error in (
            ValidationError('x'),
            MethodNotAllowedError('PUT'),
            ConfigurationError('X'),
            DatabaseError('x'),
            UpstreamError('x'),
        ):
            assert isinstance(error, AppError)
