"""
tests/core/test_exceptions.py - 예외 계층 테스트
"""

import pytest
from botocore.exceptions import ClientError, NoCredentialsError

from core.exceptions import (
    ConfigError,
    DMError,
    PreconditionError,
    TableNotFoundError,
    TransportError,
    ValidationError,
    format_error_for_user,
    is_access_denied,
    is_not_found,
)


def _client_error(code: str, message: str = "Test error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, "DescribeTable")


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("rcu", "x", "정수"),
            ConfigError("level", "bad"),
            TransportError("dynamodb", "describe_table"),
            TableNotFoundError("dynamodb", "describe_table"),
            PreconditionError("orders", "bad"),
        ],
    )
    def test_base_class(self, error):
        assert isinstance(error, DMError)

    def test_not_found_is_transport(self):
        assert issubclass(TableNotFoundError, TransportError)


class TestDMError:
    def test_str_with_cause(self):
        error = DMError("실패", cause=ValueError("원인"))

        assert str(error) == "실패: 원인"

    def test_to_dict(self):
        error = DMError("실패", details={"key": "value"})

        assert error.to_dict() == {
            "error_type": "DMError",
            "message": "실패",
            "cause": None,
            "details": {"key": "value"},
        }


class TestValidationError:
    def test_message_and_details(self):
        error = ValidationError(field="rcu", value="abc", expected="0 이상의 정수")

        assert "[rcu]" in error.message
        assert error.details == {"field": "rcu", "value": "abc", "expected": "0 이상의 정수"}


class TestTransportError:
    def test_message(self):
        error = TransportError(
            service="dynamodb",
            operation="update_table",
            error_code="LimitExceededException",
            error_message="too many",
            resource="orders",
        )

        assert error.message == "dynamodb.update_table [orders] 실패 (LimitExceededException): too many"

    def test_from_client_error(self):
        client_error = _client_error("AccessDeniedException", "denied")

        error = TransportError.from_client_error("dynamodb", "list_tables", client_error)

        assert type(error) is TransportError
        assert error.error_code == "AccessDeniedException"
        assert error.error_message == "denied"
        assert error.cause is client_error

    @pytest.mark.parametrize("code", ["ResourceNotFoundException", "TableNotFoundException"])
    def test_from_client_error_not_found(self, code):
        error = TransportError.from_client_error("dynamodb", "describe_table", _client_error(code), resource="orders")

        assert isinstance(error, TableNotFoundError)
        assert error.resource == "orders"

    def test_from_botocore_error(self):
        error = TransportError.from_client_error("dynamodb", "list_tables", NoCredentialsError())

        assert error.error_code is None
        assert error.error_message == "Unable to locate credentials"


class TestPreconditionError:
    def test_details(self):
        error = PreconditionError("orders", "불가", current_mode="ON_DEMAND")

        assert error.message == "전환 불가 [orders]: 불가"
        assert error.details == {"table_name": "orders", "current_mode": "ON_DEMAND"}


class TestHelpers:
    def test_is_access_denied(self):
        assert is_access_denied(_client_error("AccessDeniedException"))
        assert is_access_denied(TransportError("dynamodb", "list_tables", error_code="UnrecognizedClientException"))
        assert not is_access_denied(_client_error("ThrottlingException"))
        assert not is_access_denied(ValueError("x"))

    def test_is_not_found(self):
        assert is_not_found(TableNotFoundError("dynamodb", "describe_table"))
        assert is_not_found(_client_error("ResourceNotFoundException"))
        assert not is_not_found(TransportError("dynamodb", "describe_table", error_code="InternalServerError"))

    def test_format_transport_error_hint(self):
        error = TransportError("dynamodb", "update_table", error_code="AccessDeniedException")

        message = format_error_for_user(error)

        assert message.startswith(error.message)
        assert "IAM" in message

    def test_format_not_found_hint(self):
        """테이블 없음은 이름/리전 확인 안내 추가"""
        error = TableNotFoundError("dynamodb", "describe_table", error_code="ResourceNotFoundException", resource="missing")

        message = format_error_for_user(error)

        assert message.startswith(error.message)
        assert "--region" in message

    def test_format_transport_error_without_hint(self):
        error = TransportError("dynamodb", "update_table", error_code="InternalServerError")

        assert format_error_for_user(error) == error.message

    def test_format_custom_error(self):
        error = PreconditionError("orders", "불가")

        assert format_error_for_user(error) == str(error)

    def test_format_client_error(self):
        assert format_error_for_user(_client_error("ThrottlingException", "slow down")) == "ThrottlingException: slow down"

    def test_format_plain_error(self):
        assert format_error_for_user(ValueError("plain")) == "plain"
