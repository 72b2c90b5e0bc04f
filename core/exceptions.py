"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    DMError (베이스)
    ├── ValidationError (명령줄 입력 검증)
    ├── ConfigError (설정 관련)
    ├── TransportError (AWS API 호출 실패)
    │   └── TableNotFoundError
    └── PreconditionError (허용되지 않는 용량 모드 전환)

NoOp(변경 불필요)은 예외가 아니라 정상 결과입니다. core.dynamodb.types.NoOp 참고.

Usage:
    from core.exceptions import TransportError

    try:
        output = dynamodb.describe_table(TableName=name)
    except ClientError as e:
        raise TransportError.from_client_error(
            service="dynamodb",
            operation="describe_table",
            client_error=e,
            resource=name,
        )
"""

from typing import Any, Dict, Optional

NOT_FOUND_CODES = {
    "ResourceNotFoundException",
    "NotFoundException",
    "TableNotFoundException",
}

ACCESS_DENIED_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedAccess",
    "UnrecognizedClientException",
}

# =============================================================================
# 베이스 예외
# =============================================================================


class DMError(Exception):
    """DynamoDB Manager 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 입력/설정 관련 예외
# =============================================================================


class ValidationError(DMError):
    """입력 검증 오류

    코어 로직이 실행되기 전에 명령줄 인자 단계에서 거부되는 오류입니다.
    """

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


class ConfigError(DMError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# AWS API 호출 관련 예외
# =============================================================================


class TransportError(DMError):
    """AWS API 호출 관련 예외

    boto3/botocore의 ClientError, BotoCoreError를 래핑하여 일관된 예외 처리를 제공합니다.
    재시도하지 않으며, 호출자가 후보 단위로 건너뛸지 작업 전체를 중단할지 결정합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        resource: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"{service}.{operation}"
        if resource:
            message = f"{message} [{resource}]"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.resource = resource
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
                "resource": resource,
            }
        )

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
        resource: Optional[str] = None,
    ) -> "TransportError":
        """botocore 예외로부터 생성

        리소스 없음 오류 코드이면 TableNotFoundError를 반환합니다.

        Args:
            service: AWS 서비스 이름
            operation: API 작업 이름
            client_error: ClientError 또는 BotoCoreError 예외
            resource: 대상 리소스 이름 또는 ARN

        Returns:
            TransportError (또는 TableNotFoundError) 인스턴스
        """
        error_code = None
        error_message = None

        # ClientError 형식 파싱
        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")
        else:
            error_message = str(client_error)

        error_cls = TableNotFoundError if error_code in NOT_FOUND_CODES else cls
        return error_cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            resource=resource,
            cause=client_error,
        )


class TableNotFoundError(TransportError):
    """대상 테이블을 찾을 수 없음"""

    pass


# =============================================================================
# 용량 모드 전환 관련 예외
# =============================================================================


class PreconditionError(DMError):
    """의미상 허용되지 않는 용량 모드 전환

    예: On-Demand 테이블에서 --provisioned 없이 RCU/WCU 변경 요청.
    해당 작업에는 항상 치명적이며 재시도하지 않습니다.
    """

    def __init__(
        self,
        table_name: str,
        message: str,
        current_mode: Optional[str] = None,
    ):
        full_message = f"전환 불가 [{table_name}]: {message}"
        super().__init__(full_message)
        self.table_name = table_name
        self.current_mode = current_mode
        self.details.update(
            {
                "table_name": table_name,
                "current_mode": current_mode,
            }
        )


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def _error_code(error: Exception) -> str:
    if isinstance(error, TransportError):
        return error.error_code or ""
    if hasattr(error, "response"):
        return error.response.get("Error", {}).get("Code", "")
    return ""


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        액세스 거부 오류이면 True
    """
    return _error_code(error) in ACCESS_DENIED_CODES


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인"""
    if isinstance(error, TableNotFoundError):
        return True
    return _error_code(error) in NOT_FOUND_CODES


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    friendly_messages = {
        "AccessDeniedException": "권한이 없습니다. IAM 정책을 확인하세요.",
        "ExpiredTokenException": "인증 토큰이 만료되었습니다. 다시 로그인하세요.",
        "UnrecognizedClientException": "잘못된 자격 증명입니다.",
        "LimitExceededException": "테이블 변경 한도를 초과했습니다. 잠시 후 다시 시도하세요.",
    }

    if isinstance(error, TransportError):
        hint = friendly_messages.get(error.error_code or "")
        if not hint and is_not_found(error):
            hint = "테이블 이름과 리전(--region)을 확인하세요."
        if hint:
            return f"{error.message} - {hint}"
        return error.message

    if isinstance(error, DMError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    # boto3 ClientError
    if hasattr(error, "response"):
        error_info = error.response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))
        return friendly_messages.get(code, f"{code}: {message}")

    return str(error)
