"""
core/aws/client.py - boto3 session/client 생성 헬퍼

타임아웃이 설정되고 재시도가 비활성화된(단일 시도) boto3 client를 생성합니다.
일시적 오류도 즉시 호출자에게 전달됩니다.

주요 구성 요소:
- create_session: 프로파일/리전 기반 boto3 Session 생성
- get_client: 타임아웃/재시도 설정이 적용된 boto3 client 생성

Example:
    from core.aws.client import create_session, get_client

    session = create_session(profile="dev")
    dynamodb = get_client(session, "dynamodb", region_name="ap-northeast-2")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, cast

from core.config import settings

if TYPE_CHECKING:
    import boto3

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

DEFAULT_MAX_ATTEMPTS = settings.API_MAX_ATTEMPTS
DEFAULT_RETRY_MODE: RetryMode = "standard"
DEFAULT_CONNECT_TIMEOUT = settings.API_CONNECT_TIMEOUT  # 초
DEFAULT_READ_TIMEOUT = settings.API_TIMEOUT  # 초


def create_session(profile: str | None = None, region: str | None = None) -> boto3.Session:
    """boto3 Session 생성

    Args:
        profile: 공유 설정 프로파일 이름 (None이면 기본 자격 증명 체인)
        region: 기본 리전 (None이면 환경/프로파일 설정)

    Returns:
        boto3 Session

    Raises:
        botocore.exceptions.ProfileNotFound: 프로파일이 없는 경우
    """
    import boto3

    if profile:
        return boto3.Session(profile_name=profile, region_name=region)
    return boto3.Session(region_name=region)


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    **kwargs: Any,
) -> Any:
    """타임아웃/재시도 설정이 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (dynamodb 등)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최대 시도 횟수 (기본: 1, 재시도 없음)
        retry_mode: 재시도 모드
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    from botocore.config import Config

    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )
