"""
core/config.py - 전역 설정

애플리케이션 전체에서 사용하는 기본값과 환경변수 헬퍼를 정의합니다.

주요 구성 요소:
    - Settings: 불변 기본 설정 (리전, 기본 RCU/WCU, 퍼지 임계값, API 타임아웃)
    - LogConfig: 로깅 설정 (환경변수 LOG_LEVEL / LOG_FORMAT / LOG_DATE_FORMAT)
    - get_default_profile / get_default_region: AWS 기본값 조회
    - get_version: version.txt (또는 설치된 패키지 메타데이터) 기반 버전 문자열

Usage:
    from core.config import settings, get_default_region

    region = get_default_region()
    rcu = settings.DEFAULT_RCU
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "dynamodb-manager"


@dataclass(frozen=True)
class Settings:
    """기본 설정값

    Attributes:
        DEFAULT_REGION: 리전 미지정 시 사용할 기본 리전
        DEFAULT_RCU: Provisioned 전환 시 기본 읽기 용량 단위
        DEFAULT_WCU: Provisioned 전환 시 기본 쓰기 용량 단위
        FUZZY_MIN_SCORE: 테이블 이름 퍼지 매칭 최소 유사도 (%)
        API_TIMEOUT: API 읽기 타임아웃 (초)
        API_CONNECT_TIMEOUT: API 연결 타임아웃 (초)
        API_MAX_ATTEMPTS: API 최대 시도 횟수 (1 = 재시도 없음)
    """

    DEFAULT_REGION: str = "ap-northeast-2"
    DEFAULT_RCU: int = 5
    DEFAULT_WCU: int = 5
    FUZZY_MIN_SCORE: int = 80
    API_TIMEOUT: int = 30
    API_CONNECT_TIMEOUT: int = 10
    API_MAX_ATTEMPTS: int = 1


settings = Settings()


def get_project_root() -> Path:
    """프로젝트 루트 경로 반환"""
    return Path(__file__).resolve().parent.parent


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_default_profile() -> str | None:
    """AWS_PROFILE → AWS_DEFAULT_PROFILE 순으로 프로파일 조회"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE") or None


def get_default_region() -> str:
    """AWS_REGION → AWS_DEFAULT_REGION → settings.DEFAULT_REGION 순으로 리전 조회"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


# =============================================================================
# 로깅 설정
# =============================================================================


@dataclass
class LogConfig:
    """로깅 설정

    시간/레벨 컬럼은 RichHandler가 직접 그리므로 기본 포맷은 메시지만 포함합니다.

    Attributes:
        level: 로그 레벨 이름 (debug, info, warn, error)
        format: logging.Formatter 포맷 문자열
        date_format: 시간 포맷
    """

    level: str = "INFO"
    format: str = "%(message)s"
    date_format: str = "[%X]"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL, LOG_FORMAT, LOG_DATE_FORMAT 환경변수에서 로드"""
        default = cls()
        return cls(
            level=os.environ.get("LOG_LEVEL", default.level),
            format=os.environ.get("LOG_FORMAT", default.format),
            date_format=os.environ.get("LOG_DATE_FORMAT", default.date_format),
        )


# =============================================================================
# 버전
# =============================================================================


@lru_cache(maxsize=1)
def get_version() -> str:
    """버전 문자열 반환

    소스 트리의 version.txt를 우선 읽고, 없으면(일반 설치) 패키지 메타데이터,
    둘 다 없으면 0.0.0.
    """
    version_file = get_project_root() / "version.txt"
    try:
        version = version_file.read_text(encoding="utf-8").strip()
    except OSError:
        version = ""
    if version:
        return version

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"
