# core/__init__.py
"""
core - DynamoDB Manager 코어

테이블 검색(퍼지 이름/태그)과 용량 모드 전환 로직을 포함하는 최상위 패키지입니다.
CLI 계층(cli/)은 이 패키지에만 의존하며, 코어는 전역 상태를 읽지 않습니다.

아키텍처:
    core/
    ├── aws/            # boto3 세션/클라이언트 생성
    ├── dynamodb/       # 검색 파이프라인, 전환 플래너, 업데이트 오케스트레이터
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.aws import create_session
    from core.dynamodb import BotoTableRepository, SearchIntent, discover

    session = create_session(profile="dev", region="ap-northeast-2")
    repository = BotoTableRepository.from_session(session)
    result = discover(repository, SearchIntent(name_pattern="orders"))
"""

from core import config, exceptions

__all__: list[str] = [
    "config",
    "exceptions",
]
