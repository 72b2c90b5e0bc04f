"""
core/dynamodb - DynamoDB 테이블 검색 및 용량 모드 관리

주요 구성 요소:
- discover: 퍼지 이름/태그 값 기반 테이블 검색
- plan: 용량 모드 전환 계획 (NoOp / Mutate)
- update: describe → plan → UpdateTable 오케스트레이션
- TableRepository: 저장소 인터페이스 (BotoTableRepository, InMemoryTableRepository)

Example:
    from core.dynamodb import InMemoryTableRepository, SearchIntent, discover

    repo = InMemoryTableRepository()
    repo.add_table("orders", tags={"team": "commerce"})
    result = discover(repo, SearchIntent(tag_value="commerce"))
"""

from .discovery import discover
from .intent import SearchIntent, UpdateIntent, parse_units
from .memory import InMemoryTableRepository
from .planner import plan
from .repository import BotoTableRepository, TableRepository
from .similarity import FUZZY_MIN_SCORE, is_fuzzy_match, normalize_ratio, score
from .types import (
    BillingMode,
    CapacityConfig,
    DiscoveryResult,
    MatchResult,
    Mutate,
    NoOp,
    ResourceIdentity,
    TableDescription,
    Tag,
    TransitionPlan,
)
from .update import update

__all__ = [
    # 검색
    "discover",
    "score",
    "normalize_ratio",
    "is_fuzzy_match",
    "FUZZY_MIN_SCORE",
    # 업데이트
    "plan",
    "update",
    # 의도
    "SearchIntent",
    "UpdateIntent",
    "parse_units",
    # 저장소
    "TableRepository",
    "BotoTableRepository",
    "InMemoryTableRepository",
    # 타입
    "BillingMode",
    "CapacityConfig",
    "DiscoveryResult",
    "MatchResult",
    "Mutate",
    "NoOp",
    "ResourceIdentity",
    "TableDescription",
    "Tag",
    "TransitionPlan",
]
