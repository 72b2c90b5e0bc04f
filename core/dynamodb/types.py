"""
core/dynamodb/types.py - DynamoDB 테이블 도메인 타입

검색 결과, 용량 설정, 전환 계획을 표현하는 불변 데이터클래스들입니다.
모든 엔티티는 한 번의 명령 실행 동안만 존재하며 저장되지 않습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from core.exceptions import TransportError


class BillingMode(Enum):
    """테이블 용량 모드

    값은 사용자에게 표시되는 이름이며, API 값은 api_value로 조회합니다.
    """

    PROVISIONED = "PROVISIONED"
    ON_DEMAND = "ON_DEMAND"

    @property
    def api_value(self) -> str:
        """DynamoDB API의 BillingMode 값"""
        if self is BillingMode.ON_DEMAND:
            return "PAY_PER_REQUEST"
        return "PROVISIONED"

    @classmethod
    def from_api(cls, value: str | None) -> BillingMode:
        """API BillingMode 값을 변환

        BillingModeSummary가 없는 테이블은 생성 이후 모드가 바뀐 적 없는
        Provisioned 테이블이므로 None은 PROVISIONED로 해석합니다.
        """
        if value == "PAY_PER_REQUEST":
            return cls.ON_DEMAND
        return cls.PROVISIONED


@dataclass(frozen=True)
class ResourceIdentity:
    """테이블 식별 정보

    Attributes:
        name: 테이블 이름 (계정/리전 내 고유)
        identifier: 테이블 ARN
    """

    name: str
    identifier: str


@dataclass(frozen=True)
class Tag:
    """리소스 태그 (key, value는 해석하지 않는 문자열)"""

    key: str
    value: str


@dataclass(frozen=True)
class CapacityConfig:
    """테이블의 현재 또는 목표 처리량 설정

    read_units, write_units는 PROVISIONED 모드에서만 의미가 있으며
    ON_DEMAND 모드에서는 항상 None으로 정규화됩니다.
    """

    mode: BillingMode
    read_units: int | None = None
    write_units: int | None = None

    def __post_init__(self) -> None:
        if self.mode is BillingMode.ON_DEMAND:
            object.__setattr__(self, "read_units", None)
            object.__setattr__(self, "write_units", None)

    @property
    def units(self) -> tuple[int | None, int | None]:
        return (self.read_units, self.write_units)


@dataclass(frozen=True)
class TableDescription:
    """describe 결과: 식별 정보 + 현재 용량 설정"""

    identity: ResourceIdentity
    capacity: CapacityConfig


@dataclass(frozen=True)
class MatchResult:
    """검색 조건을 모두 만족한 테이블 1건"""

    identity: ResourceIdentity

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def identifier(self) -> str:
        return self.identity.identifier

    def to_dict(self) -> dict[str, str]:
        return {"name": self.identity.name, "arn": self.identity.identifier}


@dataclass
class DiscoveryResult:
    """검색 파이프라인 결과

    목록 조회가 도중에 실패하면 그때까지 누적된 matches와 함께 error가 채워집니다.

    Attributes:
        matches: 매칭된 테이블 (목록 조회 순서 유지)
        error: 목록 조회 실패 원인 (성공 시 None)
    """

    matches: list[MatchResult] = field(default_factory=list)
    error: TransportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None



# =============================================================================
# 전환 계획
# =============================================================================


@dataclass(frozen=True)
class NoOp:
    """변경 불필요 (정상 결과)"""

    reason: str = ""


@dataclass(frozen=True)
class Mutate:
    """테이블 변경 요청

    Attributes:
        target_mode: 목표 용량 모드
        read_units: 목표 RCU (ON_DEMAND면 None)
        write_units: 목표 WCU (ON_DEMAND면 None)
        switch_mode: True면 UpdateTable에 BillingMode를 함께 전송
    """

    target_mode: BillingMode
    read_units: int | None = None
    write_units: int | None = None
    switch_mode: bool = True


TransitionPlan = Union[NoOp, Mutate]
