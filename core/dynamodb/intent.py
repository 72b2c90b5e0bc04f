"""
core/dynamodb/intent.py - 검증된 명령 의도

CLI 경계에서 한 번 생성되어 코어에 값으로 전달되는 불변 객체입니다.
코어는 전역 상태(파싱된 플래그)를 읽지 않습니다.

검증 규칙:
    - 검색: 테이블 이름 검색어 또는 태그 값 중 하나 이상 필요
    - 업데이트: --rcu / --wcu / --provisioned / --ondemand 중 하나 이상 필요
    - --ondemand는 --rcu, --wcu, --provisioned와 함께 사용할 수 없음
    - --rcu / --wcu는 0 이상의 정수
"""

from __future__ import annotations

from dataclasses import dataclass

from core.exceptions import ValidationError


@dataclass(frozen=True)
class SearchIntent:
    """테이블 검색 의도"""

    name_pattern: str | None = None
    tag_value: str | None = None

    def __post_init__(self) -> None:
        if not self.name_pattern and not self.tag_value:
            raise ValidationError(
                field="search",
                value="",
                expected="테이블 이름 검색어 또는 --tag 값",
            )


@dataclass(frozen=True)
class UpdateIntent:
    """테이블 용량 모드/처리량 변경 의도"""

    table_name: str
    on_demand: bool = False
    provisioned: bool = False
    read_units: int | None = None
    write_units: int | None = None

    def __post_init__(self) -> None:
        if not self.table_name:
            raise ValidationError(field="table", value="", expected="변경할 테이블 이름")

        has_units = self.read_units is not None or self.write_units is not None
        if not (has_units or self.on_demand or self.provisioned):
            raise ValidationError(
                field="update",
                value=self.table_name,
                expected="--rcu, --wcu, --provisioned, --ondemand 중 하나 이상",
            )
        if self.on_demand and has_units:
            raise ValidationError(
                field="ondemand",
                value=f"rcu={self.read_units}, wcu={self.write_units}",
                expected="On-Demand 모드는 rcu/wcu를 지원하지 않음",
            )
        if self.on_demand and self.provisioned:
            raise ValidationError(
                field="ondemand",
                value="--ondemand --provisioned",
                expected="--ondemand와 --provisioned 중 하나만",
            )
        for field_name, units in (("rcu", self.read_units), ("wcu", self.write_units)):
            if units is not None and units < 0:
                raise ValidationError(field=field_name, value=units, expected="0 이상의 정수")


def parse_units(field: str, raw: str | None) -> int | None:
    """명령줄 용량 단위 문자열을 정수로 변환

    Args:
        field: 필드 이름 (rcu, wcu)
        raw: 입력 문자열 (None 또는 빈 문자열이면 미지정)

    Returns:
        정수 값 또는 None

    Raises:
        ValidationError: 정수가 아니거나 음수인 경우
    """
    if raw is None or raw == "":
        return None
    try:
        value = int(raw, 10)
    except ValueError as e:
        raise ValidationError(field=field, value=raw, expected="0 이상의 정수", cause=e) from e
    if value < 0:
        raise ValidationError(field=field, value=raw, expected="0 이상의 정수")
    return value
