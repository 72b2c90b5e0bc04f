"""
core/dynamodb/planner.py - 용량 모드 전환 플래너

현재 용량 설정과 요청을 비교하여 변경이 필요한지, 필요하다면 어떤 변경인지 결정합니다.
UpdateTable은 과금/속도 제한 대상이므로 모든 분기는 먼저 멱등성을 확인합니다.

전환 표 (현재 모드 x 요청):
    On-Demand 요청,  현재 ON_DEMAND     → NoOp
    On-Demand 요청,  현재 PROVISIONED   → Mutate(ON_DEMAND)
    RCU/WCU 변경,    현재 ON_DEMAND, --provisioned 없음 → PreconditionError
    --provisioned,   RCU/WCU 미지정     → Mutate(PROVISIONED, 현재값 또는 기본값) (항상 변경)
    RCU/WCU 지정 (빈 값은 기본값) → 현재 PROVISIONED이고 값이 같으면 NoOp, 아니면 Mutate
"""

from __future__ import annotations

from core.config import settings
from core.exceptions import PreconditionError

from .types import BillingMode, CapacityConfig, Mutate, NoOp, TransitionPlan

DEFAULT_RCU = settings.DEFAULT_RCU
DEFAULT_WCU = settings.DEFAULT_WCU


def plan(
    current: CapacityConfig,
    want_on_demand: bool,
    want_provisioned: bool,
    read_units: int | None = None,
    write_units: int | None = None,
    table_name: str = "",
) -> TransitionPlan:
    """전환 계획 수립

    Args:
        current: 테이블의 현재 용량 설정
        want_on_demand: On-Demand 전환 요청 여부
        want_provisioned: Provisioned 전환 요청 여부 (명시적 모드 전환 플래그)
        read_units: 요청 RCU (None이면 미지정)
        write_units: 요청 WCU (None이면 미지정)
        table_name: 에러 메시지용 테이블 이름

    Returns:
        NoOp 또는 Mutate

    Raises:
        PreconditionError: On-Demand 테이블의 처리량을 모드 전환 없이 변경하려는 경우
    """
    if want_on_demand:
        if current.mode is BillingMode.ON_DEMAND:
            return NoOp(reason="already on-demand mode")
        return Mutate(target_mode=BillingMode.ON_DEMAND)

    if current.mode is BillingMode.ON_DEMAND and not want_provisioned:
        raise PreconditionError(
            table_name,
            "On-Demand 모드에서는 rcu/wcu를 변경할 수 없습니다 (--provisioned 필요)",
            current_mode=current.mode.value,
        )

    if read_units is None and write_units is None:
        if not want_provisioned:
            raise PreconditionError(table_name, "변경할 용량 설정이 없습니다", current_mode=current.mode.value)

        # 모드 전환 요청 자체가 변경이므로 멱등성 검사 없이 항상 Mutate
        resolved_read, resolved_write = DEFAULT_RCU, DEFAULT_WCU
        if current.mode is BillingMode.PROVISIONED:
            if current.read_units is not None:
                resolved_read = current.read_units
            if current.write_units is not None:
                resolved_write = current.write_units
        return Mutate(
            target_mode=BillingMode.PROVISIONED,
            read_units=resolved_read,
            write_units=resolved_write,
            switch_mode=True,
        )

    resolved_read = DEFAULT_RCU if read_units is None else read_units
    resolved_write = DEFAULT_WCU if write_units is None else write_units

    if current.mode is BillingMode.PROVISIONED and current.units == (resolved_read, resolved_write):
        return NoOp(reason="already provisioned mode with the same rcu and wcu")

    return Mutate(
        target_mode=BillingMode.PROVISIONED,
        read_units=resolved_read,
        write_units=resolved_write,
        switch_mode=want_provisioned,
    )
