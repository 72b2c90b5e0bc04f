"""
core/dynamodb/update.py - 테이블 용량 업데이트

describe 1회 → 전환 계획 1회 → (Mutate인 경우) 변경 호출 1회.
모든 실패는 해당 실행 전체에 치명적이며 재시도하지 않습니다.
"""

from __future__ import annotations

import logging

from core.exceptions import DMError, TransportError

from .intent import UpdateIntent
from .planner import plan
from .repository import TableRepository
from .types import BillingMode, Mutate, NoOp, TransitionPlan

logger = logging.getLogger(__name__)


def update(repository: TableRepository, intent: UpdateIntent) -> TransitionPlan:
    """테이블 용량 모드/처리량 변경

    Args:
        repository: 테이블 저장소
        intent: 업데이트 의도

    Returns:
        실행된 계획 (NoOp이면 변경 호출 없음)

    Raises:
        TableNotFoundError: 테이블이 없는 경우
        TransportError: describe 또는 변경 호출 실패
        PreconditionError: 허용되지 않는 전환
    """
    table_name = intent.table_name

    try:
        description = repository.describe(table_name)
    except TransportError as e:
        logger.error("Failed to get the billing mode of table: %s due to: %s", table_name, e)
        raise

    current = description.capacity
    logger.debug(
        "Current capacity of %s: mode=%s, rcu=%s, wcu=%s",
        table_name,
        current.mode.value,
        current.read_units,
        current.write_units,
    )

    try:
        transition = plan(
            current,
            want_on_demand=intent.on_demand,
            want_provisioned=intent.provisioned,
            read_units=intent.read_units,
            write_units=intent.write_units,
            table_name=table_name,
        )
    except DMError as e:
        logger.error("Failed to update table: %s - %s", table_name, e)
        raise

    if isinstance(transition, NoOp):
        logger.info("No need to update table %s: %s", table_name, transition.reason)
        return transition

    _apply(repository, table_name, transition)
    return transition


def _apply(repository: TableRepository, table_name: str, mutation: Mutate) -> None:
    if mutation.target_mode is BillingMode.PROVISIONED and (
        mutation.read_units is None or mutation.write_units is None
    ):
        raise TypeError(f"PROVISIONED 변경에는 RCU/WCU가 필요합니다: {mutation!r}")

    try:
        if mutation.target_mode is BillingMode.ON_DEMAND:
            repository.set_on_demand(table_name)
        else:
            repository.set_provisioned(
                table_name,
                mutation.read_units,
                mutation.write_units,
                switch_mode=mutation.switch_mode,
            )
    except TransportError as e:
        logger.error("Failed to update table: %s due to: %s", table_name, e)
        raise
