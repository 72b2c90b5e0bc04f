"""
core/dynamodb/memory.py - 메모리 기반 TableRepository

AWS 호출 없이 검색/업데이트 흐름을 검증하기 위한 구현입니다.
변경 호출은 mutations에 기록되며, 이름/작업 단위로 실패를 주입할 수 있습니다.

Example:
    repo = InMemoryTableRepository()
    repo.add_table("orders", mode=BillingMode.PROVISIONED, read_units=5, write_units=5,
                   tags={"env": "prod"})
    repo.fail_on("describe", "orders")
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from core.exceptions import TableNotFoundError, TransportError

from .types import BillingMode, CapacityConfig, ResourceIdentity, TableDescription, Tag

SERVICE = "dynamodb"
ARN_TEMPLATE = "arn:aws:dynamodb:ap-northeast-2:123456789012:table/{name}"


@dataclass
class _Table:
    name: str
    arn: str
    capacity: CapacityConfig
    tags: list[Tag] = field(default_factory=list)


class InMemoryTableRepository:
    """TableRepository 인메모리 구현

    Attributes:
        mutations: (작업, 테이블 이름, 인자) 형태의 변경 호출 기록
        calls: 전체 호출 기록 (작업, 대상)
    """

    def __init__(self) -> None:
        self._tables: dict[str, _Table] = {}
        self._failures: set[tuple[str, str]] = set()
        self._list_fail_after: int | None = None
        self.mutations: list[tuple[str, str, dict]] = []
        self.calls: list[tuple[str, str]] = []

    # -------------------------------------------------------------------------
    # 테스트 데이터 구성
    # -------------------------------------------------------------------------

    def add_table(
        self,
        name: str,
        mode: BillingMode = BillingMode.ON_DEMAND,
        read_units: int | None = None,
        write_units: int | None = None,
        tags: dict[str, str] | None = None,
    ) -> ResourceIdentity:
        arn = ARN_TEMPLATE.format(name=name)
        self._tables[name] = _Table(
            name=name,
            arn=arn,
            capacity=CapacityConfig(mode=mode, read_units=read_units, write_units=write_units),
            tags=[Tag(key=k, value=v) for k, v in (tags or {}).items()],
        )
        return ResourceIdentity(name=name, identifier=arn)

    def fail_on(self, operation: str, target: str) -> None:
        """operation(describe, list_tags, set_on_demand, set_provisioned)이 target에서 실패하도록 설정

        list_tags의 target은 ARN 또는 테이블 이름 모두 허용합니다.
        """
        self._failures.add((operation, target))

    def fail_listing_after(self, count: int) -> None:
        """list_names가 count개를 반환한 뒤 실패하도록 설정"""
        self._list_fail_after = count

    def capacity_of(self, name: str) -> CapacityConfig:
        return self._tables[name].capacity

    # -------------------------------------------------------------------------
    # TableRepository
    # -------------------------------------------------------------------------

    def list_names(self) -> Iterator[str]:
        self.calls.append(("list_names", ""))
        for index, name in enumerate(list(self._tables)):
            if self._list_fail_after is not None and index >= self._list_fail_after:
                raise self._error("list_tables")
            yield name

    def describe(self, name: str) -> TableDescription:
        self.calls.append(("describe", name))
        self._check("describe", name, "describe_table")
        table = self._tables.get(name)
        if table is None:
            raise TableNotFoundError(
                service=SERVICE,
                operation="describe_table",
                error_code="ResourceNotFoundException",
                error_message=f"Requested resource not found: Table: {name} not found",
                resource=name,
            )
        return TableDescription(
            identity=ResourceIdentity(name=table.name, identifier=table.arn),
            capacity=table.capacity,
        )

    def list_tags(self, identifier: str) -> list[Tag]:
        self.calls.append(("list_tags", identifier))
        table = self._by_arn(identifier)
        self._check("list_tags", identifier, "list_tags_of_resource")
        if table is not None:
            self._check("list_tags", table.name, "list_tags_of_resource")
            return list(table.tags)
        return []

    def set_on_demand(self, name: str) -> None:
        self.calls.append(("set_on_demand", name))
        self._check("set_on_demand", name, "update_table")
        self.mutations.append(("set_on_demand", name, {}))
        self._require(name).capacity = CapacityConfig(mode=BillingMode.ON_DEMAND)

    def set_provisioned(self, name: str, read_units: int, write_units: int, switch_mode: bool = True) -> None:
        self.calls.append(("set_provisioned", name))
        self._check("set_provisioned", name, "update_table")
        self.mutations.append(
            (
                "set_provisioned",
                name,
                {"read_units": read_units, "write_units": write_units, "switch_mode": switch_mode},
            )
        )
        self._require(name).capacity = CapacityConfig(
            mode=BillingMode.PROVISIONED, read_units=read_units, write_units=write_units
        )

    # -------------------------------------------------------------------------
    # 내부 헬퍼
    # -------------------------------------------------------------------------

    def _by_arn(self, identifier: str) -> _Table | None:
        for table in self._tables.values():
            if table.arn == identifier:
                return table
        return None

    def _require(self, name: str) -> _Table:
        table = self._tables.get(name)
        if table is None:
            raise TableNotFoundError(
                service=SERVICE,
                operation="update_table",
                error_code="ResourceNotFoundException",
                resource=name,
            )
        return table

    def _check(self, operation: str, target: str, api_operation: str) -> None:
        if (operation, target) in self._failures:
            raise self._error(api_operation, target)

    @staticmethod
    def _error(api_operation: str, target: str | None = None) -> TransportError:
        return TransportError(
            service=SERVICE,
            operation=api_operation,
            error_code="InternalServerError",
            error_message="injected failure",
            resource=target,
        )
