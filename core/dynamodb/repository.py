"""
core/dynamodb/repository.py - 테이블 저장소 인터페이스와 boto3 구현

코어(검색/업데이트)는 TableRepository 프로토콜에만 의존합니다.
실제 구현은 BotoTableRepository, 테스트용 구현은 core.dynamodb.memory에 있습니다.

모든 호출은 동기/블로킹이며 재시도하지 않습니다. botocore 예외는
TransportError(리소스 없음이면 TableNotFoundError)로 변환됩니다.

Example:
    from core.aws import create_session
    from core.dynamodb.repository import BotoTableRepository

    repository = BotoTableRepository.from_session(create_session(profile="dev"))
    for name in repository.list_names():
        print(repository.describe(name).capacity)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from core.aws.client import get_client
from core.exceptions import TransportError

from .types import BillingMode, CapacityConfig, ResourceIdentity, TableDescription, Tag

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

SERVICE = "dynamodb"

# 필요한 AWS 권한 목록
REQUIRED_PERMISSIONS = {
    "read": [
        "dynamodb:ListTables",
        "dynamodb:DescribeTable",
        "dynamodb:ListTagsOfResource",
    ],
    "write": [
        "dynamodb:UpdateTable",
    ],
}


class TableRepository(Protocol):
    """테이블 목록/조회/태그/변경 작업 인터페이스"""

    def list_names(self) -> Iterator[str]:
        """전체 테이블 이름 (페이지네이션은 내부 처리). 실패 시 TransportError"""
        ...

    def describe(self, name: str) -> TableDescription:
        """테이블 ARN과 용량 설정. 실패 시 TableNotFoundError/TransportError"""
        ...

    def list_tags(self, identifier: str) -> list[Tag]:
        """ARN의 태그 목록. 실패 시 TransportError"""
        ...

    def set_on_demand(self, name: str) -> None:
        """On-Demand(PAY_PER_REQUEST)로 전환"""
        ...

    def set_provisioned(self, name: str, read_units: int, write_units: int, switch_mode: bool = True) -> None:
        """Provisioned 용량 설정 (switch_mode=False면 처리량만 변경)"""
        ...


class BotoTableRepository:
    """boto3 DynamoDB client 기반 TableRepository 구현"""

    def __init__(self, client: Any):
        self._client = client

    @classmethod
    def from_session(cls, session: boto3.Session, region_name: str | None = None) -> BotoTableRepository:
        return cls(get_client(session, SERVICE, region_name=region_name))

    def list_names(self) -> Iterator[str]:
        paginator = self._client.get_paginator("list_tables")
        try:
            for page in paginator.paginate():
                yield from page.get("TableNames", [])
        except (ClientError, BotoCoreError) as e:
            logger.error("Couldn't list tables: %s", e)
            raise TransportError.from_client_error(SERVICE, "list_tables", e) from e

    def describe(self, name: str) -> TableDescription:
        try:
            output = self._client.describe_table(TableName=name)
        except (ClientError, BotoCoreError) as e:
            raise TransportError.from_client_error(SERVICE, "describe_table", e, resource=name) from e

        table = output.get("Table", {})
        billing = table.get("BillingModeSummary") or {}
        mode = BillingMode.from_api(billing.get("BillingMode"))

        read_units = write_units = None
        if mode is BillingMode.PROVISIONED:
            throughput = table.get("ProvisionedThroughput", {})
            read_units = throughput.get("ReadCapacityUnits")
            write_units = throughput.get("WriteCapacityUnits")

        return TableDescription(
            identity=ResourceIdentity(name=table.get("TableName", name), identifier=table.get("TableArn", "")),
            capacity=CapacityConfig(mode=mode, read_units=read_units, write_units=write_units),
        )

    def list_tags(self, identifier: str) -> list[Tag]:
        tags: list[Tag] = []
        kwargs: dict[str, str] = {"ResourceArn": identifier}
        try:
            while True:
                output = self._client.list_tags_of_resource(**kwargs)
                tags.extend(Tag(key=t["Key"], value=t["Value"]) for t in output.get("Tags", []))
                next_token = output.get("NextToken")
                if not next_token:
                    break
                kwargs["NextToken"] = next_token
        except (ClientError, BotoCoreError) as e:
            raise TransportError.from_client_error(SERVICE, "list_tags_of_resource", e, resource=identifier) from e
        return tags

    def set_on_demand(self, name: str) -> None:
        self._update_table(TableName=name, BillingMode=BillingMode.ON_DEMAND.api_value)
        logger.info("Switched to on-demand capacity for table: %s", name)

    def set_provisioned(self, name: str, read_units: int, write_units: int, switch_mode: bool = True) -> None:
        params: dict[str, Any] = {
            "TableName": name,
            "ProvisionedThroughput": {
                "ReadCapacityUnits": read_units,
                "WriteCapacityUnits": write_units,
            },
        }
        if switch_mode:
            params["BillingMode"] = BillingMode.PROVISIONED.api_value

        self._update_table(**params)
        logger.info("Provisioned capacity updated for table: %s - RCU: %d, WCU: %d", name, read_units, write_units)

    def _update_table(self, **params: Any) -> None:
        try:
            self._client.update_table(**params)
        except (ClientError, BotoCoreError) as e:
            logger.error("Error updating table %s: %s", params.get("TableName"), e)
            raise TransportError.from_client_error(SERVICE, "update_table", e, resource=params.get("TableName")) from e
