"""
tests/core/dynamodb/test_dynamodb_repository.py - boto3 기반 TableRepository 테스트

moto로 DynamoDB를 모킹하여 실제 API 형식으로 검증하고,
에러 변환은 MagicMock client로 검증합니다.
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from core.dynamodb.repository import REQUIRED_PERMISSIONS, BotoTableRepository
from core.dynamodb.types import BillingMode, CapacityConfig, Tag
from core.exceptions import TableNotFoundError, TransportError


def create_mock_client_error(error_code, error_message="Test error", operation="TestOperation"):
    return ClientError({"Error": {"Code": error_code, "Message": error_message}}, operation)


def _create_table(client, name, provisioned=False, tags=None):
    params = {
        "TableName": name,
        "KeySchema": [{"AttributeName": "pk", "KeyType": "HASH"}],
        "AttributeDefinitions": [{"AttributeName": "pk", "AttributeType": "S"}],
    }
    if provisioned:
        params["BillingMode"] = "PROVISIONED"
        params["ProvisionedThroughput"] = {"ReadCapacityUnits": 5, "WriteCapacityUnits": 5}
    else:
        params["BillingMode"] = "PAY_PER_REQUEST"
    if tags:
        params["Tags"] = [{"Key": k, "Value": v} for k, v in tags.items()]
    return client.create_table(**params)["TableDescription"]["TableArn"]


class TestRequiredPermissions:
    def test_permissions(self):
        assert "dynamodb:ListTables" in REQUIRED_PERMISSIONS["read"]
        assert REQUIRED_PERMISSIONS["write"] == ["dynamodb:UpdateTable"]


class TestBotoRepositoryMoto:
    """moto DynamoDB 통합"""

    def test_list_names(self, moto_dynamodb):
        for name in ("alpha", "beta", "gamma"):
            _create_table(moto_dynamodb, name)

        repo = BotoTableRepository(moto_dynamodb)

        assert sorted(repo.list_names()) == ["alpha", "beta", "gamma"]

    def test_list_names_empty(self, moto_dynamodb):
        repo = BotoTableRepository(moto_dynamodb)

        assert list(repo.list_names()) == []

    def test_describe_on_demand(self, moto_dynamodb):
        arn = _create_table(moto_dynamodb, "users")
        repo = BotoTableRepository(moto_dynamodb)

        description = repo.describe("users")

        assert description.identity.name == "users"
        assert description.identity.identifier == arn
        assert description.capacity == CapacityConfig(mode=BillingMode.ON_DEMAND)

    def test_describe_provisioned(self, moto_dynamodb):
        _create_table(moto_dynamodb, "orders", provisioned=True)
        repo = BotoTableRepository(moto_dynamodb)

        capacity = repo.describe("orders").capacity

        assert capacity.mode is BillingMode.PROVISIONED
        assert capacity.units == (5, 5)

    def test_describe_missing_table(self, moto_dynamodb):
        repo = BotoTableRepository(moto_dynamodb)

        with pytest.raises(TableNotFoundError) as exc_info:
            repo.describe("missing")

        assert exc_info.value.resource == "missing"

    def test_list_tags(self, moto_dynamodb):
        arn = _create_table(moto_dynamodb, "orders", tags={"team": "commerce", "env": "prod"})
        repo = BotoTableRepository(moto_dynamodb)

        tags = repo.list_tags(arn)

        assert set(tags) == {Tag(key="team", value="commerce"), Tag(key="env", value="prod")}

    def test_set_provisioned_and_on_demand(self, moto_dynamodb):
        _create_table(moto_dynamodb, "orders")
        repo = BotoTableRepository(moto_dynamodb)

        repo.set_provisioned("orders", 10, 7)
        capacity = repo.describe("orders").capacity
        assert capacity.mode is BillingMode.PROVISIONED
        assert capacity.units == (10, 7)

        repo.set_on_demand("orders")
        assert repo.describe("orders").capacity.mode is BillingMode.ON_DEMAND


class TestBotoRepositoryRequests:
    """UpdateTable 요청 형식 (MagicMock client)"""

    def test_set_on_demand_request(self):
        client = MagicMock()
        BotoTableRepository(client).set_on_demand("orders")

        client.update_table.assert_called_once_with(TableName="orders", BillingMode="PAY_PER_REQUEST")

    def test_set_provisioned_with_mode_switch(self):
        client = MagicMock()
        BotoTableRepository(client).set_provisioned("orders", 10, 5)

        client.update_table.assert_called_once_with(
            TableName="orders",
            BillingMode="PROVISIONED",
            ProvisionedThroughput={"ReadCapacityUnits": 10, "WriteCapacityUnits": 5},
        )

    def test_set_provisioned_units_only(self):
        """switch_mode=False면 BillingMode를 보내지 않음"""
        client = MagicMock()
        BotoTableRepository(client).set_provisioned("orders", 10, 5, switch_mode=False)

        kwargs = client.update_table.call_args.kwargs
        assert "BillingMode" not in kwargs
        assert kwargs["ProvisionedThroughput"] == {"ReadCapacityUnits": 10, "WriteCapacityUnits": 5}

    def test_describe_without_billing_summary(self):
        """BillingModeSummary가 없으면 PROVISIONED로 해석"""
        client = MagicMock()
        client.describe_table.return_value = {
            "Table": {
                "TableName": "legacy",
                "TableArn": "arn:aws:dynamodb:ap-northeast-2:123456789012:table/legacy",
                "ProvisionedThroughput": {"ReadCapacityUnits": 3, "WriteCapacityUnits": 2},
            }
        }

        capacity = BotoTableRepository(client).describe("legacy").capacity

        assert capacity == CapacityConfig(mode=BillingMode.PROVISIONED, read_units=3, write_units=2)

    def test_list_tags_pagination(self):
        client = MagicMock()
        client.list_tags_of_resource.side_effect = [
            {"Tags": [{"Key": "a", "Value": "1"}], "NextToken": "next"},
            {"Tags": [{"Key": "b", "Value": "2"}]},
        ]

        tags = BotoTableRepository(client).list_tags("arn:table")

        assert tags == [Tag(key="a", value="1"), Tag(key="b", value="2")]
        assert client.list_tags_of_resource.call_args_list[1].kwargs == {
            "ResourceArn": "arn:table",
            "NextToken": "next",
        }


class TestBotoRepositoryErrors:
    """botocore 예외 → TransportError 변환"""

    def test_list_names_error(self):
        client = MagicMock()
        client.get_paginator.return_value.paginate.side_effect = create_mock_client_error(
            "AccessDeniedException", "denied", "ListTables"
        )

        with pytest.raises(TransportError) as exc_info:
            list(BotoTableRepository(client).list_names())

        assert exc_info.value.operation == "list_tables"
        assert exc_info.value.error_code == "AccessDeniedException"

    def test_list_names_error_after_first_page(self):
        """첫 페이지 이후 실패해도 이미 반환한 이름은 유지"""

        def pages():
            yield {"TableNames": ["a", "b"]}
            raise create_mock_client_error("InternalServerError", "boom", "ListTables")

        client = MagicMock()
        client.get_paginator.return_value.paginate.return_value = pages()

        seen = []
        with pytest.raises(TransportError):
            for name in BotoTableRepository(client).list_names():
                seen.append(name)

        assert seen == ["a", "b"]

    def test_describe_not_found(self):
        client = MagicMock()
        client.describe_table.side_effect = create_mock_client_error(
            "ResourceNotFoundException", "Requested resource not found", "DescribeTable"
        )

        with pytest.raises(TableNotFoundError):
            BotoTableRepository(client).describe("missing")

    def test_list_tags_error(self):
        client = MagicMock()
        client.list_tags_of_resource.side_effect = create_mock_client_error("AccessDeniedException")

        with pytest.raises(TransportError) as exc_info:
            BotoTableRepository(client).list_tags("arn:table")

        assert exc_info.value.resource == "arn:table"

    def test_update_error(self):
        client = MagicMock()
        client.update_table.side_effect = create_mock_client_error("LimitExceededException")

        with pytest.raises(TransportError) as exc_info:
            BotoTableRepository(client).set_on_demand("orders")

        assert exc_info.value.operation == "update_table"
        assert exc_info.value.error_code == "LimitExceededException"

    def test_botocore_error(self):
        """ClientError가 아닌 botocore 예외도 변환"""
        client = MagicMock()
        client.describe_table.side_effect = EndpointConnectionError(endpoint_url="https://dynamodb")

        with pytest.raises(TransportError) as exc_info:
            BotoTableRepository(client).describe("orders")

        assert exc_info.value.error_code is None
        assert "dynamodb" in exc_info.value.error_message
