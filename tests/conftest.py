"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(memory_repo, moto_dynamodb):
        # memory_repo: 인메모리 TableRepository
        # moto_dynamodb: moto로 모킹된 boto3 DynamoDB client
        pass
"""

import os
import sys
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """테스트 환경 설정"""
    os.environ.setdefault("AWS_DEFAULT_REGION", "ap-northeast-2")
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

    yield


@pytest.fixture(autouse=True)
def reset_package_loggers():
    """setup_logging()이 변경한 core/cli logger 상태 복원 (caplog 캡처용)"""
    yield

    import logging

    for name in ("core", "cli"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


# =============================================================================
# 저장소 픽스처
# =============================================================================


@pytest.fixture
def memory_repo():
    """빈 인메모리 TableRepository"""
    from core.dynamodb.memory import InMemoryTableRepository

    return InMemoryTableRepository()


@pytest.fixture
def sample_repo(memory_repo):
    """검색 테스트용 테이블 구성

    목록 순서: users, orders, sessions, order-history, Orders-Archive
    """
    from core.dynamodb.types import BillingMode

    memory_repo.add_table("users", tags={"team": "identity", "env": "prod"})
    memory_repo.add_table(
        "orders",
        mode=BillingMode.PROVISIONED,
        read_units=5,
        write_units=5,
        tags={"team": "commerce", "env": "prod"},
    )
    memory_repo.add_table("sessions", tags={"team": "identity", "env": "dev"})
    memory_repo.add_table("order-history", tags={"team": "commerce", "env": "dev"})
    memory_repo.add_table("Orders-Archive", tags={"team": "archive"})
    return memory_repo


# =============================================================================
# moto 통합
# =============================================================================


@pytest.fixture
def aws_credentials():
    """moto 사용 시 AWS 자격 증명 설정"""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "ap-northeast-2"


@pytest.fixture
def moto_dynamodb(aws_credentials):
    """moto를 사용한 DynamoDB 모킹"""
    import boto3
    from moto import mock_aws

    with mock_aws():
        yield boto3.client("dynamodb", region_name="ap-northeast-2")
