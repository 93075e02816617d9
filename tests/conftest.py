"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 서브넷 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(fetcher_factory, fake_clock):
        # fetcher_factory: 호출 기록이 남는 SubnetFetcher 생성
        # fake_clock: 수동으로 진행시키는 시계
        pass
"""

import os
import sys
import threading
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.data.subnets import Subnet, Tag  # noqa: E402

# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """테스트 환경 설정"""
    os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

    yield


# =============================================================================
# 테스트 데이터 팩토리
# =============================================================================


def make_subnet(
    subnet_id: str = "subnet-1",
    zone: str = "us-east-1a",
    tags: list[tuple[str, str]] | None = None,
    vpc_id: str = "vpc-12345678",
) -> Subnet:
    """Subnet 테스트 데이터 생성"""
    return Subnet(
        subnet_id=subnet_id,
        availability_zone=zone,
        tags=tuple(Tag(key, value) for key, value in (tags or [])),
        vpc_id=vpc_id,
    )


def make_api_subnet(
    subnet_id: str = "subnet-1",
    zone: str = "us-east-1a",
    tags: list[tuple[str, str]] | None = None,
) -> dict:
    """AWS describe_subnets 응답의 Subnet 항목 생성"""
    return {
        "SubnetId": subnet_id,
        "VpcId": "vpc-12345678",
        "CidrBlock": "10.0.1.0/24",
        "AvailabilityZone": zone,
        "State": "available",
        "AvailableIpAddressCount": 251,
        "Tags": [{"Key": key, "Value": value} for key, value in (tags or [])],
    }


class FakeClock:
    """수동으로 진행시키는 monotonic 시계"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """호출을 기록하는 SubnetFetcher"""

    def __init__(self, subnets: list[Subnet] | None = None, error: Exception | None = None):
        self.subnets = subnets if subnets is not None else []
        self.error = error
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, tag_key: str, cancel: threading.Event | None = None) -> list[Subnet]:
        with self._lock:
            self.calls.append(tag_key)
        if self.error is not None:
            raise self.error
        return list(self.subnets)


@pytest.fixture
def subnet_factory():
    """make_subnet 팩토리"""
    return make_subnet


@pytest.fixture
def api_subnet_factory():
    """make_api_subnet 팩토리"""
    return make_api_subnet


@pytest.fixture
def fetcher_factory():
    """FakeFetcher 팩토리"""
    return FakeFetcher


@pytest.fixture
def fake_clock():
    """수동 시계"""
    return FakeClock()


@pytest.fixture
def example_subnets():
    """s1(us-east-1a, Name=a), s2(us-east-1b, Name=b)"""
    return [
        make_subnet("s1", "us-east-1a", [("Name", "a")]),
        make_subnet("s2", "us-east-1b", [("Name", "b")]),
    ]


@pytest.fixture
def fake_fetcher(example_subnets):
    """예시 서브넷을 반환하는 fetcher"""
    return FakeFetcher(example_subnets)


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_boto3_session():
    """boto3.Session 모킹"""
    with patch("boto3.Session") as mock_session_class:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session

        mock_session.client.return_value = MagicMock()
        mock_session.region_name = "us-east-1"

        yield mock_session


@pytest.fixture
def mock_ec2_client(api_subnet_factory):
    """describe_subnets 페이지네이터가 설정된 EC2 클라이언트 모킹"""
    mock_client = MagicMock()

    mock_paginator = MagicMock()
    mock_paginator.paginate.return_value = [
        {
            "Subnets": [
                api_subnet_factory("subnet-aaa", "us-east-1a", [("Name", "private-a")]),
                api_subnet_factory("subnet-bbb", "us-east-1b", [("Name", "private-b")]),
            ]
        }
    ]
    mock_client.get_paginator.return_value = mock_paginator

    yield mock_client
