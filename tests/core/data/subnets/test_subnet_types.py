"""
tests/core/data/subnets/test_subnet_types.py - 데이터클래스 테스트
"""

import pytest

from core.data.subnets.types import (
    SUBNET_NAME_LABEL,
    SUBNET_TAG_KEY_LABEL,
    ZONE_LABEL,
    Constraints,
    Subnet,
    Tag,
)


class TestSubnetFromApi:
    """Subnet.from_api 테스트"""

    def test_basic_fields(self, api_subnet_factory):
        """기본 필드 변환"""
        subnet = Subnet.from_api(api_subnet_factory("subnet-1", "us-east-1a", [("Name", "private-a")]))

        assert subnet.subnet_id == "subnet-1"
        assert subnet.availability_zone == "us-east-1a"
        assert subnet.vpc_id == "vpc-12345678"
        assert subnet.cidr_block == "10.0.1.0/24"
        assert subnet.state == "available"
        assert subnet.available_ip_count == 251
        assert subnet.tags == (Tag("Name", "private-a"),)

    def test_missing_tags(self):
        """Tags 키가 없는 응답"""
        subnet = Subnet.from_api({"SubnetId": "subnet-1", "AvailabilityZone": "us-east-1a"})
        assert subnet.tags == ()
        assert subnet.name == ""

    def test_tag_order_preserved(self, api_subnet_factory):
        """태그 순서 유지"""
        subnet = Subnet.from_api(api_subnet_factory(tags=[("b", "1"), ("a", "2"), ("b", "3")]))
        assert [t.key for t in subnet.tags] == ["b", "a", "b"]


class TestSubnetHelpers:
    """Subnet 헬퍼 테스트"""

    def test_name_first_tag_wins(self, subnet_factory):
        """Name 중복 시 첫 번째 값"""
        assert subnet_factory(tags=[("Name", "x"), ("Name", "y")]).name == "x"

    def test_tag_dict_first_wins(self, subnet_factory):
        """tag_dict도 첫 번째 값 유지"""
        subnet = subnet_factory(tags=[("team", "a"), ("team", "b"), ("env", "prod")])
        assert subnet.tag_dict() == {"team": "a", "env": "prod"}

    def test_is_immutable(self, subnet_factory):
        """불변 데이터클래스"""
        subnet = subnet_factory()
        with pytest.raises(AttributeError):
            subnet.availability_zone = "us-east-1z"


class TestConstraints:
    """Constraints 테스트"""

    def test_defaults_are_empty(self):
        """기본값은 필터 없음"""
        constraints = Constraints()
        assert constraints.name is None
        assert constraints.tag_key is None
        assert constraints.zones == ()
        assert constraints.is_empty

    def test_empty_string_is_not_absent(self):
        """빈 문자열 이름은 조건으로 취급"""
        assert Constraints(name="").is_empty is False

    def test_zones_list_is_converted(self):
        """리스트로 넘긴 zone은 tuple로 고정"""
        constraints = Constraints(zones=["us-east-1a", "us-east-1b"])
        assert constraints.zones == ("us-east-1a", "us-east-1b")
        hash(constraints)

    def test_from_labels(self):
        """노드 라벨에서 조건 생성"""
        constraints = Constraints.from_labels(
            {
                SUBNET_NAME_LABEL: "private-a",
                SUBNET_TAG_KEY_LABEL: "kubernetes.io/role/internal-elb",
                ZONE_LABEL: "us-east-1a, us-east-1b",
                "unrelated": "x",
            }
        )
        assert constraints.name == "private-a"
        assert constraints.tag_key == "kubernetes.io/role/internal-elb"
        assert constraints.zones == ("us-east-1a", "us-east-1b")

    def test_from_labels_empty(self):
        """관련 라벨 없음"""
        assert Constraints.from_labels({}).is_empty
