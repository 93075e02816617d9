"""
tests/core/test_exceptions.py - core/exceptions.py 테스트
"""

from botocore.exceptions import ClientError

from core.exceptions import (
    AAError,
    ConfigError,
    DiscoveryCancelledError,
    DiscoveryFailure,
    is_access_denied,
    is_throttling,
)


def make_client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "msg"}}, "DescribeSubnets")


class TestAAError:
    """AAError 테스트"""

    def test_str_with_cause(self):
        """원인 예외 포함 메시지"""
        err = AAError("실패", cause=ValueError("bad"))
        assert str(err) == "실패: bad"

    def test_to_dict(self):
        """딕셔너리 변환"""
        err = AAError("실패", details={"k": "v"})
        assert err.to_dict() == {
            "error_type": "AAError",
            "message": "실패",
            "cause": None,
            "details": {"k": "v"},
        }


class TestDiscoveryFailure:
    """DiscoveryFailure 테스트"""

    def test_identifies_cluster(self):
        """클러스터 이름 포함"""
        err = DiscoveryFailure("prod", cause=RuntimeError("timeout"))
        assert err.cluster_name == "prod"
        assert "prod" in str(err)
        assert "timeout" in str(err)
        assert err.details["cluster_name"] == "prod"

    def test_error_code_from_client_error(self):
        """ClientError 코드 추출"""
        err = DiscoveryFailure("prod", cause=make_client_error("UnauthorizedOperation"))
        assert err.error_code == "UnauthorizedOperation"
        assert err.to_dict()["details"]["error_code"] == "UnauthorizedOperation"

    def test_no_error_code_for_other_causes(self):
        """ClientError가 아니면 코드 없음"""
        assert DiscoveryFailure("prod", cause=OSError("reset")).error_code is None

    def test_cancelled(self):
        """취소 여부"""
        assert DiscoveryFailure("prod", cause=DiscoveryCancelledError()).cancelled is True
        assert DiscoveryFailure("prod", cause=OSError()).cancelled is False


class TestConfigError:
    """ConfigError 테스트"""

    def test_key(self):
        """설정 키 기록"""
        err = ConfigError("bad", key="SUBNET_CACHE_TTL_SECONDS")
        assert err.details["key"] == "SUBNET_CACHE_TTL_SECONDS"


class TestHelpers:
    """예외 유틸리티 함수 테스트"""

    def test_is_throttling(self):
        """스로틀링 판별"""
        assert is_throttling(make_client_error("RequestLimitExceeded"))
        assert is_throttling(DiscoveryFailure("prod", cause=make_client_error("Throttling")))
        assert not is_throttling(make_client_error("AccessDenied"))
        assert not is_throttling(ValueError())

    def test_is_access_denied(self):
        """권한 오류 판별"""
        assert is_access_denied(make_client_error("UnauthorizedOperation"))
        assert is_access_denied(DiscoveryFailure("prod", cause=make_client_error("AccessDenied")))
        assert not is_access_denied(DiscoveryFailure("prod", cause=OSError()))
