"""
core/exceptions.py - 예외 계층 구조

서브넷 탐색 전체에서 사용되는 예외 클래스들을 정의합니다.

예외 계층 구조:
    AAError (베이스)
    ├── DiscoveryFailure (인벤토리 조회 실패 또는 취소)
    ├── DiscoveryCancelledError (호출자 취소 - DiscoveryFailure로 래핑됨)
    └── ConfigError (설정 관련)

필터와 캐시는 예외를 발생시키지 않습니다. 조건에 맞는 서브넷이 없으면
빈 리스트가 정상 결과입니다.

Usage:
    from core.exceptions import DiscoveryFailure

    try:
        subnets = provider.get("my-cluster", constraints)
    except DiscoveryFailure as e:
        logger.error("탐색 실패: %s", e)
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class AAError(Exception):
    """기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 탐색 관련 예외
# =============================================================================


class DiscoveryFailure(AAError):
    """클러스터 서브넷 탐색 실패

    인벤토리 조회가 실패하거나 취소된 경우 발생합니다.
    원인 예외와 탐색 대상 클러스터 이름을 함께 담습니다.
    """

    def __init__(self, cluster_name: str, cause: Exception | None = None):
        super().__init__(f"subnet discovery failed for cluster {cluster_name}", cause)
        self.cluster_name = cluster_name
        self.details["cluster_name"] = cluster_name

        error_code = _client_error_code(cause)
        if error_code:
            self.details["error_code"] = error_code

    @property
    def error_code(self) -> str | None:
        """원인이 AWS ClientError인 경우 에러 코드"""
        return self.details.get("error_code")

    @property
    def cancelled(self) -> bool:
        """호출자 취소로 인한 실패인지 여부"""
        return isinstance(self.cause, DiscoveryCancelledError)


class DiscoveryCancelledError(AAError):
    """호출자가 조회를 취소한 경우 (페이지 사이에서 감지)"""

    def __init__(self, operation: str = "describe_subnets"):
        super().__init__(f"{operation} 취소됨")
        self.operation = operation
        self.details["operation"] = operation


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(AAError):
    """설정 값 오류"""

    def __init__(self, message: str, key: str | None = None, cause: Exception | None = None):
        super().__init__(message, cause)
        self.key = key
        if key:
            self.details["key"] = key


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "RateExceeded",
}

ACCESS_DENIED_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedOperation",
    "UnauthorizedAccess",
}


def _client_error_code(error: Exception | None) -> str | None:
    """botocore ClientError 형식의 response에서 에러 코드 추출"""
    if error is None or not hasattr(error, "response"):
        return None
    response = getattr(error, "response", None) or {}
    return response.get("Error", {}).get("Code") or None


def _error_code(error: Exception) -> str | None:
    if isinstance(error, DiscoveryFailure):
        return error.error_code
    return _client_error_code(error)


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인

    Args:
        error: DiscoveryFailure 또는 botocore ClientError

    Returns:
        스로틀링 오류이면 True
    """
    return _error_code(error) in THROTTLING_CODES


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: DiscoveryFailure 또는 botocore ClientError

    Returns:
        액세스 거부 오류이면 True
    """
    return _error_code(error) in ACCESS_DENIED_CODES
