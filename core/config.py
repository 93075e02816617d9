"""
core/config.py - 전역 설정

서브넷 탐색에 사용되는 프로세스 전역 설정을 정의합니다.
모든 값은 임포트 시점에 환경변수에서 한 번만 읽어 불변(frozen) 데이터클래스로 고정합니다.

환경변수:
    SUBNET_CACHE_TTL_SECONDS: 캐시 항목 유효기간 (기본 60초)
    SUBNET_CACHE_CLEANUP_INTERVAL_SECONDS: 만료 항목 정리 주기 (기본 600초)
    SUBNET_CLUSTER_TAG_KEY_FORMAT: 클러스터 태그 키 형식 (기본 "kubernetes.io/cluster/{}")
    SUBNET_API_CONNECT_TIMEOUT / SUBNET_API_READ_TIMEOUT / SUBNET_API_MAX_ATTEMPTS
    SUBNET_LOG_LEVEL / SUBNET_LOG_FORMAT

Usage:
    from core.config import settings

    ttl = settings.CACHE_TTL_SECONDS
    tag_key = settings.CLUSTER_TAG_KEY_FORMAT.format("my-cluster")
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from core.exceptions import ConfigError

# =============================================================================
# 환경변수 헬퍼
# =============================================================================

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경변수를 bool로 변환 (인식 불가 값이면 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default

    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 변환 (변환 실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_env_float(name: str, default: float) -> float:
    """환경변수를 float로 변환 (변환 실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_default_profile() -> str | None:
    """AWS_PROFILE → AWS_DEFAULT_PROFILE 순서로 프로파일 조회"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE")


def get_default_region() -> str:
    """AWS_REGION → AWS_DEFAULT_REGION → 설정 기본값 순서로 리전 조회"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


# =============================================================================
# 설정
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """프로세스 전역 설정 (불변)

    Attributes:
        DEFAULT_REGION: 리전 미지정 시 사용할 기본 리전
        CACHE_TTL_SECONDS: 서브넷 캐시 항목 유효기간
        CACHE_CLEANUP_INTERVAL_SECONDS: 백그라운드 만료 정리 주기
        CLUSTER_TAG_KEY_FORMAT: 클러스터 이름을 넣어 탐색 필터 태그 키를 만드는 형식
        API_CONNECT_TIMEOUT: AWS API 연결 타임아웃 (초)
        API_READ_TIMEOUT: AWS API 읽기 타임아웃 (초)
        API_MAX_ATTEMPTS: AWS API 최대 시도 횟수
    """

    DEFAULT_REGION: str = "ap-northeast-2"

    # 캐시
    CACHE_TTL_SECONDS: float = field(default_factory=lambda: get_env_float("SUBNET_CACHE_TTL_SECONDS", 60.0))
    CACHE_CLEANUP_INTERVAL_SECONDS: float = field(
        default_factory=lambda: get_env_float("SUBNET_CACHE_CLEANUP_INTERVAL_SECONDS", 600.0)
    )

    # 탐색
    CLUSTER_TAG_KEY_FORMAT: str = field(
        default_factory=lambda: os.environ.get("SUBNET_CLUSTER_TAG_KEY_FORMAT", "kubernetes.io/cluster/{}")
    )

    # AWS API
    API_CONNECT_TIMEOUT: int = field(default_factory=lambda: get_env_int("SUBNET_API_CONNECT_TIMEOUT", 10))
    API_READ_TIMEOUT: int = field(default_factory=lambda: get_env_int("SUBNET_API_READ_TIMEOUT", 30))
    API_MAX_ATTEMPTS: int = field(default_factory=lambda: get_env_int("SUBNET_API_MAX_ATTEMPTS", 5))

    def __post_init__(self):
        if self.CACHE_TTL_SECONDS <= 0:
            raise ConfigError("CACHE_TTL_SECONDS는 0보다 커야 합니다", key="SUBNET_CACHE_TTL_SECONDS")
        if self.CACHE_CLEANUP_INTERVAL_SECONDS <= 0:
            raise ConfigError(
                "CACHE_CLEANUP_INTERVAL_SECONDS는 0보다 커야 합니다",
                key="SUBNET_CACHE_CLEANUP_INTERVAL_SECONDS",
            )
        if "{}" not in self.CLUSTER_TAG_KEY_FORMAT:
            raise ConfigError(
                "CLUSTER_TAG_KEY_FORMAT에는 '{}' 자리표시자가 있어야 합니다",
                key="SUBNET_CLUSTER_TAG_KEY_FORMAT",
            )


@dataclass
class LogConfig:
    """로깅 설정"""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """SUBNET_LOG_LEVEL / SUBNET_LOG_FORMAT 환경변수에서 로드"""
        default = cls()
        return cls(
            level=os.environ.get("SUBNET_LOG_LEVEL", default.level).upper(),
            format=os.environ.get("SUBNET_LOG_FORMAT", default.format),
        )


# =============================================================================
# 프로젝트 정보
# =============================================================================


def get_project_root() -> Path:
    """프로젝트 루트 경로"""
    return Path(__file__).resolve().parent.parent


def get_version() -> str:
    """version.txt에서 버전 문자열 반환 (없으면 0.0.0)"""
    version_file = get_project_root() / "version.txt"
    try:
        return version_file.read_text(encoding="utf-8").strip() or "0.0.0"
    except OSError:
        return "0.0.0"


# 전역 설정 인스턴스
settings = Settings()
