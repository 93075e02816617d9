"""
core/aws/client.py - boto3 client 생성 헬퍼

Retry(adaptive 모드) + 타임아웃 + 연결 풀이 설정된 boto3 client를 생성합니다.
기본값은 core.config.settings에서 읽어옵니다.

Example:
    from core.aws import get_client

    # 기본 설정 (adaptive retry)
    ec2 = get_client(session, "ec2", region_name="ap-northeast-2")

    # 커스텀 설정
    ec2 = get_client(session, "ec2", max_attempts=10, connect_timeout=5)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, cast

from botocore.config import Config

from core.config import settings

if TYPE_CHECKING:
    import boto3

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

DEFAULT_RETRY_MODE: RetryMode = "adaptive"  # adaptive: 동적 조정, standard: 고정
DEFAULT_MAX_POOL_CONNECTIONS = 25  # 동시 조회 클러스터 수 이상 권장


def build_config(
    max_attempts: int | None = None,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int | None = None,
    read_timeout: int | None = None,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
) -> Config:
    """retry/타임아웃이 적용된 botocore Config 생성 (None이면 settings 값 사용)"""
    return Config(
        retries={
            "max_attempts": max_attempts if max_attempts is not None else settings.API_MAX_ATTEMPTS,
            "mode": retry_mode,
        },  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout if connect_timeout is not None else settings.API_CONNECT_TIMEOUT,
        read_timeout=read_timeout if read_timeout is not None else settings.API_READ_TIMEOUT,
        max_pool_connections=max_pool_connections,
    )


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int | None = None,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int | None = None,
    read_timeout: int | None = None,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (ec2 등)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최대 시도 횟수 (None이면 settings.API_MAX_ATTEMPTS)
        retry_mode: 재시도 모드 ('adaptive' 또는 'standard')
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        max_pool_connections: HTTP 연결 풀 크기
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    config = build_config(
        max_attempts=max_attempts,
        retry_mode=retry_mode,
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        max_pool_connections=max_pool_connections,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )
