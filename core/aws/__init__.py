"""
core/aws - AWS SDK 공통 헬퍼

주요 구성 요소:
- get_client: retry/타임아웃 설정이 적용된 boto3 client 생성
"""

from .client import build_config, get_client

__all__: list[str] = [
    "build_config",
    "get_client",
]
