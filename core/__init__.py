# core/__init__.py
"""
core - 클러스터 서브넷 탐색 인프라

아키텍처:
    core/
    ├── aws/            # boto3 client 헬퍼 (retry, 타임아웃)
    ├── data/subnets/   # 서브넷 캐시, 필터 체인, 탐색 provider
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 예외 계층

Usage:
    from core.data.subnets import Constraints, SubnetProvider
    from core.exceptions import DiscoveryFailure

    provider = SubnetProvider.from_session(session)
    try:
        subnets = provider.get("my-cluster", Constraints(zones=("ap-northeast-2a",)))
    except DiscoveryFailure as e:
        print(e)
"""
