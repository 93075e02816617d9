"""
core/data/subnets - Cluster subnet discovery with TTL caching

Resolves the subnets a cluster may place new nodes into. Discovered subnets
are cached per cluster for a fixed TTL so repeated resolutions do not hit the
EC2 API, then narrowed by name, tag key and zone constraints.

Classes:
    - SubnetProvider: Cache-or-fetch resolver with the filter chain
    - SubnetCache: Thread-safe TTL cache with background eviction
    - EC2SubnetFetcher: describe_subnets backed inventory fetcher

Usage:
    from core.data.subnets import Constraints, SubnetProvider

    provider = SubnetProvider.from_session(session, region_name="us-east-1")
    subnets = provider.get("prod", Constraints(tag_key="kubernetes.io/role/internal-elb"))

    # With a shared cache
    cache = SubnetCache(ttl_seconds=120)
    provider = SubnetProvider(fetcher, cache=cache)
"""

from .cache import CacheEntry, SubnetCache
from .filters import build_chain, by_name, by_tag_key, by_zones, filter_subnets, narrow
from .provider import SubnetProvider
from .services import EC2SubnetFetcher, cluster_tag_key, collect_subnets
from .types import Constraints, Subnet, SubnetFetcher, Tag

__all__ = [
    # Cache
    "CacheEntry",
    "SubnetCache",
    # Filters
    "build_chain",
    "by_name",
    "by_tag_key",
    "by_zones",
    "filter_subnets",
    "narrow",
    # Provider
    "SubnetProvider",
    # Services
    "EC2SubnetFetcher",
    "cluster_tag_key",
    "collect_subnets",
    # Types
    "Constraints",
    "Subnet",
    "SubnetFetcher",
    "Tag",
]
