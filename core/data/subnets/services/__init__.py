"""
core/data/subnets/services - Inventory fetchers

Each service module provides the remote call that lists a cluster's subnets.
"""

from .ec2 import EC2SubnetFetcher, cluster_tag_key, collect_subnets

__all__ = [
    "EC2SubnetFetcher",
    "cluster_tag_key",
    "collect_subnets",
]
