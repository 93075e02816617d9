"""
core/data - Data Services Layer

Modules:
    - subnets: Cluster subnet discovery and caching

Usage:
    from core.data.subnets import SubnetProvider, SubnetCache
"""

from .subnets import Constraints, SubnetCache, SubnetProvider

__all__ = [
    "Constraints",
    "SubnetCache",
    "SubnetProvider",
]
