"""
core/data/subnets/provider.py - Subnet resolver

Resolves the subnets eligible for a cluster's new nodes: the cluster's
tagged subnets come from the cache or, on a miss, from the inventory
fetcher, and are then narrowed by the caller's constraints.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from core.exceptions import DiscoveryCancelledError, DiscoveryFailure

from .cache import SubnetCache
from .filters import narrow
from .services.ec2 import EC2SubnetFetcher, cluster_tag_key
from .types import Constraints, Subnet, SubnetFetcher

if TYPE_CHECKING:
    from boto3 import Session

logger = logging.getLogger(__name__)


class SubnetProvider:
    """Cache-backed subnet resolver

    The provider keeps no state of its own between calls apart from the
    cache it owns or was given.

    Example:
        provider = SubnetProvider.from_session(session, region_name="us-east-1")

        # All subnets tagged for the cluster
        subnets = provider.get("prod")

        # Narrowed by zone
        subnets = provider.get("prod", Constraints(zones=("us-east-1a",)))

    Set ``coalesce=True`` to make concurrent misses for the same cluster
    share a single fetch instead of each calling the inventory API.
    """

    def __init__(
        self,
        fetcher: SubnetFetcher,
        cache: SubnetCache | None = None,
        coalesce: bool = False,
        tag_key_format: str | None = None,
    ):
        """Initialize provider

        Args:
            fetcher: Inventory call listing subnets for a discovery tag key
            cache: Optional SubnetCache (a private one is created if not provided)
            coalesce: Share one in-flight fetch per cluster
            tag_key_format: Override for settings.CLUSTER_TAG_KEY_FORMAT
        """
        self._fetcher = fetcher
        self._owns_cache = cache is None
        self._cache = cache if cache is not None else SubnetCache()
        self._coalesce = coalesce
        self._tag_key_format = tag_key_format
        self._inflight: dict[str, threading.Lock] = {}
        self._inflight_lock = threading.Lock()

    @classmethod
    def from_session(cls, session: "Session", region_name: str | None = None, **kwargs: Any) -> SubnetProvider:
        """Provider backed by EC2 describe_subnets for one region"""
        return cls(EC2SubnetFetcher(session, region_name=region_name), **kwargs)

    @property
    def cache(self) -> SubnetCache:
        return self._cache

    def get(
        self,
        cluster_name: str,
        constraints: Constraints | None = None,
        cancel: threading.Event | None = None,
    ) -> list[Subnet]:
        """Subnets eligible for ``cluster_name`` under ``constraints``

        Stages run in a fixed order (name, tag key, zones) and absent
        constraints are skipped, so empty constraints return the full
        discovered set in its original order.

        Args:
            cluster_name: Cluster name, used as the cache key
            constraints: Optional narrowing criteria
            cancel: Set to abort an in-progress fetch

        Returns:
            Matching subnets (possibly empty)

        Raises:
            DiscoveryFailure: The inventory fetch failed or was cancelled
        """
        subnets = self._get_subnets(cluster_name, cancel)
        return narrow(subnets, constraints)

    def invalidate(self, cluster_name: str | None = None) -> int:
        """Drop the cached subnets of one cluster, or of every cluster"""
        if cluster_name is None:
            return self._cache.invalidate()
        return 1 if self._cache.delete(cluster_name) else 0

    def close(self) -> None:
        """Stop the sweeper of a cache this provider created"""
        if self._owns_cache:
            self._cache.close()

    def __enter__(self) -> SubnetProvider:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # =========================================================================
    # Internal Methods
    # =========================================================================

    def _get_subnets(self, cluster_name: str, cancel: threading.Event | None) -> list[Subnet]:
        subnets, found = self._cache.get(cluster_name)
        if found:
            logger.debug("Subnet cache hit for cluster %s", cluster_name)
            return subnets

        if not self._coalesce:
            return self._fetch(cluster_name, cancel)

        with self._lock_for(cluster_name):
            # Another caller may have filled the cache while we waited
            subnets, found = self._cache.get(cluster_name)
            if found:
                return subnets
            return self._fetch(cluster_name, cancel)

    def _fetch(self, cluster_name: str, cancel: threading.Event | None) -> list[Subnet]:
        logger.debug("Subnet cache miss for cluster %s", cluster_name)
        tag_key = cluster_tag_key(cluster_name, self._tag_key_format)
        try:
            if cancel is not None and cancel.is_set():
                raise DiscoveryCancelledError("describe_subnets")
            subnets = self._fetcher(tag_key, cancel=cancel)
        except DiscoveryFailure:
            raise
        except Exception as e:
            logger.warning("Describing subnets for cluster %s failed: %s", cluster_name, e)
            raise DiscoveryFailure(cluster_name, cause=e) from e

        logger.debug("Successfully discovered %d subnets for cluster %s", len(subnets), cluster_name)
        self._cache.set(cluster_name, subnets)
        return subnets

    def _lock_for(self, cluster_name: str) -> threading.Lock:
        with self._inflight_lock:
            lock = self._inflight.get(cluster_name)
            if lock is None:
                lock = self._inflight[cluster_name] = threading.Lock()
            return lock

    def __repr__(self) -> str:
        return f"SubnetProvider(fetcher={self._fetcher!r}, cache={self._cache!r}, coalesce={self._coalesce})"
