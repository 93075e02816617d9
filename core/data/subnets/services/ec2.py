"""
core/data/subnets/services/ec2.py - EC2 subnet inventory

Fetches every subnet tagged for a cluster through the describe_subnets
paginator. All pages are collected before returning so callers never see a
partial result.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from core.aws import get_client
from core.config import settings
from core.exceptions import DiscoveryCancelledError

from ..types import Subnet

if TYPE_CHECKING:
    from boto3 import Session


def cluster_tag_key(cluster_name: str, key_format: str | None = None) -> str:
    """Discovery filter tag key for a cluster

    >>> cluster_tag_key("prod")
    'kubernetes.io/cluster/prod'
    """
    return (key_format or settings.CLUSTER_TAG_KEY_FORMAT).format(cluster_name)


def collect_subnets(
    session: "Session",
    tag_key: str,
    region_name: str | None = None,
    cancel: threading.Event | None = None,
) -> list[Subnet]:
    """Collect subnets carrying ``tag_key``

    Args:
        session: Boto3 session
        tag_key: Tag key every returned subnet must carry
        region_name: AWS region (session default if None)
        cancel: Checked before each page; when set the call is abandoned

    Returns:
        List of Subnet objects in API order

    Raises:
        DiscoveryCancelledError: ``cancel`` was set mid-collection
        botocore.exceptions.ClientError / BotoCoreError: API failure
    """
    ec2 = get_client(session, "ec2", region_name=region_name)
    paginator = ec2.get_paginator("describe_subnets")

    subnets = []
    pages = paginator.paginate(Filters=[{"Name": "tag-key", "Values": [tag_key]}])
    for page in pages:
        if cancel is not None and cancel.is_set():
            raise DiscoveryCancelledError("describe_subnets")
        for data in page.get("Subnets", []):
            subnets.append(Subnet.from_api(data))

    return subnets


class EC2SubnetFetcher:
    """SubnetFetcher backed by the EC2 describe_subnets API"""

    def __init__(self, session: "Session", region_name: str | None = None):
        self._session = session
        self._region_name = region_name

    @property
    def region_name(self) -> str | None:
        return self._region_name or getattr(self._session, "region_name", None)

    def __call__(self, tag_key: str, cancel: threading.Event | None = None) -> list[Subnet]:
        return collect_subnets(self._session, tag_key, region_name=self._region_name, cancel=cancel)

    def __repr__(self) -> str:
        return f"EC2SubnetFetcher(region={self.region_name!r})"
