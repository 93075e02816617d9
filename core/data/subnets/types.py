"""
core/data/subnets/types.py - Subnet discovery dataclasses

Tag, Subnet and Constraints value types plus the SubnetFetcher protocol
consumed by the provider.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

NAME_TAG_KEY = "Name"

# Node label keys that carry subnet constraints
SUBNET_NAME_LABEL = "kubernetes.amazonaws.com/subnet-name"
SUBNET_TAG_KEY_LABEL = "kubernetes.amazonaws.com/subnet-tag-key"
ZONE_LABEL = "topology.kubernetes.io/zone"


@dataclass(frozen=True)
class Tag:
    """Single key/value tag"""

    key: str
    value: str = ""

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Tag:
        return cls(key=data.get("Key", ""), value=data.get("Value", ""))


@dataclass(frozen=True)
class Subnet:
    """VPC subnet as returned by describe_subnets

    Tags keep the order EC2 returned them in. Keys are not guaranteed to be
    unique; ``name`` follows the first ``Name`` tag.
    """

    subnet_id: str
    availability_zone: str
    tags: tuple[Tag, ...] = ()
    vpc_id: str = ""
    cidr_block: str = ""
    state: str = ""
    available_ip_count: int = 0

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Subnet:
        """Build from a single element of the ``Subnets`` response list"""
        return cls(
            subnet_id=data["SubnetId"],
            availability_zone=data.get("AvailabilityZone", ""),
            tags=tuple(Tag.from_api(tag) for tag in data.get("Tags") or []),
            vpc_id=data.get("VpcId", ""),
            cidr_block=data.get("CidrBlock", ""),
            state=data.get("State", ""),
            available_ip_count=data.get("AvailableIpAddressCount", 0),
        )

    @property
    def name(self) -> str:
        for tag in self.tags:
            if tag.key == NAME_TAG_KEY:
                return tag.value
        return ""

    def has_tag_key(self, key: str) -> bool:
        return any(tag.key == key for tag in self.tags)

    def tag_dict(self) -> dict[str, str]:
        """Dict view of the tags (first occurrence of a key wins)"""
        result: dict[str, str] = {}
        for tag in self.tags:
            result.setdefault(tag.key, tag.value)
        return result


@dataclass(frozen=True)
class Constraints:
    """Caller-supplied narrowing criteria

    ``None`` means "do not filter on this dimension" and is distinct from an
    empty string. An empty ``zones`` tuple applies no zone restriction.
    """

    name: str | None = None
    tag_key: str | None = None
    zones: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable of zones but store an immutable tuple
        if not isinstance(self.zones, tuple):
            object.__setattr__(self, "zones", tuple(self.zones))

    @classmethod
    def from_labels(cls, labels: Mapping[str, str]) -> Constraints:
        """Build constraints from node-label style keys

        The zone label may hold a single zone or a comma-separated list.
        """
        zones: Iterable[str] = ()
        if labels.get(ZONE_LABEL):
            zones = (zone.strip() for zone in labels[ZONE_LABEL].split(",") if zone.strip())
        return cls(
            name=labels.get(SUBNET_NAME_LABEL),
            tag_key=labels.get(SUBNET_TAG_KEY_LABEL),
            zones=tuple(zones),
        )

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.tag_key is None and not self.zones


class SubnetFetcher(Protocol):
    """Inventory call returning every subnet tagged with ``tag_key``

    Must either return the complete list or raise. When ``cancel`` is set the
    call aborts with DiscoveryCancelledError.
    """

    def __call__(self, tag_key: str, cancel: threading.Event | None = None) -> list[Subnet]: ...
