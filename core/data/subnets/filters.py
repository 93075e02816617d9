"""
core/data/subnets/filters.py - Subnet filter chain

Predicates over a single Subnet and an order-preserving narrowing function.
None of these raise; an unmatched constraint yields an empty list.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .types import NAME_TAG_KEY, Constraints, Subnet

SubnetPredicate = Callable[[Subnet], bool]


def by_name(name: str) -> SubnetPredicate:
    """Match subnets whose Name tag equals ``name``

    When a subnet carries several Name tags only the first one is compared;
    later duplicates are ignored even if one of them would match.
    """

    def predicate(subnet: Subnet) -> bool:
        for tag in subnet.tags:
            if tag.key == NAME_TAG_KEY:
                return tag.value == name
        return False

    return predicate


def by_tag_key(tag_key: str) -> SubnetPredicate:
    """Match subnets carrying ``tag_key`` with any value"""

    def predicate(subnet: Subnet) -> bool:
        return subnet.has_tag_key(tag_key)

    return predicate


def by_zones(zones: Iterable[str]) -> SubnetPredicate:
    """Match subnets located in one of ``zones``"""
    zone_set = frozenset(zones)

    def predicate(subnet: Subnet) -> bool:
        return subnet.availability_zone in zone_set

    return predicate


def filter_subnets(predicate: SubnetPredicate, subnets: Iterable[Subnet]) -> list[Subnet]:
    return [subnet for subnet in subnets if predicate(subnet)]


def build_chain(constraints: Constraints) -> list[SubnetPredicate]:
    """Predicates for the present constraints, in name, tag key, zone order"""
    chain: list[SubnetPredicate] = []
    if constraints.name is not None:
        chain.append(by_name(constraints.name))
    if constraints.tag_key is not None:
        chain.append(by_tag_key(constraints.tag_key))
    if constraints.zones:
        chain.append(by_zones(constraints.zones))
    return chain


def narrow(subnets: Iterable[Subnet], constraints: Constraints | None) -> list[Subnet]:
    """Apply every present constraint in turn

    Each stage only sees the previous stage's output, so the result is the
    intersection of all matching predicates in the original order.
    """
    result = list(subnets)
    if constraints is None:
        return result
    for predicate in build_chain(constraints):
        result = filter_subnets(predicate, result)
    return result
