"""
Predicates for PathCache.filter.

Channel-level predicates hold for a path when at least one of its channels
matches. Combine them with all_of / any_of / negate.
"""
from __future__ import annotations

from typing import Callable, Optional

from chain_registry.domain.models import Channel, PathRecord
from chain_registry.domain.path_cache import PathPredicate

ChannelPredicate = Callable[[Channel], bool]


def any_channel(channel_predicate: ChannelPredicate) -> PathPredicate:
    def predicate(record: PathRecord) -> bool:
        return any(channel_predicate(channel) for channel in record.channels)

    return predicate


def with_status(status: str) -> PathPredicate:
    """Paths with a channel tagged with ``status`` (e.g. "live")."""
    return any_channel(lambda channel: channel.tags.status == status)


def with_dex(dex: str) -> PathPredicate:
    return any_channel(lambda channel: channel.tags.dex == dex)


def with_properties(properties: str) -> PathPredicate:
    return any_channel(lambda channel: channel.tags.properties == properties)


def preferred(value: bool = True) -> PathPredicate:
    return any_channel(lambda channel: channel.tags.preferred is value)


def with_port(port_id: str) -> PathPredicate:
    """Paths with a channel bound to ``port_id`` on either side."""
    return any_channel(
        lambda channel: port_id in (channel.chain_1.port_id, channel.chain_2.port_id)
    )


def with_tag(
    dex: Optional[str] = None,
    preferred: Optional[bool] = None,
    properties: Optional[str] = None,
    status: Optional[str] = None,
) -> PathPredicate:
    """
    Paths with a single channel matching every given tag value.

    Tags left as None are not checked.
    """

    def channel_matches(channel: Channel) -> bool:
        tags = channel.tags
        if dex is not None and tags.dex != dex:
            return False
        if preferred is not None and tags.preferred is not preferred:
            return False
        if properties is not None and tags.properties != properties:
            return False
        if status is not None and tags.status != status:
            return False
        return True

    return any_channel(channel_matches)


def involving(chain_name: str) -> PathPredicate:
    return lambda record: record.involves(chain_name)


def min_channels(count: int) -> PathPredicate:
    return lambda record: len(record.channels) >= count


def all_of(*predicates: PathPredicate) -> PathPredicate:
    return lambda record: all(predicate(record) for predicate in predicates)


def any_of(*predicates: PathPredicate) -> PathPredicate:
    return lambda record: any(predicate(record) for predicate in predicates)


def negate(predicate: PathPredicate) -> PathPredicate:
    return lambda record: not predicate(record)
