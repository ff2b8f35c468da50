"""
Row key discovery.

Keys are collected across the whole history in first-seen order,
scanning versions oldest to newest. Membership uses a hash set of a
canonical key, so large relations stay linear.
"""

from typing import Callable, Hashable, Iterable, Optional, Sequence, TypeVar

from .models import ElementVersion, Member

K = TypeVar("K")


def first_seen(
    versions: Sequence[ElementVersion],
    extract: Callable[[ElementVersion], Iterable[K]],
    key: Optional[Callable[[K], Hashable]] = None
) -> list[K]:
    """
    Collect distinct items across versions in first-seen order.

    Args:
        versions: Versions ordered oldest first
        extract: Yields the candidate items of one version
        key: Identity rule; items with equal keys are the same item.
            Defaults to the item itself.

    Returns:
        Deduplicated items, first occurrence kept
    """
    seen: set[Hashable] = set()
    collected: list[K] = []

    for version in versions:
        for item in extract(version):
            identity = key(item) if key is not None else item
            if identity not in seen:
                seen.add(identity)
                collected.append(item)

    return collected


def collect_tag_keys(versions: Sequence[ElementVersion]) -> list[str]:
    """
    All tag keys ever used, in first-seen order.

    Keys first appearing in the same version are sorted, so the
    result never depends on mapping iteration order.
    """
    return first_seen(versions, lambda v: sorted(v.tags))


def collect_node_refs(versions: Sequence[ElementVersion]) -> list[int]:
    """All node ids ever referenced by a way."""
    return first_seen(versions, lambda v: v.nodes or [])


def collect_members(versions: Sequence[ElementVersion]) -> list[Member]:
    """All distinct (type, ref, role) members ever held by a relation."""
    return first_seen(versions, lambda v: v.members or [], key=lambda m: m.key)
