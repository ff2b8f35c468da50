"""
Value accessors feeding the pairwise classifier.

Node and member accessors look values up in per-version indexes
built once per history, keyed by version number.
"""

from typing import Sequence

from .classifier import Accessor
from .models import ElementVersion, Member


def field_accessor(name: str) -> Accessor:
    """Read a plain attribute of a version."""
    return lambda version: getattr(version, name)


def tag_accessor(key: str) -> Accessor:
    """Read one tag value, None when the tag is missing."""
    return lambda version: version.tags.get(key)


def build_node_positions(
    versions: Sequence[ElementVersion]
) -> dict[int, dict[int, int]]:
    """
    Index the position of every node id in every version.

    Returns:
        version number -> {node id -> first zero-based position}
    """
    positions: dict[int, dict[int, int]] = {}
    for version in versions:
        index: dict[int, int] = {}
        for position, ref in enumerate(version.nodes or []):
            index.setdefault(ref, position)
        positions[version.version] = index
    return positions


def node_index_accessor(
    ref: int,
    positions: dict[int, dict[int, int]]
) -> Accessor:
    """
    Position of a node within a way version, None when not referenced.

    Position is part of the value: a node that moves within the way is
    reported as changed even if it was neither added nor removed.
    """
    return lambda version: positions[version.version].get(ref)


def build_member_sets(
    versions: Sequence[ElementVersion]
) -> dict[int, frozenset]:
    """
    Index the member keys held by every version.

    Returns:
        version number -> frozenset of Member.key tuples
    """
    return {
        version.version: frozenset(m.key for m in version.members or [])
        for version in versions
    }


def member_presence_accessor(
    member: Member,
    member_sets: dict[int, frozenset]
) -> Accessor:
    """Whether a relation version holds this exact member. Never None."""
    key = member.key
    return lambda version: key in member_sets[version.version]
