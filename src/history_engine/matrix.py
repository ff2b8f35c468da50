"""
History matrix assembly.

Orchestrates row construction for one element history:
    1. Fixed property rows (per element kind)
    2. Tag rows, one per key ever used
    3. Node rows (ways) or member rows (relations)
"""

from typing import Sequence

from .accessors import (
    build_member_sets,
    build_node_positions,
    field_accessor,
    member_presence_accessor,
    node_index_accessor,
    tag_accessor,
)
from .aggregator import collect_members, collect_node_refs, collect_tag_keys
from .classifier import change_row, presence_row
from .models import (
    ElementType,
    ElementVersion,
    HistoryMatrix,
    MemberLine,
    NodeLine,
    PropertyLine,
    TagLine,
)

DEFAULT_USER_URL_TEMPLATE = "https://osm.org/user/{val}"
DEFAULT_CHANGESET_URL_TEMPLATE = "https://osm.org/changeset/{val}"


def property_lines(
    versions: Sequence[ElementVersion],
    user_url_template: str = DEFAULT_USER_URL_TEMPLATE,
    changeset_url_template: str = DEFAULT_CHANGESET_URL_TEMPLATE
) -> list[PropertyLine]:
    """Rows for the fixed attributes of the element kind."""
    lines = [
        PropertyLine(
            name="User",
            cells=change_row(versions, field_accessor("user"), user_url_template)
        ),
        PropertyLine(name="Visible", cells=change_row(versions, field_accessor("visible"))),
        PropertyLine(
            name="Changeset",
            cells=change_row(versions, field_accessor("changeset"), changeset_url_template)
        ),
    ]

    if versions[0].type == ElementType.NODE:
        lines.append(PropertyLine(name="Lat", cells=change_row(versions, field_accessor("lat"))))
        lines.append(PropertyLine(name="Lon", cells=change_row(versions, field_accessor("lon"))))

    return lines


def tag_lines(versions: Sequence[ElementVersion]) -> list[TagLine]:
    return [
        TagLine(key=key, cells=change_row(versions, tag_accessor(key)))
        for key in collect_tag_keys(versions)
    ]


def node_lines(versions: Sequence[ElementVersion]) -> list[NodeLine]:
    positions = build_node_positions(versions)
    return [
        NodeLine(ref=ref, cells=change_row(versions, node_index_accessor(ref, positions)))
        for ref in collect_node_refs(versions)
    ]


def member_lines(versions: Sequence[ElementVersion]) -> list[MemberLine]:
    member_sets = build_member_sets(versions)
    return [
        MemberLine(
            member=member,
            cells=presence_row(versions, member_presence_accessor(member, member_sets))
        )
        for member in collect_members(versions)
    ]


def build_history_matrix(
    versions: Sequence[ElementVersion],
    user_url_template: str = DEFAULT_USER_URL_TEMPLATE,
    changeset_url_template: str = DEFAULT_CHANGESET_URL_TEMPLATE
) -> HistoryMatrix:
    """
    Build the complete change matrix for one element history.

    This is the main entry point of the engine. It is pure: the
    same versions always produce an identical matrix, and nothing
    is kept between calls.

    Args:
        versions: Non-empty version list, ascending by version number.
            The element kind is taken from the first version.
        user_url_template: Link template for the User row
        changeset_url_template: Link template for the Changeset row

    Returns:
        HistoryMatrix with one cell per version in every row

    Raises:
        ValueError: If versions is empty

    Example:
        >>> matrix = build_history_matrix(versions)
        >>> for line in matrix.tags:
        ...     print(line.key, [cell.clz.value for cell in line.cells])
    """
    if not versions:
        raise ValueError("versions cannot be empty")

    element_type = versions[0].type

    return HistoryMatrix(
        element_type=element_type,
        element_id=versions[0].id,
        versions=list(versions),
        properties=property_lines(versions, user_url_template, changeset_url_template),
        tags=tag_lines(versions),
        nodes=node_lines(versions) if element_type == ElementType.WAY else None,
        members=member_lines(versions) if element_type == ElementType.RELATION else None,
    )
