"""
Pairwise change classification.

Every row of the history table comes from one pass over the version
sequence with a different value accessor. The sequence is treated as
preceded by a virtual absent version, so the first column is always
either NEW or NOT_PRESENT.
"""

from typing import Any, Callable, Optional, Sequence
from urllib.parse import quote

from .models import Cell, ChangeClass, ElementVersion

# Maps a version to a comparable value, or None when absent
Accessor = Callable[[ElementVersion], Any]

URL_PLACEHOLDER = "{val}"


def classify_change(previous: Any, current: Any) -> ChangeClass:
    """
    Classify the transition between two adjacent values.

    None means absent. Any other value, including 0, False and "",
    is present and compared by plain equality.

    Args:
        previous: Value in the preceding version
        current: Value in this version

    Returns:
        Change classification
    """
    if previous is None and current is None:
        return ChangeClass.NOT_PRESENT
    elif previous is None:
        return ChangeClass.NEW
    elif current is None:
        return ChangeClass.REMOVED
    elif previous != current:
        return ChangeClass.CHANGED
    else:
        return ChangeClass.UNCHANGED


def build_url(url_template: Optional[str], value: Any) -> Optional[str]:
    """Substitute a present value into a link template."""
    if not url_template or value is None:
        return None
    return url_template.replace(URL_PLACEHOLDER, quote(str(value), safe=""))


def change_row(
    versions: Sequence[ElementVersion],
    accessor: Accessor,
    url_template: Optional[str] = None
) -> list[Cell]:
    """
    Classify one attribute across a version sequence.

    Args:
        versions: Versions ordered oldest first (never re-sorted)
        accessor: Extracts the tracked value from a version
        url_template: Optional link template containing "{val}"

    Returns:
        One Cell per version

    Raises:
        ValueError: If versions is empty
    """
    if not versions:
        raise ValueError("versions cannot be empty")

    row: list[Cell] = []
    previous = None

    for version in versions:
        current = accessor(version)
        row.append(Cell(
            clz=classify_change(previous, current),
            val=current if current is not None else "",
            url=build_url(url_template, current),
        ))
        previous = current

    return row


def presence_row(
    versions: Sequence[ElementVersion],
    accessor: Accessor
) -> list[Cell]:
    """
    Classify a boolean presence flag across a version sequence.

    False is treated as absent, so the transitions map to
    NOT_PRESENT (false, false), NEW (false, true), REMOVED (true, false)
    and UNCHANGED (true, true).
    """
    return change_row(versions, lambda version: True if accessor(version) else None)
