"""
OSM Element History Engine

Deterministic per-version change classification for the attributes,
tags, way nodes and relation members of one OSM element.
"""

__version__ = "0.1.0"

from .classifier import change_row, classify_change, presence_row
from .matrix import build_history_matrix
from .models import (
    Cell,
    ChangeClass,
    ElementType,
    ElementVersion,
    HistoryMatrix,
    Member,
    MemberLine,
    NodeLine,
    PropertyLine,
    TagLine,
)

__all__ = [
    "__version__",
    "build_history_matrix",
    "change_row",
    "classify_change",
    "presence_row",
    "Cell",
    "ChangeClass",
    "ElementType",
    "ElementVersion",
    "HistoryMatrix",
    "Member",
    "MemberLine",
    "NodeLine",
    "PropertyLine",
    "TagLine",
]
