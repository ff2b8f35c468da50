"""
Pydantic models for OSM element history diffs.

Versions are parsed straight from the OSM API history JSON; every
derived structure (cells, lines, matrix) is rebuilt per request.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ElementType(str, Enum):
    """OSM primitive kinds."""
    NODE = "node"
    WAY = "way"
    RELATION = "relation"


class ChangeClass(str, Enum):
    """How a value moved between two adjacent versions."""
    NOT_PRESENT = "notpresent"
    NEW = "new"
    REMOVED = "removed"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


class Member(BaseModel):
    """A relation member reference."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: ElementType = Field(description="Kind of the referenced element")
    ref: int = Field(description="Id of the referenced element")
    role: str = Field(default="", description="Member role, may be empty")

    @property
    def key(self) -> tuple[str, int, str]:
        """Canonical tuple used for structural equality."""
        return (self.type.value, self.ref, self.role)


class ElementVersion(BaseModel):
    """One historical snapshot of an OSM element."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: ElementType = Field(description="Element kind")
    id: int = Field(description="Element id")
    version: int = Field(..., gt=0, description="Version number")
    timestamp: str = Field(description="ISO 8601 edit timestamp")
    changeset: int = Field(description="Changeset id")
    user: Optional[str] = Field(default=None, description="Editor display name")
    uid: Optional[int] = Field(default=None, description="Editor user id")
    visible: bool = Field(
        default=True,
        description="False when this version deleted the element"
    )
    tags: dict[str, str] = Field(default_factory=dict)

    # Kind-specific content
    lat: Optional[float] = Field(default=None, description="Latitude (nodes)")
    lon: Optional[float] = Field(default=None, description="Longitude (nodes)")
    nodes: Optional[list[int]] = Field(default=None, description="Node refs (ways)")
    members: Optional[list[Member]] = Field(default=None, description="Members (relations)")


class Cell(BaseModel):
    """One classified value in a row."""

    clz: ChangeClass = Field(description="Change classification")
    val: Any = Field(
        default="",
        description="Display value, empty when absent"
    )
    url: Optional[str] = Field(default=None, description="Optional link")


class PropertyLine(BaseModel):
    """Row for a fixed element attribute."""

    name: str
    cells: list[Cell]


class TagLine(BaseModel):
    """Row for one tag key."""

    key: str
    cells: list[Cell]


class NodeLine(BaseModel):
    """Row for one way node reference."""

    ref: int
    cells: list[Cell]


class MemberLine(BaseModel):
    """Row for one relation member."""

    member: Member
    cells: list[Cell]


class HistoryMatrix(BaseModel):
    """Full classification table for one element history."""

    element_type: ElementType
    element_id: int
    versions: list[ElementVersion] = Field(
        description="Input versions, oldest first (column headers)"
    )
    properties: list[PropertyLine]
    tags: list[TagLine]
    nodes: Optional[list[NodeLine]] = Field(
        default=None,
        description="Node rows, ways only"
    )
    members: Optional[list[MemberLine]] = Field(
        default=None,
        description="Member rows, relations only"
    )
