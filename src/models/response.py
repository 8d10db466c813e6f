"""Common response wrappers."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ColumnSpec(BaseModel):
    """Serializable part of a column descriptor (the formatter stays server-side)."""

    key: str
    header: str


class ActiveFilter(BaseModel):
    """One removable filter chip."""

    key: str
    label: str


class TableResponse(BaseModel):
    """Payload handed to the table-rendering client.

    ``status`` is ``ready`` for rows, ``empty`` when nothing matches and
    ``failed`` when the data source could not be reached.
    """

    entity: str
    status: str
    message: Optional[str] = None
    columns: List[ColumnSpec] = Field(default_factory=list)
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    cells: List[Dict[str, str]] = Field(default_factory=list)
    total: int = 0
    shown: int = 0
    stats: Optional[Dict[str, Any]] = None
    active_filters: List[ActiveFilter] = Field(default_factory=list)
    # Search-term highlight segments for each row's primary text, keyed by row id.
    highlights: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)
    filter_mode: str = "client"
    correlation_id: Optional[str] = None
