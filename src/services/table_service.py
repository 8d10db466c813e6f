"""
Render contract for the table component.

Each table is an ordered list of view rows plus column descriptors
(key, header label, cell formatter). The table widget owns layout and
pagination; clicking a row hands ``row_identity(row)`` back to us.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence, Tuple

from models.enums import category_label, display_label
from models.filters import EntityType
from models.response import ColumnSpec
from services.predicate_service import field_value
from utils.validators import coerce_number, parse_timestamp


def format_text(value: Any) -> str:
    return "" if value is None else str(value)


def format_date(value: Any) -> str:
    """``2025-09-12T...`` -> ``9/12/2025``; ``-`` when missing or unparsable."""
    stamp = parse_timestamp(value)
    if stamp is None:
        return "-"
    return f"{stamp.month}/{stamp.day}/{stamp.year}"


def format_label(value: Any) -> str:
    if value == "-":
        return value
    return display_label(None if value is None else str(value))


def format_category(value: Any) -> str:
    return category_label(None if value is None else str(value))


def format_topics(value: Any, visible: int = 2) -> str:
    """First ``visible`` topics, then a ``+N`` overflow marker."""
    topics = [str(t) for t in value] if isinstance(value, (list, tuple)) else []
    shown = topics[:visible]
    if len(topics) > visible:
        shown.append(f"+{len(topics) - visible}")
    return ", ".join(shown)


def format_tags(value: Any) -> str:
    return ", ".join(str(t) for t in value) if isinstance(value, (list, tuple)) else ""


def format_duration(value: Any) -> str:
    minutes = coerce_number(value)
    return f"{round(minutes)}m" if minutes is not None else "-"


def format_currency(value: Any) -> str:
    """Revenue in thousands, e.g. ``$48K``."""
    amount = coerce_number(value)
    if amount is None:
        return "-"
    return f"${amount / 1000:.0f}K"


def format_count(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return str(len(value))
    number = coerce_number(value)
    return str(int(number)) if number is not None else "0"


@dataclass(frozen=True)
class ColumnDescriptor:
    key: str
    header: str
    format: Callable[[Any], str] = format_text
    # Row attribute read for this column, when it differs from ``key``.
    source: str = ""

    def render(self, row: Any) -> str:
        return self.format(field_value(row, self.source or self.key))

    def spec(self) -> ColumnSpec:
        return ColumnSpec(key=self.key, header=self.header)


INSIGHT_COLUMNS: Tuple[ColumnDescriptor, ...] = (
    ColumnDescriptor("customer_name", "Customer"),
    ColumnDescriptor("conversation_type", "Conversation", format_label),
    ColumnDescriptor("conversation_date", "Date", format_date),
    ColumnDescriptor("category", "Category", format_category),
    ColumnDescriptor("topics", "Topics", format_topics),
    ColumnDescriptor("text", "Insight"),
)

CONVERSATION_COLUMNS: Tuple[ColumnDescriptor, ...] = (
    ColumnDescriptor("customer_name", "Customer"),
    ColumnDescriptor("type", "Type", format_label),
    ColumnDescriptor("occurred_at", "Date", format_date),
    ColumnDescriptor("subject", "Subject"),
    ColumnDescriptor("duration_minutes", "Duration", format_duration),
    ColumnDescriptor("participants", "Participants", format_count),
    ColumnDescriptor("status", "Status", format_label),
    ColumnDescriptor("sentiment", "Sentiment", format_label),
    ColumnDescriptor("priority", "Priority", format_label),
    ColumnDescriptor("insight_count", "Insights", format_count),
    ColumnDescriptor("tags", "Tags", format_tags),
)

CUSTOMER_COLUMNS: Tuple[ColumnDescriptor, ...] = (
    ColumnDescriptor("name", "Customer"),
    ColumnDescriptor("contact_person", "Contact"),
    ColumnDescriptor("status", "Status", format_label),
    ColumnDescriptor("tier", "Plan", format_label),
    ColumnDescriptor("health", "Health", format_label),
    ColumnDescriptor("revenue", "Revenue", format_currency),
    ColumnDescriptor("location", "Location", source="location_display"),
    ColumnDescriptor("last_activity", "Last Activity", format_date),
    ColumnDescriptor("conversation_count", "Conversations", format_count),
    ColumnDescriptor("insight_count", "Insights", format_count),
)

# Compact table for the dashboard's recent-insights card.
RECENT_INSIGHT_COLUMNS: Tuple[ColumnDescriptor, ...] = (
    ColumnDescriptor("customer_name", "Customer"),
    ColumnDescriptor("conversation_type", "Type", format_label),
    ColumnDescriptor("conversation_date", "Date", format_date),
    ColumnDescriptor("category", "Category", format_category),
    ColumnDescriptor("text", "Insight"),
    ColumnDescriptor("topics", "Topics", format_topics),
)

COLUMNS: Dict[EntityType, Tuple[ColumnDescriptor, ...]] = {
    EntityType.CUSTOMERS: CUSTOMER_COLUMNS,
    EntityType.CONVERSATIONS: CONVERSATION_COLUMNS,
    EntityType.INSIGHTS: INSIGHT_COLUMNS,
}


def row_identity(row: Any) -> str:
    return str(field_value(row, "id"))


@dataclass
class TableView:
    rows: Sequence[Any]
    columns: Sequence[ColumnDescriptor]
    row_ids: List[str] = field(init=False)

    def __post_init__(self) -> None:
        self.row_ids = [row_identity(row) for row in self.rows]

    def cells(self) -> List[Dict[str, str]]:
        """Formatted cell text per row, keyed by column."""
        return [{column.key: column.render(row) for column in self.columns} for row in self.rows]

    def column_specs(self) -> List[ColumnSpec]:
        return [column.spec() for column in self.columns]

    def find(self, row_id: str) -> Any:
        """Row click handler: the row behind an identity, or None."""
        for identity, row in zip(self.row_ids, self.rows):
            if identity == row_id:
                return row
        return None


def highlight(text: str, terms: Sequence[str]) -> List[Tuple[str, bool]]:
    """
    Split ``text`` into ``(segment, is_match)`` pairs for search-term highlighting.

    Matching is case-insensitive; terms are treated literally.
    """
    cleaned = [term for term in terms if term]
    if not text or not cleaned:
        return [(text, False)] if text else []

    pattern = re.compile(
        "|".join(re.escape(term) for term in sorted(cleaned, key=len, reverse=True)),
        re.IGNORECASE,
    )
    segments: List[Tuple[str, bool]] = []
    cursor = 0
    for match in pattern.finditer(text):
        if match.start() > cursor:
            segments.append((text[cursor:match.start()], False))
        segments.append((match.group(0), True))
        cursor = match.end()
    if cursor < len(text):
        segments.append((text[cursor:], False))
    return segments
