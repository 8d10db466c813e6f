"""Filter vocabulary: entity types, dimensions and search semantics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class EntityType(str, Enum):
    CUSTOMERS = "customers"
    CONVERSATIONS = "conversations"
    INSIGHTS = "insights"


class Dimension(str, Enum):
    """Discrete filter dimensions; the value is the row field compared."""

    TYPE = "type"
    STATUS = "status"
    TIER = "tier"
    HEALTH = "health"
    SIZE = "size"
    CATEGORY = "category"
    PRIORITY = "priority"
    SENTIMENT = "sentiment"
    INDUSTRY = "industry"


class SearchMode(str, Enum):
    """How several search terms combine.

    ALL: every term must appear somewhere in the row's searchable text.
    ANY: a row matches when any term appears in the text field or equals
    one of its topics.
    """

    ALL = "all"
    ANY = "any"


@dataclass(frozen=True)
class EntityConfig:
    """Per-entity wiring between filter state, rows and backend columns."""

    entity: EntityType
    table: str
    dimensions: Tuple[Dimension, ...]
    # Row attribute holding the timestamp used by date bounds (client side).
    date_field: str
    # Backend column used by date bounds (server side).
    date_column: str
    # Backend columns searched by a single term; several columns are OR-ed.
    text_columns: Tuple[str, ...]
    topics_column: Optional[str] = None
    scopes: Tuple[str, ...] = ()


ENTITY_CONFIGS: Dict[EntityType, EntityConfig] = {
    EntityType.CUSTOMERS: EntityConfig(
        entity=EntityType.CUSTOMERS,
        table="customers",
        dimensions=(
            Dimension.STATUS,
            Dimension.TIER,
            Dimension.HEALTH,
            Dimension.SIZE,
            Dimension.INDUSTRY,
        ),
        date_field="last_activity",
        date_column="last_activity",
        text_columns=("name",),
        topics_column="tags",
    ),
    EntityType.CONVERSATIONS: EntityConfig(
        entity=EntityType.CONVERSATIONS,
        table="conversations",
        dimensions=(
            Dimension.TYPE,
            Dimension.STATUS,
            Dimension.SENTIMENT,
            Dimension.PRIORITY,
        ),
        date_field="occurred_at",
        date_column="occurred_at",
        text_columns=("subject", "summary"),
        topics_column="tags",
        scopes=("customer_id",),
    ),
    EntityType.INSIGHTS: EntityConfig(
        entity=EntityType.INSIGHTS,
        table="insights",
        dimensions=(Dimension.CATEGORY,),
        date_field="conversation_date",
        # Stored insights carry no conversation date.
        date_column="created_at",
        text_columns=("text",),
        topics_column="topics",
        scopes=("customer_id", "conversation_id"),
    ),
}

# Chip prefixes shown for active filters.
DIMENSION_LABELS: Dict[Dimension, str] = {
    dimension: dimension.value.title() for dimension in Dimension
}


def entity_config(entity: EntityType) -> EntityConfig:
    return ENTITY_CONFIGS[EntityType(entity)]
