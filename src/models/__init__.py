"""Pydantic models for records, view rows and API payloads."""

from models.change import ChangeEvent, ChangeType  # noqa: F401
from models.conversation import Conversation, ConversationRow, Participant  # noqa: F401
from models.customer import Customer, CustomerRow  # noqa: F401
from models.enums import (  # noqa: F401
    ConversationStatus,
    ConversationType,
    CustomerSize,
    CustomerStatus,
    CustomerTier,
    Direction,
    HealthBucket,
    InsightCategory,
    Priority,
    Sentiment,
)
from models.filters import Dimension, EntityType, SearchMode  # noqa: F401
from models.insight import Insight, InsightRow  # noqa: F401
from models.query import QueryDescriptor  # noqa: F401
from models.response import ActiveFilter, ColumnSpec, TableResponse  # noqa: F401
from models.stats import (  # noqa: F401
    ConversationStats,
    CustomerStats,
    DashboardKpis,
    InsightStats,
    Stats,
)
