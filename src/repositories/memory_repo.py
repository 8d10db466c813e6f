"""In-memory data source.

Evaluates query descriptors in Python against held records. Used for local
runs (seeded from ``sample_data``) and in tests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from models.conversation import Conversation
from models.customer import Customer
from models.filters import EntityType
from models.query import QueryDescriptor
from models.stats import CategoryCount, TopicCount
from repositories import sample_data
from repositories.base import DataSource, to_models
from services.predicate_service import field_value, matches_descriptor
from services.stats_service import category_counts, topic_counts
from utils.logging_config import get_logger

logger = get_logger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryDataSource(DataSource):
    """Holds validated records per entity."""

    def __init__(
        self,
        customers: Iterable[Any] = (),
        conversations: Iterable[Any] = (),
        insights: Iterable[Any] = (),
    ):
        self._records: Dict[EntityType, List[BaseModel]] = {
            EntityType.CUSTOMERS: self._load(EntityType.CUSTOMERS, customers),
            EntityType.CONVERSATIONS: self._load(EntityType.CONVERSATIONS, conversations),
            EntityType.INSIGHTS: self._load(EntityType.INSIGHTS, insights),
        }

    @classmethod
    def with_sample_data(cls) -> "InMemoryDataSource":
        return cls(
            customers=sample_data.CUSTOMERS,
            conversations=sample_data.CONVERSATIONS,
            insights=sample_data.INSIGHTS,
        )

    @staticmethod
    def _load(entity: EntityType, records: Iterable[Any]) -> List[BaseModel]:
        loaded: List[BaseModel] = []
        for record in records:
            if isinstance(record, BaseModel):
                loaded.append(record)
            else:
                loaded.extend(to_models(entity, [record]))
        return loaded

    def run(self, descriptor: QueryDescriptor) -> List[BaseModel]:
        records = self._records[EntityType(descriptor.entity)]
        selected = [record for record in records if matches_descriptor(record, descriptor)]
        selected.sort(
            key=lambda record: (
                field_value(record, descriptor.order_by) is not None,
                field_value(record, descriptor.order_by) or _EPOCH,
            ),
            reverse=descriptor.descending,
        )
        if descriptor.limit is not None:
            selected = selected[: descriptor.limit]
        logger.debug(
            "In-memory query executed",
            extra={"entity": descriptor.entity, "matched": len(selected)},
        )
        return selected

    def list_categories(self) -> List[CategoryCount]:
        return category_counts(self._records[EntityType.INSIGHTS])

    def list_topics(self) -> List[TopicCount]:
        return topic_counts(self._records[EntityType.INSIGHTS])

    def _by_id(self, entity: EntityType, record_id: str) -> Optional[BaseModel]:
        for record in self._records[entity]:
            if field_value(record, "id") == record_id:
                return record
        return None

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self._by_id(EntityType.CUSTOMERS, customer_id)

    def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        return self._by_id(EntityType.CONVERSATIONS, conversation_id)
