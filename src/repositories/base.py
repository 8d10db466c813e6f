"""Data source contract shared by the PostgreSQL and in-memory backends."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError as ModelValidationError

from models.conversation import Conversation
from models.customer import Customer
from models.filters import EntityType, SearchMode
from models.insight import Insight
from models.query import QueryDescriptor
from models.stats import CategoryCount, TopicCount
from services.change_service import RECORD_MODELS
from services.filter_state import FilterState
from services.query_composer import compose
from utils.error_handling import ValidationError
from utils.logging_config import get_logger

logger = get_logger(__name__)


def to_models(entity: EntityType, records: List[Dict[str, Any]]) -> List[BaseModel]:
    """Validate raw records; records without a usable shape are logged and skipped."""
    model = RECORD_MODELS[entity]
    parsed: List[BaseModel] = []
    for record in records:
        try:
            parsed.append(model.model_validate(record))
        except ModelValidationError as exc:
            logger.warning(
                "Skipping malformed record",
                extra={"entity": entity.value, "record_id": record.get("id"), "error": str(exc)},
            )
    return parsed


class DataSource:
    """Backends implement ``run``, the vocabulary lists and id lookups."""

    def run(self, descriptor: QueryDescriptor) -> List[BaseModel]:
        raise NotImplementedError

    def fetch(
        self,
        entity: EntityType,
        state: Optional[FilterState] = None,
        mode: SearchMode = SearchMode.ANY,
        limit: Optional[int] = None,
    ) -> List[BaseModel]:
        """Compose ``state`` into a descriptor and execute it."""
        entity = EntityType(entity)
        state = state or FilterState.for_entity(entity)
        if state.entity is not entity:
            raise ValidationError(
                f"Filter state for {state.entity.value} cannot query {entity.value}"
            )
        return self.run(compose(state, mode=mode, limit=limit))

    def fetch_customers(self, state: Optional[FilterState] = None, **kwargs) -> List[Customer]:
        return self.fetch(EntityType.CUSTOMERS, state, **kwargs)

    def fetch_conversations(
        self, state: Optional[FilterState] = None, **kwargs
    ) -> List[Conversation]:
        return self.fetch(EntityType.CONVERSATIONS, state, **kwargs)

    def fetch_insights(self, state: Optional[FilterState] = None, **kwargs) -> List[Insight]:
        return self.fetch(EntityType.INSIGHTS, state, **kwargs)

    def list_categories(self) -> List[CategoryCount]:
        raise NotImplementedError

    def list_topics(self) -> List[TopicCount]:
        raise NotImplementedError

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        raise NotImplementedError

    def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        raise NotImplementedError
