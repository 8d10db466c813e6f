"""
Entity enrichment.

Joins raw customers, conversations and insights with their related records
to produce denormalized view rows. Dangling references resolve to sentinel
values ("Unknown", "-", zero counts); nothing here raises on missing data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from models.conversation import Conversation, ConversationRow
from models.customer import Customer, CustomerRow
from models.enums import health_bucket, sentiment_from_score
from models.insight import Insight, InsightRow

UNKNOWN_NAME = "Unknown"
MISSING = "-"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class Lookups:
    """Id-keyed maps of related records, plus the reverse indexes enrichment needs."""

    customers: Mapping[str, Customer] = field(default_factory=dict)
    conversations: Mapping[str, Conversation] = field(default_factory=dict)
    insights: Mapping[str, Insight] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._conversations_by_customer: Dict[str, List[Conversation]] = {}
        for conversation in self.conversations.values():
            if conversation.customer_id:
                self._conversations_by_customer.setdefault(conversation.customer_id, []).append(
                    conversation
                )

        self._insights_by_conversation: Dict[str, List[Insight]] = {}
        self._insight_owner: Dict[str, Optional[str]] = {}
        for insight in self.insights.values():
            if insight.conversation_id:
                self._insights_by_conversation.setdefault(insight.conversation_id, []).append(insight)
            self._insight_owner[insight.id] = self._owner_of(insight)

    @classmethod
    def from_records(
        cls,
        customers: Iterable[Customer] = (),
        conversations: Iterable[Conversation] = (),
        insights: Iterable[Insight] = (),
    ) -> "Lookups":
        return cls(
            customers={c.id: c for c in customers},
            conversations={c.id: c for c in conversations},
            insights={i.id: i for i in insights},
        )

    def customer(self, customer_id: Optional[str]) -> Optional[Customer]:
        return self.customers.get(customer_id) if customer_id else None

    def conversation(self, conversation_id: Optional[str]) -> Optional[Conversation]:
        return self.conversations.get(conversation_id) if conversation_id else None

    def conversations_for_customer(self, customer_id: str) -> List[Conversation]:
        return list(self._conversations_by_customer.get(customer_id, []))

    def insights_for_conversation(self, conversation_id: str) -> List[Insight]:
        return list(self._insights_by_conversation.get(conversation_id, []))

    def insights_for_customer(self, customer_id: str) -> List[Insight]:
        return [
            insight
            for insight in self.insights.values()
            if self._insight_owner.get(insight.id) == customer_id
        ]

    def _owner_of(self, insight: Insight) -> Optional[str]:
        """Direct customer reference wins over the conversation's owner."""
        if insight.customer_id:
            return insight.customer_id
        conversation = self.conversation(insight.conversation_id)
        return conversation.customer_id if conversation else None


def enrich_insight(insight: Insight, lookups: Lookups) -> InsightRow:
    """Attach customer and conversation display fields to an insight."""
    conversation = lookups.conversation(insight.conversation_id)
    customer_id = insight.customer_id or (conversation.customer_id if conversation else None)
    customer = lookups.customer(customer_id)

    conversation_date = MISSING
    if conversation and conversation.occurred_at:
        conversation_date = conversation.occurred_at.isoformat()

    return InsightRow.model_validate(
        {
            **insight.model_dump(),
            "customer_id": customer_id,
            "customer_name": (customer.name if customer and customer.name else UNKNOWN_NAME),
            "customer_industry": (customer.industry if customer and customer.industry else UNKNOWN_NAME),
            "conversation_type": (conversation.type if conversation and conversation.type else MISSING),
            "conversation_date": conversation_date,
        }
    )


def enrich_conversation(conversation: Conversation, lookups: Lookups) -> ConversationRow:
    """Attach customer fields, the insight count and a discrete sentiment label."""
    customer = lookups.customer(conversation.customer_id)
    data = conversation.model_dump()
    if not data.get("sentiment"):
        data["sentiment"] = sentiment_from_score(conversation.sentiment_score)

    return ConversationRow.model_validate(
        {
            **data,
            "customer_name": (customer.name if customer and customer.name else UNKNOWN_NAME),
            "customer_industry": (customer.industry if customer and customer.industry else UNKNOWN_NAME),
            "insight_count": len(lookups.insights_for_conversation(conversation.id)),
        }
    )


def enrich_customer(customer: Customer, lookups: Lookups) -> CustomerRow:
    """Attach conversation/insight counts and the most recent conversation type."""
    conversations = lookups.conversations_for_customer(customer.id)
    latest = max(
        conversations,
        key=lambda c: c.occurred_at or c.created_at or _EPOCH,
        default=None,
    )
    data = customer.model_dump()
    if not data.get("health"):
        data["health"] = health_bucket(customer.health_score)

    return CustomerRow.model_validate(
        {
            **data,
            "conversation_count": len(conversations),
            "insight_count": len(lookups.insights_for_customer(customer.id)),
            "last_conversation_type": latest.type if latest else None,
        }
    )


def enrich_insights(insights: Iterable[Insight], lookups: Lookups) -> List[InsightRow]:
    return [enrich_insight(insight, lookups) for insight in insights]


def enrich_conversations(
    conversations: Iterable[Conversation], lookups: Lookups
) -> List[ConversationRow]:
    return [enrich_conversation(conversation, lookups) for conversation in conversations]


def enrich_customers(customers: Iterable[Customer], lookups: Lookups) -> List[CustomerRow]:
    return [enrich_customer(customer, lookups) for customer in customers]
