"""Insight models."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from models.enums import category_from_label, category_label
from utils.validators import coerce_number, parse_timestamp

URGENCY_SCALE = 10.0


class Insight(BaseModel):
    """Categorized observation extracted from a conversation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    conversation_id: Optional[str] = None
    customer_id: Optional[str] = None
    category: Optional[str] = None
    text: str = ""
    topics: List[str] = Field(default_factory=list)
    confidence_score: Optional[float] = Field(default=None, ge=0, le=1)
    urgency_score: Optional[float] = Field(default=None, ge=0, le=URGENCY_SCALE)
    sentiment_score: Optional[float] = None
    potential_revenue: Optional[float] = Field(default=None, ge=0)
    created_at: Optional[datetime] = None

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> Optional[str]:
        return category_from_label(value)

    @field_validator("text", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("topics", mode="before")
    @classmethod
    def _topics(cls, value: Any) -> List[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [str(topic) for topic in value if topic]

    @field_validator("confidence_score", mode="before")
    @classmethod
    def _confidence(cls, value: Any) -> Optional[float]:
        score = coerce_number(value)
        return score if score is not None and 0 <= score <= 1 else None

    @field_validator("urgency_score", mode="before")
    @classmethod
    def _urgency(cls, value: Any) -> Optional[float]:
        score = coerce_number(value)
        return score if score is not None and 0 <= score <= URGENCY_SCALE else None

    @field_validator("sentiment_score", mode="before")
    @classmethod
    def _sentiment(cls, value: Any) -> Optional[float]:
        return coerce_number(value)

    @field_validator("potential_revenue", mode="before")
    @classmethod
    def _revenue(cls, value: Any) -> Optional[float]:
        amount = coerce_number(value)
        return amount if amount is not None and amount >= 0 else None

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @computed_field
    @property
    def category_label(self) -> str:
        return category_label(self.category)


class InsightRow(Insight):
    """Insight view row joined with its conversation and customer.

    ``conversation_type`` and ``conversation_date`` hold ``"-"`` when the
    conversation reference dangles.
    """

    customer_name: str = "Unknown"
    customer_industry: str = "Unknown"
    conversation_type: str = "-"
    conversation_date: str = "-"
