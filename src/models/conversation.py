"""Conversation models."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from models.enums import (
    ConversationStatus,
    ConversationType,
    Direction,
    Priority,
    Sentiment,
    sentiment_from_score,
    values,
)
from utils.validators import coerce_number, normalize_choice, parse_timestamp

# Older payloads carry the occurrence time under one of these keys.
_OCCURRED_AT_KEYS = ("occurred_at", "occurredAt", "date", "started_at", "startedAt", "scheduled_at", "scheduledAt")


class Participant(BaseModel):
    """Conversation participant; legacy payloads only carry a name."""

    name: str
    role: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.role})" if self.role else self.name


class Conversation(BaseModel):
    """A single customer touchpoint (call, email, chat or meeting)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    customer_id: Optional[str] = None
    type: Optional[str] = None
    direction: Optional[str] = None
    occurred_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    duration_minutes: Optional[float] = Field(default=None, ge=0)
    subject: Optional[str] = None
    summary: str = ""
    participants: List[Participant] = Field(default_factory=list)
    status: Optional[str] = None
    sentiment: Optional[str] = None
    sentiment_score: Optional[float] = None
    priority: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("occurred_at") is None and data.get("occurredAt") is None:
            for key in _OCCURRED_AT_KEYS:
                if data.get(key):
                    data["occurred_at"] = data[key]
                    break
        if "duration_minutes" not in data and "durationMinutes" not in data and "duration" in data:
            data["duration_minutes"] = data["duration"]
        return data

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value: Any) -> Optional[str]:
        return normalize_choice(value, values(ConversationType))

    @field_validator("direction", mode="before")
    @classmethod
    def _direction(cls, value: Any) -> Optional[str]:
        return normalize_choice(value, values(Direction))

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> Optional[str]:
        return normalize_choice(value, values(ConversationStatus))

    @field_validator("sentiment", mode="before")
    @classmethod
    def _sentiment(cls, value: Any) -> Optional[str]:
        return normalize_choice(value, values(Sentiment))

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value: Any) -> Optional[str]:
        return normalize_choice(value, values(Priority))

    @field_validator("occurred_at", "created_at", mode="before")
    @classmethod
    def _timestamps(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _duration(cls, value: Any) -> Optional[float]:
        minutes = coerce_number(value)
        return minutes if minutes is not None and minutes >= 0 else None

    @field_validator("sentiment_score", mode="before")
    @classmethod
    def _sentiment_score(cls, value: Any) -> Optional[float]:
        return coerce_number(value)

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("participants", mode="before")
    @classmethod
    def _participants(cls, value: Any) -> List[Any]:
        if not isinstance(value, (list, tuple)):
            return []
        normalized: List[Any] = []
        for item in value:
            if isinstance(item, str):
                normalized.append({"name": item})
            elif isinstance(item, dict) and item.get("name"):
                normalized.append(item)
            elif isinstance(item, Participant):
                normalized.append(item)
        return normalized

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> List[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [str(tag) for tag in value if tag is not None]

    @property
    def sentiment_label(self) -> Optional[str]:
        """Discrete sentiment, falling back to the sign of the score."""
        return self.sentiment or sentiment_from_score(self.sentiment_score)


class ConversationRow(Conversation):
    """Conversation view row with customer fields resolved."""

    customer_name: str = "Unknown"
    customer_industry: str = "Unknown"
    insight_count: int = 0
