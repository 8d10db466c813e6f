"""Customer models."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from models.enums import (
    CustomerSize,
    CustomerStatus,
    CustomerTier,
    HealthBucket,
    health_bucket,
    values,
)
from utils.validators import coerce_number, normalize_choice, parse_timestamp


class Customer(BaseModel):
    """Customer account as stored by the backend."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = ""
    industry: Optional[str] = None
    size: Optional[str] = None
    status: Optional[str] = None
    tier: Optional[str] = None
    health_score: Optional[float] = Field(default=None, ge=0, le=100)
    health: Optional[str] = None
    revenue: Optional[float] = Field(default=None, ge=0)
    location: Optional[Union[Dict[str, Any], str]] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    join_date: Optional[datetime] = None
    last_activity: Optional[datetime] = None
    created_at: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("size", mode="before")
    @classmethod
    def _size(cls, value: Any) -> Optional[str]:
        return normalize_choice(value, values(CustomerSize))

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> Optional[str]:
        return normalize_choice(value, values(CustomerStatus))

    @field_validator("tier", mode="before")
    @classmethod
    def _tier(cls, value: Any) -> Optional[str]:
        return normalize_choice(value, values(CustomerTier))

    @field_validator("health", mode="before")
    @classmethod
    def _health(cls, value: Any) -> Optional[str]:
        return normalize_choice(value, values(HealthBucket))

    @field_validator("health_score", mode="before")
    @classmethod
    def _health_score(cls, value: Any) -> Optional[float]:
        score = coerce_number(value)
        if score is None or not 0 <= score <= 100:
            return None
        return score

    @field_validator("revenue", mode="before")
    @classmethod
    def _revenue(cls, value: Any) -> Optional[float]:
        amount = coerce_number(value)
        return amount if amount is not None and amount >= 0 else None

    @field_validator("join_date", "last_activity", "created_at", mode="before")
    @classmethod
    def _timestamps(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> List[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [str(tag) for tag in value if tag is not None]

    @model_validator(mode="after")
    def _derive_health(self) -> "Customer":
        if self.health is None:
            self.health = health_bucket(self.health_score)
        return self

    @property
    def location_display(self) -> str:
        """Structured locations render as "City, State, Country"."""
        if not self.location:
            return ""
        if isinstance(self.location, str):
            return self.location
        parts = [
            str(self.location[key])
            for key in ("city", "state", "country")
            if self.location.get(key)
        ]
        return ", ".join(parts)


class CustomerRow(Customer):
    """Customer view row with counts resolved from related records."""

    conversation_count: int = 0
    insight_count: int = 0
    last_conversation_type: Optional[str] = None
