"""Closed vocabularies for customer, conversation and insight fields."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple, Type

from utils.validators import UNKNOWN


class CustomerSize(str, Enum):
    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ENTERPRISE = "enterprise"


class CustomerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PROSPECT = "prospect"
    CHURNED = "churned"


class CustomerTier(str, Enum):
    """Pricing plans."""

    FREE = "free"
    BASIC = "basic"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class HealthBucket(str, Enum):
    """Discrete health buckets derived from the 0-100 health score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    AT_RISK = "at-risk"
    CRITICAL = "critical"


class ConversationType(str, Enum):
    CALL = "call"
    EMAIL = "email"
    CHAT = "chat"
    MEETING = "meeting"


class Direction(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class ConversationStatus(str, Enum):
    COMPLETED = "completed"
    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"


class Sentiment(str, Enum):
    """Customer sentiment buckets."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class InsightCategory(str, Enum):
    """Insight categories; the value is the internal snake_case form."""

    PAIN_POINT = "pain_point"
    OPPORTUNITY = "opportunity"
    OBJECTION = "objection"
    REQUEST = "request"
    ISSUE = "issue"
    SUCCESS = "success"
    UPDATE = "update"


def values(enum_cls: Type[Enum]) -> List[str]:
    """Vocabulary values in declaration order."""
    return [member.value for member in enum_cls]


CATEGORY_LABELS: Dict[str, str] = {
    member.value: member.value.replace("_", " ").title() for member in InsightCategory
}
_LABEL_TO_CATEGORY: Dict[str, str] = {
    label.lower(): value for value, label in CATEGORY_LABELS.items()
}

# Lower bound of each bucket on the 0-100 health score, best first.
HEALTH_THRESHOLDS: Tuple[Tuple[str, float], ...] = (
    (HealthBucket.EXCELLENT.value, 80.0),
    (HealthBucket.GOOD.value, 60.0),
    (HealthBucket.AT_RISK.value, 40.0),
    (HealthBucket.CRITICAL.value, 0.0),
)


def category_label(category: Optional[str]) -> str:
    """Display form of a category: ``pain_point`` -> ``Pain Point``."""
    if not category:
        return "Unknown"
    return CATEGORY_LABELS.get(category, "Unknown")


def category_from_label(value: Optional[str]) -> Optional[str]:
    """Internal form of a category given either form; ``unknown`` if unrecognized."""
    if value is None or value == "":
        return None
    text = str(value).strip()
    if text in CATEGORY_LABELS:
        return text
    key = text.lower().replace("_", " ").replace("-", " ")
    return _LABEL_TO_CATEGORY.get(key, UNKNOWN)


def health_bucket(score: Optional[float]) -> Optional[str]:
    """Map a 0-100 health score onto its bucket."""
    if score is None:
        return None
    for bucket, floor in HEALTH_THRESHOLDS:
        if score >= floor:
            return bucket
    return HealthBucket.CRITICAL.value


def health_score_range(
    bucket: str,
) -> Optional[Tuple[Optional[float], Optional[float]]]:
    """Half-open ``[low, high)`` score range for a bucket; ``None`` if unknown.

    Open ends are ``None``: excellent has no upper bound, critical no lower one.
    """
    upper: Optional[float] = None
    for name, floor in HEALTH_THRESHOLDS:
        if name == bucket:
            low = None if name == HealthBucket.CRITICAL.value else floor
            return low, upper
        upper = floor
    return None


def sentiment_from_score(score: Optional[float]) -> Optional[str]:
    """Sign rule: >0 positive, <0 negative, 0 neutral."""
    if score is None:
        return None
    if score > 0:
        return Sentiment.POSITIVE.value
    if score < 0:
        return Sentiment.NEGATIVE.value
    return Sentiment.NEUTRAL.value


def display_label(value: Optional[str]) -> str:
    """Title-case a vocabulary value for display, ``Unknown`` when missing."""
    if not value or value == UNKNOWN:
        return "Unknown"
    return value.replace("_", " ").replace("-", " ").title()
