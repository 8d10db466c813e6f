"""
Aggregate/stats reducer for the stats cards.

All reductions are pure functions of their inputs. Anything time-relative
takes ``now`` as an argument instead of reading the clock.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from models.enums import ConversationStatus, ConversationType, CustomerStatus, HealthBucket
from models.stats import (
    CategoryCount,
    ConversationStats,
    CustomerStats,
    DashboardKpis,
    InsightStats,
    Stats,
    TopicCount,
)
from services.predicate_service import field_value
from utils.validators import coerce_number, parse_timestamp

RECENT_WINDOW_DAYS = 7


def count_by(rows: Iterable[Any], field: str) -> Dict[str, int]:
    """Rows per distinct value, in first-seen order. Missing values are skipped."""
    counts: Dict[str, int] = {}
    for row in rows:
        value = field_value(row, field)
        if value is None:
            continue
        key = str(value)
        counts[key] = counts.get(key, 0) + 1
    return counts


def total(rows: Iterable[Any], field: str) -> float:
    return sum(
        number
        for number in (coerce_number(field_value(row, field)) for row in rows)
        if number is not None
    )


def average(rows: Iterable[Any], field: str) -> float:
    """Mean over rows carrying the field; 0.0 when none do."""
    numbers = [
        number
        for number in (coerce_number(field_value(row, field)) for row in rows)
        if number is not None
    ]
    if not numbers:
        return 0.0
    return sum(numbers) / len(numbers)


def top_value(rows: Iterable[Any], field: str) -> Optional[str]:
    """Most frequent value; ties go to the value seen first."""
    counts = count_by(rows, field)
    best: Optional[str] = None
    for value, count in counts.items():
        if best is None or count > counts[best]:
            best = value
    return best


def recent(
    rows: Iterable[Any], field: str, now: datetime, days: int = RECENT_WINDOW_DAYS
) -> List[Any]:
    """Rows whose timestamp is at most ``days`` whole days before ``now``."""
    reference = parse_timestamp(now)
    selected = []
    for row in rows:
        stamp = parse_timestamp(field_value(row, field))
        if stamp is None or reference is None:
            continue
        if (reference - stamp).days <= days:
            selected.append(row)
    return selected


def summarize(
    rows: Sequence[Any],
    group_field: Optional[str] = None,
    numeric_field: Optional[str] = None,
    date_field: Optional[str] = None,
    now: Optional[datetime] = None,
    window_days: int = RECENT_WINDOW_DAYS,
) -> Stats:
    """Generic reduction: count, breakdown/top by one field, average, recency."""
    stats = Stats(total=len(rows))
    if group_field:
        stats.breakdown = count_by(rows, group_field)
        stats.top = top_value(rows, group_field)
    if numeric_field:
        stats.average = average(rows, numeric_field)
    if date_field and now is not None:
        stats.recent = len(recent(rows, date_field, now, window_days))
    return stats


def customer_stats(rows: Sequence[Any]) -> CustomerStats:
    health = count_by(rows, "health")
    return CustomerStats(
        total_customers=len(rows),
        active_customers=count_by(rows, "status").get(CustomerStatus.ACTIVE.value, 0),
        total_revenue=total(rows, "revenue"),
        avg_revenue=average(rows, "revenue"),
        at_risk_customers=health.get(HealthBucket.AT_RISK.value, 0)
        + health.get(HealthBucket.CRITICAL.value, 0),
    )


def conversation_stats(rows: Sequence[Any]) -> ConversationStats:
    statuses = count_by(rows, "status")
    return ConversationStats(
        total=len(rows),
        completed=statuses.get(ConversationStatus.COMPLETED.value, 0),
        scheduled=statuses.get(ConversationStatus.SCHEDULED.value, 0),
        avg_duration=average(rows, "duration_minutes"),
    )


def insight_stats(
    rows: Sequence[Any],
    visible: Optional[Sequence[Any]] = None,
    now: Optional[datetime] = None,
    window_days: int = RECENT_WINDOW_DAYS,
) -> InsightStats:
    """
    Totals, top category and the weekly count cover the full working set;
    the distinct-customer count covers the visible (filtered) rows.
    """
    shown = rows if visible is None else visible
    known_customers = {
        name for name in (field_value(row, "customer_name") for row in shown) if name
    }
    recent_count = 0
    if now is not None:
        recent_count = len(recent(rows, "conversation_date", now, window_days))
    return InsightStats(
        total_insights=len(rows),
        unique_customers=len(known_customers),
        top_category=top_value(rows, "category"),
        recent_insights=recent_count,
    )


def category_counts(rows: Iterable[Any]) -> List[CategoryCount]:
    """Category vocabulary with counts, most frequent first."""
    counts = count_by(rows, "category")
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [CategoryCount(category=name, count=count) for name, count in ordered]


def topic_counts(rows: Iterable[Any]) -> List[TopicCount]:
    """Topic vocabulary with counts, most frequent first."""
    counter: Counter = Counter()
    for row in rows:
        topics = field_value(row, "topics") or []
        counter.update(str(topic) for topic in topics if topic)
    return [TopicCount(topic=topic, count=count) for topic, count in counter.most_common()]


def dashboard_kpis(
    customers: Sequence[Any], conversations: Sequence[Any], insights: Sequence[Any]
) -> DashboardKpis:
    return DashboardKpis(
        active_customers=count_by(customers, "status").get(CustomerStatus.ACTIVE.value, 0),
        total_calls=count_by(conversations, "type").get(ConversationType.CALL.value, 0),
        total_insights=len(insights),
        insights_by_category=category_counts(insights),
    )
