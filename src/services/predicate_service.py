"""
Client-side predicate evaluation.

Decides per view row whether it is visible under a filter state:
AND across set dimensions, date bounds, scopes, thresholds and the search
constraint. Unset dimensions impose nothing; malformed row values simply
fail to match.

Also evaluates composed query descriptors in Python, for the in-memory
data source and for re-checking merged changes against cached results.
"""

from __future__ import annotations

import operator
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from models.enums import category_label, health_bucket, sentiment_from_score
from models.filters import Dimension, EntityType, SearchMode, entity_config
from models.query import (
    AllOf,
    AnyOf,
    ArrayContains,
    Comparison,
    IsNull,
    Membership,
    Predicate,
    QueryDescriptor,
    TextMatch,
)
from services.filter_state import FilterState
from utils.validators import coerce_number, parse_timestamp

RowT = TypeVar("RowT")

# Fields concatenated into the search haystack, per entity.
SEARCH_FIELDS: Dict[EntityType, Tuple[str, ...]] = {
    EntityType.CUSTOMERS: ("name", "industry", "status", "tier", "contact_person", "tags"),
    EntityType.CONVERSATIONS: ("customer_name", "type", "subject", "summary", "tags"),
    EntityType.INSIGHTS: ("customer_name", "conversation_type", "category", "text", "topics"),
}


def field_value(row: Any, name: str) -> Any:
    """Read a field from a model or a plain mapping."""
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def _dimension_value(row: Any, dimension: Dimension) -> Optional[str]:
    value = field_value(row, dimension.value)
    if value is None and dimension is Dimension.SENTIMENT:
        value = sentiment_from_score(coerce_number(field_value(row, "sentiment_score")))
    elif value is None and dimension is Dimension.HEALTH:
        value = health_bucket(coerce_number(field_value(row, "health_score")))
    return None if value is None else str(value)


def _as_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return []


def haystack(row: Any, entity: EntityType) -> str:
    """Lower-cased searchable text for a row."""
    parts: List[str] = []
    for name in SEARCH_FIELDS[entity]:
        value = field_value(row, name)
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            parts.append(" ".join(_as_list(value)))
        else:
            parts.append(str(value))
        if name == "category" and value:
            parts.append(category_label(str(value)))
    return " ".join(parts).lower()


def matches_dimensions(row: Any, state: FilterState) -> bool:
    for dimension, selected in state.active_dimensions().items():
        if _dimension_value(row, dimension) != selected:
            return False
    return True


def matches_date_range(row: Any, state: FilterState) -> bool:
    if state.start is None and state.end is None:
        return True
    stamp = parse_timestamp(field_value(row, entity_config(state.entity).date_field))
    if stamp is None:
        return False
    if state.start is not None and stamp < state.start:
        return False
    if state.end is not None and stamp > state.end:
        return False
    return True


def matches_scopes(row: Any, state: FilterState) -> bool:
    for scope, value in state.scopes.items():
        if value is not None and field_value(row, scope) != value:
            return False
    return True


def matches_thresholds(row: Any, state: FilterState) -> bool:
    for threshold, name in (
        (state.min_urgency, "urgency_score"),
        (state.min_confidence, "confidence_score"),
    ):
        if threshold is None:
            continue
        score = coerce_number(field_value(row, name))
        if score is None or score < threshold:
            return False
    return True


def _text_contains(row: Any, columns: Sequence[str], term: str) -> bool:
    needle = term.lower()
    return any(
        needle in str(field_value(row, name)).lower()
        for name in columns
        if field_value(row, name) is not None
    )


def matches_search(
    row: Any, entity: EntityType, terms: Sequence[str], mode: SearchMode = SearchMode.ALL
) -> bool:
    """
    ALL: every term is a case-insensitive substring of the row haystack.
    ANY: the same rule the query composer sends to the backend. One term is
    a substring of a text column; with several, some term is a substring of
    a text column or an exact element of the topic column.
    """
    if not terms:
        return True

    if SearchMode(mode) is SearchMode.ALL:
        text = haystack(row, entity)
        return all(term.lower() in text for term in terms)

    config = entity_config(entity)
    if len(terms) == 1:
        return _text_contains(row, config.text_columns, terms[0])
    topics = set()
    if config.topics_column:
        topics = set(_as_list(field_value(row, config.topics_column)))
    return any(_text_contains(row, config.text_columns, term) or term in topics for term in terms)


def matches(row: Any, state: FilterState, mode: SearchMode = SearchMode.ALL) -> bool:
    """Row inclusion: the AND of every active constraint."""
    return (
        matches_dimensions(row, state)
        and matches_scopes(row, state)
        and matches_thresholds(row, state)
        and matches_date_range(row, state)
        and matches_search(row, state.entity, state.search_terms, mode)
    )


def filter_rows(
    rows: Iterable[RowT], state: FilterState, mode: SearchMode = SearchMode.ALL
) -> List[RowT]:
    """Visible rows in their original order."""
    return [row for row in rows if matches(row, state, mode)]


# ── Descriptor evaluation ──────────────────────────────────────────

_OPS = {
    "eq": operator.eq,
    "gte": operator.ge,
    "lte": operator.le,
    "gt": operator.gt,
    "lt": operator.lt,
}


def _compare(actual: Any, op: str, expected: Any) -> bool:
    if actual is None:
        return False
    if isinstance(expected, datetime):
        actual = parse_timestamp(actual)
    elif isinstance(expected, (int, float)) and not isinstance(expected, bool):
        actual = coerce_number(actual)
    else:
        actual = str(actual)
    if actual is None:
        return False
    try:
        return _OPS[op](actual, expected)
    except TypeError:
        return False


def satisfies(record: Any, predicate: Predicate) -> bool:
    """Whether one record satisfies one descriptor predicate."""
    if isinstance(predicate, AnyOf):
        return any(satisfies(record, inner) for inner in predicate.predicates)
    if isinstance(predicate, AllOf):
        return all(satisfies(record, inner) for inner in predicate.predicates)
    value = field_value(record, predicate.column)
    if isinstance(predicate, IsNull):
        return value is None
    if isinstance(predicate, Comparison):
        return _compare(value, predicate.op, predicate.value)
    if isinstance(predicate, Membership):
        return value is not None and value in predicate.values
    if isinstance(predicate, TextMatch):
        return value is not None and predicate.term.lower() in str(value).lower()
    if isinstance(predicate, ArrayContains):
        return isinstance(value, (list, tuple)) and predicate.value in value
    return False


def matches_descriptor(record: Any, descriptor: QueryDescriptor) -> bool:
    """AND of the descriptor's top-level predicates; ``limit`` is not applied."""
    return all(satisfies(record, predicate) for predicate in descriptor.predicates)
