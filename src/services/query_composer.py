"""
Remote query composition.

Translates a ``FilterState`` into a declarative ``QueryDescriptor`` for the
server-side filtering path. Inputs that are absent produce no predicate at
all; there are no placeholder "match everything" clauses.
"""

from __future__ import annotations

from typing import List, Optional

from models.enums import Sentiment, health_score_range
from models.filters import Dimension, EntityConfig, SearchMode, entity_config
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
from utils.logging_config import get_logger

logger = get_logger(__name__)

_SENTIMENT_PREDICATES = {
    Sentiment.POSITIVE.value: ("gt", 0),
    Sentiment.NEGATIVE.value: ("lt", 0),
    Sentiment.NEUTRAL.value: ("eq", 0),
}


def _dimension_predicates(dimension: Dimension, value: str) -> List[Predicate]:
    """
    Most dimensions are plain equality on the column of the same name.

    Health and sentiment may be stored as a label, a score or both. A row
    matches on its label, or on its score when it has no label. A label
    outside the vocabulary becomes an empty membership test, which matches
    no rows.
    """
    if dimension is Dimension.HEALTH:
        bounds = health_score_range(value)
        if bounds is None:
            return [Membership("health", ())]
        low, high = bounds
        score_range: List[Predicate] = []
        if low is not None:
            score_range.append(Comparison("health_score", "gte", low))
        if high is not None:
            score_range.append(Comparison("health_score", "lt", high))
        return [_label_or_score("health", value, score_range)]

    if dimension is Dimension.SENTIMENT:
        rule = _SENTIMENT_PREDICATES.get(value)
        if rule is None:
            return [Membership("sentiment", ())]
        op, threshold = rule
        return [_label_or_score("sentiment", value, [Comparison("sentiment_score", op, threshold)])]

    return [Comparison(dimension.value, "eq", value)]


def _label_or_score(column: str, value: str, score_predicates: List[Predicate]) -> AnyOf:
    return AnyOf(
        (
            Comparison(column, "eq", value),
            AllOf((IsNull(column), *score_predicates)),
        )
    )


def _term_predicates(config: EntityConfig, term: str) -> List[Predicate]:
    """Everything a single term may match: each text column, plus the topic array."""
    predicates: List[Predicate] = [TextMatch(column, term) for column in config.text_columns]
    if config.topics_column:
        predicates.append(ArrayContains(config.topics_column, term))
    return predicates


def _search_predicates(
    config: EntityConfig, terms: List[str], mode: SearchMode
) -> List[Predicate]:
    if not terms:
        return []

    if len(terms) == 1:
        text_matches: List[Predicate] = [
            TextMatch(column, terms[0]) for column in config.text_columns
        ]
        if len(text_matches) == 1:
            return text_matches
        return [AnyOf(tuple(text_matches))]

    if SearchMode(mode) is SearchMode.ALL:
        return [AnyOf(tuple(_term_predicates(config, term))) for term in terms]

    flattened: List[Predicate] = []
    for term in terms:
        flattened.extend(_term_predicates(config, term))
    return [AnyOf(tuple(flattened))]


def compose(
    state: FilterState,
    mode: SearchMode = SearchMode.ANY,
    limit: Optional[int] = None,
) -> QueryDescriptor:
    """
    Build the backend query for ``state``.

    One search term is a case-insensitive substring match on the primary
    text column(s). Several terms default to ``SearchMode.ANY``: a row
    qualifies when any term is in the text or is one of its topics.
    """
    config = entity_config(state.entity)
    predicates: List[Predicate] = []

    for dimension, value in state.active_dimensions().items():
        predicates.extend(_dimension_predicates(dimension, value))

    for scope, value in state.scopes.items():
        if value is not None:
            predicates.append(Comparison(scope, "eq", value))

    if state.min_urgency is not None:
        predicates.append(Comparison("urgency_score", "gte", state.min_urgency))
    if state.min_confidence is not None:
        predicates.append(Comparison("confidence_score", "gte", state.min_confidence))

    if state.start is not None:
        predicates.append(Comparison(config.date_column, "gte", state.start))
    if state.end is not None:
        predicates.append(Comparison(config.date_column, "lte", state.end))

    predicates.extend(_search_predicates(config, list(state.search_terms), mode))

    descriptor = QueryDescriptor(
        entity=state.entity.value,
        table=config.table,
        predicates=tuple(predicates),
        limit=limit,
    )
    logger.debug("Query composed", extra={"query": descriptor.to_dict()})
    return descriptor
