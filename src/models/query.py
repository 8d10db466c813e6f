"""Declarative, backend-agnostic query descriptors.

Descriptors never carry hand-built SQL: each data source translates the
predicate tree into its own parameterized form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

COMPARISON_OPS = ("eq", "gte", "lte", "gt", "lt")


@dataclass(frozen=True)
class Comparison:
    """``column <op> value``."""

    column: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in COMPARISON_OPS:
            raise ValueError(f"Unsupported comparison operator: {self.op}")


@dataclass(frozen=True)
class Membership:
    """``column IN values``; an empty tuple matches nothing."""

    column: str
    values: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class TextMatch:
    """Case-insensitive substring match on a text column."""

    column: str
    term: str


@dataclass(frozen=True)
class ArrayContains:
    """Exact element membership in an array column."""

    column: str
    value: str


@dataclass(frozen=True)
class IsNull:
    """``column IS NULL``."""

    column: str


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of predicates."""

    predicates: Tuple["Predicate", ...]


@dataclass(frozen=True)
class AllOf:
    """Conjunction of predicates, for nesting inside ``AnyOf``."""

    predicates: Tuple["Predicate", ...]


Predicate = Union[Comparison, Membership, TextMatch, ArrayContains, IsNull, AnyOf, AllOf]


@dataclass(frozen=True)
class QueryDescriptor:
    """Top-level predicates are combined with AND."""

    entity: str
    table: str
    predicates: Tuple[Predicate, ...] = field(default_factory=tuple)
    order_by: str = "created_at"
    descending: bool = True
    limit: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form, used in logs and API debug output."""
        return {
            "entity": self.entity,
            "table": self.table,
            "predicates": [predicate_to_dict(p) for p in self.predicates],
            "order_by": self.order_by,
            "descending": self.descending,
            "limit": self.limit,
        }


def predicate_to_dict(predicate: Predicate) -> Dict[str, Any]:
    if isinstance(predicate, AnyOf):
        return {"any_of": [predicate_to_dict(p) for p in predicate.predicates]}
    if isinstance(predicate, AllOf):
        return {"all_of": [predicate_to_dict(p) for p in predicate.predicates]}
    if isinstance(predicate, IsNull):
        return {"column": predicate.column, "op": "is_null", "value": None}
    if isinstance(predicate, Comparison):
        return {"column": predicate.column, "op": predicate.op, "value": _jsonable(predicate.value)}
    if isinstance(predicate, Membership):
        return {"column": predicate.column, "op": "in", "value": [_jsonable(v) for v in predicate.values]}
    if isinstance(predicate, TextMatch):
        return {"column": predicate.column, "op": "ilike", "value": predicate.term}
    return {"column": predicate.column, "op": "contains", "value": predicate.value}


def _jsonable(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value
