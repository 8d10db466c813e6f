"""
Filter state for one table view.

A ``FilterState`` is an explicit per-entity struct: discrete selections keyed
by the entity's allowed dimensions, an ordered duplicate-free list of search
terms, optional date bounds, and the scoping filters used by drill-downs.
The session that created it is its only writer.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from models.filters import DIMENSION_LABELS, Dimension, EntityType, entity_config
from models.response import ActiveFilter
from utils.logging_config import get_logger
from utils.validators import coerce_number, is_unset, parse_timestamp

logger = get_logger(__name__)

TERM_KEY_PREFIX = "term:"


def _format_day(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}"


@dataclass
class FilterState:
    """Current selections for a single entity table."""

    entity: EntityType
    dimensions: Dict[Dimension, Optional[str]] = field(default_factory=dict)
    search_terms: List[str] = field(default_factory=list)
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    scopes: Dict[str, Optional[str]] = field(default_factory=dict)
    min_urgency: Optional[float] = None
    min_confidence: Optional[float] = None
    seeded: bool = False

    def __post_init__(self) -> None:
        self.entity = EntityType(self.entity)
        config = entity_config(self.entity)
        given = dict(self.dimensions)
        self.dimensions = {dimension: None for dimension in config.dimensions}
        for name, value in given.items():
            self.set_dimension(name, value)
        given_scopes = dict(self.scopes)
        self.scopes = {scope: None for scope in config.scopes}
        for name, value in given_scopes.items():
            self.set_scope(name, value)

    @classmethod
    def for_entity(cls, entity: Union[EntityType, str]) -> "FilterState":
        return cls(entity=EntityType(entity))

    # ── Discrete dimensions ────────────────────────────────────────

    def set_dimension(self, name: Union[Dimension, str], value: Optional[Any]) -> bool:
        """Select one value for a dimension, or clear it with None/""/"all"."""
        try:
            dimension = Dimension(name)
        except ValueError:
            logger.warning("Unknown filter dimension", extra={"dimension": str(name)})
            return False
        if dimension not in self.dimensions:
            logger.warning(
                "Dimension not supported for entity",
                extra={"dimension": dimension.value, "entity": self.entity.value},
            )
            return False

        self.dimensions[dimension] = None if is_unset(value) else str(value).strip()
        return True

    def get_dimension(self, name: Union[Dimension, str]) -> Optional[str]:
        return self.dimensions.get(Dimension(name))

    def active_dimensions(self) -> Dict[Dimension, str]:
        return {dim: value for dim, value in self.dimensions.items() if value is not None}

    # ── Search terms ───────────────────────────────────────────────

    def add_search_term(self, term: Optional[str]) -> bool:
        """Append a term; blank terms and exact duplicates are no-ops."""
        cleaned = (term or "").strip()
        if not cleaned or cleaned in self.search_terms:
            return False
        self.search_terms.append(cleaned)
        return True

    def remove_search_term(self, term: str) -> bool:
        """Remove exactly one matching entry."""
        if term not in self.search_terms:
            return False
        self.search_terms.remove(term)
        return True

    # ── Date bounds, scopes and thresholds ─────────────────────────

    def set_date_range(self, start: Optional[Any] = None, end: Optional[Any] = None) -> None:
        """Set both bounds; unparsable bounds are logged and left unset."""
        self.start = self._parse_bound("start", start)
        self.end = self._parse_bound("end", end)

    def _parse_bound(self, which: str, value: Optional[Any]) -> Optional[datetime]:
        if is_unset(value):
            return None
        parsed = parse_timestamp(value)
        if parsed is None:
            logger.warning("Ignoring unparsable date bound", extra={"bound": which, "value": str(value)})
        return parsed

    def set_scope(self, name: str, value: Optional[Any]) -> bool:
        """Restrict rows to one customer or conversation (drill-down views)."""
        if name not in self.scopes:
            logger.warning(
                "Scope not supported for entity",
                extra={"scope": name, "entity": self.entity.value},
            )
            return False
        self.scopes[name] = None if is_unset(value) else str(value)
        return True

    def set_thresholds(
        self, min_urgency: Optional[Any] = None, min_confidence: Optional[Any] = None
    ) -> None:
        """Minimum urgency/confidence for insights; ignored for other entities."""
        if self.entity is not EntityType.INSIGHTS:
            return
        self.min_urgency = coerce_number(min_urgency)
        self.min_confidence = coerce_number(min_confidence)

    # ── Whole-state operations ─────────────────────────────────────

    def clear_all(self) -> None:
        """Reset every dimension, bound, scope, threshold and term at once."""
        self.dimensions = {dimension: None for dimension in self.dimensions}
        self.scopes = {scope: None for scope in self.scopes}
        self.search_terms = []
        self.start = None
        self.end = None
        self.min_urgency = None
        self.min_confidence = None

    @property
    def is_empty(self) -> bool:
        return (
            not self.active_dimensions()
            and not self.search_terms
            and self.start is None
            and self.end is None
            and not any(self.scopes.values())
            and self.min_urgency is None
            and self.min_confidence is None
        )

    def active_filters(self) -> List[ActiveFilter]:
        """Removable chips, in display order."""
        chips = [
            ActiveFilter(key=dim.value, label=f"{DIMENSION_LABELS[dim]}: {value}")
            for dim, value in self.active_dimensions().items()
        ]
        if self.start is not None:
            chips.append(ActiveFilter(key="start", label=f"Start: {_format_day(self.start)}"))
        if self.end is not None:
            chips.append(ActiveFilter(key="end", label=f"End: {_format_day(self.end)}"))
        chips.extend(
            ActiveFilter(key=f"{TERM_KEY_PREFIX}{term}", label=term) for term in self.search_terms
        )
        return chips

    def remove_filter(self, key: str) -> bool:
        """Remove the filter behind one chip."""
        if key.startswith(TERM_KEY_PREFIX):
            return self.remove_search_term(key[len(TERM_KEY_PREFIX):])
        if key == "start":
            self.start = None
            return True
        if key == "end":
            self.end = None
            return True
        return self.set_dimension(key, None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entity": self.entity.value,
            "dimensions": {dim.value: value for dim, value in self.dimensions.items()},
            "search_terms": list(self.search_terms),
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "scopes": dict(self.scopes),
            "min_urgency": self.min_urgency,
            "min_confidence": self.min_confidence,
        }

    def fingerprint(self) -> str:
        """Stable key for this exact state; used to key fetches and cache entries."""
        canonical = json.dumps(self.to_dict(), sort_keys=True)
        digest = hashlib.sha256(canonical.encode()).hexdigest()[:16]
        return f"{self.entity.value}:{digest}"

    # ── URL seeding ────────────────────────────────────────────────

    def seed_from_params(self, params: Optional[Mapping[str, Any]]) -> bool:
        """
        Apply navigation query parameters once per session.

        Later calls are no-ops so user edits made after the first render are
        never overwritten by the original URL.
        """
        if self.seeded:
            return False
        self.seeded = True
        if not params:
            return False

        for dimension in self.dimensions:
            if dimension.value in params:
                self.set_dimension(dimension, params[dimension.value])

        for scope in self.scopes:
            if scope in params:
                self.set_scope(scope, params[scope])

        search = params.get("search") or params.get("q")
        if search:
            raw_terms = search if isinstance(search, (list, tuple)) else str(search).split(",")
            for term in raw_terms:
                self.add_search_term(term)

        start = params.get("start") or params.get("date_from")
        end = params.get("end") or params.get("date_to")
        if start or end:
            self.set_date_range(start, end)

        if "min_urgency" in params or "min_confidence" in params:
            self.set_thresholds(params.get("min_urgency"), params.get("min_confidence"))

        logger.info("Filter state seeded", extra={"filters": self.to_dict()})
        return True
