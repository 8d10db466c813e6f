"""
Dashboard session: one table view's filter state, working set and load status.

Fetches are keyed by the filter fingerprint at the moment they start. A
result that settles under a key other than the latest one is stale and is
discarded, so rapid filter edits can never paint an older response over a
newer one.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from models.change import ChangeEvent
from models.filters import EntityType
from services.change_service import apply_change
from services.filter_state import FilterState
from utils.error_handling import FetchFailure
from utils.logging_config import get_logger

logger = get_logger(__name__)


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class DashboardSession:
    """Owns a ``FilterState`` for its lifetime and tracks the latest fetch."""

    def __init__(
        self,
        entity: Union[EntityType, str],
        params: Optional[Mapping[str, Any]] = None,
    ):
        self.filters = FilterState.for_entity(entity)
        self.filters.seed_from_params(params)
        self.rows: List[Any] = []
        self.status = LoadStatus.IDLE
        self.error: Optional[str] = None
        self._pending_key: Optional[str] = None

    @property
    def entity(self) -> EntityType:
        return self.filters.entity

    @property
    def pending_key(self) -> Optional[str]:
        return self._pending_key

    def seed(self, params: Optional[Mapping[str, Any]]) -> bool:
        """URL seeding; only the first call for the session has any effect."""
        return self.filters.seed_from_params(params)

    def begin_fetch(self) -> str:
        """Mark a fetch as in flight for the current filters and return its key."""
        key = self.filters.fingerprint()
        self._pending_key = key
        self.status = LoadStatus.LOADING
        self.error = None
        return key

    def settle(self, key: str, rows: Sequence[Any]) -> bool:
        """Accept ``rows`` only if ``key`` is still the latest fetch."""
        if key != self._pending_key:
            logger.debug("Discarding stale fetch result", extra={"key": key})
            return False
        self.rows = list(rows)
        self.status = LoadStatus.READY
        self._pending_key = None
        return True

    def fail(self, key: str, error: Union[Exception, str]) -> bool:
        """Record a failed fetch; the working set is cleared, never left stale."""
        if key != self._pending_key:
            logger.debug("Discarding stale fetch failure", extra={"key": key})
            return False
        self.rows = []
        self.status = LoadStatus.FAILED
        self.error = str(error)
        self._pending_key = None
        logger.error(
            "Fetch failed",
            extra={"entity": self.entity.value, "error": self.error},
        )
        return True

    def fetch(self, fetcher: Callable[[FilterState], Sequence[Any]]) -> LoadStatus:
        """Run ``fetcher`` synchronously for the current filters."""
        key = self.begin_fetch()
        try:
            rows = fetcher(self.filters)
        except FetchFailure as exc:
            self.fail(key, exc)
            return self.status
        self.settle(key, rows)
        return self.status

    def apply_change(self, event: ChangeEvent) -> None:
        """Merge a pushed change for this session's entity into the working set."""
        if event.entity != self.entity.value:
            return
        self.rows = apply_change(self.rows, event)

    @property
    def is_empty(self) -> bool:
        return self.status is LoadStatus.READY and not self.rows
