"""
Dashboard orchestration.

Builds table, detail and dashboard payloads from a data source. Working
sets are cached per entity under ``<entity>:all``; with server-side
filtering each filtered result is also cached under the filter fingerprint
and search mode, together with the query descriptor that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from config.settings import Settings
from models.change import ChangeEvent, ChangeType
from models.filters import EntityType, SearchMode, entity_config
from models.query import QueryDescriptor
from models.response import TableResponse
from repositories.base import DataSource
from services.change_service import apply_change
from services.enrichment_service import (
    Lookups,
    enrich_conversation,
    enrich_conversations,
    enrich_customer,
    enrich_customers,
    enrich_insights,
)
from services.filter_state import FilterState
from services.predicate_service import field_value, filter_rows, matches_descriptor
from services.query_composer import compose
from services.session_service import DashboardSession, LoadStatus
from services.stats_service import (
    conversation_stats,
    customer_stats,
    dashboard_kpis,
    insight_stats,
    recent,
)
from services.table_service import COLUMNS, RECENT_INSIGHT_COLUMNS, TableView, highlight
from utils.cache_service import LRUCache
from utils.error_handling import NotFoundError
from utils.logging_config import get_logger

logger = get_logger(__name__)

EMPTY_MESSAGE = "No rows match your filters"
WORKING_SET_SUFFIX = ":all"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def build_data_source(settings: Settings) -> DataSource:
    """Data source named by ``settings.data_source``."""
    if settings.data_source == "postgres":
        from repositories.postgres_repo import PostgresDataSource

        return PostgresDataSource.from_settings(settings)
    from repositories.memory_repo import InMemoryDataSource

    return InMemoryDataSource.with_sample_data()


def search_mode(params: Optional[Mapping[str, Any]], default: SearchMode) -> SearchMode:
    """``?match=any|all`` overrides how several search terms combine."""
    requested = str((params or {}).get("match") or "").lower()
    try:
        return SearchMode(requested)
    except ValueError:
        return default


def _newest_first(rows: Sequence[Any], field: str) -> List[Any]:
    return sorted(rows, key=lambda row: field_value(row, field) or _EPOCH, reverse=True)


@dataclass(frozen=True)
class FilteredResult:
    """A server-filtered result cached together with the query behind it."""

    descriptor: QueryDescriptor
    records: List[Any]

    def merge(self, event: ChangeEvent) -> "FilteredResult":
        record_id = event.record_id
        ids = {str(field_value(row, "id")) for row in self.records}
        if event.event_type is ChangeType.UPDATE and record_id not in ids:
            # The update may bring a record into this result.
            event = event.model_copy(update={"event_type": ChangeType.INSERT})
        records = [
            row
            for row in apply_change(self.records, event)
            if str(field_value(row, "id")) != record_id or matches_descriptor(row, self.descriptor)
        ]
        return FilteredResult(descriptor=self.descriptor, records=records)


class DashboardService:
    """Service for filtered tables, detail views and dashboard KPIs."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        data_source: Optional[DataSource] = None,
        cache: Optional[LRUCache] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings or Settings.from_environment()
        self.data_source = data_source or build_data_source(self.settings)
        self.cache = cache or LRUCache(
            max_size=self.settings.cache_max_size,
            ttl_seconds=self.settings.cache_ttl_seconds,
        )
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def server_filtering(self) -> bool:
        return self.settings.filter_mode == "server"

    # ── Working sets ───────────────────────────────────────────────

    def working_set(self, entity: Union[EntityType, str]) -> List[BaseModel]:
        """Unfiltered records for an entity, served from cache when warm."""
        entity = EntityType(entity)
        key = f"{entity.value}{WORKING_SET_SUFFIX}"
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Working set cache hit", extra={"entity": entity.value})
            return cached
        records = self.data_source.fetch(entity)
        self.cache.set(key, records)
        return records

    def lookups(self) -> Lookups:
        return Lookups.from_records(
            customers=self.working_set(EntityType.CUSTOMERS),
            conversations=self.working_set(EntityType.CONVERSATIONS),
            insights=self.working_set(EntityType.INSIGHTS),
        )

    def _enrich(self, entity: EntityType, records: Sequence[Any], lookups: Lookups) -> List[Any]:
        if entity is EntityType.CUSTOMERS:
            return enrich_customers(records, lookups)
        if entity is EntityType.CONVERSATIONS:
            return enrich_conversations(records, lookups)
        return enrich_insights(records, lookups)

    def load_rows(self, state: FilterState, mode: Optional[SearchMode] = None) -> List[Any]:
        """Visible view rows for ``state`` under the configured filter mode."""
        lookups = self.lookups()
        if not self.server_filtering:
            rows = self._enrich(state.entity, self.working_set(state.entity), lookups)
            return filter_rows(rows, state, mode or SearchMode.ALL)

        mode = SearchMode(mode or SearchMode.ANY)
        key = f"{state.fingerprint()}:{mode.value}"
        cached = self.cache.get(key)
        if cached is None:
            records = self.data_source.fetch(state.entity, state, mode=mode)
            cached = FilteredResult(descriptor=compose(state, mode=mode), records=records)
            self.cache.set(key, cached)
        return self._enrich(state.entity, cached.records, lookups)

    # ── Table views ────────────────────────────────────────────────

    def _stats(self, entity: EntityType, all_rows: List[Any], visible: List[Any]) -> Dict[str, Any]:
        if entity is EntityType.CUSTOMERS:
            return customer_stats(all_rows).model_dump()
        if entity is EntityType.CONVERSATIONS:
            return conversation_stats(all_rows).model_dump()
        return insight_stats(
            all_rows,
            visible=visible,
            now=self._clock(),
            window_days=self.settings.recent_window_days,
        ).model_dump()

    def _highlights(self, session: DashboardSession) -> Dict[str, List[Dict[str, Any]]]:
        terms = session.filters.search_terms
        if not terms:
            return {}
        column = entity_config(session.entity).text_columns[0]
        return {
            str(field_value(row, "id")): [
                {"text": text, "match": matched}
                for text, matched in highlight(str(field_value(row, column) or ""), terms)
            ]
            for row in session.rows
        }

    def table(
        self,
        entity: Union[EntityType, str],
        params: Optional[Mapping[str, Any]] = None,
        correlation_id: Optional[str] = None,
    ) -> TableResponse:
        """Filtered table payload for one entity."""
        session = DashboardSession(entity, params)
        entity = session.entity
        default_mode = SearchMode.ANY if self.server_filtering else SearchMode.ALL
        mode = search_mode(params, default_mode)
        columns = COLUMNS[entity]

        status = session.fetch(lambda state: self.load_rows(state, mode))
        base = dict(
            entity=entity.value,
            columns=[column.spec() for column in columns],
            active_filters=session.filters.active_filters(),
            filter_mode=self.settings.filter_mode,
            correlation_id=correlation_id,
        )
        if status is LoadStatus.FAILED:
            return TableResponse(status="failed", message=f"Unable to load {entity.value}", **base)

        all_rows = self._enrich(entity, self.working_set(entity), self.lookups())
        view = TableView(session.rows, columns)
        logger.info(
            "Table served",
            extra={
                "entity": entity.value,
                "shown": len(session.rows),
                "total": len(all_rows),
                "filters": session.filters.to_dict(),
            },
        )
        return TableResponse(
            status="empty" if session.is_empty else "ready",
            message=EMPTY_MESSAGE if session.is_empty else None,
            rows=[row.model_dump(mode="json") for row in session.rows],
            cells=view.cells(),
            total=len(all_rows),
            shown=len(session.rows),
            stats=self._stats(entity, all_rows, session.rows),
            highlights=self._highlights(session),
            **base,
        )

    # ── Detail views ───────────────────────────────────────────────

    def customer_detail(self, customer_id: str) -> Dict[str, Any]:
        """Customer with its conversations and insights, newest first."""
        customer = self.data_source.get_customer(customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        lookups = self.lookups()
        conversations = enrich_conversations(
            _newest_first(lookups.conversations_for_customer(customer_id), "occurred_at"),
            lookups,
        )
        insights = enrich_insights(
            _newest_first(lookups.insights_for_customer(customer_id), "created_at"),
            lookups,
        )
        return {
            "customer": enrich_customer(customer, lookups).model_dump(mode="json"),
            "conversations": [row.model_dump(mode="json") for row in conversations],
            "insights": [row.model_dump(mode="json") for row in insights],
        }

    def conversation_detail(self, conversation_id: str) -> Dict[str, Any]:
        """Conversation with its customer and extracted insights."""
        conversation = self.data_source.get_conversation(conversation_id)
        if conversation is None:
            raise NotFoundError("Conversation not found")
        lookups = self.lookups()
        customer = lookups.customer(conversation.customer_id)
        insights = enrich_insights(lookups.insights_for_conversation(conversation_id), lookups)
        return {
            "conversation": enrich_conversation(conversation, lookups).model_dump(mode="json"),
            "customer": (
                enrich_customer(customer, lookups).model_dump(mode="json") if customer else None
            ),
            "insights": [row.model_dump(mode="json") for row in insights],
        }

    # ── Vocabulary and dashboard ───────────────────────────────────

    def categories(self) -> List[Dict[str, Any]]:
        return [item.model_dump() for item in self.data_source.list_categories()]

    def topics(self) -> List[Dict[str, Any]]:
        return [item.model_dump() for item in self.data_source.list_topics()]

    def dashboard(self) -> Dict[str, Any]:
        """Headline KPIs plus the most recent insights."""
        lookups = self.lookups()
        customers = self.working_set(EntityType.CUSTOMERS)
        conversations = self.working_set(EntityType.CONVERSATIONS)
        insights = self.working_set(EntityType.INSIGHTS)

        latest = _newest_first(insights, "created_at")[: self.settings.recent_insights_limit]
        rows = enrich_insights(latest, lookups)
        view = TableView(rows, RECENT_INSIGHT_COLUMNS)

        kpis = dashboard_kpis(customers, conversations, insights)
        this_week = recent(insights, "created_at", self._clock(), self.settings.recent_window_days)
        return {
            "kpis": kpis.model_dump(),
            "insights_this_week": len(this_week),
            "recent_insights": {
                "columns": [spec.model_dump() for spec in view.column_specs()],
                "rows": [row.model_dump(mode="json") for row in rows],
                "cells": view.cells(),
            },
        }

    # ── Push updates ───────────────────────────────────────────────

    def merge_changes(self, events: Sequence[ChangeEvent]) -> Dict[str, Any]:
        """
        Merge pushed changes into cached working sets and filtered results.

        Filtered results are merged by id like working sets, then the changed
        record is kept only if it still satisfies the query that produced
        the entry. Nothing is re-fetched.
        """
        merged: Dict[str, int] = {}
        for event in events:
            try:
                entity = EntityType(event.entity)
            except ValueError:
                logger.warning("Change for unknown entity", extra={"entity": event.entity})
                continue
            working_key = f"{entity.value}{WORKING_SET_SUFFIX}"
            self.cache.transform(working_key, lambda rows, e=event: apply_change(rows, e))
            self.cache.transform(
                f"{entity.value}:",
                lambda result, e=event: result.merge(e),
                skip=(working_key,),
            )
            merged[entity.value] = merged.get(entity.value, 0) + 1

        logger.info("Changes merged", extra={"counts": merged, "cache": self.cache.stats()})
        return {"merged": sum(merged.values()), "by_entity": merged}

