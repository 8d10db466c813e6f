"""
Merge push-delivered record changes into in-memory working sets.

Inserts prepend, updates replace by id, deletes remove by id. Merging is a
pure list transformation so it never blocks or re-runs the filter pipeline.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from boto3.dynamodb.types import TypeDeserializer
from pydantic import BaseModel, ValidationError

from models.change import ChangeEvent, ChangeType
from models.conversation import Conversation
from models.customer import Customer
from models.filters import EntityType
from models.insight import Insight
from services.predicate_service import field_value
from utils.logging_config import get_logger

logger = get_logger(__name__)

RECORD_MODELS: Dict[EntityType, Type[BaseModel]] = {
    EntityType.CUSTOMERS: Customer,
    EntityType.CONVERSATIONS: Conversation,
    EntityType.INSIGHTS: Insight,
}

_PAYLOAD_EVENTS = {
    "INSERT": ChangeType.INSERT,
    "UPDATE": ChangeType.UPDATE,
    "DELETE": ChangeType.DELETE,
}
_STREAM_EVENTS = {
    "INSERT": ChangeType.INSERT,
    "MODIFY": ChangeType.UPDATE,
    "REMOVE": ChangeType.DELETE,
}

_deserializer = TypeDeserializer()


def from_payload(entity: str, payload: Mapping[str, Any]) -> Optional[ChangeEvent]:
    """Parse a ``{eventType, new, old}`` realtime payload."""
    event_type = _PAYLOAD_EVENTS.get(str(payload.get("eventType", "")).upper())
    if event_type is None:
        logger.warning("Ignoring change with unknown event type", extra={"entity": entity})
        return None
    return ChangeEvent(
        entity=entity,
        event_type=event_type,
        record=payload.get("new") or None,
        old_record=payload.get("old") or None,
    )


def _entity_from_arn(arn: str) -> Optional[str]:
    """``arn:...:table/<name>/stream/<ts>`` -> entity whose name the table ends with."""
    parts = arn.split("/")
    table = parts[1] if len(parts) > 1 else ""
    for entity in EntityType:
        if table.endswith(entity.value):
            return entity.value
    return None


def _deserialize(image: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if not image:
        return None
    return {key: _deserializer.deserialize(value) for key, value in image.items()}


def from_stream_record(record: Mapping[str, Any]) -> Optional[ChangeEvent]:
    """Parse one DynamoDB stream record."""
    event_type = _STREAM_EVENTS.get(str(record.get("eventName", "")).upper())
    entity = _entity_from_arn(str(record.get("eventSourceARN", "")))
    if event_type is None or entity is None:
        logger.warning(
            "Ignoring unrecognized stream record",
            extra={"event_name": record.get("eventName"), "arn": record.get("eventSourceARN")},
        )
        return None

    images = record.get("dynamodb") or {}
    return ChangeEvent(
        entity=entity,
        event_type=event_type,
        record=_deserialize(images.get("NewImage")),
        old_record=_deserialize(images.get("OldImage")),
    )


def to_record(event: ChangeEvent) -> Optional[BaseModel]:
    """Validate the new image against the entity model; None when unusable."""
    if event.record is None:
        return None
    model = RECORD_MODELS[EntityType(event.entity)]
    try:
        return model.model_validate(event.record)
    except ValidationError as exc:
        logger.warning(
            "Dropping malformed change record",
            extra={"entity": event.entity, "error": str(exc)},
        )
        return None


def apply_change(rows: Sequence[Any], event: ChangeEvent) -> List[Any]:
    """Return a new working set with ``event`` merged in by record id."""
    record_id = event.record_id
    if record_id is None:
        return list(rows)

    if event.event_type is ChangeType.DELETE:
        return [row for row in rows if str(field_value(row, "id")) != record_id]

    record = to_record(event)
    if record is None:
        return list(rows)

    if event.event_type is ChangeType.INSERT:
        return [record] + [row for row in rows if str(field_value(row, "id")) != record_id]

    return [record if str(field_value(row, "id")) == record_id else row for row in rows]


def apply_changes(rows: Sequence[Any], events: Sequence[ChangeEvent]) -> List[Any]:
    merged = list(rows)
    for event in events:
        merged = apply_change(merged, event)
    return merged
