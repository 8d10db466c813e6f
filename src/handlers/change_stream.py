"""
Change-stream handler.

Invoked with either a DynamoDB stream batch (``Records``) or a realtime
payload (``{"entity": ..., "eventType": ..., "new": ..., "old": ...}``) and
merges the changes into the warm working-set cache.
"""

from services.change_service import from_payload, from_stream_record
from utils.logging_config import get_logger

from . import common

logger = get_logger(__name__)


def _events(event):
    if "Records" in event:
        parsed = (from_stream_record(record) for record in event.get("Records") or [])
    else:
        parsed = iter([from_payload(str(event.get("entity", "")), event)])
    return [change for change in parsed if change is not None]


def lambda_handler(event, context):
    """Merge pushed record changes without refetching."""
    changes = _events(event or {})
    result = common.get_dashboard_service().merge_changes(changes)
    logger.info("Change batch processed", extra={"received": len(changes), **result})
    return {"batchItemFailures": [], **result}
