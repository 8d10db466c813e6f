"""Handlers for the filtered table routes: GET /customers, /conversations, /insights.

Query string parameters seed the filter state for the request, e.g.
``/insights?category=pain_point&search=CRM,Billing&start=2025-09-01``.
"""

from __future__ import annotations

import uuid

from models.filters import EntityType
from utils.error_handling import AppError, to_response
from utils.logging_config import get_logger

from . import common

logger = get_logger(__name__)


def _table(entity: EntityType, event):
    correlation_id = str(uuid.uuid4())
    try:
        table = common.get_dashboard_service().table(
            entity, common.query_params(event), correlation_id=correlation_id
        )
    except AppError as exc:
        logger.warning(
            "Table request rejected",
            extra={"correlation_id": correlation_id, "entity": entity.value, "error": str(exc)},
        )
        return to_response(exc)

    status = 502 if table.status == "failed" else 200
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": table.model_dump_json(),
    }


def customers_handler(event, context):
    """Handle GET /customers."""
    return _table(EntityType.CUSTOMERS, event)


def conversations_handler(event, context):
    """Handle GET /conversations."""
    return _table(EntityType.CONVERSATIONS, event)


def insights_handler(event, context):
    """Handle GET /insights."""
    return _table(EntityType.INSIGHTS, event)
