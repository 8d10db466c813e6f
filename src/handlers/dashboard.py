"""Handlers for the dashboard landing page and the insight vocabulary lists."""

from utils.error_handling import AppError, to_response
from utils.logging_config import get_logger

from . import common

logger = get_logger(__name__)


def lambda_handler(event, context):
    """Handle GET /dashboard."""
    try:
        payload = common.get_dashboard_service().dashboard()
    except AppError as exc:
        logger.error("Dashboard failed to load", extra={"error": str(exc)})
        return to_response(exc)
    return common.json_response(200, payload)


def categories_handler(event, context):
    """Handle GET /insights/categories."""
    try:
        categories = common.get_dashboard_service().categories()
    except AppError as exc:
        return to_response(exc)
    return common.json_response(200, {"categories": categories})


def topics_handler(event, context):
    """Handle GET /insights/topics."""
    try:
        topics = common.get_dashboard_service().topics()
    except AppError as exc:
        return to_response(exc)
    return common.json_response(200, {"topics": topics})
