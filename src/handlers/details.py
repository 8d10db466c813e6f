"""Handlers for GET /customers/{id} and GET /conversations/{id}."""

from utils.error_handling import AppError, ValidationError, to_response
from utils.logging_config import get_logger

from . import common

logger = get_logger(__name__)


def customer_handler(event, context):
    """Return a customer with its conversations and insights."""
    customer_id = common.path_id(event, "customers")
    try:
        if not customer_id:
            raise ValidationError("customer id is required")
        detail = common.get_dashboard_service().customer_detail(customer_id)
    except AppError as exc:
        return to_response(exc)

    logger.info("Customer detail served", extra={"customer_id": customer_id})
    return common.json_response(200, detail)


def conversation_handler(event, context):
    """Return a conversation with its customer and insights."""
    conversation_id = common.path_id(event, "conversations")
    try:
        if not conversation_id:
            raise ValidationError("conversation id is required")
        detail = common.get_dashboard_service().conversation_detail(conversation_id)
    except AppError as exc:
        return to_response(exc)

    logger.info("Conversation detail served", extra={"conversation_id": conversation_id})
    return common.json_response(200, detail)
