"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

One function keeps the working-set cache warm across routes.
"""

from typing import Callable, Tuple

from . import dashboard, details, health_check, tables
from .common import json_response


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event contains the HTTP method and path; we route it to the correct
    handler. Routes match by prefix, so more specific paths come first.
    """
    method = event.get("requestContext", {}).get("http", {}).get("method", "")
    path = event.get("requestContext", {}).get("http", {}).get("path", "").rstrip("/")
    route_key = f"{method.upper()} {path}"

    route_table: Tuple[Tuple[str, Callable], ...] = (
        ("GET /health", health_check.lambda_handler),
        ("GET /dashboard", dashboard.lambda_handler),
        ("GET /insights/categories", dashboard.categories_handler),
        ("GET /insights/topics", dashboard.topics_handler),
        ("GET /insights", tables.insights_handler),
        ("GET /customers/", details.customer_handler),
        ("GET /customers", tables.customers_handler),
        ("GET /conversations/", details.conversation_handler),
        ("GET /conversations", tables.conversations_handler),
    )

    for prefix, handler in route_table:
        if route_key.startswith(prefix):
            return handler(event, context)

    return json_response(404, {"message": "Route not found", "route": route_key})
