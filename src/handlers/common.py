"""Helpers shared by the HTTP handlers."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from utils.logging_config import get_logger

logger = get_logger(__name__)

# Lazy-loaded service shared by every route so warm invocations reuse its cache
_dashboard_service: Optional["DashboardService"] = None


def get_dashboard_service():
    """Lazy-load DashboardService."""
    global _dashboard_service
    if _dashboard_service is None:
        from services.dashboard_service import DashboardService
        _dashboard_service = DashboardService()
    return _dashboard_service


def json_response(status: int, body: Any) -> Dict:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def query_params(event: Dict) -> Dict[str, Any]:
    return event.get("queryStringParameters") or {}


def path_id(event: Dict, collection: str) -> Optional[str]:
    """``{id}`` from path parameters, or the segment after ``/<collection>/``."""
    path_params = event.get("pathParameters") or {}
    if path_params.get("id"):
        return path_params["id"]
    path = event.get("requestContext", {}).get("http", {}).get("path", "")
    parts = [part for part in path.split("/") if part]
    if len(parts) >= 2 and parts[0] == collection:
        return parts[1]
    return None
