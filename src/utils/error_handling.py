"""Custom exceptions and helpers for consistent error responses."""

import json
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=422)


class FetchFailure(AppError):
    """Raised when the backing data source rejects or errors on a fetch.

    Callers must surface this as a failed state rather than an empty result.
    """

    def __init__(self, message: str = "Unable to load data", entity: Optional[str] = None):
        super().__init__(message, status_code=502)
        self.entity = entity


def to_response(error: AppError) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    body: Dict[str, Any] = {"message": str(error), "status": "error"}
    if isinstance(error, FetchFailure):
        body["status"] = "failed"
        if error.entity:
            body["entity"] = error.entity
    return {
        "statusCode": error.status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }
