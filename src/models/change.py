"""Push-based change notifications for externally owned records."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class ChangeType(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class ChangeEvent(BaseModel):
    """One insert/update/delete delivered for an entity table.

    ``record`` is the new image (absent for deletes); ``old_record`` the
    previous image where the feed provides one.
    """

    entity: str
    event_type: ChangeType
    record: Optional[Dict[str, Any]] = None
    old_record: Optional[Dict[str, Any]] = None

    @property
    def record_id(self) -> Optional[str]:
        for image in (self.record, self.old_record):
            if image and image.get("id") is not None:
                return str(image["id"])
        return None
