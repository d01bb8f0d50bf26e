"""Domain entity for the append-only user activity audit log."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ActivityStatus(str, Enum):
    """Outcome classification of an audited action."""

    INFO = "Info"
    SUCCESS = "Success"
    WARNING = "Warning"
    FAILURE = "Failure"

    @classmethod
    def from_http_status(cls, code: int | None) -> "ActivityStatus":
        if code is None:
            return cls.INFO
        if code >= 500:
            return cls.FAILURE
        if code >= 400:
            return cls.WARNING
        if code >= 200:
            return cls.SUCCESS
        return cls.INFO


@dataclass
class UserActivityLog:
    """A single audited user action (API call or client-side event)."""

    category: str
    action: str
    id: int | None = None
    user_id: int | None = None
    user_email: str | None = None
    user_full_name: str | None = None
    section: str | None = None
    object_type: str | None = None
    object_id: str | None = None
    description: str | None = None
    status: ActivityStatus = ActivityStatus.INFO
    ip_address: str | None = None
    user_agent: str | None = None
    http_method: str | None = None
    path: str | None = None
    query_string: str | None = None
    http_status_code: int | None = None
    duration_ms: int | None = None
    metadata: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
