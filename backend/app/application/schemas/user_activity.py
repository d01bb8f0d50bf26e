"""Pydantic DTOs for the activity audit log."""

from datetime import datetime
from typing import Any

from pydantic import Field

from app.application.schemas.common import CamelModel
from app.domain.entities import ActivityStatus


class ActivityCreate(CamelModel):
    category: str = Field(..., min_length=1, max_length=100)
    action: str = Field(..., min_length=1, max_length=150)
    section: str | None = Field(None, max_length=100)
    object_type: str | None = Field(None, max_length=100)
    object_id: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=1000)
    status: ActivityStatus = ActivityStatus.INFO
    metadata: dict[str, Any] | None = None


class ActivityResponse(CamelModel):
    id: int
    user_id: int | None
    user_email: str | None
    user_full_name: str | None
    category: str
    action: str
    section: str | None
    object_type: str | None
    object_id: str | None
    description: str | None
    status: ActivityStatus
    ip_address: str | None
    user_agent: str | None
    http_method: str | None
    path: str | None
    query_string: str | None
    http_status_code: int | None
    duration_ms: int | None
    metadata: str | None = Field(None, alias="metadataJson")
    created_at: datetime


class ActivityActor(CamelModel):
    user_id: int
    email: str | None
    full_name: str | None


class ActivityFiltersResponse(CamelModel):
    categories: list[str]
    actions: list[str]
    sections: list[str]
    http_methods: list[str]
    statuses: list[str]
    actors: list[ActivityActor]
