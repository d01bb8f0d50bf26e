"""Append-only audit trail of user actions."""

import json

from app.application.interfaces import UserActivityRepository
from app.application.schemas.user_activity import (
    ActivityActor,
    ActivityCreate,
    ActivityFiltersResponse,
)
from app.domain.entities import ActivityQuery, Page, PageRequest, User, UserActivityLog

MIN_PAGE_SIZE = 10
MAX_PAGE_SIZE = 200


def activity_page(page: int, page_size: int) -> PageRequest:
    return PageRequest(
        page=page,
        page_size=page_size,
        min_page_size=MIN_PAGE_SIZE,
        max_page_size=MAX_PAGE_SIZE,
    )


class UserActivityService:
    def __init__(self, repository: UserActivityRepository):
        self._repository = repository

    async def list_entries(self, query: ActivityQuery, page: PageRequest) -> Page[UserActivityLog]:
        return await self._repository.search(query, page)

    async def filters(self) -> ActivityFiltersResponse:
        values = await self._repository.distinct_values()
        actors = await self._repository.actors()
        return ActivityFiltersResponse(
            categories=values.get("categories", []),
            actions=values.get("actions", []),
            sections=values.get("sections", []),
            http_methods=values.get("httpMethods", []),
            statuses=values.get("statuses", []),
            actors=[ActivityActor.model_validate(actor) for actor in actors],
        )

    async def record(
        self,
        data: ActivityCreate,
        user: User | None,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> UserActivityLog:
        entry = UserActivityLog(
            category=data.category.strip(),
            action=data.action.strip(),
            user_id=user.id if user else None,
            user_email=user.email if user else None,
            user_full_name=user.full_name if user else None,
            section=data.section,
            object_type=data.object_type,
            object_id=data.object_id,
            description=data.description,
            status=data.status,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=json.dumps(data.metadata, ensure_ascii=False) if data.metadata else None,
        )
        return await self._repository.create(entry)

    async def record_request(self, entry: UserActivityLog) -> UserActivityLog:
        return await self._repository.create(entry)
