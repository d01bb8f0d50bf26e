"""Concrete repository implementation for the activity audit log."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import UserActivityRepository
from app.domain.entities import ActivityQuery, ActivityStatus, Page, PageRequest, UserActivityLog
from app.infrastructure.database.models import UserActivityLogModel
from app.infrastructure.database.repositories.paging import fetch_page, like_pattern

_COPIED_FIELDS = (
    "user_id",
    "user_email",
    "user_full_name",
    "category",
    "action",
    "section",
    "object_type",
    "object_id",
    "description",
    "ip_address",
    "user_agent",
    "http_method",
    "path",
    "query_string",
    "http_status_code",
    "duration_ms",
    "created_at",
)


class SQLAlchemyUserActivityRepository(UserActivityRepository):
    """Implements the UserActivityRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserActivityLogModel) -> UserActivityLog:
        entry = UserActivityLog(
            id=model.id,
            category=model.category,
            action=model.action,
            status=ActivityStatus(model.status),
            metadata=model.metadata_json,
        )
        for name in _COPIED_FIELDS:
            setattr(entry, name, getattr(model, name))
        return entry

    async def create(self, entry: UserActivityLog) -> UserActivityLog:
        model = UserActivityLogModel(status=entry.status.value, metadata_json=entry.metadata)
        for name in _COPIED_FIELDS:
            setattr(model, name, getattr(entry, name))
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def search(self, query: ActivityQuery, page: PageRequest) -> Page[UserActivityLog]:
        stmt = select(UserActivityLogModel)
        if query.from_time is not None:
            stmt = stmt.where(UserActivityLogModel.created_at >= query.from_time)
        if query.to_time is not None:
            stmt = stmt.where(UserActivityLogModel.created_at <= query.to_time)
        if query.user_id is not None:
            stmt = stmt.where(UserActivityLogModel.user_id == query.user_id)
        if query.category:
            stmt = stmt.where(UserActivityLogModel.category == query.category)
        if query.action:
            stmt = stmt.where(UserActivityLogModel.action == query.action)
        if query.section:
            stmt = stmt.where(UserActivityLogModel.section == query.section)
        if query.http_method:
            stmt = stmt.where(UserActivityLogModel.http_method == query.http_method.upper())
        if query.status:
            stmt = stmt.where(UserActivityLogModel.status == query.status)
        if query.search and query.search.strip():
            pattern = like_pattern(query.search)
            stmt = stmt.where(
                or_(
                    UserActivityLogModel.description.ilike(pattern),
                    UserActivityLogModel.user_email.ilike(pattern),
                    UserActivityLogModel.user_full_name.ilike(pattern),
                    UserActivityLogModel.path.ilike(pattern),
                    UserActivityLogModel.object_id.ilike(pattern),
                )
            )
        stmt = stmt.order_by(
            UserActivityLogModel.created_at.desc(), UserActivityLogModel.id.desc()
        )
        return await fetch_page(self._session, stmt, page, self._to_entity)

    async def distinct_values(self) -> dict[str, list[str]]:
        columns = {
            "categories": UserActivityLogModel.category,
            "actions": UserActivityLogModel.action,
            "sections": UserActivityLogModel.section,
            "httpMethods": UserActivityLogModel.http_method,
            "statuses": UserActivityLogModel.status,
        }
        values: dict[str, list[str]] = {}
        for key, column in columns.items():
            result = await self._session.execute(
                select(column).where(column.is_not(None)).distinct().order_by(column)
            )
            values[key] = [value for value in result.scalars().all() if value]
        return values

    async def actors(self) -> list[dict]:
        result = await self._session.execute(
            select(
                UserActivityLogModel.user_id,
                UserActivityLogModel.user_email,
                UserActivityLogModel.user_full_name,
            )
            .where(UserActivityLogModel.user_id.is_not(None))
            .distinct()
            .order_by(UserActivityLogModel.user_email)
        )
        return [
            {"userId": row.user_id, "email": row.user_email, "fullName": row.user_full_name}
            for row in result.all()
        ]
