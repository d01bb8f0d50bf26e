"""Concrete repository implementation for Company backed by SQLAlchemy."""

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import CompanyRepository
from app.domain.entities import Company, CompanyMembership, CompanyQuery, Page, PageRequest
from app.infrastructure.database.models import ClientModel, CompanyClientModel, CompanyModel
from app.infrastructure.database.repositories.paging import fetch_page, like_pattern

_SCALAR_FIELDS = (
    "name",
    "full_name",
    "short_name",
    "inn",
    "kpp",
    "email",
    "phone",
    "actual_address",
    "legal_address",
    "notes",
    "is_active",
)


class SQLAlchemyCompanyRepository(CompanyRepository):
    """Implements the CompanyRepository port; members live in 'company_clients'."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CompanyModel) -> Company:
        company = Company(id=model.id, name=model.name, created_at=model.created_at)
        for name in _SCALAR_FIELDS[1:]:
            setattr(company, name, getattr(model, name))
        return company

    async def _load_members(self, companies: list[Company]) -> None:
        ids = [company.id for company in companies]
        if not ids:
            return
        result = await self._session.execute(
            select(CompanyClientModel, ClientModel.name)
            .join(ClientModel, ClientModel.id == CompanyClientModel.client_id)
            .where(CompanyClientModel.company_id.in_(ids))
            .order_by(ClientModel.name)
        )
        by_company = {company.id: company for company in companies}
        for link, client_name in result.all():
            by_company[link.company_id].members.append(
                CompanyMembership(
                    company_id=link.company_id,
                    client_id=link.client_id,
                    role=link.role,
                    client_name=client_name,
                    created_at=link.created_at,
                )
            )

    async def get_by_id(self, company_id: int) -> Company | None:
        model = await self._session.get(CompanyModel, company_id)
        if model is None:
            return None
        company = self._to_entity(model)
        await self._load_members([company])
        return company

    async def search(self, query: CompanyQuery, page: PageRequest | None = None) -> Page[Company]:
        stmt = select(CompanyModel)
        if query.is_active is not None:
            stmt = stmt.where(CompanyModel.is_active.is_(query.is_active))
        if query.search and query.search.strip():
            pattern = like_pattern(query.search)
            stmt = stmt.where(
                or_(
                    CompanyModel.name.ilike(pattern),
                    CompanyModel.full_name.ilike(pattern),
                    CompanyModel.short_name.ilike(pattern),
                    CompanyModel.inn.ilike(pattern),
                    CompanyModel.email.ilike(pattern),
                    CompanyModel.phone.ilike(pattern),
                )
            )
        stmt = stmt.order_by(CompanyModel.name.asc(), CompanyModel.id.asc())
        result = await fetch_page(self._session, stmt, page, self._to_entity)
        await self._load_members(result.items)
        return result

    async def create(self, company: Company) -> Company:
        model = CompanyModel(created_at=company.created_at)
        for name in _SCALAR_FIELDS:
            setattr(model, name, getattr(company, name))
        self._session.add(model)
        await self._session.flush()
        await self._replace_members(model.id, company.members)
        return await self.get_by_id(model.id)

    async def update(self, company: Company) -> Company:
        model = await self._session.get(CompanyModel, company.id)
        if model is None:
            raise ValueError(f"Company {company.id} not found in database")
        for name in _SCALAR_FIELDS:
            setattr(model, name, getattr(company, name))
        await self._replace_members(model.id, company.members)
        return await self.get_by_id(model.id)

    async def delete(self, company_id: int) -> bool:
        model = await self._session.get(CompanyModel, company_id)
        if model is None:
            return False
        await self._session.execute(
            delete(CompanyClientModel).where(CompanyClientModel.company_id == company_id)
        )
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _replace_members(self, company_id: int, members: list[CompanyMembership]) -> None:
        await self._session.execute(
            delete(CompanyClientModel).where(CompanyClientModel.company_id == company_id)
        )
        seen: set[int] = set()
        for member in members:
            if member.client_id in seen:
                continue
            seen.add(member.client_id)
            self._session.add(
                CompanyClientModel(
                    company_id=company_id,
                    client_id=member.client_id,
                    role=member.role or "",
                    created_at=member.created_at,
                )
            )
        await self._session.flush()
