"""Application service for companies and their client memberships."""

from app.application.interfaces import ClientRepository, CompanyRepository
from app.application.schemas.company import CompanyWrite
from app.domain.entities import Company, CompanyMembership, CompanyQuery, Page, PageRequest
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError


class CompanyService:
    def __init__(self, companies: CompanyRepository, clients: ClientRepository):
        self._companies = companies
        self._clients = clients

    async def get_company(self, company_id: int) -> Company:
        company = await self._companies.get_by_id(company_id)
        if company is None:
            raise EntityNotFoundError("Company", company_id)
        return company

    async def list_companies(self, query: CompanyQuery, page: PageRequest) -> Page[Company]:
        return await self._companies.search(query, page)

    async def create_company(self, data: CompanyWrite) -> Company:
        company = Company(name=data.name.strip())
        await self._fill(company, data)
        return await self._companies.create(company)

    async def update_company(self, company_id: int, data: CompanyWrite) -> Company:
        company = await self.get_company(company_id)
        await self._fill(company, data)
        return await self._companies.update(company)

    async def delete_company(self, company_id: int) -> bool:
        await self.get_company(company_id)
        return await self._companies.delete(company_id)

    async def _fill(self, company: Company, data: CompanyWrite) -> None:
        """Copy the request onto ``company``, replacing its member list."""
        values = data.model_dump(exclude={"members"})
        for name, value in values.items():
            setattr(company, name, value.strip() if isinstance(value, str) else value)

        # One link per client; a repeated client keeps its last role.
        roles = {member.client_id: member.role.strip() for member in data.members}
        known = await self._clients.get_names(set(roles))
        missing = sorted(set(roles) - set(known))
        if missing:
            raise InvalidReferenceError(f"Unknown client ids: {missing}")
        company.members = [
            CompanyMembership(client_id=client_id, role=role, client_name=known[client_id])
            for client_id, role in roles.items()
        ]
