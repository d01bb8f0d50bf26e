"""Unit tests for CompanyService."""

import pytest

from app.application.schemas.company import CompanyMemberWrite, CompanyWrite
from app.application.services import CompanyService
from app.domain.entities import Client, CompanyQuery, PageRequest
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError


@pytest.fixture
def service(companies, clients) -> CompanyService:
    return CompanyService(companies, clients)


@pytest.mark.asyncio
async def test_members_keep_last_role_per_client(service: CompanyService, clients):
    client = await clients.create(Client(name="Jane"))

    company = await service.create_company(
        CompanyWrite(
            name=" Acme ",
            inn=" 7701 ",
            members=[
                CompanyMemberWrite(client_id=client.id, role="Accountant"),
                CompanyMemberWrite(client_id=client.id, role=" Director "),
            ],
        )
    )

    assert company.name == "Acme"
    assert company.inn == "7701"
    assert len(company.members) == 1
    assert company.members[0].role == "Director"
    assert company.members[0].client_name == "Jane"


@pytest.mark.asyncio
async def test_unknown_member_is_rejected(service: CompanyService):
    with pytest.raises(InvalidReferenceError, match=r"\[3\]"):
        await service.create_company(
            CompanyWrite(name="Acme", members=[CompanyMemberWrite(client_id=3)])
        )


@pytest.mark.asyncio
async def test_update_list_and_delete(service: CompanyService):
    company = await service.create_company(CompanyWrite(name="Acme"))
    await service.create_company(CompanyWrite(name="Dormant", is_active=False))

    updated = await service.update_company(company.id, CompanyWrite(name="Acme Group"))
    active = await service.list_companies(CompanyQuery(is_active=True), PageRequest())

    assert updated.name == "Acme Group"
    assert [c.name for c in active.items] == ["Acme Group"]

    assert await service.delete_company(company.id) is True
    with pytest.raises(EntityNotFoundError):
        await service.delete_company(company.id)
