"""Unit tests for ContractService."""

from datetime import date
from decimal import Decimal

import pytest

from app.application.schemas.contract import ContractWrite
from app.application.services import ContractService
from app.domain.entities import Client, ContractQuery, DictionaryEntry, DictionaryKind, PageRequest
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError


@pytest.fixture
def service(contracts, clients) -> ContractService:
    return ContractService(contracts, clients)


def _write(**overrides) -> ContractWrite:
    values = {"number": "C-1", "date": date(2024, 3, 1)}
    values.update(overrides)
    return ContractWrite(**values)


@pytest.mark.asyncio
async def test_create_dedupes_clients_and_projects_their_status(
    service: ContractService, clients, dictionaries
):
    status = await dictionaries.create(
        DictionaryEntry(kind=DictionaryKind.CLIENT_STATUSES, name="Key account")
    )
    zed = await clients.create(Client(name="Zed", client_status_id=status.id))
    amy = await clients.create(Client(name="Amy"))

    contract = await service.create_contract(
        _write(number=" C-7 ", amount=Decimal("500"), client_ids=[zed.id, amy.id, zed.id])
    )

    assert contract.number == "C-7"
    assert contract.client_ids == sorted([zed.id, amy.id])
    assert [c.name for c in contract.clients] == ["Amy", "Zed"]
    zed_brief = contract.clients[1]
    assert zed_brief.client_status_id == status.id
    assert zed_brief.client_status_name == "Key account"
    assert zed_brief.client_status_color_hex == "#2563EB"
    assert contract.clients[0].client_status_name is None


@pytest.mark.asyncio
async def test_unknown_clients_are_rejected(service: ContractService):
    with pytest.raises(InvalidReferenceError, match=r"\[4\]"):
        await service.create_contract(_write(client_ids=[4]))


@pytest.mark.asyncio
async def test_blank_number_is_rejected_on_update(service: ContractService):
    contract = await service.create_contract(_write())

    with pytest.raises(InvalidReferenceError, match="number is required"):
        await service.update_contract(contract.id, _write(number="   "))


@pytest.mark.asyncio
async def test_update_replaces_links_and_touches(service: ContractService, clients):
    first = await clients.create(Client(name="First"))
    second = await clients.create(Client(name="Second"))
    contract = await service.create_contract(_write(client_ids=[first.id]))

    updated = await service.update_contract(
        contract.id, _write(title=" Support ", client_ids=[second.id])
    )

    assert updated.title == "Support"
    assert updated.client_ids == [second.id]
    assert [c.name for c in updated.clients] == ["Second"]
    assert updated.updated_at is not None


@pytest.mark.asyncio
async def test_list_filters_by_client_and_delete(service: ContractService, clients):
    client = await clients.create(Client(name="Acme"))
    linked = await service.create_contract(_write(number="C-1", client_ids=[client.id]))
    await service.create_contract(_write(number="C-2"))

    page = await service.list_contracts(ContractQuery(client_id=client.id), PageRequest())

    assert [c.id for c in page.items] == [linked.id]
    assert page.items[0].clients[0].name == "Acme"

    assert await service.delete_contract(linked.id) is True
    with pytest.raises(EntityNotFoundError):
        await service.get_contract(linked.id)
