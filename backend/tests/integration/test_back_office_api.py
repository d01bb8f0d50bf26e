"""HTTP tests for legal entities, contracts, invoices, acts, companies and account lookup."""

import uuid
from datetime import date, timedelta

import pytest
from httpx import AsyncClient


def _unique(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


async def _create_client(client: AsyncClient, headers, **values) -> dict:
    values.setdefault("name", _unique("Client"))
    response = await client.post("/api/v1/clients", json=values, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _create_client_status(client: AsyncClient, headers, name: str) -> dict:
    response = await client.post(
        "/api/dictionaries/client-statuses", json={"name": name}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_legal_entity_crud_with_client_links(client: AsyncClient, admin_headers):
    first = await _create_client(client, admin_headers, name=_unique("Alpha"))
    second = await _create_client(client, admin_headers, name=_unique("Beta"))
    inn = uuid.uuid4().hex[:10]

    created = await client.post(
        "/api/legal-entities",
        json={"shortName": "Acme LLC", "inn": inn, "clientIds": [first["id"], second["id"]]},
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    entity = created.json()
    assert entity["clientsCount"] == 2
    assert [c["id"] for c in entity["clients"]] == [first["id"], second["id"]]

    linked = await client.get(f"/api/v1/clients/{first['id']}", headers=admin_headers)
    assert linked.json()["legalEntityId"] == entity["id"]

    found = await client.get("/api/legal-entities", params={"search": inn}, headers=admin_headers)
    assert [e["id"] for e in found.json()] == [entity["id"]]

    updated = await client.put(
        f"/api/legal-entities/{entity['id']}",
        json={"shortName": "Acme Group", "clientIds": [second["id"]]},
        headers=admin_headers,
    )
    assert updated.status_code == 200, updated.text
    assert updated.json()["shortName"] == "Acme Group"
    assert updated.json()["clientsCount"] == 1
    assert updated.json()["updatedAt"] is not None

    unlinked = await client.get(f"/api/v1/clients/{first['id']}", headers=admin_headers)
    assert unlinked.json()["legalEntityId"] is None

    deleted = await client.delete(f"/api/legal-entities/{entity['id']}", headers=admin_headers)
    assert deleted.status_code == 204
    released = await client.get(f"/api/v1/clients/{second['id']}", headers=admin_headers)
    assert released.json()["legalEntityId"] is None
    missing = await client.get(f"/api/legal-entities/{entity['id']}", headers=admin_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_legal_entity_rejects_unknown_clients(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/legal-entities",
        json={"shortName": "Ghost LLC", "clientIds": [987650, 987651]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "987650" in response.json()["detail"]


@pytest.mark.asyncio
async def test_client_rejects_unknown_status_and_legal_entity(client: AsyncClient, admin_headers):
    bad_status = await client.post(
        "/api/v1/clients", json={"name": "Bad", "clientStatusId": 987654}, headers=admin_headers
    )
    bad_entity = await client.post(
        "/api/v1/clients", json={"name": "Bad", "legalEntityId": 987654}, headers=admin_headers
    )

    assert bad_status.status_code == 400
    assert "ClientStatusId" in bad_status.json()["detail"]
    assert bad_entity.status_code == 400
    assert "LegalEntityId" in bad_entity.json()["detail"]


@pytest.mark.asyncio
async def test_contract_crud_projects_client_status(client: AsyncClient, admin_headers):
    status = await _create_client_status(client, admin_headers, _unique("Key"))
    owner = await _create_client(client, admin_headers, clientStatusId=status["id"])

    created = await client.post(
        "/api/contracts",
        json={
            "number": _unique("C"),
            "date": "2024-03-01",
            "amount": 1500,
            "clientIds": [owner["id"], owner["id"]],
        },
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    contract = created.json()
    assert contract["clientIds"] == [owner["id"]]
    assert contract["clients"] == [
        {
            "id": owner["id"],
            "name": owner["name"],
            "clientStatusId": status["id"],
            "clientStatusName": status["name"],
            "clientStatusColorHex": "#2563EB",
        }
    ]

    listed = await client.get(
        "/api/contracts", params={"clientId": owner["id"]}, headers=admin_headers
    )
    assert [c["id"] for c in listed.json()["items"]] == [contract["id"]]

    updated = await client.put(
        f"/api/contracts/{contract['id']}",
        json={"number": contract["number"], "date": "2024-03-02", "clientIds": []},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["clients"] == []

    unknown = await client.post(
        "/api/contracts",
        json={"number": _unique("C"), "date": "2024-03-01", "clientIds": [987654]},
        headers=admin_headers,
    )
    assert unknown.status_code == 400

    deleted = await client.delete(f"/api/contracts/{contract['id']}", headers=admin_headers)
    assert deleted.status_code == 204


@pytest.mark.asyncio
async def test_invoice_maps_onto_payment(client: AsyncClient, admin_headers):
    status = await _create_client_status(client, admin_headers, _unique("Regular"))
    owner = await _create_client(client, admin_headers, clientStatusId=status["id"])
    number = _unique("INV")
    due = (date.today() + timedelta(days=20)).isoformat()

    created = await client.post(
        "/api/invoices",
        json={
            "number": number,
            "date": date.today().isoformat(),
            "dueDate": due,
            "amount": 900,
            "clientId": owner["id"],
            "actReference": "ACT-1",
        },
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    invoice = created.json()
    assert invoice["status"] == "Pending"
    assert invoice["clientName"] == owner["name"]
    assert invoice["clientStatusName"] == status["name"]
    assert invoice["clientStatusColorHex"] == "#2563EB"

    payment = await client.get(f"/api/v1/payments/{invoice['id']}", headers=admin_headers)
    assert payment.status_code == 200
    assert payment.json()["account"] == number
    assert payment.json()["date"] == due
    assert payment.json()["notes"] == "ACT-1"

    paid = await client.put(
        f"/api/invoices/{invoice['id']}",
        json={
            "number": number,
            "date": date.today().isoformat(),
            "dueDate": due,
            "amount": 900,
            "clientId": owner["id"],
            "status": "Completed",
        },
        headers=admin_headers,
    )
    assert paid.status_code == 200, paid.text
    assert paid.json()["isPaid"] is True
    assert paid.json()["paidAmount"] == 900

    summary = await client.get(
        "/api/invoices/summary", params={"clientId": owner["id"]}, headers=admin_headers
    )
    assert summary.json()["paid"] == {"amount": 900, "count": 1}

    no_client = await client.post(
        "/api/invoices",
        json={"number": _unique("INV"), "date": "2024-01-01", "amount": 1, "clientId": 987654},
        headers=admin_headers,
    )
    assert no_client.status_code == 400

    blank_number = await client.post(
        "/api/invoices",
        json={"number": "  ", "date": "2024-01-01", "amount": 1, "clientId": owner["id"]},
        headers=admin_headers,
    )
    assert blank_number.status_code == 400


@pytest.mark.asyncio
async def test_act_crud_and_summary(client: AsyncClient, admin_headers):
    owner = await _create_client(client, admin_headers)

    created = await client.post(
        "/api/acts",
        json={
            "number": _unique("A"),
            "date": "2024-05-01",
            "amount": 300,
            "status": "Signed",
            "clientId": owner["id"],
        },
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    act = created.json()
    assert act["status"] == "Signed"

    summary = await client.get(
        "/api/acts/summary", params={"clientId": owner["id"]}, headers=admin_headers
    )
    signed = next(row for row in summary.json()["byStatus"] if row["status"] == "Signed")
    assert signed == {"status": "Signed", "count": 1, "amount": 300}

    unknown = await client.post(
        "/api/acts",
        json={"number": "A-X", "date": "2024-05-01", "amount": 1, "responsibleId": 987654},
        headers=admin_headers,
    )
    assert unknown.status_code == 400

    deleted = await client.delete(f"/api/acts/{act['id']}", headers=admin_headers)
    assert deleted.status_code == 204


@pytest.mark.asyncio
async def test_company_members(client: AsyncClient, admin_headers):
    member = await _create_client(client, admin_headers)

    created = await client.post(
        "/api/companies",
        json={"name": _unique("Co"), "members": [{"clientId": member["id"], "role": "CEO"}]},
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    company = created.json()
    assert company["members"][0]["clientName"] == member["name"]
    assert company["members"][0]["role"] == "CEO"

    cleared = await client.put(
        f"/api/companies/{company['id']}",
        json={"name": company["name"], "members": []},
        headers=admin_headers,
    )
    assert cleared.json()["members"] == []

    unknown = await client.post(
        "/api/companies",
        json={"name": "Ghost", "members": [{"clientId": 987654}]},
        headers=admin_headers,
    )
    assert unknown.status_code == 400


@pytest.mark.asyncio
async def test_account_lookup(client: AsyncClient, admin_headers):
    owner = await _create_client(client, admin_headers)
    prefix = _unique("ACC")
    for suffix, account_date in (("1", "2024-02-01"), ("2", "2024-03-01"), ("2", "2024-03-01")):
        response = await client.post(
            "/api/payments",
            json={
                "amount": 10,
                "date": "2024-04-01",
                "clientId": owner["id"],
                "account": f"{prefix}-{suffix}",
                "accountDate": account_date,
            },
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text

    ranked = await client.get(
        "/api/accounts", params={"clientId": owner["id"]}, headers=admin_headers
    )
    assert ranked.status_code == 200
    assert ranked.json() == [f"{prefix}-2", f"{prefix}-1"]

    dated = await client.get(
        "/api/accounts",
        params={"q": prefix.lower(), "withDate": "true", "dedupe": "true"},
        headers=admin_headers,
    )
    assert dated.json() == [
        {"account": f"{prefix}-2", "accountDate": "2024-03-01"},
        {"account": f"{prefix}-1", "accountDate": "2024-02-01"},
    ]

    limited = await client.get(
        "/api/accounts", params={"q": prefix, "withDate": "true", "take": 1}, headers=admin_headers
    )
    assert len(limited.json()) == 1
