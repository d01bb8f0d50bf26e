"""In-memory fake repositories shared by the service unit tests."""

import itertools

import pytest

from app.application.interfaces import (
    ActRepository,
    CaseRepository,
    ClientRepository,
    CompanyRepository,
    ContractRepository,
    DictionaryRepository,
    LegalEntityRepository,
    PaymentRepository,
    RoleRepository,
    UserRepository,
)
from app.domain.entities import (
    AccountReference,
    CaseQuery,
    Client,
    ClientBrief,
    ClientCase,
    ClientQuery,
    DictionaryEntry,
    DictionaryKind,
    LegalEntityClient,
    Page,
    PaymentStatus,
    Role,
    SectionPermission,
    User,
)


def _page(items: list, page=None) -> Page:
    if page is None:
        return Page(items=items, total=len(items), page=1, page_size=len(items))
    chunk = items[page.offset : page.offset + page.page_size]
    return Page(items=chunk, total=len(items), page=page.page, page_size=page.page_size)


class FakePaymentRepository(PaymentRepository):
    def __init__(self):
        self.payments = {}
        self._ids = itertools.count(1)

    async def get_by_id(self, payment_id):
        return self.payments.get(payment_id)

    async def search(self, query, page=None):
        items = [
            p
            for p in self.payments.values()
            if (query.client_id is None or p.client_id == query.client_id)
            and (query.case_id is None or p.client_case_id == query.case_id)
            and (query.from_date is None or p.date >= query.from_date)
            and (query.to_date is None or p.date <= query.to_date)
            and (query.type is None or p.type.value == query.type)
            and (query.status is None or p.status.value == query.status)
        ]
        items.sort(key=lambda p: p.date, reverse=query.sort.descending)
        return _page(items, page)

    async def list_invoices(self, query, page=None):
        return _page([p for p in self.payments.values() if p.account], page)

    async def create(self, payment):
        payment.id = next(self._ids)
        self.payments[payment.id] = payment
        return payment

    async def update(self, payment):
        self.payments[payment.id] = payment
        return payment

    async def delete(self, payment_id):
        return self.payments.pop(payment_id, None) is not None

    async def detach_client(self, client_id):
        count = 0
        for payment in self.payments.values():
            if payment.client_id == client_id:
                payment.client_id = None
                payment.client_case_id = None
                count += 1
        return count

    async def detach_case(self, case_id):
        count = 0
        for payment in self.payments.values():
            if payment.client_case_id == case_id:
                payment.client_case_id = None
                count += 1
        return count

    async def mark_overdue(self, today, payment_status_id=None):
        count = 0
        for payment in self.payments.values():
            if not payment.is_paid and payment.status == PaymentStatus.PENDING and payment.date < today:
                payment.status = PaymentStatus.OVERDUE
                if payment_status_id is not None:
                    payment.payment_status_id = payment_status_id
                count += 1
        return count

    def _with_account(self, query):
        return [
            p
            for p in sorted(self.payments.values(), key=lambda p: p.id)
            if p.account
            and (query.client_id is None or p.client_id == query.client_id)
            and (query.case_id is None or p.client_case_id == query.case_id)
            and (not query.search or query.search.strip().lower() in p.account.lower())
        ]

    async def list_accounts(self, query):
        uses: dict[str, int] = {}
        for payment in self._with_account(query):
            uses[payment.account] = uses.get(payment.account, 0) + 1
        ranked = sorted(uses, key=lambda account: (-uses[account], account))
        return ranked[: query.take]

    async def list_account_references(self, query, *, distinct=False):
        rows = sorted(
            self._with_account(query),
            key=lambda p: (-(p.account_date or p.date).toordinal(), p.account),
        )
        refs = [AccountReference(account=p.account, account_date=p.account_date) for p in rows]
        if distinct:
            unique = {}
            for ref in refs:
                unique.setdefault((ref.account, ref.account_date), ref)
            refs = list(unique.values())
        return refs[: query.take]


class FakeClientRepository(ClientRepository):
    def __init__(self, dictionaries: "FakeDictionaryRepository | None" = None):
        self.clients: dict[int, Client] = {}
        self._dictionaries = dictionaries
        self._ids = itertools.count(1)

    async def get_by_id(self, client_id, *, with_cases=False):
        return self.clients.get(client_id)

    async def search(self, query: ClientQuery, page=None):
        return _page(sorted(self.clients.values(), key=lambda c: c.name), page)

    async def get_names(self, client_ids):
        return {cid: self.clients[cid].name for cid in client_ids if cid in self.clients}

    async def get_briefs(self, client_ids):
        briefs = {}
        for cid in client_ids:
            client = self.clients.get(cid)
            if client is None:
                continue
            status = None
            if self._dictionaries is not None and client.client_status_id is not None:
                status = self._dictionaries.entries.get(
                    (DictionaryKind.CLIENT_STATUSES, client.client_status_id)
                )
            briefs[cid] = ClientBrief(
                id=cid,
                name=client.name,
                client_status_id=client.client_status_id,
                client_status_name=status.name if status else None,
                client_status_color_hex=status.color_hex if status else None,
            )
        return briefs

    async def create(self, client):
        client.id = next(self._ids)
        self.clients[client.id] = client
        return client

    async def update(self, client):
        self.clients[client.id] = client
        return client

    async def delete(self, client_id):
        return self.clients.pop(client_id, None) is not None


class FakeCaseRepository(CaseRepository):
    def __init__(self):
        self.cases: dict[int, ClientCase] = {}
        self._ids = itertools.count(1)

    async def get_by_id(self, case_id):
        return self.cases.get(case_id)

    async def search(self, query: CaseQuery, page=None):
        items = [c for c in self.cases.values() if query.client_id in (None, c.client_id)]
        return _page(items, page)

    async def create(self, case):
        case.id = next(self._ids)
        self.cases[case.id] = case
        return case

    async def update(self, case):
        self.cases[case.id] = case
        return case

    async def delete(self, case_id):
        return self.cases.pop(case_id, None) is not None

    async def delete_by_client(self, client_id):
        doomed = [cid for cid, c in self.cases.items() if c.client_id == client_id]
        for cid in doomed:
            del self.cases[cid]
        return len(doomed)


class FakeDictionaryRepository(DictionaryRepository):
    def __init__(self):
        self.entries: dict[tuple[DictionaryKind, int], DictionaryEntry] = {}
        self._ids = itertools.count(1)

    async def get(self, kind, entry_id):
        return self.entries.get((kind, entry_id))

    async def find_by_name(self, kind, name):
        return next(
            (e for (k, _), e in self.entries.items() if k == kind and e.name == name), None
        )

    async def get_all(self, kind, *, payment_type=None, is_active=None):
        items = [
            e
            for (k, _), e in self.entries.items()
            if k == kind
            and (payment_type is None or e.payment_type == payment_type)
            and (is_active is None or e.is_active == is_active)
        ]
        return sorted(items, key=lambda e: e.name)

    async def create(self, entry):
        entry.id = next(self._ids)
        self.entries[(entry.kind, entry.id)] = entry
        return entry

    async def update(self, entry):
        self.entries[(entry.kind, entry.id)] = entry
        return entry

    async def delete(self, kind, entry_id):
        return self.entries.pop((kind, entry_id), None) is not None


class FakeUserRepository(UserRepository):
    def __init__(self, roles: "FakeRoleRepository"):
        self.users: dict[int, User] = {}
        self._roles = roles
        self._ids = itertools.count(1)

    def _with_role(self, user):
        if user is not None:
            role = self._roles.roles.get(user.role_id)
            user.role_name = role.name if role else None
        return user

    async def get_by_id(self, user_id):
        return self._with_role(self.users.get(user_id))

    async def get_by_email(self, email):
        return self._with_role(next((u for u in self.users.values() if u.email == email), None))

    async def get_all(self, *, status=None):
        users = list(self.users.values())
        if status == "pending":
            users = [u for u in users if not u.is_approved]
        elif status == "approved":
            users = [u for u in users if u.is_approved and u.is_active]
        elif status == "inactive":
            users = [u for u in users if not u.is_active]
        return [self._with_role(u) for u in users]

    async def list_responsibles(self):
        return [u for u in self.users.values() if u.is_employee and u.is_active and u.is_approved]

    async def count_by_role(self, role_id):
        return sum(1 for u in self.users.values() if u.role_id == role_id)

    async def create(self, user):
        user.id = next(self._ids)
        self.users[user.id] = user
        return self._with_role(user)

    async def update(self, user):
        self.users[user.id] = user
        return self._with_role(user)

    async def delete(self, user_id):
        return self.users.pop(user_id, None) is not None


class FakeRoleRepository(RoleRepository):
    def __init__(self):
        self.roles: dict[int, Role] = {}
        self.permissions: dict[int, dict[str, SectionPermission]] = {}
        self._ids = itertools.count(1)

    async def get_by_id(self, role_id):
        return self.roles.get(role_id)

    async def get_by_name(self, name):
        return next((r for r in self.roles.values() if r.name == name), None)

    async def get_all(self):
        return sorted(self.roles.values(), key=lambda r: r.name)

    async def create(self, role):
        role.id = next(self._ids)
        self.roles[role.id] = role
        return role

    async def update(self, role):
        self.roles[role.id] = role
        return role

    async def delete(self, role_id):
        return self.roles.pop(role_id, None) is not None

    async def get_permissions(self, role_id):
        return list(self.permissions.get(role_id, {}).values())

    async def save_permissions(self, role_id, permissions):
        self.permissions[role_id] = {p.section: p for p in permissions}

    async def delete_permissions(self, role_id):
        return len(self.permissions.pop(role_id, {}))


class FakeLegalEntityRepository(LegalEntityRepository):
    """Links live on the fake clients' ``legal_entity_id``, as in the database."""

    def __init__(self, clients: FakeClientRepository):
        self.entities = {}
        self._clients = clients
        self._ids = itertools.count(1)

    def _with_clients(self, entity):
        if entity is not None:
            linked = [c for c in self._clients.clients.values() if c.legal_entity_id == entity.id]
            entity.clients = [
                LegalEntityClient(
                    id=c.id, name=c.name, phone=c.phone, email=c.email, is_active=c.is_active
                )
                for c in sorted(linked, key=lambda c: c.name)
            ]
        return entity

    async def get_by_id(self, legal_entity_id):
        return self._with_clients(self.entities.get(legal_entity_id))

    async def search(self, search=None):
        term = (search or "").strip().lower()
        items = [
            e
            for e in self.entities.values()
            if not term or term in e.short_name.lower() or term in (e.inn or "")
        ]
        return [self._with_clients(e) for e in sorted(items, key=lambda e: e.short_name)]

    async def create(self, legal_entity, client_ids):
        legal_entity.id = next(self._ids)
        self.entities[legal_entity.id] = legal_entity
        self._link(legal_entity.id, client_ids)
        return self._with_clients(legal_entity)

    async def update(self, legal_entity, client_ids):
        self.entities[legal_entity.id] = legal_entity
        self._link(legal_entity.id, client_ids)
        return self._with_clients(legal_entity)

    async def delete(self, legal_entity_id):
        self._link(legal_entity_id, [])
        return self.entities.pop(legal_entity_id, None) is not None

    def _link(self, legal_entity_id, client_ids):
        for client in self._clients.clients.values():
            if client.id in client_ids:
                client.legal_entity_id = legal_entity_id
            elif client.legal_entity_id == legal_entity_id:
                client.legal_entity_id = None


class FakeContractRepository(ContractRepository):
    def __init__(self):
        self.contracts = {}
        self._ids = itertools.count(1)

    async def get_by_id(self, contract_id):
        return self.contracts.get(contract_id)

    async def search(self, query, page=None):
        items = [
            c
            for c in self.contracts.values()
            if query.client_id is None or query.client_id in c.client_ids
        ]
        return _page(sorted(items, key=lambda c: c.date, reverse=True), page)

    async def create(self, contract):
        contract.id = next(self._ids)
        self.contracts[contract.id] = contract
        return contract

    async def update(self, contract):
        self.contracts[contract.id] = contract
        return contract

    async def delete(self, contract_id):
        return self.contracts.pop(contract_id, None) is not None


class FakeActRepository(ActRepository):
    def __init__(self):
        self.acts = {}
        self._ids = itertools.count(1)

    async def get_by_id(self, act_id):
        return self.acts.get(act_id)

    async def search(self, query, page=None):
        items = [
            a
            for a in self.acts.values()
            if (query.status is None or a.status.value == query.status)
            and (query.client_id is None or a.client_id == query.client_id)
            and (query.responsible_id is None or a.responsible_id == query.responsible_id)
        ]
        return _page(sorted(items, key=lambda a: a.date, reverse=True), page)

    async def create(self, act):
        act.id = next(self._ids)
        self.acts[act.id] = act
        return act

    async def update(self, act):
        self.acts[act.id] = act
        return act

    async def delete(self, act_id):
        return self.acts.pop(act_id, None) is not None

    async def latest_by_invoice_numbers(self, numbers):
        latest = {}
        for act in sorted(self.acts.values(), key=lambda a: (a.date, a.id)):
            if act.invoice_number in numbers:
                latest[act.invoice_number] = act
        return latest

    async def invoice_numbers_for_responsible(self, responsible_id):
        return sorted(
            {
                a.invoice_number
                for a in self.acts.values()
                if a.responsible_id == responsible_id and a.invoice_number
            }
        )


class FakeCompanyRepository(CompanyRepository):
    def __init__(self):
        self.companies = {}
        self._ids = itertools.count(1)

    async def get_by_id(self, company_id):
        return self.companies.get(company_id)

    async def search(self, query, page=None):
        items = [
            c
            for c in self.companies.values()
            if query.is_active is None or c.is_active == query.is_active
        ]
        return _page(sorted(items, key=lambda c: c.name), page)

    async def create(self, company):
        company.id = next(self._ids)
        self.companies[company.id] = company
        return company

    async def update(self, company):
        self.companies[company.id] = company
        return company

    async def delete(self, company_id):
        return self.companies.pop(company_id, None) is not None


@pytest.fixture
def payments() -> FakePaymentRepository:
    return FakePaymentRepository()


@pytest.fixture
def clients(dictionaries: FakeDictionaryRepository) -> FakeClientRepository:
    return FakeClientRepository(dictionaries)


@pytest.fixture
def cases() -> FakeCaseRepository:
    return FakeCaseRepository()


@pytest.fixture
def dictionaries() -> FakeDictionaryRepository:
    return FakeDictionaryRepository()


@pytest.fixture
def roles() -> FakeRoleRepository:
    return FakeRoleRepository()


@pytest.fixture
def users(roles: FakeRoleRepository) -> FakeUserRepository:
    return FakeUserRepository(roles)


@pytest.fixture
def legal_entities(clients: FakeClientRepository) -> FakeLegalEntityRepository:
    return FakeLegalEntityRepository(clients)


@pytest.fixture
def contracts() -> FakeContractRepository:
    return FakeContractRepository()


@pytest.fixture
def acts() -> FakeActRepository:
    return FakeActRepository()


@pytest.fixture
def companies() -> FakeCompanyRepository:
    return FakeCompanyRepository()
