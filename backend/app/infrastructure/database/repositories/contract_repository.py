"""Concrete repository implementation for Contract backed by SQLAlchemy."""

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import ContractRepository
from app.domain.entities import Contract, ContractQuery, Page, PageRequest
from app.infrastructure.database.models import ClientContractModel, ContractModel
from app.infrastructure.database.repositories.paging import fetch_page, like_pattern

_CONTRACT_SORTS = {
    "number": ContractModel.number,
    "date": ContractModel.date,
    "amount": ContractModel.amount,
    "validuntil": ContractModel.valid_until,
    "createdat": ContractModel.created_at,
}


class SQLAlchemyContractRepository(ContractRepository):
    """Implements the ContractRepository port; client links live in 'client_contracts'."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ContractModel) -> Contract:
        return Contract(
            id=model.id,
            number=model.number,
            title=model.title,
            date=model.date,
            description=model.description,
            amount=model.amount,
            valid_until=model.valid_until,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _load_clients(self, contracts: list[Contract]) -> None:
        ids = [contract.id for contract in contracts]
        if not ids:
            return
        result = await self._session.execute(
            select(ClientContractModel).where(ClientContractModel.contract_id.in_(ids))
        )
        by_id = {contract.id: contract for contract in contracts}
        for link in result.scalars().all():
            by_id[link.contract_id].client_ids.append(link.client_id)
        for contract in contracts:
            contract.client_ids.sort()

    async def get_by_id(self, contract_id: int) -> Contract | None:
        model = await self._session.get(ContractModel, contract_id)
        if model is None:
            return None
        contract = self._to_entity(model)
        await self._load_clients([contract])
        return contract

    async def search(self, query: ContractQuery, page: PageRequest | None = None) -> Page[Contract]:
        stmt = select(ContractModel)
        if query.from_date is not None:
            stmt = stmt.where(ContractModel.date >= query.from_date)
        if query.to_date is not None:
            stmt = stmt.where(ContractModel.date <= query.to_date)
        if query.client_id is not None:
            linked = select(ClientContractModel.contract_id).where(
                ClientContractModel.client_id == query.client_id
            )
            stmt = stmt.where(ContractModel.id.in_(linked))
        if query.search and query.search.strip():
            pattern = like_pattern(query.search)
            stmt = stmt.where(
                or_(
                    ContractModel.number.ilike(pattern),
                    ContractModel.title.ilike(pattern),
                    ContractModel.description.ilike(pattern),
                )
            )
        column = _CONTRACT_SORTS.get(query.sort.field, ContractModel.date)
        order = column.desc() if query.sort.descending else column.asc()
        stmt = stmt.order_by(order, ContractModel.id.desc())
        result = await fetch_page(self._session, stmt, page, self._to_entity)
        await self._load_clients(result.items)
        return result

    async def create(self, contract: Contract) -> Contract:
        model = ContractModel(created_at=contract.created_at)
        self._copy(model, contract)
        self._session.add(model)
        await self._session.flush()
        await self._replace_clients(model.id, contract.client_ids)
        return await self.get_by_id(model.id)

    async def update(self, contract: Contract) -> Contract:
        model = await self._session.get(ContractModel, contract.id)
        if model is None:
            raise ValueError(f"Contract {contract.id} not found in database")
        self._copy(model, contract)
        await self._replace_clients(model.id, contract.client_ids)
        return await self.get_by_id(model.id)

    async def delete(self, contract_id: int) -> bool:
        model = await self._session.get(ContractModel, contract_id)
        if model is None:
            return False
        await self._session.execute(
            delete(ClientContractModel).where(ClientContractModel.contract_id == contract_id)
        )
        await self._session.delete(model)
        await self._session.flush()
        return True

    @staticmethod
    def _copy(model: ContractModel, contract: Contract) -> None:
        model.number = contract.number
        model.title = contract.title
        model.date = contract.date
        model.description = contract.description
        model.amount = contract.amount
        model.valid_until = contract.valid_until
        model.updated_at = contract.updated_at

    async def _replace_clients(self, contract_id: int, client_ids: list[int]) -> None:
        await self._session.execute(
            delete(ClientContractModel).where(ClientContractModel.contract_id == contract_id)
        )
        for client_id in sorted(set(client_ids)):
            self._session.add(ClientContractModel(contract_id=contract_id, client_id=client_id))
        await self._session.flush()
