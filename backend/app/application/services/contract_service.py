"""Application service for contracts."""

from app.application.interfaces import ClientRepository, ContractRepository
from app.application.schemas.contract import ContractWrite
from app.domain.entities import Contract, ContractQuery, Page, PageRequest
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError


class ContractService:
    def __init__(self, contracts: ContractRepository, clients: ClientRepository):
        self._contracts = contracts
        self._clients = clients

    async def get_contract(self, contract_id: int) -> Contract:
        contract = await self._contracts.get_by_id(contract_id)
        if contract is None:
            raise EntityNotFoundError("Contract", contract_id)
        await self._attach_clients([contract])
        return contract

    async def list_contracts(self, query: ContractQuery, page: PageRequest) -> Page[Contract]:
        result = await self._contracts.search(query, page)
        await self._attach_clients(result.items)
        return result

    async def create_contract(self, data: ContractWrite) -> Contract:
        number = self._require_number(data.number)
        contract = Contract(
            number=number,
            date=data.date,
            title=data.title.strip(),
            description=data.description,
            amount=data.amount,
            valid_until=data.valid_until,
            client_ids=await self._checked_client_ids(data.client_ids),
        )
        created = await self._contracts.create(contract)
        await self._attach_clients([created])
        return created

    async def update_contract(self, contract_id: int, data: ContractWrite) -> Contract:
        contract = await self.get_contract(contract_id)
        contract.number = self._require_number(data.number)
        contract.date = data.date
        contract.title = data.title.strip()
        contract.description = data.description
        contract.amount = data.amount
        contract.valid_until = data.valid_until
        contract.client_ids = await self._checked_client_ids(data.client_ids)
        contract.touch()
        updated = await self._contracts.update(contract)
        await self._attach_clients([updated])
        return updated

    async def delete_contract(self, contract_id: int) -> bool:
        await self.get_contract(contract_id)
        return await self._contracts.delete(contract_id)

    @staticmethod
    def _require_number(number: str) -> str:
        cleaned = (number or "").strip()
        if not cleaned:
            raise InvalidReferenceError("Contract number is required")
        return cleaned

    async def _attach_clients(self, contracts: list[Contract]) -> None:
        """Fill ``clients`` (name and client status) from each contract's client ids."""
        client_ids = {client_id for contract in contracts for client_id in contract.client_ids}
        briefs = await self._clients.get_briefs(client_ids) if client_ids else {}
        for contract in contracts:
            linked = [briefs[client_id] for client_id in contract.client_ids if client_id in briefs]
            contract.clients = sorted(linked, key=lambda brief: brief.name)

    async def _checked_client_ids(self, client_ids: list[int]) -> list[int]:
        unique = sorted(set(client_ids))
        known = await self._clients.get_names(set(unique))
        missing = [client_id for client_id in unique if client_id not in known]
        if missing:
            raise InvalidReferenceError(f"Unknown client ids: {missing}")
        return unique
