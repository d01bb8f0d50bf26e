"""Application service for acts of completed work."""

from decimal import Decimal

from app.application.interfaces import ActRepository, ClientRepository, UserRepository
from app.application.schemas.act import ActStatusTotals, ActSummaryResponse, ActWrite
from app.domain.entities import Act, ActQuery, ActStatus, Page, PageRequest, User
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError


class ActService:
    def __init__(
        self,
        acts: ActRepository,
        clients: ClientRepository,
        users: UserRepository,
    ):
        self._acts = acts
        self._clients = clients
        self._users = users

    async def get_act(self, act_id: int) -> Act:
        act = await self._acts.get_by_id(act_id)
        if act is None:
            raise EntityNotFoundError("Act", act_id)
        return act

    async def list_acts(self, query: ActQuery, page: PageRequest) -> Page[Act]:
        return await self._acts.search(query, page)

    async def summary(self, query: ActQuery) -> ActSummaryResponse:
        acts = (await self._acts.search(query)).items
        by_status = []
        for status in ActStatus:
            rows = [act for act in acts if act.status == status]
            by_status.append(
                ActStatusTotals(
                    status=status,
                    count=len(rows),
                    amount=sum((act.amount for act in rows), Decimal("0")),
                )
            )
        return ActSummaryResponse(
            total_count=len(acts),
            total_amount=sum((act.amount for act in acts), Decimal("0")),
            by_status=by_status,
        )

    async def list_responsibles(self) -> list[User]:
        return await self._users.list_responsibles()

    async def create_act(self, data: ActWrite) -> Act:
        act = Act(number=data.number.strip(), date=data.date, amount=data.amount)
        await self._fill(act, data)
        return await self._acts.create(act)

    async def update_act(self, act_id: int, data: ActWrite) -> Act:
        act = await self.get_act(act_id)
        await self._fill(act, data)
        act.touch()
        return await self._acts.update(act)

    async def delete_act(self, act_id: int) -> bool:
        await self.get_act(act_id)
        return await self._acts.delete(act_id)

    async def _fill(self, act: Act, data: ActWrite) -> None:
        number = data.number.strip()
        if not number:
            raise InvalidReferenceError("Act number is required")
        if data.client_id is not None and await self._clients.get_by_id(data.client_id) is None:
            raise InvalidReferenceError(f"Unknown ClientId {data.client_id}")
        if data.responsible_id is not None:
            responsible = await self._users.get_by_id(data.responsible_id)
            if responsible is None:
                raise InvalidReferenceError(f"Unknown ResponsibleId {data.responsible_id}")
            act.responsible_name = responsible.full_name

        act.number = number
        act.date = data.date
        act.amount = data.amount
        act.title = data.title.strip()
        act.invoice_number = (data.invoice_number or "").strip() or None
        act.counterparty_inn = (data.counterparty_inn or "").strip() or None
        act.status = data.status
        act.client_id = data.client_id
        act.responsible_id = data.responsible_id
        act.comment = data.comment
