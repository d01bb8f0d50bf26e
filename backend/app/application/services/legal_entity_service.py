"""Application service for legal entities and their client links."""

import logging

from app.application.interfaces import ClientRepository, LegalEntityRepository
from app.application.schemas.legal_entity import LegalEntityWrite
from app.domain.entities import LegalEntity
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError

logger = logging.getLogger(__name__)


class LegalEntityService:
    def __init__(self, legal_entities: LegalEntityRepository, clients: ClientRepository):
        self._legal_entities = legal_entities
        self._clients = clients

    async def get_legal_entity(self, legal_entity_id: int) -> LegalEntity:
        entity = await self._legal_entities.get_by_id(legal_entity_id)
        if entity is None:
            raise EntityNotFoundError("LegalEntity", legal_entity_id)
        return entity

    async def list_legal_entities(self, search: str | None = None) -> list[LegalEntity]:
        return await self._legal_entities.search(search)

    async def create_legal_entity(self, data: LegalEntityWrite) -> LegalEntity:
        entity = LegalEntity(short_name=data.short_name.strip())
        client_ids = await self._fill(entity, data)
        return await self._legal_entities.create(entity, client_ids)

    async def update_legal_entity(self, legal_entity_id: int, data: LegalEntityWrite) -> LegalEntity:
        entity = await self.get_legal_entity(legal_entity_id)
        client_ids = await self._fill(entity, data)
        entity.touch()
        return await self._legal_entities.update(entity, client_ids)

    async def delete_legal_entity(self, legal_entity_id: int) -> bool:
        entity = await self.get_legal_entity(legal_entity_id)
        logger.info(
            "Deleting legal entity %s; unlinking %d clients", legal_entity_id, entity.clients_count
        )
        return await self._legal_entities.delete(legal_entity_id)

    async def _fill(self, entity: LegalEntity, data: LegalEntityWrite) -> list[int]:
        """Copy the request onto ``entity`` and return the validated client ids."""
        short_name = data.short_name.strip()
        if not short_name:
            raise InvalidReferenceError("ShortName is required")
        values = data.model_dump(exclude={"client_ids"})
        for name, value in values.items():
            if isinstance(value, str):
                value = value.strip() or None
            setattr(entity, name, value)
        entity.short_name = short_name

        client_ids = sorted(set(data.client_ids))
        known = await self._clients.get_names(set(client_ids))
        missing = [client_id for client_id in client_ids if client_id not in known]
        if missing:
            raise InvalidReferenceError(f"Unknown client ids: {missing}")
        return client_ids
