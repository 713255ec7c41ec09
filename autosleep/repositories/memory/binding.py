"""
Memory implementation of BindingRepository.

This module provides an in-memory implementation of the BindingRepository
protocol. Bindings are kept in a dictionary keyed by service binding id,
making it ideal for tests and single-process deployments where no
external storage should be involved. All operations are still async to
maintain interface compatibility.
"""

import logging
from typing import Dict, Iterable, List, Optional

from autosleep.domain import ApplicationBinding
from autosleep.repositories.binding import BindingRepository

logger = logging.getLogger(__name__)


class MemoryBindingRepository(BindingRepository):
    """
    Memory implementation of BindingRepository using a Python dictionary.
    """

    def __init__(self) -> None:
        """Initialize repository with empty in-memory storage."""
        logger.debug("Initializing MemoryBindingRepository")

        self._bindings: Dict[str, ApplicationBinding] = {}

    async def save(self, entity: ApplicationBinding) -> ApplicationBinding:
        """Save a binding, replacing any binding with the same id."""
        # Stored copies are isolated from later changes to the caller's object
        self._bindings[entity.service_binding_id] = entity.model_copy(deep=True)

        logger.info(
            "MemoryBindingRepository: Binding saved successfully",
            extra={
                "service_binding_id": entity.service_binding_id,
                "service_instance_id": entity.service_instance_id,
                "application_id": entity.application_id,
            },
        )
        return entity

    async def save_all(
        self, entities: Iterable[ApplicationBinding]
    ) -> List[ApplicationBinding]:
        return [await self.save(entity) for entity in entities]

    async def get(self, entity_id: str) -> Optional[ApplicationBinding]:
        """Retrieve a binding by its service binding id."""
        binding = self._bindings.get(entity_id)
        if binding is None:
            logger.debug(
                "MemoryBindingRepository: Binding not found",
                extra={"service_binding_id": entity_id},
            )
            return None
        return binding.model_copy(deep=True)

    async def find_all(
        self, entity_ids: Optional[Iterable[str]] = None
    ) -> List[ApplicationBinding]:
        if entity_ids is None:
            bindings = list(self._bindings.values())
        else:
            bindings = [
                self._bindings[entity_id]
                for entity_id in dict.fromkeys(entity_ids)
                if entity_id in self._bindings
            ]
        return [binding.model_copy(deep=True) for binding in bindings]

    async def find_by_service_instance(
        self, service_instance_id: str
    ) -> List[ApplicationBinding]:
        return [
            binding.model_copy(deep=True)
            for binding in self._bindings.values()
            if binding.service_instance_id == service_instance_id
        ]

    async def exists(self, entity_id: str) -> bool:
        return entity_id in self._bindings

    async def count(self) -> int:
        return len(self._bindings)

    async def delete(self, entity_id: str) -> None:
        """Delete a binding by id. Unknown ids are ignored."""
        if self._bindings.pop(entity_id, None) is None:
            logger.debug(
                "MemoryBindingRepository: Nothing to delete",
                extra={"service_binding_id": entity_id},
            )
            return

        logger.info(
            "MemoryBindingRepository: Binding deleted",
            extra={"service_binding_id": entity_id},
        )

    async def delete_entity(self, entity: ApplicationBinding) -> None:
        await self.delete(entity.service_binding_id)

    async def delete_many(self, entities: Iterable[ApplicationBinding]) -> None:
        await self.delete_all_by_ids(
            entity.service_binding_id for entity in entities
        )

    async def delete_all_by_ids(self, entity_ids: Iterable[str]) -> None:
        for entity_id in list(entity_ids):
            await self.delete(entity_id)

    async def delete_all(self) -> None:
        deleted = len(self._bindings)
        self._bindings.clear()
        logger.info(
            "MemoryBindingRepository: All bindings deleted",
            extra={"deleted_count": deleted},
        )
