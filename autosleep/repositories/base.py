"""
Generic base repository protocol for keyed record storage.

This module defines a generic BaseRepository protocol capturing the
create/read/update/delete/count operations every record store offers,
whatever its storage engine.

All repository operations follow the same principles:

- **Upsert**: saving an entity whose key is already stored replaces it,
  it never creates a duplicate.

- **Absence is not an error**: looking up a missing key returns None and
  deleting a missing key is a silent no-op.

- **Domain Objects**: Methods accept and return domain objects or
  primitives, never engine-specific types.

Concrete engines (memory, PostgreSQL) are verified against this contract
by a shared conformance test suite.
"""

from typing import (
    Iterable,
    List,
    Optional,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from pydantic import BaseModel

# Type variable bound to Pydantic BaseModel for domain entities
T = TypeVar("T", bound=BaseModel)


@runtime_checkable
class BaseRepository(Protocol[T]):
    """Generic base repository protocol for keyed records.

    Type Parameter:
        T: The domain entity type (must extend Pydantic BaseModel)
    """

    async def save(self, entity: T) -> T:
        """Save an entity, replacing any entity stored under the same key.

        Args:
            entity: Complete entity to save

        Returns:
            The saved entity
        """
        ...

    async def save_all(self, entities: Iterable[T]) -> List[T]:
        """Save several entities.

        Args:
            entities: Entities to save

        Returns:
            The saved entities, in the order given
        """
        ...

    async def get(self, entity_id: str) -> Optional[T]:
        """Retrieve an entity by key.

        Args:
            entity_id: Unique entity identifier

        Returns:
            Entity if found, None otherwise
        """
        ...

    async def find_all(
        self, entity_ids: Optional[Iterable[str]] = None
    ) -> List[T]:
        """Retrieve every entity, or only those with the given keys.

        Args:
            entity_ids: Keys to look up. Unknown keys are skipped. When
                None, every stored entity is returned.

        Returns:
            Matching entities, in no particular order
        """
        ...

    async def exists(self, entity_id: str) -> bool:
        """Tell whether an entity is stored under ``entity_id``."""
        ...

    async def count(self) -> int:
        """Return the number of stored entities."""
        ...

    async def delete(self, entity_id: str) -> None:
        """Delete the entity stored under ``entity_id``, if any."""
        ...

    async def delete_entity(self, entity: T) -> None:
        """Delete the stored entity with the same key as ``entity``."""
        ...

    async def delete_many(self, entities: Iterable[T]) -> None:
        """Delete the stored entities with the same keys as ``entities``."""
        ...

    async def delete_all_by_ids(self, entity_ids: Iterable[str]) -> None:
        """Delete the entities stored under the given keys."""
        ...

    async def delete_all(self) -> None:
        """Delete every stored entity."""
        ...
