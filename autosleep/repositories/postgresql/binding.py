"""
PostgreSQL implementation of BindingRepository.
"""

import logging
from typing import Iterable, List, Optional

from asyncpg import Pool, PostgresError

from autosleep.domain import ApplicationBinding
from autosleep.repositories.binding import BindingRepository

logger = logging.getLogger(__name__)

CREATE_TABLE_QUERY = """
    CREATE TABLE IF NOT EXISTS application_bindings (
        service_binding_id TEXT PRIMARY KEY,
        service_instance_id TEXT NOT NULL,
        application_id TEXT NOT NULL,
        binding_data TEXT NOT NULL
    )
"""

CREATE_INDEX_QUERY = """
    CREATE INDEX IF NOT EXISTS application_bindings_service_instance_idx
    ON application_bindings (service_instance_id)
"""

UPSERT_QUERY = """
    INSERT INTO application_bindings (
        service_binding_id, service_instance_id, application_id, binding_data
    ) VALUES ($1, $2, $3, $4)
    ON CONFLICT (service_binding_id)
    DO UPDATE SET
        service_instance_id = EXCLUDED.service_instance_id,
        application_id = EXCLUDED.application_id,
        binding_data = EXCLUDED.binding_data
"""


class PostgreSQLBindingRepository(BindingRepository):
    """
    PostgreSQL implementation of BindingRepository.

    Each binding is one row of the ``application_bindings`` table. The key
    columns are stored alongside the full JSON document so lookups by
    binding id or service instance stay indexed.
    """

    def __init__(self, pool: Pool):
        """
        Initialize with an asyncpg connection pool.

        Args:
            pool: asyncpg connection pool for database operations
        """
        self.pool = pool
        logger.debug("Initialized PostgreSQLBindingRepository")

    async def ensure_schema(self) -> None:
        """Create the bindings table and its index if they are missing."""
        async with self.pool.acquire() as conn:
            await conn.execute(CREATE_TABLE_QUERY)
            await conn.execute(CREATE_INDEX_QUERY)
        logger.info("Ensured application_bindings schema")

    async def save(self, entity: ApplicationBinding) -> ApplicationBinding:
        """Upsert a binding."""
        await self.save_all([entity])
        return entity

    async def save_all(
        self, entities: Iterable[ApplicationBinding]
    ) -> List[ApplicationBinding]:
        """Upsert several bindings in one transaction."""
        entities = list(entities)
        if not entities:
            return []

        rows = [
            (
                entity.service_binding_id,
                entity.service_instance_id,
                entity.application_id,
                entity.model_dump_json(),
            )
            for entity in entities
        ]
        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    await conn.executemany(UPSERT_QUERY, rows)
        except PostgresError as e:
            logger.error(
                "PostgreSQLBindingRepository: Failed to save bindings",
                extra={
                    "service_binding_ids": [row[0] for row in rows],
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            raise

        logger.info(
            "Saved bindings to PostgreSQL",
            extra={"service_binding_ids": [row[0] for row in rows]},
        )
        return entities

    async def get(self, entity_id: str) -> Optional[ApplicationBinding]:
        """Retrieves a binding from PostgreSQL."""
        async with self.pool.acquire() as conn:
            query = """
                SELECT binding_data
                FROM application_bindings
                WHERE service_binding_id = $1
            """
            row = await conn.fetchrow(query, entity_id)

        if row is None:
            logger.debug(
                "Binding not found in PostgreSQL",
                extra={"service_binding_id": entity_id},
            )
            return None
        return ApplicationBinding.model_validate_json(row["binding_data"])

    async def find_all(
        self, entity_ids: Optional[Iterable[str]] = None
    ) -> List[ApplicationBinding]:
        """Retrieves all bindings, or those with the given ids."""
        async with self.pool.acquire() as conn:
            if entity_ids is None:
                query = """
                    SELECT binding_data
                    FROM application_bindings
                """
                rows = await conn.fetch(query)
            else:
                ids = list(entity_ids)
                if not ids:
                    return []
                query = """
                    SELECT binding_data
                    FROM application_bindings
                    WHERE service_binding_id = ANY($1)
                """
                rows = await conn.fetch(query, ids)

        bindings = [
            ApplicationBinding.model_validate_json(row["binding_data"])
            for row in rows
        ]
        logger.debug(
            f"Retrieved {len(bindings)} bindings",
            extra={"filtered": entity_ids is not None},
        )
        return bindings

    async def find_by_service_instance(
        self, service_instance_id: str
    ) -> List[ApplicationBinding]:
        """Retrieves the bindings of a service instance."""
        async with self.pool.acquire() as conn:
            query = """
                SELECT binding_data
                FROM application_bindings
                WHERE service_instance_id = $1
            """
            rows = await conn.fetch(query, service_instance_id)

        return [
            ApplicationBinding.model_validate_json(row["binding_data"])
            for row in rows
        ]

    async def exists(self, entity_id: str) -> bool:
        async with self.pool.acquire() as conn:
            query = """
                SELECT EXISTS (
                    SELECT 1
                    FROM application_bindings
                    WHERE service_binding_id = $1
                )
            """
            return bool(await conn.fetchval(query, entity_id))

    async def count(self) -> int:
        async with self.pool.acquire() as conn:
            query = "SELECT COUNT(*) FROM application_bindings"
            return int(await conn.fetchval(query))

    async def delete(self, entity_id: str) -> None:
        """Deletes a binding. Unknown ids are ignored."""
        await self.delete_all_by_ids([entity_id])

    async def delete_entity(self, entity: ApplicationBinding) -> None:
        await self.delete(entity.service_binding_id)

    async def delete_many(self, entities: Iterable[ApplicationBinding]) -> None:
        await self.delete_all_by_ids(
            [entity.service_binding_id for entity in entities]
        )

    async def delete_all_by_ids(self, entity_ids: Iterable[str]) -> None:
        ids = list(entity_ids)
        if not ids:
            return

        query = """
            DELETE FROM application_bindings
            WHERE service_binding_id = ANY($1)
        """
        try:
            async with self.pool.acquire() as conn:
                status = await conn.execute(query, ids)
        except PostgresError as e:
            logger.error(
                "PostgreSQLBindingRepository: Failed to delete bindings",
                extra={
                    "service_binding_ids": ids,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            raise

        logger.info(
            "Deleted bindings from PostgreSQL",
            extra={"service_binding_ids": ids, "status": status},
        )

    async def delete_all(self) -> None:
        async with self.pool.acquire() as conn:
            status = await conn.execute("DELETE FROM application_bindings")
        logger.info(
            "Deleted all bindings from PostgreSQL", extra={"status": status}
        )
