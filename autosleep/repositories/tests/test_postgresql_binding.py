"""
Tests for PostgreSQLBindingRepository.

Unit tests check the SQL issued through a mocked asyncpg pool. The e2e
class runs the shared contract against a real database and is skipped
unless AUTOSLEEP_TEST_DATABASE_URL points to one.
"""

import os
from typing import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest
import pytest_asyncio

from autosleep.domain.tests.factories import ApplicationBindingFactory
from autosleep.repositories import BindingRepository
from autosleep.repositories.postgresql import PostgreSQLBindingRepository
from .contract import BindingRepositoryContractTestMixin

TEST_DATABASE_URL = os.environ.get("AUTOSLEEP_TEST_DATABASE_URL")


def _mock_pool() -> tuple[MagicMock, AsyncMock]:
    """Create a pool whose acquire() yields a mocked connection."""
    conn = AsyncMock()
    conn.transaction = MagicMock()
    conn.transaction.return_value.__aenter__ = AsyncMock(return_value=None)
    conn.transaction.return_value.__aexit__ = AsyncMock(return_value=False)

    pool = MagicMock()
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
    return pool, conn


class TestPostgreSQLBindingRepositoryQueries:
    """SQL issued by the repository, checked against a mocked pool."""

    @pytest.mark.asyncio
    async def test_ensure_schema_creates_table_and_index(self) -> None:
        pool, conn = _mock_pool()
        repo = PostgreSQLBindingRepository(pool)

        await repo.ensure_schema()

        statements = [call.args[0] for call in conn.execute.await_args_list]
        assert len(statements) == 2
        assert "CREATE TABLE IF NOT EXISTS application_bindings" in statements[0]
        assert "CREATE INDEX IF NOT EXISTS" in statements[1]

    @pytest.mark.asyncio
    async def test_save_upserts_in_transaction(self) -> None:
        pool, conn = _mock_pool()
        repo = PostgreSQLBindingRepository(pool)
        binding = ApplicationBindingFactory.build()

        result = await repo.save(binding)

        assert result == binding
        conn.transaction.assert_called_once()
        query, rows = conn.executemany.await_args.args
        assert "ON CONFLICT (service_binding_id)" in query
        assert rows == [
            (
                binding.service_binding_id,
                binding.service_instance_id,
                binding.application_id,
                binding.model_dump_json(),
            )
        ]

    @pytest.mark.asyncio
    async def test_save_all_of_nothing_skips_database(self) -> None:
        pool, conn = _mock_pool()
        repo = PostgreSQLBindingRepository(pool)

        assert await repo.save_all([]) == []
        pool.acquire.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_failure_is_propagated(self) -> None:
        pool, conn = _mock_pool()
        conn.executemany.side_effect = asyncpg.PostgresError("boom")
        repo = PostgreSQLBindingRepository(pool)

        with pytest.raises(asyncpg.PostgresError):
            await repo.save(ApplicationBindingFactory.build())

    @pytest.mark.asyncio
    async def test_get_parses_stored_document(self) -> None:
        pool, conn = _mock_pool()
        binding = ApplicationBindingFactory.build()
        conn.fetchrow.return_value = {"binding_data": binding.model_dump_json()}
        repo = PostgreSQLBindingRepository(pool)

        assert await repo.get(binding.service_binding_id) == binding
        assert conn.fetchrow.await_args.args[1] == binding.service_binding_id

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self) -> None:
        pool, conn = _mock_pool()
        conn.fetchrow.return_value = None
        repo = PostgreSQLBindingRepository(pool)

        assert await repo.get("missing") is None

    @pytest.mark.asyncio
    async def test_find_all_by_ids_uses_any(self) -> None:
        pool, conn = _mock_pool()
        binding = ApplicationBindingFactory.build()
        conn.fetch.return_value = [{"binding_data": binding.model_dump_json()}]
        repo = PostgreSQLBindingRepository(pool)

        found = await repo.find_all(iter([binding.service_binding_id, "other"]))

        assert found == [binding]
        query, ids = conn.fetch.await_args.args
        assert "ANY($1)" in query
        assert ids == [binding.service_binding_id, "other"]

    @pytest.mark.asyncio
    async def test_find_all_with_no_ids_skips_query(self) -> None:
        pool, conn = _mock_pool()
        repo = PostgreSQLBindingRepository(pool)

        assert await repo.find_all([]) == []
        conn.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_exists_and_count(self) -> None:
        pool, conn = _mock_pool()
        conn.fetchval.side_effect = [True, 3]
        repo = PostgreSQLBindingRepository(pool)

        assert await repo.exists("binding-1") is True
        assert await repo.count() == 3

    @pytest.mark.asyncio
    async def test_delete_entity_deletes_by_key(self) -> None:
        pool, conn = _mock_pool()
        conn.execute.return_value = "DELETE 1"
        repo = PostgreSQLBindingRepository(pool)
        binding = ApplicationBindingFactory.build()

        await repo.delete_entity(binding)

        query, ids = conn.execute.await_args.args
        assert "DELETE FROM application_bindings" in query
        assert ids == [binding.service_binding_id]

    @pytest.mark.asyncio
    async def test_delete_many_of_nothing_skips_database(self) -> None:
        pool, conn = _mock_pool()
        repo = PostgreSQLBindingRepository(pool)

        await repo.delete_many([])

        pool.acquire.assert_not_called()


@pytest.mark.e2e
@pytest.mark.skipif(
    TEST_DATABASE_URL is None, reason="AUTOSLEEP_TEST_DATABASE_URL not set"
)
class TestPostgreSQLBindingRepositoryContract(BindingRepositoryContractTestMixin):
    """Shared contract against a real PostgreSQL database."""

    async def create_repository(self) -> BindingRepository:
        raise NotImplementedError("repositories are created by the repo fixture")

    @pytest_asyncio.fixture
    async def repo(self) -> AsyncIterator[BindingRepository]:
        pool = await asyncpg.create_pool(dsn=TEST_DATABASE_URL)
        try:
            repository = PostgreSQLBindingRepository(pool)
            await repository.ensure_schema()
            await repository.delete_all()
            yield repository
            await repository.delete_all()
        finally:
            await pool.close()
