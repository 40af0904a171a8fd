"""
Tests for the Neo4j Client
==========================

Batch execution, transaction handling and error translation, against a
mocked async driver.

Version: 0.1.0
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from neo4j.exceptions import ConstraintError, ServiceUnavailable, TransientError

from shared.database.errors import (
    BackendUnavailableError,
    BatchExecutionError,
    ConstraintViolationError,
)
from shared.database.neo4j import CypherStatement, Neo4jClient, QueryCounters


# =============================================================================
# Driver Mocks
# =============================================================================


COUNTER_FIELDS = (
    "nodes_created",
    "nodes_deleted",
    "relationships_created",
    "relationships_deleted",
    "properties_set",
    "labels_added",
    "labels_removed",
    "constraints_added",
)


def make_counters(contains_updates: bool = False, **values: int) -> MagicMock:
    counters = MagicMock()
    for name in COUNTER_FIELDS:
        setattr(counters, name, values.get(name, 0))
    counters.contains_updates = contains_updates
    return counters


def make_result(records: list[dict[str, Any]] | None = None, **counters: Any) -> AsyncMock:
    result = AsyncMock()
    result.data.return_value = records or []
    result.consume.return_value = MagicMock(counters=make_counters(**counters))
    return result


def make_driver(session: AsyncMock) -> MagicMock:
    session_cm = MagicMock()
    session_cm.__aenter__.return_value = session
    session_cm.__aexit__.return_value = False

    driver = MagicMock()
    driver.session.return_value = session_cm
    driver.close = AsyncMock()
    driver.verify_connectivity = AsyncMock()
    return driver


@pytest.fixture
def tx() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def session(tx: AsyncMock) -> AsyncMock:
    session = AsyncMock()
    session.begin_transaction.return_value = tx
    return session


@pytest.fixture
def driver(session: AsyncMock) -> MagicMock:
    return make_driver(session)


@pytest.fixture
def client(driver: MagicMock) -> Neo4jClient:
    return Neo4jClient(driver, database="topics")


# =============================================================================
# Counters
# =============================================================================


class TestQueryCounters:
    """Tests for QueryCounters."""

    def test_defaults_report_no_updates(self) -> None:
        counters = QueryCounters()

        assert counters.contains_updates is False
        assert counters.labels_removed == 0

    def test_from_summary(self) -> None:
        counters = QueryCounters.from_summary(
            make_counters(contains_updates=True, labels_removed=2, nodes_deleted=3)
        )

        assert counters.contains_updates is True
        assert counters.labels_removed == 2
        assert counters.nodes_deleted == 3
        assert counters.relationships_created == 0


# =============================================================================
# Batch Execution
# =============================================================================


class TestRunBatch:
    """Tests for Neo4jClient.run_batch."""

    @pytest.mark.asyncio
    async def test_statements_run_in_order_in_one_transaction(
        self,
        client: Neo4jClient,
        driver: MagicMock,
        session: AsyncMock,
        tx: AsyncMock,
    ) -> None:
        """All statements share one transaction, which is committed."""
        tx.run.side_effect = [
            make_result(),
            make_result(records=[{"c": 4}]),
        ]
        statements = [
            CypherStatement("MATCH (t:Thing {uuid: $uuid}) DELETE t", {"uuid": "1"}),
            CypherStatement("MATCH (n:Topic) RETURN count(n) AS c"),
        ]

        results = await client.run_batch(statements)

        driver.session.assert_called_once_with(database="topics")
        session.begin_transaction.assert_awaited_once()
        assert [c.args for c in tx.run.await_args_list] == [
            ("MATCH (t:Thing {uuid: $uuid}) DELETE t", {"uuid": "1"}),
            ("MATCH (n:Topic) RETURN count(n) AS c", {}),
        ]
        tx.commit.assert_awaited_once()
        tx.close.assert_awaited_once()
        assert results[1].records == [{"c": 4}]

    @pytest.mark.asyncio
    async def test_counters_returned_per_statement(
        self,
        client: Neo4jClient,
        tx: AsyncMock,
    ) -> None:
        tx.run.side_effect = [
            make_result(contains_updates=True, labels_removed=2),
            make_result(contains_updates=True, nodes_deleted=1),
        ]

        first, second = await client.run_batch(
            [CypherStatement("CLEAR"), CypherStatement("REMOVE")]
        )

        assert first.counters.labels_removed == 2
        assert second.counters.nodes_deleted == 1
        assert second.counters.labels_removed == 0

    @pytest.mark.asyncio
    async def test_failure_rolls_back_without_commit(
        self,
        client: Neo4jClient,
        tx: AsyncMock,
    ) -> None:
        """A failing statement stops the batch and nothing is committed."""
        tx.run.side_effect = [make_result(), TransientError("deadlock")]

        with pytest.raises(BatchExecutionError):
            await client.run_batch(
                [CypherStatement("A"), CypherStatement("B"), CypherStatement("C")]
            )

        assert tx.run.await_count == 2
        tx.commit.assert_not_awaited()
        tx.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_constraint_error_translated(
        self,
        client: Neo4jClient,
        tx: AsyncMock,
    ) -> None:
        tx.run.side_effect = ConstraintError("already exists with label")

        with pytest.raises(ConstraintViolationError) as exc_info:
            await client.run_batch([CypherStatement("CREATE (i:UPPIdentifier)")])

        assert isinstance(exc_info.value.__cause__, ConstraintError)
        assert isinstance(exc_info.value, BatchExecutionError)

    @pytest.mark.asyncio
    async def test_unavailable_backend_translated(
        self,
        client: Neo4jClient,
        session: AsyncMock,
    ) -> None:
        session.begin_transaction.side_effect = ServiceUnavailable("connection refused")

        with pytest.raises(BackendUnavailableError, match="connection refused"):
            await client.run_batch([CypherStatement("RETURN 1")])


# =============================================================================
# Schema
# =============================================================================


class TestApplySchema:
    """Tests for Neo4jClient.apply_schema."""

    @pytest.mark.asyncio
    async def test_each_statement_auto_committed(
        self,
        client: Neo4jClient,
        session: AsyncMock,
    ) -> None:
        session.run.side_effect = [
            make_result(constraints_added=1),
            make_result(constraints_added=0),
        ]

        created = await client.apply_schema(
            [CypherStatement("CREATE CONSTRAINT a"), CypherStatement("CREATE CONSTRAINT b")]
        )

        assert created == 1
        assert session.run.await_count == 2
        session.begin_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unreachable_backend(
        self,
        client: Neo4jClient,
        session: AsyncMock,
    ) -> None:
        session.run.side_effect = ServiceUnavailable("no route")

        with pytest.raises(BackendUnavailableError):
            await client.apply_schema([CypherStatement("CREATE CONSTRAINT a")])


# =============================================================================
# Connectivity
# =============================================================================


class TestConnectivity:
    """Tests for check and close."""

    @pytest.mark.asyncio
    async def test_check_passes(self, client: Neo4jClient, driver: MagicMock) -> None:
        await client.check()

        driver.verify_connectivity.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_check_raises_when_unreachable(
        self,
        client: Neo4jClient,
        driver: MagicMock,
    ) -> None:
        driver.verify_connectivity.side_effect = ServiceUnavailable("down")

        with pytest.raises(BackendUnavailableError):
            await client.check()

    @pytest.mark.asyncio
    async def test_close_closes_driver(self, client: Neo4jClient, driver: MagicMock) -> None:
        await client.close()

        driver.close.assert_awaited_once()
