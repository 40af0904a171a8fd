"""
Neo4j Client
============

Async Neo4j driver wrapper that executes ordered batches of parameterized
Cypher statements inside a single transaction.

Version: 0.1.0
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase
from neo4j.exceptions import (
    AuthError,
    ConstraintError,
    DriverError,
    Neo4jError,
    ServiceUnavailable,
    SessionExpired,
)

from shared.config import Neo4jSettings
from shared.database.errors import (
    BackendUnavailableError,
    BatchExecutionError,
    ConstraintViolationError,
    GraphStoreError,
)
from shared.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CypherStatement:
    """A Cypher statement and the parameters bound to it."""

    query: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class QueryCounters:
    """Update statistics reported for one statement."""

    nodes_created: int = 0
    nodes_deleted: int = 0
    relationships_created: int = 0
    relationships_deleted: int = 0
    properties_set: int = 0
    labels_added: int = 0
    labels_removed: int = 0
    constraints_added: int = 0
    contains_updates: bool = False

    @classmethod
    def from_summary(cls, counters: Any) -> "QueryCounters":
        """Build from a driver ``SummaryCounters`` object."""
        return cls(
            nodes_created=counters.nodes_created,
            nodes_deleted=counters.nodes_deleted,
            relationships_created=counters.relationships_created,
            relationships_deleted=counters.relationships_deleted,
            properties_set=counters.properties_set,
            labels_added=counters.labels_added,
            labels_removed=counters.labels_removed,
            constraints_added=counters.constraints_added,
            contains_updates=counters.contains_updates,
        )


@dataclass(frozen=True)
class StatementResult:
    """Rows and counters returned for one statement of a batch."""

    records: list[dict[str, Any]] = field(default_factory=list)
    counters: QueryCounters = field(default_factory=QueryCounters)


def _translate(exc: Exception) -> GraphStoreError:
    """Map a driver exception onto the graph store error hierarchy."""
    if isinstance(exc, (ServiceUnavailable, SessionExpired, AuthError)):
        return BackendUnavailableError(str(exc))
    if isinstance(exc, ConstraintError):
        return ConstraintViolationError(str(exc))
    return BatchExecutionError(str(exc))


class Neo4jClient:
    """
    Async Neo4j client.

    Owns a driver for its lifetime. Construct one per process with
    ``from_settings`` and close it at shutdown.
    """

    def __init__(self, driver: AsyncDriver, database: str = "neo4j") -> None:
        self._driver = driver
        self._database = database

    @classmethod
    def from_settings(cls, neo4j_settings: Neo4jSettings) -> "Neo4jClient":
        """Create a client and its driver from configuration."""
        driver = AsyncGraphDatabase.driver(
            neo4j_settings.uri,
            auth=(
                neo4j_settings.user,
                neo4j_settings.password.get_secret_value(),
            ),
            max_connection_pool_size=neo4j_settings.max_connection_pool_size,
            connection_acquisition_timeout=neo4j_settings.connection_acquisition_timeout,
        )
        logger.info(
            "neo4j_driver_created",
            uri=neo4j_settings.uri,
            database=neo4j_settings.database,
        )
        return cls(driver, database=neo4j_settings.database)

    @property
    def database(self) -> str:
        return self._database

    async def close(self) -> None:
        """Close the driver and release all connections."""
        await self._driver.close()
        logger.info("neo4j_driver_closed")

    async def check(self) -> None:
        """
        Verify the database can be reached.

        Raises:
            BackendUnavailableError: if connectivity verification fails
        """
        try:
            await self._driver.verify_connectivity()
        except (Neo4jError, DriverError) as e:
            raise BackendUnavailableError(str(e)) from e

    async def run_batch(
        self,
        statements: Sequence[CypherStatement],
    ) -> list[StatementResult]:
        """
        Execute statements in order within one explicit transaction.

        The transaction commits only if every statement succeeds; on any
        failure it is rolled back and nothing is applied. No retries are
        attempted.

        Args:
            statements: Ordered statements to execute

        Returns:
            One StatementResult per statement, in the same order

        Raises:
            BackendUnavailableError: if the database cannot be reached
            ConstraintViolationError: if a statement breaks a constraint
            BatchExecutionError: for any other statement failure
        """
        results: list[StatementResult] = []
        try:
            async with self._driver.session(database=self._database) as session:
                tx = await session.begin_transaction()
                try:
                    for statement in statements:
                        result = await tx.run(statement.query, statement.parameters)
                        records = await result.data()
                        summary = await result.consume()
                        results.append(
                            StatementResult(
                                records=records,
                                counters=QueryCounters.from_summary(summary.counters),
                            )
                        )
                    await tx.commit()
                finally:
                    # Rolls back unless already committed
                    await tx.close()
        except (Neo4jError, DriverError) as e:
            logger.error(
                "neo4j_batch_failed",
                statements=len(statements),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise _translate(e) from e

        logger.debug("neo4j_batch_committed", statements=len(statements))
        return results

    async def apply_schema(self, statements: Sequence[CypherStatement]) -> int:
        """
        Run schema statements, each in its own auto-commit transaction.

        Schema changes cannot share a transaction with data changes, so they
        are kept out of ``run_batch``.

        Returns:
            Number of constraints created (0 when all already existed)
        """
        created = 0
        try:
            async with self._driver.session(database=self._database) as session:
                for statement in statements:
                    result = await session.run(statement.query, statement.parameters)
                    summary = await result.consume()
                    created += summary.counters.constraints_added
        except (Neo4jError, DriverError) as e:
            logger.error("neo4j_schema_failed", error=str(e))
            raise _translate(e) from e

        logger.info(
            "neo4j_schema_applied",
            statements=len(statements),
            constraints_added=created,
        )
        return created
