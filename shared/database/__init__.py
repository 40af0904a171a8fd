"""
Database Module
===============

Async Neo4j client and the batch abstractions used by the service.

Usage:
    from shared.database import CypherStatement, Neo4jClient

    client = Neo4jClient.from_settings(settings.neo4j)
    results = await client.run_batch([
        CypherStatement("MATCH (n:Topic) RETURN count(n) AS c"),
    ])
"""

from shared.database.errors import (
    BackendUnavailableError,
    BatchExecutionError,
    ConstraintViolationError,
    GraphStoreError,
)
from shared.database.neo4j import (
    CypherStatement,
    Neo4jClient,
    QueryCounters,
    StatementResult,
)


__all__ = [
    "Neo4jClient",
    "CypherStatement",
    "QueryCounters",
    "StatementResult",
    # Errors
    "GraphStoreError",
    "BackendUnavailableError",
    "BatchExecutionError",
    "ConstraintViolationError",
]
