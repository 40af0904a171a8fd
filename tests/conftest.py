"""
Test Configuration
==================

Pytest fixtures for the topics read/write service tests.
"""

import os
from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"

from shared.database.neo4j import Neo4jClient  # noqa: E402
from services.topics_rw.services.topic_store import TopicStore  # noqa: E402


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def mock_neo4j_client() -> AsyncMock:
    """Neo4j client whose batches are recorded instead of executed."""
    client = AsyncMock(spec=Neo4jClient)
    client.database = "neo4j"
    return client


@pytest.fixture
def topic_store(mock_neo4j_client: AsyncMock) -> TopicStore:
    """TopicStore wired to the mock client."""
    return TopicStore(mock_neo4j_client)


@pytest.fixture
def mock_topic_store() -> AsyncMock:
    """Stand-in store for route tests."""
    return AsyncMock(spec=TopicStore)


@pytest_asyncio.fixture
async def topics_client(
    mock_topic_store: AsyncMock,
) -> AsyncGenerator[AsyncClient, None]:
    """Test client for the topics service, backed by the mock store."""
    from services.topics_rw.main import app

    app.state.topic_store = mock_topic_store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    del app.state.topic_store


@pytest.fixture
def sample_topic_payload() -> dict[str, Any]:
    """Sample topic as it arrives over the API."""
    return {
        "uuid": "12345",
        "prefLabel": "Test",
        "alternativeIdentifiers": {
            "TME": ["TME_ID_1", "TME_ID_2"],
            "uuids": ["12345"],
        },
    }

