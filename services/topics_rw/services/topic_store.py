"""
Topic Store
===========

Reads and writes Topic records as labeled nodes in Neo4j.

A topic is a ``Thing`` node that also carries the ``Concept`` and ``Topic``
labels. Each alternative identifier is its own ``Identifier`` node, labeled
with its scheme and linked to the topic by an ``IDENTIFIES`` relationship.
Identifier nodes belong to exactly one topic: a write replaces them all and
a delete removes them.

Every operation submits a single batch to the client, so it is applied
atomically or not at all.

Version: 0.1.0
"""

from shared.database.neo4j import CypherStatement, Neo4jClient
from shared.logging import get_logger

from services.topics_rw.models.topic import (
    AlternativeIdentifiers,
    IdentifierScheme,
    Topic,
    order_types,
)
from services.topics_rw.schema.constraints import constraint_statements


logger = get_logger(__name__)


# =============================================================================
# Cypher Templates
# =============================================================================

READ_TOPIC_QUERY = """
MATCH (n:Topic {uuid: $uuid})
OPTIONAL MATCH (upp:UPPIdentifier)-[:IDENTIFIES]->(n)
OPTIONAL MATCH (tme:TMEIdentifier)-[:IDENTIFIES]->(n)
RETURN DISTINCT n.uuid AS uuid,
       n.prefLabel AS prefLabel,
       labels(n) AS types,
       {uuids: collect(DISTINCT upp.value), TME: collect(DISTINCT tme.value)} AS alternativeIdentifiers
"""

DELETE_IDENTIFIERS_QUERY = """
MATCH (t:Thing {uuid: $uuid})
OPTIONAL MATCH (t)<-[iden:IDENTIFIES]-(i:Identifier)
DELETE iden, i
"""

UPSERT_TOPIC_QUERY = """
MERGE (n:Thing {uuid: $uuid})
SET n = $props
SET n:Concept:Topic
"""

# Scheme label is interpolated from IdentifierScheme only, never from input
CREATE_IDENTIFIER_QUERY = """
MERGE (t:Thing {{uuid: $uuid}})
CREATE (i:Identifier {{value: $value}})
MERGE (t)<-[:IDENTIFIES]-(i)
SET i:{label}
"""

CLEAR_TOPIC_QUERY = """
MATCH (t:Thing {uuid: $uuid})
OPTIONAL MATCH (t)<-[iden:IDENTIFIES]-(i:Identifier)
REMOVE t:Concept:Topic
DELETE iden, i
SET t = {uuid: $uuid}
"""

REMOVE_UNUSED_THING_QUERY = """
MATCH (t:Thing {uuid: $uuid})
OPTIONAL MATCH (t)-[a]-(x)
WITH t, count(a) AS rel_count
WHERE rel_count = 0
DELETE t
"""

COUNT_TOPICS_QUERY = "MATCH (n:Topic) RETURN count(n) AS c"


def identifier_statement(
    uuid: str,
    scheme: IdentifierScheme,
    value: str,
) -> CypherStatement:
    """Statement creating one identifier node linked to the topic."""
    return CypherStatement(
        CREATE_IDENTIFIER_QUERY.format(label=scheme.label),
        {"uuid": uuid, "value": value},
    )


def write_statements(topic: Topic) -> list[CypherStatement]:
    """
    Build the batch that replaces a topic and all of its identifiers.

    Existing identifier nodes are removed first so the stored set ends up
    equal to the one supplied, then the topic node is upserted with exactly
    the supplied properties, then one node is created per identifier.
    """
    statements = [
        CypherStatement(DELETE_IDENTIFIERS_QUERY, {"uuid": topic.uuid}),
        CypherStatement(
            UPSERT_TOPIC_QUERY,
            {
                "uuid": topic.uuid,
                "props": {
                    "uuid": topic.uuid,
                    "prefLabel": topic.pref_label,
                },
            },
        ),
    ]

    for scheme, values in topic.alternative_identifiers.by_scheme():
        for value in values:
            statements.append(identifier_statement(topic.uuid, scheme, value))

    return statements


def delete_statements(uuid: str) -> list[CypherStatement]:
    """Build the batch that strips a topic and drops its node if unused."""
    return [
        CypherStatement(CLEAR_TOPIC_QUERY, {"uuid": uuid}),
        CypherStatement(REMOVE_UNUSED_THING_QUERY, {"uuid": uuid}),
    ]


def topic_from_record(record: dict) -> Topic:
    """Rebuild a Topic from a row returned by ``READ_TOPIC_QUERY``."""
    identifiers = record.get("alternativeIdentifiers") or {}
    return Topic(
        uuid=record["uuid"],
        pref_label=record.get("prefLabel") or "",
        alternative_identifiers=AlternativeIdentifiers(
            tme=sorted(identifiers.get("TME") or []),
            uuids=sorted(identifiers.get("uuids") or []),
        ),
        types=order_types(record.get("types") or []),
    )


# =============================================================================
# Topic Store
# =============================================================================


class TopicStore:
    """
    CRUD operations for topics.

    Errors raised by the client propagate unchanged; nothing is retried.
    """

    def __init__(self, client: Neo4jClient) -> None:
        """
        Initialize the store.

        Args:
            client: Connected Neo4j client, owned by the caller
        """
        self._client = client

    async def initialise(self) -> None:
        """Ensure the uniqueness constraints exist. Safe to call on every start."""
        await self._client.apply_schema(constraint_statements())

    async def read(self, uuid: str) -> tuple[Topic | None, bool]:
        """
        Look up a topic by UUID.

        Returns:
            ``(topic, True)`` when found, ``(None, False)`` otherwise
        """
        (result,) = await self._client.run_batch(
            [CypherStatement(READ_TOPIC_QUERY, {"uuid": uuid})]
        )
        if not result.records:
            return None, False

        return topic_from_record(result.records[0]), True

    async def write(self, topic: Topic) -> None:
        """Create or fully replace a topic and its identifiers."""
        statements = write_statements(topic)
        await self._client.run_batch(statements)

        logger.info(
            "topic_written",
            uuid=topic.uuid,
            identifiers=len(statements) - 2,
        )

    async def delete(self, uuid: str) -> bool:
        """
        Delete a topic and its identifiers.

        The underlying Thing node is kept, stripped to its uuid, while other
        relationships still reference it.

        Returns:
            True if a topic existed and was removed
        """
        clear, _ = await self._client.run_batch(delete_statements(uuid))

        deleted = clear.counters.contains_updates and clear.counters.labels_removed > 0
        logger.info("topic_deleted" if deleted else "topic_not_found", uuid=uuid)
        return deleted

    async def count(self) -> int:
        """Number of nodes labeled Topic."""
        (result,) = await self._client.run_batch([CypherStatement(COUNT_TOPICS_QUERY)])
        return result.records[0]["c"]

    async def check(self) -> None:
        """Connectivity probe used by health checks."""
        await self._client.check()
