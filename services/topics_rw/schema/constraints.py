"""
Graph Schema Constraints
========================

Uniqueness constraints the topics graph relies on.

Version: 0.1.0
"""

from shared.database.neo4j import CypherStatement

from services.topics_rw.models.topic import BASELINE_LABELS, IdentifierScheme


# =============================================================================
# Schema Constraints
# =============================================================================

# label -> property that must be unique for that label
UNIQUE_PROPERTIES: dict[str, str] = {
    **{label: "uuid" for label in BASELINE_LABELS},
    **{scheme.label: "value" for scheme in IdentifierScheme},
}


def constraint_name(label: str, prop: str) -> str:
    """Stable constraint name, e.g. ``tmeidentifier_value_unique``."""
    return f"{label.lower()}_{prop}_unique"


def constraint_statements() -> list[CypherStatement]:
    """Idempotent ``CREATE CONSTRAINT`` statements for every unique property."""
    return [
        CypherStatement(
            f"CREATE CONSTRAINT {constraint_name(label, prop)} IF NOT EXISTS "
            f"FOR (n:{label}) REQUIRE n.{prop} IS UNIQUE"
        )
        for label, prop in UNIQUE_PROPERTIES.items()
    ]
