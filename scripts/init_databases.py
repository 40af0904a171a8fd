#!/usr/bin/env python3
"""
Database Initialization Script
==============================

Create the uniqueness constraints the topics graph relies on.

Usage:
    python scripts/init_databases.py
    python scripts/init_databases.py --check-only
    python scripts/init_databases.py --neo4j-uri bolt://graph:7687

Version: 0.1.0
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.config import settings
from shared.database.errors import GraphStoreError
from shared.database.neo4j import Neo4jClient
from shared.logging import get_logger, setup_logging

from services.topics_rw.schema.constraints import UNIQUE_PROPERTIES
from services.topics_rw.services.topic_store import TopicStore

setup_logging(log_level="INFO", json_logs=False, service_name="init-db")
logger = get_logger(__name__)


async def init_neo4j(client: Neo4jClient, check_only: bool) -> bool:
    """Verify connectivity and, unless only checking, ensure constraints."""
    store = TopicStore(client)

    try:
        await store.check()
        logger.info("neo4j_reachable", database=client.database)

        if check_only:
            return True

        await store.initialise()
        for label, prop in UNIQUE_PROPERTIES.items():
            logger.info("constraint_ensured", label=label, property=prop)

        count = await store.count()
        logger.info("topics_present", count=count)
        return True

    except GraphStoreError as e:
        logger.error("neo4j_initialization_failed", error=str(e))
        return False


async def main(args: argparse.Namespace) -> int:
    """Main initialization function."""
    neo4j_settings = settings.neo4j
    if args.neo4j_uri:
        neo4j_settings = neo4j_settings.model_copy(update={"uri": args.neo4j_uri})

    client = Neo4jClient.from_settings(neo4j_settings)
    try:
        success = await init_neo4j(client, args.check_only)
    finally:
        await client.close()

    if not success:
        return 1

    logger.info("initialization_complete")
    return 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Initialize the topics graph schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only verify Neo4j connectivity",
    )
    parser.add_argument(
        "--neo4j-uri",
        default=None,
        help="Override NEO4J_URI",
    )

    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    exit_code = asyncio.run(main(args))
    sys.exit(exit_code)
