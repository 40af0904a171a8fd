"""
Services
========

Microservices built on the shared library.

Services:
- topics_rw: Topic read/write API backed by Neo4j
"""

__all__ = [
    "topics_rw",
]
