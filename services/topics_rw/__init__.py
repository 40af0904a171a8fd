"""
Topics RW Service
=================

Reads and writes topics in the Neo4j concept graph.

Features:
- Create or replace a topic together with its TME and UPP identifiers
- Point lookup by UUID
- Delete a topic and garbage-collect its node when unreferenced
- Topic count and connectivity check

Port: 8080
"""

__version__ = "0.1.0"
