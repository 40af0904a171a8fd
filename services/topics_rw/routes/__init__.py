"""
Topics RW Routes
================

API route handlers for the topics read/write service.

Routes:
- topics: read, write, delete and count topics
"""

from services.topics_rw.routes import topics


__all__ = ["topics"]
