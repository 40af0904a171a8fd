"""
Topic Services
==============

Business logic for the topics read/write service.
"""

from services.topics_rw.services.topic_store import TopicStore

__all__ = ["TopicStore"]
