"""
Topic Service Models
====================
"""

from services.topics_rw.models.topic import (
    BASELINE_LABELS,
    AlternativeIdentifiers,
    IdentifierScheme,
    Topic,
    TopicDecodeError,
    decode_topic,
    order_types,
)

__all__ = [
    "BASELINE_LABELS",
    "AlternativeIdentifiers",
    "IdentifierScheme",
    "Topic",
    "TopicDecodeError",
    "decode_topic",
    "order_types",
]
