"""
Topics Graph Schema
===================

Constraint declarations for Thing, Concept, Topic and identifier nodes.
"""

from services.topics_rw.schema.constraints import (
    UNIQUE_PROPERTIES,
    constraint_name,
    constraint_statements,
)

__all__ = ["UNIQUE_PROPERTIES", "constraint_name", "constraint_statements"]
