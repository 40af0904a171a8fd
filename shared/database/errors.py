"""
Graph Store Errors
==================

Exceptions raised by the graph store client. Driver exceptions are
translated into this hierarchy and chained as ``__cause__``.

Version: 0.1.0
"""


class GraphStoreError(Exception):
    """Base class for graph store failures."""


class BackendUnavailableError(GraphStoreError):
    """The graph database could not be reached or refused the session."""


class BatchExecutionError(GraphStoreError):
    """A statement in a batch failed; the whole batch was rolled back."""


class ConstraintViolationError(BatchExecutionError):
    """A statement in a batch violated a schema constraint."""
