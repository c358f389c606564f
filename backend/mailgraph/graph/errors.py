"""Errors raised by the graph merge engine and store bootstrap."""


class MalformedFactError(ValueError):
    """An extracted fact is missing a field required for its identity."""


class GraphStoreError(RuntimeError):
    """Base error for graph store failures."""


class GraphStoreInitializationError(GraphStoreError):
    """Constraint/table bootstrap or the initial connectivity probe failed."""


class GraphStoreUnavailableError(GraphStoreError):
    """The store connection was lost while merging."""
