"""
Error types raised by the dimensional embedding engine.

Every failure a caller is expected to handle derives from EmbeddingError and
carries the edge type (and node, where relevant) it concerns.
"""


class EmbeddingError(Exception):
    """Base class for embedding engine errors."""


class NotEmbeddedError(EmbeddingError):
    """Raised when an edge type is queried before it has been embedded."""

    def __init__(self, edge_type):
        self.edge_type = edge_type
        super().__init__(f"Edge type {edge_type!r} has not been embedded")


class UnknownNodeError(EmbeddingError, KeyError):
    """Raised when a node has no vector (or is unknown) for an edge type."""

    def __init__(self, node, edge_type):
        self.node = node
        self.edge_type = edge_type
        super().__init__(f"Node {node!r} is not embedded for edge type {edge_type!r}")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class InvalidWeightError(EmbeddingError, ValueError):
    """Raised when the graph supplies an edge weight outside [0, 1]."""

    def __init__(self, source, target, weight):
        self.source = source
        self.target = target
        self.weight = weight
        super().__init__(
            f"Edge {source!r} -> {target!r} has weight {weight!r}, expected a value in [0, 1]"
        )
