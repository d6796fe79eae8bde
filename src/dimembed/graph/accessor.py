"""
Graph accessor interface consumed by the embedding engine.

The engine never owns or mutates the graph. It asks an accessor for the nodes
participating in an edge type and for each node's weighted outgoing edges of
that type. Edge weight is strength * confidence, already in [0, 1].
"""

import math
from abc import ABC, abstractmethod
from typing import Hashable, Iterable, List, Tuple

from dimembed.errors import InvalidWeightError

Node = Hashable
EdgeType = Hashable


def edge_weight(strength: float, confidence: float) -> float:
    """
    Combine a truth value into a single edge weight.

    Args:
        strength: Relation strength in [0, 1]
        confidence: Confidence in the strength, in [0, 1]

    Returns:
        float: strength * confidence
    """
    for name, value in (("strength", strength), ("confidence", confidence)):
        if not (0.0 <= value <= 1.0):
            raise ValueError(f"{name} must be in [0, 1], got {value!r}")
    return float(strength) * float(confidence)


def check_weight(source: Node, target: Node, weight: float) -> float:
    """Return weight as a float, raising InvalidWeightError if it lies outside [0, 1]."""
    try:
        value = float(weight)
    except (TypeError, ValueError):
        raise InvalidWeightError(source, target, weight) from None
    if math.isnan(value) or value < 0.0 or value > 1.0:
        raise InvalidWeightError(source, target, weight)
    return value


def sort_nodes(nodes: Iterable[Node]) -> List[Node]:
    """
    Sort nodes into a reproducible order.

    Nodes of one comparable type sort naturally; mixed or unorderable nodes
    fall back to ordering by (type name, str(node)).
    """
    nodes = list(nodes)
    try:
        return sorted(nodes)
    except TypeError:
        return sorted(nodes, key=lambda n: (type(n).__name__, str(n)))


class GraphAccessor(ABC):
    """Read-only view of a typed, weighted, directed graph."""

    @abstractmethod
    def nodes(self, edge_type: EdgeType) -> Iterable[Node]:
        """Nodes that take part in at least one edge of edge_type."""

    @abstractmethod
    def outgoing_edges(self, node: Node, edge_type: EdgeType) -> Iterable[Tuple[Node, float]]:
        """(target, weight) pairs for node's outgoing edges of edge_type."""

    def has_node(self, node: Node, edge_type: EdgeType) -> bool:
        """Whether node takes part in edge_type's sub-graph."""
        return any(n == node for n in self.nodes(edge_type))
