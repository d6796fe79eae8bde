"""Graph access for the embedding engine."""

from dimembed.graph.accessor import GraphAccessor, edge_weight
from dimembed.graph.memory import GraphMemory

__all__ = ["GraphAccessor", "GraphMemory", "edge_weight"]
