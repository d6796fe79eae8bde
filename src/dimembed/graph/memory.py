"""
Graph Memory: in-process typed relational structure.

Edges are directed and tagged with an edge type. Each edge carries the
strength and confidence of the relation; its weight is their product. Several
edges may connect the same ordered pair, and path search only ever uses the
strongest of them.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import networkx as nx

from dimembed.graph.accessor import EdgeType, GraphAccessor, Node, edge_weight


class GraphMemory(GraphAccessor):
    """
    Typed multi-digraph backed by networkx.

    Attributes:
        graph (nx.MultiDiGraph): Underlying graph; edges carry 'edge_type',
            'strength', 'confidence' and 'weight' attributes
    """

    def __init__(self, edges: Optional[Iterable[Tuple]] = None):
        """
        Initialize graph, optionally from edge tuples.

        Args:
            edges: Iterable of (source, target, edge_type[, strength[, confidence]])
        """
        self.graph = nx.MultiDiGraph()
        # edge_type -> participating nodes, in first-seen order
        self._members: Dict[EdgeType, Dict[Node, None]] = {}
        for edge in edges or ():
            self.add_edge(*edge)

    def add_edge(self, source: Node, target: Node, edge_type: EdgeType,
                 strength: float = 1.0, confidence: float = 1.0) -> float:
        """
        Add a directed edge of edge_type.

        Args:
            source: Source node
            target: Target node
            edge_type: Edge type tag
            strength: Relation strength in [0, 1]
            confidence: Confidence in [0, 1]

        Returns:
            float: The edge weight (strength * confidence)
        """
        weight = edge_weight(strength, confidence)
        self.graph.add_edge(source, target, edge_type=edge_type,
                            strength=strength, confidence=confidence, weight=weight)
        members = self._members.setdefault(edge_type, {})
        members.setdefault(source, None)
        members.setdefault(target, None)
        return weight

    def nodes(self, edge_type: EdgeType) -> List[Node]:
        return list(self._members.get(edge_type, ()))

    def has_node(self, node: Node, edge_type: EdgeType) -> bool:
        return node in self._members.get(edge_type, ())

    def outgoing_edges(self, node: Node, edge_type: EdgeType) -> Iterator[Tuple[Node, float]]:
        if node not in self.graph:
            return
        for _, target, data in self.graph.out_edges(node, data=True):
            if data["edge_type"] == edge_type:
                yield target, data["weight"]

    def edge_types(self) -> List[EdgeType]:
        """Edge types present in the graph, in first-seen order."""
        return list(self._members)

    def number_of_edges(self, edge_type: Optional[EdgeType] = None) -> int:
        """Count edges, optionally restricted to one edge type."""
        if edge_type is None:
            return self.graph.number_of_edges()
        return sum(1 for _, _, t in self.graph.edges(data="edge_type") if t == edge_type)

    def __repr__(self):
        return (f"GraphMemory(nodes={self.graph.number_of_nodes()}, "
                f"edges={self.graph.number_of_edges()}, "
                f"edge_types={len(self._members)})")
