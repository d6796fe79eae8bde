"""
Pivot selection.

Pivots are the reference nodes whose path weights define the embedding axes.
Selection is deterministic: candidates are visited in sorted order and ties
always resolve to the earlier candidate.
"""

import logging
from typing import Dict, Optional, Tuple

from dimembed.config import PIVOT_STRATEGIES
from dimembed.embedding.paths import SubGraph
from dimembed.graph.accessor import EdgeType, GraphAccessor, Node

logger = logging.getLogger(__name__)

PivotSet = Tuple[Node, ...]


def _farthest_first(subgraph: SubGraph, k: int) -> PivotSet:
    """
    Grow the pivot set one node at a time.

    Each new pivot is the candidate whose strongest connection (in either
    direction) to the pivots chosen so far is weakest.
    """
    order = {node: i for i, node in enumerate(subgraph.nodes)}
    closeness: Dict[Node, float] = {node: 0.0 for node in subgraph.nodes}
    pivots = []

    pivot = subgraph.nodes[0]
    while True:
        pivots.append(pivot)
        del closeness[pivot]
        if len(pivots) == k or not closeness:
            break

        outgoing = subgraph.weights_from(pivot)
        incoming = subgraph.weights_to(pivot)
        for node in closeness:
            closeness[node] = max(closeness[node],
                                  outgoing.get(node, 0.0),
                                  incoming.get(node, 0.0))

        pivot = min(closeness, key=lambda n: (closeness[n], order[n]))
        logger.debug("Next pivot %r (closeness %.4f)", pivot, closeness[pivot])

    return tuple(pivots)


def select_pivots(graph: GraphAccessor, edge_type: EdgeType, num_dimensions: int,
                  strategy: str = "farthest",
                  subgraph: Optional[SubGraph] = None) -> PivotSet:
    """
    Choose up to num_dimensions pivots for edge_type.

    Args:
        graph: Graph accessor
        edge_type: Edge type whose sub-graph is embedded
        num_dimensions: Requested number of pivots
        strategy: 'farthest' (spread pivots apart) or 'first' (first K in order)
        subgraph: Optional pre-built snapshot of edge_type's sub-graph

    Returns:
        tuple: Pivot nodes in coordinate order. Shorter than num_dimensions
            when the sub-graph has too few nodes.
    """
    if num_dimensions < 0:
        raise ValueError(f"num_dimensions must be >= 0, got {num_dimensions}")
    if strategy not in PIVOT_STRATEGIES:
        raise ValueError(f"Unknown pivot strategy {strategy!r}, expected one of {PIVOT_STRATEGIES}")

    if subgraph is None:
        subgraph = SubGraph.from_accessor(graph, edge_type)

    if num_dimensions == 0 or not subgraph.nodes:
        pivots: PivotSet = ()
    elif strategy == "first":
        pivots = tuple(subgraph.nodes[:num_dimensions])
    else:
        pivots = _farthest_first(subgraph, num_dimensions)

    if len(pivots) < num_dimensions:
        logger.warning("Edge type %r has %d nodes, embedding with %d of %d requested dimensions",
                       edge_type, len(subgraph.nodes), len(pivots), num_dimensions)
    return pivots
