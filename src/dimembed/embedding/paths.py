"""
Highest-weight path search.

The weight of a path is the product of its edge weights. Because every weight
lies in [0, 1], extending a path can never increase its weight, so the
Dijkstra settling argument holds with a max-priority frontier: the first time
a node is popped, its best weight is final.

Zero-weight edges carry no information and are treated as absent.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from dimembed.graph.accessor import EdgeType, GraphAccessor, Node, check_weight, sort_nodes

logger = logging.getLogger(__name__)

Neighbors = Callable[[Node], Iterable[Tuple[Node, float]]]


def highest_weight_paths(neighbors: Neighbors, start: Node,
                         target: Optional[Node] = None) -> Dict[Node, float]:
    """
    Single-source highest-weight path search.

    Args:
        neighbors: Function returning (node, weight) pairs reachable in one step
        start: Source node
        target: Optional node at which the search may stop once settled

    Returns:
        dict: node -> best path weight from start, for every node reached.
            start maps to 1.0. If target is given, only its entry is
            guaranteed final.
    """
    best = {start: 1.0}
    settled = set()
    # counter breaks ties in insertion order so nodes are never compared
    counter = itertools.count()
    frontier = [(-1.0, next(counter), start)]

    while frontier:
        neg_weight, _, node = heapq.heappop(frontier)
        if node in settled:
            continue
        settled.add(node)
        if target is not None and node == target:
            break

        weight = -neg_weight
        for neighbor, edge_w in neighbors(node):
            edge_w = check_weight(node, neighbor, edge_w)
            if edge_w == 0.0 or neighbor in settled:
                continue
            candidate = weight * edge_w
            if candidate > best.get(neighbor, 0.0):
                best[neighbor] = candidate
                heapq.heappush(frontier, (-candidate, next(counter), neighbor))

    return best


def max_path_weight(graph: GraphAccessor, start: Node, target: Node,
                    edge_type: EdgeType) -> float:
    """
    Weight of the highest-weight directed path from start to target.

    Only edges of edge_type are followed. Returns 1.0 when start == target and
    0.0 when target is unreachable.
    """
    if start == target:
        return 1.0
    best = highest_weight_paths(lambda n: graph.outgoing_edges(n, edge_type),
                                start, target=target)
    return best.get(target, 0.0)


@dataclass
class SubGraph:
    """
    Snapshot of one edge type's sub-graph.

    Parallel edges are collapsed to the strongest one and weights are
    validated once, when the snapshot is taken.

    Attributes:
        edge_type: Edge type the snapshot covers
        nodes: Participating nodes in reproducible order
        forward: source -> {target: weight}
        reverse: target -> {source: weight}
    """
    edge_type: EdgeType
    nodes: List[Node] = field(default_factory=list)
    forward: Dict[Node, Dict[Node, float]] = field(default_factory=dict)
    reverse: Dict[Node, Dict[Node, float]] = field(default_factory=dict)

    @classmethod
    def from_accessor(cls, graph: GraphAccessor, edge_type: EdgeType) -> "SubGraph":
        nodes = sort_nodes(set(graph.nodes(edge_type)))
        forward: Dict[Node, Dict[Node, float]] = {}
        reverse: Dict[Node, Dict[Node, float]] = {}
        for source in nodes:
            for target, weight in graph.outgoing_edges(source, edge_type):
                weight = check_weight(source, target, weight)
                if weight == 0.0 or weight <= forward.get(source, {}).get(target, 0.0):
                    continue
                forward.setdefault(source, {})[target] = weight
                reverse.setdefault(target, {})[source] = weight
        logger.debug("Snapshot of %r: %d nodes, %d edges", edge_type, len(nodes),
                     sum(len(t) for t in forward.values()))
        return cls(edge_type=edge_type, nodes=nodes, forward=forward, reverse=reverse)

    def successors(self, node: Node) -> Iterable[Tuple[Node, float]]:
        return self.forward.get(node, {}).items()

    def predecessors(self, node: Node) -> Iterable[Tuple[Node, float]]:
        return self.reverse.get(node, {}).items()

    def weights_from(self, start: Node) -> Dict[Node, float]:
        """Best path weight from start to every reachable node."""
        return highest_weight_paths(self.successors, start)

    def weights_to(self, target: Node) -> Dict[Node, float]:
        """Best path weight from every node that can reach target."""
        return highest_weight_paths(self.predecessors, target)
