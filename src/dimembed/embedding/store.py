"""
Embedding Store: per edge type pivot sets and node vectors.

For every embedded edge type the store keeps one TypeEmbedding: the ordered
pivots and a vector per node whose i-th coordinate is the highest path weight
from the node to pivot i. A vector is only ever computed against the pivots
it is stored with; re-embedding replaces the whole TypeEmbedding.
"""

import dataclasses
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from dimembed.config import EmbeddingConfig
from dimembed.embedding.distance import euclidean_distance, nearest_indices
from dimembed.embedding.paths import SubGraph, max_path_weight
from dimembed.embedding.pivots import PivotSet, select_pivots
from dimembed.errors import NotEmbeddedError, UnknownNodeError
from dimembed.graph.accessor import EdgeType, GraphAccessor, Node, sort_nodes
from dimembed.utils import format_embedding

logger = logging.getLogger(__name__)


@dataclass
class TypeEmbedding:
    """
    Embedding state for a single edge type.

    Attributes:
        edge_type: Edge type this state belongs to
        pivots: Pivot nodes in coordinate order
        vectors: node -> vector of shape (len(pivots),)
        requested_dimensions: Number of pivots asked for when embedding
    """
    edge_type: EdgeType
    pivots: PivotSet
    vectors: Dict[Node, np.ndarray] = field(default_factory=dict)
    requested_dimensions: int = 0

    @property
    def dimension(self) -> int:
        return len(self.pivots)

    @property
    def degenerate(self) -> bool:
        """True when fewer pivots were available than requested."""
        return self.dimension < self.requested_dimensions

    def copy(self) -> "TypeEmbedding":
        return dataclasses.replace(
            self, vectors={node: vec.copy() for node, vec in self.vectors.items()}
        )


class EmbeddingStore:
    """
    Dimensional embedding of a typed graph.

    The graph accessor is passed in explicitly and is only ever read. Each
    embedded edge type has its own lock, created by embed; embed, add_node
    and clear hold it for their whole run and queries hold it while reading.
    """

    def __init__(self, graph: GraphAccessor, num_dimensions: Optional[int] = None,
                 pivot_strategy: Optional[str] = None,
                 config: Optional[EmbeddingConfig] = None):
        """
        Initialize an empty store.

        Args:
            graph: Graph accessor supplying nodes and weighted edges
            num_dimensions: Pivots per edge type (overrides config)
            pivot_strategy: 'farthest' or 'first' (overrides config)
            config: Optional base configuration
        """
        config = dataclasses.replace(config) if config is not None else EmbeddingConfig()
        config.update({"num_dimensions": num_dimensions, "pivot_strategy": pivot_strategy})

        self.graph = graph
        self.config = config
        self._embeddings: Dict[EdgeType, TypeEmbedding] = {}
        self._locks: Dict[EdgeType, threading.RLock] = {}
        self._table_lock = threading.Lock()

    @property
    def num_dimensions(self) -> int:
        return self.config.num_dimensions

    @property
    def pivot_strategy(self) -> str:
        return self.config.pivot_strategy

    def _lock_for(self, edge_type: EdgeType) -> threading.RLock:
        """Lock for edge_type, created on first embed."""
        with self._table_lock:
            lock = self._locks.get(edge_type)
            if lock is None:
                lock = self._locks[edge_type] = threading.RLock()
            return lock

    def _existing_lock(self, edge_type: EdgeType) -> threading.RLock:
        # queries never create locks, so unknown edge types leave no trace
        with self._table_lock:
            lock = self._locks.get(edge_type)
        if lock is None:
            raise NotEmbeddedError(edge_type)
        return lock

    def _state(self, edge_type: EdgeType) -> TypeEmbedding:
        state = self._embeddings.get(edge_type)
        if state is None:
            raise NotEmbeddedError(edge_type)
        return state

    def embed(self, edge_type: EdgeType) -> TypeEmbedding:
        """
        Build a fresh embedding for edge_type, replacing any existing one.

        Pivots are selected anew and every node of the sub-graph gets a
        vector. If the graph supplies an invalid weight the type is left
        unembedded.

        Returns:
            TypeEmbedding: Copy of the installed state
        """
        with self._lock_for(edge_type):
            self._embeddings.pop(edge_type, None)
            logger.info("Embedding edge type %r with %d dimensions", edge_type, self.num_dimensions)

            subgraph = SubGraph.from_accessor(self.graph, edge_type)
            pivots = select_pivots(self.graph, edge_type, self.num_dimensions,
                                   strategy=self.pivot_strategy, subgraph=subgraph)

            # One reverse search per pivot yields weight(node -> pivot) for all nodes
            columns = [subgraph.weights_to(pivot) for pivot in pivots]
            vectors = {
                node: np.array([column.get(node, 0.0) for column in columns], dtype=float)
                for node in subgraph.nodes
            }

            state = TypeEmbedding(edge_type=edge_type, pivots=pivots, vectors=vectors,
                                  requested_dimensions=self.num_dimensions)
            self._embeddings[edge_type] = state
            logger.info("Embedded %d nodes of %r against %d pivots",
                        len(vectors), edge_type, len(pivots))
            return state.copy()

    def add_node(self, node: Node, edge_type: EdgeType) -> np.ndarray:
        """
        Compute and store node's vector against the current pivots.

        Raises:
            NotEmbeddedError: edge_type has not been embedded
            UnknownNodeError: the graph does not know node for edge_type

        Returns:
            np.ndarray: Copy of the stored vector
        """
        with self._existing_lock(edge_type):
            state = self._state(edge_type)
            if not self.graph.has_node(node, edge_type):
                raise UnknownNodeError(node, edge_type)

            vector = np.array([max_path_weight(self.graph, node, pivot, edge_type)
                               for pivot in state.pivots], dtype=float)
            state.vectors[node] = vector
            logger.debug("Added %r to %r embedding: %s", node, edge_type, vector)
            return vector.copy()

    def vector(self, node: Node, edge_type: EdgeType) -> np.ndarray:
        """Return a copy of node's vector for edge_type."""
        with self._existing_lock(edge_type):
            vectors = self._state(edge_type).vectors
            if node not in vectors:
                raise UnknownNodeError(node, edge_type)
            return vectors[node].copy()

    def distance(self, node_a: Node, node_b: Node, edge_type: EdgeType) -> float:
        """Euclidean distance between two embedded nodes."""
        with self._existing_lock(edge_type):
            return euclidean_distance(self.vector(node_a, edge_type),
                                      self.vector(node_b, edge_type))

    def nearest(self, node: Node, edge_type: EdgeType, k: int = 5) -> List[Tuple[Node, float]]:
        """
        The k embedded nodes closest to node, excluding node itself.

        Returns:
            List of (node, distance), ascending by distance
        """
        with self._existing_lock(edge_type):
            query = self.vector(node, edge_type)
            vectors = self._state(edge_type).vectors
            others = sort_nodes(n for n in vectors if n != node)
            if not others:
                return []
            matrix = np.vstack([vectors[n] for n in others])
            return [(others[i], d) for i, d in nearest_indices(query, matrix, k)]

    def pivots(self, edge_type: EdgeType) -> PivotSet:
        """Current pivots for edge_type, in coordinate order."""
        with self._existing_lock(edge_type):
            return self._state(edge_type).pivots

    def snapshot(self, edge_type: EdgeType) -> TypeEmbedding:
        """Deep copy of edge_type's current state."""
        with self._existing_lock(edge_type):
            return self._state(edge_type).copy()

    def clear(self, edge_type: EdgeType) -> None:
        """Remove pivots and vectors for edge_type. No-op if not embedded."""
        with self._table_lock:
            lock = self._locks.get(edge_type)
        if lock is None:
            return
        with lock:
            if self._embeddings.pop(edge_type, None) is not None:
                logger.info("Cleared embedding for %r", edge_type)

    def is_embedded(self, edge_type: EdgeType) -> bool:
        return edge_type in self._embeddings

    def edge_types(self) -> List[EdgeType]:
        """Edge types that currently have an embedding."""
        return list(self._embeddings)

    def dump(self, edge_type: EdgeType) -> str:
        """Human-readable listing of (node -> vector) pairs. Debugging only."""
        return format_embedding(self.snapshot(edge_type))

    def log_embedding(self, edge_type: EdgeType) -> None:
        """Log the dump of edge_type at INFO level."""
        logger.info("%s", self.dump(edge_type))

    def __repr__(self):
        return (f"EmbeddingStore(num_dimensions={self.num_dimensions}, "
                f"strategy={self.pivot_strategy!r}, "
                f"edge_types={len(self._embeddings)})")
