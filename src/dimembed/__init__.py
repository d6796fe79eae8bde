"""
Dimensional Embedding: pivot-based vector embedding of typed weighted graphs.

A directed graph whose edges carry strength * confidence weights in [0, 1] is
split by edge type. For each edge type a handful of pivot nodes is chosen,
and every node is mapped to the vector of its highest path weights to those
pivots, where a path's weight is the product of its edge weights. Graph
proximity then becomes a cheap vector distance.

- GraphAccessor: read-only source of nodes and weighted typed edges
- EmbeddingStore: per edge type pivots and node vectors
- DimensionalEmbeddingAgent: tick/command surface for a host scheduler
"""

__version__ = "0.1.0"

from dimembed.config import EmbeddingConfig
from dimembed.embedding.store import EmbeddingStore
from dimembed.engine import DimensionalEmbeddingAgent
from dimembed.errors import EmbeddingError, InvalidWeightError, NotEmbeddedError, UnknownNodeError
from dimembed.graph import GraphAccessor, GraphMemory

__all__ = [
    "DimensionalEmbeddingAgent",
    "EmbeddingConfig",
    "EmbeddingStore",
    "GraphAccessor",
    "GraphMemory",
    "EmbeddingError",
    "NotEmbeddedError",
    "UnknownNodeError",
    "InvalidWeightError",
]
