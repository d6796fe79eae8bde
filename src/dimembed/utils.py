"""
Utility functions for inspecting embeddings.

Includes the human-readable dump and summary statistics used when debugging
an embedding. Both accept a TypeEmbedding (see dimembed.embedding.store).
"""

import numpy as np
from typing import Dict

from dimembed.embedding.distance import distance_matrix
from dimembed.graph.accessor import sort_nodes


def format_vector(vector: np.ndarray, precision: int = 4) -> str:
    """Format a vector as '[v0, v1, ...]' with fixed decimals."""
    return "[" + ", ".join(f"{x:.{precision}f}" for x in vector) + "]"


def format_embedding(embedding, precision: int = 4) -> str:
    """
    Format an embedding as one 'node -> [v0, v1, ...]' line per node.

    Args:
        embedding: TypeEmbedding to format
        precision: Decimal places per coordinate

    Returns:
        str: Header line listing the pivots, then one line per node in sorted order
    """
    pivots = ", ".join(str(p) for p in embedding.pivots)
    lines = [f"Embedding of {embedding.edge_type} "
             f"({embedding.dimension} pivots: [{pivots}], {len(embedding.vectors)} nodes)"]
    for node in sort_nodes(embedding.vectors):
        lines.append(f"{node} -> {format_vector(embedding.vectors[node], precision)}")
    return "\n".join(lines)


def embedding_stats(embedding) -> Dict[str, float]:
    """
    Compute summary statistics for an embedding.

    Metrics include:
    - num_nodes, dimension: table size
    - isolated: nodes whose vector is all zeros (reach no pivot)
    - mean_distance, max_distance: over distinct node pairs
    - mean_coordinate: average path weight to a pivot

    Args:
        embedding: TypeEmbedding to summarise

    Returns:
        dict: Computed metrics
    """
    nodes = sort_nodes(embedding.vectors)
    N = len(nodes)
    d = embedding.dimension
    vectors = np.vstack([embedding.vectors[n] for n in nodes]) if N else np.empty((0, d))

    D = distance_matrix(vectors)
    if N > 1:
        upper = D[np.triu_indices(N, k=1)]
        mean_distance = float(np.mean(upper))
        max_distance = float(np.max(upper))
    else:
        mean_distance = max_distance = 0.0

    return {
        'num_nodes': N,
        'dimension': d,
        'isolated': int(np.sum(~np.any(vectors > 0, axis=1))) if N else 0,
        'mean_distance': mean_distance,
        'max_distance': max_distance,
        'mean_coordinate': float(np.mean(vectors)) if vectors.size else 0.0,
    }
