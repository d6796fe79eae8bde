"""
Distance metrics between embedding vectors.

Embedding coordinates are path weights to the pivots, so nodes that are
strongly connected to the same pivots land close together.
"""

import numpy as np
from typing import List, Tuple
from sklearn.metrics import pairwise_distances


def euclidean_distance(v1: np.ndarray, v2: np.ndarray) -> float:
    """
    Compute Euclidean distance between two vectors.

    Args:
        v1: Shape (d,) - first vector
        v2: Shape (d,) - second vector

    Returns:
        float: ||v1 - v2|| >= 0
    """
    assert v1.shape == v2.shape, f"Shape mismatch: {v1.shape} vs {v2.shape}"
    return float(np.linalg.norm(v1 - v2))


def distance_matrix(vectors: np.ndarray) -> np.ndarray:
    """
    Compute pairwise Euclidean distances for all vector pairs.

    Args:
        vectors: Shape (N, d) - N embedding vectors

    Returns:
        np.ndarray: Shape (N, N) - D_ij = ||v_i - v_j||
    """
    N = len(vectors)
    if N == 0 or vectors.ndim != 2 or vectors.shape[1] == 0:
        # Zero-dimensional embeddings put every node at the origin
        return np.zeros((N, N))
    return pairwise_distances(vectors, metric='euclidean')


def nearest_indices(query: np.ndarray, vectors: np.ndarray,
                    k: int) -> List[Tuple[int, float]]:
    """
    Find the k vectors closest to query.

    Args:
        query: Shape (d,) - query vector
        vectors: Shape (N, d) - candidate vectors
        k: Number of neighbours to return

    Returns:
        List of (index, distance), ascending by distance; ties keep index order
    """
    if k <= 0 or len(vectors) == 0:
        return []
    dists = np.linalg.norm(vectors - query.reshape(1, -1), axis=1)
    order = np.argsort(dists, kind='stable')[:k]
    return [(int(i), float(dists[i])) for i in order]
