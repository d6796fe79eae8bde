"""Pivot selection, path search and the embedding store."""

from dimembed.embedding.distance import distance_matrix, euclidean_distance
from dimembed.embedding.paths import SubGraph, highest_weight_paths, max_path_weight
from dimembed.embedding.pivots import select_pivots
from dimembed.embedding.store import EmbeddingStore, TypeEmbedding

__all__ = [
    "EmbeddingStore",
    "TypeEmbedding",
    "SubGraph",
    "select_pivots",
    "max_path_weight",
    "highest_weight_paths",
    "euclidean_distance",
    "distance_matrix",
]
