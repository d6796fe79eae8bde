"""
Unit tests for embedding diagnostics and distance helpers.
"""

import numpy as np
import pytest
from dimembed import EmbeddingStore, GraphMemory
from dimembed.embedding.distance import distance_matrix, euclidean_distance, nearest_indices
from dimembed.utils import embedding_stats, format_embedding, format_vector


@pytest.fixture
def embedding():
    g = GraphMemory([("A", "B", "T", 0.8), ("B", "C", "T", 0.5), ("D", "E", "T", 1.0)])
    store = EmbeddingStore(g, num_dimensions=2)
    return store.embed("T")


class TestDistance:
    """Test distance helpers."""

    def test_euclidean(self):
        assert euclidean_distance(np.array([0.0, 0.0]), np.array([3.0, 4.0])) == pytest.approx(5.0)

    def test_distance_matrix_symmetric_zero_diagonal(self):
        vectors = np.random.RandomState(42).rand(6, 3)
        D = distance_matrix(vectors)
        assert D.shape == (6, 6)
        assert np.allclose(D, D.T)
        assert np.allclose(np.diag(D), 0.0)
        assert D[0, 1] == pytest.approx(np.linalg.norm(vectors[0] - vectors[1]))

    def test_distance_matrix_zero_dimensions(self):
        assert np.array_equal(distance_matrix(np.empty((3, 0))), np.zeros((3, 3)))
        assert distance_matrix(np.empty((0, 2))).shape == (0, 0)

    def test_nearest_indices_stable_ties(self):
        vectors = np.array([[1.0], [0.0], [1.0], [0.5]])
        result = nearest_indices(np.array([1.0]), vectors, 3)
        assert [i for i, _ in result] == [0, 2, 3]
        assert nearest_indices(np.array([1.0]), vectors, 0) == []


class TestDiagnostics:
    """Test dump formatting and statistics."""

    def test_format_vector(self):
        assert format_vector(np.array([0.5, 1.0])) == "[0.5000, 1.0000]"
        assert format_vector(np.array([0.125]), precision=2) == "[0.12]"
        assert format_vector(np.array([])) == "[]"

    def test_format_embedding(self, embedding):
        text = format_embedding(embedding, precision=2)
        assert text.splitlines()[0] == "Embedding of T (2 pivots: [A, D], 5 nodes)"
        assert "B -> [0.00, 0.00]" in text
        assert "D -> [0.00, 1.00]" in text

    def test_stats(self, embedding):
        stats = embedding_stats(embedding)
        assert stats['num_nodes'] == 5
        assert stats['dimension'] == 2
        # B and C reach neither A nor D; E has no outgoing edges
        assert stats['isolated'] == 3
        assert stats['max_distance'] == pytest.approx(np.sqrt(2.0))
        assert 0.0 < stats['mean_distance'] <= stats['max_distance']

    def test_stats_empty(self):
        store = EmbeddingStore(GraphMemory(), num_dimensions=2)
        stats = embedding_stats(store.embed("T"))
        assert stats == {
            'num_nodes': 0,
            'dimension': 0,
            'isolated': 0,
            'mean_distance': 0.0,
            'max_distance': 0.0,
            'mean_coordinate': 0.0,
        }
