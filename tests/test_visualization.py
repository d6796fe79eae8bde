"""
Smoke tests for embedding plots.
"""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest
from dimembed import EmbeddingStore, GraphMemory
from visualization.embedding_plots import plot_distance_matrix, plot_embedding_projection, project_2d


@pytest.fixture
def embedding():
    g = GraphMemory()
    for i in range(8):
        g.add_edge(i, (i + 1) % 8, "T", 0.9)
        g.add_edge(i, (i + 3) % 8, "T", 0.4)
    return EmbeddingStore(g, num_dimensions=3).embed("T")


class TestProjection:
    """Test 2D projection."""

    def test_pca_projection_shape(self):
        coords = project_2d(np.random.RandomState(0).rand(10, 4))
        assert coords.shape == (10, 2)

    def test_low_dimensions_padded(self):
        coords = project_2d(np.array([[0.5], [0.25]]))
        assert np.allclose(coords, [[0.5, 0.0], [0.25, 0.0]])


class TestPlots:
    """Test that plots render."""

    def test_projection_plot(self, embedding, tmp_path):
        path = tmp_path / "projection.png"
        fig, coords, nodes = plot_embedding_projection(embedding, save_path=str(path))
        assert coords.shape == (8, 2)
        assert nodes == list(range(8))
        assert path.exists()
        plt.close(fig)

    def test_distance_matrix_plot(self, embedding):
        fig, D = plot_distance_matrix(embedding)
        assert D.shape == (8, 8)
        assert np.allclose(np.diag(D), 0.0)
        plt.close(fig)

    def test_empty_embedding(self):
        empty = EmbeddingStore(GraphMemory(), num_dimensions=2).embed("T")
        fig, coords, nodes = plot_embedding_projection(empty)
        assert coords.shape == (0, 2)
        plt.close(fig)
