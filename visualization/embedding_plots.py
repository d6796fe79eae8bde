"""
Embedding visualization for the dimensional embedding engine.

Projects pivot-distance vectors to 2D (PCA) to show which nodes the
embedding places together, and draws the pairwise distance matrix.
"""

import numpy as np
import matplotlib.pyplot as plt
from sklearn.decomposition import PCA
from typing import Optional

from dimembed.embedding.distance import distance_matrix
from dimembed.graph.accessor import sort_nodes


def _stack(embedding):
    nodes = sort_nodes(embedding.vectors)
    if not nodes:
        return nodes, np.empty((0, embedding.dimension))
    return nodes, np.vstack([embedding.vectors[n] for n in nodes])


def project_2d(vectors: np.ndarray) -> np.ndarray:
    """
    Reduce vectors to 2D coordinates.

    Embeddings with more than two dimensions are projected with PCA; smaller
    ones are zero-padded.

    Args:
        vectors: Shape (N, d)

    Returns:
        np.ndarray: Shape (N, 2)
    """
    N, d = vectors.shape
    if d > 2 and N > 2:
        return PCA(n_components=2, random_state=42).fit_transform(vectors)
    coords = np.zeros((N, 2))
    coords[:, :min(d, 2)] = vectors[:, :2]
    return coords


def plot_embedding_projection(embedding,
                              title: Optional[str] = None,
                              figsize: tuple = (10, 8),
                              annotate: bool = True,
                              save_path: Optional[str] = None):
    """
    Scatter the embedded nodes in 2D, pivots highlighted.

    Args:
        embedding: TypeEmbedding to plot
        title: Plot title (defaults to the edge type)
        figsize: Figure size
        annotate: Whether to label each point with its node
        save_path: Optional path to save figure

    Returns:
        (fig, coords_2d, nodes)
    """
    nodes, vectors = _stack(embedding)
    coords_2d = project_2d(vectors)
    pivots = set(embedding.pivots)
    is_pivot = np.array([n in pivots for n in nodes], dtype=bool)

    fig, ax = plt.subplots(figsize=figsize)
    if len(nodes):
        ax.scatter(coords_2d[~is_pivot, 0], coords_2d[~is_pivot, 1],
                   c='steelblue', s=50, alpha=0.7, edgecolors='black',
                   linewidth=0.5, label='Nodes')
        ax.scatter(coords_2d[is_pivot, 0], coords_2d[is_pivot, 1],
                   c='crimson', marker='*', s=200, edgecolors='black',
                   linewidth=0.5, label='Pivots')
        ax.legend(loc='best', fontsize=9)
    if annotate:
        for node, (x, y) in zip(nodes, coords_2d):
            ax.annotate(str(node), (x, y), fontsize=8, alpha=0.8,
                        xytext=(3, 3), textcoords='offset points')

    ax.set_xlabel('Component 1', fontsize=12)
    ax.set_ylabel('Component 2', fontsize=12)
    ax.set_title(title or f'Embedding of {embedding.edge_type} '
                 f'({embedding.dimension} pivots)', fontsize=13, fontweight='bold')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig, coords_2d, nodes


def plot_distance_matrix(embedding,
                         title: str = "Embedding Distance Matrix",
                         figsize: tuple = (10, 8),
                         save_path: Optional[str] = None):
    """
    Heat-map of pairwise embedding distances.

    Args:
        embedding: TypeEmbedding to plot
        title: Plot title
        figsize: Figure size
        save_path: Optional path to save figure

    Returns:
        (fig, D) where D has shape (N, N)
    """
    nodes, vectors = _stack(embedding)
    D = distance_matrix(vectors)

    fig, ax = plt.subplots(figsize=figsize)
    im = ax.imshow(D, cmap='viridis_r', aspect='auto')
    plt.colorbar(im, ax=ax, label='Euclidean distance')

    if len(nodes) <= 40:
        ax.set_xticks(range(len(nodes)))
        ax.set_yticks(range(len(nodes)))
        ax.set_xticklabels([str(n) for n in nodes], rotation=90, fontsize=8)
        ax.set_yticklabels([str(n) for n in nodes], fontsize=8)

    ax.set_title(title, fontsize=13, fontweight='bold')
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig, D
