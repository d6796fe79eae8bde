"""
Visualization tools for the dimensional embedding engine.

Static matplotlib views of an embedding: a 2D projection of the node vectors
with pivots highlighted, and the pairwise distance matrix.
"""

from visualization.embedding_plots import (
    plot_embedding_projection,
    plot_distance_matrix,
    project_2d
)

__all__ = [
    'plot_embedding_projection',
    'plot_distance_matrix',
    'project_2d',
]
