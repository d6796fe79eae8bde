"""
Unit tests for pivot selection.
"""

import logging

import pytest
from dimembed.embedding.pivots import select_pivots
from dimembed.graph import GraphMemory


@pytest.fixture
def chain():
    return GraphMemory([("A", "B", "T", 0.8), ("B", "C", "T", 0.5)])


class TestSelectPivots:
    """Test select_pivots."""

    def test_farthest_spreads_pivots(self, chain):
        """Test that the second pivot is the node weakest connected to the first."""
        assert select_pivots(chain, "T", 2) == ("A", "C")

    def test_first_strategy(self, chain):
        """Test that 'first' takes nodes in sorted order."""
        assert select_pivots(chain, "T", 2, strategy="first") == ("A", "B")

    def test_deterministic(self):
        """Test that the same graph always yields the same pivots."""
        edges = [(i, (i * 7) % 11, "T", 0.5 + (i % 5) / 10) for i in range(11)]
        results = {select_pivots(GraphMemory(edges), "T", 4) for _ in range(5)}
        results.add(select_pivots(GraphMemory(list(reversed(edges))), "T", 4))
        assert len(results) == 1

    def test_pivots_distinct(self):
        g = GraphMemory([("A", "B", "T", 1.0), ("B", "A", "T", 1.0), ("C", "D", "T", 1.0)])
        pivots = select_pivots(g, "T", 4)
        assert len(pivots) == 4
        assert len(set(pivots)) == 4

    def test_disconnected_components_preferred(self):
        """Test that an unreachable node is picked before a connected one."""
        g = GraphMemory([("A", "B", "T", 0.9), ("C", "D", "T", 0.9)])
        pivots = select_pivots(g, "T", 2)
        assert pivots[0] == "A"
        assert pivots[1] == "C"

    def test_degenerate_dimension_warns(self, chain, caplog):
        """Test that asking for too many pivots degrades gracefully with a warning."""
        with caplog.at_level(logging.WARNING, logger="dimembed.embedding.pivots"):
            pivots = select_pivots(chain, "T", 5)
        assert sorted(pivots) == ["A", "B", "C"]
        assert pivots[:2] == ("A", "C")
        assert "3 of 5" in caplog.text

    def test_empty_edge_type(self, chain):
        """Test that an edge type with no edges yields no pivots."""
        assert select_pivots(chain, "missing", 3) == ()

    def test_zero_dimensions(self, chain, caplog):
        with caplog.at_level(logging.WARNING):
            assert select_pivots(chain, "T", 0) == ()
        assert caplog.text == ""

    def test_invalid_arguments(self, chain):
        with pytest.raises(ValueError):
            select_pivots(chain, "T", -1)
        with pytest.raises(ValueError):
            select_pivots(chain, "T", 2, strategy="random")
