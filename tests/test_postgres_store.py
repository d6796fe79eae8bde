"""
Unit tests for the Postgres graph accessor, with the connection pool mocked.
"""

from unittest.mock import MagicMock

import numpy as np
import pytest
from dimembed import EmbeddingStore
from dimembed.storage import postgres_store
from dimembed.storage.postgres_store import PostgresGraphStore


@pytest.fixture
def cursor(monkeypatch):
    cur = MagicMock()
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cur
    pool = MagicMock()
    pool.getconn.return_value = conn
    monkeypatch.setattr(postgres_store, "ThreadedConnectionPool", MagicMock(return_value=pool))
    cur.conn = conn
    cur.pool = pool
    return cur


class TestPostgresGraphStore:
    """Test PostgresGraphStore queries."""

    def test_pool_created_with_dsn(self, cursor):
        PostgresGraphStore("postgresql://localhost/graph", pool_size=3)
        postgres_store.ThreadedConnectionPool.assert_called_once_with(
            minconn=1, maxconn=3, dsn="postgresql://localhost/graph"
        )

    def test_connection_returned_to_pool(self, cursor):
        store = PostgresGraphStore("dsn")
        cursor.fetchall.return_value = []
        store.nodes("T")
        cursor.pool.putconn.assert_called_once_with(cursor.conn)

    def test_nodes(self, cursor):
        cursor.fetchall.return_value = [("A",), ("B",)]
        store = PostgresGraphStore("dsn")
        assert store.nodes("T") == ["A", "B"]
        sql, params = cursor.execute.call_args[0]
        assert "UNION" in sql
        assert params == ("T", "T")

    def test_outgoing_edges(self, cursor):
        cursor.fetchall.return_value = [("B", 0.4), ("C", 0.1)]
        store = PostgresGraphStore("dsn")
        assert store.outgoing_edges("A", "T") == [("B", 0.4), ("C", 0.1)]
        sql, params = cursor.execute.call_args[0]
        assert "strength * confidence" in sql
        assert params == ("A", "T")

    def test_has_node(self, cursor):
        cursor.fetchone.return_value = (True,)
        assert PostgresGraphStore("dsn").has_node("A", "T")

    def test_upsert_edge(self, cursor):
        store = PostgresGraphStore("dsn")
        store.upsert_edge("A", "B", "T", 0.8, 0.5)
        sql, params = cursor.execute.call_args[0]
        assert "ON CONFLICT" in sql
        assert params == ("A", "B", "T", 0.8, 0.5)
        cursor.conn.commit.assert_called_once()

    def test_upsert_rejects_invalid_truth_value(self, cursor):
        with pytest.raises(ValueError):
            PostgresGraphStore("dsn").upsert_edge("A", "B", "T", 1.5, 1.0)
        cursor.execute.assert_not_called()

    def test_count(self, cursor):
        cursor.fetchone.return_value = (7,)
        store = PostgresGraphStore("dsn")
        assert store.count() == 7
        assert store.count("T") == 7
        assert cursor.execute.call_args[0][1] == ("T",)

    def test_create_schema_and_close(self, cursor):
        store = PostgresGraphStore("dsn", table_name="edges")
        store.create_schema()
        assert "CREATE TABLE IF NOT EXISTS edges" in cursor.execute.call_args[0][0]
        store.close()
        cursor.pool.closeall.assert_called_once()

    def test_embed_through_store(self, cursor):
        """Test embedding a graph read from Postgres."""
        edges = {"A": [("B", 0.8)], "B": [("C", 0.5)], "C": []}

        def execute(sql, params=None):
            if "UNION" in sql:
                cursor.fetchall.return_value = [(n,) for n in sorted(edges)]
            else:
                cursor.fetchall.return_value = edges[params[0]]

        cursor.execute.side_effect = execute
        store = EmbeddingStore(PostgresGraphStore("dsn"), num_dimensions=2)
        store.embed("T")
        assert store.pivots("T") == ("A", "C")
        assert np.allclose(store.vector("B", "T"), [0.0, 0.5])
