"""
PostgreSQL graph accessor for the embedding engine.

Reads typed, weighted edges from a graph_edges table using a pooled
psycopg2 connection. Edge weight is computed in SQL as strength * confidence.
The embedding engine only reads through this adapter; upsert_edge and
create_schema exist so the host (and tests) can populate the table.
"""

from psycopg2.pool import ThreadedConnectionPool
from typing import List, Optional, Tuple
from contextlib import contextmanager

from dimembed.graph.accessor import GraphAccessor, edge_weight

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    source_id TEXT NOT NULL,
    target_id TEXT NOT NULL,
    edge_type TEXT NOT NULL,
    strength DOUBLE PRECISION NOT NULL,
    confidence DOUBLE PRECISION NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (source_id, target_id, edge_type)
)
"""


class PostgresGraphStore(GraphAccessor):
    """
    Graph accessor backed by a Postgres table of typed edges.

    Node identifiers are stored as text.
    """

    def __init__(self, database_url: str, pool_size: int = 5,
                 table_name: str = "graph_edges"):
        """
        Initialize Postgres graph store.

        Args:
            database_url: PostgreSQL connection string
            pool_size: Number of connections in pool
            table_name: Edge table name
        """
        self.database_url = database_url
        self.pool = ThreadedConnectionPool(
            minconn=1,
            maxconn=pool_size,
            dsn=database_url
        )
        self.table_name = table_name

    @contextmanager
    def get_connection(self):
        """Context manager for connection pooling."""
        conn = self.pool.getconn()
        try:
            yield conn
        finally:
            self.pool.putconn(conn)

    def create_schema(self) -> None:
        """Create the edge table if it does not exist."""
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL.format(table=self.table_name))
                conn.commit()

    def upsert_edge(self, source_id: str, target_id: str, edge_type: str,
                    strength: float = 1.0, confidence: float = 1.0) -> None:
        """
        Insert or update an edge.

        Args:
            source_id: Source node
            target_id: Target node
            edge_type: Edge type tag
            strength: Relation strength in [0, 1]
            confidence: Confidence in [0, 1]
        """
        edge_weight(strength, confidence)
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO {self.table_name} (source_id, target_id, edge_type, strength, confidence)
                    VALUES (%s, %s, %s, %s, %s)
                    ON CONFLICT (source_id, target_id, edge_type)
                    DO UPDATE SET
                        strength = EXCLUDED.strength,
                        confidence = EXCLUDED.confidence,
                        updated_at = NOW()
                    """,
                    (source_id, target_id, edge_type, strength, confidence)
                )
                conn.commit()

    def nodes(self, edge_type: str) -> List[str]:
        """All nodes appearing as source or target of an edge_type edge."""
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    SELECT source_id FROM {self.table_name} WHERE edge_type = %s
                    UNION
                    SELECT target_id FROM {self.table_name} WHERE edge_type = %s
                    ORDER BY 1
                    """,
                    (edge_type, edge_type)
                )
                return [row[0] for row in cur.fetchall()]

    def has_node(self, node: str, edge_type: str) -> bool:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    SELECT EXISTS (
                        SELECT 1 FROM {self.table_name}
                        WHERE edge_type = %s AND (source_id = %s OR target_id = %s)
                    )
                    """,
                    (edge_type, node, node)
                )
                return bool(cur.fetchone()[0])

    def outgoing_edges(self, node: str, edge_type: str) -> List[Tuple[str, float]]:
        """
        Get node's outgoing edges of edge_type.

        Returns:
            List of (target_id, weight) tuples, strongest first
        """
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    SELECT target_id, strength * confidence AS weight
                    FROM {self.table_name}
                    WHERE source_id = %s AND edge_type = %s
                    ORDER BY weight DESC, target_id
                    """,
                    (node, edge_type)
                )
                return [(row[0], float(row[1])) for row in cur.fetchall()]

    def count(self, edge_type: Optional[str] = None) -> int:
        """Get number of edges, optionally of one edge type."""
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                if edge_type is None:
                    cur.execute(f"SELECT COUNT(*) FROM {self.table_name}")
                else:
                    cur.execute(
                        f"SELECT COUNT(*) FROM {self.table_name} WHERE edge_type = %s",
                        (edge_type,)
                    )
                return cur.fetchone()[0]

    def close(self):
        """Close all connections in pool."""
        self.pool.closeall()
