"""
Dimensional Embedding Agent: host-facing facade over the embedding store.

A host scheduler calls on_tick() periodically to refresh the embeddings of
the configured edge types, and forwards operator commands to on_command().
The agent holds no graph reference of its own; everything goes through the
store's accessor.
"""

import logging
import shlex
from typing import Callable, Dict, List, Optional, Sequence, Union

from dimembed.config import SIMILARITY_LINK, EmbeddingConfig
from dimembed.embedding.store import EmbeddingStore
from dimembed.errors import EmbeddingError
from dimembed.graph.accessor import GraphAccessor
from dimembed.utils import format_vector

logger = logging.getLogger(__name__)

USAGE = """\
Commands:
  embed <type>                 rebuild the embedding for <type>
  add <node> <type>            embed one node against the current pivots
  clear <type>                 drop the embedding for <type>
  dump <type>                  list node vectors for <type>
  vector <node> <type>         show one node's vector
  distance <a> <b> <type>      embedding distance between two nodes
  nearest <node> <type> [k]    k closest nodes (default 5)
  help                         show this message"""


class _UsageError(Exception):
    pass


class DimensionalEmbeddingAgent:
    """
    Scheduler and command surface for an EmbeddingStore.

    Attributes:
        store: The embedding store being driven
        config: Agent configuration (edge types to refresh, logging)
        ticks: Number of on_tick calls so far
    """

    def __init__(self, store: EmbeddingStore, config: Optional[EmbeddingConfig] = None):
        self.store = store
        self.config = config or store.config
        self.ticks = 0
        self._commands: Dict[str, Callable[[List[str]], str]] = {
            'embed': self._cmd_embed,
            'add': self._cmd_add,
            'clear': self._cmd_clear,
            'dump': self._cmd_dump,
            'vector': self._cmd_vector,
            'distance': self._cmd_distance,
            'nearest': self._cmd_nearest,
        }

    @classmethod
    def from_graph(cls, graph: GraphAccessor,
                   config: Optional[EmbeddingConfig] = None) -> "DimensionalEmbeddingAgent":
        """Build an agent and its store over graph."""
        config = config or EmbeddingConfig()
        return cls(EmbeddingStore(graph, config=config), config)

    def on_tick(self) -> List:
        """
        Re-embed every configured edge type.

        Returns:
            List of edge types embedded on this tick
        """
        self.ticks += 1
        embedded = []
        for edge_type in self.config.edge_types:
            self.store.embed(edge_type)
            embedded.append(edge_type)
            if self.config.log_embeddings:
                self.store.log_embedding(edge_type)
        logger.debug("Tick %d embedded %s", self.ticks, embedded)
        return embedded

    def on_command(self, args: Union[str, Sequence[str]]) -> str:
        """
        Run an operator command.

        Args:
            args: Command line as a string or pre-split words

        Returns:
            str: Command output, a usage message, or 'error: ...' when the
                store reports an EmbeddingError
        """
        try:
            words = shlex.split(args) if isinstance(args, str) else list(args)
        except ValueError as e:
            return f"usage error: {e}\n{USAGE}"
        if not words or words[0] == 'help':
            return USAGE

        handler = self._commands.get(words[0])
        if handler is None:
            return f"unknown command {words[0]!r}\n{USAGE}"
        try:
            return handler(words[1:])
        except EmbeddingError as e:
            logger.info("Command %r failed: %s", words, e)
            return f"error: {e}"
        except _UsageError:
            return f"usage error in {words[0]!r}\n{USAGE}"

    def embed_sim_links(self):
        """Embed the SimilarityLink sub-graph and log it."""
        self.store.embed(SIMILARITY_LINK)
        self.log_sim_embedding()

    def log_sim_embedding(self):
        """Log the SimilarityLink embedding."""
        self.store.log_embedding(SIMILARITY_LINK)

    def _cmd_embed(self, args):
        (edge_type,) = _arity(args, 1)
        state = self.store.embed(edge_type)
        return (f"embedded {edge_type}: {len(state.vectors)} nodes, "
                f"{state.dimension} dimensions")

    def _cmd_add(self, args):
        node, edge_type = _arity(args, 2)
        vector = self.store.add_node(node, edge_type)
        return f"added {node} to {edge_type}: {format_vector(vector)}"

    def _cmd_clear(self, args):
        (edge_type,) = _arity(args, 1)
        self.store.clear(edge_type)
        return f"cleared {edge_type}"

    def _cmd_dump(self, args):
        (edge_type,) = _arity(args, 1)
        return self.store.dump(edge_type)

    def _cmd_vector(self, args):
        node, edge_type = _arity(args, 2)
        return f"{node} -> {format_vector(self.store.vector(node, edge_type))}"

    def _cmd_distance(self, args):
        a, b, edge_type = _arity(args, 3)
        return f"distance({a}, {b}) = {self.store.distance(a, b, edge_type):.4f}"

    def _cmd_nearest(self, args):
        if len(args) == 3:
            node, edge_type, k = args
            try:
                k = int(k)
            except ValueError:
                raise _UsageError() from None
        else:
            node, edge_type = _arity(args, 2)
            k = 5
        neighbours = self.store.nearest(node, edge_type, k)
        if not neighbours:
            return f"no other nodes embedded for {edge_type}"
        return "\n".join(f"{other}\t{dist:.4f}" for other, dist in neighbours)

    def __repr__(self):
        return (f"DimensionalEmbeddingAgent(edge_types={list(self.config.edge_types)}, "
                f"ticks={self.ticks})")


def _arity(args: List[str], n: int) -> List[str]:
    if len(args) != n:
        raise _UsageError()
    return args
