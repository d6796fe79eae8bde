"""
Configuration for the dimensional embedding engine.

Settings come from keyword arguments, a plain dictionary, or the process
environment (optionally populated from a ``.env`` file).
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv

PIVOT_STRATEGIES = ("farthest", "first")
SIMILARITY_LINK = "SimilarityLink"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot interpret {value!r} as a boolean")


@dataclass
class EmbeddingConfig:
    """
    Settings controlling pivot selection and the agent's tick behaviour.

    Attributes:
        num_dimensions: Number of pivots (vector length) requested per edge type
        pivot_strategy: 'farthest' or 'first'
        edge_types: Edge types re-embedded on every agent tick
        log_embeddings: Whether the agent logs a dump after each tick
        database_url: Optional Postgres DSN for the stored graph
    """
    num_dimensions: int = 5
    pivot_strategy: str = "farthest"
    edge_types: Tuple[str, ...] = field(default=(SIMILARITY_LINK,))
    log_embeddings: bool = False
    database_url: Optional[str] = None

    def __post_init__(self):
        self.edge_types = tuple(self.edge_types)
        self.validate()

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        if isinstance(self.num_dimensions, bool) or not isinstance(self.num_dimensions, int):
            raise ValueError(f"num_dimensions must be an int, got {self.num_dimensions!r}")
        if self.num_dimensions < 0:
            raise ValueError(f"num_dimensions must be >= 0, got {self.num_dimensions}")
        if self.pivot_strategy not in PIVOT_STRATEGIES:
            raise ValueError(
                f"Unknown pivot strategy {self.pivot_strategy!r}, expected one of {PIVOT_STRATEGIES}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmbeddingConfig":
        """Create ``EmbeddingConfig`` from a raw dictionary, defaulting missing keys."""
        defaults = cls()
        return cls(**{k: data.get(k, getattr(defaults, k)) for k in cls.__dataclass_fields__})

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "EmbeddingConfig":
        """
        Build a config from ``DIMEMBED_*`` environment variables.

        Args:
            dotenv_path: Optional .env file loaded before reading the environment

        Returns:
            EmbeddingConfig
        """
        load_dotenv(dotenv_path)

        data: Dict[str, Any] = {}
        dims = os.getenv("DIMEMBED_NUM_DIMENSIONS")
        if dims is not None:
            try:
                data["num_dimensions"] = int(dims)
            except ValueError:
                raise ValueError(f"DIMEMBED_NUM_DIMENSIONS must be an integer, got {dims!r}") from None
        strategy = os.getenv("DIMEMBED_PIVOT_STRATEGY")
        if strategy is not None:
            data["pivot_strategy"] = strategy.strip().lower()
        edge_types = os.getenv("DIMEMBED_EDGE_TYPES")
        if edge_types is not None:
            data["edge_types"] = tuple(t.strip() for t in edge_types.split(",") if t.strip())
        log_embeddings = os.getenv("DIMEMBED_LOG_EMBEDDINGS")
        if log_embeddings is not None:
            data["log_embeddings"] = _parse_bool(log_embeddings)
        data["database_url"] = os.getenv("DATABASE_URL")

        return cls.from_dict(data)

    def update(self, overrides: Dict[str, Any]) -> None:
        """Update fields from a dictionary of overrides, then re-validate."""
        for key, value in overrides.items():
            if hasattr(self, key) and value is not None:
                setattr(self, key, value)
        self.edge_types = tuple(self.edge_types)
        self.validate()
