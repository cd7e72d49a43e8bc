"""Configuration system for LazyTreeLib.

This module defines how users describe a traversal declaratively: the
order, which nodes are emitted, which are expanded, and the resource bounds
that keep walks over infinite graphs finite.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional


class TraversalStrategy(Enum):
    """How to traverse the graph."""
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children
    DEPTH_FIRST_POST = "dfs_post"   # Children before parent
    BREADTH_FIRST = "bfs"           # Level by level
    LEAVES_DFS = "leaves_dfs"       # Un-expanded nodes, depth-first order
    LEAVES_BFS = "leaves_bfs"       # Un-expanded nodes, level order
    TRACING_BFS = "tracing_bfs"     # Level by level, with backtrace support


class CacheStrategy(Enum):
    """How to handle caching of the children-function."""
    NONE = "none"       # Call the children-function every time
    MEMORY = "memory"   # In-memory LRU/TTL cache


@dataclass
class FilterConfig:
    """Which visited nodes are emitted."""

    include_filter: Optional[Callable[[Any], bool]] = None  # Include predicate
    exclude_filter: Optional[Callable[[Any], bool]] = None  # Exclude predicate

    def is_active(self) -> bool:
        return self.include_filter is not None or self.exclude_filter is not None

    def should_include(self, node) -> bool:
        """Check if a node should be emitted.

        Args:
            node: Node to check

        Returns:
            True if node passes all filters
        """
        # Exclusion takes precedence
        if self.exclude_filter and self.exclude_filter(node):
            return False

        if self.include_filter:
            return self.include_filter(node)

        return True


@dataclass
class ExpandConfig:
    """Which visited nodes have their children requested."""

    expand_filter: Optional[Callable[[Any], bool]] = None  # Expansion predicate
    max_depth: Optional[int] = None                       # Roots are depth 0


@dataclass
class PerformanceConfig:
    """Bounds and caching."""

    max_nodes: Optional[int] = None                 # Truncate the output
    cache_strategy: CacheStrategy = CacheStrategy.NONE
    cache_size: int = 10000                         # Entries kept by the cache
    cache_ttl: Optional[float] = None               # Seconds, None = no expiry


@dataclass
class TraversalConfig:
    """Complete configuration for a traversal.

    The ExecutionPlan validates this configuration and turns it into a
    LazySequence for a given children-function.
    """

    strategy: TraversalStrategy = TraversalStrategy.DEPTH_FIRST_PRE
    filter: FilterConfig = field(default_factory=FilterConfig)
    expand: ExpandConfig = field(default_factory=ExpandConfig)
    leaves_only: bool = False
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)

    # Error handling for the children-function; None propagates errors
    error_policy: Optional[Any] = None

    # Convenience constructors for common configurations

    @classmethod
    def leaves(cls, breadth_first: bool = False) -> 'TraversalConfig':
        """Create config emitting only the fringe of the graph.

        Args:
            breadth_first: Use level order instead of depth-first order

        Returns:
            TraversalConfig for leaves-only traversal
        """
        return cls(
            strategy=TraversalStrategy.LEAVES_BFS if breadth_first else TraversalStrategy.LEAVES_DFS,
            leaves_only=True,
        )

    @classmethod
    def bounded(cls, max_nodes: int, max_depth: Optional[int] = None,
                strategy: TraversalStrategy = TraversalStrategy.BREADTH_FIRST) -> 'TraversalConfig':
        """Create config that is safe on infinite graphs.

        Args:
            max_nodes: Maximum number of nodes to emit
            max_depth: Optional depth at which expansion stops
            strategy: Traversal order

        Returns:
            TraversalConfig with bounded output
        """
        return cls(
            strategy=strategy,
            expand=ExpandConfig(max_depth=max_depth),
            performance=PerformanceConfig(max_nodes=max_nodes),
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.strategy, TraversalStrategy):
            errors.append(f"unknown strategy: {self.strategy!r}")

        if self.expand.max_depth is not None and self.expand.max_depth < 0:
            errors.append("max_depth cannot be negative")

        if self.performance.max_nodes is not None and self.performance.max_nodes < 0:
            errors.append("max_nodes cannot be negative")

        if self.performance.cache_size <= 0:
            errors.append("cache_size must be positive")

        if self.performance.cache_ttl is not None and self.performance.cache_ttl <= 0:
            errors.append("cache_ttl must be positive")

        if self.error_policy is not None and not hasattr(self.error_policy, 'handle'):
            errors.append("error_policy must provide handle(error, node)")

        return errors
