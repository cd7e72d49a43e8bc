"""Execution planning for LazyTreeLib.

The ExecutionPlan validates a TraversalConfig and assembles the pieces it
describes (error handling, caching, traversal strategy, policies, bounds)
into a LazySequence for a given children-function.
"""

from typing import Any, Dict

from .caching import CachingChildren
from .config import CacheStrategy, TraversalConfig, TraversalStrategy
from .core.sequence import LazySequence
from .core.traversal import (
    LEAVES_BFS,
    LEAVES_DFS,
    PLAIN_BFS,
    POST_ORDER_DFS,
    PRE_ORDER_DFS,
    TRACING_BFS,
    Children,
    TreeTraversal,
)
from .error_handling import ErrorHandlingChildren
from .errors import ConfigurationError
from .filtered import FilteredTraverser

_STRATEGIES = {
    TraversalStrategy.DEPTH_FIRST_PRE: PRE_ORDER_DFS,
    TraversalStrategy.DEPTH_FIRST_POST: POST_ORDER_DFS,
    TraversalStrategy.BREADTH_FIRST: PLAIN_BFS,
    TraversalStrategy.LEAVES_DFS: LEAVES_DFS,
    TraversalStrategy.LEAVES_BFS: LEAVES_BFS,
    TraversalStrategy.TRACING_BFS: TRACING_BFS,
}


class ExecutionPlan:
    """Validated execution plan for a traversal.

    The ExecutionPlan is the bridge between user intent (TraversalConfig)
    and execution. Validation happens up front, before the children-function
    is ever called.
    """

    def __init__(self, config: TraversalConfig, children: Children):
        """Create and validate an execution plan.

        Args:
            config: User's traversal configuration
            children: Children-function of the graph

        Raises:
            ConfigurationError: If the configuration is inconsistent
        """
        self.config = config

        config_errors = config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self.children = self._wrap_children(children)
        self.traversal = self._select_traversal()
        self.traverser = self._build_traverser()

    def _wrap_children(self, children: Children) -> Children:
        """Apply error handling, then caching, around the children-function."""
        if self.config.error_policy is not None:
            children = ErrorHandlingChildren(children, self.config.error_policy)

        performance = self.config.performance
        if performance.cache_strategy == CacheStrategy.MEMORY:
            children = CachingChildren(
                children,
                max_size=performance.cache_size,
                ttl=performance.cache_ttl,
            )
        return children

    def _select_traversal(self) -> TreeTraversal:
        return _STRATEGIES[self.config.strategy]

    def _build_traverser(self) -> FilteredTraverser:
        traverser = FilteredTraverser(self.children)

        if self.config.filter.is_active():
            traverser = traverser.filter(self.config.filter.should_include)
        if self.config.expand.expand_filter is not None:
            traverser = traverser.expand(self.config.expand.expand_filter)
        if self.config.expand.max_depth is not None:
            traverser = traverser.max_depth(self.config.expand.max_depth)

        return traverser.leaves_only(self.config.leaves_only)

    def sequence(self, *roots: Any) -> LazySequence:
        """Return the planned traversal from ``roots``.

        The sequence is truncated to ``performance.max_nodes`` when set.
        """
        sequence = self.traverser.with_roots(roots).traversal(self.traversal)
        if self.config.performance.max_nodes is not None:
            sequence = sequence.take(self.config.performance.max_nodes)
        return sequence

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of execution plan.

        Useful for debugging.

        Returns:
            Dictionary with plan details
        """
        return {
            'strategy': self.config.strategy.value,
            'traversal': self.traversal.name,
            'leaves_only': self.config.leaves_only,
            'filtered': self.config.filter.is_active(),
            'expand_filter': self.config.expand.expand_filter is not None,
            'max_depth': self.config.expand.max_depth,
            'max_nodes': self.config.performance.max_nodes,
            'cache_strategy': self.config.performance.cache_strategy.value,
            'error_policy': (self.config.error_policy.__class__.__name__
                             if self.config.error_policy is not None else None),
            'children': self.children.__class__.__name__,
        }
