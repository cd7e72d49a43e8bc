"""High-level API for LazyTreeLib.

This module provides simple, functional interfaces for common traversal
operations. These functions wrap the builder and planning API for ease of
use in simple cases.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .config import (
    ExpandConfig,
    FilterConfig,
    PerformanceConfig,
    TraversalConfig,
    TraversalStrategy,
)
from .core.traversal import Children
from .core.sequence import LazySequence
from .planning import ExecutionPlan


def traverse_tree(
    root: Any,
    children: Children,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST_PRE,
    max_depth: Optional[int] = None,
    include_filter: Optional[Callable[[Any], bool]] = None,
    exclude_filter: Optional[Callable[[Any], bool]] = None,
    expand: Optional[Callable[[Any], bool]] = None,
    leaves_only: bool = False,
    max_nodes: Optional[int] = None,
    error_policy: Optional[Any] = None,
    **kwargs
) -> LazySequence:
    """Simple interface for graph traversal.

    This is the primary high-level function. It handles the common case of
    wanting to iterate over nodes without dealing with configs and plans.

    Args:
        root: Starting node for traversal
        children: Children-function, ``node -> iterable of nodes``
        strategy: Traversal strategy (dfs_pre, dfs_post, bfs, leaves_dfs,
            leaves_bfs, tracing_bfs)
        max_depth: Depth (root = 0) at which expansion stops
        include_filter: Function to determine if node should be emitted
        exclude_filter: Function to determine if node should be suppressed
        expand: Function to determine if node's children are requested
        leaves_only: Emit only nodes that were not expanded
        max_nodes: Maximum number of nodes to emit
        error_policy: ErrorPolicy for failing children-functions
        **kwargs: Additional config options (cache_strategy, cache_size,
            cache_ttl)

    Returns:
        LazySequence of nodes; nothing is expanded until it is iterated

    Example:
        >>> graph = {1: [2, 3], 2: [4]}
        >>> traverse_tree(1, graph.get, strategy="bfs").to_list()
        [1, 2, 3, 4]
    """
    config = _build_config(
        strategy=strategy,
        max_depth=max_depth,
        include_filter=include_filter,
        exclude_filter=exclude_filter,
        expand=expand,
        leaves_only=leaves_only,
        max_nodes=max_nodes,
        error_policy=error_policy,
        **kwargs
    )
    return ExecutionPlan(config, children).sequence(root)


def count_nodes(root: Any, children: Children, **kwargs) -> int:
    """Count nodes that match criteria.

    The graph (or the options) must make the traversal finite.

    Args:
        root: Starting node for traversal
        children: Children-function
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        Number of nodes that match criteria
    """
    return traverse_tree(root, children, **kwargs).size()


def find_nodes(
    root: Any,
    children: Children,
    predicate: Callable[[Any], bool],
    **kwargs
) -> LazySequence:
    """Find nodes that match a predicate.

    Args:
        root: Starting node for traversal
        children: Children-function
        predicate: Function that returns True for matching nodes
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        LazySequence of matching nodes

    Example:
        >>> graph = {1: [2, 3], 2: [4]}
        >>> find_nodes(1, graph.get, lambda n: n % 2 == 0).to_list()
        [2, 4]
    """
    kwargs['include_filter'] = predicate
    return traverse_tree(root, children, **kwargs)


def get_leaf_nodes(root: Any, children: Children, **kwargs) -> LazySequence:
    """Get the fringe of a graph: nodes that were not expanded.

    Args:
        root: Starting node for traversal
        children: Children-function
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        LazySequence of leaf nodes, depth-first unless a strategy is given
    """
    kwargs.setdefault('strategy', TraversalStrategy.LEAVES_DFS)
    kwargs['leaves_only'] = True
    return traverse_tree(root, children, **kwargs)


def get_tree_paths(root: Any, children: Children, **kwargs) -> Iterator[List[Any]]:
    """Get the path from the root to each emitted node.

    Paths come from the ancestor stack of the traversal, so no parent links
    are needed on the nodes themselves.

    Args:
        root: Starting node for traversal
        children: Children-function
        **kwargs: Traversal options (see traverse_tree); the strategy must
            support backtraces (dfs_pre, leaves_dfs, bfs, tracing_bfs)

    Yields:
        Lists of nodes forming paths from root

    Example:
        >>> graph = {1: [2, 3], 2: [4]}
        >>> list(get_tree_paths(1, graph.get))
        [[1], [1, 2], [1, 2, 4], [1, 3]]
    """
    strategy = _parse_strategy(kwargs.pop('strategy', TraversalStrategy.DEPTH_FIRST_PRE))
    if strategy == TraversalStrategy.BREADTH_FIRST:
        strategy = TraversalStrategy.TRACING_BFS
    if strategy == TraversalStrategy.LEAVES_BFS:
        raise ValueError("get_tree_paths() does not support leaves_bfs; use tracing_bfs with leaves_only")
    if strategy == TraversalStrategy.DEPTH_FIRST_POST:
        raise ValueError("get_tree_paths() does not support post-order traversal")

    iterator = traverse_tree(root, children, strategy=strategy, **kwargs).typed_iterator()
    for _ in iterator:
        yield list(reversed(iterator.backtrace().to_list()))


def get_tree_stats(root: Any, children: Children, **kwargs) -> Dict[str, Any]:
    """Get statistics about a (finite) graph traversal.

    Args:
        root: Starting node for traversal
        children: Children-function
        **kwargs: Traversal options (see traverse_tree); the strategy is
            always pre-order DFS

    Returns:
        Dictionary with total, leaf and internal node counts, the maximum
        depth, per-depth counts and the average number of children per
        internal node
    """
    kwargs.pop('strategy', None)

    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {}
    }

    # Leaf status comes from the pass itself, so the expand policy, error
    # policy and cache configured for it all apply
    iterator = traverse_tree(root, children, **kwargs).typed_iterator()
    for _ in iterator:
        depth = iterator.depth
        stats['total_nodes'] += 1

        if iterator.is_leaf():
            stats['leaf_nodes'] += 1

        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    # Children per expanded node; every non-root node hangs off one of them
    child_nodes = stats['total_nodes'] - stats['depths'].get(0, 0)
    stats['average_branching'] = (
        child_nodes / stats['internal_nodes']
        if stats['internal_nodes'] > 0 else 0
    )

    return stats


# Helper functions

def _parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum.

    Args:
        strategy: Strategy as enum or string

    Returns:
        TraversalStrategy enum value
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy

    # Map string names to enum values
    strategy_map = {
        'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'pre_order_dfs': TraversalStrategy.DEPTH_FIRST_PRE,
        'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_post': TraversalStrategy.DEPTH_FIRST_POST,
        'post_order_dfs': TraversalStrategy.DEPTH_FIRST_POST,
        'depth_first_post': TraversalStrategy.DEPTH_FIRST_POST,
        'bfs': TraversalStrategy.BREADTH_FIRST,
        'breadth_first': TraversalStrategy.BREADTH_FIRST,
        'leaves_dfs': TraversalStrategy.LEAVES_DFS,
        'leaves_bfs': TraversalStrategy.LEAVES_BFS,
        'tracing_bfs': TraversalStrategy.TRACING_BFS,
    }

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in strategy_map:
        return strategy_map[strategy_lower]

    raise ValueError(f"Unknown traversal strategy: {strategy}")


def _build_config(**kwargs) -> TraversalConfig:
    """Build TraversalConfig from keyword arguments.

    Args:
        **kwargs: Configuration options

    Returns:
        TraversalConfig instance
    """
    config = TraversalConfig(
        strategy=_parse_strategy(kwargs.pop('strategy')),
        filter=FilterConfig(
            include_filter=kwargs.pop('include_filter'),
            exclude_filter=kwargs.pop('exclude_filter')
        ),
        expand=ExpandConfig(
            expand_filter=kwargs.pop('expand'),
            max_depth=kwargs.pop('max_depth')
        ),
        leaves_only=kwargs.pop('leaves_only'),
        performance=PerformanceConfig(
            max_nodes=kwargs.pop('max_nodes')
        ),
        error_policy=kwargs.pop('error_policy')
    )

    # Remaining kwargs tune performance settings (cache_strategy, cache_size, ...)
    for key, value in kwargs.items():
        if hasattr(config.performance, key):
            setattr(config.performance, key, value)
        else:
            raise TypeError(f"Unknown traversal option: {key}")

    return config
