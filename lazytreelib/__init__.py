"""LazyTreeLib - Lazy sequences and graph traversal.

LazyTreeLib turns any children-function, ``node -> iterable of nodes``,
into lazily evaluated sequences of nodes: pre-order DFS, post-order DFS or
BFS, with composable filtering, expansion cut-off, leaves-only output and
ancestor backtraces. Graphs may be infinite or cyclic; nothing is expanded
until the consumer pulls.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from lazytreelib import FilteredTraverser

    graph = {1: [2, 3, 4], 2: [5, 6, 7]}
    FilteredTraverser(graph.get).with_root(1).bfs_traversal().to_list()
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .core import (
    ChainedIterator,
    LazySequence,
    cursor,
    Stateful,
    StatefulFilter,
    StatefulTransform,
    UniqueFilter,
    TracingIterator,
    TracingBfsIterator,
    TreeTraversal,
    PRE_ORDER_DFS,
    POST_ORDER_DFS,
    PLAIN_BFS,
    LEAVES_DFS,
    LEAVES_BFS,
    TRACING_BFS,
    create_traversal,
)
from .filtered import FilteredTraverser
from .errors import (
    LazyTreeError,
    AlreadyConsumedError,
    NoSuchElementError,
    NotRestartableError,
    ConfigurationError,
)
from .config import (
    TraversalConfig,
    TraversalStrategy,
    CacheStrategy,
    FilterConfig,
    ExpandConfig,
    PerformanceConfig,
)
from .planning import ExecutionPlan
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)
from .error_handling import ErrorHandlingChildren
from .caching import CachingChildren
from .api import (
    traverse_tree,
    count_nodes,
    find_nodes,
    get_leaf_nodes,
    get_tree_paths,
    get_tree_stats,
)

__all__ = [
    "__version__",
    # Sequences
    "ChainedIterator",
    "LazySequence",
    "cursor",
    "Stateful",
    "StatefulFilter",
    "StatefulTransform",
    "UniqueFilter",
    # Traversal
    "TracingIterator",
    "TracingBfsIterator",
    "TreeTraversal",
    "PRE_ORDER_DFS",
    "POST_ORDER_DFS",
    "PLAIN_BFS",
    "LEAVES_DFS",
    "LEAVES_BFS",
    "TRACING_BFS",
    "create_traversal",
    "FilteredTraverser",
    # Errors
    "LazyTreeError",
    "AlreadyConsumedError",
    "NoSuchElementError",
    "NotRestartableError",
    "ConfigurationError",
    # Config
    "TraversalConfig",
    "TraversalStrategy",
    "CacheStrategy",
    "FilterConfig",
    "ExpandConfig",
    "PerformanceConfig",
    "ExecutionPlan",
    # Error handling and caching
    "ErrorPolicy",
    "FailFastPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    "ThresholdPolicy",
    "ErrorHandlingChildren",
    "CachingChildren",
    # API
    "traverse_tree",
    "count_nodes",
    "find_nodes",
    "get_leaf_nodes",
    "get_tree_paths",
    "get_tree_stats",
]
