"""Core abstractions for LazyTreeLib.

This package contains the lazy sequence pipeline and the traversal engine
built on top of it.
"""

from .iterator import ChainedIterator
from .sequence import LazySequence, cursor
from .stateful import Stateful, StatefulFilter, StatefulTransform, UniqueFilter, fresh
from .tracing import TracingIterator, TraversalIterator
from .traversal import (
    TreeTraversal,
    PreOrderDfsTraversal,
    PostOrderDfsTraversal,
    BfsTraversal,
    BfsIterator,
    TracingBfsIterator,
    PostOrderIterator,
    PRE_ORDER_DFS,
    POST_ORDER_DFS,
    PLAIN_BFS,
    LEAVES_DFS,
    LEAVES_BFS,
    TRACING_BFS,
    create_traversal,
)

__all__ = [
    "ChainedIterator",
    "LazySequence",
    "cursor",
    "Stateful",
    "StatefulFilter",
    "StatefulTransform",
    "UniqueFilter",
    "fresh",
    "TraversalIterator",
    "TracingIterator",
    "TreeTraversal",
    "PreOrderDfsTraversal",
    "PostOrderDfsTraversal",
    "BfsTraversal",
    "BfsIterator",
    "TracingBfsIterator",
    "PostOrderIterator",
    "PRE_ORDER_DFS",
    "POST_ORDER_DFS",
    "PLAIN_BFS",
    "LEAVES_DFS",
    "LEAVES_BFS",
    "TRACING_BFS",
    "create_traversal",
]
