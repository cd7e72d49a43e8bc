"""Tree traversal strategies for LazyTreeLib.

A strategy turns a children-function and one or more roots into a
LazySequence of nodes. Strategies work with any node type: all they know
about the graph is what the children-function returns.

Every pass builds its own traversal state (a stack of frames for DFS, a
queue of children streams for BFS), so the sequences are restartable as long
as the children-function is, and they never expand more of the graph than
the consumer has pulled.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Iterable, List, Optional, Tuple

from .sequence import LazySequence
from .stateful import fresh
from .tracing import (_NOTHING, _PENDING, TracingIterator, TraversalIterator,
                      _Frame)

Children = Callable[[Any], Optional[Iterable[Any]]]


class _PostFrame(_Frame):
    """Frame that also remembers whether any child was pulled from it."""
    __slots__ = ('expanded',)

    def __init__(self, node: Any, depth: int, children: Any = _PENDING):
        super().__init__(node, depth, children)
        self.expanded = False


class PostOrderIterator(TraversalIterator):
    """Depth-first iterator emitting a node after its whole subtree."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._stack: List[_PostFrame] = [_PostFrame(None, -1, iter(self._roots))]

    def _advance(self) -> Any:
        stack = self._stack
        while stack:
            top = stack[-1]
            if top.children is _PENDING:
                top.children = self._children_of(top.node, top.depth)
            child = _NOTHING if top.children is None else next(top.children, _NOTHING)
            if child is not _NOTHING:
                top.expanded = True
                stack.append(_PostFrame(child, top.depth + 1))
                continue

            stack.pop()
            if not stack:
                break  # popped the roots frame
            if self._leaves_only and top.expanded:
                continue
            return top.node
        raise StopIteration


class _Link:
    __slots__ = ('node', 'parent')

    def __init__(self, node: Any, parent: Optional['_Link']):
        self.node = node
        self.parent = parent


class _Level:
    """Queued children stream of one visited node."""
    __slots__ = ('owner', 'depth', 'children')

    def __init__(self, owner: Optional[_Link], depth: int, children: Any = _PENDING):
        self.owner = owner
        self.depth = depth
        self.children = children


class BfsIterator(TraversalIterator):
    """Breadth-first iterator over a FIFO queue of children streams.

    The queue holds one entry per visited node rather than one per child,
    so a node with an infinite child set occupies a single slot and its
    children are pulled one at a time as the traversal reaches them.
    """

    def __init__(self, *args, tracing: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self._tracing = tracing
        self._queue = deque([_Level(None, 0, iter(self._roots))])
        self._last: Optional[_Link] = None

    def _advance(self) -> Any:
        queue = self._queue
        while queue:
            level = queue[0]
            if level.children is _PENDING:
                level.children = self._children_of(level.owner.node, level.depth - 1)
            node = _NOTHING if level.children is None else next(level.children, _NOTHING)
            if node is _NOTHING:
                queue.popleft()
                continue

            link = _Link(node, level.owner if self._tracing else None)
            if self._leaves_only:
                children = self._peek_children(node, level.depth)
                if children is not None:
                    queue.append(_Level(link, level.depth + 1, children))
                    continue
            else:
                queue.append(_Level(link, level.depth + 1))
            self._last = link
            return node
        self._last = None
        raise StopIteration


class TracingBfsIterator(BfsIterator):
    """Breadth-first iterator that remembers how each node was reached."""

    def __init__(self, *args, **kwargs):
        kwargs['tracing'] = True
        super().__init__(*args, **kwargs)

    def backtrace(self) -> LazySequence:
        """Current node followed by its ancestors up to the root."""
        nodes = []
        link = None if self.done else self._last
        while link is not None:
            nodes.append(link.node)
            link = link.parent
        return LazySequence.of(*nodes)

    def parent(self) -> Any:
        """Parent of the current node, or None at a root."""
        if self.done or self._last is None or self._last.parent is None:
            return None
        return self._last.parent.node


class TreeTraversal(ABC):
    """Abstract base class for traversal strategies.

    Strategies are stateless and shared; use the module-level instances
    (PRE_ORDER_DFS, POST_ORDER_DFS, PLAIN_BFS, ...) or create_traversal().
    """

    def __init__(self, name: str, leaves_only: bool = False):
        self.name = name
        self.leaves_only = leaves_only

    @abstractmethod
    def create_iterator(self,
                        roots: Tuple[Any, ...],
                        children: Children,
                        expand: Optional[Callable[[Any], bool]],
                        max_depth: Optional[int],
                        leaves_only: bool) -> TraversalIterator:
        """Build the iterator for one pass."""
        pass

    def traverse(self,
                 children: Children,
                 *roots: Any,
                 expand: Optional[Callable[[Any], bool]] = None,
                 leaves_only: bool = False,
                 max_depth: Optional[int] = None) -> LazySequence:
        """Sequence of the nodes reachable from ``roots`` in this order.

        Args:
            children: Children-function of the graph
            *roots: Starting nodes, each traversed as its own tree
            expand: Optional predicate; failing nodes are emitted but their
                children are never requested
            leaves_only: Emit only nodes that were not expanded
            max_depth: Optional depth (roots = 0) at which expansion stops

        Returns:
            Restartable LazySequence of nodes
        """
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth cannot be negative: {max_depth}")
        leaves = leaves_only or self.leaves_only

        def _source() -> TraversalIterator:
            return self.create_iterator(roots, children, fresh(expand), max_depth, leaves)
        return LazySequence(_source)

    def traversal(self, children: Children) -> Callable[[Any], LazySequence]:
        """Bind a children-function, returning ``root -> LazySequence``."""
        return lambda root: self.traverse(children, root)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class PreOrderDfsTraversal(TreeTraversal):
    """Depth-first pre-order: a node, then its subtree, then its next sibling."""

    def create_iterator(self, roots, children, expand, max_depth, leaves_only):
        return TracingIterator(roots, children, expand, max_depth, leaves_only)


class PostOrderDfsTraversal(TreeTraversal):
    """Depth-first post-order: each child's subtree, then the node itself."""

    def create_iterator(self, roots, children, expand, max_depth, leaves_only):
        return PostOrderIterator(roots, children, expand, max_depth, leaves_only)


class BfsTraversal(TreeTraversal):
    """Breadth-first: level by level, children in their parents' visiting order."""

    def __init__(self, name: str, leaves_only: bool = False, tracing: bool = False):
        super().__init__(name, leaves_only)
        self.tracing = tracing

    def create_iterator(self, roots, children, expand, max_depth, leaves_only):
        if self.tracing:
            return TracingBfsIterator(roots, children, expand, max_depth, leaves_only)
        return BfsIterator(roots, children, expand, max_depth, leaves_only)


PRE_ORDER_DFS = PreOrderDfsTraversal('PRE_ORDER_DFS')
POST_ORDER_DFS = PostOrderDfsTraversal('POST_ORDER_DFS')
PLAIN_BFS = BfsTraversal('PLAIN_BFS')
LEAVES_DFS = PreOrderDfsTraversal('LEAVES_DFS', leaves_only=True)
LEAVES_BFS = BfsTraversal('LEAVES_BFS', leaves_only=True)
TRACING_BFS = BfsTraversal('TRACING_BFS', tracing=True)


# Factory function for looking up traversals by name
def create_traversal(strategy: str) -> TreeTraversal:
    """Return the traversal registered under ``strategy``.

    Args:
        strategy: Name of the traversal (dfs, dfs_pre, dfs_post, bfs,
            leaves_dfs, leaves_bfs, tracing_bfs, ...)

    Returns:
        Shared TreeTraversal instance

    Raises:
        ValueError: If the name is not recognized
    """
    strategies = {
        'dfs': PRE_ORDER_DFS,
        'dfs_pre': PRE_ORDER_DFS,
        'pre_order_dfs': PRE_ORDER_DFS,
        'depth_first_pre': PRE_ORDER_DFS,
        'dfs_post': POST_ORDER_DFS,
        'post_order_dfs': POST_ORDER_DFS,
        'depth_first_post': POST_ORDER_DFS,
        'bfs': PLAIN_BFS,
        'plain_bfs': PLAIN_BFS,
        'breadth_first': PLAIN_BFS,
        'leaves_dfs': LEAVES_DFS,
        'leaves_bfs': LEAVES_BFS,
        'tracing_bfs': TRACING_BFS,
    }

    strategy_lower = strategy.lower()
    if strategy_lower not in strategies:
        raise ValueError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(strategies.keys())}"
        )

    return strategies[strategy_lower]
