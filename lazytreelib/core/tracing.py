"""Traversal iterators with ancestor tracking.

TracingIterator walks a graph in pre-order over an explicit stack of frames
instead of recursion. The live stack is the ancestor chain of the current
node, so ``backtrace()`` is a direct read of traversal state and arbitrarily
deep graphs cannot overflow the Python call stack.
"""

from itertools import chain
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from ..errors import NoSuchElementError
from .iterator import ChainedIterator
from .sequence import LazySequence

_NOTHING = object()
_PENDING = object()  # children not requested yet


class TraversalIterator(ChainedIterator):
    """Common state of one traversal pass.

    Args:
        roots: Nodes to start from, traversed in order
        children: Children-function, ``node -> iterable of nodes`` (``None``
            means no children)
        expand: Optional predicate; nodes failing it are never expanded
        max_depth: Optional depth (root = 0) at which expansion stops
        leaves_only: Emit only nodes that were not expanded
    """

    def __init__(self,
                 roots: Tuple[Any, ...],
                 children: Callable[[Any], Optional[Iterable[Any]]],
                 expand: Optional[Callable[[Any], bool]] = None,
                 max_depth: Optional[int] = None,
                 leaves_only: bool = False):
        super().__init__()
        self._roots = roots
        self._children = children
        self._expand = expand
        self._max_depth = max_depth
        self._leaves_only = leaves_only

    def _children_of(self, node: Any, depth: int) -> Optional[Iterator[Any]]:
        """Expand ``node`` or return None if it must not be expanded."""
        if self._max_depth is not None and depth >= self._max_depth:
            return None
        if self._expand is not None and not self._expand(node):
            return None
        children = self._children(node)
        if children is None:
            return None
        return iter(children)

    def _peek_children(self, node: Any, depth: int) -> Optional[Iterator[Any]]:
        """Expand ``node`` and return its children only if there is at least one.

        Pulls a single child to find out.
        """
        children = self._children_of(node, depth)
        if children is None:
            return None
        first = next(children, _NOTHING)
        if first is _NOTHING:
            return None
        return chain((first,), children)


class _Frame:
    __slots__ = ('node', 'depth', 'children')

    def __init__(self, node: Any, depth: int, children: Any = _PENDING):
        self.node = node
        self.depth = depth
        self.children = children


class TracingIterator(TraversalIterator):
    """Pre-order depth-first iterator exposing the ancestor chain.

    A frame is pushed when the traversal descends into a node and popped
    exactly when that node's subtree is exhausted. Children of an emitted
    node are requested only when the next element is pulled, or when
    ``is_leaf()`` asks for them.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Bottom frame holds the roots and is not part of any backtrace
        self._stack: List[_Frame] = [_Frame(None, -1, iter(self._roots))]

    def _advance(self) -> Any:
        stack = self._stack
        while stack:
            top = stack[-1]
            if top.children is _PENDING:
                top.children = self._children_of(top.node, top.depth)
            child = _NOTHING if top.children is None else next(top.children, _NOTHING)
            if child is _NOTHING:
                stack.pop()
                continue

            frame = _Frame(child, top.depth + 1)
            stack.append(frame)
            if not self._leaves_only:
                return child

            frame.children = self._peek_children(child, frame.depth)
            if frame.children is None:
                return child
        raise StopIteration

    def _positioned(self) -> bool:
        return not self.done and len(self._stack) > 1

    def is_leaf(self) -> bool:
        """Whether the current node is left un-expanded by this pass.

        Uses the pass's own expand policy and children-function, pulling at
        most one child; the traversal later continues from that child.

        Raises:
            NoSuchElementError: If the iterator is not on an element
        """
        if not self._positioned():
            raise NoSuchElementError("iterator is not positioned on a node")
        top = self._stack[-1]
        if top.children is _PENDING:
            top.children = self._peek_children(top.node, top.depth)
        return top.children is None

    def backtrace(self) -> LazySequence:
        """Current node followed by its ancestors up to the root.

        The result is a snapshot; it does not change as the iterator moves on.
        Empty before the first element and once the pass has ended.
        """
        if not self._positioned():
            return LazySequence.empty()
        return LazySequence.of(*[frame.node for frame in reversed(self._stack[1:])])

    def parent(self) -> Any:
        """Parent of the current node, or None at a root."""
        if not self._positioned() or len(self._stack) < 3:
            return None
        return self._stack[-2].node

    @property
    def depth(self) -> int:
        """Depth of the current node (roots are at depth 0), -1 off the traversal."""
        if not self._positioned():
            return -1
        return self._stack[-1].depth
