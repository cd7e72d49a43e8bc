"""FilteredTraverser - a builder combining a children-function with policy.

The traverser holds a children-function, the roots to start from and three
optional policies:

- filter: which visited nodes are emitted
- expand: which visited nodes have their children requested
- leaves_only: emit only nodes that were not expanded

Every builder call returns a new traverser, so partially configured
traversers can be shared and specialized freely.

Example:
    >>> graph = {1: [2, 3, 4], 2: [5, 6, 7], 3: [8, 9, 10], 4: [11, 12, 13]}
    >>> FilteredTraverser(graph.get).with_root(1) \\
    ...     .expand(lambda n: n % 2 == 1).leaves_only(True) \\
    ...     .leaves_only_bfs_traversal().to_list()
    [2, 4, 8, 9, 10]
"""

from typing import Any, Callable, Iterable, Iterator, Optional, Tuple, Union

from .core.sequence import LazySequence
from .core.stateful import Stateful, fresh
from .core.traversal import (
    LEAVES_BFS,
    LEAVES_DFS,
    PLAIN_BFS,
    POST_ORDER_DFS,
    PRE_ORDER_DFS,
    TRACING_BFS,
    Children,
    TreeTraversal,
    create_traversal,
)

Predicate = Callable[[Any], bool]


class _AllOf(Stateful):
    """Conjunction of predicates, freshening stateful members per pass."""

    def __init__(self, *predicates: Predicate):
        self.predicates = predicates

    def __call__(self, item: Any) -> bool:
        return all(predicate(item) for predicate in self.predicates)

    def fresh(self) -> '_AllOf':
        return _AllOf(*(fresh(predicate) for predicate in self.predicates))


def _combine(current: Optional[Predicate], added: Predicate) -> Predicate:
    if current is None:
        return added
    if isinstance(current, _AllOf):
        return _AllOf(*current.predicates, added)
    return _AllOf(current, added)


class FilteredTraverser:
    """Immutable traversal builder.

    Args:
        children: Children-function, ``node -> iterable of nodes``
        roots: Starting nodes
        filter_spec: Emission predicate (None accepts everything)
        expand_spec: Expansion predicate (None expands everything)
        leaves_only_spec: Emit only un-expanded nodes
        max_depth_spec: Depth at which expansion stops (None = unlimited)
    """

    def __init__(self,
                 children: Children,
                 roots: Tuple[Any, ...] = (),
                 filter_spec: Optional[Predicate] = None,
                 expand_spec: Optional[Predicate] = None,
                 leaves_only_spec: bool = False,
                 max_depth_spec: Optional[int] = None):
        self._children = children
        self._roots = tuple(roots)
        self._filter = filter_spec
        self._expand = expand_spec
        self._leaves_only = leaves_only_spec
        self._max_depth = max_depth_spec

    def _copy(self, **changes: Any) -> 'FilteredTraverser':
        spec = {
            'roots': self._roots,
            'filter_spec': self._filter,
            'expand_spec': self._expand,
            'leaves_only_spec': self._leaves_only,
            'max_depth_spec': self._max_depth,
        }
        spec.update(changes)
        return FilteredTraverser(self._children, **spec)

    # Builder

    def with_root(self, root: Any) -> 'FilteredTraverser':
        return self._copy(roots=(root,))

    def with_roots(self, roots: Iterable[Any]) -> 'FilteredTraverser':
        return self._copy(roots=tuple(roots))

    def filter(self, predicate: Predicate) -> 'FilteredTraverser':
        """Emit only nodes passing ``predicate``; does not prune the walk."""
        return self._copy(filter_spec=_combine(self._filter, predicate))

    def expand(self, predicate: Predicate) -> 'FilteredTraverser':
        """Request children only of nodes passing ``predicate``.

        Failing nodes are still emitted (subject to the filter).
        """
        return self._copy(expand_spec=_combine(self._expand, predicate))

    def children(self, predicate: Predicate) -> 'FilteredTraverser':
        """Use ``predicate`` as both the filter and the expand policy."""
        return self.filter(predicate).expand(predicate)

    def leaves_only(self, flag: bool = True) -> 'FilteredTraverser':
        return self._copy(leaves_only_spec=flag)

    def max_depth(self, depth: Optional[int]) -> 'FilteredTraverser':
        if depth is not None and depth < 0:
            raise ValueError(f"max_depth cannot be negative: {depth}")
        return self._copy(max_depth_spec=depth)

    def reset(self) -> 'FilteredTraverser':
        """Drop every policy, keeping the children-function and roots."""
        return FilteredTraverser(self._children, self._roots)

    # Inspection

    @property
    def roots(self) -> Tuple[Any, ...]:
        return self._roots

    @property
    def children_function(self) -> Children:
        return self._children

    @property
    def is_leaves_only(self) -> bool:
        return self._leaves_only

    # Traversals

    def traversal(self, strategy: Union[TreeTraversal, str]) -> LazySequence:
        """Materialize the configured walk under ``strategy``."""
        if isinstance(strategy, str):
            strategy = create_traversal(strategy)
        sequence = strategy.traverse(
            self._children,
            *self._roots,
            expand=self._expand,
            leaves_only=self._leaves_only,
            max_depth=self._max_depth,
        )
        if self._filter is not None:
            sequence = sequence.filter(self._filter)
        return sequence

    def pre_order_dfs_traversal(self) -> LazySequence:
        return self.traversal(PRE_ORDER_DFS)

    def post_order_dfs_traversal(self) -> LazySequence:
        return self.traversal(POST_ORDER_DFS)

    def bfs_traversal(self) -> LazySequence:
        return self.traversal(PLAIN_BFS)

    def tracing_bfs_traversal(self) -> LazySequence:
        return self.traversal(TRACING_BFS)

    def leaves_only_dfs_traversal(self) -> LazySequence:
        return self.traversal(LEAVES_DFS)

    def leaves_only_bfs_traversal(self) -> LazySequence:
        return self.traversal(LEAVES_BFS)

    # Default traversal is pre-order DFS

    def __iter__(self) -> Iterator[Any]:
        return iter(self.pre_order_dfs_traversal())

    def to_list(self) -> list:
        return self.pre_order_dfs_traversal().to_list()

    def __repr__(self) -> str:
        return (f"FilteredTraverser(roots={self._roots!r}, "
                f"filter={self._filter is not None}, expand={self._expand is not None}, "
                f"leaves_only={self._leaves_only}, max_depth={self._max_depth})")
