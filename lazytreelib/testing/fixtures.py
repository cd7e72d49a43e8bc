"""Test fixtures for LazyTreeLib consumers.

Small graphs, predicates and instrumented children-functions for asserting
traversal order and laziness in test suites.
"""

from typing import Any, Callable, Collection, Dict, Iterable, List, Mapping, Optional

from ..core.stateful import StatefulTransform

# 1 -> 2, 3, 4; each of those has three numbered children
NUMBERS: Dict[int, List[int]] = {
    1: [2, 3, 4],
    2: [5, 6, 7],
    3: [8, 9, 10],
    4: [11, 12, 13],
}


def children_from_map(mapping: Mapping[Any, Collection[Any]]) -> Callable[[Any], Iterable[Any]]:
    """Children-function backed by an adjacency mapping.

    Nodes missing from the mapping have no children.
    """
    def _children(node: Any) -> Iterable[Any]:
        return mapping.get(node, ())
    return _children


def is_odd(value: int) -> bool:
    return value % 2 == 1


def increment(value: int) -> int:
    return value + 1


def square(value: int) -> int:
    return value * value


def fibonacci(previous: int, current: int) -> int:
    return previous + current


def less_than(limit: int) -> Callable[[int], bool]:
    return lambda value: value < limit


def less_than_mod(modulus: int) -> Callable[[int], bool]:
    """True while ``value % modulus`` is in the lower half of the range."""
    return lambda value: value % modulus < modulus // 2


class FibonacciTransform(StatefulTransform):
    """Adds the previously seen value to the current one.

    ``LazySequence.generate(1, FibonacciTransform())`` yields the Fibonacci
    numbers 1, 1, 2, 3, 5, ...
    """

    def __init__(self):
        self.previous = 0

    def __call__(self, value: int) -> int:
        result = self.previous + value
        self.previous = value
        return result


class RecordingChildren:
    """Children-function wrapper that records every expansion.

    Example:
        children = RecordingChildren(children_from_map(NUMBERS))
        PRE_ORDER_DFS.traverse(children, 1).take(2).to_list()
        assert children.expanded == [1]
    """

    def __init__(self, children: Callable[[Any], Optional[Iterable[Any]]]):
        self._children = children
        self.expanded: List[Any] = []

    def __call__(self, node: Any) -> Optional[Iterable[Any]]:
        self.expanded.append(node)
        return self._children(node)

    def was_expanded(self, node: Any) -> bool:
        return node in self.expanded

    def clear(self) -> None:
        self.expanded.clear()
