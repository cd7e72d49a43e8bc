"""Stateful filters and transforms.

A stateful operator keeps mutable fields that are read and written once per
visited element. The instance handed to a pipeline is a prototype: every pass
works on ``op.fresh()``, so each enumeration starts from the state the
prototype was constructed with.

Example:
    class Increasing(StatefulFilter):
        def __init__(self):
            self.prev = 0

        def __call__(self, item):
            if item > self.prev:
                self.prev = item
                return True
            return False

    seq = LazySequence.of(1, 3, 2, 5).filter(Increasing())
    seq.to_list()  # [1, 3, 5]
    seq.to_list()  # [1, 3, 5] again
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Set


class Stateful(ABC):
    """Marker base for operators carrying per-pass state."""

    def fresh(self) -> 'Stateful':
        """Return an instance in the initial state for a new pass.

        The default is a shallow copy of the prototype. Subclasses holding
        mutable containers must override this to rebuild them.
        """
        return copy.copy(self)


class StatefulFilter(Stateful):
    """Predicate whose answer may depend on previously seen elements."""

    @abstractmethod
    def __call__(self, item: Any) -> bool:
        pass


class StatefulTransform(Stateful):
    """Transform whose result may depend on previously seen elements."""

    @abstractmethod
    def __call__(self, item: Any) -> Any:
        pass


def fresh(fn: Optional[Callable]) -> Optional[Callable]:
    """Return the callable to use for one pass.

    Stateful operators are replaced by a fresh copy; plain functions and
    ``None`` are returned unchanged.
    """
    if isinstance(fn, Stateful):
        return fn.fresh()
    return fn


class UniqueFilter(StatefulFilter):
    """Accept each element only the first time it is seen within a pass.

    Used as an expand predicate it stops a traversal from descending into a
    node twice, which bounds the exploration of cyclic graphs.

    Args:
        key: Optional function mapping an element to the hashable value
            used for the seen-check (defaults to the element itself)
    """

    def __init__(self, key: Optional[Callable[[Any], Any]] = None):
        self.key = key
        self.seen: Set[Any] = set()

    def __call__(self, item: Any) -> bool:
        marker = self.key(item) if self.key is not None else item
        if marker in self.seen:
            return False
        self.seen.add(marker)
        return True

    def fresh(self) -> 'UniqueFilter':
        return UniqueFilter(self.key)
