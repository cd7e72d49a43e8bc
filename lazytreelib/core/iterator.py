"""Pull iterators carrying a per-pass chain of pipeline stages.

A LazySequence is only a description. Iterating it creates a
ChainedIterator from its source and attaches fresh stage instances to it.
Stages never get their own iterator objects: when the source is itself a
ChainedIterator (for example a traversal iterator) the caller keeps a handle
on that very object while the stages run inside it.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator, List, Tuple, TypeVar

from ..errors import NoSuchElementError

T = TypeVar('T')

# Stage verdicts
PASS = 0   # hand the element to the next stage
SKIP = 1   # drop the element, pull another one
STOP = 2   # drop the element and end the pass

_NOTHING = object()


class Stage(ABC):
    """One element-wise pipeline step, instantiated once per pass."""

    exhausted = False

    @abstractmethod
    def apply(self, item: Any) -> Tuple[int, Any]:
        """Return ``(verdict, item)`` for an element pulled from upstream."""
        pass


class FilterStage(Stage):

    def __init__(self, predicate: Callable[[Any], bool]):
        self.predicate = predicate

    def apply(self, item):
        return (PASS if self.predicate(item) else SKIP), item


class TransformStage(Stage):

    def __init__(self, fn: Callable[[Any], Any]):
        self.fn = fn

    def apply(self, item):
        return PASS, self.fn(item)


class SkipStage(Stage):

    def __init__(self, count: int):
        self.remaining = count

    def apply(self, item):
        if self.remaining > 0:
            self.remaining -= 1
            return SKIP, item
        return PASS, item


class TakeStage(Stage):
    """Let ``count`` elements through, then refuse to pull any more."""

    def __init__(self, count: int):
        self.remaining = count
        self.exhausted = count <= 0

    def apply(self, item):
        self.remaining -= 1
        if self.remaining <= 0:
            self.exhausted = True
        return PASS, item


class SkipWhileStage(Stage):

    def __init__(self, predicate: Callable[[Any], bool]):
        self.predicate = predicate
        self.skipping = True

    def apply(self, item):
        if self.skipping and self.predicate(item):
            return SKIP, item
        self.skipping = False
        return PASS, item


class TakeWhileStage(Stage):

    def __init__(self, predicate: Callable[[Any], bool]):
        self.predicate = predicate

    def apply(self, item):
        if self.predicate(item):
            return PASS, item
        self.exhausted = True
        return STOP, item


class ChainedIterator(Iterator[T]):
    """Base class for the iterator of one pass over a LazySequence.

    Subclasses implement ``_advance()`` to produce the next raw element (or
    raise StopIteration); attached stages then decide whether the element
    is emitted, dropped or ends the pass.
    """

    def __init__(self):
        self._stages: List[Stage] = []
        self._done = False
        self._current: Any = _NOTHING

    @abstractmethod
    def _advance(self) -> T:
        pass

    def attach(self, stages: Iterable[Stage]) -> 'ChainedIterator[T]':
        """Append stages to this iterator and return it."""
        self._stages.extend(stages)
        return self

    @property
    def current(self) -> T:
        """The element most recently returned by ``__next__``."""
        if self._current is _NOTHING:
            raise NoSuchElementError("iterator has not produced an element yet")
        return self._current

    @property
    def done(self) -> bool:
        return self._done

    def __iter__(self) -> 'ChainedIterator[T]':
        return self

    def __next__(self) -> T:
        while not self._done:
            if any(stage.exhausted for stage in self._stages):
                break
            try:
                item = self._advance()
            except StopIteration:
                break

            verdict = PASS
            for stage in self._stages:
                verdict, item = stage.apply(item)
                if verdict != PASS:
                    break

            if verdict == PASS:
                self._current = item
                return item
            if verdict == STOP:
                break

        self._done = True
        raise StopIteration


class IterableIterator(ChainedIterator[T]):
    """ChainedIterator over a plain Python iterator."""

    def __init__(self, iterator: Iterator[T]):
        super().__init__()
        self._iterator = iterator

    def _advance(self) -> T:
        return next(self._iterator)
