"""LazySequence - a restartable, pull-based pipeline of combinators.

A LazySequence is an immutable description: a source factory plus a chain of
stages. Nothing is computed until the sequence is iterated, and every
iteration builds a fresh pass, so a sequence built from restartable sources
yields the same elements each time it is enumerated.

Example:
    >>> LazySequence.generate(1, lambda x: x + 1) \\
    ...     .filter(lambda x: x % 2 == 1) \\
    ...     .transform(lambda x: x * x) \\
    ...     .take_while(lambda x: x < 100) \\
    ...     .to_list()
    [1, 9, 25, 49, 81]
"""

from typing import (Any, Callable, Generic, Iterable, Iterator, List,
                    Optional, Set, Tuple, Type, TypeVar)

from ..errors import AlreadyConsumedError, NoSuchElementError, NotRestartableError
from .iterator import (ChainedIterator, FilterStage, IterableIterator,
                       SkipStage, SkipWhileStage, Stage, TakeStage,
                       TakeWhileStage, TransformStage)
from .stateful import fresh

T = TypeVar('T')
R = TypeVar('R')

_NOTHING = object()


class _SingleUseSource:
    """Source factory that hands out a wrapped iterator exactly once."""

    def __init__(self, iterator: Iterator[Any]):
        self._iterator = iterator
        self._consumed = False

    def __call__(self) -> Iterator[Any]:
        if self._consumed:
            raise AlreadyConsumedError("single-use sequence has already been consumed")
        self._consumed = True
        return self._iterator


class LazySequence(Generic[T]):
    """Immutable, lazily evaluated sequence.

    Args:
        source: Zero-argument callable returning a fresh iterator (or
            iterable) for each pass
        stages: Stage specifications, ``(stage_class, argument)`` pairs
        restartable: Whether ``source`` can be called more than once
    """

    def __init__(self,
                 source: Callable[[], Iterable[T]],
                 stages: Tuple[Tuple[Type[Stage], Any], ...] = (),
                 restartable: bool = True):
        self._source = source
        self._stages = tuple(stages)
        self._restartable = restartable

    # Construction

    @classmethod
    def empty(cls) -> 'LazySequence[T]':
        return cls(tuple)

    @classmethod
    def of(cls, *values: T) -> 'LazySequence[T]':
        """Sequence over the given literal values."""
        return cls(lambda: iter(values))

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> 'LazySequence[T]':
        """Wrap an iterable.

        Collections are re-iterated on every pass. One-shot iterators
        (generators, file objects, ``iter(...)`` results) can only be drained
        once and are wrapped with :meth:`once`.
        """
        if isinstance(iterable, LazySequence):
            return iterable
        if iter(iterable) is iterable:
            return cls.once(iterable)
        return cls(lambda: iter(iterable))

    @classmethod
    def once(cls, iterator: Iterator[T]) -> 'LazySequence[T]':
        """Adapt an externally owned one-shot iterator.

        The first pass drains ``iterator``; starting any later pass raises
        AlreadyConsumedError.
        """
        return cls(_SingleUseSource(iter(iterator)), restartable=False)

    @classmethod
    def generate(cls, seed: T, next_fn: Callable[[T], T]) -> 'LazySequence[T]':
        """Infinite sequence ``seed, next_fn(seed), next_fn(next_fn(seed)), ...``.

        ``next_fn`` is only called when the following element is requested.
        A StatefulTransform is freshened for every pass.
        """
        def _source() -> Iterator[T]:
            fn = fresh(next_fn)
            value = seed
            while True:
                yield value
                value = fn(value)
        return cls(_source)

    @classmethod
    def recurrence(cls, first: T, second: T,
                   fn: Callable[[T, T], T]) -> 'LazySequence[T]':
        """Infinite two-term recurrence ``a, b, fn(a, b), fn(b, fn(a, b)), ...``."""
        def _source() -> Iterator[T]:
            step = fresh(fn)
            a, b = first, second
            while True:
                yield a
                a, b = b, step(a, b)
        return cls(_source)

    # Stages

    @property
    def restartable(self) -> bool:
        return self._restartable

    def _with_stage(self, stage_type: Type[Stage], argument: Any) -> 'LazySequence':
        return LazySequence(self._source,
                            self._stages + ((stage_type, argument),),
                            self._restartable)

    def append(self, other: Any) -> 'LazySequence[T]':
        """Concatenate ``other`` after this sequence.

        ``other`` may be a LazySequence or any iterable, whose elements are
        appended; strings and non-iterable values are appended as a single
        element. ``other`` is not touched until this sequence is exhausted.
        """
        head = self
        tail = _as_sequence(other)

        def _source() -> Iterator[T]:
            yield from head
            yield from tail
        return LazySequence(_source, restartable=head.restartable and tail.restartable)

    def append_value(self, value: T) -> 'LazySequence[T]':
        """Append exactly one element, even if it is itself iterable."""
        return self.append(LazySequence.of(value))

    def filter(self, predicate: Callable[[T], bool]) -> 'LazySequence[T]':
        return self._with_stage(FilterStage, predicate)

    def transform(self, fn: Callable[[T], R]) -> 'LazySequence[R]':
        return self._with_stage(TransformStage, fn)

    map = transform

    def skip(self, count: int) -> 'LazySequence[T]':
        if count < 0:
            raise ValueError(f"skip count cannot be negative: {count}")
        return self._with_stage(SkipStage, count)

    def take(self, count: int) -> 'LazySequence[T]':
        if count < 0:
            raise ValueError(f"take count cannot be negative: {count}")
        return self._with_stage(TakeStage, count)

    def skip_while(self, predicate: Callable[[T], bool]) -> 'LazySequence[T]':
        return self._with_stage(SkipWhileStage, predicate)

    def take_while(self, predicate: Callable[[T], bool]) -> 'LazySequence[T]':
        return self._with_stage(TakeWhileStage, predicate)

    def repeat(self, times: int) -> 'LazySequence[T]':
        """Replay the whole (finite) sequence ``times`` times.

        Raises:
            NotRestartableError: If the sequence is single-use
            ValueError: If ``times`` is negative
        """
        if times < 0:
            raise ValueError(f"repeat count cannot be negative: {times}")
        if not self._restartable:
            raise NotRestartableError("cannot repeat a single-use sequence")
        upstream = self

        def _source() -> Iterator[T]:
            for _ in range(times):
                yield from upstream
        return LazySequence(_source)

    # Iteration

    def typed_iterator(self) -> ChainedIterator[T]:
        """Start a new pass and return its iterator.

        If the source produces a ChainedIterator (e.g. a traversal
        iterator) the stages are attached to it and that same object is
        returned.
        """
        iterator = self._source()
        if not isinstance(iterator, ChainedIterator):
            iterator = IterableIterator(iter(iterator))
        return iterator.attach(stage_type(fresh(argument))
                               for stage_type, argument in self._stages)

    def __iter__(self) -> Iterator[T]:
        return self.typed_iterator()

    # Terminal operations - these drain the sequence and never return on
    # an unbounded one.

    def first(self) -> T:
        for item in self:
            return item
        raise NoSuchElementError("first() called on an empty sequence")

    def last(self) -> T:
        result = _NOTHING
        for item in self:
            result = item
        if result is _NOTHING:
            raise NoSuchElementError("last() called on an empty sequence")
        return result

    def is_empty(self) -> bool:
        for _ in self:
            return False
        return True

    def size(self) -> int:
        return sum(1 for _ in self)

    def contains(self, value: Any) -> bool:
        return any(item == value for item in self)

    def to_list(self) -> List[T]:
        return list(self)

    def to_set(self) -> Set[T]:
        return set(self)

    def reduce(self, fn: Callable[[Any, T], Any], initial: Any = _NOTHING) -> Any:
        """Fold the sequence from the left.

        Raises:
            NoSuchElementError: If the sequence is empty and no initial
                value was given
        """
        accumulator = initial
        for item in self:
            accumulator = item if accumulator is _NOTHING else fn(accumulator, item)
        if accumulator is _NOTHING:
            raise NoSuchElementError("reduce() of an empty sequence with no initial value")
        return accumulator

    def __repr__(self) -> str:
        stages = ', '.join(stage_type.__name__ for stage_type, _ in self._stages)
        return f"LazySequence(restartable={self._restartable}, stages=[{stages}])"


def _as_sequence(value: Any) -> LazySequence:
    if isinstance(value, LazySequence):
        return value
    if isinstance(value, (str, bytes)):
        return LazySequence.of(value)
    try:
        iter(value)
    except TypeError:
        return LazySequence.of(value)
    return LazySequence.from_iterable(value)


def cursor(iterator: ChainedIterator[T]) -> LazySequence[ChainedIterator[T]]:
    """Single-use sequence yielding ``iterator`` itself after each advance.

    ``cursor(it).first()`` moves ``it`` to its next element and returns
    ``it``, so position-dependent state such as a traversal backtrace can be
    read at that point.
    """
    def _positions() -> Iterator[ChainedIterator[T]]:
        for _ in iterator:
            yield iterator
    return LazySequence.once(_positions())
