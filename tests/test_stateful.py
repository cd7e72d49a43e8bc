"""
Tests for stateful filters and transforms.

Stateful operators must start every pass from their constructed state so
that repeated enumeration of a restartable sequence is reproducible.
"""

import pytest

from lazytreelib import LazySequence, StatefulFilter, StatefulTransform, UniqueFilter
from lazytreelib.core.stateful import fresh
from lazytreelib.testing import FibonacciTransform, increment


class Increasing(StatefulFilter):
    """Accept elements greater than every previously accepted one."""

    def __init__(self):
        self.prev = 0

    def __call__(self, item):
        accepted = item > self.prev
        if accepted:
            self.prev = item
        return accepted


class RunningTotal(StatefulTransform):

    def __init__(self, start=0):
        self.total = start

    def __call__(self, item):
        self.total += item
        return self.total


class TestStatefulFilter:

    def test_stateful_filter_is_reproducible(self):
        seq = LazySequence.generate(1, increment).take(5).filter(Increasing())
        assert seq.to_list() == [1, 2, 3, 4, 5]
        assert seq.to_list() == [1, 2, 3, 4, 5]

    def test_state_affects_result(self):
        seq = LazySequence.of(1, 3, 2, 5, 4).filter(Increasing())
        assert seq.to_list() == [1, 3, 5]
        assert seq.to_list() == [1, 3, 5]

    def test_prototype_is_never_mutated(self):
        prototype = Increasing()
        LazySequence.of(4, 9).filter(prototype).to_list()
        assert prototype.prev == 0

    def test_interleaved_passes_do_not_share_state(self):
        seq = LazySequence.of(1, 3, 2, 5).filter(Increasing())
        first = iter(seq)
        second = iter(seq)
        assert next(first) == 1
        assert next(first) == 3
        assert next(second) == 1
        assert list(first) == [5]
        assert list(second) == [3, 5]


class TestStatefulTransform:

    def test_stateful_generator(self):
        seq = LazySequence.generate(1, FibonacciTransform()).take(8)
        assert seq.to_list() == [1, 1, 2, 3, 5, 8, 13, 21]
        assert seq.to_list() == [1, 1, 2, 3, 5, 8, 13, 21]

    def test_stateful_transform_stage(self):
        seq = LazySequence.of(1, 2, 3).transform(RunningTotal(10))
        assert seq.to_list() == [11, 13, 16]
        assert seq.to_list() == [11, 13, 16]


class TestUniqueFilter:

    def test_drops_repeats_within_pass(self):
        seq = LazySequence.of(1, 2, 1, 3, 2).filter(UniqueFilter())
        assert seq.to_list() == [1, 2, 3]
        assert seq.to_list() == [1, 2, 3]

    def test_key_function(self):
        seq = LazySequence.of("a", "B", "A", "b").filter(UniqueFilter(key=str.lower))
        assert seq.to_list() == ["a", "B"]

    def test_fresh_starts_empty(self):
        original = UniqueFilter()
        original(1)
        copy = original.fresh()
        assert copy.seen == set()
        assert copy.key is original.key


class TestFresh:

    @pytest.mark.parametrize("fn", [None, len, lambda x: x])
    def test_plain_callables_unchanged(self, fn):
        assert fresh(fn) is fn

    def test_stateful_is_copied(self):
        op = Increasing()
        assert fresh(op) is not op
        assert isinstance(fresh(op), Increasing)
