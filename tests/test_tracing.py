"""
Tests for ancestor tracking: cursor(), backtrace(), parent(), depth and is_leaf().
"""

import pytest

from lazytreelib import (
    LazySequence,
    NoSuchElementError,
    PLAIN_BFS,
    PRE_ORDER_DFS,
    TRACING_BFS,
    TracingBfsIterator,
    TracingIterator,
    cursor,
)
from lazytreelib.testing import NUMBERS, children_from_map, fibonacci


def endless_chain(k):
    """Children k+1, 2k+1, 3k+2 - an infinite graph whose first-child chain is 1, 2, 3, ..."""
    return LazySequence.recurrence(1, k, fibonacci).skip(2).take(3)


class TestCursor:

    def test_cursor_returns_same_iterator(self):
        it = PRE_ORDER_DFS.traverse(endless_chain, 1).skip(19).typed_iterator()
        assert cursor(it).first() is it

    def test_backtrace_on_infinite_graph(self):
        it = PRE_ORDER_DFS.traverse(endless_chain, 1).skip(19).typed_iterator()
        positioned = cursor(it).first()
        assert positioned.current == 20
        assert positioned.backtrace().to_list() == list(range(20, 0, -1))

    def test_cursor_is_single_use(self):
        it = PRE_ORDER_DFS.traverse(endless_chain, 1).typed_iterator()
        positions = cursor(it)
        positions.first()
        with pytest.raises(RuntimeError):
            positions.first()

    def test_cursor_advances_with_each_element(self):
        it = PRE_ORDER_DFS.traverse(children_from_map(NUMBERS), 1).typed_iterator()
        seen = [position.current for position in cursor(it).take(4)]
        assert seen == [1, 2, 5, 6]

    def test_typed_iterator_is_traversal_iterator(self):
        assert isinstance(PRE_ORDER_DFS.traverse(endless_chain, 1).typed_iterator(), TracingIterator)
        assert isinstance(TRACING_BFS.traverse(endless_chain, 1).typed_iterator(), TracingBfsIterator)
        assert not isinstance(PLAIN_BFS.traverse(endless_chain, 1).typed_iterator(), TracingBfsIterator)

    def test_current_before_first_element(self):
        it = PRE_ORDER_DFS.traverse(endless_chain, 1).typed_iterator()
        with pytest.raises(NoSuchElementError):
            it.current


class TestDfsBacktrace:

    @pytest.fixture
    def children(self):
        return children_from_map(NUMBERS)

    def test_backtrace_of_deep_node(self, children):
        # 9 is the 8th node in pre-order
        it = PRE_ORDER_DFS.traverse(children, 1).skip(7).typed_iterator()
        assert next(it) == 9
        assert it.backtrace().to_list() == [9, 3, 1]
        assert it.parent() == 3
        assert it.depth == 2

    def test_root_has_no_parent(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).typed_iterator()
        assert next(it) == 1
        assert it.parent() is None
        assert it.depth == 0
        assert it.backtrace().to_list() == [1]

    def test_backtrace_is_a_snapshot(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).typed_iterator()
        next(it)
        next(it)
        trace = it.backtrace()
        next(it)
        assert trace.to_list() == [2, 1]
        assert it.backtrace().to_list() == [5, 2, 1]

    def test_backtrace_after_sibling_subtree(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).typed_iterator()
        nodes = [next(it) for _ in range(6)]
        assert nodes[-1] == 3
        assert it.backtrace().to_list() == [3, 1]

    def test_backtrace_with_filter_stage(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).filter(lambda n: n > 10).typed_iterator()
        assert next(it) == 11
        assert it.backtrace().to_list() == [11, 4, 1]

    def test_leaves_only_backtrace(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1, leaves_only=True).typed_iterator()
        assert next(it) == 5
        assert it.backtrace().to_list() == [5, 2, 1]

    def test_backtrace_with_multiple_roots(self, children):
        it = PRE_ORDER_DFS.traverse(children, 2, 4).skip(4).typed_iterator()
        assert next(it) == 4
        assert it.backtrace().to_list() == [4]
        assert next(it) == 11
        assert it.backtrace().to_list() == [11, 4]

    def test_backtrace_empty_after_take(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).take(2).typed_iterator()
        assert list(it) == [1, 2]
        assert it.done
        assert it.backtrace().to_list() == []
        assert it.parent() is None
        assert it.depth == -1

    def test_backtrace_empty_after_take_while(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).take_while(lambda n: n < 5).typed_iterator()
        assert list(it) == [1, 2]
        assert it.backtrace().is_empty()
        assert it.parent() is None


class TestBfsBacktrace:

    def test_tracing_bfs_backtrace(self):
        it = TRACING_BFS.traverse(children_from_map(NUMBERS), 1).skip(8).typed_iterator()
        positioned = cursor(it).first()
        assert positioned.current == 9
        assert positioned.backtrace().to_list() == [9, 3, 1]
        assert positioned.parent() == 3

    def test_tracing_bfs_backtrace_on_infinite_graph(self):
        it = TRACING_BFS.traverse(endless_chain, 1).typed_iterator()
        # 1; 2, 3, 5; 3, 5, 8 (children of 2)
        nodes = [next(it) for _ in range(7)]
        assert nodes == [1, 2, 3, 5, 3, 5, 8]
        assert it.backtrace().to_list() == [8, 2, 1]

    def test_backtrace_empty_outside_traversal(self):
        it = TRACING_BFS.traverse(children_from_map(NUMBERS), 1).typed_iterator()
        assert it.backtrace().to_list() == []
        assert len(list(it)) == 13
        assert it.backtrace().is_empty()

        dfs = PRE_ORDER_DFS.traverse(children_from_map(NUMBERS), 1).typed_iterator()
        assert dfs.backtrace().is_empty()
        assert dfs.depth == -1
        list(dfs)
        assert dfs.backtrace().is_empty()

    def test_tracing_bfs_backtrace_empty_after_take(self):
        it = TRACING_BFS.traverse(children_from_map(NUMBERS), 1).take(2).typed_iterator()
        assert list(it) == [1, 2]
        assert it.backtrace().to_list() == []
        assert it.parent() is None

    def test_tracing_bfs_root(self):
        it = TRACING_BFS.traverse(endless_chain, 1).typed_iterator()
        assert next(it) == 1
        assert it.parent() is None
        assert it.backtrace().to_list() == [1]


class TestIsLeaf:

    @pytest.fixture
    def children(self):
        return children_from_map(NUMBERS)

    def test_before_first_element(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).typed_iterator()
        with pytest.raises(NoSuchElementError):
            it.is_leaf()

    def test_traversal_continues_after_check(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).typed_iterator()
        assert next(it) == 1
        assert not it.is_leaf()
        assert next(it) == 2

    def test_every_node(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).typed_iterator()
        flags = {node: it.is_leaf() for node in it}
        assert list(flags) == [1, 2, 5, 6, 7, 3, 8, 9, 10, 4, 11, 12, 13]
        assert [node for node, leaf in flags.items() if leaf] == list(range(5, 14))

    def test_expand_cut(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1, expand=lambda n: n != 3).typed_iterator()
        flags = {node: it.is_leaf() for node in it}
        assert flags[3] is True
        assert 8 not in flags

    def test_leaves_only(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1, leaves_only=True).typed_iterator()
        assert next(it) == 5
        assert it.is_leaf()

    def test_after_pass_ended(self, children):
        it = PRE_ORDER_DFS.traverse(children, 1).take(1).typed_iterator()
        list(it)
        with pytest.raises(NoSuchElementError):
            it.is_leaf()
