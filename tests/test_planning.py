"""Unit tests for configuration validation and execution planning."""

import unittest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from lazytreelib import (
    CacheStrategy,
    CachingChildren,
    CollectErrorsPolicy,
    ConfigurationError,
    ErrorHandlingChildren,
    ExecutionPlan,
    ExpandConfig,
    FilterConfig,
    PerformanceConfig,
    TraversalConfig,
    TraversalStrategy,
)
from lazytreelib.testing import NUMBERS, children_from_map, is_odd


class TestTraversalConfig(unittest.TestCase):
    """Test configuration defaults, presets and validation."""

    def test_defaults_are_valid(self):
        config = TraversalConfig()
        self.assertEqual(config.strategy, TraversalStrategy.DEPTH_FIRST_PRE)
        self.assertFalse(config.leaves_only)
        self.assertEqual(config.validate(), [])

    def test_leaves_preset(self):
        self.assertEqual(TraversalConfig.leaves().strategy, TraversalStrategy.LEAVES_DFS)
        self.assertEqual(TraversalConfig.leaves(breadth_first=True).strategy, TraversalStrategy.LEAVES_BFS)
        self.assertTrue(TraversalConfig.leaves().leaves_only)

    def test_bounded_preset(self):
        config = TraversalConfig.bounded(max_nodes=5, max_depth=2)
        self.assertEqual(config.strategy, TraversalStrategy.BREADTH_FIRST)
        self.assertEqual(config.performance.max_nodes, 5)
        self.assertEqual(config.expand.max_depth, 2)

    def test_validation_errors(self):
        config = TraversalConfig(
            expand=ExpandConfig(max_depth=-1),
            performance=PerformanceConfig(max_nodes=-5, cache_size=0, cache_ttl=0),
            error_policy=object(),
        )
        errors = config.validate()
        self.assertEqual(len(errors), 5)
        self.assertIn("max_depth cannot be negative", errors)
        self.assertIn("cache_size must be positive", errors)

    def test_unknown_strategy(self):
        errors = TraversalConfig(strategy="zigzag").validate()
        self.assertEqual(len(errors), 1)
        self.assertIn("unknown strategy", errors[0])

    def test_filter_config(self):
        config = FilterConfig(include_filter=is_odd, exclude_filter=lambda n: n > 10)
        self.assertTrue(config.is_active())
        self.assertTrue(config.should_include(3))
        self.assertFalse(config.should_include(4))
        self.assertFalse(config.should_include(11))
        self.assertFalse(FilterConfig().is_active())
        self.assertTrue(FilterConfig().should_include(4))


class TestExecutionPlan(unittest.TestCase):
    """Test turning configurations into sequences."""

    def setUp(self):
        self.children = children_from_map(NUMBERS)

    def test_invalid_config_raises(self):
        config = TraversalConfig(expand=ExpandConfig(max_depth=-1))
        with self.assertRaises(ConfigurationError) as context:
            ExecutionPlan(config, self.children)
        self.assertIn("Invalid configuration", str(context.exception))
        self.assertIsInstance(context.exception, ValueError)

    def test_default_plan(self):
        plan = ExecutionPlan(TraversalConfig(), self.children)
        self.assertEqual(plan.sequence(1).to_list(), [1, 2, 5, 6, 7, 3, 8, 9, 10, 4, 11, 12, 13])
        self.assertIs(plan.children, self.children)

    def test_strategy_selection(self):
        expected = {
            TraversalStrategy.DEPTH_FIRST_POST: [5, 6, 7, 2, 8, 9, 10, 3, 11, 12, 13, 4, 1],
            TraversalStrategy.BREADTH_FIRST: list(range(1, 14)),
            TraversalStrategy.TRACING_BFS: list(range(1, 14)),
            TraversalStrategy.LEAVES_DFS: [5, 6, 7, 8, 9, 10, 11, 12, 13],
            TraversalStrategy.LEAVES_BFS: [5, 6, 7, 8, 9, 10, 11, 12, 13],
        }
        for strategy, nodes in expected.items():
            with self.subTest(strategy=strategy):
                plan = ExecutionPlan(TraversalConfig(strategy=strategy), self.children)
                self.assertEqual(plan.sequence(1).to_list(), nodes)

    def test_filter_expand_and_leaves(self):
        config = TraversalConfig(
            expand=ExpandConfig(expand_filter=is_odd),
            leaves_only=True,
        )
        plan = ExecutionPlan(config, self.children)
        self.assertEqual(plan.sequence(1).to_list(), [2, 8, 9, 10, 4])

        config.filter = FilterConfig(exclude_filter=lambda n: n == 9)
        plan = ExecutionPlan(config, self.children)
        self.assertEqual(plan.sequence(1).to_list(), [2, 8, 10, 4])

    def test_max_nodes_truncates(self):
        plan = ExecutionPlan(TraversalConfig.bounded(max_nodes=5), self.children)
        self.assertEqual(plan.sequence(1).to_list(), [1, 2, 3, 4, 5])

    def test_multiple_roots(self):
        plan = ExecutionPlan(TraversalConfig(strategy=TraversalStrategy.BREADTH_FIRST), self.children)
        self.assertEqual(plan.sequence(2, 3).to_list(), [2, 3, 5, 6, 7, 8, 9, 10])

    def test_children_wrapping(self):
        policy = CollectErrorsPolicy()
        config = TraversalConfig(
            error_policy=policy,
            performance=PerformanceConfig(cache_strategy=CacheStrategy.MEMORY, cache_size=100),
        )
        plan = ExecutionPlan(config, self.children)

        self.assertIsInstance(plan.children, CachingChildren)
        self.assertEqual(plan.children.get_cache_stats()['max_size'], 100)
        self.assertEqual(plan.sequence(1).size(), 13)

        plan = ExecutionPlan(TraversalConfig(error_policy=policy), self.children)
        self.assertIsInstance(plan.children, ErrorHandlingChildren)

    def test_summary(self):
        config = TraversalConfig(
            strategy=TraversalStrategy.LEAVES_BFS,
            leaves_only=True,
            performance=PerformanceConfig(max_nodes=10),
            error_policy=CollectErrorsPolicy(),
        )
        summary = ExecutionPlan(config, self.children).get_summary()

        self.assertEqual(summary['strategy'], 'leaves_bfs')
        self.assertEqual(summary['traversal'], 'LEAVES_BFS')
        self.assertTrue(summary['leaves_only'])
        self.assertFalse(summary['filtered'])
        self.assertEqual(summary['max_nodes'], 10)
        self.assertEqual(summary['cache_strategy'], 'none')
        self.assertEqual(summary['error_policy'], 'CollectErrorsPolicy')
        self.assertEqual(summary['children'], 'ErrorHandlingChildren')


if __name__ == '__main__':
    unittest.main()
