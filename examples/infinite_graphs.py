#!/usr/bin/env python3
"""
Traversing infinite graphs with LazyTreeLib.

This example demonstrates:
- Bounded prefixes of infinite traversals
- Backtraces from a positioned traversal iterator
- Cutting expansion with a stateful expand policy
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from lazytreelib import FilteredTraverser, LazySequence, UniqueFilter, cursor


def collatz_children(n):
    """Numbers whose Collatz step leads to ``n``."""
    result = [2 * n]
    if n > 4 and (n - 1) % 3 == 0 and ((n - 1) // 3) % 2 == 1:
        result.append((n - 1) // 3)
    return result


def main():
    """Walk the inverse Collatz tree rooted at 1."""
    tree = FilteredTraverser(collatz_children).with_root(1)

    print("First 20 numbers by level:")
    print("  ", tree.bfs_traversal().take(20).to_list())

    # Position a tracing iterator on the first odd number above 100
    it = tree.tracing_bfs_traversal().filter(lambda n: n > 100 and n % 2 == 1).typed_iterator()
    found = cursor(it).first()
    print(f"\nPath to {found.current}:")
    print("  ", " <- ".join(str(n) for n in found.backtrace()))

    # Never expand a residue class mod 7 twice
    residues = tree.expand(UniqueFilter(key=lambda n: n % 7))
    print("\nTree with one expansion per residue mod 7:")
    print("  ", residues.pre_order_dfs_traversal().to_list())

    squares = LazySequence.generate(1, lambda x: x + 1).transform(lambda x: x * x)
    print("\nSquares below 200:", squares.take_while(lambda x: x < 200).to_list())


if __name__ == "__main__":
    main()
