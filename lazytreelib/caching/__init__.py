"""
Caching layer for LazyTreeLib - Optional performance optimization.

This module provides opt-in memoization of children-functions. The engine
itself never caches; wrap the children-function when repeated expansion of
the same node is expensive.
"""

from .adapter import CachingChildren

__all__ = [
    'CachingChildren',
]
