"""
Caching wrapper for children-functions.

Provides an opt-in memoization layer that can wrap any children-function,
so that nodes reached repeatedly (in DAGs, or across repeated passes) are
expanded only once.
"""

from typing import Any, Callable, Iterable, Iterator, List, Optional

from cachetools import LRUCache, TTLCache

_NOTHING = object()


class _ReplayBuffer:
    """
    Lazily memoized children of one node.

    The underlying children iterator is pulled only as far as some consumer
    has asked; later consumers replay the buffered prefix first. This keeps
    infinite child sets safe to cache.
    """

    def __init__(self, children: Iterator[Any]):
        self._source: Optional[Iterator[Any]] = children
        self._buffer: List[Any] = []

    def _fetch(self) -> Any:
        if self._source is None:
            return _NOTHING
        child = next(self._source, _NOTHING)
        if child is _NOTHING:
            self._source = None
        else:
            self._buffer.append(child)
        return child

    def __iter__(self) -> Iterator[Any]:
        index = 0
        while True:
            if index < len(self._buffer):
                yield self._buffer[index]
            elif self._fetch() is _NOTHING:
                return
            else:
                yield self._buffer[index]
            index += 1

    @property
    def complete(self) -> bool:
        return self._source is None


class CachingChildren:
    """
    Optional caching layer for any children-function.

    Example:
        children = CachingChildren(resolve_imports, max_size=50000)

        for module in PRE_ORDER_DFS.traverse(children, root):
            process(module)

        print(children.get_cache_stats()['hit_rate'])
    """

    def __init__(
        self,
        children: Callable[[Any], Optional[Iterable[Any]]],
        max_size: int = 10000,
        ttl: Optional[float] = None,
        key: Optional[Callable[[Any], Any]] = None
    ):
        """
        Initialize caching wrapper.

        Args:
            children: The underlying children-function to wrap
            max_size: Maximum number of nodes kept in the cache
            ttl: Time-to-live for cache entries in seconds (None = LRU only)
            key: Optional function mapping a node to a hashable cache key
        """
        self._children = children
        self._key = key
        if ttl is None:
            self._cache = LRUCache(maxsize=max_size)
        else:
            self._cache = TTLCache(maxsize=max_size, ttl=ttl)

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0

    def __call__(self, node: Any) -> Iterable[Any]:
        cache_key = self._get_cache_key(node)

        cached = self._cache.get(cache_key)
        if cached is not None:
            self.cache_hits += 1
            return cached

        self.cache_misses += 1
        children = self._children(node)
        entry = _ReplayBuffer(iter(children if children is not None else ()))
        self._cache[cache_key] = entry
        return entry

    def _get_cache_key(self, node: Any) -> Any:
        """
        Generate cache key for a node.

        Default implementation uses the node itself, which must then be
        hashable.
        """
        if self._key is not None:
            return self._key(node)
        return node

    def get_cache_stats(self) -> dict:
        """
        Get cache statistics for monitoring and debugging.
        """
        total_requests = self.cache_hits + self.cache_misses
        hit_rate = self.cache_hits / total_requests if total_requests > 0 else 0

        return {
            'cache_hits': self.cache_hits,
            'cache_misses': self.cache_misses,
            'hit_rate': hit_rate,
            'cache_size': len(self._cache),
            'max_size': self._cache.maxsize,
            'ttl': getattr(self._cache, 'ttl', None)
        }

    def clear_cache(self) -> None:
        """
        Clear all cached entries.
        """
        self._cache.clear()
        self.cache_hits = 0
        self.cache_misses = 0
