# src/storage/search_cache.py

"""In-memory memoisation of search results.

Results are keyed on ``(catalog, normalised query)``.  The key holds the
catalog tuple itself, so an entry can never be served to a different
catalog that happens to reuse a freed object id.  Catalogs never change,
so an entry stays valid until it is evicted or the cache is cleared.
"""

import logging
from collections import OrderedDict

from src.config.settings import Settings
from src.models.search_result import SearchResult
from src.models.shop import Catalog

logger = logging.getLogger("veggie_finder.cache")

CacheKey = tuple[Catalog, str]


class SearchCache:
    """Bounded least-recently-used cache of :class:`SearchResult`."""

    def __init__(self, max_entries: int | None = None) -> None:
        self._entries: OrderedDict[CacheKey, SearchResult] = OrderedDict()
        self._max_entries: int = (
            max_entries
            if max_entries is not None
            else Settings.SEARCH_CACHE_SIZE
        )
        self.hits: int = 0
        self.misses: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: CacheKey) -> SearchResult | None:
        """Return the cached result for *key*, or ``None`` on miss."""
        result = self._entries.get(key)
        if result is None:
            self.misses += 1
            return None
        self._entries.move_to_end(key)
        self.hits += 1
        logger.debug("Cache hit for query '%s'", key[1])
        return result

    def store(self, key: CacheKey, result: SearchResult) -> None:
        """Remember *result* under *key*, evicting the oldest if full."""
        if self._max_entries <= 0:
            return
        self._entries[key] = result
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached query '%s'", evicted[1])

    def clear(self) -> int:
        """Purge all cached entries.

        Returns the number of entries that were removed.
        """
        count = len(self._entries)
        self._entries.clear()
        logger.info("Search cache purged (%d entries removed)", count)
        return count
