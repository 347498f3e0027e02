# src/services/search_engine.py

"""Search, filter and price-aggregation engine over a fixed catalog."""

import logging
from dataclasses import replace

from src.filters.query_parser import classify_query, normalize
from src.filters.query_parser import toggle_vegetable as _toggle
from src.filters.shop_filter import ShopFilter
from src.filters.vegetable_index import unique_vegetable_names
from src.models.search_result import SearchResult, VegetableMode
from src.models.shop import Catalog, Shop
from src.services.pricing import (
    best_price_vegetable_value,
    is_best_price,
    overall_average_price,
    vegetable_average_price,
)
from src.storage.search_cache import SearchCache

logger = logging.getLogger("veggie_finder.engine")


def compute_search(
    catalog: Catalog,
    query: str,
    overall_average: int | None = None,
) -> SearchResult:
    """Recompute the full search result for *query* from scratch.

    Pure: the same ``(catalog, query)`` always yields an equal result.
    """
    if overall_average is None:
        overall_average = overall_average_price(catalog)

    mode = classify_query(catalog, query)
    matched = ShopFilter.apply(catalog, mode)

    resolved = mode.name if isinstance(mode, VegetableMode) else None
    veg_average = (
        vegetable_average_price(matched, resolved)
        if resolved is not None
        else 0
    )

    best_ids = frozenset(
        shop.id
        for shop in matched
        if is_best_price(shop, overall_average, resolved, veg_average)
    )

    return SearchResult(
        query=query,
        normalized_query=normalize(query),
        matched_shops=matched,
        overall_average_price=overall_average,
        resolved_vegetable=resolved,
        vegetable_average_price=veg_average,
        best_price_ids=best_ids,
    )


class SearchEngine:
    """Session-facing facade: memoised searches over one catalog."""

    def __init__(
        self,
        catalog: Catalog,
        cache: SearchCache | None = None,
    ) -> None:
        self.catalog: Catalog = tuple(catalog)
        self.cache = cache if cache is not None else SearchCache()
        # Constant for a static catalog, so computed once
        self.vegetables: list[str] = unique_vegetable_names(self.catalog)
        self.overall_average_price: int = overall_average_price(
            self.catalog
        )
        logger.info(
            "Engine ready: %d shops, %d vegetables, average %d/kg",
            len(self.catalog),
            len(self.vegetables),
            self.overall_average_price,
        )

    def search(self, query: str) -> SearchResult:
        """Matched shops and price hints for *query* (memoised)."""
        key = (self.catalog, normalize(query))
        cached = self.cache.get(key)
        if cached is not None:
            # Same normalised query may have been typed differently
            return replace(cached, query=query)

        result = compute_search(
            self.catalog, query, self.overall_average_price
        )
        self.cache.store(key, result)
        logger.debug(
            "Query '%s' → %d shops (vegetable=%s)",
            result.normalized_query,
            result.count,
            result.resolved_vegetable,
        )
        return result

    @staticmethod
    def toggle_vegetable(current_query: str, selected: str) -> str:
        """Next query after selecting *selected* in the vegetable list."""
        return _toggle(current_query, selected)

    @staticmethod
    def best_price_value(shop: Shop, result: SearchResult) -> float | None:
        """The shop's price for the result's resolved vegetable."""
        return best_price_vegetable_value(shop, result.resolved_vegetable)

    def find_shop(self, shop_id: int) -> Shop | None:
        """Look a shop up by id."""
        for shop in self.catalog:
            if shop.id == shop_id:
                return shop
        return None

    def clear_cache(self) -> int:
        """Drop all memoised results, returning how many were dropped."""
        return self.cache.clear()
