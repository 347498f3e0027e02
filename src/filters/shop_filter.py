# src/filters/shop_filter.py

"""Select the shops that match a classified query."""

import logging

from src.models.search_result import (
    AllMode,
    QueryMode,
    TextMode,
    VegetableMode,
)
from src.models.shop import Catalog, Shop

logger = logging.getLogger("veggie_finder.filters")


class ShopFilter:
    """Filter the catalog by query mode, preserving catalog order."""

    @staticmethod
    def contains_text(shop: Shop, term: str) -> bool:
        """Shop name or any vegetable name contains *term*."""
        if term in shop.name.lower():
            return True
        return any(term in veg.name.lower() for veg in shop.vegetables)

    @classmethod
    def apply(cls, catalog: Catalog, mode: QueryMode) -> tuple[Shop, ...]:
        """Return the shops matching *mode*, in catalog order."""
        if isinstance(mode, AllMode):
            return tuple(catalog)

        if isinstance(mode, VegetableMode):
            kept = tuple(s for s in catalog if s.carries(mode.name))
        else:
            kept = tuple(
                s for s in catalog if cls.contains_text(s, mode.term)
            )

        logger.debug(
            "%s kept %d of %d shops", mode, len(kept), len(catalog)
        )
        return kept


def filter_shops(
    catalog: Catalog,
    normalized_query: str,
    resolved_vegetable: str | None,
) -> tuple[Shop, ...]:
    """Filter *catalog* given an already normalised and resolved query."""
    mode: QueryMode
    if not normalized_query:
        mode = AllMode()
    elif resolved_vegetable is not None:
        mode = VegetableMode(name=resolved_vegetable)
    else:
        mode = TextMode(term=normalized_query)
    return ShopFilter.apply(catalog, mode)
