# src/filters/vegetable_index.py

"""Catalog-wide vegetable lookups."""

from src.models.shop import Catalog


def unique_vegetable_names(catalog: Catalog) -> list[str]:
    """Every vegetable name in the catalog, deduplicated and sorted.

    Names are kept as stored, so "Onions" and "onions" would both
    appear if two shops spelled them differently.
    """
    names = {veg.name for shop in catalog for veg in shop.vegetables}
    return sorted(names)


def resolve_vegetable(
    catalog: Catalog, normalized_query: str,
) -> str | None:
    """Return *normalized_query* if it is exactly a catalog vegetable.

    The comparison lower-cases each stored name; substrings never
    resolve.  The returned value is the query itself, not the
    catalog's spelling.
    """
    if not normalized_query:
        return None
    found = any(shop.carries(normalized_query) for shop in catalog)
    return normalized_query if found else None
