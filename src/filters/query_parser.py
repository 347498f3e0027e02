# src/filters/query_parser.py

"""Query normalisation and search-mode classification.

A query is matched case-insensitively with surrounding whitespace
ignored.  Once normalised it falls into exactly one mode:

    ""                         → AllMode        (no filter)
    exact catalog vegetable    → VegetableMode  (membership match)
    anything else              → TextMode       (substring match)

Vegetable mode always wins over text mode, so "onions" never falls
back to matching a shop called "Onions Market" by name.
"""

import logging

from src.filters.vegetable_index import resolve_vegetable
from src.models.search_result import (
    AllMode,
    QueryMode,
    TextMode,
    VegetableMode,
)
from src.models.shop import Catalog

logger = logging.getLogger("veggie_finder.query_parser")


def normalize(query: str) -> str:
    """Lower-case then trim *query*."""
    return query.lower().strip()


def classify_query(catalog: Catalog, query: str) -> QueryMode:
    """Decide which filtering mode *query* selects against *catalog*."""
    normalized = normalize(query)
    if not normalized:
        return AllMode()

    vegetable = resolve_vegetable(catalog, normalized)
    if vegetable is not None:
        logger.debug("Query '%s' resolved to vegetable", normalized)
        return VegetableMode(name=vegetable)

    return TextMode(term=normalized)


def toggle_vegetable(current_query: str, selected: str) -> str:
    """Query after the user picks *selected* from the vegetable list.

    Picking the vegetable that is already the query clears it.
    """
    return "" if current_query == selected else selected
