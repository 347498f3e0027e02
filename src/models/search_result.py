# src/models/search_result.py

"""Derived search state handed to the presentation layer."""

from dataclasses import dataclass, field

from src.models.shop import Shop


# ── Query modes ──────────────────────────────────────────


@dataclass(frozen=True)
class AllMode:
    """Empty query: every shop matches."""


@dataclass(frozen=True)
class VegetableMode:
    """Query names a catalog vegetable exactly."""

    name: str


@dataclass(frozen=True)
class TextMode:
    """Free-text substring search over shop and vegetable names."""

    term: str


QueryMode = AllMode | VegetableMode | TextMode


# ── Result ───────────────────────────────────────────────


@dataclass(frozen=True)
class SearchResult:
    """Shops matching a query plus the pricing hints to render them.

    ``vegetable_average_price`` is only meaningful when
    ``resolved_vegetable`` is set; it is ``0`` otherwise.
    """

    query: str
    normalized_query: str
    matched_shops: tuple[Shop, ...]
    overall_average_price: int
    resolved_vegetable: str | None = None
    vegetable_average_price: int = 0
    best_price_ids: frozenset[int] = field(
        default_factory=lambda: frozenset[int]()
    )

    @property
    def count(self) -> int:
        """Number of matched shops."""
        return len(self.matched_shops)

    @property
    def is_empty(self) -> bool:
        """True when nothing matched (the empty-state message case)."""
        return not self.matched_shops

    def is_best_price(self, shop: Shop) -> bool:
        """True if *shop* carries the best-price hint in this result."""
        return shop.id in self.best_price_ids
