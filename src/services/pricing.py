# src/services/pricing.py

"""Price aggregation and best-price hints."""

import math
from collections.abc import Sequence

from src.config.settings import Settings
from src.models.shop import Shop


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (41.5 → 42).

    Prices are never negative, so this matches the usual
    "standard rounding" rather than Python's banker's rounding.
    """
    return math.floor(value + 0.5)


def format_price(value: float) -> str:
    """Render a price per kilo, dropping a zero fraction (60.0 → ₹60/KG)."""
    amount = int(value) if float(value).is_integer() else value
    return f"{Settings.CURRENCY_SYMBOL}{amount}/KG"


def overall_average_price(catalog: Sequence[Shop]) -> int:
    """Mean ``price_per_kg`` over the whole catalog, rounded.

    Independent of any query.  An empty catalog averages to ``0``.
    """
    if not catalog:
        return 0
    total = sum(shop.price_per_kg for shop in catalog)
    return round_half_up(total / len(catalog))


def vegetable_average_price(
    shops: Sequence[Shop], vegetable: str,
) -> int:
    """Mean price of *vegetable* across *shops*, rounded.

    A shop lacking the vegetable contributes ``0`` but still counts
    towards the divisor.  No shops averages to ``0``.
    """
    if not shops:
        return 0
    prices = [shop.price_of(vegetable) or 0 for shop in shops]
    return round_half_up(sum(prices) / len(prices))


def best_price_vegetable_value(
    shop: Shop, resolved_vegetable: str | None,
) -> float | None:
    """The shop's price for the resolved vegetable, if it has one."""
    if resolved_vegetable is None:
        return None
    return shop.price_of(resolved_vegetable)


def is_best_price(
    shop: Shop,
    overall_average: int,
    resolved_vegetable: str | None,
    vegetable_average: int,
) -> bool:
    """Whether *shop* is strictly cheaper than the relevant average."""
    if resolved_vegetable is not None:
        price = shop.price_of(resolved_vegetable)
        return price is not None and price < vegetable_average
    return shop.price_per_kg < overall_average
