# tests/test_pricing.py

"""Tests for price aggregation and best-price hints."""

import unittest
from unittest.mock import patch

from src.models.shop import Location, Shop, VegetablePrice
from src.services.pricing import (
    best_price_vegetable_value,
    format_price,
    is_best_price,
    overall_average_price,
    round_half_up,
    vegetable_average_price,
)
from src.storage.catalog_loader import load_catalog


def _shop(
    shop_id: int, base: float, **vegetables: float,
) -> Shop:
    """Create a shop with a base price and keyword vegetables."""
    return Shop(
        id=shop_id,
        name=f"Shop {shop_id}",
        price_per_kg=base,
        location=Location(lat=0.0, lng=0.0),
        vegetables=tuple(
            VegetablePrice(name.capitalize(), price)
            for name, price in vegetables.items()
        ),
    )


class TestRoundHalfUp(unittest.TestCase):
    """Standard (not banker's) rounding."""

    def test_rounds_down(self) -> None:
        self.assertEqual(round_half_up(41.25), 41)

    def test_half_goes_up(self) -> None:
        self.assertEqual(round_half_up(41.5), 42)
        self.assertEqual(round_half_up(42.5), 43)

    def test_integer_unchanged(self) -> None:
        self.assertEqual(round_half_up(90.0), 90)

    def test_zero(self) -> None:
        self.assertEqual(round_half_up(0.0), 0)


class TestFormatPrice(unittest.TestCase):
    """Prices render as currency per kilo."""

    def test_whole_number_drops_fraction(self) -> None:
        self.assertEqual(format_price(60.0), "₹60/KG")

    def test_fraction_kept(self) -> None:
        self.assertEqual(format_price(41.5), "₹41.5/KG")

    def test_integer_input(self) -> None:
        self.assertEqual(format_price(0), "₹0/KG")

    def test_currency_from_settings(self) -> None:
        with patch("src.services.pricing.Settings.CURRENCY_SYMBOL", "$"):
            self.assertEqual(format_price(55), "$55/KG")


class TestOverallAverage(unittest.TestCase):
    """overall_average_price() behaviour."""

    def test_seed_catalog(self) -> None:
        """(60 + 75 + 65 + 55) / 4 = 63.75 → 64."""
        self.assertEqual(overall_average_price(load_catalog()), 64)

    def test_half_rounds_up(self) -> None:
        catalog = (_shop(1, 10), _shop(2, 11))
        self.assertEqual(overall_average_price(catalog), 11)

    def test_empty_catalog(self) -> None:
        self.assertEqual(overall_average_price(()), 0)

    def test_returns_int(self) -> None:
        self.assertIsInstance(
            overall_average_price((_shop(1, 12.4),)), int
        )


class TestVegetableAverage(unittest.TestCase):
    """vegetable_average_price() behaviour."""

    def test_mean_of_prices(self) -> None:
        shops = (
            _shop(1, 60, tomatoes=40),
            _shop(2, 75, tomatoes=45),
            _shop(3, 65, tomatoes=42),
            _shop(4, 55, tomatoes=38),
        )
        self.assertEqual(vegetable_average_price(shops, "tomatoes"), 41)

    def test_missing_counts_as_zero(self) -> None:
        """A shop lacking the vegetable adds 0 but still divides."""
        shops = (_shop(1, 60, peas=60), _shop(2, 60, beans=10))
        self.assertEqual(vegetable_average_price(shops, "peas"), 30)

    def test_empty_is_zero(self) -> None:
        self.assertEqual(vegetable_average_price((), "peas"), 0)

    def test_case_insensitive_lookup(self) -> None:
        shops = (_shop(1, 60, broccoli=90),)
        self.assertEqual(vegetable_average_price(shops, "BROCCOLI"), 90)

    def test_non_negative_int(self) -> None:
        result = vegetable_average_price((_shop(1, 1, peas=0.4),), "peas")
        self.assertIsInstance(result, int)
        self.assertGreaterEqual(result, 0)


class TestIsBestPrice(unittest.TestCase):
    """is_best_price() and best_price_vegetable_value()."""

    def test_overall_mode_seed_catalog(self) -> None:
        """60 and 55 are below 64; 65 and 75 are not."""
        catalog = load_catalog()
        flags = [is_best_price(s, 64, None, 0) for s in catalog]
        self.assertEqual(flags, [True, False, False, True])

    def test_overall_mode_equal_is_not_best(self) -> None:
        self.assertFalse(is_best_price(_shop(1, 64), 64, None, 0))

    def test_uniform_prices_flag_nobody(self) -> None:
        shops = (_shop(1, 50), _shop(2, 50))
        average = overall_average_price(shops)
        self.assertFalse(any(is_best_price(s, average, None, 0) for s in shops))

    def test_vegetable_mode_below_average(self) -> None:
        shop = _shop(1, 99, tomatoes=38)
        self.assertTrue(is_best_price(shop, 64, "tomatoes", 41))

    def test_vegetable_mode_ignores_base_price(self) -> None:
        """A cheap base price does not help in vegetable mode."""
        shop = _shop(1, 10, tomatoes=45)
        self.assertFalse(is_best_price(shop, 64, "tomatoes", 41))

    def test_vegetable_mode_equal_is_not_best(self) -> None:
        shop = _shop(1, 65, broccoli=90)
        self.assertFalse(is_best_price(shop, 64, "broccoli", 90))

    def test_vegetable_mode_missing_vegetable(self) -> None:
        shop = _shop(1, 10, beans=5)
        self.assertFalse(is_best_price(shop, 64, "tomatoes", 41))

    def test_value_with_vegetable(self) -> None:
        shop = _shop(1, 60, tomatoes=40)
        self.assertEqual(best_price_vegetable_value(shop, "tomatoes"), 40)

    def test_value_without_vegetable(self) -> None:
        shop = _shop(1, 60, tomatoes=40)
        self.assertIsNone(best_price_vegetable_value(shop, None))
        self.assertIsNone(best_price_vegetable_value(shop, "peas"))


if __name__ == "__main__":
    unittest.main()
