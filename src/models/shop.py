# src/models/shop.py

"""Vendor catalog data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """Where a shop is, as coordinates plus a human-readable address."""

    lat: float
    lng: float
    address: str = ""


@dataclass(frozen=True)
class VegetablePrice:
    """A vegetable a shop sells and its price per kg."""

    name: str
    price: float


@dataclass(frozen=True)
class Shop:
    """A single vendor in the catalog."""

    id: int
    name: str
    price_per_kg: float
    location: Location
    vegetables: tuple[VegetablePrice, ...] = ()
    image_url: str = ""

    def price_of(self, vegetable: str) -> float | None:
        """Return this shop's price for *vegetable*, ignoring case."""
        wanted = vegetable.lower()
        for veg in self.vegetables:
            if veg.name.lower() == wanted:
                return veg.price
        return None

    def carries(self, vegetable: str) -> bool:
        """True if the shop sells *vegetable* (case-insensitive)."""
        return self.price_of(vegetable) is not None


Catalog = tuple[Shop, ...]
