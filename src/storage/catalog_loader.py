# src/storage/catalog_loader.py

"""Load and validate the read-only shop catalog seed file."""

import json
import logging
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.errors import CatalogError
from src.models.shop import Catalog, Location, Shop, VegetablePrice

logger = logging.getLogger("veggie_finder.catalog")


def _require(record: dict[str, Any], key: str, where: str) -> Any:
    """Fetch a mandatory key or raise a CatalogError naming the record."""
    if key not in record:
        raise CatalogError(f"{where}: missing '{key}'")
    return record[key]


def _number(value: Any, what: str, where: str) -> float:
    """Coerce a JSON value to float or raise a CatalogError."""
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise CatalogError(
            f"{where}: {what} is not a number ({value!r})"
        ) from exc


def _integer(value: Any, what: str, where: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise CatalogError(
            f"{where}: {what} is not an integer ({value!r})"
        ) from exc


def _mapping(value: Any, what: str, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise CatalogError(f"{where}: {what} is not an object")
    return value


def _sequence(value: Any, what: str, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise CatalogError(f"{where}: {what} is not a list")
    return value


def _non_negative(value: Any, what: str, where: str) -> float:
    """Coerce a price to float and reject negatives."""
    number = _number(value, what, where)
    if number < 0:
        raise CatalogError(f"{where}: {what} is negative ({number})")
    return number


def _parse_vegetables(
    raw: Any, where: str,
) -> tuple[VegetablePrice, ...]:
    seen: set[str] = set()
    vegetables: list[VegetablePrice] = []
    for entry in _sequence(raw, "vegetables", where):
        entry = _mapping(entry, "vegetable entry", where)
        name = str(_require(entry, "name", where)).strip()
        if not name:
            raise CatalogError(f"{where}: vegetable with empty name")
        key = name.lower()
        if key in seen:
            raise CatalogError(
                f"{where}: duplicate vegetable '{name}'"
            )
        seen.add(key)
        price = _non_negative(
            _require(entry, "price", where), f"price of {name}", where
        )
        vegetables.append(VegetablePrice(name=name, price=price))
    return tuple(vegetables)


def parse_shop(record: Any) -> Shop:
    """Build a :class:`Shop` from one JSON record.

    Raises:
        CatalogError: when a field is missing or has the wrong type.
    """
    record = _mapping(record, "record", "shop ?")
    where = f"shop {record.get('id', '?')}"
    raw_location = _mapping(
        _require(record, "location", where), "location", where
    )
    location = Location(
        lat=_number(_require(raw_location, "lat", where), "lat", where),
        lng=_number(_require(raw_location, "lng", where), "lng", where),
        address=str(raw_location.get("address", "")),
    )
    return Shop(
        id=_integer(_require(record, "id", where), "id", where),
        name=str(_require(record, "name", where)),
        price_per_kg=_non_negative(
            _require(record, "price_per_kg", where),
            "price_per_kg",
            where,
        ),
        location=location,
        vegetables=_parse_vegetables(
            record.get("vegetables", []), where
        ),
        image_url=str(record.get("image_url", "")),
    )


def build_catalog(records: Any) -> Catalog:
    """Turn raw shop records into an immutable, validated catalog.

    Raises:
        CatalogError: on missing or mistyped fields, negative prices,
            duplicate shop ids or duplicate vegetable names within a shop.
    """
    shops: list[Shop] = []
    seen_ids: set[int] = set()
    for record in _sequence(records, "'shops'", "catalog"):
        shop = parse_shop(record)
        if shop.id in seen_ids:
            raise CatalogError(f"duplicate shop id {shop.id}")
        seen_ids.add(shop.id)
        shops.append(shop)
    return tuple(shops)


def load_catalog(path: Path | None = None) -> Catalog:
    """Read the catalog seed file (defaults to ``Settings.CATALOG_PATH``)."""
    catalog_path = path or Settings.CATALOG_PATH
    try:
        with open(catalog_path, encoding="utf-8") as f:
            payload: dict[str, Any] = json.load(f)
    except FileNotFoundError as exc:
        raise CatalogError(
            f"catalog file not found: {catalog_path}"
        ) from exc
    except IsADirectoryError as exc:
        raise CatalogError(
            f"catalog path is a directory: {catalog_path}"
        ) from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(
            f"catalog file is not valid JSON: {catalog_path} ({exc})"
        ) from exc

    if not isinstance(payload, dict) or "shops" not in payload:
        raise CatalogError(
            f"catalog file has no 'shops' list: {catalog_path}"
        )

    catalog = build_catalog(payload["shops"])
    logger.info(
        "Loaded %d shops from %s", len(catalog), catalog_path
    )
    return catalog
