# src/cli/runner.py

"""Headless CLI: search the directory, list vegetables, open directions."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.models.errors import CatalogError, DirectionsError
from src.models.search_result import SearchResult
from src.services.directions import DirectionsService
from src.services.pricing import format_price
from src.services.search_engine import SearchEngine
from src.storage.catalog_loader import load_catalog

logger = logging.getLogger("veggie_finder.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def build_engine(catalog_path: str | None = None) -> SearchEngine | None:
    """Load the catalog and wrap it in an engine.

    Prints the problem and returns ``None`` when the catalog is bad.
    """
    path = Path(catalog_path) if catalog_path else None
    try:
        catalog = load_catalog(path)
    except CatalogError as exc:
        logger.error("Could not load catalog: %s", exc, exc_info=True)
        _err.print(f"[red]Catalog error: {exc}[/red]")
        return None
    return SearchEngine(catalog)


def result_to_dict(
    engine: SearchEngine, result: SearchResult,
) -> dict[str, object]:
    """Serialise a search result to plain data for JSON output."""
    return {
        "query": result.query,
        "resolved_vegetable": result.resolved_vegetable,
        "overall_average_price": result.overall_average_price,
        "vegetable_average_price": (
            result.vegetable_average_price
            if result.resolved_vegetable is not None
            else None
        ),
        "count": result.count,
        "shops": [
            {
                "id": shop.id,
                "name": shop.name,
                "price_per_kg": shop.price_per_kg,
                "address": shop.location.address,
                "lat": shop.location.lat,
                "lng": shop.location.lng,
                "best_price": result.is_best_price(shop),
                "vegetable_price": engine.best_price_value(shop, result),
                "vegetables": [
                    {"name": v.name, "price": v.price}
                    for v in shop.vegetables
                ],
            }
            for shop in result.matched_shops
        ],
    }


def _print_table(engine: SearchEngine, result: SearchResult) -> None:
    """Render a Rich table of matched shops to stdout."""
    vegetable = result.resolved_vegetable
    title = (
        f"Shops selling {vegetable.capitalize()}"
        if vegetable
        else "Vegetable Shops"
    )
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Shop", style="bold")
    table.add_column("Avg Price", justify="right", style="green")
    if vegetable:
        table.add_column(vegetable.capitalize(), justify="right")
    table.add_column("Best", justify="center")
    table.add_column("Address", overflow="fold", style="dim")

    for shop in result.matched_shops:
        row = [str(shop.id), shop.name, format_price(shop.price_per_kg)]
        if vegetable:
            price = engine.best_price_value(shop, result)
            row.append(format_price(price) if price is not None else "—")
        row.append("[green]★[/green]" if result.is_best_price(shop) else "")
        row.append(shop.location.address)
        table.add_row(*row)

    Console().print(table)


def cli_search(
    query: str,
    output_format: str = "json",
    catalog_path: str | None = None,
) -> int:
    """Run a headless search and return an exit code (0=ok, 1=fail)."""
    engine = build_engine(catalog_path)
    if engine is None:
        return 1

    result = engine.search(query)
    _err.print(
        f"[bold]Searching:[/bold] {query}  "
        "[dim]overall average "
        f"{format_price(result.overall_average_price)}[/dim]"
    )

    if result.is_empty:
        _err.print("[yellow]No shops found matching your search.[/yellow]")
        return 1

    plural = "" if result.count == 1 else "s"
    if result.resolved_vegetable is not None:
        _err.print(
            f"[green]✓ {result.count} shop{plural} selling "
            f"{result.resolved_vegetable.capitalize()}, average "
            f"{format_price(result.vegetable_average_price)}[/green]"
        )
    else:
        _err.print(f"[green]✓ {result.count} shop{plural}[/green]")

    if output_format == "table":
        _print_table(engine, result)
    else:
        json.dump(
            result_to_dict(engine, result),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


def run_list_vegetables(catalog_path: str | None = None) -> int:
    """Print every vegetable in the catalog, one per line."""
    engine = build_engine(catalog_path)
    if engine is None:
        return 1
    for name in engine.vegetables:
        sys.stdout.write(f"{name}\n")
    return 0


def run_directions(
    shop_id: int, catalog_path: str | None = None,
) -> int:
    """Open directions to the shop with *shop_id*."""
    engine = build_engine(catalog_path)
    if engine is None:
        return 1

    shop = engine.find_shop(shop_id)
    if shop is None:
        _err.print(f"[red]Unknown shop id: {shop_id}[/red]")
        return 1

    try:
        result = DirectionsService().get_directions(shop.location)
    except DirectionsError as exc:
        logger.warning("Directions unavailable: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1

    if result.mode == "search":
        _err.print(
            "[yellow]Could not determine your location; "
            "showing the shop on the map instead.[/yellow]"
        )
    _err.print(f"[dim]Opened {result.url}[/dim]")
    return 0
