# src/ui/app.py

"""Terminal UI for the veggie_finder directory."""

import asyncio
import logging
from pathlib import Path
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Static,
)

from src.models.errors import DirectionsError, LocationUnavailableError
from src.models.search_result import SearchResult
from src.models.shop import Shop
from src.services.directions import DirectionsResult, DirectionsService
from src.services.pricing import format_price
from src.services.search_engine import SearchEngine
from src.storage.catalog_loader import load_catalog

logger = logging.getLogger("veggie_finder.ui")


class VeggieFinderApp(App[object]):
    """Terminal UI for the veggie_finder directory."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("escape", "clear_search", "Clear"),
        Binding("d", "directions", "Directions"),
        Binding("i", "invalidate_cache", "Reset Cache"),
    ]

    def __init__(
        self,
        engine: SearchEngine | None = None,
        catalog_path: str | None = None,
        directions: DirectionsService | None = None,
    ) -> None:
        super().__init__()
        if engine is None:
            engine = SearchEngine(
                load_catalog(Path(catalog_path) if catalog_path else None)
            )
        self.engine = engine
        self.directions = directions or DirectionsService()
        self.result: SearchResult = self.engine.search("")
        self.visible_shops: list[Shop] = []
        self._vegetable_buttons: dict[str, str] = {}

    # ── Layout ───────────────────────────────────────────

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        buttons: list[Button] = []
        for idx, name in enumerate(self.engine.vegetables):
            button_id = f"veg_{idx}"
            self._vegetable_buttons[button_id] = name
            buttons.append(Button(name, id=button_id))

        yield Header()
        yield Container(
            Static(
                "🥬 Local Vegetable Shops  (average "
                f"{format_price(self.engine.overall_average_price)})",
                id="title",
            ),
            Input(
                placeholder="Search shops or vegetables...",
                id="search_input",
            ),
            Horizontal(*buttons, id="vegetable_filters"),
            Static("", id="banner"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="shop_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            Static(
                "No shops found matching your search.", id="empty_state"
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the shop table and show the full catalog."""
        table = self._table()
        table.add_columns("Shop", "Price", "Best", "Vegetables", "Address")
        self.refresh_results()

    def _table(self) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one("#shop_table", DataTable),
        )

    # ── Search ───────────────────────────────────────────

    async def on_input_changed(self, event: Input.Changed) -> None:
        """Recompute results on every keystroke."""
        if event.input.id == "search_input":
            self.refresh_results()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Vegetable buttons toggle the query to that vegetable."""
        name = self._vegetable_buttons.get(event.button.id or "")
        if name is None:
            return
        search_input = self.query_one("#search_input", Input)
        search_input.value = self.engine.toggle_vegetable(
            search_input.value, name
        )
        self.refresh_results()

    def refresh_results(self) -> None:
        """Re-run the search for the current input and redraw."""
        query = self.query_one("#search_input", Input).value
        self.result = self.engine.search(query)
        self.visible_shops = list(self.result.matched_shops)
        self._render_banner()
        self._render_filters()
        self.populate_table()

    def _render_banner(self) -> None:
        banner = self.query_one("#banner", Static)
        vegetable = self.result.resolved_vegetable
        if vegetable is None:
            banner.update("")
            banner.display = False
            return
        count = self.result.count
        plural = "" if count == 1 else "s"
        banner.update(
            f"Showing shops selling {vegetable.capitalize()}\n"
            f"Found {count} shop{plural} with this vegetable\n"
            "Average price: "
            f"{format_price(self.result.vegetable_average_price)}"
        )
        banner.display = True

    def _render_filters(self) -> None:
        selected = self.result.resolved_vegetable
        for button_id, name in self._vegetable_buttons.items():
            button = self.query_one(f"#{button_id}", Button)
            button.variant = (
                "success" if selected == name.lower() else "default"
            )

    def populate_table(self) -> None:
        """Fill the DataTable with the shops in the current result."""
        table = self._table()
        table.clear()
        vegetable = self.result.resolved_vegetable

        for shop in self.visible_shops:
            veg_price = self.engine.best_price_value(shop, self.result)
            if veg_price is not None:
                price_cell = Text(
                    f"{format_price(veg_price)} for {vegetable}\n"
                    f"avg {format_price(shop.price_per_kg)}",
                    style="green",
                )
            else:
                price_cell = Text(
                    format_price(shop.price_per_kg), style="green"
                )

            badge = ""
            if self.result.is_best_price(shop):
                badge = (
                    f"Best Price for {vegetable}"
                    if vegetable
                    else "Best Average Price"
                )

            vegetables = Text()
            for i, veg in enumerate(shop.vegetables):
                if i:
                    vegetables.append(", ")
                highlighted = (
                    vegetable is not None
                    and veg.name.lower() == vegetable
                )
                vegetables.append(
                    f"{veg.name} {format_price(veg.price)}",
                    style="bold reverse green" if highlighted else "",
                )

            table.add_row(
                shop.name,
                price_cell,
                Text(badge, style="bold green"),
                vegetables,
                shop.location.address,
                height=None,
            )

        self.query_one("#empty_state", Static).display = (
            self.result.is_empty
        )

    # ── Directions ───────────────────────────────────────

    async def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open directions to the selected shop."""
        if 0 <= event.cursor_row < len(self.visible_shops):
            self._start_directions(self.visible_shops[event.cursor_row])

    def action_directions(self) -> None:
        """Open directions to the highlighted shop."""
        row = self._table().cursor_row
        if not 0 <= row < len(self.visible_shops):
            self.notify("Select a shop first", severity="warning")
            return
        self._start_directions(self.visible_shops[row])

    def _start_directions(self, shop: Shop) -> None:
        # The location lookup must not block the search UI
        self.run_worker(self.open_directions(shop), exclusive=True)

    async def open_directions(self, shop: Shop) -> DirectionsResult | None:
        """Look up the caller and open directions to *shop*."""
        try:
            result: DirectionsResult = await asyncio.to_thread(
                self.directions.get_directions, shop.location
            )
        except LocationUnavailableError as exc:
            logger.warning("Directions unavailable: %s", exc)
            self.notify(str(exc), severity="error", timeout=10)
            return None
        except DirectionsError as exc:
            logger.error("Directions failed: %s", exc, exc_info=True)
            self.notify(f"Directions failed: {exc}", severity="error")
            return None

        if result.mode == "search":
            self.notify(
                "Could not determine your location, "
                f"showing {shop.name} on the map",
                severity="warning",
            )
        else:
            self.notify(f"Opening directions to {shop.name}")
        return result

    # ── Other actions ────────────────────────────────────

    def action_clear_search(self) -> None:
        """Reset the query so every shop is listed."""
        self.query_one("#search_input", Input).value = ""
        self.refresh_results()

    def action_invalidate_cache(self) -> None:
        """Drop memoised search results."""
        count = self.engine.clear_cache()
        self.notify(f"Search cache cleared ({count} entries)")
