# src/config/settings.py

"""Central configuration for the veggie_finder directory."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Central configuration for the veggie_finder directory."""

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CATALOG_PATH: Path = Path(
        os.getenv(
            "VEGGIE_CATALOG",
            str(BASE_DIR / "src" / "config" / "catalog.json"),
        )
    )
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Logging ---
    LOG_RETENTION: int = int(os.getenv("VEGGIE_LOG_RETENTION", "20"))
    CONSOLE_LOG_LEVEL: str = os.getenv("VEGGIE_CONSOLE_LOG_LEVEL", "WARNING")

    # --- Search ---
    SEARCH_CACHE_SIZE: int = 128        # Memoised (catalog, query) results
    CURRENCY_SYMBOL: str = "₹"

    # --- Location lookup (get directions) ---
    LOCATION_ENABLED: bool = _env_flag("VEGGIE_LOCATION_ENABLED", True)
    LOCATION_LOOKUP_URL: str = os.getenv(
        "VEGGIE_LOCATION_URL", "https://ipapi.co/json/"
    )
    LOCATION_TIMEOUT: int = 5           # Seconds before the lookup gives up
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"

    # --- Mapping service URL templates ---
    DIRECTIONS_ROUTE_URL: str = (
        "https://www.google.com/maps/dir/"
        "{origin_lat},{origin_lng}/{shop_lat},{shop_lng}"
    )
    DIRECTIONS_SEARCH_URL: str = (
        "https://www.google.com/maps/search/"
        "?api=1&query={shop_lat},{shop_lng}"
    )
