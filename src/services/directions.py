# src/services/directions.py

"""Get-directions collaborator backed by an external mapping service.

The caller's position is looked up from an IP-geolocation endpoint.
When that works the user gets a route from where they are to the
shop; when it fails they get a map search centred on the shop.  If
location lookups are switched off entirely the request is refused
with :class:`LocationUnavailableError` so the UI can say so.
"""

import logging
import webbrowser
from dataclasses import dataclass
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.errors import LocationUnavailableError
from src.models.shop import Location

logger = logging.getLogger("veggie_finder.directions")


@dataclass(frozen=True)
class DirectionsResult:
    """The URL that was opened and how it was built."""

    url: str
    mode: str  # "route" or "search"


def build_route_url(
    origin_lat: float, origin_lng: float, shop: Location,
) -> str:
    """Routing URL from the caller's coordinates to the shop."""
    return Settings.DIRECTIONS_ROUTE_URL.format(
        origin_lat=origin_lat,
        origin_lng=origin_lng,
        shop_lat=shop.lat,
        shop_lng=shop.lng,
    )


def build_search_url(shop: Location) -> str:
    """Map search URL keyed only on the shop's coordinates."""
    return Settings.DIRECTIONS_SEARCH_URL.format(
        shop_lat=shop.lat, shop_lng=shop.lng,
    )


def _extract_coordinates(payload: Any) -> tuple[float, float] | None:
    """Pull ``(lat, lng)`` out of a geolocation JSON payload."""
    if not isinstance(payload, dict):
        return None
    lat = payload.get("latitude", payload.get("lat"))
    lng = payload.get("longitude", payload.get("lon", payload.get("lng")))
    if lat is None or lng is None:
        return None
    try:
        return float(lat), float(lng)
    except (TypeError, ValueError):
        return None


class DirectionsService:
    """Open directions to a shop in the user's browser."""

    def __init__(self) -> None:
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def locate_caller(self) -> tuple[float, float] | None:
        """Best-effort lookup of the caller's coordinates.

        Returns ``None`` on any network, HTTP or payload problem.
        There is no retry.
        """
        try:
            resp = self.session.get(
                self.settings.LOCATION_LOOKUP_URL,
                timeout=self.settings.LOCATION_TIMEOUT,
            )
        except Exception as exc:
            logger.warning("Location lookup failed: %s", exc)
            return None

        if resp.status_code != 200:
            logger.warning(
                "Location lookup returned HTTP %d", resp.status_code
            )
            return None

        try:
            payload = resp.json()
        except ValueError:
            logger.warning("Location lookup returned non-JSON body")
            return None

        coords = _extract_coordinates(payload)
        if coords is None:
            logger.warning("Location payload had no coordinates")
        return coords

    def resolve_url(self, location: Location) -> DirectionsResult:
        """Work out which directions URL to use for *location*.

        Raises:
            LocationUnavailableError: location lookups are disabled.
        """
        if not self.settings.LOCATION_ENABLED:
            raise LocationUnavailableError(
                "Geolocation is not supported in this environment"
            )

        coords = self.locate_caller()
        if coords is None:
            return DirectionsResult(
                url=build_search_url(location), mode="search"
            )
        return DirectionsResult(
            url=build_route_url(coords[0], coords[1], location),
            mode="route",
        )

    def get_directions(self, location: Location) -> DirectionsResult:
        """Resolve the directions URL and open it in a new browser tab."""
        result = self.resolve_url(location)
        logger.info(
            "Opening %s directions to %s: %s",
            result.mode,
            location.address or f"{location.lat},{location.lng}",
            result.url,
        )
        webbrowser.open_new_tab(result.url)
        return result
