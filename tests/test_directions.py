# tests/test_directions.py

"""Tests for the get-directions collaborator."""

import unittest
from unittest.mock import MagicMock, patch

from src.models.errors import DirectionsError, LocationUnavailableError
from src.models.shop import Location
from src.services.directions import (
    DirectionsService,
    build_route_url,
    build_search_url,
)

SHOP = Location(lat=12.8437, lng=77.6594, address="Electronics City")


def _response(status: int = 200, payload: object = None) -> MagicMock:
    """Build a fake curl_cffi response."""
    resp = MagicMock()
    resp.status_code = status
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


class TestUrlBuilders(unittest.TestCase):
    """URL templates for the mapping service."""

    def test_route_url(self) -> None:
        self.assertEqual(
            build_route_url(12.9, 77.5, SHOP),
            "https://www.google.com/maps/dir/12.9,77.5/12.8437,77.6594",
        )

    def test_search_url(self) -> None:
        self.assertEqual(
            build_search_url(SHOP),
            "https://www.google.com/maps/search/?api=1&query=12.8437,77.6594",
        )


class TestLocateCaller(unittest.TestCase):
    """DirectionsService.locate_caller() against a mocked session."""

    def setUp(self) -> None:
        self.service = DirectionsService()
        self.service.session = MagicMock()

    def test_ipapi_payload(self) -> None:
        self.service.session.get.return_value = _response(
            payload={"latitude": 12.97, "longitude": 77.59}
        )
        self.assertEqual(self.service.locate_caller(), (12.97, 77.59))

    def test_lat_lon_payload(self) -> None:
        """Providers using lat/lon keys are understood too."""
        self.service.session.get.return_value = _response(
            payload={"lat": "1.5", "lon": "2.5"}
        )
        self.assertEqual(self.service.locate_caller(), (1.5, 2.5))

    def test_network_error_returns_none(self) -> None:
        self.service.session.get.side_effect = ConnectionError("offline")
        self.assertIsNone(self.service.locate_caller())

    def test_http_error_returns_none(self) -> None:
        self.service.session.get.return_value = _response(status=429)
        self.assertIsNone(self.service.locate_caller())

    def test_non_json_returns_none(self) -> None:
        self.service.session.get.return_value = _response(
            payload=ValueError("no json")
        )
        self.assertIsNone(self.service.locate_caller())

    def test_missing_coordinates_returns_none(self) -> None:
        self.service.session.get.return_value = _response(
            payload={"error": True, "reason": "RateLimited"}
        )
        self.assertIsNone(self.service.locate_caller())

    def test_bad_coordinates_return_none(self) -> None:
        self.service.session.get.return_value = _response(
            payload={"latitude": "north", "longitude": 1}
        )
        self.assertIsNone(self.service.locate_caller())

    def test_no_retry(self) -> None:
        self.service.session.get.side_effect = ConnectionError("offline")
        self.service.locate_caller()
        self.assertEqual(self.service.session.get.call_count, 1)


class TestGetDirections(unittest.TestCase):
    """DirectionsService.get_directions() fallbacks."""

    def setUp(self) -> None:
        self.service = DirectionsService()

    def test_route_when_located(self) -> None:
        with patch.object(
            self.service, "locate_caller", return_value=(12.9, 77.5)
        ), patch(
            "src.services.directions.webbrowser.open_new_tab"
        ) as opener:
            result = self.service.get_directions(SHOP)
        self.assertEqual(result.mode, "route")
        self.assertIn("/maps/dir/12.9,77.5/", result.url)
        opener.assert_called_once_with(result.url)

    def test_search_fallback_when_lookup_fails(self) -> None:
        with patch.object(
            self.service, "locate_caller", return_value=None
        ), patch(
            "src.services.directions.webbrowser.open_new_tab"
        ) as opener:
            result = self.service.get_directions(SHOP)
        self.assertEqual(result.mode, "search")
        self.assertEqual(result.url, build_search_url(SHOP))
        opener.assert_called_once_with(result.url)

    def test_disabled_location_raises(self) -> None:
        with patch(
            "src.services.directions.Settings.LOCATION_ENABLED", False
        ), patch(
            "src.services.directions.webbrowser.open_new_tab"
        ) as opener:
            with self.assertRaises(LocationUnavailableError):
                self.service.get_directions(SHOP)
        opener.assert_not_called()

    def test_unavailable_is_directions_error(self) -> None:
        self.assertTrue(
            issubclass(LocationUnavailableError, DirectionsError)
        )


if __name__ == "__main__":
    unittest.main()
