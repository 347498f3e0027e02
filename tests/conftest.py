# tests/conftest.py

"""Shared pytest fixtures for all veggie_finder tests."""

from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def mock_browser() -> Generator[MagicMock, None, None]:
    """Patch webbrowser so no test ever opens a real browser tab."""
    with patch(
        "src.services.directions.webbrowser.open_new_tab"
    ) as opener:
        yield opener
