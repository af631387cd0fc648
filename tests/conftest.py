"""Shared test fixtures for fifths-dash tests."""

import curses
from unittest.mock import MagicMock, patch

import pytest

from fifths_dash.config import DashboardConfig


@pytest.fixture
def two_item_config():
    """Config with the two-entry menu used throughout the scenarios."""
    return DashboardConfig(
        items=["Circle of fifth", "Harmonic"],
        infos=["Keys a fifth apart.", "Raised seventh degree."],
    )


@pytest.fixture
def patch_curses():
    """Patch curses functions/constants that require initscr()."""
    with patch.object(curses, "color_pair", side_effect=lambda n: n):
        # ACS_* constants are only defined after initscr(), so set them as ints
        if not hasattr(curses, "ACS_HLINE") or curses.ACS_HLINE is None:
            curses.ACS_HLINE = ord("-")
            curses.ACS_VLINE = ord("|")
            curses.ACS_ULCORNER = ord("+")
            curses.ACS_URCORNER = ord("+")
            curses.ACS_LLCORNER = ord("+")
            curses.ACS_LRCORNER = ord("+")
        yield


@pytest.fixture
def mock_win():
    """Factory for mock curses windows of a given size."""
    def _make(rows=40, cols=120):
        win = MagicMock()
        win.getmaxyx.return_value = (rows, cols)
        return win
    return _make
