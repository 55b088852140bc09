"""Shared fixtures."""

import json

import pytest

from bus_finder.config import get_settings

SAMPLE_ROUTES = [
    {"busNo": "12", "from": "Central Station", "to": "Airport", "via": "Midtown", "time": "08:00"},
    {"busNo": "21", "from": "Harbour Front", "to": "University", "via": "Old Town", "time": "07:30"},
    {"busNo": "34", "from": "Bangkok Road", "to": "Riverside", "via": "Airfield", "time": "10:05"},
    {"busNo": "45", "from": "Northgate", "to": "General Hospital", "via": "Central Station", "time": "06:50"},
    # invalid: missing via
    {"busNo": "99", "from": "Nowhere", "to": "Atlantis", "time": "00:00"},
    # invalid: empty origin
    {"busNo": "98", "from": "", "to": "Airport", "via": "Midtown", "time": "01:00"},
]


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def catalog():
    return [dict(entry) for entry in SAMPLE_ROUTES]


@pytest.fixture
def routes_file(tmp_path, monkeypatch):
    """Write the sample catalog to disk and point the settings at it."""
    path = tmp_path / "routes.json"
    path.write_text(json.dumps(SAMPLE_ROUTES), encoding="utf-8")
    monkeypatch.setenv("BUS_FINDER_ROUTES_FILE", str(path))
    return path


SUGGEST_DELAY = 0.05  # seconds, short debounce for controller tests


class RecordingView:
    """Dropdown stand-in that records what it was told to show."""

    def __init__(self):
        self.options = []
        self.shown = False
        self.highlighted = -1
        self.renders = 0

    def render(self, suggestions):
        self.options = list(suggestions)
        self.shown = True
        self.highlighted = -1
        self.renders += 1

    def clear(self):
        self.options = []
        self.shown = False

    def highlight(self, index):
        self.highlighted = index


@pytest.fixture
def delay():
    return SUGGEST_DELAY


@pytest.fixture
def make_view():
    """Factory for recording dropdown views."""
    return RecordingView
