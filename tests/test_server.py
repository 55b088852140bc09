"""Tests for MCP server functionality."""

import json

import pytest

from bus_finder.models import RouteRecord
from bus_finder.server import (
    app,
    call_tool,
    format_route,
    list_tools,
    _catalog_status,
    _search_routes,
    _suggest_places,
)


class TestFormatting:
    """Test route formatting."""

    def test_format_route(self):
        route = RouteRecord(
            route_id="12",
            origin="Central Station",
            destination="Airport",
            waypoint="Midtown",
            departure_time="08:00",
        )
        assert format_route(route) == "12 08:00  Central Station -> Airport (via Midtown)"


class TestSearchRoutesTool:
    """Test the search_routes tool."""

    def test_search_by_origin(self, routes_file):
        result = _search_routes({"origin": "central"})
        assert result.startswith("Found 1 bus(es) from 'central':")
        assert "Central Station -> Airport (via Midtown)" in result

    def test_search_by_destination_via(self, routes_file):
        result = _search_routes({"destination": "central"})
        assert "to 'central'" in result
        assert "Northgate -> General Hospital" in result

    def test_search_both(self, routes_file):
        result = _search_routes({"origin": "harbour", "destination": "uni"})
        assert "from 'harbour' and to 'uni'" in result

    def test_search_no_results(self, routes_file):
        assert _search_routes({"origin": "xyz"}) == "No buses found from 'xyz'"

    def test_search_requires_criteria(self, routes_file):
        assert _search_routes({}).startswith("Error:")
        assert _search_routes({"origin": "  ", "destination": None}).startswith("Error:")

    def test_search_limits_output(self, tmp_path, monkeypatch):
        routes = [
            {"busNo": str(n), "from": "Depot", "to": "Terminal", "via": "Bridge", "time": "09:00"}
            for n in range(13)
        ]
        path = tmp_path / "routes.json"
        path.write_text(json.dumps(routes), encoding="utf-8")
        monkeypatch.setenv("BUS_FINDER_ROUTES_FILE", str(path))

        result = _search_routes({"origin": "depot"})
        assert result.startswith("Found 13 bus(es)")
        assert "... and 3 more" in result


class TestSuggestPlacesTool:
    """Test the suggest_places tool."""

    def test_suggest(self, routes_file):
        assert _suggest_places({"prefix": "air"}) == "Airfield\nAirport"

    def test_suggest_none(self, routes_file):
        assert _suggest_places({"prefix": "zz"}) == "No places start with 'zz'"

    def test_suggest_requires_prefix(self, routes_file):
        assert _suggest_places({}).startswith("Error:")
        assert _suggest_places({"prefix": "  "}).startswith("Error:")


class TestCatalogStatusTool:
    def test_status(self, routes_file):
        assert _catalog_status({}) == "Route catalog: 6 route(s) loaded"

    def test_status_unreadable_catalog(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BUS_FINDER_ROUTES_FILE", str(tmp_path / "missing.json"))
        assert _catalog_status({}) == "Route catalog: 0 route(s) loaded"


class TestMCPServerRegistration:
    """Test that MCP server tools are registered."""

    def test_app_has_tools(self):
        """Verify the app object exists and is an MCP server."""
        assert app is not None
        assert hasattr(app, "call_tool")
        assert hasattr(app, "list_tools")

    @pytest.mark.asyncio
    async def test_list_tools(self):
        names = [tool.name for tool in await list_tools()]
        assert names == ["search_routes", "suggest_places", "catalog_status"]

    @pytest.mark.asyncio
    async def test_call_tool(self, routes_file):
        content = await call_tool("suggest_places", {"prefix": "uni"})
        assert content[0].text == "University"

    @pytest.mark.asyncio
    async def test_call_unknown_tool(self):
        content = await call_tool("teleport", {})
        assert content[0].text == "Unknown tool: teleport"

    @pytest.mark.asyncio
    async def test_call_tool_error_is_reported(self):
        content = await call_tool("suggest_places", {"prefix": 42})
        assert content[0].text.startswith("Error:")
