"""MCP server exposing bus route search and place suggestions."""

import logging

from mcp.server import Server
from mcp.types import TextContent, Tool

from .catalog import load_catalog
from .config import get_settings
from .models import RouteRecord
from .route_search import search_routes, suggest_places

logger = logging.getLogger(__name__)

MAX_ROUTES = 10

# Create MCP server
app = Server("bus-finder")


def format_route(route: RouteRecord) -> str:
    """Format a route record for display."""
    return (
        f"{route.route_id} {route.departure_time}  "
        f"{route.origin} -> {route.destination} (via {route.waypoint})"
    )


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="search_routes",
            description="Find bus routes by partial origin and/or destination name",
            inputSchema={
                "type": "object",
                "properties": {
                    "origin": {
                        "type": "string",
                        "description": "Part of the departure place (e.g., 'central')",
                    },
                    "destination": {
                        "type": "string",
                        "description": "Part of the destination or a place the bus passes through (e.g., 'air')",
                    },
                },
            },
        ),
        Tool(
            name="suggest_places",
            description="List known place names starting with a prefix",
            inputSchema={
                "type": "object",
                "properties": {
                    "prefix": {
                        "type": "string",
                        "description": "Beginning of a place name (e.g., 'Cen')",
                    },
                },
                "required": ["prefix"],
            },
        ),
        Tool(
            name="catalog_status",
            description="Report how many routes the catalog currently holds",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "search_routes":
            result = _search_routes(arguments)
        elif name == "suggest_places":
            result = _suggest_places(arguments)
        elif name == "catalog_status":
            result = _catalog_status(arguments)
        else:
            result = f"Unknown tool: {name}"

        return [TextContent(type="text", text=result)]
    except Exception as e:
        error_msg = f"Error: {str(e)}"
        logger.error(error_msg, exc_info=True)
        return [TextContent(type="text", text=error_msg)]


def _search_routes(arguments: dict) -> str:
    """Search routes in the catalog."""
    origin = (arguments.get("origin") or "").strip()
    destination = (arguments.get("destination") or "").strip()

    if not origin and not destination:
        return "Error: enter at least one of 'origin' or 'destination'"

    routes = search_routes(load_catalog(), origin, destination)

    criteria = " and ".join(
        part
        for part in (
            f"from '{origin}'" if origin else "",
            f"to '{destination}'" if destination else "",
        )
        if part
    )
    if not routes:
        return f"No buses found {criteria}"

    lines = [f"Found {len(routes)} bus(es) {criteria}:\n"]
    for route in routes[:MAX_ROUTES]:
        lines.append(f"  {format_route(route)}")

    if len(routes) > MAX_ROUTES:
        lines.append(f"\n  ... and {len(routes) - MAX_ROUTES} more")

    return "\n".join(lines)


def _suggest_places(arguments: dict) -> str:
    """Suggest place names."""
    prefix = arguments.get("prefix", "")

    if not prefix or not prefix.strip():
        return "Error: 'prefix' parameter is required"

    places = suggest_places(load_catalog(), prefix)
    if not places:
        return f"No places start with '{prefix.strip()}'"

    return "\n".join(places)


def _catalog_status(arguments: dict) -> str:
    """Describe the catalog."""
    catalog = load_catalog()
    return f"Route catalog: {len(catalog)} route(s) loaded"


async def main():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    logging.basicConfig(level=get_settings().log_level)

    async with stdio_server() as (read_stream, write_stream):
        init_options = app.create_initialization_options()
        await app.run(read_stream, write_stream, init_options)


def cli():
    """Entry point for console script."""
    import asyncio
    asyncio.run(main())


if __name__ == "__main__":
    cli()
