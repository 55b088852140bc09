"""Route matching and place-name suggestions over a route catalog.

Both functions are pure: they read the catalog snapshot they are given and
never cache anything between calls. Invalid catalog entries are skipped.
"""

from collections.abc import Iterable
from typing import Any

from .catalog import iter_valid_routes
from .models import RouteRecord


def normalize(text: Any) -> str:
    """Normalize text for comparison: trim and lowercase.

    Anything that is not a string normalizes to the empty string.
    """
    if not isinstance(text, str):
        return ""
    return text.strip().lower()


def search_routes(
    catalog: Iterable[Any] | None,
    origin: str | None = None,
    destination: str | None = None,
) -> list[RouteRecord]:
    """Find routes by partial origin and/or destination name.

    A route matches when its origin contains the origin query and its
    destination or waypoint contains the destination query. An empty query
    field places no constraint on that side.

    Args:
        catalog: Route entries, raw dicts or RouteRecord objects.
        origin: Substring of the departure place (e.g., "central")
        destination: Substring of the destination or via place

    Returns:
        Matching routes in catalog order. Empty when both query fields are
        empty, regardless of the catalog.
    """
    origin_query = normalize(origin)
    destination_query = normalize(destination)

    if not origin_query and not destination_query:
        return []

    results = []
    for route in iter_valid_routes(catalog):
        if origin_query and origin_query not in normalize(route.origin):
            continue
        if destination_query and not (
            destination_query in normalize(route.destination)
            or destination_query in normalize(route.waypoint)
        ):
            continue
        results.append(route)

    return results


def suggest_places(catalog: Iterable[Any] | None, prefix: str | None) -> list[str]:
    """Suggest place names starting with a prefix.

    Origins, destinations and waypoints are all candidates. Matching is a
    case-insensitive prefix match, stricter than search_routes.

    Returns:
        Distinct display names, sorted ascending. Spellings differing only
        in case count as one place; the first one in catalog order is kept.
    """
    query = normalize(prefix)
    if not query:
        return []

    # normalized name -> first display spelling seen
    places: dict[str, str] = {}
    for route in iter_valid_routes(catalog):
        for place in route.places():
            key = normalize(place)
            if key.startswith(query):
                places.setdefault(key, place)

    return sorted(places.values())
