"""Route catalog loading.

The catalog is a JSON array of route objects. It is read fresh on every
call; any read or parse failure degrades to an empty catalog.
"""

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import get_settings
from .models import RouteRecord

logger = logging.getLogger(__name__)

BUNDLED_ROUTES = "routes.json"


def _read_text(path: Path | None) -> str:
    if path is not None:
        return Path(path).read_text(encoding="utf-8")
    data_files = resources.files("bus_finder.data")
    return data_files.joinpath(BUNDLED_ROUTES).read_text(encoding="utf-8")


def load_catalog(path: Path | None = None) -> list[Any]:
    """Load raw route entries.

    Args:
        path: JSON file to read. Falls back to the configured routes file,
            then to the catalog bundled with the package.

    Returns:
        The raw entries in file order, or an empty list if the source is
        missing, unreadable or not a JSON array.
    """
    if path is None:
        path = get_settings().routes_file

    try:
        raw = json.loads(_read_text(path))
    except (OSError, ValueError) as e:
        logger.error("Error loading route catalog from %s: %s", path or BUNDLED_ROUTES, e)
        return []

    if not isinstance(raw, list):
        logger.warning("Route catalog is not a JSON array, ignoring it")
        return []

    return raw


def parse_route(entry: Any) -> RouteRecord | None:
    """Return the entry as a RouteRecord, or None if it is invalid."""
    if isinstance(entry, RouteRecord):
        return entry
    if not isinstance(entry, Mapping):
        return None
    try:
        return RouteRecord.model_validate(entry)
    except ValidationError as e:
        logger.debug("Skipping invalid route entry %r: %s", entry, e.error_count())
        return None


def iter_valid_routes(catalog: Iterable[Any] | None) -> Iterator[RouteRecord]:
    """Yield the valid routes of a catalog in catalog order."""
    if not catalog or not isinstance(catalog, Iterable):
        return
    for entry in catalog:
        route = parse_route(entry)
        if route is not None:
            yield route
