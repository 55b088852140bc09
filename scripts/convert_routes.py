#!/usr/bin/env python3
"""Convert a timetable CSV into the route catalog JSON format.

The CSV must have the columns busNo, from, to, via and time. Rows with a
missing value are dropped.

Usage:
    python scripts/convert_routes.py timetable.csv [output.json]
"""

import csv
import json
import sys
from pathlib import Path

FIELDS = ("busNo", "from", "to", "via", "time")
OUTPUT_PATH = Path(__file__).resolve().parent.parent / "src" / "bus_finder" / "data" / "routes.json"


def parse_routes(csv_text: str) -> list[dict]:
    """Parse CSV into a list of route dicts with only the fields we need."""
    reader = csv.DictReader(csv_text.splitlines())
    routes = []
    for row in reader:
        route = {field: (row.get(field) or "").strip() for field in FIELDS}
        # Only include complete routes
        if all(route.values()):
            routes.append(route)
    return routes


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    source = Path(sys.argv[1])
    output = Path(sys.argv[2]) if len(sys.argv) > 2 else OUTPUT_PATH

    print(f"Reading timetable from {source} ...")
    routes = parse_routes(source.read_text(encoding="utf-8"))
    print(f"Parsed {len(routes)} routes")

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(routes, f, ensure_ascii=False, indent=2)

    size_kb = output.stat().st_size / 1024
    print(f"Wrote {output} ({size_kb:.1f} KB)")


if __name__ == "__main__":
    main()
