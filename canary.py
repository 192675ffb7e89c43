#!/usr/bin/env python3
"""
tzcat canary — health checks for the shipped (or configured) zone dataset.

Run after changing the dataset or deploying a new TZCAT_DATASET_FILE.

Checks:
  1. the dataset builds into a catalogue (no duplicates, coordinates in range)
  2. every record round-trips through exact lookup
  3. well-known cities resolve to the expected zones
  4. an empty catalogue still resolves to the fallback zone
  5. the polygon resolver (tzfpy) works
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from catalogue import Catalogue  # noqa: E402
from dataset import dataset_source, default_catalogue  # noqa: E402
from resolver import FALLBACK_ZONE, TimezoneResolver, timezone_at  # noqa: E402

failures = []

CITIES = [
    # (lat, lon, expected tz)
    (48.85, 2.35, "Europe/Paris"),
    (40.71, -74.00, "America/New_York"),
    (35.68, 139.69, "Asia/Tokyo"),
    (-33.87, 151.21, "Australia/Sydney"),
]


def check(name, fn):
    try:
        result = fn()
        if result is not True:
            failures.append(f"❌ {name}: {result}")
        else:
            print(f"✅ {name}")
    except Exception as e:
        failures.append(f"❌ {name}: {e}")


def test_dataset_builds():
    catalogue = default_catalogue()
    if not len(catalogue):
        return f"no zones in dataset {dataset_source()}"
    return True


def test_round_trip():
    catalogue = default_catalogue()
    for record in catalogue:
        if catalogue.find_exact(record.region, record.zone) != record:
            return f"{record.tz_name} does not round-trip"
    return True


def test_known_cities():
    resolver = TimezoneResolver(default_catalogue())
    for lat, lon, expected in CITIES:
        got = resolver.resolve(lat, lon).tz_name
        if got != expected:
            return f"({lat}, {lon}) resolved to {got}, expected {expected}"
    return True


def test_fallback():
    record = TimezoneResolver(Catalogue.build([])).resolve(0.0, 0.0)
    assert record == FALLBACK_ZONE, f"got {record}"
    return True


def test_polygon_resolver():
    tz = timezone_at(40.7580, -73.9855)
    assert tz == "America/New_York", f"got {tz}"
    return True


def main():
    check("dataset builds", test_dataset_builds)
    check("exact lookup round-trip", test_round_trip)
    check("known cities resolve", test_known_cities)
    check("empty catalogue falls back", test_fallback)
    check("polygon resolver", test_polygon_resolver)

    if failures:
        print("🐤 tzcat canary FAILED:\n" + "\n".join(failures), file=sys.stderr)
        sys.exit(1)
    else:
        print("🐤 tzcat canary: all clear")


if __name__ == "__main__":
    main()
