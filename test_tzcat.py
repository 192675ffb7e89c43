#!/usr/bin/env python3
"""
Tests for tzcat — catalogue, views, resolver and store.

  1. Catalogue construction and validation
  2. Exact and nearest lookup (poles and the antimeridian included)
  3. Region index and region filter view
  4. Resolver fallback and polygon lookup (tzfpy)
  5. GlobalStorage notification contract
"""

import math
import sys
import os
sys.path.insert(0, os.path.dirname(__file__))

import pytest

from catalogue import (
    EARTH_RADIUS_M, Catalogue, CatalogueError, ZoneRecord, haversine_m, parse_coordinates,
)
from dataset import embedded_records
from resolver import FALLBACK_ZONE, TimezoneResolver, timezone_at
from store import REGION_KEY, ZONE_KEY, GlobalStorage, publish_selection
from views import RegionFilterView, RegionIndex, regions

BERLIN = ZoneRecord("Europe", "Berlin", "DE", 52.52, 13.40)
PARIS = ZoneRecord("Europe", "Paris", "FR", 48.85, 2.35)
NEW_YORK = ZoneRecord("America", "New_York", "US", 40.71, -74.00)


def scenario():
    return Catalogue.build([BERLIN, PARIS, NEW_YORK])


def test_haversine():
    """Distance calculation."""
    # Times Square to Empire State Building (~1km)
    d = haversine_m(40.7580, -73.9855, 40.7484, -73.9857)
    assert 900 < d < 1200, f"Expected ~1km, got {d}m"

    # One degree along the equator, either side of the antimeridian
    d = haversine_m(0, 179.5, 0, -179.5)
    assert 110_000 < d < 112_000, f"Expected ~111km, got {d}m"
    print("✅ haversine_m works")


def test_haversine_antipodes():
    """Opposite points on the globe: half the circumference, no domain error."""
    half = math.pi * EARTH_RADIUS_M
    assert haversine_m(-87.5, 0.0, 87.5, 180.0) == pytest.approx(half)
    assert haversine_m(0.0, 0.0, 0.0, 180.0) == pytest.approx(half)
    assert haversine_m(90.0, 0.0, -90.0, 0.0) == pytest.approx(half)


def test_nearest_at_antipode_of_every_record():
    catalogue = Catalogue.build(embedded_records())
    for record in catalogue:
        lat = -record.latitude
        lon = record.longitude - 180.0 if record.longitude > 0 else record.longitude + 180.0
        assert catalogue.find_nearest(lat, lon) is not None, record.tz_name
    single = Catalogue.build([ZoneRecord("Europe", "A", "XX", -87.5, 0.0)])
    assert single.find_nearest(87.5, 180.0).zone == "A"


@pytest.mark.parametrize("region, zone", [("", "Paris"), ("Europe", ""), ("", "")])
def test_empty_region_or_zone_rejected(region, zone):
    with pytest.raises(CatalogueError, match="empty region or zone"):
        Catalogue.build([PARIS, ZoneRecord(region, zone, "FR", 48.85, 2.35)])


@pytest.mark.parametrize("lat, lon", [
    (90.5, 0), (0, -180.5), (float("nan"), 0), (0, float("inf")), ("north", 0), (None, 0),
])
def test_parse_coordinates_rejects(lat, lon):
    with pytest.raises(ValueError):
        parse_coordinates(lat, lon)


def test_parse_coordinates_accepts():
    assert parse_coordinates("-18.0", -179.9) == (-18.0, -179.9)
    assert parse_coordinates(90, 180) == (90.0, 180.0)


def test_duplicate_key_rejected():
    with pytest.raises(CatalogueError, match="Europe/Paris"):
        Catalogue.build([PARIS, BERLIN, ZoneRecord("Europe", "Paris", "XX", 0.0, 0.0)])


def test_same_zone_in_other_region_allowed():
    catalogue = Catalogue.build([
        ZoneRecord("Europe", "Paris", "FR", 48.85, 2.35),
        ZoneRecord("America", "Paris", "US", 33.66, -95.55),
    ])
    assert len(catalogue) == 2


@pytest.mark.parametrize("lat, lon", [
    (90.5, 0.0), (-91.0, 0.0), (0.0, 180.01), (0.0, -181.0), (float("nan"), 0.0),
])
def test_out_of_range_coordinates_rejected(lat, lon):
    with pytest.raises(CatalogueError, match="Nowhere/Land"):
        Catalogue.build([PARIS, ZoneRecord("Nowhere", "Land", "ZZ", lat, lon)])


def test_boundary_coordinates_accepted():
    catalogue = Catalogue.build([
        ZoneRecord("Pole", "North", "", 90.0, 180.0),
        ZoneRecord("Pole", "South", "", -90.0, -180.0),
    ])
    assert len(catalogue) == 2


def test_exact_lookup_round_trip():
    catalogue = Catalogue.build(embedded_records())
    for record in catalogue:
        assert catalogue.find_exact(record.region, record.zone) == record
        assert catalogue.find_tz(record.tz_name) == record
    print("✅ exact lookup round-trips")


def test_exact_lookup_misses():
    catalogue = scenario()
    assert catalogue.find_exact("Europe", "paris") is None  # case-sensitive
    assert catalogue.find_exact("America", "Paris") is None
    assert catalogue.find_exact("", "") is None
    assert catalogue.find_tz("Paris") is None


def test_catalogue_order_is_insertion_order():
    catalogue = scenario()
    assert list(catalogue) == [BERLIN, PARIS, NEW_YORK]
    assert catalogue[1] == PARIS


def test_nearest_on_sphere():
    a = ZoneRecord("T", "A", "", 0.0, 0.0)
    b = ZoneRecord("T", "B", "", 0.0, 90.0)
    c = ZoneRecord("T", "C", "", 0.0, -90.0)
    catalogue = Catalogue.build([a, b, c])
    assert catalogue.find_nearest(0, 60) == b
    assert catalogue.find_nearest(0, -60) == c
    assert catalogue.find_nearest(10, 5) == a


def test_nearest_across_antimeridian():
    a = ZoneRecord("T", "A", "", 0.0, 179.0)
    b = ZoneRecord("T", "B", "", 0.0, -179.0)
    catalogue = Catalogue.build([a, b])

    # Both 1° away from the seam; either is right, but not a 358° gap
    hit = catalogue.find_nearest(0, 180)
    assert hit in (a, b)
    assert hit.distance_m(0, 180) < 112_000

    assert catalogue.find_nearest(0, -179.5) == b
    assert catalogue.find_nearest(0, 179.6) == a


def test_nearest_prefers_great_circle_over_flat_degrees():
    # Flat degrees would pick B (19 units vs 354)
    a = ZoneRecord("T", "A", "", 0.0, -175.0)
    b = ZoneRecord("T", "B", "", 0.0, 160.0)
    assert Catalogue.build([a, b]).find_nearest(0, 179) == a

    # Near the pole, the short way is over the top
    a = ZoneRecord("T", "A", "", 89.0, 0.0)
    b = ZoneRecord("T", "B", "", 85.0, 180.0)
    assert Catalogue.build([a, b]).find_nearest(89.0, 180.0) == a


def test_nearest_tie_goes_to_first_record():
    first = ZoneRecord("T", "First", "", 10.0, 10.0)
    second = ZoneRecord("T", "Second", "", 10.0, 10.0)
    catalogue = Catalogue.build([first, second])
    for _ in range(5):
        assert catalogue.find_nearest(10.0, 10.0) is first

    catalogue = Catalogue.build([second, first])
    assert catalogue.find_nearest(10.0, 10.0) is second


def test_nearest_empty_catalogue():
    assert Catalogue.build([]).find_nearest(0, 0) is None


def test_nearest_in_embedded_dataset():
    catalogue = Catalogue.build(embedded_records())
    assert catalogue.find_nearest(-18.0, -179.9).tz_name == "Pacific/Fiji"
    assert catalogue.find_nearest(-89.9, 0.0).tz_name == "Antarctica/Vostok"
    assert catalogue.find_nearest(89.9, 0.0).tz_name == "Arctic/Longyearbyen"
    assert catalogue.find_nearest(40.7580, -73.9855).tz_name == "America/New_York"
    print("✅ nearest lookup works")


def test_display_text():
    assert PARIS.display_text() == "Paris"
    assert NEW_YORK.display_text() == "New York"
    record = ZoneRecord("America", "Argentina/Buenos_Aires", "AR", -34.6, -58.45)
    assert record.display_text() == "Argentina / Buenos Aires"
    assert record.tz_name == "America/Argentina/Buenos_Aires"
    assert record.key == "Argentina/Buenos_Aires"


def test_region_order():
    catalogue = Catalogue.build([
        ZoneRecord("R1", "z1", "", 0, 0),
        ZoneRecord("R2", "z2", "", 1, 1),
        ZoneRecord("R1", "z3", "", 2, 2),
    ])
    assert regions(catalogue) == ["R1", "R2"]
    index = RegionIndex(catalogue)
    assert list(index) == ["R1", "R2"]
    assert len(index) == 2
    assert index.rows() == [{"name": "R1", "key": "R1"}, {"name": "R2", "key": "R2"}]
    print("✅ region index works")


def test_region_index_of_embedded_dataset():
    index = RegionIndex(Catalogue.build(embedded_records()))
    assert index.regions[:4] == ["Europe", "Asia", "Antarctica", "America"]
    assert len(set(index)) == len(index)


def test_filter_view_defaults_to_nothing():
    view = RegionFilterView(scenario())
    assert view.region == ""
    assert view.visible_entries() == []
    assert len(view) == 0


def test_filter_view_notifications():
    r1a = ZoneRecord("R1", "a", "", 0, 0)
    r2 = ZoneRecord("R2", "b", "", 1, 1)
    r1c = ZoneRecord("R1", "c", "", 2, 2)
    view = RegionFilterView(Catalogue.build([r1a, r2, r1c]))
    seen = []
    view.subscribe(seen.append)

    assert view.set_region("R1") is True
    assert view.visible_entries() == [r1a, r1c]
    assert seen == ["R1"]

    # Same value: no change, no notification (unlike GlobalStorage)
    assert view.set_region("R1") is False
    assert seen == ["R1"]

    assert view.set_region("R2") is True
    assert view.visible_entries() == [r2]
    assert seen == ["R1", "R2"]

    view.unsubscribe(seen.append)
    view.set_region("R1")
    assert seen == ["R1", "R2"]
    print("✅ region filter view works")


def test_filter_view_unknown_region_is_empty():
    view = RegionFilterView(scenario(), "Atlantis")
    assert view.visible_entries() == []
    assert view.rows() == []


def test_filter_view_rows():
    view = RegionFilterView(scenario(), "America")
    assert view.rows() == [{"name": "New York", "key": "New_York", "region": "America"}]
    row = view.rows()[0]
    assert scenario().find_exact(row["region"], row["key"]) == NEW_YORK


def test_fallback_on_empty_catalogue():
    resolver = TimezoneResolver(Catalogue.build([]))
    for lat, lon in [(0, 0), (90, 180), (-45.5, -120.25)]:
        record = resolver.resolve(lat, lon)
        assert record == FALLBACK_ZONE
    assert FALLBACK_ZONE.tz_name == "America/New_York"
    assert resolver.last_resolved == FALLBACK_ZONE


def test_lookup_by_name_has_no_fallback():
    resolver = TimezoneResolver(Catalogue.build([]))
    assert resolver.lookup_by_name("America", "New_York") is None


def test_end_to_end_scenario():
    catalogue = scenario()
    resolver = TimezoneResolver(catalogue)
    assert resolver.resolve(48.0, 2.0) == PARIS
    assert resolver.last_resolved == PARIS
    assert resolver.lookup_by_name("Europe", "Berlin") == BERLIN
    assert regions(catalogue) == ["Europe", "America"]
    assert RegionFilterView(catalogue, "Europe").visible_entries() == [BERLIN, PARIS]
    print("✅ end-to-end scenario works")


def test_timezone_resolution():
    """GPS → timezone mapping."""
    assert timezone_at(40.7580, -73.9855) == "America/New_York"
    assert timezone_at(52.2053, 0.1218) == "Europe/London"
    assert timezone_at(35.6762, 139.6503) == "Asia/Tokyo"
    print("✅ timezone_at works")


def test_locate_prefers_containing_zone():
    resolver = TimezoneResolver(Catalogue.build(embedded_records()))
    # El Paso keeps mountain time; the closest anchor is Chihuahua
    assert resolver.resolve(31.76, -106.44).tz_name == "America/Chihuahua"
    assert resolver.locate(31.76, -106.44).tz_name == "America/Denver"


def test_locate_falls_back_to_nearest():
    resolver = TimezoneResolver(scenario())
    # Lyon is in Europe/Paris, which this catalogue has
    assert resolver.locate(45.76, 4.84) == PARIS
    # Boston is in America/New_York, which this one lacks
    catalogue = Catalogue.build([BERLIN, PARIS])
    assert TimezoneResolver(catalogue).locate(42.36, -71.06) == PARIS


def test_storage_always_notifies():
    store = GlobalStorage()
    calls = []
    store.subscribe(calls.append)

    store.insert("k", 1)
    store.insert("k", 1)
    assert store.value("k") == 1
    assert len(calls) == 2

    assert store.remove("missing") == 1
    assert len(calls) == 3
    assert store.remove("k") == 0
    assert not store.contains("k")
    assert len(calls) == 4


def test_publish_selection():
    store = GlobalStorage()
    calls = []
    store.subscribe(calls.append)
    publish_selection(store, PARIS)
    assert store.value(REGION_KEY) == "Europe"
    assert store.value(ZONE_KEY) == "Paris"
    assert sorted(store.keys()) == [REGION_KEY, ZONE_KEY]
    assert len(calls) == 2

    # Publishing the same zone again still notifies
    publish_selection(store, PARIS)
    assert len(calls) == 4


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-q"]))
