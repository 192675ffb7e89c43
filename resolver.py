"""
Location resolver: GPS → catalogue timezone.

Nearest-zone search runs over the catalogue's anchor points. tzfpy (Rust-based,
no numpy/numba/scipy) is used for the polygon lookup in locate().
"""

import logging

from tzfpy import get_tz

from catalogue import Catalogue, ZoneRecord

log = logging.getLogger("tzcat.resolver")

# Used when the catalogue is empty, so callers always get a real zone.
FALLBACK_ZONE = ZoneRecord("America", "New_York", "US", 40.7128, -74.0060)


def timezone_at(lat: float, lon: float) -> str | None:
    """Resolve IANA timezone from GPS coordinates."""
    return get_tz(lon, lat) or None  # tzfpy takes (lng, lat)


class TimezoneResolver:
    def __init__(self, catalogue: Catalogue, fallback: ZoneRecord = FALLBACK_ZONE):
        self.catalogue = catalogue
        self.fallback = fallback
        self.last_resolved: ZoneRecord | None = None

    def resolve(self, latitude: float, longitude: float) -> ZoneRecord:
        """Nearest zone to the point, or the fallback zone if there is no data."""
        record = self.catalogue.find_nearest(latitude, longitude)
        if record is None:
            log.warning("empty catalogue, using fallback %s", self.fallback.tz_name)
            record = self.fallback
        self.last_resolved = record
        return record

    def lookup_by_name(self, region: str, zone: str) -> ZoneRecord | None:
        """Exact lookup. No fallback: use resolve() for a guaranteed answer."""
        return self.catalogue.find_exact(region, zone)

    def locate(self, latitude: float, longitude: float) -> ZoneRecord:
        """
        Zone whose boundary contains the point, if the catalogue has it.

        Otherwise the nearest anchor point wins, as in resolve().
        """
        tz = timezone_at(latitude, longitude)
        record = self.catalogue.find_tz(tz) if tz else None
        if record is None:
            log.debug("polygon zone %s not in catalogue, using nearest", tz)
            return self.resolve(latitude, longitude)
        self.last_resolved = record
        return record
