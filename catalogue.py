"""
Zone catalogue: the ordered, frozen set of named time zones.

Every record carries a geographic anchor point, so the catalogue can answer
both "which record is Europe/Paris?" and "which record is closest to here?".
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator

log = logging.getLogger("tzcat.catalogue")

EARTH_RADIUS_M = 6_371_000


class CatalogueError(ValueError):
    """Bad input data: empty or duplicate key, or out-of-range coordinate."""


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in meters between two GPS points."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    a = min(1.0, a)  # rounding can overshoot for antipodal points
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def parse_coordinates(lat, lon) -> tuple[float, float]:
    """Degrees as floats. Raises ValueError when either is non-numeric or out of range."""
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError) as e:
        raise ValueError(f"coordinates must be numbers, got ({lat!r}, {lon!r})") from e
    if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise ValueError(f"latitude {lat!r} outside [-90, 90]")
    if not (math.isfinite(lon) and -180.0 <= lon <= 180.0):
        raise ValueError(f"longitude {lon!r} outside [-180, 180]")
    return lat, lon


@dataclass(frozen=True)
class ZoneRecord:
    region: str
    zone: str
    country: str
    latitude: float
    longitude: float

    @property
    def key(self) -> str:
        return self.zone

    @property
    def tz_name(self) -> str:
        return f"{self.region}/{self.zone}"

    def display_text(self) -> str:
        """Human label: 'Argentina/Buenos_Aires' -> 'Argentina / Buenos Aires'."""
        return " / ".join(part.replace("_", " ") for part in self.zone.split("/"))

    def distance_m(self, latitude: float, longitude: float) -> float:
        return haversine_m(self.latitude, self.longitude, latitude, longitude)


def _check_record(index: int, record: ZoneRecord):
    if not record.region or not record.zone:
        raise CatalogueError(
            f"record #{index} {record.tz_name!r} ({record.country}): empty region or zone")
    lat, lon = record.latitude, record.longitude
    if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise CatalogueError(
            f"record #{index} {record.tz_name} ({record.country}): latitude {lat!r} outside [-90, 90]")
    if not (math.isfinite(lon) and -180.0 <= lon <= 180.0):
        raise CatalogueError(
            f"record #{index} {record.tz_name} ({record.country}): longitude {lon!r} outside [-180, 180]")


class Catalogue:
    """
    Ordered collection of ZoneRecords, frozen once built.

    Use Catalogue.build() rather than the constructor; build() is where the
    data is validated and everything downstream trusts it.
    """

    def __init__(self, records: tuple[ZoneRecord, ...], index: dict[tuple[str, str], ZoneRecord]):
        self._records = records
        self._index = index

    @classmethod
    def build(cls, records: Iterable[ZoneRecord]) -> "Catalogue":
        ordered: list[ZoneRecord] = []
        index: dict[tuple[str, str], ZoneRecord] = {}
        for i, record in enumerate(records):
            _check_record(i, record)
            ident = (record.region, record.zone)
            if ident in index:
                first = ordered.index(index[ident])
                raise CatalogueError(
                    f"record #{i} {record.tz_name} ({record.country}): "
                    f"duplicate of record #{first}")
            index[ident] = record
            ordered.append(record)
        log.debug("catalogue built: %d zones", len(ordered))
        return cls(tuple(ordered), index)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ZoneRecord]:
        return iter(self._records)

    def __getitem__(self, i: int) -> ZoneRecord:
        return self._records[i]

    def __repr__(self) -> str:
        return f"<Catalogue {len(self._records)} zones>"

    def find_exact(self, region: str, zone: str) -> ZoneRecord | None:
        """Look up a record by its (region, zone) key. Case-sensitive."""
        return self._index.get((region, zone))

    def find_tz(self, name: str) -> ZoneRecord | None:
        """Look up a full 'Region/Zone' identifier, e.g. 'America/Argentina/Salta'."""
        region, sep, zone = name.partition("/")
        if not sep:
            return None
        return self.find_exact(region, zone)

    def find_nearest(self, latitude: float, longitude: float) -> ZoneRecord | None:
        """
        Record closest to the point by great-circle distance.

        Returns None only when the catalogue is empty. On an exact tie the
        earlier record wins.
        """
        best = None
        best_d = math.inf
        for record in self._records:
            d = record.distance_m(latitude, longitude)
            if d < best_d:
                best, best_d = record, d
        return best
