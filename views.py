"""
Tabular views over a Catalogue: the list of regions, and the zones of one region.

Both views borrow the catalogue; they never copy or modify it.
"""

import logging
from typing import Callable, Iterator

from catalogue import Catalogue, ZoneRecord

log = logging.getLogger("tzcat.views")


def regions(catalogue: Catalogue) -> list[str]:
    """Distinct regions in first-seen order."""
    return list(dict.fromkeys(record.region for record in catalogue))


def _region_label(region: str) -> str:
    return region.replace("_", " ")


class RegionIndex:
    """Region list for a catalogue. Computed once; catalogues never change."""

    def __init__(self, catalogue: Catalogue):
        self._regions = regions(catalogue)

    @property
    def regions(self) -> list[str]:
        return list(self._regions)

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._regions)

    def rows(self) -> list[dict]:
        return [{"name": _region_label(r), "key": r} for r in self._regions]


class RegionFilterView:
    """
    The zones of a single region, in catalogue order.

    The empty region (the default) matches nothing, so a fresh view shows no
    entries until a region is chosen. Subscribers are called with the new
    region whenever set_region() actually changes it; re-setting the current
    value is silent.
    """

    def __init__(self, catalogue: Catalogue, region: str = ""):
        self._catalogue = catalogue
        self._region = region
        self._visible = self._filter()
        self._subscribers: list[Callable[[str], None]] = []

    def _filter(self) -> list[ZoneRecord]:
        if not self._region:
            return []
        return [r for r in self._catalogue if r.region == self._region]

    @property
    def region(self) -> str:
        return self._region

    def set_region(self, region: str) -> bool:
        """Switch to another region. Returns True if the view changed."""
        if region == self._region:
            return False
        log.debug("region %r -> %r", self._region, region)
        self._region = region
        self._visible = self._filter()
        for callback in list(self._subscribers):
            callback(region)
        return True

    def subscribe(self, callback: Callable[[str], None]):
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[str], None]):
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def visible_entries(self) -> list[ZoneRecord]:
        return list(self._visible)

    def __len__(self) -> int:
        return len(self._visible)

    def __iter__(self) -> Iterator[ZoneRecord]:
        return iter(self._visible)

    def rows(self) -> list[dict]:
        return [{"name": r.display_text(), "key": r.key, "region": r.region}
                for r in self._visible]
