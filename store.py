"""
Process-wide key-value store used to hand the chosen zone to later stages.

Every insert() and remove() notifies subscribers, even when the stored value
did not change. Subscribers that care must compare values themselves.
"""

import logging
from typing import Any, Callable

from catalogue import ZoneRecord

log = logging.getLogger("tzcat.store")

REGION_KEY = "locationRegion"
ZONE_KEY = "locationZone"


class GlobalStorage:
    def __init__(self):
        self._data: dict[str, Any] = {}
        self._subscribers: list[Callable[["GlobalStorage"], None]] = []

    def subscribe(self, callback: Callable[["GlobalStorage"], None]):
        self._subscribers.append(callback)

    def _changed(self):
        for callback in list(self._subscribers):
            callback(self)

    def insert(self, key: str, value: Any):
        """Set key to value, overwriting any existing value."""
        self._data[key] = value
        self._changed()

    def remove(self, key: str) -> int:
        """Drop key if present. Returns the number of keys left."""
        self._data.pop(key, None)
        self._changed()
        return len(self._data)

    def contains(self, key: str) -> bool:
        return key in self._data

    def value(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def keys(self) -> list[str]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def debug_dump(self):
        for key, value in self._data.items():
            log.debug("%s: %r", key, value)


def publish_selection(store: GlobalStorage, record: ZoneRecord):
    """Write the chosen zone's identity into the store."""
    store.insert(REGION_KEY, record.region)
    store.insert(ZONE_KEY, record.zone)
    log.info("Selected zone %s", record.tz_name)
