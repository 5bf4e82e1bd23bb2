"""
Geo locator - resolves a postal address to coordinates.

The shipped locator does not call a geocoding API; it places every gym
at a random point inside a configured bounding box. Swap in another
``GeoLocator`` implementation to use a real geocoder.
"""

import random
from typing import Optional, Protocol

from gymdir.config import Settings, get_settings
from gymdir.domain.entities import Address, GeoLocation


class GeoLocator(Protocol):
    def geo_locate(self, address: Address) -> GeoLocation: ...


class RandomGeoLocator:
    """Random point inside the settings' bounding box (Hamburg by default)."""

    def __init__(self, settings: Optional[Settings] = None, rng: Optional[random.Random] = None):
        settings = settings or get_settings()
        self.min_lat = settings.geo_min_lat
        self.max_lat = settings.geo_max_lat
        self.min_lon = settings.geo_min_lon
        self.max_lon = settings.geo_max_lon
        self._rng = rng or random.Random()

    def geo_locate(self, address: Address) -> GeoLocation:
        return GeoLocation(
            latitude=self._rng.uniform(self.min_lat, self.max_lat),
            longitude=self._rng.uniform(self.min_lon, self.max_lon),
        )
