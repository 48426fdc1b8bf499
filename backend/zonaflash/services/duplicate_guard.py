"""
Duplicate Guard - rejects a capture that repeats an existing one.

Only points of the same category count, so different kinds of business
may share a location.
"""
from typing import Optional

from ..core.config import settings
from .spatial_store import GeoPoint, SpatialSource, SpatialStore


class DuplicateGuard:
    def __init__(self, store: SpatialStore, radius_m: Optional[float] = None):
        self.store = store
        self.radius_m = radius_m if radius_m is not None else settings.DUPLICATE_RADIUS_M

    def exists(self, category: str, point: GeoPoint) -> bool:
        """True if a captured point of this category lies within the exclusion radius."""
        matches = self.store.find_within_radius(
            point, self.radius_m, SpatialSource.LOCATIONS, category=category
        )
        return len(matches) > 0
