"""
Nearby Service - merged map search over offers and captured points.

Each source has its own normalizer that turns a stored row into a
NearbyResult, so the display-status rule lives next to the row type it
applies to. The search merges both distance-sorted sources and truncates.
"""
import heapq
import logging
from itertools import islice
from typing import Callable, Dict, List, Optional

from ..core.config import settings
from ..core.errors import InvalidQuery
from ..models.offer import Offer
from ..models.hunt import CapturedPoint, STATION_CATEGORIES
from ..schemas.nearby import NearbyResult
from .geo import is_valid_coordinate
from .spatial_store import GeoPoint, SpatialSource, SpatialStore

logger = logging.getLogger(__name__)


def captured_point_display_status(category: Optional[str], stored_status: Optional[str]) -> str:
    """
    Status shown on the map for a captured point.

    Stations are always shadow points; a point with no stored status
    counts as approved; anything else is shown as stored.
    """
    if category in STATION_CATEGORIES:
        return "shadow"
    if not stored_status:
        return "approved"
    return stored_status


def offer_to_result(offer: Offer, distance_m: float) -> NearbyResult:
    return NearbyResult(
        id=str(offer.id),
        title=offer.title or "",
        description=offer.description or "",
        price=offer.price or 0,
        category=offer.category or "",
        status=offer.status or "",
        latitude=offer.lat,
        longitude=offer.lng,
        distance_meters=distance_m,
    )


def captured_point_to_result(point: CapturedPoint, distance_m: float) -> NearbyResult:
    return NearbyResult(
        id=str(point.id),
        title=point.shop_name or "",
        description="",
        price=0,
        category=point.category or "",
        status=captured_point_display_status(point.category, point.status),
        latitude=point.latitude,
        longitude=point.longitude,
        distance_meters=distance_m,
    )


NORMALIZERS: Dict[SpatialSource, Callable[..., NearbyResult]] = {
    SpatialSource.OFFERS: offer_to_result,
    SpatialSource.LOCATIONS: captured_point_to_result,
}


class NearbyService:
    """Distance-ranked search across every map source."""

    def __init__(
        self,
        store: SpatialStore,
        *,
        limit: Optional[int] = None,
        default_radius_m: Optional[float] = None,
        max_radius_m: Optional[float] = None,
    ):
        self.store = store
        self.limit = limit if limit is not None else settings.NEARBY_RESULT_LIMIT
        self.default_radius_m = default_radius_m if default_radius_m is not None else settings.NEARBY_DEFAULT_RADIUS_M
        self.max_radius_m = max_radius_m if max_radius_m is not None else settings.NEARBY_MAX_RADIUS_M

    def resolve_radius(self, radius_m: Optional[float]) -> float:
        """Absent or zero means the default; negative is rejected; large values are clamped."""
        if not radius_m:
            return self.default_radius_m
        if radius_m < 0:
            raise InvalidQuery("radius must be positive")
        return min(radius_m, self.max_radius_m)

    def search(
        self,
        lat: Optional[float],
        lng: Optional[float],
        radius_m: Optional[float] = None,
    ) -> List[NearbyResult]:
        """
        Offers and captured points within the radius, nearest first, at most
        ``limit`` rows. Nothing is deduplicated across sources.
        """
        if lat is None or lng is None:
            raise InvalidQuery("Faltan lat/lng")
        if not is_valid_coordinate(lat, lng):
            raise InvalidQuery("lat/lng out of range")

        radius = self.resolve_radius(radius_m)
        point = GeoPoint(lat=lat, lng=lng)

        streams = []
        for source, normalize in NORMALIZERS.items():
            matches = self.store.find_within_radius(point, radius, source)
            streams.append([normalize(row, distance) for row, distance in matches])

        merged = heapq.merge(*streams, key=lambda result: result.distance_meters)
        results = list(islice(merged, self.limit))

        logger.debug(
            f"Nearby search at ({lat}, {lng}) r={radius}m: "
            f"{sum(len(s) for s in streams)} matches, returning {len(results)}"
        )
        return results
