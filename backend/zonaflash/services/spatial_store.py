"""
Spatial Store - point storage and radius queries over the relational DB.

Offers and captured points are stored as plain lat/lng floats. A radius
query is a bounding-box prefilter in SQL followed by an exact haversine
check, so results are identical on Postgres and SQLite.

Writes go through ``transaction()`` so that a submission is committed
as one unit or rolled back entirely.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import ZonaFlashError, StoreUnavailable, PersistenceFailure
from ..models.offer import Offer
from ..models.hunt import CapturedPoint
from .geo import haversine_m, bounding_box

logger = logging.getLogger(__name__)


class SpatialSource(str, Enum):
    OFFERS = "offers"
    LOCATIONS = "locations"


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


class SpatialStore:
    """Radius queries and transactional point writes on one DB session."""

    def __init__(self, db: Session):
        self.db = db

    def find_within_radius(
        self,
        point: GeoPoint,
        radius_m: float,
        source: SpatialSource,
        *,
        category: Optional[str] = None,
    ) -> List[Tuple[Any, float]]:
        """
        Rows of ``source`` within radius_m of point, as (row, distance_m)
        pairs sorted by ascending distance.

        Captured points are matched on their stored geometry; a row whose
        geometry was never set is not returned.
        """
        min_lat, max_lat, min_lng, max_lng = bounding_box(point.lat, point.lng, radius_m)

        if source == SpatialSource.OFFERS:
            model, lat_col, lng_col = Offer, Offer.lat, Offer.lng
        else:
            model, lat_col, lng_col = CapturedPoint, CapturedPoint.geom_lat, CapturedPoint.geom_lng

        try:
            query = self.db.query(model).filter(
                lat_col.isnot(None),
                lng_col.isnot(None),
                lat_col.between(min_lat, max_lat),
                lng_col.between(min_lng, max_lng),
            )
            if category is not None:
                query = query.filter(model.category == category)
            rows = query.all()
        except SQLAlchemyError as e:
            logger.error(f"Radius query on {source.value} failed: {e}", exc_info=True)
            raise StoreUnavailable(f"Could not query {source.value}") from e

        matches = []
        for row in rows:
            if source == SpatialSource.OFFERS:
                row_lat, row_lng = row.lat, row.lng
            else:
                row_lat, row_lng = row.geom_lat, row.geom_lng
            distance = haversine_m(point.lat, point.lng, row_lat, row_lng)
            if distance <= radius_m:
                matches.append((row, distance))

        matches.sort(key=lambda match: match[1])
        return matches

    def insert(self, record: Any) -> str:
        """Stage a new row and return its generated id."""
        self.db.add(record)
        self.db.flush()
        return record.id

    def set_geometry(self, point_id: str, point: GeoPoint) -> None:
        """Write the queryable geometry of a captured point."""
        result = self.db.execute(
            text("""
                UPDATE locations
                SET geom_lat = :lat, geom_lng = :lng
                WHERE id = :id
            """),
            {"lat": point.lat, "lng": point.lng, "id": point_id},
        )
        if result.rowcount != 1:
            raise PersistenceFailure(f"Error updating geography for location {point_id}")

    def lock_category(self, category: str) -> None:
        """
        Serialize writers of the same category until the transaction ends.

        Uses a transaction-scoped advisory lock on Postgres; other backends
        serialize writes on their own (SQLite) and skip this.
        """
        if self.db.get_bind().dialect.name != "postgresql":
            return
        self.db.execute(
            text("SELECT pg_advisory_xact_lock(hashtext(:key))"),
            {"key": f"locations:{category}"},
        )

    @contextmanager
    def transaction(self) -> Iterator["SpatialStore"]:
        """
        Commit everything staged in the block, or roll all of it back.

        Database errors surface as PersistenceFailure; domain errors raised
        inside the block propagate unchanged after the rollback.
        """
        try:
            yield self
            self.db.commit()
        except ZonaFlashError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Transaction rolled back: {e}", exc_info=True)
            raise PersistenceFailure("Submission could not be persisted") from e
        except Exception:
            self.db.rollback()
            raise
