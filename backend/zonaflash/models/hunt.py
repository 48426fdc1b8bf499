"""
Captured points ("locations"): businesses submitted by hunters.

The submitted coordinates are kept in latitude/longitude. Radius queries
only look at geom_lat/geom_lng, which are written by a separate geometry
update inside the submission transaction.
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Float, Boolean, DateTime, Index
from ..db import Base


def generate_uuid():
    return str(uuid.uuid4())


# Categories a hunter may submit
ALLOWED_CATEGORIES = frozenset({
    "station_moto",
    "station_car",
    "mechanic",
    "parts",
    "tires",
    "oil",
    "wash",
    "tow",
    "food",
    "fuel_dollar",
})

# Stations are always displayed as shadow points
STATION_CATEGORIES = frozenset({"station_moto", "station_car"})


class CapturedPoint(Base):
    """User-submitted point of interest"""
    __tablename__ = "locations"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String, nullable=False, index=True)
    vehicle_type = Column(String, nullable=True)  # moto, car
    shop_name = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)
    photo_url = Column(String, nullable=False, default="")
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    status = Column(String, nullable=True, default="pending")  # pending, approved, rejected
    is_shadow = Column(Boolean, nullable=False, default=False)
    activation_status = Column(String, nullable=True)
    asset_type = Column(String, nullable=True)

    # Queryable geometry (NULL until set_geometry runs)
    geom_lat = Column(Float, nullable=True)
    geom_lng = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_locations_category_geom", "category", "geom_lat", "geom_lng"),
    )
