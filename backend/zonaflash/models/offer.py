"""Merchant offers shown on the map. Managed elsewhere; read-only here."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Float, Text, DateTime, Index
from ..db import Base


def generate_uuid():
    return str(uuid.uuid4())


class Offer(Base):
    """Commercial listing with a point location"""
    __tablename__ = "offers"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0)
    category = Column(String, nullable=True, index=True)
    status = Column(String, nullable=True, default="active")  # active, flash, suspended
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_offers_lat_lng", "lat", "lng"),
    )
