"""
Schemas for the nearby map search
"""
from pydantic import BaseModel


class NearbyResult(BaseModel):
    """One row of the merged offers + captured points result"""
    id: str
    title: str
    description: str = ""
    price: float = 0
    category: str = ""
    status: str  # display status, derived for captured points
    latitude: float
    longitude: float
    distance_meters: float
