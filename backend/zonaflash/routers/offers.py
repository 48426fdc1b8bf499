"""
Nearby Offers Router
Handles GET /api/offers - offers and captured points around a map position
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..core.errors import StoreUnavailable
from ..schemas.nearby import NearbyResult
from ..services.nearby_service import NearbyService
from ..services.spatial_store import SpatialStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["offers"])


@router.get(
    "/offers",
    response_model=List[NearbyResult],
    summary="Nearby offers and captured points",
    description="""
    Offers and hunter-captured points within `radius` meters of (`lat`, `lng`),
    nearest first, at most 50 rows. Radius defaults to 5000 when absent or 0.
    """,
)
async def get_nearby_offers(
    lat: Optional[float] = Query(None),
    lng: Optional[float] = Query(None),
    radius: Optional[float] = Query(None),
    db: Session = Depends(get_db),
):
    service = NearbyService(SpatialStore(db))
    try:
        return service.search(lat, lng, radius)
    except StoreUnavailable as e:
        logger.error(f"Nearby search unavailable at ({lat}, {lng}): {e.message}")
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.code, "detail": e.message, "results": []},
        )
