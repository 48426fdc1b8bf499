"""
Tests for the merged nearby search over offers and captured points.
"""
import pytest
from unittest.mock import patch
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from zonaflash.core.errors import InvalidQuery, StoreUnavailable
from zonaflash.services.nearby_service import NearbyService, captured_point_display_status
from zonaflash.services.spatial_store import SpatialStore
from tests.helpers.hunt_helpers import (
    BASE_LAT,
    BASE_LNG,
    create_captured_point,
    create_offer,
    offset,
)


@pytest.fixture
def service(db: Session):
    return NearbyService(SpatialStore(db), limit=50, default_radius_m=5000, max_radius_m=50000)


class TestDisplayStatus:
    @pytest.mark.parametrize("category", ["station_moto", "station_car"])
    @pytest.mark.parametrize("stored", [None, "", "pending", "approved", "rejected"])
    def test_station_is_always_shadow(self, category, stored):
        assert captured_point_display_status(category, stored) == "shadow"

    @pytest.mark.parametrize("stored", [None, ""])
    def test_missing_status_shows_approved(self, stored):
        assert captured_point_display_status("food", stored) == "approved"

    @pytest.mark.parametrize("stored", ["pending", "approved", "rejected"])
    def test_stored_status_passes_through(self, stored):
        assert captured_point_display_status("mechanic", stored) == stored


class TestNearbySearch:
    def test_empty_sources_give_empty_result(self, service):
        assert service.search(BASE_LAT, BASE_LNG, 1000) == []

    def test_merges_both_sources_by_distance(self, db, service):
        far_offer = create_offer(db, *offset(BASE_LAT, BASE_LNG, north_m=300), title="Far offer")
        near_point = create_captured_point(db, *offset(BASE_LAT, BASE_LNG, east_m=50), shop_name="Near shop")
        mid_offer = create_offer(db, *offset(BASE_LAT, BASE_LNG, north_m=-150), title="Mid offer")
        mid_point = create_captured_point(db, *offset(BASE_LAT, BASE_LNG, east_m=200), shop_name="Mid shop")

        results = service.search(BASE_LAT, BASE_LNG, 1000)

        assert [r.id for r in results] == [near_point.id, mid_offer.id, mid_point.id, far_offer.id]
        distances = [r.distance_meters for r in results]
        assert distances == sorted(distances)

    def test_results_are_within_radius(self, db, service):
        create_offer(db, *offset(BASE_LAT, BASE_LNG, north_m=90))
        create_offer(db, *offset(BASE_LAT, BASE_LNG, north_m=130))
        create_captured_point(db, *offset(BASE_LAT, BASE_LNG, east_m=-95))
        create_captured_point(db, *offset(BASE_LAT, BASE_LNG, east_m=-140))

        results = service.search(BASE_LAT, BASE_LNG, 100)

        assert len(results) == 2
        assert all(r.distance_meters <= 100 for r in results)

    def test_offer_projection(self, db, service):
        offer = create_offer(db, title="Llantas", status="flash", category="tires", price=120000)

        [result] = service.search(BASE_LAT, BASE_LNG, 100)

        assert result.id == offer.id
        assert result.title == "Llantas"
        assert result.description == "Promo en lubricentro"
        assert result.price == 120000
        assert result.category == "tires"
        assert result.status == "flash"
        assert result.latitude == pytest.approx(BASE_LAT)
        assert result.longitude == pytest.approx(BASE_LNG)
        assert result.distance_meters == pytest.approx(0.0)

    def test_captured_point_projection(self, db, service):
        point = create_captured_point(db, category="station_moto", status="approved", shop_name="Bomba Terpel")

        [result] = service.search(BASE_LAT, BASE_LNG, 100)

        assert result.id == point.id
        assert result.title == "Bomba Terpel"
        assert result.description == ""
        assert result.price == 0
        assert result.status == "shadow"

    def test_no_dedup_across_sources(self, db, service):
        create_offer(db)
        create_captured_point(db)

        results = service.search(BASE_LAT, BASE_LNG, 10)

        assert len(results) == 2

    def test_truncates_to_limit(self, db, service):
        for i in range(30):
            create_offer(db, *offset(BASE_LAT, BASE_LNG, north_m=10 * i), title=f"offer {i}")
            create_captured_point(db, *offset(BASE_LAT, BASE_LNG, east_m=10 * i + 5), shop_name=f"shop {i}")

        results = service.search(BASE_LAT, BASE_LNG, 5000)

        assert len(results) == 50
        distances = [r.distance_meters for r in results]
        assert distances == sorted(distances)
        # The 10 dropped rows are the farthest ones
        assert max(distances) < 250

    def test_point_without_geometry_is_invisible(self, db, service):
        create_captured_point(db, with_geometry=False)

        assert service.search(BASE_LAT, BASE_LNG, 100) == []

    @pytest.mark.parametrize("lat,lng", [(None, BASE_LNG), (BASE_LAT, None), (None, None)])
    def test_missing_coordinates_rejected(self, service, lat, lng):
        with pytest.raises(InvalidQuery):
            service.search(lat, lng, 100)

    def test_out_of_range_coordinates_rejected(self, service):
        with pytest.raises(InvalidQuery):
            service.search(95.0, BASE_LNG, 100)

    def test_negative_radius_rejected(self, service):
        with pytest.raises(InvalidQuery):
            service.search(BASE_LAT, BASE_LNG, -5)

    @pytest.mark.parametrize("radius", [None, 0])
    def test_absent_or_zero_radius_uses_default(self, db, service, radius):
        create_offer(db, *offset(BASE_LAT, BASE_LNG, north_m=4500))
        create_offer(db, *offset(BASE_LAT, BASE_LNG, north_m=5500))

        results = service.search(BASE_LAT, BASE_LNG, radius)

        assert len(results) == 1

    def test_radius_is_clamped(self, service):
        assert service.resolve_radius(10_000_000) == 50000

    def test_store_error_surfaces_as_store_unavailable(self, db, service):
        error = OperationalError("SELECT", {}, Exception("connection refused"))
        with patch.object(db, "query", side_effect=error):
            with pytest.raises(StoreUnavailable):
                service.search(BASE_LAT, BASE_LNG, 100)
