"""Tests for Coordinate, Ambulance and RankedAmbulance contracts."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from rapidaid.contracts.ambulance import Ambulance, RankedAmbulance
from rapidaid.contracts.common import Coordinate
from rapidaid.contracts.enums import AmbulanceStatus


class _GeoPointLike:
    """Stands in for google.cloud.firestore.GeoPoint."""

    def __init__(self, latitude, longitude):
        self.latitude = latitude
        self.longitude = longitude


FIRESTORE_DOC = {
    "id": "amb-1",
    "location": {"latitude": 25.0961, "longitude": 85.3131},
    "status": "Available",
    "vehicleNumber": "BR01-AB-1234",
    "vehicleType": "Advanced Life Support",
    "driverName": "Ravi Kumar",
    "driverPhone": "+91-9000000000",
    "lastUpdated": "2026-03-01T09:00:00Z",
}


class TestCoordinate:
    def test_valid(self):
        c = Coordinate(latitude=-90, longitude=180)
        assert c.latitude == -90

    @pytest.mark.parametrize(
        "lat, lon", [(90.1, 0), (-90.1, 0), (0, 180.1), (0, -180.1)]
    )
    def test_out_of_range(self, lat, lon):
        with pytest.raises(ValidationError):
            Coordinate(latitude=lat, longitude=lon)

    def test_frozen(self):
        c = Coordinate(latitude=1, longitude=2)
        with pytest.raises(ValidationError):
            c.latitude = 3

    def test_from_geopoint(self):
        c = Coordinate.model_validate(_GeoPointLike(25.0961, 85.3131))
        assert c == Coordinate(latitude=25.0961, longitude=85.3131)


class TestAmbulance:
    def test_from_firestore(self):
        amb = Ambulance.from_firestore(FIRESTORE_DOC)
        assert amb.vehicle_number == "BR01-AB-1234"
        assert amb.status == AmbulanceStatus.AVAILABLE
        assert amb.location.longitude == 85.3131
        assert amb.last_updated == datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

    def test_geopoint_location(self):
        doc = {**FIRESTORE_DOC, "location": _GeoPointLike(25.1, 85.2)}
        amb = Ambulance.from_firestore(doc)
        assert amb.location.latitude == 25.1

    def test_to_firestore_uses_camel_case(self):
        data = Ambulance.from_firestore(FIRESTORE_DOC).to_firestore()
        assert data["driverPhone"] == "+91-9000000000"
        assert data["status"] == "Available"
        assert "currentRequestId" not in data

    def test_missing_location(self):
        doc = {k: v for k, v in FIRESTORE_DOC.items() if k != "location"}
        with pytest.raises(ValidationError):
            Ambulance.from_firestore(doc)

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            Ambulance.from_firestore({**FIRESTORE_DOC, "status": "Parked"})


class TestRankedAmbulance:
    def test_distance_serialized(self):
        ranked = RankedAmbulance.model_validate({**FIRESTORE_DOC, "distance_km": 2.5})
        assert ranked.to_firestore()["distanceKm"] == 2.5

    def test_negative_distance_rejected(self):
        with pytest.raises(ValidationError):
            RankedAmbulance.model_validate({**FIRESTORE_DOC, "distance_km": -1})
