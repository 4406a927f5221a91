"""Tests for AmbulanceRequest, RequestDraft and TrackingUpdate contracts."""

import pytest
from pydantic import ValidationError

from rapidaid.contracts.enums import EmergencyType, RequestStatus
from rapidaid.contracts.request import AmbulanceRequest, PatientInfo, RequestDraft
from rapidaid.contracts.tracking import TrackingUpdate

DRAFT = {
    "ambulanceId": "amb-1",
    "pickupLocation": {"latitude": 25.0961, "longitude": 85.3131},
    "pickupAddress": "Gandhi Maidan, Patna",
    "destination": "PMCH",
    "patientInfo": {"name": "Asha Devi", "age": 64, "gender": "Female"},
}


class TestPatientInfo:
    def test_default_emergency_type(self):
        info = PatientInfo(name="A", age=30, gender="Male")
        assert info.emergency_type == EmergencyType.MEDICAL

    def test_negative_age(self):
        with pytest.raises(ValidationError):
            PatientInfo(name="A", age=-1, gender="Male")

    def test_empty_name(self):
        with pytest.raises(ValidationError):
            PatientInfo(name="", age=30, gender="Male")


class TestAmbulanceRequest:
    def test_from_draft(self):
        draft = RequestDraft.model_validate(DRAFT)
        request = AmbulanceRequest.from_draft("user-1", draft)
        assert request.user_id == "user-1"
        assert request.ambulance_id == "amb-1"
        assert request.status == RequestStatus.PENDING
        assert request.created_at is None

    def test_serialization(self):
        request = AmbulanceRequest.from_draft("user-1", RequestDraft.model_validate(DRAFT))
        data = request.to_firestore()
        assert data["userId"] == "user-1"
        assert data["pickupLocation"] == {"latitude": 25.0961, "longitude": 85.3131}
        assert data["patientInfo"]["emergencyType"] == "Medical"
        assert "createdAt" not in data

        restored = AmbulanceRequest.from_firestore(data)
        assert restored.patient_info.name == "Asha Devi"

    def test_unassigned_request(self):
        data = {k: v for k, v in DRAFT.items() if k != "ambulanceId"}
        request = AmbulanceRequest.from_firestore({**data, "userId": "u"})
        assert request.ambulance_id is None

    def test_draft_requires_fields(self):
        with pytest.raises(ValidationError):
            RequestDraft.model_validate({k: v for k, v in DRAFT.items() if k != "destination"})


class TestTrackingUpdate:
    def test_unassigned(self):
        update = TrackingUpdate(request_id="r1")
        dumped = update.model_dump(mode="json", by_alias=True)
        assert dumped == {
            "requestId": "r1",
            "ambulance": None,
            "distanceKm": None,
            "etaMinutes": None,
        }
