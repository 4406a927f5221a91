"""Ambulance requests submitted by users.

Stored at: ``/requests/{request_id}``
"""

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from rapidaid.contracts.common import Coordinate, FirestoreModel
from rapidaid.contracts.enums import EmergencyType, Gender, RequestStatus


class PatientInfo(FirestoreModel):
    """Who needs the ambulance and why."""

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=150)
    gender: Gender
    emergency_type: EmergencyType = EmergencyType.MEDICAL
    notes: str | None = None


class RequestDraft(FirestoreModel):
    """The user-supplied part of a request, as posted by the client."""

    ambulance_id: str = Field(..., min_length=1)
    pickup_location: Coordinate
    pickup_address: str = Field(..., min_length=1, description="Free-text pickup address")
    destination: str = Field(..., min_length=1, description="Hospital or free-text destination")
    patient_info: PatientInfo
    contact_number: str | None = None


class AmbulanceRequest(FirestoreModel):
    """One ambulance solicitation.

    Created once by the requesting user; every later status transition is
    made by the external dispatch process. ``created_at`` and
    ``updated_at`` are assigned by the Firestore server on creation.
    """

    id: str | None = None
    user_id: str = Field(..., min_length=1)
    ambulance_id: str | None = Field(
        default=None, description="Assigned ambulance, None until accepted"
    )
    pickup_location: Coordinate
    pickup_address: str | None = None
    destination: str
    patient_info: PatientInfo
    contact_number: str | None = None
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_draft(cls, user_id: str, draft: RequestDraft) -> "AmbulanceRequest":
        return cls(
            user_id=user_id,
            ambulance_id=draft.ambulance_id,
            pickup_location=draft.pickup_location,
            pickup_address=draft.pickup_address,
            destination=draft.destination,
            patient_info=draft.patient_info,
            contact_number=draft.contact_number,
        )

    @model_validator(mode="before")
    @classmethod
    def _from_web_client_layout(cls, data: Any) -> Any:
        """Read documents written directly by the web client.

        It stores the free-text address under ``pickupLocation`` and the
        pickup coordinate as a ``location`` GeoPoint.
        """
        if isinstance(data, dict) and isinstance(data.get("pickupLocation"), str):
            data = dict(data)
            address = data.pop("pickupLocation")
            data.setdefault("pickupAddress", address)
            if "location" in data:
                data["pickupLocation"] = data.pop("location")
        return data
