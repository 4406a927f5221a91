"""RapidAid data contracts: Pydantic v2 models for ambulance requests.

Data authority
--------------

**Firestore** (source of truth):
- ``Ambulance``: ``/ambulances/{id}``, written by dispatch / driver apps
- ``AmbulanceRequest``: ``/requests/{id}``, created by users, advanced by dispatch

Calculated (never persisted)
----------------------------
- ``RankedAmbulance``: ambulance + distance from a query origin
- ``TrackingUpdate``: live ambulance state + ETA for a request
"""

from rapidaid.contracts.enums import (
    AmbulanceStatus,
    EmergencyType,
    Gender,
    RequestStatus,
)
from rapidaid.contracts.common import Coordinate, FirestoreModel
from rapidaid.contracts.ambulance import Ambulance, RankedAmbulance
from rapidaid.contracts.request import AmbulanceRequest, PatientInfo, RequestDraft
from rapidaid.contracts.tracking import TrackingUpdate

__all__ = [
    # Enums
    "AmbulanceStatus",
    "EmergencyType",
    "Gender",
    "RequestStatus",
    # Common
    "Coordinate",
    "FirestoreModel",
    # Domain models
    "Ambulance",
    "RankedAmbulance",
    "AmbulanceRequest",
    "PatientInfo",
    "RequestDraft",
    "TrackingUpdate",
]
