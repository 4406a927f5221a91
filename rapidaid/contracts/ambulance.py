"""Ambulance vehicles and their distance-ranked projection.

Stored at: ``/ambulances/{ambulance_id}``
"""

from datetime import datetime

from pydantic import Field

from rapidaid.contracts.common import Coordinate, FirestoreModel
from rapidaid.contracts.enums import AmbulanceStatus


class Ambulance(FirestoreModel):
    """A vehicle as last reported by the dispatch / driver-side systems.

    RapidAid only reads ambulances, except for flagging one ``On Call`` when
    a request is submitted against it.
    """

    id: str | None = None
    location: Coordinate
    status: AmbulanceStatus
    vehicle_number: str = Field(..., min_length=1, description="e.g. BR01-AB-1234")
    vehicle_type: str | None = Field(
        default=None, description="e.g. 'Basic Life Support'"
    )
    driver_name: str
    driver_phone: str
    current_request_id: str | None = None
    last_updated: datetime | None = None


class RankedAmbulance(Ambulance):
    """An ambulance annotated with its distance from a query origin.

    Calculated per query, never persisted. Rank is the position in the
    distance-ascending list returned by the locator.
    """

    distance_km: float = Field(..., ge=0)
