"""Live tracking updates emitted for a request (calculated, never persisted)."""

from pydantic import Field

from rapidaid.contracts.ambulance import Ambulance
from rapidaid.contracts.common import FirestoreModel


class TrackingUpdate(FirestoreModel):
    """Latest known ambulance state and ETA for a tracked request.

    ``ambulance`` and ``eta_minutes`` are both None while the request has
    no ambulance assigned.
    """

    request_id: str
    ambulance: Ambulance | None = None
    distance_km: float | None = Field(default=None, ge=0)
    eta_minutes: int | None = Field(default=None, ge=0)
