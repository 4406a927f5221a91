"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Depends

from rapidaid.api.auth import UserClaims, verify_firebase_token, verify_websocket_token
from rapidaid.persistence.repositories.ambulance_repo import AmbulanceRepository
from rapidaid.persistence.repositories.request_repo import RequestRepository
from rapidaid.services.ambulance_locator import AmbulanceLocator
from rapidaid.services.request_tracker import RequestTracker


# ------------------------------------------------------------------
# Current user
# ------------------------------------------------------------------


def get_current_user(
    claims: UserClaims = Depends(verify_firebase_token),
) -> str:
    """Return the authenticated user ID."""
    return claims.uid


def get_websocket_user(
    claims: UserClaims = Depends(verify_websocket_token),
) -> str:
    return claims.uid


# ------------------------------------------------------------------
# Repositories are stateless; one instance per request
# ------------------------------------------------------------------


def get_ambulance_repo() -> AmbulanceRepository:
    return AmbulanceRepository()


def get_request_repo() -> RequestRepository:
    return RequestRepository()


# ------------------------------------------------------------------
# Services
# ------------------------------------------------------------------


def get_ambulance_locator(
    repo: AmbulanceRepository = Depends(get_ambulance_repo),
) -> AmbulanceLocator:
    return AmbulanceLocator(repo)


def get_request_tracker(
    requests: RequestRepository = Depends(get_request_repo),
    ambulances: AmbulanceRepository = Depends(get_ambulance_repo),
) -> RequestTracker:
    return RequestTracker(requests, ambulances)
