"""Ambulance lookup endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from rapidaid import config
from rapidaid.api.deps import get_ambulance_locator, get_ambulance_repo, get_current_user
from rapidaid.contracts.common import Coordinate
from rapidaid.persistence.errors import RetrievalError
from rapidaid.persistence.repositories.ambulance_repo import AmbulanceRepository
from rapidaid.services.ambulance_locator import AmbulanceLocator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ambulances", tags=["ambulances"])


@router.get("/nearby")
async def nearby_ambulances(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius_km: float = Query(config.NEARBY_RADIUS_KM, gt=0),
    limit: int = Query(config.CANDIDATE_POOL_SIZE, ge=1, le=100),
    user_id: str = Depends(get_current_user),
    locator: AmbulanceLocator = Depends(get_ambulance_locator),
) -> list[dict]:
    """Available ambulances within ``radius_km``, nearest first."""
    origin = Coordinate(latitude=latitude, longitude=longitude)
    try:
        ranked = await locator.find_nearby(
            origin, radius_km=radius_km, candidate_pool_size=limit
        )
    except RetrievalError as exc:
        logger.warning("Nearby lookup failed: %s", exc)
        raise HTTPException(status_code=503, detail="Failed to load ambulances") from exc
    return [a.to_firestore() for a in ranked]


@router.get("/{ambulance_id}")
async def get_ambulance(
    ambulance_id: str,
    user_id: str = Depends(get_current_user),
    repo: AmbulanceRepository = Depends(get_ambulance_repo),
) -> dict:
    try:
        ambulance = await repo.get(ambulance_id)
    except RetrievalError as exc:
        raise HTTPException(status_code=503, detail="Failed to load ambulance") from exc
    if ambulance is None:
        raise HTTPException(status_code=404, detail="Ambulance not found")
    return ambulance.to_firestore()
