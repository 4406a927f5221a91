"""Nearest-ambulance ranking around a user's position.

Candidates come from a capped Firestore query (Available ambulances, most
recently updated first); distance filtering and ranking happen here. A
true radius search would need a geospatial index on the server side.
"""

from __future__ import annotations

import asyncio
import logging

from rapidaid import config
from rapidaid.contracts.ambulance import RankedAmbulance
from rapidaid.contracts.common import Coordinate
from rapidaid.persistence.errors import RetrievalError
from rapidaid.persistence.repositories.ambulance_repo import AmbulanceRepository
from rapidaid.services.geo import distance_between

logger = logging.getLogger(__name__)


class AmbulanceLocator:
    """Rank available ambulances by distance from an origin."""

    def __init__(
        self,
        repo: AmbulanceRepository,
        timeout_s: float = config.QUERY_TIMEOUT_S,
    ):
        self._repo = repo
        self._timeout_s = timeout_s

    async def find_nearby(
        self,
        origin: Coordinate,
        radius_km: float = config.NEARBY_RADIUS_KM,
        candidate_pool_size: int = config.CANDIDATE_POOL_SIZE,
    ) -> list[RankedAmbulance]:
        """Return Available ambulances within *radius_km*, nearest first.

        At most *candidate_pool_size* ambulances are considered. Ties keep
        the store's ordering (most recently updated first).

        Raises:
            RetrievalError: store unreachable, malformed record, or the
                query did not complete within the timeout.
        """
        try:
            candidates = await asyncio.wait_for(
                self._repo.list_available(limit=candidate_pool_size),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as exc:
            raise RetrievalError(
                self._repo.collection_name,
                f"query timed out after {self._timeout_s}s",
            ) from exc

        ranked: list[RankedAmbulance] = []
        for ambulance in candidates:
            distance = distance_between(origin, ambulance.location)
            if distance > radius_km:
                continue
            ranked.append(
                RankedAmbulance.model_validate(
                    {**ambulance.model_dump(), "distance_km": distance}
                )
            )

        # list.sort is stable: equal distances keep the query order
        ranked.sort(key=lambda r: r.distance_km)
        logger.debug(
            "%d of %d candidates within %.1f km of (%.5f, %.5f)",
            len(ranked), len(candidates), radius_km, origin.latitude, origin.longitude,
        )
        return ranked
