"""Repository for ambulances."""

from __future__ import annotations

from google.cloud.firestore import Query

from rapidaid.contracts.ambulance import Ambulance
from rapidaid.contracts.enums import AmbulanceStatus
from rapidaid.persistence.repositories.base import BaseRepository

AMBULANCES = "ambulances"


class AmbulanceRepository(BaseRepository[Ambulance]):
    def __init__(self):
        super().__init__(Ambulance, AMBULANCES)

    async def list_available(self, limit: int) -> list[Ambulance]:
        """Return up to *limit* Available ambulances, most recently updated first.

        Requires a composite index on ``(status, lastUpdated desc)``.
        """
        query = (
            self._collection_ref()
            .where("status", "==", AmbulanceStatus.AVAILABLE.value)
            .order_by("lastUpdated", direction=Query.DESCENDING)
            .limit(limit)
        )
        return await self._run_query(query)
