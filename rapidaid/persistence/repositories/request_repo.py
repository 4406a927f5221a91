"""Repository for ambulance requests."""

from __future__ import annotations

import logging

from google.cloud.firestore import Query, async_transactional

from rapidaid.contracts.enums import AmbulanceStatus
from rapidaid.contracts.request import AmbulanceRequest
from rapidaid.persistence.errors import AmbulanceUnavailableError, DocumentNotFoundError
from rapidaid.persistence.firestore_client import get_firestore_client, server_timestamp
from rapidaid.persistence.repositories.ambulance_repo import AMBULANCES
from rapidaid.persistence.repositories.base import BaseRepository, translate_store_errors

logger = logging.getLogger(__name__)

REQUESTS = "requests"


class RequestRepository(BaseRepository[AmbulanceRequest]):
    def __init__(self):
        super().__init__(AmbulanceRequest, REQUESTS)

    async def list_by_user(self, user_id: str) -> list[AmbulanceRequest]:
        """Return a user's requests, newest first."""
        query = (
            self._collection_ref()
            .where("userId", "==", user_id)
            .order_by("createdAt", direction=Query.DESCENDING)
        )
        return await self._run_query(query)

    # ------------------------------------------------------------------
    # Atomic save: request + ambulance hand-off
    # ------------------------------------------------------------------

    async def create_with_assignment(self, request: AmbulanceRequest) -> str:
        """Create the request and flag its ambulance On Call in one transaction.

        The ambulance is re-read inside the transaction, so two concurrent
        submissions cannot both book it: Firestore retries the loser, which
        then sees the ambulance On Call. ``createdAt``/``updatedAt`` and the
        ambulance's ``lastUpdated`` are server timestamps. Returns the
        generated request ID.

        Raises:
            DocumentNotFoundError: the ambulance does not exist.
            AmbulanceUnavailableError: the ambulance is not Available.
        """
        db = get_firestore_client()

        data = request.to_firestore()
        data.pop("id", None)
        data["createdAt"] = server_timestamp()
        data["updatedAt"] = server_timestamp()
        request_ref = self._collection_ref().document()
        ambulance_ref = (
            db.collection(AMBULANCES).document(request.ambulance_id)
            if request.ambulance_id
            else None
        )

        @async_transactional
        async def book(transaction) -> None:
            if ambulance_ref is not None:
                snapshot = await ambulance_ref.get(transaction=transaction)
                if not snapshot.exists:
                    raise DocumentNotFoundError(AMBULANCES, ambulance_ref.id)
                current = (snapshot.to_dict() or {}).get("status")
                if current != AmbulanceStatus.AVAILABLE.value:
                    raise AmbulanceUnavailableError(ambulance_ref.id, current)
                transaction.update(
                    ambulance_ref,
                    {
                        "status": AmbulanceStatus.ON_CALL.value,
                        "currentRequestId": request_ref.id,
                        "lastUpdated": server_timestamp(),
                    },
                )
            transaction.set(request_ref, data)

        with translate_store_errors(REQUESTS):
            await book(db.transaction())
        logger.info(
            "Created request %s for ambulance %s", request_ref.id, request.ambulance_id
        )
        return request_ref.id
