"""Live ambulance position and ETA for a submitted request.

``RequestTracker.track`` is an async generator: it resolves the request,
then follows the assigned ambulance's Firestore document and yields a
:class:`TrackingUpdate` for every snapshot. Closing the generator (or
cancelling the task iterating it) unsubscribes the underlying listener.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from typing import Any, AsyncIterator, Callable

from rapidaid import config
from rapidaid.contracts.ambulance import Ambulance
from rapidaid.contracts.request import AmbulanceRequest
from rapidaid.contracts.tracking import TrackingUpdate
from rapidaid.persistence.errors import DocumentNotFoundError, RetrievalError
from rapidaid.persistence.listeners import DocumentListener
from rapidaid.persistence.repositories.ambulance_repo import AmbulanceRepository
from rapidaid.persistence.repositories.request_repo import RequestRepository
from rapidaid.services.geo import AVERAGE_SPEED_KMH, distance_between, estimate_eta_minutes

logger = logging.getLogger(__name__)

ListenerFactory = Callable[[str, str], Any]

DEFAULT_BACKOFF_BASE_S = 0.5
DEFAULT_BACKOFF_CAP_S = 8.0


class RequestTracker:
    """Stream ``(ambulance, eta)`` updates for one request at a time.

    Args:
        requests: Repository used to resolve the request.
        ambulances: Repository whose contract hydrates ambulance snapshots.
        listen: Factory ``(collection, doc_id) -> async context manager``
            yielding document snapshots. Defaults to
            :class:`DocumentListener`.
        max_reconnect_attempts: Consecutive listener failures tolerated
            before the :class:`RetrievalError` reaches the caller.
    """

    def __init__(
        self,
        requests: RequestRepository,
        ambulances: AmbulanceRepository,
        *,
        listen: ListenerFactory = DocumentListener,
        average_speed_kmh: float = AVERAGE_SPEED_KMH,
        max_reconnect_attempts: int = config.RECONNECT_ATTEMPTS,
        backoff_base_s: float = DEFAULT_BACKOFF_BASE_S,
        backoff_cap_s: float = DEFAULT_BACKOFF_CAP_S,
    ):
        self._requests = requests
        self._ambulances = ambulances
        self._listen = listen
        self._average_speed_kmh = average_speed_kmh
        self._max_reconnect_attempts = max_reconnect_attempts
        self._backoff_base_s = backoff_base_s
        self._backoff_cap_s = backoff_cap_s

    async def track(
        self, request_id: str, *, user_id: str | None = None
    ) -> AsyncIterator[TrackingUpdate]:
        """Yield a tracking update for every change of the assigned ambulance.

        When *user_id* is given, a request owned by someone else is reported
        as not found.

        Raises:
            DocumentNotFoundError: the request does not exist (raised before
                anything is yielded).
            RetrievalError: the request could not be loaded, or the live
                channel kept failing after ``max_reconnect_attempts``
                reconnections.
        """
        request = await self._requests.get(request_id)
        if request is None or (user_id is not None and request.user_id != user_id):
            raise DocumentNotFoundError(self._requests.collection_name, request_id)

        ambulance_id = request.ambulance_id
        if ambulance_id is None:
            yield TrackingUpdate(request_id=request_id)
            ambulance_id = await self._wait_for_assignment(request_id)
            if ambulance_id is None:
                return

        follow = self._follow(self._ambulances.collection_name, ambulance_id)
        async with aclosing(follow) as snapshots:
            async for snapshot in snapshots:
                if not snapshot.exists:
                    logger.warning(
                        "Ambulance %s vanished while tracking %s", ambulance_id, request_id
                    )
                    continue
                yield self._update_for(request, self._ambulances.hydrate(snapshot))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _update_for(self, request: AmbulanceRequest, ambulance: Ambulance) -> TrackingUpdate:
        distance = distance_between(ambulance.location, request.pickup_location)
        return TrackingUpdate(
            request_id=request.id,
            ambulance=ambulance,
            distance_km=distance,
            eta_minutes=estimate_eta_minutes(distance, self._average_speed_kmh),
        )

    async def _wait_for_assignment(self, request_id: str) -> str | None:
        """Watch the request until dispatch assigns an ambulance to it."""
        follow = self._follow(self._requests.collection_name, request_id)
        async with aclosing(follow) as snapshots:
            async for snapshot in snapshots:
                if not snapshot.exists:
                    continue
                ambulance_id = (snapshot.to_dict() or {}).get("ambulanceId")
                if ambulance_id:
                    logger.info("Request %s assigned to ambulance %s", request_id, ambulance_id)
                    return ambulance_id
        return None

    async def _follow(self, collection: str, doc_id: str) -> AsyncIterator[Any]:
        """Yield snapshots of one document, reopening the listener on failure.

        The failure counter resets whenever a snapshot arrives, so only
        back-to-back failures count towards the limit. A reopened listener
        starts with the document's current state.
        """
        failures = 0
        while True:
            try:
                async with self._listen(collection, doc_id) as snapshots:
                    async for snapshot in snapshots:
                        failures = 0
                        yield snapshot
                return
            except RetrievalError as exc:
                failures += 1
                if failures > self._max_reconnect_attempts:
                    logger.error(
                        "Giving up on %s/%s after %d reconnect attempts",
                        collection, doc_id, self._max_reconnect_attempts,
                    )
                    raise
                delay = min(self._backoff_cap_s, self._backoff_base_s * 2 ** (failures - 1))
                logger.warning(
                    "Listener on %s/%s failed (%s); reconnecting in %.1fs (attempt %d/%d)",
                    collection, doc_id, exc, delay, failures, self._max_reconnect_attempts,
                )
                await asyncio.sleep(delay)
