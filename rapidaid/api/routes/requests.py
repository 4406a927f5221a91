"""Ambulance request endpoints: submit, history, live tracking."""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, WebSocket, status

from rapidaid.api.deps import (
    get_current_user,
    get_request_repo,
    get_request_tracker,
    get_websocket_user,
)
from rapidaid.contracts.request import AmbulanceRequest, RequestDraft
from rapidaid.contracts.tracking import TrackingUpdate
from rapidaid.persistence.errors import (
    AmbulanceUnavailableError,
    DocumentNotFoundError,
    RetrievalError,
)
from rapidaid.persistence.repositories.request_repo import RequestRepository
from rapidaid.services.request_tracker import RequestTracker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/requests", tags=["requests"])

# Application-defined close code (4000-4999 range) mirroring HTTP 404
WS_REQUEST_NOT_FOUND = 4404


@router.post("", status_code=201)
async def create_request(
    draft: RequestDraft,
    user_id: str = Depends(get_current_user),
    requests: RequestRepository = Depends(get_request_repo),
) -> dict:
    request = AmbulanceRequest.from_draft(user_id, draft)
    try:
        doc_id = await requests.create_with_assignment(request)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Ambulance not found") from exc
    except AmbulanceUnavailableError as exc:
        raise HTTPException(status_code=409, detail=f"Ambulance is {exc.status}") from exc
    except RetrievalError as exc:
        raise HTTPException(status_code=503, detail="Failed to submit request") from exc
    data = request.to_firestore()
    data["id"] = doc_id
    return data


@router.get("")
async def list_requests(
    user_id: str = Depends(get_current_user),
    repo: RequestRepository = Depends(get_request_repo),
) -> list[dict]:
    try:
        items = await repo.list_by_user(user_id)
    except RetrievalError as exc:
        raise HTTPException(status_code=503, detail="Failed to load requests") from exc
    return [r.to_firestore() for r in items]


@router.get("/{request_id}")
async def get_request(
    request_id: str,
    user_id: str = Depends(get_current_user),
    repo: RequestRepository = Depends(get_request_repo),
) -> dict:
    try:
        item = await repo.get(request_id)
    except RetrievalError as exc:
        raise HTTPException(status_code=503, detail="Failed to load request") from exc
    # Other users' requests are reported as missing
    if item is None or item.user_id != user_id:
        raise HTTPException(status_code=404, detail="Request not found")
    return item.to_firestore()


# ------------------------------------------------------------------
# Live tracking
# ------------------------------------------------------------------


async def _forward(websocket: WebSocket, updates: AsyncIterator[TrackingUpdate]) -> None:
    async with aclosing(updates):
        async for update in updates:
            await websocket.send_json(update.model_dump(mode="json", by_alias=True))


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/{request_id}/track")
async def track_request(
    websocket: WebSocket,
    request_id: str,
    user_id: str = Depends(get_websocket_user),
    tracker: RequestTracker = Depends(get_request_tracker),
) -> None:
    """Push a ``TrackingUpdate`` JSON message on every ambulance change.

    Closes with 4404 if the request is unknown (or not the caller's) and
    with 1011 if the request cannot be loaded or the live channel cannot be
    re-established.
    """
    await websocket.accept()

    forward = asyncio.create_task(
        _forward(websocket, tracker.track(request_id, user_id=user_id))
    )
    disconnect = asyncio.create_task(_wait_for_disconnect(websocket))
    try:
        done, _ = await asyncio.wait(
            {forward, disconnect}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        forward.cancel()
        disconnect.cancel()
        # Cancelling _forward closes the tracker and its listener
        await asyncio.gather(forward, disconnect, return_exceptions=True)

    if forward in done and not forward.cancelled():
        exc = forward.exception()
        if isinstance(exc, DocumentNotFoundError):
            await websocket.close(code=WS_REQUEST_NOT_FOUND, reason="Request not found")
        elif isinstance(exc, RetrievalError):
            logger.warning("Tracking %s aborted: %s", request_id, exc)
            await websocket.close(
                code=status.WS_1011_INTERNAL_ERROR, reason="Live updates unavailable"
            )
        elif exc is not None:
            raise exc
        else:
            await websocket.close()
