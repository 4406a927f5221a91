"""Real-time document listeners as async iterators.

Firestore pushes a full snapshot of a watched document on every change via
``DocumentReference.on_snapshot``, calling back on a background thread.
:class:`DocumentListener` hands those snapshots to the event loop through a
single-consumer ``asyncio.Queue``, so they are processed one at a time in
the order Firestore delivered them.

Usage::

    async with DocumentListener("ambulances", ambulance_id) as snapshots:
        async for snapshot in snapshots:
            ...
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from google.api_core.exceptions import GoogleAPICallError

from rapidaid import config
from rapidaid.persistence.errors import RetrievalError
from rapidaid.persistence.firestore_client import get_listener_client

logger = logging.getLogger(__name__)

_CLOSED = object()


class DocumentListener:
    """Async iterator over live snapshots of one Firestore document.

    The first snapshot is the document's current state. Snapshots of a
    deleted or never-created document are delivered with ``exists`` False.
    """

    def __init__(
        self,
        collection: str,
        doc_id: str,
        *,
        health_check_s: float = config.LISTENER_HEALTH_CHECK_S,
    ):
        self.collection = collection
        self.doc_id = doc_id
        self._health_check_s = health_check_s
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._watch: Any = None
        self._closed = False

    async def __aenter__(self) -> "DocumentListener":
        self.open()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    def __aiter__(self) -> "DocumentListener":
        return self

    async def __anext__(self) -> Any:
        """Return the next snapshot.

        Raises:
            RetrievalError: the watch stream terminated. Firestore stops a
                watch on unrecoverable RPC errors without notifying the
                snapshot callback, so an idle listener polls
                ``watch.is_active`` every ``health_check_s`` seconds.
        """
        while True:
            if self._closed:
                raise StopAsyncIteration
            try:
                item = await asyncio.wait_for(self._queue.get(), self._health_check_s)
            except asyncio.TimeoutError:
                self._check_alive()
                continue
            if item is _CLOSED:
                raise StopAsyncIteration
            return item

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Register the Firestore watch. Must be called from the event loop."""
        self._loop = asyncio.get_running_loop()
        ref = get_listener_client().collection(self.collection).document(self.doc_id)
        try:
            self._watch = ref.on_snapshot(self._on_snapshot)
        except GoogleAPICallError as exc:
            raise RetrievalError(self.collection, str(exc)) from exc
        logger.info("Listening to %s/%s", self.collection, self.doc_id)

    def close(self) -> None:
        """Unsubscribe the watch and discard undelivered snapshots."""
        if self._closed:
            return
        self._closed = True
        if self._watch is not None:
            self._watch.unsubscribe()
            self._watch = None
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)
        logger.info("Stopped listening to %s/%s", self.collection, self.doc_id)

    def _check_alive(self) -> None:
        if self._watch is not None and not self._watch.is_active:
            logger.warning("Watch on %s/%s terminated", self.collection, self.doc_id)
            raise RetrievalError(self.collection, f"watch on {self.doc_id} terminated")

    # ------------------------------------------------------------------
    # Firestore callback (background thread)
    # ------------------------------------------------------------------

    def _on_snapshot(self, doc_snapshots: list[Any], changes: Any, read_time: Any) -> None:
        for snapshot in doc_snapshots:
            self._deliver(snapshot)

    def _deliver(self, item: Any) -> None:
        if self._closed or self._loop is None:
            return
        try:
            self._loop.call_soon_threadsafe(self._put, item)
        except RuntimeError:
            # Event loop already shut down; nobody is left to consume.
            logger.debug("Dropped snapshot for %s/%s", self.collection, self.doc_id)

    def _put(self, item: Any) -> None:
        if not self._closed:
            self._queue.put_nowait(item)
