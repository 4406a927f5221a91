"""Firestore client singletons."""

from __future__ import annotations

import logging
from typing import Any

from google.cloud import firestore

logger = logging.getLogger(__name__)

_client: Any = None
_listener_client: Any = None


def get_firestore_client() -> Any:
    """Return a lazy-initialized Firestore AsyncClient.

    Uses Application Default Credentials (ADC).
    """
    global _client
    if _client is not None:
        return _client

    _client = firestore.AsyncClient()
    logger.info("Using Google Cloud Firestore (async)")
    return _client


def get_listener_client() -> Any:
    """Return a lazy-initialized synchronous Firestore Client.

    Real-time ``on_snapshot`` listeners are only available on the
    synchronous API; their callbacks run on a background thread.
    """
    global _listener_client
    if _listener_client is not None:
        return _listener_client

    _listener_client = firestore.Client()
    logger.info("Using Google Cloud Firestore (listeners)")
    return _listener_client


def server_timestamp() -> Any:
    """Sentinel replaced by the commit time on the Firestore server."""
    return firestore.SERVER_TIMESTAMP


def _reset_client() -> None:
    """Reset the singletons (for testing only)."""
    global _client, _listener_client
    _client = None
    _listener_client = None
