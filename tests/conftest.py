"""Fixtures shared by every test package."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from tests.persistence.fake_firestore import FakeFirestoreClient


@pytest.fixture
def fake_client():
    """In-memory Firestore fake, shared across all repos in a single test."""
    return FakeFirestoreClient()


@pytest.fixture
def patch_firestore(fake_client):
    """Route every Firestore access (queries, batches, listeners) to the fake."""
    with patch(
        "rapidaid.persistence.repositories.base.get_firestore_client",
        return_value=fake_client,
    ), patch(
        "rapidaid.persistence.repositories.request_repo.get_firestore_client",
        return_value=fake_client,
    ), patch(
        "rapidaid.persistence.listeners.get_listener_client",
        return_value=fake_client,
    ):
        yield fake_client
