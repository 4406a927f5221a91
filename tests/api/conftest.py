"""Shared fixtures for API tests."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from rapidaid.api.app import app
from rapidaid.api.deps import get_current_user, get_websocket_user
from tests.seed import TEST_USER_ID


@pytest.fixture
def test_app(patch_firestore):
    """FastAPI app with dependency overrides for testing."""
    # Override auth to return a fixed test user
    app.dependency_overrides[get_current_user] = lambda: TEST_USER_ID
    app.dependency_overrides[get_websocket_user] = lambda: TEST_USER_ID
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def ws_client(test_app):
    """Synchronous TestClient, needed for WebSocket sessions."""
    return TestClient(test_app)
