"""Runtime settings, read from the environment (and a local ``.env`` file)."""

import os

from dotenv import load_dotenv

load_dotenv()

NEARBY_RADIUS_KM = float(os.getenv("RAPIDAID_NEARBY_RADIUS_KM", "10"))
CANDIDATE_POOL_SIZE = int(os.getenv("RAPIDAID_CANDIDATE_POOL_SIZE", "20"))
QUERY_TIMEOUT_S = float(os.getenv("RAPIDAID_QUERY_TIMEOUT_S", "10"))
RECONNECT_ATTEMPTS = int(os.getenv("RAPIDAID_RECONNECT_ATTEMPTS", "5"))
LISTENER_HEALTH_CHECK_S = float(os.getenv("RAPIDAID_LISTENER_HEALTH_CHECK_S", "2"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")


def auth_disabled() -> bool:
    """Development switch: skip Firebase token verification."""
    return os.getenv("RAPIDAID_AUTH_DISABLED") == "1"
