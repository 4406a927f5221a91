"""Firebase Auth ID-token verification."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Header, HTTPException, Query, WebSocketException, status

from rapidaid import config


@dataclass
class UserClaims:
    uid: str
    email: str | None = None
    name: str | None = None


DEV_USER = UserClaims(uid="dev-user", email="dev@localhost", name="Dev User")


def decode_token(token: str) -> UserClaims:
    """Verify a Firebase ID token and return its claims.

    Raises ``HTTPException(401)`` when the token is rejected.
    """
    try:
        from firebase_admin import auth as firebase_auth

        decoded = firebase_auth.verify_id_token(token)
    except Exception as exc:
        raise HTTPException(status_code=401, detail=f"Invalid token: {exc}") from exc

    return UserClaims(
        uid=decoded["uid"],
        email=decoded.get("email"),
        name=decoded.get("name"),
    )


async def verify_firebase_token(
    authorization: str | None = Header(None, description="Bearer <Firebase ID token>"),
) -> UserClaims:
    """Extract and verify a Firebase Auth ID token from the Authorization header.

    In development, set ``RAPIDAID_AUTH_DISABLED=1`` to bypass verification
    and use a fixed test user.
    """
    if config.auth_disabled():
        return DEV_USER

    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Invalid authorization header")

    return decode_token(token)


async def verify_websocket_token(
    token: str | None = Query(None, description="Firebase ID token"),
) -> UserClaims:
    """Browsers cannot set headers on WebSocket upgrades; read ``?token=`` instead."""
    if config.auth_disabled():
        return DEV_USER

    if not token:
        raise WebSocketException(code=status.WS_1008_POLICY_VIOLATION, reason="Missing token")

    try:
        return decode_token(token)
    except HTTPException as exc:
        raise WebSocketException(
            code=status.WS_1008_POLICY_VIOLATION, reason=str(exc.detail)
        ) from exc
