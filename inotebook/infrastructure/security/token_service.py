"""
JWT creation and verification for the `auth-token` header.

Tokens carry the user id either as `{"user": {"id": ...}}` (iNotebook shape)
or as a standard `sub` claim; both are accepted on verification.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt as pyjwt

from inotebook.core.config import settings


class TokenError(Exception):
    pass


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _secret() -> str:
    if not settings.jwt_secret:
        raise TokenError("JWT_SECRET is not configured")
    return settings.jwt_secret


def create_access_token(*, user_id: str, expires_in_minutes: int | None = None) -> str:
    """
    Sign an HS256 token for `user_id`.
    Claims: user.id, sub, iat, exp.
    """
    now = _now_utc()
    mins = expires_in_minutes if expires_in_minutes is not None else settings.access_token_expire_minutes
    payload = {
        "user": {"id": str(user_id)},
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=mins)).timestamp()),
    }
    return pyjwt.encode(payload, _secret(), algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> Dict[str, Any]:
    """Decode and validate signature/expiry. Returns the payload."""
    try:
        return pyjwt.decode(token, key=_secret(), algorithms=[settings.jwt_algorithm])
    except pyjwt.PyJWTError as e:
        raise TokenError(str(e)) from e


def user_id_from_payload(payload: Dict[str, Any]) -> str:
    user = payload.get("user")
    if isinstance(user, dict) and user.get("id"):
        return str(user["id"])
    if payload.get("sub"):
        return str(payload["sub"])
    raise TokenError("Token has no user id")
