"""
Reusable router dependencies (FastAPI Depends).

- Database: the `MongoConnection` opened at startup lives on `app.state.mongo`.
- Auth: reads the `auth-token` header and resolves the calling user id.
Keep this layer thin: no business logic here.
"""
import logging

from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_503_SERVICE_UNAVAILABLE

from inotebook.core.config import settings
from inotebook.infrastructure.db.mongo import MongoConnection
from inotebook.infrastructure.security.token_service import TokenError, user_id_from_payload, verify_access_token
from inotebook.repositories.note_repo import NoteRepository

_log = logging.getLogger("inotebook.auth")

AUTH_ERROR = "Please authenticate using a valid token"


def get_mongo(request: Request) -> MongoConnection:
    conn = getattr(request.app.state, "mongo", None)
    if conn is None or conn.closed:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Database not ready")
    return conn


def get_note_repository(conn: MongoConnection = Depends(get_mongo)) -> NoteRepository:
    return NoteRepository(conn.db)


def get_current_user_id(request: Request) -> str:
    token = request.headers.get(settings.auth_header)
    if not token:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=AUTH_ERROR)
    try:
        return user_id_from_payload(verify_access_token(token))
    except TokenError as e:
        _log.info("rejected token: %s", e)
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=AUTH_ERROR)
