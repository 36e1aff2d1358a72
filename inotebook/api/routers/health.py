"""Health endpoints (no auth), typed and stable outputs."""
from fastapi import APIRouter, Request, status

from inotebook.api.schemas.health import PingOut, HealthOut


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/ping", response_model=PingOut, summary="Basic ping")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Basic health")
def health(request: Request) -> HealthOut:
    conn = getattr(request.app.state, "mongo", None)
    return HealthOut(ok=True, db=bool(conn is not None and conn.ping()))
