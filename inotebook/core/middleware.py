"""
Application middlewares: request id, per-request logging and CORS.

Request logs carry whether an `auth-token` was sent, never its value.
"""
import logging
import re
import time
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from inotebook.core.config import settings
from inotebook.core.logging import redact_headers

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get("X-Request-Id") or ""
        # client ids end up in log lines; only accept short plain tokens
        rid = incoming if _REQUEST_ID_RE.match(incoming) else uuid.uuid4().hex
        request.state.request_id = rid
        response = await call_next(request)
        response.headers["X-Request-Id"] = rid
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: FastAPI) -> None:
        super().__init__(app)
        self.log = logging.getLogger("inotebook.request")

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status = 0
        if self.log.isEnabledFor(logging.DEBUG):
            self.log.debug(
                "headers=%s",
                redact_headers(request.headers, (settings.auth_header, "authorization", "cookie")),
            )
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            dt_ms = int((time.perf_counter() - start) * 1000)
            rid = getattr(request.state, "request_id", None)
            self.log.info(
                "method=%s path=%s status=%s latency_ms=%s authed=%s request_id=%s",
                request.method, request.url.path, status, dt_ms,
                settings.auth_header in request.headers, rid,
            )


def add_middlewares(app: FastAPI) -> None:
    cors_kwargs = dict(
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )
    if settings.cors_allow_any:
        # Wildcard origins cannot be combined with credentials
        cors_kwargs["allow_origins"] = []
        cors_kwargs["allow_origin_regex"] = ".*"
        cors_kwargs["allow_credentials"] = False
    app.add_middleware(CORSMiddleware, **cors_kwargs)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(LoggingMiddleware)
