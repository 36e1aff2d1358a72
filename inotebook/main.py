"""Main entry point of the FastAPI app (middlewares, exception handlers, routers)."""
import logging

from fastapi import FastAPI
from pymongo.errors import PyMongoError

from inotebook.core.config import settings
from inotebook.core.logging import setup_logging
from inotebook.core.middleware import add_middlewares
from inotebook.core.exceptions import register_exception_handlers
from inotebook.infrastructure.db.mongo import connect_to_mongo
from inotebook.infrastructure.db.bootstrap import ensure_collections
from inotebook.api.router import api_router

_log = logging.getLogger("inotebook.startup")

setup_logging(settings.log_level)
app = FastAPI(title=settings.app_name)

add_middlewares(app)
register_exception_handlers(app)


@app.on_event("startup")
def on_startup():
    # Exits the process if Mongo is unreachable
    app.state.mongo = connect_to_mongo()
    try:
        ensure_collections(app.state.mongo.db)
    except PyMongoError as e:
        _log.warning("ensure_collections() failed: %s", e)


@app.on_event("shutdown")
def on_shutdown():
    conn = getattr(app.state, "mongo", None)
    if conn is not None:
        conn.close()
    app.state.mongo = None


app.include_router(api_router, prefix=settings.api_prefix_normalized)


def run() -> None:
    import uvicorn

    uvicorn.run("inotebook.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
