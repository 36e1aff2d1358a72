"""MongoDB connection bootstrap.

`connect_to_mongo()` is called once at startup. It opens the client, checks it
with a ping and hands back an owned `MongoConnection`. Any failure is fatal:
the error is logged and the process exits.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

import certifi
from pymongo import MongoClient
from pymongo.database import Database

from inotebook.core.config import settings
from inotebook.core.logging import redact_uri

_log = logging.getLogger("inotebook.mongo")


class MongoConnection:
    """Owned client + database handle. Pass it to repositories, close on shutdown."""

    def __init__(self, client: MongoClient, db: Database) -> None:
        self.client = client
        self.db = db
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def ping(self) -> bool:
        if self._closed:
            return False
        try:
            self.client.admin.command("ping")
            return True
        except Exception as e:
            _log.warning("Mongo ping failed: %s", e)
            return False

    def close(self) -> None:
        if not self._closed:
            self.client.close()
            self._closed = True
            _log.info("Mongo connection closed")


def _client_kwargs(uri: str) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = dict(serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms)
    # SRV (Atlas) already implies TLS; give it the certifi CA bundle
    if uri.startswith("mongodb+srv://") or settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
    return kwargs


def connect_to_mongo(uri: Optional[str] = None, db_name: Optional[str] = None) -> MongoConnection:
    """Open the process-wide connection or terminate the process."""
    uri = uri if uri is not None else settings.mongo_uri
    db_name = db_name or settings.mongo_db
    safe_uri = redact_uri(uri)
    client: Optional[MongoClient] = None
    try:
        _log.info("Connecting to Mongo at %s", safe_uri)
        client = MongoClient(uri, **_client_kwargs(uri))
        client.admin.command("ping")
        db = client.get_default_database(default=db_name)
    except Exception as e:
        _log.error("Mongo connection failed (%s): %s", safe_uri, e)
        if client is not None:
            client.close()
        sys.exit(1)
    _log.info("Mongo connected (db=%s)", db.name)
    return MongoConnection(client, db)
