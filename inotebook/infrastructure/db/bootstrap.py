"""
Mongo collection bootstrap: applies the JSON Schema validator and indexes of
the `notes` collection. Runs once at startup after the connection is open.
Failures only log warnings; they never stop the app.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.database import Database
from pymongo.errors import PyMongoError

from inotebook.api.schemas.note import DESCRIPTION_MIN, TITLE_MIN
from inotebook.repositories.note_repo import COLLECTION as NOTES_COLLECTION

_log = logging.getLogger("inotebook.mongo.bootstrap")


NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["user", "title", "description", "tag", "date"],
    "properties": {
        "user": {"bsonType": "string", "description": "owner user id"},
        "title": {"bsonType": "string", "minLength": TITLE_MIN},
        "description": {"bsonType": "string", "minLength": DESCRIPTION_MIN},
        "tag": {"bsonType": "string"},
        "date": {"bsonType": "string", "minLength": 10, "description": "ISO-8601 UTC"},
    },
    "additionalProperties": True,
}

NOTE_INDEXES: List[Dict[str, Any]] = [
    {"keys": [("user", 1), ("_id", 1)], "name": "ix_notes_user"},
]


def _collmod_or_create(db: Database, name: str, validator: Dict[str, Any]) -> None:
    try:
        if name in db.list_collection_names():
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            db.create_collection(name, validator={"$jsonSchema": validator})
    except PyMongoError as e:
        # Shared clusters may deny collMod; keep going without a strict validator
        _log.warning("Could not apply validator on '%s': %s", name, e)


def _ensure_indexes(db: Database, name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = db[name]
    for ix in indexes:
        ix = dict(ix)
        keys = ix.pop("keys")
        try:
            coll.create_index(keys, **ix)
        except PyMongoError as e:
            _log.warning("Could not create index on '%s' (%s): %s", name, keys, e)


def ensure_collections(db: Database) -> None:
    """Make sure the `notes` collection, its validator and indexes exist."""
    _collmod_or_create(db, NOTES_COLLECTION, NOTE_VALIDATOR)
    _ensure_indexes(db, NOTES_COLLECTION, NOTE_INDEXES)
    _log.info("Collections ready: %s", NOTES_COLLECTION)
