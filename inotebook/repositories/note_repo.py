"""Repo for the `notes` collection.

- Stores `user` as a string (serialized user id).
- Stamps `date` as ISO-8601 UTC (Z) on insert; it is never changed afterwards.
- Returned documents expose `_id` as a string.
"""
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.database import Database

COLLECTION = "notes"
EDITABLE_FIELDS = ("title", "description", "tag")


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _oid(note_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(note_id)
    except (InvalidId, TypeError):
        return None


def _out(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    d = dict(doc)
    d["_id"] = str(d["_id"])
    return d


class NoteRepository:
    """Data access for notes over an explicitly passed database handle."""

    def __init__(self, db: Database) -> None:
        self._coll = db[COLLECTION]

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """All notes of a user in insertion order."""
        cur = self._coll.find({"user": str(user_id)}).sort("_id", 1)
        return [_out(d) for d in cur]

    def insert(self, user_id: str, title: str, description: str, tag: str) -> Dict[str, Any]:
        data = {
            "user": str(user_id),
            "title": title,
            "description": description,
            "tag": tag,
            "date": _now_iso(),
        }
        res = self._coll.insert_one(data)
        data["_id"] = res.inserted_id
        return _out(data)

    def get(self, note_id: str) -> Optional[Dict[str, Any]]:
        oid = _oid(note_id)
        if oid is None:
            return None
        return _out(self._coll.find_one({"_id": oid}))

    def update(self, note_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Set the editable fields present in `fields`; returns the updated doc."""
        oid = _oid(note_id)
        if oid is None:
            return None
        set_ops = {k: fields[k] for k in EDITABLE_FIELDS if k in fields}
        if not set_ops:
            return self.get(note_id)
        doc = self._coll.find_one_and_update(
            {"_id": oid},
            {"$set": set_ops},
            return_document=ReturnDocument.AFTER,
        )
        return _out(doc)

    def delete(self, note_id: str) -> Optional[Dict[str, Any]]:
        oid = _oid(note_id)
        if oid is None:
            return None
        return _out(self._coll.find_one_and_delete({"_id": oid}))
