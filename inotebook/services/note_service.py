"""
Service layer for notes: ownership checks over the repository.

Raises `NoteNotFoundError` / `NoteAccessError`; the global handlers turn them
into 404 / 401 responses.
"""
import logging
from typing import Dict, Any, List

from inotebook.api.schemas.note import NoteCreate, NoteUpdate
from inotebook.core.exceptions import NoteAccessError, NoteNotFoundError
from inotebook.repositories.note_repo import NoteRepository

_log = logging.getLogger("inotebook.notes")


def fetch_all_notes(repo: NoteRepository, user_id: str) -> List[Dict[str, Any]]:
    return repo.list_by_user(user_id)


def add_note(repo: NoteRepository, user_id: str, payload: NoteCreate) -> Dict[str, Any]:
    note = repo.insert(user_id, payload.title, payload.description, payload.tag)
    _log.info("note created id=%s user=%s", note["_id"], user_id)
    return note


def _owned(repo: NoteRepository, user_id: str, note_id: str) -> Dict[str, Any]:
    note = repo.get(note_id)
    if note is None:
        raise NoteNotFoundError()
    if str(note.get("user")) != str(user_id):
        raise NoteAccessError()
    return note


def update_note(repo: NoteRepository, user_id: str, note_id: str, payload: NoteUpdate) -> Dict[str, Any]:
    """Apply only the non-empty fields of `payload`."""
    _owned(repo, user_id, note_id)
    fields = {k: v for k, v in payload.model_dump().items() if v}
    note = repo.update(note_id, fields)
    if note is None:
        # deleted between the ownership check and the update
        raise NoteNotFoundError()
    return note


def delete_note(repo: NoteRepository, user_id: str, note_id: str) -> Dict[str, Any]:
    _owned(repo, user_id, note_id)
    note = repo.delete(note_id)
    if note is None:
        raise NoteNotFoundError()
    _log.info("note deleted id=%s user=%s", note_id, user_id)
    return note
