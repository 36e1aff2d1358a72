"""Notes client: in-memory list of notes kept in sync with the notes API.

Each operation makes exactly one HTTP round trip and returns a `StoreResult`.
The local list is only touched when the request succeeded; failures come back
as typed errors (`NetworkError`, `AuthorizationError`, `ServerError`,
`ParseError`) instead of being raised.

    store = NoteStore(token_provider=LocalStorage().token_provider())
    store.fetch_all().unwrap()
    store.add("Groceries", "milk, eggs, bread", "home")
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from inotebook.client.errors import AuthorizationError, NetworkError, NoteStoreError, ParseError, ServerError
from inotebook.client.models import Note
from inotebook.client.storage import LocalStorage, TokenProvider
from inotebook.core.config import settings

_log = logging.getLogger("inotebook.client")

T = TypeVar("T")

_NOTE_LIST = TypeAdapter(List[Note])

_UNSET: Any = object()


@dataclass
class StoreResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[NoteStoreError] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value


def _server_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return (resp.text or resp.reason or "").strip()[:200]
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if body.get(key):
                return str(body[key])
    return str(body)[:200]


class NoteStore:
    """Client-side cache of the user's notes plus the four API operations."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = _UNSET,
    ) -> None:
        self.base_url = (base_url or settings.notes_api_url).rstrip("/")
        self.token_provider = token_provider or LocalStorage().token_provider()
        self.session = session or requests.Session()
        self.timeout = settings.notes_api_timeout_seconds if timeout is _UNSET else timeout
        self._notes: List[Note] = []
        self._lock = threading.Lock()

    @property
    def notes(self) -> List[Note]:
        """Snapshot of the current list (mutating it does not touch the store)."""
        with self._lock:
            return list(self._notes)

    # --- HTTP ---
    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        token = self.token_provider()
        if token:
            headers[settings.auth_header] = token
        return headers

    def _request(self, method: str, path: str, body: Optional[dict] = None) -> StoreResult[Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, headers=self._headers(), json=body, timeout=self.timeout)
        except requests.RequestException as e:
            _log.warning("%s %s failed: %s", method, path, e)
            return StoreResult(error=NetworkError(str(e)))

        code = resp.status_code
        if code in (401, 403):
            return StoreResult(error=AuthorizationError(_server_message(resp), code), status_code=code)
        if not 200 <= code < 300:
            _log.warning("%s %s -> %s", method, path, code)
            return StoreResult(error=ServerError(_server_message(resp), code), status_code=code)
        try:
            data = resp.json()
        except ValueError as e:
            return StoreResult(error=ParseError(f"Invalid JSON from {path}: {e}", code), status_code=code)
        _log.debug("%s %s -> %s", method, path, code)
        return StoreResult(value=data, status_code=code)

    # --- Operations ---
    def fetch_all(self) -> StoreResult[List[Note]]:
        """Replace the whole list with the server's notes."""
        res = self._request("GET", "/api/notes/fetchallnotes")
        if not res.ok:
            return res
        try:
            notes = _NOTE_LIST.validate_python(res.value)
        except ValidationError as e:
            return StoreResult(error=ParseError(f"Unexpected notes payload: {e}", res.status_code), status_code=res.status_code)
        with self._lock:
            self._notes = list(notes)
        return StoreResult(value=list(notes), status_code=res.status_code)

    def add(self, title: str, description: str, tag: str) -> StoreResult[Note]:
        """Create a note and append the server's record to the list."""
        body = {"title": title, "description": description, "tag": tag}
        res = self._request("POST", "/api/notes/addnote", body)
        if not res.ok:
            return res
        try:
            note = Note.model_validate(res.value)
        except ValidationError as e:
            return StoreResult(error=ParseError(f"Unexpected note payload: {e}", res.status_code), status_code=res.status_code)
        with self._lock:
            self._notes = self._notes + [note]
        return StoreResult(value=note, status_code=res.status_code)

    def delete(self, note_id: str) -> StoreResult[Any]:
        """Delete on the server, then drop the first local entry with that id."""
        res = self._request("DELETE", f"/api/notes/deletenote/{note_id}")
        if not res.ok:
            return res
        with self._lock:
            for i, note in enumerate(self._notes):
                if note.id == note_id:
                    self._notes = self._notes[:i] + self._notes[i + 1:]
                    break
        return res

    def edit(self, note_id: str, title: str, description: str, tag: str) -> StoreResult[Any]:
        """Update on the server, then apply the same fields to a copy of the list."""
        body = {"title": title, "description": description, "tag": tag}
        res = self._request("PUT", f"/api/notes/updatenote/{note_id}", body)
        if not res.ok:
            return res
        with self._lock:
            new_notes = [n.model_copy(deep=True) for n in self._notes]
            for i, note in enumerate(new_notes):
                if note.id == note_id:
                    new_notes[i] = note.model_copy(update=body)
                    break
            self._notes = new_notes
        return res

    def find(self, note_id: str) -> Optional[Note]:
        with self._lock:
            return next((n for n in self._notes if n.id == note_id), None)
