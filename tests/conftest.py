from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from inotebook.api.deps import get_note_repository
from inotebook.core.config import settings
from inotebook.infrastructure.security.token_service import create_access_token
from inotebook.main import app


class InMemoryNoteRepository:
    """Same surface as NoteRepository, backed by a list."""

    def __init__(self) -> None:
        self.docs: List[Dict[str, Any]] = []

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        return [dict(d) for d in self.docs if d["user"] == str(user_id)]

    def insert(self, user_id: str, title: str, description: str, tag: str) -> Dict[str, Any]:
        doc = {
            "_id": str(ObjectId()),
            "user": str(user_id),
            "title": title,
            "description": description,
            "tag": tag,
            "date": "2024-05-01T10:00:00Z",
        }
        self.docs.append(doc)
        return dict(doc)

    def get(self, note_id: str) -> Optional[Dict[str, Any]]:
        return next((dict(d) for d in self.docs if d["_id"] == note_id), None)

    def update(self, note_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for d in self.docs:
            if d["_id"] == note_id:
                d.update({k: v for k, v in fields.items() if k in ("title", "description", "tag")})
                return dict(d)
        return None

    def delete(self, note_id: str) -> Optional[Dict[str, Any]]:
        for i, d in enumerate(self.docs):
            if d["_id"] == note_id:
                return self.docs.pop(i)
        return None


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ""
        self.reason = "Fake"

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakeSession:
    """Records requests and replays queued responses (or raises queued exceptions)."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "headers": dict(headers or {}), "json": json, "timeout": timeout})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def _jwt_secret(monkeypatch):
    monkeypatch.setattr(settings, "jwt_secret", "test-secret")


@pytest.fixture
def repo():
    return InMemoryNoteRepository()


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_note_repository] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _make(user_id: str = "645a3cbd1add0d84d3bc7bcf") -> Dict[str, str]:
        return {"auth-token": create_access_token(user_id=user_id)}
    return _make


@pytest.fixture
def session():
    return FakeSession()
