import pytest
import requests

from conftest import FakeResponse
from inotebook.client.errors import AuthorizationError, NetworkError, ParseError, ServerError
from inotebook.client.models import Note
from inotebook.client.note_store import NoteStore
from inotebook.client.storage import static_token

BASE = "http://notes.test"


def _note(note_id, title="A", description="desc", tag="General", **extra):
    return {
        "_id": note_id,
        "user": "u1",
        "title": title,
        "description": description,
        "tag": tag,
        "date": "2024-05-01T10:00:00Z",
        **extra,
    }


def _store(session, token="tok"):
    return NoteStore(base_url=BASE, token_provider=static_token(token), session=session, timeout=5)


def _loaded(session, *notes):
    store = _store(session)
    session.queue(FakeResponse(200, list(notes)))
    store.fetch_all().unwrap()
    return store


def test_requests_carry_token_and_json_headers(session):
    session.queue(FakeResponse(200, []))
    _store(session, token="secret-token").fetch_all()
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == f"{BASE}/api/notes/fetchallnotes"
    assert call["headers"]["auth-token"] == "secret-token"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["timeout"] == 5


def test_token_is_read_on_every_call(session):
    tokens = iter(["first", "second"])
    store = NoteStore(base_url=BASE, token_provider=lambda: next(tokens), session=session)
    session.queue(FakeResponse(200, []), FakeResponse(200, []))
    store.fetch_all()
    store.fetch_all()
    assert [c["headers"]["auth-token"] for c in session.calls] == ["first", "second"]


def test_missing_token_omits_header(session):
    session.queue(FakeResponse(401, {"error": "Please authenticate using a valid token"}))
    res = _store(session, token=None).fetch_all()
    assert "auth-token" not in session.calls[0]["headers"]
    assert isinstance(res.error, AuthorizationError)
    assert res.error.message == "Please authenticate using a valid token"


def test_fetch_all_replaces_list(session):
    store = _loaded(session, _note("1"), _note("2"))
    assert [n.id for n in store.notes] == ["1", "2"]

    session.queue(FakeResponse(201, _note("3", title="Local")))
    store.add("Local", "added locally", "x")
    session.queue(FakeResponse(200, [_note("9", title="Server")]))
    res = store.fetch_all()

    assert res.ok
    assert [n.id for n in store.notes] == ["9"]


def test_add_appends_server_record(session):
    store = _store(session)
    for i in range(3):
        record = _note(f"id{i}", title=f"T{i}", description=f"body {i}", tag="work")
        session.queue(FakeResponse(200, record))
        res = store.add(f"T{i}", f"body {i}", "work")
        assert res.ok
        assert len(store.notes) == i + 1
        assert store.notes[-1] == Note.model_validate(record)
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["url"] == f"{BASE}/api/notes/addnote"
    assert session.calls[0]["json"] == {"title": "T0", "description": "body 0", "tag": "work"}


def test_delete_present_id(session):
    store = _loaded(session, _note("1"), _note("2"))
    session.queue(FakeResponse(200, {"Success": "Note has been deleted"}))
    res = store.delete("1")
    assert res.ok
    assert session.calls[-1]["method"] == "DELETE"
    assert session.calls[-1]["url"] == f"{BASE}/api/notes/deletenote/1"
    assert [n.id for n in store.notes] == ["2"]


def test_delete_absent_id_leaves_list_unchanged(session):
    store = _loaded(session, _note("1"), _note("2"))
    before = store.notes
    session.queue(FakeResponse(200, {"Success": "Note has been deleted"}))
    store.delete("42")
    assert store.notes == before


def test_edit_example(session):
    store = _loaded(session, {"_id": 1, "title": "A"})
    session.queue(FakeResponse(200, {"note": {}}))
    res = store.edit("1", "B", "d", "t")
    assert res.ok
    assert session.calls[-1]["method"] == "PUT"
    assert session.calls[-1]["url"] == f"{BASE}/api/notes/updatenote/1"
    assert session.calls[-1]["json"] == {"title": "B", "description": "d", "tag": "t"}
    [note] = store.notes
    assert (note.id, note.title, note.description, note.tag) == ("1", "B", "d", "t")


def test_edit_touches_only_editable_fields_of_match(session):
    store = _loaded(session, _note("1", color="blue"), _note("2", title="Other"))
    other_before = store.notes[1].model_dump()
    session.queue(FakeResponse(200, {"note": {}}))
    store.edit("1", "New", "new body", "new-tag")

    first, second = store.notes
    assert first.id == "1"
    assert first.owner == "u1"
    assert first.created_at == "2024-05-01T10:00:00Z"
    assert first.model_dump()["color"] == "blue"
    assert (first.title, first.description, first.tag) == ("New", "new body", "new-tag")
    assert second.model_dump() == other_before


def test_edit_replaces_list_with_a_copy(session):
    store = _loaded(session, _note("1"))
    snapshot = store.notes
    session.queue(FakeResponse(200, {}))
    store.edit("1", "B", "d", "t")
    assert snapshot[0].title == "A"
    assert store.notes[0] is not snapshot[0]


def test_failed_operations_do_not_mutate(session):
    store = _loaded(session, _note("1"))
    session.queue(
        FakeResponse(401, {"message": "Not Allowed"}),
        FakeResponse(404, {"message": "Not Found"}),
        FakeResponse(500, None, text="boom"),
    )
    assert isinstance(store.delete("1").error, AuthorizationError)
    res = store.edit("1", "B", "d", "t")
    assert isinstance(res.error, ServerError)
    assert res.status_code == 404
    assert res.error.message == "Not Found"
    res = store.add("x", "y", "z")
    assert isinstance(res.error, ServerError)
    assert res.error.message == "boom"
    assert [(n.id, n.title) for n in store.notes] == [("1", "A")]


def test_network_error(session):
    store = _loaded(session, _note("1"))
    session.queue(requests.ConnectionError("connection refused"))
    res = store.fetch_all()
    assert not res.ok
    assert isinstance(res.error, NetworkError)
    assert res.status_code is None
    assert [n.id for n in store.notes] == ["1"]


def test_parse_errors(session):
    store = _store(session)
    session.queue(FakeResponse(200, None, text="<html>"))
    assert isinstance(store.fetch_all().error, ParseError)
    session.queue(FakeResponse(200, {"not": "a list"}))
    assert isinstance(store.fetch_all().error, ParseError)
    session.queue(FakeResponse(200, {"title": "no id"}))
    assert isinstance(store.add("t", "d", "g").error, ParseError)
    assert store.notes == []


def test_unwrap_raises_stored_error(session):
    session.queue(FakeResponse(403, {"message": "forbidden"}))
    res = _store(session).fetch_all()
    with pytest.raises(AuthorizationError) as exc:
        res.unwrap()
    assert exc.value.status_code == 403


def test_notes_property_is_a_snapshot(session):
    store = _loaded(session, _note("1"))
    store.notes.clear()
    assert len(store.notes) == 1


def test_find(session):
    store = _loaded(session, _note("1"), _note("2", title="B"))
    assert store.find("2").title == "B"
    assert store.find("3") is None


def test_default_session_is_requests_session():
    store = NoteStore(base_url=BASE + "/", token_provider=static_token("t"))
    assert isinstance(store.session, requests.Session)
    assert store.base_url == BASE
