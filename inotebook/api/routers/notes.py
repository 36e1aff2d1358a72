"""
Endpoints for `notes`: the four operations the notes client calls.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from inotebook.api.deps import get_current_user_id, get_note_repository
from inotebook.api.schemas.note import NoteCreate, NoteDeleteOut, NoteOut, NoteUpdate, NoteUpdateOut
from inotebook.repositories.note_repo import NoteRepository
from inotebook.services import note_service


router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "/fetchallnotes",
    response_model=List[NoteOut],
    summary="List notes",
    description="All notes of the authenticated user, in insertion order.",
)
def fetch_all_notes(
    user_id: str = Depends(get_current_user_id),
    repo: NoteRepository = Depends(get_note_repository),
):
    return note_service.fetch_all_notes(repo, user_id)


@router.post(
    "/addnote",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteOut,
    summary="Create note",
)
def add_note(
    payload: NoteCreate,
    user_id: str = Depends(get_current_user_id),
    repo: NoteRepository = Depends(get_note_repository),
):
    return note_service.add_note(repo, user_id, payload)


@router.put(
    "/updatenote/{note_id}",
    response_model=NoteUpdateOut,
    summary="Update note",
    description="Updates title/description/tag; empty fields are left unchanged.",
)
def update_note(
    note_id: str,
    payload: NoteUpdate,
    user_id: str = Depends(get_current_user_id),
    repo: NoteRepository = Depends(get_note_repository),
):
    note = note_service.update_note(repo, user_id, note_id, payload)
    return {"note": note}


@router.delete(
    "/deletenote/{note_id}",
    response_model=NoteDeleteOut,
    summary="Delete note",
)
def delete_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    repo: NoteRepository = Depends(get_note_repository),
):
    note = note_service.delete_note(repo, user_id, note_id)
    return {"Success": "Note has been deleted", "note": note}
