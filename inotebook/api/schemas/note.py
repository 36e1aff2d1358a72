"""
Pydantic schemas for the notes endpoints. Output keys follow the iNotebook
wire format (`_id`, `user`, `date`).

Length rules match the `notes` collection validator.
"""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

TITLE_MIN = 3
DESCRIPTION_MIN = 5


class NoteCreate(BaseModel):
    title: str = Field(min_length=TITLE_MIN, description="Enter a valid title")
    description: str = Field(min_length=DESCRIPTION_MIN, description="Description must be at least 5 characters")
    tag: Optional[str] = "General"

    @field_validator("tag")
    @classmethod
    def _default_tag(cls, v: Optional[str]) -> str:
        return (v or "").strip() or "General"


class NoteUpdate(BaseModel):
    """Partial update; empty strings mean "leave unchanged"."""

    title: Optional[str] = Field(default=None, min_length=TITLE_MIN)
    description: Optional[str] = Field(default=None, min_length=DESCRIPTION_MIN)
    tag: Optional[str] = None

    @field_validator("title", "description", "tag", mode="before")
    @classmethod
    def _blank_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class NoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    user: str
    title: str
    description: str
    tag: str
    date: str


class NoteUpdateOut(BaseModel):
    note: NoteOut


class NoteDeleteOut(BaseModel):
    Success: Literal["Note has been deleted"] = "Note has been deleted"
    note: NoteOut
