"""
Client-side Note record. Accepts both the server wire keys (`_id`, `user`,
`date`) and the descriptive ones (`id`, `owner`, `createdAt`); unknown keys
such as `__v` are kept as-is.
"""
from typing import Any, Dict, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Note(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    title: str = ""
    description: str = ""
    tag: str = ""
    owner: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("user", "owner"),
        serialization_alias="user",
    )
    created_at: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("date", "createdAt", "created_at"),
        serialization_alias="date",
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
