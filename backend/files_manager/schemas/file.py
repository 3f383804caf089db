"""File request/response schemas."""
import uuid
from typing import Any, Optional, Union
from pydantic import field_validator
from files_manager.schemas.base import CamelModel, CamelORMModel

# Wire value of the root parent
ROOT_PARENT_ID = 0


class FileCreate(CamelModel):
    """Upload body. Fields are untyped here; the upload pipeline validates
    them in a fixed order, after the token, so each failure gets its own
    error message instead of a request validation error."""
    name: Optional[Any] = None
    type: Optional[Any] = None
    is_public: Optional[Any] = None
    parent_id: Optional[Any] = None
    data: Optional[Any] = None


class FileProjection(CamelORMModel):
    id: uuid.UUID
    user_id: str
    name: str
    type: str
    is_public: bool = False
    parent_id: Union[uuid.UUID, int] = ROOT_PARENT_ID

    @field_validator("parent_id", mode="before")
    @classmethod
    def none_to_root(cls, v):
        return v if v is not None else ROOT_PARENT_ID
