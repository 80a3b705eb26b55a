from pydantic import BaseModel, Field
from datetime import datetime

from ..models.task import TaskStatus


class TaskRead(BaseModel):
    """Wire form of a task in the listing response.

    Serialized with camelCase keys: ``{id, title, status, ownerId, createdAt}``.
    """
    id: str
    title: str
    status: TaskStatus
    owner_id: str = Field(serialization_alias="ownerId")
    created_at: datetime = Field(serialization_alias="createdAt")

    class Config:
        from_attributes = True


class ErrorResponse(BaseModel):
    """Error envelope for 401 and 5xx answers."""
    message: str
