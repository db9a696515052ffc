# taskapp/models.py
"""Task table and the request/response schemas of the task API."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 50
DESCRIPTION_MIN_LENGTH = 5
DESCRIPTION_MAX_LENGTH = 255


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskStatus(str, Enum):
    pending = "pending"
    completed = "completed"

    def toggled(self) -> "TaskStatus":
        """Return the other status."""
        if self is TaskStatus.pending:
            return TaskStatus.completed
        return TaskStatus.pending


class Task(SQLModel, table=True):
    """Task database table. Rows with ``deleted_at`` set are soft-deleted."""
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = Field(default=TaskStatus.pending)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None, index=True)


class TaskCreate(SQLModel):
    """Body of ``POST /api/tasks``. Length rules are enforced by the store."""
    title: str
    description: str


class TaskUpdate(SQLModel):
    """Body of ``PUT /api/tasks/{id}``.

    Clients may send back the whole record they hold; anything outside these
    three fields (``id``, ``createdAt``...) is ignored.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None


class TaskRead(BaseModel):
    """JSON shape of a task as returned by the API."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    description: str
    status: TaskStatus
    created_at: datetime = PydanticField(alias="createdAt")
    updated_at: datetime = PydanticField(alias="updatedAt")
