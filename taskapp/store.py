# taskapp/store.py
"""Task store: validation and soft-delete lifecycle over the ``tasks`` table."""

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError
from sqlmodel import Session, col, select

from taskapp.errors import NotFound, StoreUnavailable, ValidationError
from taskapp.events import LoggingTaskListener, TaskAction, TaskEvent, TaskListener
from taskapp.models import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    Task,
    TaskStatus,
    utcnow,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status")


def _length_error(name: str, value: Any, min_length: int, max_length: int) -> Optional[str]:
    if value is None:
        return f"{name} is required"
    if not isinstance(value, str):
        return f"{name} must be a string"
    if not value.strip():
        return f"{name} must not be empty"
    if not min_length <= len(value) <= max_length:
        return f"{name} must be between {min_length} and {max_length} characters"
    return None


def clean_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and normalise task fields.

    Only ``title``, ``description`` and ``status`` are accepted. The title is
    trimmed before its length is checked. Every problem found is reported in
    a single :class:`ValidationError`.
    """
    errors: dict[str, str] = {}
    cleaned: dict[str, Any] = {}

    for name in sorted(set(fields) - set(UPDATABLE_FIELDS)):
        errors[name] = f"{name} cannot be set"

    if "title" in fields:
        title = fields["title"]
        if isinstance(title, str):
            title = title.strip()
        message = _length_error("title", title, TITLE_MIN_LENGTH, TITLE_MAX_LENGTH)
        if message:
            errors["title"] = message
        else:
            cleaned["title"] = title

    if "description" in fields:
        description = fields["description"]
        message = _length_error(
            "description", description, DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH
        )
        if message:
            errors["description"] = message
        else:
            cleaned["description"] = description

    if "status" in fields:
        try:
            cleaned["status"] = TaskStatus(fields["status"])
        except ValueError:
            allowed = ", ".join(status.value for status in TaskStatus)
            errors["status"] = f"status must be one of: {allowed}"

    if errors:
        raise ValidationError(errors)
    return cleaned


class TaskStore:
    """Persists tasks and enforces their field constraints.

    Every operation runs in its own session, so one store can serve
    concurrent requests. Listeners are called after each committed
    create/update/delete; the default listener logs the change.
    """

    def __init__(self, engine: Engine, listeners: Optional[Iterable[TaskListener]] = None) -> None:
        self._engine = engine
        self._listeners: list[TaskListener] = (
            list(listeners) if listeners is not None else [LoggingTaskListener()]
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def add_listener(self, listener: TaskListener) -> None:
        self._listeners.append(listener)

    # -- reads ----------------------------------------------------------------

    def list_tasks(self) -> list[Task]:
        """Return every task that has not been soft-deleted, oldest first."""
        with self._session() as session:
            statement = (
                select(Task).where(col(Task.deleted_at).is_(None)).order_by(col(Task.id))
            )
            return list(session.exec(statement).all())

    def get_task(self, task_id: int) -> Task:
        with self._session() as session:
            return self._get_live(session, task_id)

    def count_tasks(self, include_deleted: bool = False) -> int:
        """Count rows, optionally including soft-deleted ones."""
        with self._session() as session:
            statement = select(func.count()).select_from(Task)
            if not include_deleted:
                statement = statement.where(col(Task.deleted_at).is_(None))
            return session.exec(statement).one()

    # -- writes ---------------------------------------------------------------

    def create_task(self, title: Any, description: Any) -> Task:
        """Validate and insert a new pending task."""
        cleaned = clean_fields({"title": title, "description": description})
        task = Task(
            title=cleaned["title"],
            description=cleaned["description"],
            status=TaskStatus.pending,
        )
        with self._session() as session:
            session.add(task)
            session.commit()
            session.refresh(task)
        self._emit(TaskAction.created, task)
        return task

    def update_task(self, task_id: int, fields: Mapping[str, Any]) -> Task:
        """Apply a partial update of title, description and/or status.

        Raises :class:`NotFound` for unknown or soft-deleted ids and
        :class:`ValidationError` before anything is written.
        """
        with self._session() as session:
            task = self._get_live(session, task_id)
            cleaned = clean_fields(fields)
            changed = {
                name: value for name, value in cleaned.items() if getattr(task, name) != value
            }
            if not changed:
                return task
            for name, value in changed.items():
                setattr(task, name, value)
            task.updated_at = utcnow()
            session.add(task)
            session.commit()
            session.refresh(task)
        self._emit(TaskAction.updated, task)
        return task

    def delete_task(self, task_id: int) -> None:
        """Soft-delete a task; the row stays in the table."""
        with self._session() as session:
            task = self._get_live(session, task_id)
            now = utcnow()
            task.deleted_at = now
            task.updated_at = now
            session.add(task)
            session.commit()
            session.refresh(task)
        self._emit(TaskAction.deleted, task)

    # -- private helpers ------------------------------------------------------

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self._engine) as session:
                yield session
        except DBAPIError as exc:
            logger.error("Task store unavailable: %s", exc)
            raise StoreUnavailable("Task store unavailable") from exc

    @staticmethod
    def _get_live(session: Session, task_id: int) -> Task:
        task = session.get(Task, task_id)
        if task is None or task.deleted_at is not None:
            raise NotFound(task_id)
        return task

    def _emit(self, action: TaskAction, task: Task) -> None:
        event = TaskEvent(action=action, task_id=task.id, title=task.title)
        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Task listener %r failed for %s", listener, event)
