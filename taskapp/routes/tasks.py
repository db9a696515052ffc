# taskapp/routes/tasks.py
"""CRUD endpoints for tasks."""

import logging

from fastapi import APIRouter, Depends, Request, Response

from taskapp.errors import NotFound
from taskapp.models import TaskCreate, TaskRead, TaskUpdate
from taskapp.store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_store(request: Request) -> TaskStore:
    """Return the store handle the application was built with."""
    return request.app.state.store


@router.get("")
@router.get("/", include_in_schema=False)
def list_tasks(store: TaskStore = Depends(get_store)) -> list[TaskRead]:
    """List all tasks that have not been deleted."""
    return [TaskRead.model_validate(task) for task in store.list_tasks()]


@router.get("/{task_id}")
def get_task(task_id: int, store: TaskStore = Depends(get_store)) -> TaskRead:
    """Get a single task by ID."""
    return TaskRead.model_validate(store.get_task(task_id))


@router.post("", status_code=201)
@router.post("/", status_code=201, include_in_schema=False)
def create_task(body: TaskCreate, store: TaskStore = Depends(get_store)) -> TaskRead:
    """Create a new pending task."""
    task = store.create_task(body.title, body.description)
    return TaskRead.model_validate(task)


@router.put("/{task_id}")
def update_task(
    task_id: int, body: TaskUpdate, store: TaskStore = Depends(get_store)
) -> TaskRead:
    """Update an existing task. Only provided fields are changed."""
    task = store.update_task(task_id, body.model_dump(exclude_unset=True))
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: int, store: TaskStore = Depends(get_store)) -> Response:
    """Soft-delete a task. Deleting a missing task still answers 204."""
    try:
        store.delete_task(task_id)
    except NotFound:
        logger.info("Delete requested for missing task %s", task_id)
    return Response(status_code=204)
