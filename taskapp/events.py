# taskapp/events.py
"""Post-commit task events and the listeners that consume them."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class TaskAction(str, Enum):
    created = "created"
    updated = "updated"
    deleted = "deleted"


@dataclass(frozen=True)
class TaskEvent:
    """Emitted by the store once a write has been committed."""
    action: TaskAction
    task_id: int
    title: str


class TaskListener(Protocol):
    def __call__(self, event: TaskEvent) -> None: ...


class LoggingTaskListener:
    """Writes one INFO line per committed task change."""

    def __init__(self, log: logging.Logger = logger) -> None:
        self._log = log

    def __call__(self, event: TaskEvent) -> None:
        self._log.info("Task %s: %s (id=%s)", event.action.value, event.title, event.task_id)
