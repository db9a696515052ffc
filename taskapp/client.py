# taskapp/client.py
"""Single-view task client: fetches, renders and mutates tasks over HTTP.

The view never updates its list optimistically. Every successful mutation is
followed by a fresh fetch of ``/api/tasks``, so the list always mirrors the
server. Failures are reported through a single banner message and never stop
further interaction.
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/tasks"
PROGRESS_WIDTH = 20

MSG_INVALID_RESPONSE = "The server response is not valid"
MSG_UNREACHABLE = "Could not connect to the server. Make sure the backend is running."
MSG_CREATE_FAILED = "Could not create the task"
MSG_UPDATE_FAILED = "Could not update the task"
MSG_DELETE_FAILED = "Could not delete the task"


@dataclass(frozen=True)
class TaskStats:
    total: int
    pending: int
    completed: int
    percent_completed: int

    @property
    def show_progress(self) -> bool:
        return self.total > 0


def compute_stats(tasks: list[dict[str, Any]]) -> TaskStats:
    """Derive counts and the completion percentage from a task list.

    The percentage rounds halves up and is 0 for an empty list.
    """
    total = len(tasks)
    completed = sum(1 for task in tasks if task.get("status") == "completed")
    pending = total - completed
    percent = math.floor(completed / total * 100 + 0.5) if total else 0
    return TaskStats(total=total, pending=pending, completed=completed, percent_completed=percent)


class TaskBoard:
    """View state for the task list, the creation form and the statistics.

    Parameters
    ----------
    http : httpx.Client
        Client whose base URL points at the task API.
    """

    def __init__(self, http: httpx.Client) -> None:
        self._http = http
        self.tasks: list[dict[str, Any]] = []
        self.loading = True
        self.error: Optional[str] = None
        self.draft: dict[str, str] = {"title": "", "description": ""}

    # -- reads ---------------------------------------------------------------

    @property
    def stats(self) -> TaskStats:
        return compute_stats(self.tasks)

    def refresh(self) -> None:
        """Fetch the authoritative task list."""
        self.loading = True
        self.error = None
        try:
            response = self._http.get(TASKS_PATH)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Fetching tasks failed: %s", exc)
            self.tasks = []
            self.error = MSG_UNREACHABLE
        except ValueError:
            logger.warning("Task list response is not JSON")
            self.tasks = []
            self.error = MSG_INVALID_RESPONSE
        else:
            if isinstance(data, list):
                self.tasks = data
            else:
                logger.warning("Task list response is not an array: %r", data)
                self.tasks = []
                self.error = MSG_INVALID_RESPONSE
        finally:
            self.loading = False

    # -- mutations -----------------------------------------------------------

    def set_draft(self, title: str, description: str) -> None:
        self.draft = {"title": title, "description": description}

    def submit(self) -> bool:
        """Create a task from the draft, then refetch and clear the form."""
        self.error = None
        try:
            self._http.post(TASKS_PATH, json=self.draft).raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Creating task failed: %s", exc)
            self.error = MSG_CREATE_FAILED
            return False
        self.refresh()
        self.draft = {"title": "", "description": ""}
        return True

    def toggle(self, task: dict[str, Any]) -> bool:
        """Resubmit *task* with its status flipped."""
        new_status = "completed" if task.get("status") == "pending" else "pending"
        try:
            self._http.put(
                f"{TASKS_PATH}/{task['id']}", json={**task, "status": new_status}
            ).raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Updating task %s failed: %s", task.get("id"), exc)
            self.error = MSG_UPDATE_FAILED
            return False
        self.refresh()
        return True

    def delete(self, task_id: int) -> bool:
        try:
            self._http.delete(f"{TASKS_PATH}/{task_id}").raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Deleting task %s failed: %s", task_id, exc)
            self.error = MSG_DELETE_FAILED
            return False
        self.refresh()
        return True

    # -- rendering -----------------------------------------------------------

    def render(self) -> str:
        lines = ["My Tasks", ""]
        if self.error:
            lines += [f"! {self.error}", ""]

        if self.loading:
            lines.append("Loading...")
        elif not self.tasks:
            lines += ["No tasks yet", "Create a new task above"]
        else:
            for task in self.tasks:
                mark = "x" if task.get("status") == "completed" else " "
                lines.append(f"[{mark}] #{task.get('id')} {task.get('title')}")
                lines.append(f"      {task.get('description')}")

        stats = self.stats
        lines += [
            "",
            f"Total: {stats.total}  Pending: {stats.pending}  Completed: {stats.completed}",
        ]
        if stats.show_progress:
            filled = stats.completed * PROGRESS_WIDTH // stats.total
            bar = "#" * filled + "-" * (PROGRESS_WIDTH - filled)
            lines.append(f"[{bar}] {stats.percent_completed}% completed")
        return "\n".join(lines)


def main() -> None:
    """Print the current board of the API at ``TASKAPP_URL``."""
    base_url = os.getenv("TASKAPP_URL", "http://127.0.0.1:8000")
    with httpx.Client(base_url=base_url) as http:
        board = TaskBoard(http)
        board.refresh()
        print(board.render())


if __name__ == "__main__":
    main()
