# taskapp/errors.py
"""Errors raised by the task store."""


class TaskStoreError(Exception):
    """Base class for every error the store raises."""


class ValidationError(TaskStoreError):
    """One or more task fields violate their constraints.

    ``errors`` maps each offending field name to a human-readable message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid task field(s): {fields}")


class NotFound(TaskStoreError):
    """No non-deleted task exists with the requested id."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class StoreUnavailable(TaskStoreError):
    """The database could not be reached or refused the operation."""
