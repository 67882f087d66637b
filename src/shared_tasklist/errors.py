# src/shared_tasklist/errors.py

"""Exceptions raised by the task store and the task_list action adapter.

The message of every exception is the user-visible error text; callers may
match on its fixed phrasing.
"""

from __future__ import annotations

from pathlib import Path


class TaskListError(Exception):
    """Base exception for shared task list failures."""


class NotFound(TaskListError):
    """Referenced task does not exist in its list."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"task not found: {task_id}")
        self.task_id = task_id


class ValidationError(TaskListError):
    """Missing required field or unparseable value."""


class InvalidTransition(TaskListError):
    """Claim attempted on a task that is not pending."""

    def __init__(self, task_id: str, status: str) -> None:
        super().__init__(f"task {task_id} cannot be claimed: current status is {status}")
        self.task_id = task_id
        self.status = status


class BlockedByIncomplete(TaskListError):
    """Claim attempted while some blocked_by tasks are not completed."""

    def __init__(self, task_id: str, blocked: list[str]) -> None:
        super().__init__(
            f"task {task_id} is blocked by incomplete tasks: {', '.join(blocked)}"
        )
        self.task_id = task_id
        self.blocked = list(blocked)


class PersistenceError(TaskListError):
    """Saving a list to disk failed (I/O or serialization)."""


class CorruptState(TaskListError):
    """A list file exists but could not be decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"corrupt task list file {path}: {reason}")
        self.path = path
        self.reason = reason
