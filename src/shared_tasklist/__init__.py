"""Shared task list: a file-backed store agents use to create, claim and track work."""

from .errors import (
    BlockedByIncomplete,
    CorruptState,
    InvalidTransition,
    NotFound,
    PersistenceError,
    TaskListError,
    ValidationError,
)
from .tasks.task_api import TaskListTool
from .tasks.task_models import Task, TaskList, TaskStatus
from .tasks.task_store import TaskStore

__version__ = "0.1.0"

__all__ = [
    "BlockedByIncomplete",
    "CorruptState",
    "InvalidTransition",
    "NotFound",
    "PersistenceError",
    "Task",
    "TaskList",
    "TaskListError",
    "TaskListTool",
    "TaskStatus",
    "TaskStore",
    "ValidationError",
]
