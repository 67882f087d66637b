# src/shared_tasklist/tasks/task_api.py

"""
task_list action adapter.

Turns a JSON-like call ({"action": "...", "list_id": "...", ...}) into one of the
TaskStore operations and returns a JSON-ready result. Failures are raised as
TaskListError subclasses; their str() is the message handed back to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..errors import NotFound, ValidationError
from .task_models import TaskStatus
from .task_store import TaskStore

logger = logging.getLogger(__name__)

DEFAULT_LIST_ID = "default"

ACTIONS = ("create", "list", "get", "update", "claim")


class TaskListTool:
    """Shared task list exposed as a single callable action."""

    name = "task_list"
    description = (
        "Manage a shared task list for coordinating work between agents. "
        "Supports creating tasks, listing with filters, claiming tasks, "
        "updating status, and tracking dependencies (blocked_by)."
    )

    def __init__(self, store: TaskStore, *, default_list_id: str = DEFAULT_LIST_ID) -> None:
        self.store = store
        self.default_list_id = default_list_id

    @classmethod
    def from_data_dir(cls, data_dir: str | Path, **kwargs: Any) -> TaskListTool:
        return cls(TaskStore(data_dir), **kwargs)

    @staticmethod
    def parameters_schema() -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": list(ACTIONS),
                    "description": "The operation to perform",
                },
                "list_id": {
                    "type": "string",
                    "description": "Task list identifier (default: 'default')",
                },
                "task_id": {
                    "type": "string",
                    "description": "Task ID (required for get, update, claim)",
                },
                "subject": {
                    "type": "string",
                    "description": "Task subject (required for create, optional for update)",
                },
                "description": {
                    "type": "string",
                    "description": "Task description",
                },
                "status": {
                    "type": "string",
                    "enum": [s.value for s in TaskStatus],
                    "description": "Status filter (for list) or new status (for update)",
                },
                "owner": {
                    "type": "string",
                    "description": "Owner name (required for claim, optional for update)",
                },
                "blocked_by": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Task IDs this task depends on (for update)",
                },
            },
            "required": ["action"],
        }

    async def execute(self, params: Mapping[str, Any]) -> dict[str, Any]:
        action = _opt_str(params, "action")
        if action is None:
            raise ValidationError("missing required parameter: action")
        list_id = _opt_str(params, "list_id") or self.default_list_id

        logger.debug("task_list operation action=%s list_id=%s", action, list_id)

        if action == "create":
            subject = _required(params, action, "subject")
            description = _opt_str(params, "description") or ""
            task = await self.store.create(list_id, subject, description)
            return task.to_dict()

        if action == "list":
            status_filter = _opt_status(params)
            tasks = await self.store.list_tasks(list_id, status_filter)
            return {"tasks": [t.to_dict() for t in tasks], "count": len(tasks)}

        if action == "get":
            task_id = _required(params, action, "task_id")
            found = await self.store.get(list_id, task_id)
            if found is None:
                raise NotFound(task_id)
            return found.to_dict()

        if action == "update":
            task_id = _required(params, action, "task_id")
            task = await self.store.update(
                list_id,
                task_id,
                status=_opt_status(params),
                subject=_opt_str(params, "subject"),
                description=_opt_str(params, "description"),
                owner=_opt_str(params, "owner"),
                blocked_by=_opt_str_list(params, "blocked_by"),
            )
            return task.to_dict()

        if action == "claim":
            task_id = _required(params, action, "task_id")
            owner = _required(params, action, "owner")
            task = await self.store.claim(list_id, task_id, owner)
            return task.to_dict()

        raise ValidationError(f"unknown action: {action}")


def _opt_str(params: Mapping[str, Any], key: str) -> str | None:
    val = params.get(key)
    return val if isinstance(val, str) else None


def _required(params: Mapping[str, Any], action: str, key: str) -> str:
    val = _opt_str(params, key)
    if val is None:
        raise ValidationError(f"{action} requires '{key}'")
    return val


def _opt_status(params: Mapping[str, Any]) -> TaskStatus | None:
    raw = _opt_str(params, "status")
    return TaskStatus.parse(raw) if raw is not None else None


def _opt_str_list(params: Mapping[str, Any], key: str) -> list[str] | None:
    val = params.get(key)
    if not isinstance(val, list):
        return None
    # Non-string entries are dropped.
    return [v for v in val if isinstance(v, str)]
