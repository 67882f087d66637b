# src/shared_tasklist/tasks/task_models.py

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from ..errors import ValidationError


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    The set is closed. Values are the on-disk / wire representation.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        try:
            return cls(raw)
        except ValueError:
            raise ValidationError(f"unknown task status: {raw}") from None


def now_ts() -> int:
    """Whole seconds since the epoch."""
    return int(time.time())


@dataclass(slots=True)
class Task:
    id: str
    subject: str
    description: str
    status: TaskStatus
    created_at: int
    updated_at: int

    owner: str | None = None
    # Advisory only: never read by the claim algorithm.
    blocks: list[str] = field(default_factory=list)
    # Enforced: every id must be completed before the task can be claimed.
    blocked_by: list[str] = field(default_factory=list)

    def copy(self) -> Task:
        return replace(self, blocks=list(self.blocks), blocked_by=list(self.blocked_by))

    def touch(self) -> None:
        # Wall clock may step backwards; keep updated_at monotonic per task.
        self.updated_at = max(self.updated_at, now_ts())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "subject": self.subject,
            "description": self.description,
            "status": self.status.value,
            "owner": self.owner,
            "blocks": list(self.blocks),
            "blocked_by": list(self.blocked_by),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """
        Decode a task record.

        description/owner/blocks/blocked_by are optional and take their defaults;
        everything else must be present. Raises ValueError on malformed input.
        """
        if not isinstance(data, dict):
            raise ValueError("task record must be an object")

        missing = [k for k in ("id", "subject", "status", "created_at", "updated_at") if k not in data]
        if missing:
            raise ValueError(f"task record missing fields: {', '.join(missing)}")

        try:
            status = TaskStatus(data["status"])
        except ValueError:
            raise ValueError(f"unknown task status: {data['status']}") from None

        owner = data.get("owner")
        if owner is not None and not isinstance(owner, str):
            raise ValueError("task owner must be a string or null")

        return cls(
            id=_as_str(data["id"], "id"),
            subject=_as_str(data["subject"], "subject"),
            description=_as_str(data.get("description", ""), "description"),
            status=status,
            created_at=_as_int(data["created_at"], "created_at"),
            updated_at=_as_int(data["updated_at"], "updated_at"),
            owner=owner,
            blocks=_as_str_list(data.get("blocks", []), "blocks"),
            blocked_by=_as_str_list(data.get("blocked_by", []), "blocked_by"),
        )


@dataclass(slots=True)
class TaskList:
    """All tasks under one list_id plus the id counter."""

    next_id: int = 1
    tasks: dict[str, Task] = field(default_factory=dict)

    def allocate_id(self) -> str:
        task_id = str(self.next_id)
        self.next_id += 1
        return task_id

    def sorted_tasks(self) -> list[Task]:
        return sorted(self.tasks.values(), key=lambda t: numeric_id(t.id))

    def incomplete_dependencies(self, task: Task) -> list[str]:
        """
        Ids in task.blocked_by that are not completed, in blocked_by order.

        An id with no matching task in this list counts as incomplete.
        """
        blocked: list[str] = []
        for dep_id in task.blocked_by:
            dep = self.tasks.get(dep_id)
            if dep is None or dep.status != TaskStatus.COMPLETED:
                blocked.append(dep_id)
        return blocked

    def to_dict(self) -> dict[str, Any]:
        return {
            "next_id": self.next_id,
            "tasks": {task_id: t.to_dict() for task_id, t in self.tasks.items()},
        }

    @classmethod
    def from_dict(cls, data: Any) -> TaskList:
        if not isinstance(data, dict):
            raise ValueError("task list must be an object")
        if "next_id" not in data or "tasks" not in data:
            raise ValueError("task list requires 'next_id' and 'tasks'")

        raw_tasks = data["tasks"]
        if not isinstance(raw_tasks, dict):
            raise ValueError("'tasks' must be an object")

        tasks = {str(key): Task.from_dict(val) for key, val in raw_tasks.items()}
        next_id = _as_int(data["next_id"], "next_id")

        # The counter must be past every stored id, or create would overwrite a task.
        highest = max((numeric_id(task_id) for task_id in tasks), default=0)
        if next_id < 1 or next_id <= highest:
            raise ValueError(f"'next_id' {next_id} is not past the highest task id {highest}")
        return cls(next_id=next_id, tasks=tasks)


def numeric_id(task_id: str) -> int:
    """Sort key for task ids; non-numeric ids sort first."""
    try:
        return int(task_id)
    except ValueError:
        return 0


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"'{name}' must be a string")
    return value


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{name}' must be an integer")
    return value


def _as_str_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{name}' must be a list of strings")
    return list(value)
