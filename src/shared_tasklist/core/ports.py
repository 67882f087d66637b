# src/shared_tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the worker and the connectors.

They depend on Protocols instead of the concrete TaskStore, so tests can pass
in-memory fakes and alternative backends stay swappable.
"""

from typing import Any, Awaitable, Protocol


class TaskRepo(Protocol):
    """Async task list operations (implemented by TaskStore)."""

    async def create(self, list_id: str, subject: str, description: str = "") -> Any: ...

    async def list_tasks(self, list_id: str, status_filter: Any | None = None) -> list[Any]: ...

    async def get(self, list_id: str, task_id: str) -> Any | None: ...

    async def update(
            self,
            list_id: str,
            task_id: str,
            *,
            status: Any | None = None,
            subject: str | None = None,
            description: str | None = None,
            owner: str | None = None,
            blocked_by: list[str] | None = None,
    ) -> Any: ...

    async def claim(self, list_id: str, task_id: str, owner: str) -> Any: ...


class TaskHandler(Protocol):
    """
    Worker-side port: does the actual work for a claimed task.

    Returning normally means the task is done; raising releases it.
    """

    def __call__(self, task: Any) -> Awaitable[None]: ...
