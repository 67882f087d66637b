# src/shared_tasklist/tasks/task_store.py

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from ..errors import (
    BlockedByIncomplete,
    CorruptState,
    InvalidTransition,
    NotFound,
    PersistenceError,
    ValidationError,
)
from .task_models import Task, TaskList, TaskStatus, now_ts

logger = logging.getLogger(__name__)


class TaskStore:
    """
    File-backed store of task lists, one JSON file per list.

    Layout: <data_dir>/tasks/<list_id>.json holding the full list snapshot
    (counter + every task). Lists are loaded lazily on first reference and
    cached for the lifetime of the store.

    Concurrency:
    - one asyncio.Lock guards the mapping of ALL lists, reads included
    - every operation (lazy load, check, mutate, persist) runs inside a single
      acquisition, so claim's check-then-mutate cannot interleave with anything
    - file I/O runs in a worker thread

    Durability is best-effort: if persisting fails after a mutation, the
    in-memory change stays and the next successful save of that list catches
    the file up.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self._dir = Path(data_dir) / "tasks"
        self._lists: dict[str, TaskList] = {}
        self._lock = asyncio.Lock()
        logger.info("TaskStore ready dir=%s", self._dir)

    def file_path(self, list_id: str) -> Path:
        if (
            not list_id
            or list_id in (".", "..")
            or any(ch in list_id for ch in ("/", "\\", "\x00"))
        ):
            raise ValidationError(f"invalid list_id: {list_id!r}")
        return self._dir / f"{list_id}.json"

    # ---- low-level helpers (call with the lock held) ----

    async def _ensure_list(self, list_id: str) -> TaskList:
        cached = self._lists.get(list_id)
        if cached is not None:
            return cached

        path = self.file_path(list_id)
        raw = await asyncio.to_thread(_read_file, path)
        if raw is None:
            tlist = TaskList()
            logger.info("Task list %s initialized empty", list_id)
        else:
            try:
                tlist = TaskList.from_dict(json.loads(raw))
            except ValueError as e:
                # json.JSONDecodeError is a ValueError too.
                raise CorruptState(path, str(e)) from e
            logger.info(
                "Task list %s loaded from %s (tasks=%d next_id=%d)",
                list_id,
                path,
                len(tlist.tasks),
                tlist.next_id,
            )

        self._lists[list_id] = tlist
        return tlist

    async def _persist(self, list_id: str, tlist: TaskList) -> None:
        path = self.file_path(list_id)
        try:
            data = json.dumps(tlist.to_dict(), ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"failed to serialize task list {list_id}: {e}") from e

        try:
            await asyncio.to_thread(_write_file, path, data)
        except OSError as e:
            raise PersistenceError(f"failed to write task list {list_id} to {path}: {e}") from e

    # ---- public API ----

    async def create(self, list_id: str, subject: str, description: str = "") -> Task:
        async with self._lock:
            tlist = await self._ensure_list(list_id)

            ts = now_ts()
            task = Task(
                id=tlist.allocate_id(),
                subject=subject,
                description=description,
                status=TaskStatus.PENDING,
                created_at=ts,
                updated_at=ts,
            )
            tlist.tasks[task.id] = task
            logger.debug("Task created list=%s id=%s subject=%r", list_id, task.id, subject)

            await self._persist(list_id, tlist)
            return task.copy()

    async def list_tasks(
        self, list_id: str, status_filter: TaskStatus | None = None
    ) -> list[Task]:
        async with self._lock:
            tlist = await self._ensure_list(list_id)
            return [
                t.copy()
                for t in tlist.sorted_tasks()
                if status_filter is None or t.status == status_filter
            ]

    async def get(self, list_id: str, task_id: str) -> Task | None:
        async with self._lock:
            tlist = await self._ensure_list(list_id)
            task = tlist.tasks.get(task_id)
            return task.copy() if task is not None else None

    async def update(
        self,
        list_id: str,
        task_id: str,
        *,
        status: TaskStatus | None = None,
        subject: str | None = None,
        description: str | None = None,
        owner: str | None = None,
        blocked_by: list[str] | None = None,
    ) -> Task:
        """
        Overwrite only the supplied fields.

        Any status may be set here, bypassing claim's checks.
        """
        async with self._lock:
            tlist = await self._ensure_list(list_id)
            task = tlist.tasks.get(task_id)
            if task is None:
                raise NotFound(task_id)

            if status is not None:
                task.status = status
            if subject is not None:
                task.subject = subject
            if description is not None:
                task.description = description
            if owner is not None:
                task.owner = owner
            if blocked_by is not None:
                task.blocked_by = list(blocked_by)
            task.touch()
            logger.debug("Task updated list=%s id=%s status=%s", list_id, task_id, task.status.value)

            updated = task.copy()
            await self._persist(list_id, tlist)
            return updated

    async def claim(self, list_id: str, task_id: str, owner: str) -> Task:
        """
        Atomically claim a pending task whose dependencies are all completed.

        Sets owner and status=in_progress. On refusal the task is left untouched.
        """
        async with self._lock:
            tlist = await self._ensure_list(list_id)
            task = tlist.tasks.get(task_id)
            if task is None:
                raise NotFound(task_id)

            if task.status != TaskStatus.PENDING:
                logger.warning(
                    "Claim refused list=%s id=%s owner=%s status=%s",
                    list_id,
                    task_id,
                    owner,
                    task.status.value,
                )
                raise InvalidTransition(task_id, task.status.value)

            blocked = tlist.incomplete_dependencies(task)
            if blocked:
                logger.warning(
                    "Claim refused list=%s id=%s owner=%s blocked_by=%s",
                    list_id,
                    task_id,
                    owner,
                    ",".join(blocked),
                )
                raise BlockedByIncomplete(task_id, blocked)

            task.owner = owner
            task.status = TaskStatus.IN_PROGRESS
            task.touch()
            logger.info("Task claimed list=%s id=%s owner=%s", list_id, task_id, owner)

            claimed = task.copy()
            await self._persist(list_id, tlist)
            return claimed


def _read_file(path: Path) -> str | None:
    try:
        return path.read_text("utf-8")
    except FileNotFoundError:
        return None
    except UnicodeDecodeError as e:
        raise CorruptState(path, str(e)) from e
    except OSError as e:
        raise PersistenceError(f"failed to read task list file {path}: {e}") from e


def _write_file(path: Path, data: str) -> None:
    # Full snapshot, written to a sibling temp file then renamed over the target.
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(data, "utf-8")
    os.replace(tmp, path)
