# src/shared_tasklist/tasks/task_worker.py

from __future__ import annotations

"""
Task worker.

A small polling loop run by one agent that:
- lists pending tasks in a list,
- tries to claim each one (losing a race or an unmet dependency just skips it),
- hands the claimed task to an injected handler,
- marks it completed, or releases it back to pending if the handler failed.

What "doing the work" means belongs to the handler, not the worker.
"""

import asyncio
import logging

from ..core.ports import TaskHandler, TaskRepo
from ..errors import BlockedByIncomplete, InvalidTransition, NotFound, TaskListError
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


async def run_one_pass(
        task_store: TaskRepo,
        handler: TaskHandler,
        *,
        list_id: str,
        owner: str,
        batch_limit: int = 32,
) -> list[str]:
    """
    Claim and run every currently claimable pending task once.

    Returns ids of tasks completed in this pass.
    """
    done: list[str] = []

    try:
        pending = await task_store.list_tasks(list_id, TaskStatus.PENDING)
    except TaskListError:
        logger.exception("list_tasks failed list=%s", list_id)
        return done

    for candidate in pending[: max(0, int(batch_limit))]:
        try:
            task: Task = await task_store.claim(list_id, candidate.id, owner)
        except (InvalidTransition, BlockedByIncomplete, NotFound) as e:
            logger.debug("Skip task %s: %s", candidate.id, e)
            continue
        except TaskListError:
            logger.exception("claim failed list=%s task_id=%s", list_id, candidate.id)
            continue

        try:
            await handler(task)
        except Exception:
            logger.exception("handler failed list=%s task_id=%s", list_id, task.id)
            try:
                # Owner is kept so the last claimant stays visible.
                await task_store.update(list_id, task.id, status=TaskStatus.PENDING)
            except TaskListError:
                logger.exception("release failed list=%s task_id=%s", list_id, task.id)
            continue

        try:
            await task_store.update(list_id, task.id, status=TaskStatus.COMPLETED)
        except TaskListError:
            logger.exception("complete failed list=%s task_id=%s", list_id, task.id)
            continue

        logger.info("Task %s -> completed (owner=%s)", task.id, owner)
        done.append(task.id)

    return done


async def run_task_worker(
        task_store: TaskRepo,
        handler: TaskHandler,
        *,
        list_id: str,
        owner: str,
        interval_seconds: float = 5.0,
        batch_limit: int = 32,
) -> None:
    """
    Poll list_id forever, running run_one_pass every interval_seconds.

    To stop the worker, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))
    logger.info("Task worker started list=%s owner=%s interval=%.2fs", list_id, owner, sleep_s)

    while True:
        await run_one_pass(
            task_store,
            handler,
            list_id=list_id,
            owner=owner,
            batch_limit=batch_limit,
        )
        await asyncio.sleep(sleep_s)
