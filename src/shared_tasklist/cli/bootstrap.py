# src/shared_tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires one TaskStore into the task_list tool and AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.state import AppState
from ..tasks.task_api import TaskListTool
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    store = TaskStore(settings.data_dir)
    tool = TaskListTool(store, default_list_id=settings.default_list_id)
    logger.debug("State created data_dir=%s list=%s", settings.data_dir, settings.default_list_id)

    return AppState(
        settings=settings,
        task_store=store,
        tool=tool,
        list_id=settings.default_list_id,
        agent_name=settings.agent_name,
    )
