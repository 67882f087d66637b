# src/shared_tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..tasks.task_api import TaskListTool
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    settings: Settings
    task_store: TaskStore
    tool: TaskListTool

    # Current list / claimant for console commands; /use and /claim change them.
    list_id: str
    agent_name: str
