# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from shared_tasklist.cli.bootstrap import create_initial_state
from shared_tasklist.config import Settings
from shared_tasklist.core.state import AppState
from shared_tasklist.tasks.task_api import TaskListTool
from shared_tasklist.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a per-test data dir.

    Built directly rather than via Settings.from_env(), to keep unit tests
    isolated from the developer's environment and .env file.
    """
    return Settings(
        app_name="shared-tasklist-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        default_list_id="default",
        agent_name="tester",
        console_enabled=False,
    )


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path)


@pytest.fixture()
def tool(store: TaskStore) -> TaskListTool:
    return TaskListTool(store)


@pytest.fixture()
def state(settings: Settings) -> AppState:
    return create_initial_state(settings=settings)
