# tests/test_task_api.py

from __future__ import annotations

from pathlib import Path

import pytest

from shared_tasklist.errors import (
    BlockedByIncomplete,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from shared_tasklist.tasks.task_api import TaskListTool


def test_tool_schema() -> None:
    assert TaskListTool.name == "task_list"
    schema = TaskListTool.parameters_schema()
    assert schema["type"] == "object"
    assert schema["required"] == ["action"]
    assert schema["properties"]["action"]["enum"] == ["create", "list", "get", "update", "claim"]
    assert schema["properties"]["status"]["enum"] == ["pending", "in_progress", "completed"]
    assert schema["properties"]["blocked_by"]["items"] == {"type": "string"}


@pytest.mark.asyncio
async def test_tool_create_and_list(tool: TaskListTool) -> None:
    result = await tool.execute(
        {"action": "create", "subject": "Test task", "description": "A test"}
    )
    assert result["id"] == "1"
    assert result["status"] == "pending"
    assert result["owner"] is None

    result = await tool.execute({"action": "list"})
    assert result["count"] == 1
    assert result["tasks"][0]["subject"] == "Test task"


@pytest.mark.asyncio
async def test_default_list_id_is_used(tool: TaskListTool, tmp_path: Path) -> None:
    await tool.execute({"action": "create", "subject": "x"})
    assert (tmp_path / "tasks" / "default.json").exists()

    other = await tool.execute({"action": "list", "list_id": "other"})
    assert other == {"tasks": [], "count": 0}


@pytest.mark.asyncio
async def test_create_description_defaults_to_empty(tool: TaskListTool) -> None:
    result = await tool.execute({"action": "create", "list_id": "demo", "subject": "s"})
    assert result["description"] == ""


@pytest.mark.asyncio
async def test_claim_flow_through_tool(tool: TaskListTool) -> None:
    await tool.execute({"action": "create", "list_id": "demo", "subject": "one"})
    await tool.execute({"action": "create", "list_id": "demo", "subject": "two"})

    updated = await tool.execute(
        {"action": "update", "list_id": "demo", "task_id": "2", "blocked_by": ["1", 7, None]}
    )
    assert updated["blocked_by"] == ["1"]

    with pytest.raises(BlockedByIncomplete, match="task 2 is blocked by incomplete tasks: 1"):
        await tool.execute({"action": "claim", "list_id": "demo", "task_id": "2", "owner": "x"})

    await tool.execute(
        {"action": "update", "list_id": "demo", "task_id": "1", "status": "completed"}
    )
    claimed = await tool.execute(
        {"action": "claim", "list_id": "demo", "task_id": "2", "owner": "x"}
    )
    assert claimed["status"] == "in_progress"
    assert claimed["owner"] == "x"

    with pytest.raises(InvalidTransition, match="current status is in_progress"):
        await tool.execute({"action": "claim", "list_id": "demo", "task_id": "2", "owner": "y"})

    in_progress = await tool.execute({"action": "list", "list_id": "demo", "status": "in_progress"})
    assert [t["id"] for t in in_progress["tasks"]] == ["2"]


@pytest.mark.asyncio
async def test_get_missing_task_is_an_error(tool: TaskListTool) -> None:
    with pytest.raises(NotFound) as exc:
        await tool.execute({"action": "get", "task_id": "5"})
    assert str(exc.value) == "task not found: 5"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("params", "message"),
    [
        ({"action": "create"}, "create requires 'subject'"),
        ({"action": "get"}, "get requires 'task_id'"),
        ({"action": "update"}, "update requires 'task_id'"),
        ({"action": "claim"}, "claim requires 'task_id'"),
        ({"action": "claim", "task_id": "1"}, "claim requires 'owner'"),
        ({"action": "delete"}, "unknown action: delete"),
        ({}, "missing required parameter: action"),
        ({"action": "list", "status": "done"}, "unknown task status: done"),
    ],
)
async def test_validation_messages(tool: TaskListTool, params, message) -> None:
    with pytest.raises(ValidationError) as exc:
        await tool.execute(params)
    assert str(exc.value) == message


@pytest.mark.asyncio
async def test_bad_status_on_update_leaves_task_untouched(tool: TaskListTool) -> None:
    created = await tool.execute({"action": "create", "subject": "s"})
    with pytest.raises(ValidationError):
        await tool.execute({"action": "update", "task_id": "1", "status": "bogus", "subject": "new"})
    assert await tool.execute({"action": "get", "task_id": "1"}) == created


@pytest.mark.asyncio
async def test_from_data_dir_shares_files_with_store(tmp_path: Path) -> None:
    first = TaskListTool.from_data_dir(tmp_path, default_list_id="team")
    await first.execute({"action": "create", "subject": "persisted"})

    second = TaskListTool.from_data_dir(tmp_path, default_list_id="team")
    got = await second.execute({"action": "get", "task_id": "1"})
    assert got["subject"] == "persisted"


@pytest.mark.asyncio
async def test_list_id_with_nul_byte_is_a_validation_error(tool: TaskListTool) -> None:
    with pytest.raises(ValidationError, match="invalid list_id"):
        await tool.execute({"action": "list", "list_id": "a\x00b"})
