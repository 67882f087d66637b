# tests/test_commands.py

from __future__ import annotations

import pytest

from shared_tasklist.cli.commands import CommandRegistry, registry


@pytest.mark.asyncio
async def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called = {"a": 0}

    async def handler(state, args):
        called["a"] += 1
        return "a:" + ",".join(args)

    reg.register("alpha", handler, "alpha", aliases=["al"])

    assert await reg.handle(state, "/alpha x y") == "a:x,y"
    assert await reg.handle(state, "/AL") == "a:"
    assert called["a"] == 2
    assert "/alpha - alpha" in reg.build_help()


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_task_commands_end_to_end(state) -> None:
    out = await registry.handle(state, "/create Fix bug | It crashes")
    assert out == "Created #1 [pending] Fix bug (owner: -)"

    await registry.handle(state, "/create Write test")
    out = await registry.handle(state, "/block 2 1")
    assert out is not None and out.endswith("blocked_by: 1")

    out = await registry.handle(state, "/claim 2")
    assert out == "Error: task 2 is blocked by incomplete tasks: 1"

    out = await registry.handle(state, "/claim 1")
    assert out == "Claimed #1 [in_progress] Fix bug (owner: tester)"

    out = await registry.handle(state, "/claim 1 someone-else")
    assert out == "Error: task 1 cannot be claimed: current status is in_progress"

    await registry.handle(state, "/done 1")
    out = await registry.handle(state, "/claim 2 agent-b")
    assert out == "Claimed #2 [in_progress] Write test (owner: agent-b) blocked_by: 1"

    out = await registry.handle(state, "/get 1")
    assert out == "#1 [completed] Fix bug (owner: tester)\n  It crashes"

    out = await registry.handle(state, "/list in_progress")
    assert out == "Tasks in default (1):\n#2 [in_progress] Write test (owner: agent-b) blocked_by: 1"


@pytest.mark.asyncio
async def test_use_switches_list(state) -> None:
    assert await registry.handle(state, "/use sprint") == "Switched to list sprint."
    assert await registry.handle(state, "/list") == "No tasks in list sprint."
    await registry.handle(state, "/create hello")
    assert (state.settings.data_dir / "tasks" / "sprint.json").exists()
    assert "List: sprint" in (await registry.handle(state, "/status") or "")


@pytest.mark.asyncio
async def test_errors_are_returned_as_text(state) -> None:
    assert await registry.handle(state, "/get 9") == "Error: task not found: 9"
    assert await registry.handle(state, "/list bogus") == "Error: unknown task status: bogus"
    assert await registry.handle(state, "/get") == "Usage: /get <task_id>"
