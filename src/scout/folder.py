"""Fold a batch of tool outcomes into a state delta."""

from __future__ import annotations

from typing import Any, Sequence

from scout.state import (
    ChatTurn,
    ImagePart,
    ImageUrl,
    StateDelta,
    TextPart,
    ToolOutcome,
    UiStatus,
)
from scout.tools.registry import ToolName
from scout.tools.types import TaskItem

SCREENSHOT_KEY = "screenshot"


def observation_turn(action: Any, screenshot: str) -> ChatTurn:
    """User turn carrying a screenshot and a caption naming the action taken."""
    return ChatTurn(
        role="user",
        content=[
            TextPart(text=f"[System Observation] Screenshot after action: {action}"),
            ImagePart(
                image_url=ImageUrl(url=f"data:image/png;base64,{screenshot}", detail="high")
            ),
        ],
    )


def fold_outcomes(outcomes: Sequence[ToolOutcome]) -> StateDelta:
    """Map outcomes to the state fields they update.

    Rules apply per outcome in order, so for the replaced fields the last
    qualifying outcome of the batch wins. Only screenshots add turns, and calls
    refused by their contract never touch the status or the task list.
    """
    updates: dict[str, Any] = {}
    turns: list[ChatTurn] = []
    for outcome in outcomes:
        name = ToolName.lookup(outcome.tool_name)
        if name is ToolName.COMPUTER:
            screenshot = outcome.result.get(SCREENSHOT_KEY)
            if isinstance(screenshot, str) and screenshot:
                updates["last_observation"] = screenshot
                turns.append(observation_turn(outcome.input.get("action"), screenshot))
        elif name is ToolName.MESSAGE_UPDATE and not outcome.rejected:
            updates["status"] = UiStatus(
                message=str(outcome.input.get("message")),
                status_text=str(outcome.input.get("status")),
                emoji=str(outcome.input.get("status_emoji")),
            )
        elif name is ToolName.TODO and not outcome.rejected:
            updates["task_list"] = [
                TaskItem.model_validate(task) for task in outcome.input.get("tasks", [])
            ]
    if turns:
        updates["conversation"] = turns
    return StateDelta(**updates)
