"""User interface contracts: GUI input, progress reports, questions and tasks.

These are the operations whose inputs and results feed back into shared
state, so their cross-field rules are the strictest in the catalog.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, StrictBool, StrictFloat, StrictInt

from scout.tools.base import ToolContract, ToolInput
from scout.tools.types import (
    AbsolutePath,
    ComputerAction,
    Coordinate,
    Emoji,
    NonEmptyStr,
    ScrollDirection,
    TaskItem,
)

POINTER_ACTIONS = frozenset(
    {"mouse_move", "left_click", "right_click", "middle_click", "double_click", "triple_click"}
)
TEXT_ACTIONS = frozenset({"type", "key"})


class ComputerInput(ToolInput):
    action: ComputerAction
    coordinate: Coordinate | None = None
    text: str | None = None
    duration: StrictFloat | None = Field(default=None, gt=0)
    scroll_direction: ScrollDirection | None = None
    scroll_amount: StrictInt | None = Field(default=None, ge=0)
    start_coordinate: Coordinate | None = None


def computer_action_requirements(data: ComputerInput) -> list[str]:
    """Return the parameters the chosen action needs but did not get."""
    action = data.action
    missing: list[str] = []
    if action in POINTER_ACTIONS and data.coordinate is None:
        missing.append("coordinate")
    if action == "left_click_drag":
        if data.coordinate is None:
            missing.append("coordinate")
        if data.start_coordinate is None:
            missing.append("start_coordinate")
    if (action in TEXT_ACTIONS or action == "hold_key") and not data.text:
        missing.append("text")
    if action in {"hold_key", "wait"} and data.duration is None:
        missing.append("duration")
    if action == "scroll":
        if data.scroll_direction is None:
            missing.append("scroll_direction")
        if data.scroll_amount is None:
            missing.append("scroll_amount")
    return [f"{name}: required for action '{action}'" for name in missing]


class MessageUpdateInput(ToolInput):
    message: NonEmptyStr
    status: NonEmptyStr
    status_emoji: Emoji


class InputQuestion(ToolInput):
    type: Literal["text", "number", "date"]
    question: NonEmptyStr
    placeholder: str | int | float | None = None
    suggestions: list[str] | None = None


class SelectOption(ToolInput):
    emoji: Emoji
    title: NonEmptyStr
    prompt: NonEmptyStr


class MessageAskInput(ToolInput):
    message: NonEmptyStr
    attachment: AbsolutePath | None = None
    follow_ups_input: list[InputQuestion] | None = Field(default=None, min_length=2)
    follow_ups_select: list[SelectOption] | None = Field(default=None, min_length=2)


def exactly_one_follow_up(data: MessageAskInput) -> list[str]:
    if data.follow_ups_input is not None and data.follow_ups_select is not None:
        return ["(root): Cannot provide both follow_ups_input and follow_ups_select."]
    if data.follow_ups_input is None and data.follow_ups_select is None:
        return [
            "(root): MUST include at least two follow-ups "
            "(either follow_ups_input or follow_ups_select)."
        ]
    return []


class TodoInput(ToolInput):
    tasks: list[TaskItem] = Field(min_length=1)
    request_user_approval: StrictBool = False


def single_task_in_progress(data: TodoInput) -> list[str]:
    active = [task.id for task in data.tasks if task.status == "in_progress"]
    if len(active) > 1:
        return [
            "tasks: Only one task can be 'in_progress' at a time "
            f"(found {len(active)}: {', '.join(active)})."
        ]
    return []


COMPUTER = ToolContract(
    name="computer",
    description="Mouse and keyboard interface tool. Screen resolution is 1024x768.",
    input_schema=ComputerInput,
    refinements=(computer_action_requirements,),
)
MESSAGE_UPDATE = ToolContract(
    name="message_update",
    description="User progress update tool (Non-blocking).",
    input_schema=MessageUpdateInput,
)
MESSAGE_ASK = ToolContract(
    name="message_ask",
    description="User question and task completion tool (BLOCKS EXECUTION).",
    input_schema=MessageAskInput,
    refinements=(exactly_one_follow_up,),
)
TODO = ToolContract(
    name="todo",
    description="Task management tool.",
    input_schema=TodoInput,
    refinements=(single_task_in_progress,),
)

CONTRACTS = (COMPUTER, MESSAGE_UPDATE, MESSAGE_ASK, TODO)
