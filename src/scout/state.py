"""Shared agent state, the records flowing through it, and its reducers."""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, TypedDict, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from scout.failures import FailureTag, is_error_document
from scout.tools.types import TaskItem

T = TypeVar("T")


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageUrl(BaseModel):
    url: str
    detail: Literal["auto", "low", "high"] = "auto"


class ImagePart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Annotated[TextPart | ImagePart, Field(discriminator="type")]


class ChatTurn(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str | list[ContentPart]

    @classmethod
    def user(cls, text: str) -> "ChatTurn":
        return cls(role="user", content=text)

    def images(self) -> list[ImagePart]:
        if isinstance(self.content, str):
            return []
        return [part for part in self.content if isinstance(part, ImagePart)]

    def to_message(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class UiStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    status_text: str = Field(alias="statusText")
    emoji: str


class ProposedCall(BaseModel):
    name: str
    args: dict[str, Any] = Field(default_factory=dict)
    id: str | None = None


class Proposal(BaseModel):
    calls: list[ProposedCall] = Field(default_factory=list)
    text: str | None = None

    @property
    def has_calls(self) -> bool:
        return bool(self.calls)


class ToolOutcome(BaseModel):
    tool_name: str
    input: dict[str, Any]
    result: dict[str, Any]
    call_id: str | None = None

    @property
    def failed(self) -> bool:
        return is_error_document(self.result)

    @property
    def rejected(self) -> bool:
        """True when the call never ran because its arguments broke the contract."""
        return self.failed and self.result.get("failure") == FailureTag.CONTRACT_VIOLATION.value

    def encode(self) -> str:
        """Result as the string-encoded document handed back to the oracle."""
        return json.dumps(self.result, ensure_ascii=False)


class ToolExchange(BaseModel):
    """One acting step: the calls proposed and the outcomes they produced.

    ``conversation_offset`` is the conversation length when the step ran, so
    the exchange can be replayed at the right point between turns.
    """

    conversation_offset: int
    calls: list[ProposedCall]
    outcomes: list[ToolOutcome]
    text: str | None = None


def append_items(left: list[T] | None, right: list[T] | None) -> list[T]:
    """Reducer for append-only sequences."""
    return [*(left or []), *(right or [])]


def replace_value(left: Any, right: Any) -> Any:
    """Reducer for last-write-wins fields."""
    return right


class AgentState(TypedDict, total=False):
    conversation: Annotated[list[ChatTurn], append_items]
    scratchpad: Annotated[list[ToolExchange], append_items]
    pending_proposal: Annotated[Proposal | None, replace_value]
    last_observation: Annotated[str | None, replace_value]
    status: Annotated[UiStatus | None, replace_value]
    task_list: Annotated[list[TaskItem] | None, replace_value]


class StateDelta(BaseModel):
    """Partial update to ``AgentState``.

    Only fields explicitly set count as present; everything else is left
    unchanged by the merge.
    """

    conversation: list[ChatTurn] | None = None
    last_observation: str | None = None
    status: UiStatus | None = None
    task_list: list[TaskItem] | None = None

    def to_update(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}

    @property
    def is_empty(self) -> bool:
        return not self.model_fields_set


def initial_state(task: str | None = None) -> AgentState:
    conversation = [ChatTurn.user(task)] if task else []
    return AgentState(conversation=conversation, scratchpad=[])


def merge_state(state: AgentState, update: dict[str, Any]) -> AgentState:
    """Apply ``update`` to ``state`` with the per-field reducers.

    The graph performs the same merge through its channels; this is the
    plain-function form used where no graph is running.
    """
    merged: dict[str, Any] = dict(state)
    for key, value in update.items():
        reducer = _REDUCERS[key]
        merged[key] = reducer(merged.get(key), value)
    return AgentState(**merged)


_REDUCERS = {
    "conversation": append_items,
    "scratchpad": append_items,
    "pending_proposal": replace_value,
    "last_observation": replace_value,
    "status": replace_value,
    "task_list": replace_value,
}
