"""Shared argument types and refinements used across tool contracts."""

from __future__ import annotations

import re
from typing import Annotated, Literal

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    Field,
    StrictInt,
    TypeAdapter,
    ValidationError,
)

SCREEN_WIDTH = 1024
SCREEN_HEIGHT = 768

ALLOWED_ROOTS = ("/project/workspace", "/home/scrapybara")
_ABSOLUTE_PATH = re.compile(r"^/(?:project/workspace|home/scrapybara)/.*")
_REPO = re.compile(r"^[a-zA-Z0-9_.-]+/[a-zA-Z0-9_.-]+$")
_URL = TypeAdapter(AnyUrl)


def _absolute_path(value: str) -> str:
    if not _ABSOLUTE_PATH.match(value):
        raise ValueError(
            "Path must be absolute (e.g., /project/workspace/file or /home/scrapybara/file)"
        )
    return value


def _png_path(value: str) -> str:
    if not value.endswith(".png"):
        raise ValueError("Path must end with .png")
    return value


def _repo(value: str) -> str:
    if not _REPO.match(value):
        raise ValueError('Repository must be in "owner/repo" format')
    return value


def _url(value: str) -> str:
    try:
        _URL.validate_python(value)
    except ValidationError as exc:
        raise ValueError("Must be a valid URL") from exc
    return value


AbsolutePath = Annotated[str, AfterValidator(_absolute_path)]
PngPath = Annotated[str, AfterValidator(_absolute_path), AfterValidator(_png_path)]
RepoFormat = Annotated[str, AfterValidator(_repo)]
Url = Annotated[str, AfterValidator(_url)]
NonEmptyStr = Annotated[str, Field(min_length=1)]
Emoji = Annotated[str, Field(min_length=1, max_length=4)]

Coordinate = tuple[
    Annotated[StrictInt, Field(ge=0, le=SCREEN_WIDTH)],
    Annotated[StrictInt, Field(ge=0, le=SCREEN_HEIGHT)],
]

AspectRatio = Literal["square", "landscape", "portrait"]
DateRange = Literal["all", "past_hour", "past_day", "past_week", "past_month", "past_year"]
TemplateType = Literal["website", "presentation"]
PRAction = Literal["create", "update"]
SocialNetwork = Literal["twitter", "bluesky"]
ScrollDirection = Literal["up", "down", "left", "right"]
TaskStatus = Literal["pending", "in_progress", "completed", "cancelled"]
ComputerAction = Literal[
    "key",
    "hold_key",
    "type",
    "cursor_position",
    "mouse_move",
    "left_mouse_down",
    "left_mouse_up",
    "left_click",
    "left_click_drag",
    "right_click",
    "middle_click",
    "double_click",
    "triple_click",
    "scroll",
    "wait",
    "screenshot",
]
LSPOperation = Literal[
    "definitions",
    "references",
    "hover",
    "symbols",
    "workspace-symbols",
    "diagnostics",
]
Language = Literal[
    "python",
    "typescript",
    "javascript",
    "java",
    "rust",
    "csharp",
    "go",
    "dart",
    "ruby",
    "kotlin",
    "cpp",
]


class TaskItem(BaseModel):
    id: NonEmptyStr
    title: NonEmptyStr
    status: TaskStatus
