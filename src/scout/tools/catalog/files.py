"""File operation contracts."""

from __future__ import annotations

from pydantic import Field, StrictBool, StrictInt

from scout.tools.base import ToolContract, ToolInput
from scout.tools.types import AbsolutePath, NonEmptyStr


class LsInput(ToolInput):
    path: AbsolutePath
    ignore: list[str] | None = None


class ReadInput(ToolInput):
    file_path: AbsolutePath
    offset: StrictInt | None = Field(default=None, gt=0, description="1-indexed line to start from")
    limit: StrictInt | None = Field(default=None, gt=0)


class GlobInput(ToolInput):
    pattern: NonEmptyStr
    path: AbsolutePath | None = None


class GrepInput(ToolInput):
    pattern: NonEmptyStr
    include: str | None = None
    path: AbsolutePath | None = None


class EditOperation(ToolInput):
    old_string: str = Field(min_length=1)
    new_string: str
    replace_all: StrictBool = False


class EditInput(ToolInput):
    file_path: AbsolutePath
    edits: list[EditOperation] = Field(min_length=1)


class WriteInput(ToolInput):
    file_path: AbsolutePath
    content: str


def edits_change_content(data: EditInput) -> list[str]:
    return [
        f"edits.{index}.new_string: new_string must differ from old_string"
        for index, edit in enumerate(data.edits)
        if edit.old_string == edit.new_string
    ]


LS = ToolContract(
    name="ls",
    description="Directory listing tool for exploring file system structure.",
    input_schema=LsInput,
)
READ = ToolContract(
    name="read",
    description="File content reader with multimodal support.",
    input_schema=ReadInput,
)
GLOB = ToolContract(
    name="glob",
    description="File pattern matching tool.",
    input_schema=GlobInput,
)
GREP = ToolContract(
    name="grep",
    description="Content search tool with regex support.",
    input_schema=GrepInput,
)
EDIT = ToolContract(
    name="edit",
    description="Precise file content editor. Performs exact string replacements atomically.",
    input_schema=EditInput,
    refinements=(edits_change_content,),
)
WRITE = ToolContract(
    name="write",
    description="File creation and overwrite tool.",
    input_schema=WriteInput,
)

CONTRACTS = (LS, READ, GLOB, GREP, EDIT, WRITE)
