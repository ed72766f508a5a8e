"""Language server, sub-agent and handoff contracts."""

from __future__ import annotations

from pydantic import Field, StrictBool, StrictInt

from scout.tools.base import ToolContract, ToolInput
from scout.tools.types import AbsolutePath, LSPOperation, Language, NonEmptyStr

POSITION_OPERATIONS = frozenset({"definitions", "references", "hover"})
FILE_OPERATIONS = POSITION_OPERATIONS | {"symbols", "diagnostics"}


class LspInput(ToolInput):
    operation: LSPOperation
    file_path: AbsolutePath | None = None
    line: StrictInt | None = Field(default=None, ge=0, description="0-based")
    column: StrictInt | None = Field(default=None, ge=0, description="0-based")
    query: str | None = None
    language: Language | None = None
    repo_root: AbsolutePath | None = None
    verbose: StrictBool = False


def lsp_operation_requirements(data: LspInput) -> list[str]:
    operation = data.operation
    missing: list[str] = []
    if operation in FILE_OPERATIONS and not data.file_path:
        missing.append("file_path")
    if operation in POSITION_OPERATIONS:
        if data.line is None:
            missing.append("line")
        if data.column is None:
            missing.append("column")
    if operation == "workspace-symbols" and not data.query:
        missing.append("query")
    return [f"{name}: required for operation '{operation}'" for name in missing]


class ReadAgentInput(ToolInput):
    task: NonEmptyStr
    description: NonEmptyStr


class HandoffInput(ToolInput):
    primary_request: NonEmptyStr
    reason: NonEmptyStr
    key_topics: NonEmptyStr
    files_and_resources: NonEmptyStr
    problem_solving: NonEmptyStr
    current_task: NonEmptyStr
    next_step: NonEmptyStr
    errors_and_fixes: str | None = None


LSP = ToolContract(
    name="lsp",
    description="Language Server Protocol (LSP) interface tool.",
    input_schema=LspInput,
    refinements=(lsp_operation_requirements,),
)
READ_AGENT = ToolContract(
    name="read_agent",
    description="Sub-agent execution tool for read-only tasks.",
    input_schema=ReadAgentInput,
)
HANDOFF = ToolContract(
    name="handoff",
    description="Context management tool. Resets context and hands off to a fresh agent.",
    input_schema=HandoffInput,
)

CONTRACTS = (LSP, READ_AGENT, HANDOFF)
