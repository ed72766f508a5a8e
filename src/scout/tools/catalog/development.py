"""Shell, project and version control contracts."""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import AfterValidator, Field, StrictInt

from scout.tools.base import ToolContract, ToolInput
from scout.tools.types import AbsolutePath, NonEmptyStr, PRAction, RepoFormat, TemplateType

RESERVED_COMMANDS = ("find", "grep", "cat", "head", "tail", "ls")
_RESERVED_PREFIX = re.compile(rf"^(?:{'|'.join(RESERVED_COMMANDS)})(?:\s|$)")


def _not_reserved_command(value: str) -> str:
    if _RESERVED_PREFIX.match(value):
        raise ValueError(
            "Use specialized tools (Grep, Glob, Read, LS) instead of "
            "find, grep, cat, head, tail, ls."
        )
    return value


class BashRunInput(ToolInput):
    command: Annotated[str, Field(min_length=1), AfterValidator(_not_reserved_command)]
    description: str = Field(min_length=5, max_length=150)
    timeout: StrictInt = Field(default=10, ge=1, le=600)


class BashCommandCheckInput(ToolInput):
    command_id: StrictInt = Field(gt=0)


class CodeTemplateInput(ToolInput):
    name: NonEmptyStr
    type: TemplateType = "website"


class DownloadProjectFileInput(ToolInput):
    filename: NonEmptyStr
    destination: AbsolutePath | None = None


class GithubPrInput(ToolInput):
    title: NonEmptyStr
    summary: NonEmptyStr
    branch_name: NonEmptyStr = Field(alias="branchName")
    repo: RepoFormat
    action: PRAction


class GithubCommandInput(ToolInput):
    command: NonEmptyStr
    description: NonEmptyStr
    repo: RepoFormat


BASH_RUN = ToolContract(
    name="bash_run",
    description="Shell command execution tool.",
    input_schema=BashRunInput,
)
BASH_COMMAND_CHECK = ToolContract(
    name="bash_command_check",
    description="Background command status checker.",
    input_schema=BashCommandCheckInput,
)
CODE_TEMPLATE = ToolContract(
    name="code_template",
    description="Project template initialization tool.",
    input_schema=CodeTemplateInput,
)
DOWNLOAD_PROJECT_FILE = ToolContract(
    name="download_project_file",
    description="Project file downloader.",
    input_schema=DownloadProjectFileInput,
)
GITHUB_PR = ToolContract(
    name="github_pr",
    description="GitHub pull request creator/updater.",
    input_schema=GithubPrInput,
)
GITHUB_COMMAND = ToolContract(
    name="github_command",
    description="GitHub CLI and Git command execution tool.",
    input_schema=GithubCommandInput,
)

CONTRACTS = (
    BASH_RUN,
    BASH_COMMAND_CHECK,
    CODE_TEMPLATE,
    DOWNLOAD_PROJECT_FILE,
    GITHUB_PR,
    GITHUB_COMMAND,
)
