"""Tool contract registry."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from scout.tools.base import ToolContract, ValidationOutcome
from scout.tools.catalog import ALL_CONTRACTS


class ToolName(str, Enum):
    """Closed set of operations the environment understands."""

    LS = "ls"
    READ = "read"
    GLOB = "glob"
    GREP = "grep"
    EDIT = "edit"
    WRITE = "write"
    IMAGE_GENERATE = "image_generate"
    IMAGE_EDIT = "image_edit"
    IMAGE_SEARCH = "image_search"
    WEB_SEARCH = "web_search"
    BROWSER_NAVIGATE = "browser_navigate"
    WEB_DOWNLOAD = "web_download"
    BASH_RUN = "bash_run"
    BASH_COMMAND_CHECK = "bash_command_check"
    CODE_TEMPLATE = "code_template"
    DOWNLOAD_PROJECT_FILE = "download_project_file"
    GITHUB_PR = "github_pr"
    SOCIALS_SEARCH = "socials_search"
    COMPUTER = "computer"
    MESSAGE_UPDATE = "message_update"
    MESSAGE_ASK = "message_ask"
    TODO = "todo"
    LSP = "lsp"
    READ_AGENT = "read_agent"
    HANDOFF = "handoff"
    GITHUB_COMMAND = "github_command"

    @classmethod
    def lookup(cls, name: str) -> "ToolName | None":
        try:
            return cls(name)
        except ValueError:
            return None


class UnknownToolError(KeyError):
    """Raised when a contract is registered for a name outside ``ToolName``."""


class ToolRegistry:
    """Registry of tool contracts, keyed by operation."""

    def __init__(self, contracts: Iterable[ToolContract] = ()) -> None:
        self._contracts: dict[ToolName, ToolContract] = {}
        self.register_all(contracts)

    def register(self, contract: ToolContract) -> None:
        key = ToolName.lookup(contract.name)
        if key is None:
            raise UnknownToolError(contract.name)
        self._contracts[key] = contract

    def register_all(self, contracts: Iterable[ToolContract]) -> None:
        for contract in contracts:
            self.register(contract)

    def get(self, name: str | ToolName) -> ToolContract | None:
        key = name if isinstance(name, ToolName) else ToolName.lookup(name)
        if key is None:
            return None
        return self._contracts.get(key)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        return len(self._contracts)

    def names(self) -> list[str]:
        return [key.value for key in self._contracts]

    def list(self) -> list[ToolContract]:
        return list(self._contracts.values())

    def as_mapping(self) -> Mapping[ToolName, ToolContract]:
        return MappingProxyType(self._contracts)

    def validate(self, name: str, arguments: Any) -> ValidationOutcome:
        """Validate ``arguments`` for ``name``; never raises."""
        contract = self.get(name)
        if contract is None:
            return ValidationOutcome(violations=(f"(root): unknown tool '{name}'",))
        return contract.validate(arguments)

    def openai_schemas(self) -> list[dict]:
        return [contract.openai_schema() for contract in self._contracts.values()]


def build_default_registry() -> ToolRegistry:
    return ToolRegistry(ALL_CONTRACTS)


DEFAULT_REGISTRY = build_default_registry()
