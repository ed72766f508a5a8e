"""Failure taxonomy and structured error documents."""

from __future__ import annotations

from enum import Enum
from typing import Any

FAILURE_STATUS = "FAILURE"


class FailureTag(str, Enum):
    """Categories of per-call failures fed back to the oracle."""

    CONTRACT_VIOLATION = "CONTRACT_VIOLATION"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    REJECTED = "REJECTED"
    TIMEOUT = "TIMEOUT"
    TOOL_ERROR = "TOOL_ERROR"


class ConfigurationError(RuntimeError):
    """Raised at construction time when a required setting is missing."""


class RunCancelled(RuntimeError):
    """Raised inside the graph when the caller cancels a run."""


def error_document(
    tool: str,
    tool_input: Any,
    message: str,
    tag: FailureTag,
    **extra: Any,
) -> dict[str, Any]:
    """Build the error payload returned to the oracle in place of a result."""
    document: dict[str, Any] = {
        "error": message,
        "tool": tool,
        "input": tool_input,
        "status": FAILURE_STATUS,
        "failure": tag.value,
    }
    for key, value in extra.items():
        if value is not None:
            document[key] = value
    return document


def is_error_document(document: Any) -> bool:
    return isinstance(document, dict) and document.get("status") == FAILURE_STATUS
