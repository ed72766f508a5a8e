"""Scout: a tool-calling agent loop with validated tool contracts."""

from scout.config import Settings
from scout.dispatcher import ToolDispatcher
from scout.environment import Environment, HttpEnvironment
from scout.executor import GraphExecutor, RunResult
from scout.folder import fold_outcomes
from scout.state import AgentState, ChatTurn, Proposal, ProposedCall, ToolOutcome
from scout.tools.registry import DEFAULT_REGISTRY, ToolName, ToolRegistry

__all__ = [
    "AgentState",
    "ChatTurn",
    "DEFAULT_REGISTRY",
    "Environment",
    "GraphExecutor",
    "HttpEnvironment",
    "Proposal",
    "ProposedCall",
    "RunResult",
    "Settings",
    "ToolDispatcher",
    "ToolName",
    "ToolOutcome",
    "ToolRegistry",
    "fold_outcomes",
]

__version__ = "0.1.0"
