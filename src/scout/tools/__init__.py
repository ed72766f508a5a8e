"""Tool contracts and the registry that looks them up."""

from scout.tools.base import ToolContract, ValidationOutcome
from scout.tools.registry import DEFAULT_REGISTRY, ToolName, ToolRegistry, build_default_registry

__all__ = [
    "DEFAULT_REGISTRY",
    "ToolContract",
    "ToolName",
    "ToolRegistry",
    "ValidationOutcome",
    "build_default_registry",
]
