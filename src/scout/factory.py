"""Shared construction helpers for the environment, oracle and executor."""

from __future__ import annotations

from scout.config import Settings
from scout.dispatcher import ToolDispatcher
from scout.environment import Environment, HttpEnvironment
from scout.executor import GraphExecutor
from scout.failures import ConfigurationError
from scout.models.base import BaseOracle
from scout.models.mock import ScriptedOracle
from scout.models.openai_compat import OpenAICompatOracle
from scout.tools.registry import ToolRegistry, build_default_registry
from scout.util.logging import get_logger, set_verbose

logger = get_logger(__name__)


def build_registry() -> ToolRegistry:
    return build_default_registry()


def build_environment(settings: Settings) -> Environment:
    """Build the HTTP environment; refuses to start without an endpoint."""
    return HttpEnvironment(
        base_url=settings.environment_base_url,
        api_key=settings.environment_api_key,
        timeout_seconds=settings.environment_timeout_seconds,
    )


def build_oracle(
    settings: Settings, registry: ToolRegistry, use_mock: bool = False
) -> BaseOracle:
    if use_mock:
        return ScriptedOracle()
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY is required for the oracle")
    return OpenAICompatOracle(
        base_url=settings.openai_base_url,
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        tools=registry.openai_schemas(),
        temperature=settings.openai_temperature,
        timeout_seconds=settings.openai_timeout_seconds,
    )


def build_dispatcher(
    settings: Settings, registry: ToolRegistry, environment: Environment
) -> ToolDispatcher:
    return ToolDispatcher(
        registry,
        environment,
        timeout_seconds=settings.environment_timeout_seconds,
        parallel=settings.parallel_tool_calls,
        max_workers=settings.tool_workers,
    )


def build_executor(
    settings: Settings,
    *,
    oracle: BaseOracle | None = None,
    environment: Environment | None = None,
    registry: ToolRegistry | None = None,
) -> GraphExecutor:
    set_verbose(settings.verbose_logging)
    registry = registry or build_registry()
    environment = environment or build_environment(settings)
    oracle = oracle or build_oracle(settings, registry)
    logger.info(
        "Executor ready (model=%s, tools=%s, parallel=%s)",
        settings.openai_model,
        len(registry),
        settings.parallel_tool_calls,
    )
    return GraphExecutor(
        oracle,
        build_dispatcher(settings, registry, environment),
        max_iterations=settings.max_iterations,
        oracle_timeout_seconds=settings.oracle_timeout_seconds,
    )
