"""Command-line interface."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from scout.config import Settings
from scout.executor import RunResult
from scout.factory import build_executor
from scout.failures import ConfigurationError


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scout agent CLI")
    parser.add_argument("task", type=str, help="Request to work on")
    parser.add_argument("--environment-url", dest="environment_url")
    parser.add_argument("--environment-timeout", type=float, dest="environment_timeout")
    parser.add_argument("--base-url", dest="base_url")
    parser.add_argument("--api-key", dest="api_key")
    parser.add_argument("--model", dest="model")
    parser.add_argument("--temperature", type=float, dest="temperature")
    parser.add_argument("--max-iterations", type=int, dest="max_iterations")
    parser.add_argument("--parallel", action="store_true", dest="parallel")
    parser.add_argument("--verbose", action="store_true", dest="verbose")
    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    data: dict[str, Any] = settings.model_dump()
    if args.environment_url:
        data["environment_base_url"] = args.environment_url
    if args.environment_timeout:
        data["environment_timeout_seconds"] = args.environment_timeout
    if args.base_url:
        data["openai_base_url"] = args.base_url
    if args.api_key:
        data["openai_api_key"] = args.api_key
    if args.model:
        data["openai_model"] = args.model
    if args.temperature is not None:
        data["openai_temperature"] = args.temperature
    if args.max_iterations:
        data["max_iterations"] = args.max_iterations
    if args.parallel:
        data["parallel_tool_calls"] = True
    if args.verbose:
        data["verbose_logging"] = True
    return Settings(**data)


def render_result(result: RunResult) -> str:
    lines = [f"Stopped: {result.reason} after {result.iterations} iteration(s)"]
    if result.error:
        lines.append(f"Error: {result.error}")
    status = result.status
    if status is not None:
        lines.append(f"Status: {status.emoji} {status.status_text} - {status.message}")
    tasks = result.task_list or []
    if tasks:
        lines.append("Tasks:")
        lines.extend(f"  [{task.status}] {task.id}: {task.title}" for task in tasks)
    if result.state.get("last_observation"):
        lines.append("Latest screenshot captured.")
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = apply_overrides(Settings(), args)
    try:
        executor = build_executor(settings)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    result = executor.run(args.task)
    print(render_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
