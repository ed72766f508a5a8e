"""Tool dispatcher: validate, execute and normalize one proposed call."""

from __future__ import annotations

import json
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Sequence

from scout.environment import (
    DEFAULT_TIMEOUT_SECONDS,
    Environment,
    EnvironmentRejectedError,
    EnvironmentTimeoutError,
    EnvironmentTransportError,
)
from scout.failures import FailureTag, RunCancelled, error_document
from scout.state import ProposedCall, ToolOutcome
from scout.tools.registry import ToolRegistry
from scout.util.logging import get_logger, redact, shorten

logger = get_logger(__name__)

RAW_KEY = "raw"


def decode_result(raw: Any) -> dict[str, Any]:
    """Decode an environment result, keeping undecodable text under ``raw``."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        text = bytes(raw).decode("utf-8", errors="replace")
    elif isinstance(raw, str):
        text = raw
    else:
        text = json.dumps(raw, ensure_ascii=False, default=str)
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        return {RAW_KEY: text}
    if isinstance(decoded, dict):
        return decoded
    return {RAW_KEY: text}


class ToolDispatcher:
    """Turns proposed calls into outcomes; failures become error documents.

    The dispatcher is stateless between calls. Each environment call runs on
    its own daemon thread so the wait can be bounded even when the
    environment implementation has no timeout of its own. A call that
    overruns keeps its thread but never holds up later calls.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        environment: Environment,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        parallel: bool = False,
        max_workers: int = 4,
    ) -> None:
        self.registry = registry
        self.environment = environment
        self.timeout_seconds = timeout_seconds
        self.parallel = parallel
        self.max_workers = max(1, max_workers)

    def dispatch(self, call: ProposedCall) -> ToolOutcome | None:
        contract = self.registry.get(call.name)
        if contract is None:
            logger.debug("Ignoring call to unknown tool %s", call.name)
            return None
        validation = contract.validate(call.args)
        if not validation.ok:
            logger.info(
                "Tool %s rejected: %s", call.name, redact("; ".join(validation.violations))
            )
            document = error_document(
                call.name,
                call.args,
                f"Invalid arguments for tool '{call.name}'",
                FailureTag.CONTRACT_VIOLATION,
                violations=list(validation.violations),
            )
            return ToolOutcome(
                tool_name=call.name, input=call.args, result=document, call_id=call.id
            )
        arguments = validation.arguments or {}
        logger.info(
            "Executing tool %s args=%s",
            call.name,
            shorten(redact(json.dumps(arguments, ensure_ascii=False))),
        )
        try:
            raw = self._execute(call.name, arguments)
        except EnvironmentTimeoutError as exc:
            document = error_document(call.name, call.args, str(exc), FailureTag.TIMEOUT)
        except EnvironmentRejectedError as exc:
            document = error_document(
                call.name,
                call.args,
                str(exc),
                FailureTag.REJECTED,
                status_code=exc.status_code,
                detail=exc.detail,
            )
        except EnvironmentTransportError as exc:
            document = error_document(
                call.name, call.args, str(exc), FailureTag.TRANSPORT_ERROR
            )
        except Exception as exc:  # noqa: BLE001
            document = error_document(
                call.name,
                call.args,
                f"{exc.__class__.__name__}: {exc}",
                FailureTag.TOOL_ERROR,
            )
        else:
            return ToolOutcome(
                tool_name=call.name,
                input=arguments,
                result=decode_result(raw),
                call_id=call.id,
            )
        logger.warning("Tool %s failed: %s", call.name, redact(document["error"]))
        return ToolOutcome(
            tool_name=call.name, input=call.args, result=document, call_id=call.id
        )

    def dispatch_batch(
        self,
        calls: Sequence[ProposedCall],
        cancel_event: threading.Event | None = None,
    ) -> list[ToolOutcome]:
        """Dispatch ``calls`` and return their outcomes in proposal order.

        Unknown tools contribute nothing. If ``cancel_event`` is set, calls that
        have not started are skipped and ``RunCancelled`` is raised once the
        in-flight ones return.
        """
        if self.parallel and len(calls) > 1:
            with ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="scout-batch"
            ) as pool:
                futures = [
                    pool.submit(self._dispatch_unless_cancelled, call, cancel_event)
                    for call in calls
                ]
                results = [future.result() for future in futures]
        else:
            results = []
            for call in calls:
                if _cancelled(cancel_event):
                    break
                results.append(self.dispatch(call))
        if _cancelled(cancel_event):
            raise RunCancelled("Run cancelled during tool dispatch")
        return [outcome for outcome in results if outcome is not None]

    def _dispatch_unless_cancelled(
        self, call: ProposedCall, cancel_event: threading.Event | None
    ) -> ToolOutcome | None:
        if _cancelled(cancel_event):
            return None
        return self.dispatch(call)

    def _execute(self, tool_name: str, arguments: dict[str, Any]) -> Any:
        future: Future = Future()

        def call() -> None:
            future.set_running_or_notify_cancel()
            try:
                future.set_result(self.environment.execute(tool_name, arguments))
            except Exception as exc:  # noqa: BLE001
                future.set_exception(exc)

        threading.Thread(target=call, name=f"scout-tool-{tool_name}", daemon=True).start()
        try:
            return future.result(timeout=self.timeout_seconds)
        except FutureTimeoutError as exc:
            raise EnvironmentTimeoutError(
                f"Environment call timed out after {self.timeout_seconds:g}s"
            ) from exc


def _cancelled(event: threading.Event | None) -> bool:
    return event is not None and event.is_set()
