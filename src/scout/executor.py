"""Graph executor: the decide -> act -> observe loop.

The loop is a two-node langgraph ``StateGraph``. ``deciding`` asks the
oracle for a proposal, ``acting`` dispatches it and folds the outcomes into
a delta. langgraph merges every node's partial update through the reducers
declared on ``AgentState``, so a field a node does not return is left as it
was, and a node that raises writes nothing at all.
"""

from __future__ import annotations

import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Any, Literal, Sequence

from langgraph.errors import GraphRecursionError
from langgraph.graph import END, START, StateGraph

from scout.dispatcher import ToolDispatcher
from scout.failures import RunCancelled
from scout.folder import fold_outcomes
from scout.models.base import BaseOracle, OracleError, OracleTimeout
from scout.state import (
    AgentState,
    ChatTurn,
    Proposal,
    ToolExchange,
    initial_state,
    merge_state,
)
from scout.util.logging import get_logger

logger = get_logger(__name__)

DECIDING = "deciding"
ACTING = "acting"
CONTINUE = "continue"
FINISH = "end"

StopReason = Literal["completed", "cancelled", "iteration_limit", "oracle_error"]


def route_after_decision(state: AgentState) -> str:
    """Continue to ``acting`` only when the pending proposal has calls."""
    proposal = state.get("pending_proposal")
    if proposal is not None and proposal.has_calls:
        return CONTINUE
    return FINISH


def assign_call_ids(proposal: Proposal) -> Proposal:
    """Give every call an id so its outcome can be matched back to it."""
    if all(call.id for call in proposal.calls):
        return proposal
    calls = [
        call if call.id else call.model_copy(update={"id": f"call_{uuid.uuid4().hex[:12]}"})
        for call in proposal.calls
    ]
    return proposal.model_copy(update={"calls": calls})


@dataclass
class RunResult:
    state: AgentState
    reason: StopReason
    iterations: int
    error: str | None = None

    @property
    def conversation(self) -> list[ChatTurn]:
        return list(self.state.get("conversation") or [])

    @property
    def status(self) -> Any:
        return self.state.get("status")

    @property
    def task_list(self) -> Any:
        return self.state.get("task_list")


class GraphExecutor:
    def __init__(
        self,
        oracle: BaseOracle,
        dispatcher: ToolDispatcher,
        max_iterations: int = 50,
        oracle_timeout_seconds: float | None = None,
    ) -> None:
        self.oracle = oracle
        self.dispatcher = dispatcher
        self.max_iterations = max(1, max_iterations)
        self.oracle_timeout_seconds = oracle_timeout_seconds

    def build_graph(self, cancel_event: threading.Event, counter: list[int] | None = None):
        """Compile the loop for one run, bound to that run's cancel event."""
        counter = counter if counter is not None else [0]

        def decide(state: AgentState) -> dict[str, Any]:
            if cancel_event.is_set():
                raise RunCancelled("Run cancelled before oracle invocation")
            counter[0] += 1
            proposal = self._call_oracle(
                state.get("conversation") or [], state.get("scratchpad") or []
            )
            proposal = assign_call_ids(proposal)
            logger.info(
                "Iteration %s: oracle proposed %s call(s)%s",
                counter[0],
                len(proposal.calls),
                f" [{', '.join(call.name for call in proposal.calls)}]" if proposal.calls else "",
            )
            return {"pending_proposal": proposal}

        def act(state: AgentState) -> dict[str, Any]:
            proposal = state.get("pending_proposal") or Proposal()
            conversation = state.get("conversation") or []
            outcomes = self.dispatcher.dispatch_batch(proposal.calls, cancel_event)
            update = fold_outcomes(outcomes).to_update()
            update["scratchpad"] = [
                ToolExchange(
                    conversation_offset=len(conversation),
                    calls=proposal.calls,
                    outcomes=outcomes,
                    text=proposal.text,
                )
            ]
            return update

        workflow = StateGraph(AgentState)
        workflow.add_node(DECIDING, decide)
        workflow.add_node(ACTING, act)
        workflow.add_edge(START, DECIDING)
        workflow.add_conditional_edges(
            DECIDING, route_after_decision, {CONTINUE: ACTING, FINISH: END}
        )
        workflow.add_edge(ACTING, DECIDING)
        return workflow.compile()

    def run(
        self,
        task: str | None = None,
        state: AgentState | None = None,
        cancel_event: threading.Event | None = None,
    ) -> RunResult:
        """Run the loop until the oracle stops proposing calls.

        ``task`` is appended as a user turn, to ``state`` when one is given.
        Cancellation is honoured before each oracle call and between tool
        calls; the returned state is always the last fully merged one.
        """
        current = state if state is not None else initial_state()
        if task:
            current = merge_state(current, {"conversation": [ChatTurn.user(task)]})
        cancel_event = cancel_event or threading.Event()
        counter = [0]
        app = self.build_graph(cancel_event, counter)
        config = {"recursion_limit": self.max_iterations * 2}

        last: AgentState = current
        reason: StopReason = "completed"
        error: str | None = None
        try:
            for values in app.stream(current, config, stream_mode="values"):
                last = values
        except RunCancelled as exc:
            logger.info("%s after %s iteration(s)", exc, counter[0])
            reason = "cancelled"
        except GraphRecursionError:
            logger.warning("Stopped after reaching %s iterations", self.max_iterations)
            reason = "iteration_limit"
        except OracleError as exc:
            logger.error("Oracle failed after %s iteration(s): %s", counter[0], exc)
            reason = "oracle_error"
            error = str(exc)
        return RunResult(state=last, reason=reason, iterations=counter[0], error=error)

    def _call_oracle(self, conversation: Sequence[ChatTurn], scratchpad: Sequence[ToolExchange]) -> Proposal:
        if self.oracle_timeout_seconds is None:
            return self.oracle.decide(conversation, scratchpad)
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="scout-oracle")
        future = pool.submit(self.oracle.decide, conversation, scratchpad)
        try:
            return future.result(timeout=self.oracle_timeout_seconds)
        except FutureTimeoutError as exc:
            raise OracleTimeout(
                f"Oracle did not answer within {self.oracle_timeout_seconds:g}s"
            ) from exc
        finally:
            pool.shutdown(wait=False, cancel_futures=True)
