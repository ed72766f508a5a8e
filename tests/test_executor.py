from __future__ import annotations

import json
import threading
from typing import Any, Sequence

import pytest

from scout.dispatcher import ToolDispatcher
from scout.environment import Environment
from scout.executor import GraphExecutor, assign_call_ids, route_after_decision
from scout.models.base import BaseOracle, OracleError
from scout.models.mock import ScriptedOracle
from scout.state import ChatTurn, Proposal, ProposedCall, ToolExchange, initial_state
from scout.tools.registry import build_default_registry


class FakeEnvironment(Environment):
    def __init__(self, responses: dict[str, Any] | None = None, on_call=None) -> None:
        self.responses = responses or {}
        self.on_call = on_call
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def execute(self, tool_name: str, payload: dict[str, Any]) -> Any:
        self.calls.append((tool_name, payload))
        if self.on_call is not None:
            self.on_call(tool_name, payload)
        return self.responses.get(tool_name, '{"ok": true}')


@pytest.fixture
def make_executor():
    def factory(oracle: BaseOracle, environment: Environment, **kwargs: Any) -> GraphExecutor:
        return GraphExecutor(oracle, ToolDispatcher(build_default_registry(), environment), **kwargs)

    return factory


STATUS_CALL = {
    "name": "message_update",
    "args": {"message": "Scanning files", "status": "Scanning files", "status_emoji": "🔍"},
}


def test_status_update_changes_status_but_not_conversation(make_executor):
    oracle = ScriptedOracle([[STATUS_CALL]])
    environment = FakeEnvironment()
    result = make_executor(oracle, environment).run("List the workspace")

    assert result.reason == "completed"
    assert result.iterations == 2
    assert result.status.model_dump(by_alias=True) == {
        "message": "Scanning files",
        "statusText": "Scanning files",
        "emoji": "🔍",
    }
    assert result.conversation == [ChatTurn.user("List the workspace")]
    assert environment.calls == [("message_update", STATUS_CALL["args"])]


def test_screenshot_becomes_observation_turn(make_executor):
    oracle = ScriptedOracle([[{"name": "computer", "args": {"action": "screenshot"}}]])
    environment = FakeEnvironment({"computer": json.dumps({"screenshot": "iVBORw0KGgo"})})
    result = make_executor(oracle, environment).run("Look at the screen")

    assert result.state["last_observation"] == "iVBORw0KGgo"
    assert len(result.conversation) == 2
    observation = result.conversation[1]
    assert observation.role == "user"
    assert observation.images()[0].image_url.url == "data:image/png;base64,iVBORw0KGgo"
    # the second decision sees the screenshot turn
    seen_conversation, _ = oracle.invocations[1]
    assert seen_conversation[-1] == observation


def test_tool_results_reach_the_oracle_through_the_scratchpad(make_executor):
    oracle = ScriptedOracle([[{"name": "web_search", "args": {"query": "langgraph"}}]])
    environment = FakeEnvironment({"web_search": json.dumps({"results": ["a"]})})
    result = make_executor(oracle, environment).run("Search")

    _, scratchpad = oracle.invocations[1]
    (exchange,) = scratchpad
    assert isinstance(exchange, ToolExchange)
    assert exchange.conversation_offset == 1
    assert exchange.outcomes[0].result == {"results": ["a"]}
    assert exchange.outcomes[0].call_id == exchange.calls[0].id
    assert exchange.calls[0].id.startswith("call_")
    assert result.state["scratchpad"] == scratchpad


def test_unknown_tool_is_skipped_and_others_run(make_executor):
    oracle = ScriptedOracle(
        [
            [
                {"name": "teleport", "args": {"where": "mars"}},
                {"name": "web_search", "args": {"query": "still runs"}},
            ]
        ]
    )
    environment = FakeEnvironment()
    result = make_executor(oracle, environment).run("Go")

    assert [name for name, _ in environment.calls] == ["web_search"]
    (exchange,) = result.state["scratchpad"]
    assert [outcome.tool_name for outcome in exchange.outcomes] == ["web_search"]
    assert len(exchange.calls) == 2
    assert result.reason == "completed"


def test_empty_first_proposal_finishes_immediately(make_executor):
    oracle = ScriptedOracle([])
    environment = FakeEnvironment()
    result = make_executor(oracle, environment).run("Nothing to do")

    assert result.reason == "completed"
    assert result.iterations == 1
    assert environment.calls == []
    assert result.conversation == [ChatTurn.user("Nothing to do")]


def test_rejected_todo_is_fed_back_and_task_list_stays_empty(make_executor):
    tasks = [
        {"id": "1", "title": "a", "status": "in_progress"},
        {"id": "2", "title": "b", "status": "in_progress"},
    ]
    oracle = ScriptedOracle([[{"name": "todo", "args": {"tasks": tasks}}]])
    environment = FakeEnvironment()
    result = make_executor(oracle, environment).run("Plan")

    assert environment.calls == []
    assert result.task_list is None
    _, scratchpad = oracle.invocations[1]
    error = scratchpad[0].outcomes[0].result
    assert error["failure"] == "CONTRACT_VIOLATION"
    assert error["violations"] == [
        "tasks: Only one task can be 'in_progress' at a time (found 2: 1, 2)."
    ]


def test_cancel_before_start_returns_initial_state(make_executor):
    oracle = ScriptedOracle([[STATUS_CALL]])
    cancel = threading.Event()
    cancel.set()
    result = make_executor(oracle, FakeEnvironment()).run("Stop", cancel_event=cancel)

    assert result.reason == "cancelled"
    assert result.iterations == 0
    assert oracle.invocations == []
    assert result.conversation == [ChatTurn.user("Stop")]


def test_cancel_during_dispatch_discards_partial_batch(make_executor):
    cancel = threading.Event()
    oracle = ScriptedOracle(
        [[STATUS_CALL, {"name": "web_search", "args": {"query": "never sent"}}]]
    )
    environment = FakeEnvironment(on_call=lambda name, payload: cancel.set())
    result = make_executor(oracle, environment).run("Go", cancel_event=cancel)

    assert result.reason == "cancelled"
    assert len(environment.calls) == 1
    assert result.status is None
    assert result.state.get("scratchpad") == []
    assert len(oracle.invocations) == 1


class LoopingOracle(BaseOracle):
    def __init__(self) -> None:
        self.calls = 0

    def decide(self, conversation: Sequence[ChatTurn], scratchpad: Sequence[ToolExchange] = ()) -> Proposal:
        self.calls += 1
        return Proposal(calls=[ProposedCall(name="web_search", args={"query": f"q{self.calls}"})])


@pytest.mark.parametrize("max_iterations", [1, 3])
def test_iteration_limit_stops_a_run_that_never_finishes(make_executor, max_iterations):
    oracle = LoopingOracle()
    environment = FakeEnvironment()
    result = make_executor(oracle, environment, max_iterations=max_iterations).run("Forever")

    assert result.reason == "iteration_limit"
    assert result.iterations == max_iterations
    assert oracle.calls == max_iterations
    assert len(environment.calls) == max_iterations
    assert len(result.state["scratchpad"]) == max_iterations


class StalledOracle(BaseOracle):
    def __init__(self) -> None:
        self.release = threading.Event()

    def decide(self, conversation: Sequence[ChatTurn], scratchpad: Sequence[ToolExchange] = ()) -> Proposal:
        self.release.wait(5)
        return Proposal()


def test_oracle_timeout_ends_run_with_state_intact(make_executor):
    oracle = StalledOracle()
    executor = make_executor(oracle, FakeEnvironment(), oracle_timeout_seconds=0.05)
    try:
        result = executor.run("Wait")
    finally:
        oracle.release.set()
    assert result.reason == "oracle_error"
    assert "did not answer" in result.error
    assert result.conversation == [ChatTurn.user("Wait")]


class FailingAfterFirstOracle(ScriptedOracle):
    def decide(self, conversation: Sequence[ChatTurn], scratchpad: Sequence[ToolExchange] = ()) -> Proposal:
        if self.invocations:
            raise OracleError("upstream returned 502")
        return super().decide(conversation, scratchpad)


def test_oracle_failure_keeps_merged_state(make_executor):
    oracle = FailingAfterFirstOracle([[STATUS_CALL]])
    environment = FakeEnvironment()
    result = make_executor(oracle, environment).run("Scan")

    assert result.reason == "oracle_error"
    assert result.error == "upstream returned 502"
    assert result.iterations == 2
    assert result.status.message == "Scanning files"
    assert len(result.state["scratchpad"]) == 1
    assert environment.calls == [("message_update", STATUS_CALL["args"])]


def test_conversation_never_shrinks_across_iterations(make_executor):
    oracle = ScriptedOracle(
        [
            [{"name": "computer", "args": {"action": "screenshot"}}],
            [STATUS_CALL],
            [{"name": "computer", "args": {"action": "screenshot"}}],
        ]
    )
    environment = FakeEnvironment({"computer": '{"screenshot": "abc"}'})
    make_executor(oracle, environment).run("Watch")

    lengths = [len(conversation) for conversation, _ in oracle.invocations]
    assert lengths == [1, 2, 2, 3]


def test_run_continues_from_existing_state(make_executor):
    oracle = ScriptedOracle([])
    state = initial_state("first request")
    result = make_executor(oracle, FakeEnvironment()).run("follow-up", state=state)
    assert [turn.content for turn in result.conversation] == ["first request", "follow-up"]


def test_route_after_decision():
    assert route_after_decision({"pending_proposal": Proposal()}) == "end"
    assert route_after_decision({}) == "end"
    proposal = Proposal(calls=[ProposedCall(name="ls", args={})])
    assert route_after_decision({"pending_proposal": proposal}) == "continue"


def test_assign_call_ids_keeps_existing_ids():
    proposal = Proposal(calls=[ProposedCall(name="ls", id="keep"), ProposedCall(name="glob")])
    assigned = assign_call_ids(proposal)
    assert assigned.calls[0].id == "keep"
    assert assigned.calls[1].id.startswith("call_")
