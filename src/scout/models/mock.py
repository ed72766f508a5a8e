"""Scripted oracle for offline runs and tests."""

from __future__ import annotations

from typing import Any, Sequence

from scout.models.base import BaseOracle
from scout.state import ChatTurn, Proposal, ProposedCall, ToolExchange


def as_proposal(item: Proposal | Sequence[ProposedCall | dict[str, Any]]) -> Proposal:
    if isinstance(item, Proposal):
        return item
    return Proposal(
        calls=[
            call if isinstance(call, ProposedCall) else ProposedCall.model_validate(call)
            for call in item
        ]
    )


class ScriptedOracle(BaseOracle):
    """Deterministic oracle that replays a fixed list of proposals.

    Once the script is exhausted it proposes nothing, which ends the run.
    Every invocation is recorded so tests can inspect what the oracle saw.
    """

    def __init__(
        self, scripted: Sequence[Proposal | Sequence[ProposedCall | dict[str, Any]]] | None = None
    ) -> None:
        self._scripted = [as_proposal(item) for item in scripted or []]
        self.invocations: list[tuple[list[ChatTurn], list[ToolExchange]]] = []

    def decide(
        self,
        conversation: Sequence[ChatTurn],
        scratchpad: Sequence[ToolExchange] = (),
    ) -> Proposal:
        self.invocations.append((list(conversation), list(scratchpad)))
        if self._scripted:
            return self._scripted.pop(0)
        return Proposal()
