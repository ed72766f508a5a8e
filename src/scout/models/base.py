"""Oracle interface: decides the next batch of tool calls."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from scout.state import ChatTurn, Proposal, ToolExchange


class OracleError(RuntimeError):
    """Raised when the oracle backend cannot produce a proposal."""


class OracleTimeout(OracleError):
    """Raised when the oracle does not answer within the caller's bound."""


class BaseOracle(ABC):
    """Abstract decision oracle."""

    @abstractmethod
    def decide(
        self,
        conversation: Sequence[ChatTurn],
        scratchpad: Sequence[ToolExchange] = (),
    ) -> Proposal:
        """Return zero or more proposed calls for the current state."""
        raise NotImplementedError
