"""OpenAI-compatible oracle."""

from __future__ import annotations

import json
import time
from typing import Any, Sequence
from urllib.parse import urlparse, urlunparse

import httpx

from scout.models.base import BaseOracle, OracleError
from scout.prompts import SYSTEM_PROMPT
from scout.state import ChatTurn, Proposal, ProposedCall, ToolExchange
from scout.util.logging import get_logger, redact, shorten

logger = get_logger(__name__)


def render_messages(
    conversation: Sequence[ChatTurn],
    scratchpad: Sequence[ToolExchange],
    system_prompt: str | None = SYSTEM_PROMPT,
) -> list[dict[str, Any]]:
    """Interleave conversation turns and tool exchanges into chat messages.

    Each exchange is placed before the turn at its ``conversation_offset``,
    so screenshots appended after a tool call follow that call's results.
    """
    messages: list[dict[str, Any]] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    pending = sorted(scratchpad, key=lambda exchange: exchange.conversation_offset)
    cursor = 0
    for index, turn in enumerate(conversation):
        while cursor < len(pending) and pending[cursor].conversation_offset <= index:
            messages.extend(_exchange_messages(pending[cursor]))
            cursor += 1
        messages.append(turn.to_message())
    for exchange in pending[cursor:]:
        messages.extend(_exchange_messages(exchange))
    return messages


def _exchange_messages(exchange: ToolExchange) -> list[dict[str, Any]]:
    answered = [outcome for outcome in exchange.outcomes if outcome.call_id]
    if not answered:
        if exchange.text:
            return [{"role": "assistant", "content": exchange.text}]
        return []
    assistant = {
        "role": "assistant",
        "content": exchange.text,
        "tool_calls": [
            {
                "id": outcome.call_id,
                "type": "function",
                "function": {
                    "name": outcome.tool_name,
                    "arguments": json.dumps(outcome.input, ensure_ascii=False),
                },
            }
            for outcome in answered
        ],
    }
    results = [
        {"role": "tool", "tool_call_id": outcome.call_id, "content": outcome.encode()}
        for outcome in answered
    ]
    return [assistant, *results]


def parse_proposal(data: dict[str, Any]) -> Proposal:
    """Extract tool calls and assistant text from a chat completion body."""
    if not isinstance(data, dict):
        raise OracleError(f"Malformed completion body: {shorten(repr(data), 200)}")
    choices = data.get("choices") or [{}]
    if not isinstance(choices, list):
        raise OracleError(f"Malformed completion choices: {shorten(repr(choices), 200)}")
    choice = choices[0]
    if not isinstance(choice, dict):
        raise OracleError(f"Malformed completion choice: {shorten(repr(choice), 200)}")
    message = choice.get("message") or {}
    if not isinstance(message, dict):
        raise OracleError(f"Malformed completion message: {shorten(repr(message), 200)}")
    content = message.get("content")
    calls: list[ProposedCall] = []
    for raw_call in message.get("tool_calls") or []:
        if not isinstance(raw_call, dict):
            continue
        function = raw_call.get("function")
        name = function.get("name") if isinstance(function, dict) else None
        if not isinstance(name, str):
            continue
        arguments = _decode_arguments(name, function.get("arguments") or "{}")
        calls.append(ProposedCall(name=name, args=arguments, id=raw_call.get("id")))
    return Proposal(calls=calls, text=content if isinstance(content, str) else None)


def _decode_arguments(name: str, arguments: Any) -> dict[str, Any]:
    """Decode call arguments; anything that is not a JSON object is kept under ``raw``."""
    if isinstance(arguments, dict):
        return arguments
    text = arguments if isinstance(arguments, str) else json.dumps(arguments, default=str)
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Malformed arguments for %s: %s", name, shorten(redact(text), 200))
        return {"raw": text}
    if isinstance(decoded, dict):
        return decoded
    return {"raw": text}


class OpenAICompatOracle(BaseOracle):
    """HTTP oracle for OpenAI-compatible chat/completions with tool calling."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        tools: list[dict[str, Any]],
        temperature: float | None = None,
        timeout_seconds: int = 120,
        max_response_bytes: int = 2_000_000,
        system_prompt: str | None = SYSTEM_PROMPT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        normalized = base_url.strip()
        if not normalized.startswith(("http://", "https://")):
            normalized = f"http://{normalized}"
        self.base_url = normalized.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.tools = tools
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self.max_response_bytes = max_response_bytes
        self.system_prompt = system_prompt
        self.transport = transport

    def _build_url(self) -> str:
        parsed = urlparse(self.base_url)
        path = parsed.path or ""
        if path in {"", "/"}:
            base_path = "/v1"
        else:
            base_path = path.rstrip("/")
            segments = [segment for segment in base_path.split("/") if segment]
            if "v1" not in segments:
                base_path = f"{base_path}/v1"
        if base_path.endswith("/chat/completions"):
            final_path = base_path
        else:
            final_path = f"{base_path}/chat/completions"
        return urlunparse(parsed._replace(path=final_path, params="", query="", fragment=""))

    def _request_payload(self, messages: list[dict[str, Any]]) -> dict[str, Any]:
        payload: dict[str, Any] = {"model": self.model, "messages": messages}
        if self.tools:
            payload["tools"] = self.tools
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        return payload

    def decide(
        self,
        conversation: Sequence[ChatTurn],
        scratchpad: Sequence[ToolExchange] = (),
    ) -> Proposal:
        messages = render_messages(conversation, scratchpad, self.system_prompt)
        url = self._build_url()
        headers = {"Authorization": f"Bearer {self.api_key}"}
        payload = self._request_payload(messages)
        timeout = httpx.Timeout(self.timeout_seconds)

        last_error: Exception | None = None
        for attempt in range(3):
            try:
                with httpx.Client(timeout=timeout, transport=self.transport) as client:
                    response = client.post(url, headers=headers, json=payload)
                if response.status_code in {429} or response.status_code >= 500:
                    raise OracleError(
                        f"Retryable error {response.status_code}: {response.text[:200]}"
                    )
                response.raise_for_status()
                if len(response.content) > self.max_response_bytes:
                    raise OracleError("Response too large")
                try:
                    data = response.json()
                except json.JSONDecodeError as exc:
                    raise OracleError("Malformed JSON response") from exc
                proposal = parse_proposal(data)
                logger.debug(
                    "Oracle proposed %s call(s): %s",
                    len(proposal.calls),
                    shorten(redact(", ".join(call.name for call in proposal.calls))),
                )
                return proposal
            except httpx.HTTPStatusError as exc:
                raise OracleError(
                    f"OpenAI-compatible request rejected: {exc.response.status_code}"
                ) from exc
            except (httpx.HTTPError, OracleError) as exc:
                last_error = exc
                if attempt == 2:
                    break
                time.sleep(2**attempt)
        raise OracleError(f"OpenAI-compatible request failed: {last_error}")
