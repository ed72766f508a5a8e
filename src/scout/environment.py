"""Environment collaborator: executes a named operation remotely."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

import httpx

from scout.failures import ConfigurationError

DEFAULT_TIMEOUT_SECONDS = 65.0


class EnvironmentCallError(RuntimeError):
    """Base class for failures while reaching the environment."""


class EnvironmentTransportError(EnvironmentCallError):
    """Network or protocol failure before a response was received."""


class EnvironmentTimeoutError(EnvironmentCallError):
    """The environment did not answer within the configured bound."""


class EnvironmentRejectedError(EnvironmentCallError):
    """The environment answered with a non-success status."""

    def __init__(self, status_code: int, message: str, detail: Any | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class Environment(ABC):
    """Abstract execution environment."""

    @abstractmethod
    def execute(self, tool_name: str, payload: dict[str, Any]) -> Any:
        """Run ``tool_name`` with validated ``payload`` and return the raw result.

        The result may be raw text, bytes or an already decoded document.
        """
        raise NotImplementedError


class HttpEnvironment(Environment):
    """Posts tool calls to ``{base_url}/tools/{tool_name}``."""

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ConfigurationError(
                "ENVIRONMENT_BASE_URL is required to reach the tool environment"
            )
        normalized = base_url.strip()
        if not normalized.startswith(("http://", "https://")):
            normalized = f"http://{normalized}"
        self.base_url = normalized.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def execute(self, tool_name: str, payload: dict[str, Any]) -> str:
        url = f"{self.base_url}/tools/{tool_name}"
        timeout = httpx.Timeout(self.timeout_seconds)
        try:
            with httpx.Client(timeout=timeout, transport=self.transport) as client:
                response = client.post(url, headers=self._headers(), json=payload)
        except httpx.TimeoutException as exc:
            raise EnvironmentTimeoutError(
                f"Environment call timed out after {self.timeout_seconds:g}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise EnvironmentTransportError(f"Environment unreachable: {exc}") from exc
        if not response.is_success:
            raise _rejection(response)
        return response.text


def _rejection(response: httpx.Response) -> EnvironmentRejectedError:
    message = f"Environment call failed with status {response.status_code}"
    detail: Any | None = None
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None
    if isinstance(body, dict):
        reason = body.get("error") or body.get("message")
        if isinstance(reason, str) and reason:
            message = f"{message}: {reason}"
        detail = body.get("detail")
    return EnvironmentRejectedError(response.status_code, message, detail)
