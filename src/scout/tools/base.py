"""Tool contract definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError

Refinement = Callable[[Any], list[str]]


class ToolInput(BaseModel):
    """Base for tool argument records; accepts wire names and attribute names."""

    model_config = ConfigDict(populate_by_name=True)


@dataclass(frozen=True)
class ValidationOutcome:
    """Either the normalized arguments or the reasons they were refused."""

    arguments: dict[str, Any] | None = None
    violations: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations and self.arguments is not None


@dataclass(frozen=True)
class ToolContract:
    """Name, description and validation rules for one operation.

    Structural rules live on ``input_schema``. ``refinements`` are named
    semantic checks that only run once the structure is sound; each returns
    a list of violation messages, empty when satisfied.
    """

    name: str
    description: str
    input_schema: type[BaseModel]
    refinements: Sequence[Refinement] = field(default_factory=tuple)

    def validate(self, arguments: Any) -> ValidationOutcome:
        if not isinstance(arguments, dict):
            return ValidationOutcome(violations=("(root): arguments must be an object",))
        try:
            parsed = self.input_schema.model_validate(arguments)
        except ValidationError as exc:
            return ValidationOutcome(violations=tuple(format_errors(exc)))
        violations: list[str] = []
        for refinement in self.refinements:
            violations.extend(refinement(parsed))
        if violations:
            return ValidationOutcome(violations=tuple(violations))
        normalized = parsed.model_dump(mode="json", by_alias=True, exclude_none=True)
        return ValidationOutcome(arguments=normalized)

    def openai_schema(self) -> dict[str, Any]:
        """Return OpenAI-compatible tool schema."""
        schema = self.input_schema.model_json_schema(by_alias=True)
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": schema,
            },
        }


def format_errors(exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error.get("loc", ())) or "(root)"
        message = str(error.get("msg", "invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        messages.append(f"{location}: {message}")
    return messages
