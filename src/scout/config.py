"""Configuration settings for Scout."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or overrides."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, populate_by_name=True
    )

    environment_base_url: str | None = Field(
        default=None, validation_alias="ENVIRONMENT_BASE_URL"
    )
    environment_api_key: str | None = Field(
        default=None, validation_alias="ENVIRONMENT_API_KEY"
    )
    environment_timeout_seconds: float = Field(
        default=65.0, gt=0, validation_alias="ENVIRONMENT_TIMEOUT_SECONDS"
    )
    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", validation_alias="OPENAI_BASE_URL"
    )
    openai_model: str = Field(default="gpt-5", validation_alias="AGENT_MODEL_NAME")
    openai_temperature: float = Field(default=0.1, validation_alias="AGENT_TEMPERATURE")
    openai_timeout_seconds: int = Field(
        default=120, validation_alias="OPENAI_TIMEOUT_SECONDS"
    )
    oracle_timeout_seconds: float | None = Field(
        default=None, validation_alias="ORACLE_TIMEOUT_SECONDS"
    )
    verbose_logging: bool = Field(default=False, validation_alias="AGENT_VERBOSE_LOGGING")
    max_iterations: int = Field(default=50, ge=1, validation_alias="MAX_ITERATIONS")
    parallel_tool_calls: bool = Field(default=False, validation_alias="PARALLEL_TOOL_CALLS")
    tool_workers: int = Field(default=4, ge=1, validation_alias="TOOL_WORKERS")
