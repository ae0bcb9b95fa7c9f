"""
Configuration for the startup advisor.

Uses Pydantic Settings to load environment variables (prefix ADVISOR_).
"""

from functools import lru_cache
from typing import Any, Optional

from langchain.chat_models import init_chat_model
from langchain_core.language_models import BaseChatModel
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdvisorSettings(BaseSettings):
    """Settings for the advisor agents."""

    # Model
    model_provider: str = Field(
        "google_genai",
        description="LangChain chat model provider",
    )
    model_name: str = Field(
        "gemini-2.0-flash",
        description="Chat model used by the main agent and sub-agents",
    )
    temperature: float = Field(
        0.7,
        description="Sampling temperature",
        ge=0.0,
        le=2.0,
    )
    max_output_tokens: Optional[int] = Field(
        None,
        description="Upper bound on generated tokens per model call",
        gt=0,
    )
    google_api_key: Optional[str] = Field(
        None,
        description="Gemini API key",
        validation_alias=AliasChoices(
            "ADVISOR_GOOGLE_API_KEY", "GOOGLE_API_KEY", "GEMINI_API_KEY"
        ),
    )

    # Agent loop
    recursion_limit: int = Field(
        25,
        description="Maximum LangGraph steps per conversation turn",
        gt=0,
    )
    subagent_timeout_seconds: float = Field(
        120.0,
        description="Default time budget for one sub-agent task",
        gt=0,
    )

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field("console", description="Log renderer: json or console")
    service_name: str = Field("startup-advisor", description="Service name bound to log entries")

    model_config = SettingsConfigDict(
        env_prefix="ADVISOR_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=("settings_",),
    )


@lru_cache
def get_settings() -> AdvisorSettings:
    """Get the process-wide settings instance."""
    return AdvisorSettings()


def create_chat_model(settings: Optional[AdvisorSettings] = None, **overrides: Any) -> BaseChatModel:
    """
    Build the configured LangChain chat model.

    Args:
        settings: Settings to read (defaults to get_settings())
        **overrides: model_name, temperature or max_output_tokens overrides

    Returns:
        A chat model instance for the configured provider
    """
    settings = settings or get_settings()
    kwargs: dict[str, Any] = {
        "model_provider": settings.model_provider,
        "temperature": overrides.get("temperature", settings.temperature),
    }

    max_tokens = overrides.get("max_output_tokens", settings.max_output_tokens)
    if max_tokens:
        kwargs["max_tokens"] = max_tokens
    if settings.google_api_key and settings.model_provider == "google_genai":
        kwargs["google_api_key"] = settings.google_api_key

    return init_chat_model(overrides.get("model_name") or settings.model_name, **kwargs)
