"""OpenAI API configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseSettings):
    """Settings for OpenAI API integration.

    Attributes:
        api_key: OpenAI API key; summarization reports "not configured" when blank
        model_name: Chat completion model used for summaries
        temperature: Sampling temperature (0.0-2.0)
        max_tokens: Max output tokens per summary
        request_timeout: HTTP request timeout in seconds
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str = Field(
        default="",
        description="OpenAI API key",
    )
    model_name: str = Field(
        default="gpt-4o-mini",
        description="Model used to summarize transcripts",
    )
    temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for summaries",
    )
    max_tokens: int = Field(
        default=500,
        gt=0,
        description="Max output tokens per summary",
    )
    request_timeout: int = Field(
        default=60,
        gt=0,
        description="HTTP request timeout in seconds",
    )


@lru_cache
def get_openai_settings() -> OpenAISettings:
    """Get cached OpenAI settings instance.

    Returns:
        OpenAISettings: Cached settings instance
    """
    return OpenAISettings()
