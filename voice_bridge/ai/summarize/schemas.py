"""Request and response models for transcript summarization."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummarizeRequest(CamelModel):
    transcript: str = Field(..., description="Transcript to summarize")
    custom_instructions: str | None = Field(
        None, description="System prompt replacing the default one"
    )

    @field_validator("transcript")
    @classmethod
    def transcript_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("transcript must not be empty")
        return value


class TokenUsage(CamelModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class SummaryResult(CamelModel):
    summary: str = Field(..., description="Generated summary")
    usage: TokenUsage = Field(default_factory=TokenUsage)
