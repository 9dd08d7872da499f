"""OpenAI transcript summarizer.

Stateless passthrough: one chat completion per transcript, no caching or
retries.
"""

import httpx
from openai import AsyncOpenAI

from voice_bridge.ai.openai.config import OpenAISettings, get_openai_settings
from voice_bridge.ai.openai.exceptions import (
    OpenAIAuthenticationError,
    OpenAIContentGenerationError,
)
from voice_bridge.ai.summarize.schemas import SummaryResult, TokenUsage
from voice_bridge.utils.logger import logger

DEFAULT_INSTRUCTIONS = (
    "You are a helpful assistant that summarizes call transcripts. Provide a clear, "
    "concise summary highlighting key points, action items, and important details."
)


def build_messages(transcript: str, instructions: str | None = None) -> list[dict]:
    """Build the system and user messages for a summary request."""
    return [
        {"role": "system", "content": instructions or DEFAULT_INSTRUCTIONS},
        {
            "role": "user",
            "content": f"Please summarize the following transcript:\n\n{transcript}",
        },
    ]


class OpenAISummarizer:
    """Summarizes call transcripts with the OpenAI chat completions API."""

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        settings: OpenAISettings | None = None,
    ):
        """Initialize the summarizer.

        Args:
            client: Preconfigured client; built lazily from settings when omitted
            settings: OpenAI settings; read from the environment when omitted
        """
        self.settings = settings or get_openai_settings()
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            if not self.settings.api_key:
                raise OpenAIAuthenticationError("OpenAI API key not configured")
            timeout = httpx.Timeout(timeout=self.settings.request_timeout, connect=10.0)
            self._client = AsyncOpenAI(api_key=self.settings.api_key, timeout=timeout)
            logger.info(
                "[OPENAI] Client initialized",
                timeout_seconds=self.settings.request_timeout,
            )
        return self._client

    async def summarize(
        self, transcript: str, instructions: str | None = None
    ) -> SummaryResult:
        """Summarize a transcript.

        Args:
            transcript: Full call transcript text
            instructions: Optional system prompt replacing the default one

        Returns:
            SummaryResult: Summary text and token usage

        Raises:
            OpenAIAuthenticationError: If no API key is configured
            OpenAIContentGenerationError: If the completion request fails
        """
        client = self._get_client()
        try:
            completion = await client.chat.completions.create(
                model=self.settings.model_name,
                messages=build_messages(transcript, instructions),
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except Exception as e:
            logger.error("[OPENAI] Summarization failed", error=str(e))
            raise OpenAIContentGenerationError(f"Failed to summarize transcript: {e}", e)

        if not completion.choices:
            raise OpenAIContentGenerationError("No choices in completion response")

        usage = TokenUsage()
        if completion.usage is not None:
            usage = TokenUsage(
                prompt_tokens=completion.usage.prompt_tokens,
                completion_tokens=completion.usage.completion_tokens,
                total_tokens=completion.usage.total_tokens,
            )

        summary = completion.choices[0].message.content or ""
        logger.info("[OPENAI] Transcript summarized", total_tokens=usage.total_tokens)
        return SummaryResult(summary=summary, usage=usage)
