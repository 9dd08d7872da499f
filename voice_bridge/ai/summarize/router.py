"""
Summarization router.

Stateless passthrough to the LLM; nothing here touches call records.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException

from voice_bridge.ai.openai.exceptions import OpenAIAuthenticationError, OpenAIError
from voice_bridge.ai.openai.summarizer import OpenAISummarizer
from voice_bridge.ai.summarize.schemas import SummarizeRequest, SummaryResult

router = APIRouter(prefix="/summarize", tags=["Summarize"])

_summarizer: OpenAISummarizer | None = None


def get_summarizer() -> OpenAISummarizer:
    global _summarizer
    if _summarizer is None:
        _summarizer = OpenAISummarizer()
    return _summarizer


@router.post("", response_model=SummaryResult)
async def summarize_transcript(
    payload: SummarizeRequest,
    summarizer: OpenAISummarizer = Depends(get_summarizer),
) -> SummaryResult:
    """
    Summarize a call transcript.

    Raises:
        HTTPException: 503 when OpenAI is not configured, 502 when it fails
    """
    try:
        return await summarizer.summarize(
            payload.transcript, instructions=payload.custom_instructions
        )
    except OpenAIAuthenticationError as e:
        raise HTTPException(status_code=HTTPStatus.SERVICE_UNAVAILABLE, detail=e.message)
    except OpenAIError as e:
        raise HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=e.message)
